"""Tests for RuntimeVersionRecord and metadata validity."""

import pytest

from cbcbootstrap.store import RuntimeVersionRecord, is_valid_metadata


class TestIsValidMetadata:
    """Tests for is_valid_metadata."""

    @pytest.mark.parametrize("length", [101, 102, 500, 10_000])
    def test_accepts_prefixed_long_hex(self, length):
        """Any 0x-prefixed value longer than 100 chars is accepted."""
        raw = "0x" + "f" * (length - 2)
        assert is_valid_metadata(raw) is True

    @pytest.mark.parametrize("length", [2, 50, 99, 100])
    def test_rejects_short(self, length):
        """Values at or under the threshold are rejected."""
        raw = "0x" + "f" * (length - 2)
        assert is_valid_metadata(raw) is False

    @pytest.mark.parametrize("raw", ["ab" * 100, "1x" + "f" * 200, "0X" + "f" * 200, " 0x" + "f" * 200])
    def test_rejects_missing_prefix(self, raw):
        """Long values without the exact 0x prefix are rejected."""
        assert is_valid_metadata(raw) is False

    @pytest.mark.parametrize("raw", ["", None])
    def test_rejects_empty(self, raw):
        assert is_valid_metadata(raw) is False


class TestRuntimeVersionRecord:
    """Tests for RuntimeVersionRecord."""

    def test_is_valid(self):
        record = RuntimeVersionRecord(spec_name="cbc-node", spec_version=100, raw_data="0x" + "0" * 200)
        assert record.is_valid() is True

    def test_entry_without_metadata_is_invalid(self):
        """A created entry with no metadata attached yet is not usable."""
        record = RuntimeVersionRecord(spec_name="cbc-node", spec_version=100)
        assert record.is_valid() is False

    def test_dict_round_trip(self):
        record = RuntimeVersionRecord(
            spec_name="cbc-node",
            spec_version=100,
            block_num=5,
            raw_data="0xabcd",
            modules="System|Dcf",
        )

        assert RuntimeVersionRecord.from_dict(record.to_dict()) == record

    def test_from_dict_defaults(self):
        record = RuntimeVersionRecord.from_dict({"spec_version": "7"})

        assert record.spec_version == 7
        assert record.block_num == 0
        assert record.raw_data == ""
