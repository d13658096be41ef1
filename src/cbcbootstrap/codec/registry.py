"""Metadata registry shared by the explorer's decoders."""

from dataclasses import dataclass

from cbcbootstrap.telemetry import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RuntimeRaw:
    """Raw runtime metadata for one spec version."""

    spec_version: int
    raw: str


class MetadataRegistry:
    """Registry of runtime metadata keyed by spec version.

    One instance is owned by the service root and handed to the components
    that register or decode metadata. The metadata itself is opaque here.
    """

    def __init__(self):
        self._entries: dict[int, RuntimeRaw] = {}
        self._latest: RuntimeRaw | None = None
        self._registrations = 0

    def register_latest(self, spec_version: int, raw_metadata: str) -> RuntimeRaw:
        """Register metadata and mark it as the latest runtime."""
        entry = RuntimeRaw(spec_version=spec_version, raw=raw_metadata)
        self._entries[spec_version] = entry
        self._latest = entry
        self._registrations += 1
        logger.info(f"[Codec] Registered metadata for spec {spec_version} ({len(raw_metadata)} chars)")
        return entry

    @property
    def latest(self) -> RuntimeRaw | None:
        return self._latest

    def get(self, spec_version: int) -> RuntimeRaw | None:
        return self._entries.get(spec_version)

    def has(self, spec_version: int) -> bool:
        return spec_version in self._entries

    @property
    def registration_count(self) -> int:
        """Number of register_latest calls (for tests and diagnostics)"""
        return self._registrations
