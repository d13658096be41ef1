"""In-process runtime store."""

from cbcbootstrap.telemetry import get_logger

from .base import RuntimeStore, RuntimeVersionRecord

logger = get_logger(__name__)


class MemoryRuntimeStore(RuntimeStore):
    """Runtime store backed by a dict keyed by spec version.

    Used by tests and by hosts that keep runtime versions in their own
    database and only need the bootstrap contract in memory.
    """

    def __init__(self, records: list[RuntimeVersionRecord] | None = None):
        self._records: dict[int, RuntimeVersionRecord] = {}
        for record in records or []:
            self._records[record.spec_version] = record

    def read_most_recent_runtime_version(self) -> RuntimeVersionRecord | None:
        if not self._records:
            return None
        return self._records[max(self._records)]

    def create_runtime_version(self, spec_name: str, spec_version: int, block_num: int) -> bool:
        if spec_version in self._records:
            return False
        self._records[spec_version] = RuntimeVersionRecord(
            spec_name=spec_name,
            spec_version=spec_version,
            block_num=block_num,
        )
        logger.debug(f"[Store] Created runtime version {spec_version}")
        return True

    def set_runtime_data(self, spec_version: int, modules: str, raw_data: str) -> int:
        record = self._records.get(spec_version)
        if record is None:
            return 0
        record.modules = modules
        record.raw_data = raw_data
        return 1

    @property
    def records(self) -> list[RuntimeVersionRecord]:
        """All records ordered by spec version"""
        return [self._records[k] for k in sorted(self._records)]
