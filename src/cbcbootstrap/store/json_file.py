"""JSON 文件存储

提供 runtime version 记录的持久化：
- 原子写入（temp + rename）
- checksum 校验（sha256）
- version 版本控制
- 损坏文件跳过告警（视为空存储）
"""

import hashlib
import json
import os
import tempfile
import time
from pathlib import Path

from cbcbootstrap.config import METRICS_ENABLED, STORE_PATH, STORE_VERSION
from cbcbootstrap.telemetry import get_logger, metrics

from .base import RuntimeStore, RuntimeVersionRecord

logger = get_logger(__name__)


def _calculate_checksum(data: bytes) -> str:
    """计算 SHA256 checksum"""
    return hashlib.sha256(data).hexdigest()


def _dump(data: dict) -> bytes:
    return json.dumps(data, ensure_ascii=False, indent=2).encode("utf-8")


def _count_error(labels: dict[str, str]) -> None:
    if METRICS_ENABLED:
        metrics.inc("store.error", labels)


class JsonFileRuntimeStore(RuntimeStore):
    """以单个 JSON 文件保存所有 runtime version 记录

    文件结构: {"version", "saved_at", "records": {spec_version: record}, "checksum"}
    每次写入都会重写整个文件。
    """

    def __init__(self, path: Path | None = None, version: int = STORE_VERSION):
        self.path = Path(path or STORE_PATH)
        self.version = version

    # === RuntimeStore 协议 ===

    def read_most_recent_runtime_version(self) -> RuntimeVersionRecord | None:
        records = self._load()
        if not records:
            return None
        return records[max(records)]

    def create_runtime_version(self, spec_name: str, spec_version: int, block_num: int) -> bool:
        records = self._load()
        if spec_version in records:
            return False
        records[spec_version] = RuntimeVersionRecord(
            spec_name=spec_name,
            spec_version=spec_version,
            block_num=block_num,
        )
        return self._save(records)

    def set_runtime_data(self, spec_version: int, modules: str, raw_data: str) -> int:
        records = self._load()
        record = records.get(spec_version)
        if record is None:
            return 0
        record.modules = modules
        record.raw_data = raw_data
        return 1 if self._save(records) else 0

    # === 文件读写 ===

    def _save(self, records: dict[int, RuntimeVersionRecord]) -> bool:
        """保存全部记录

        使用 temp + rename 原子写入，包含 checksum 校验。

        Returns:
            是否成功
        """
        try:
            data = {
                "version": self.version,
                "saved_at": time.time(),
                "records": {str(k): r.to_dict() for k, r in sorted(records.items())},
            }
            data["checksum"] = _calculate_checksum(_dump(data))
            json_bytes = _dump(data)

            self.path.parent.mkdir(parents=True, exist_ok=True)

            # 原子写入：先写临时文件，再 rename
            fd, temp_path = tempfile.mkstemp(
                prefix="cbcbootstrap_runtime_",
                suffix=".tmp",
                dir=self.path.parent,
            )
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(json_bytes)
                os.replace(temp_path, self.path)
            except Exception:
                if os.path.exists(temp_path):
                    os.unlink(temp_path)
                raise

            logger.debug(f"[Store] Saved {len(records)} runtime versions to {self.path}")
            return True

        except OSError as e:
            logger.error(f"[Store] Save failed: {e}")
            _count_error({"op": "save"})
            return False

    def _load(self) -> dict[int, RuntimeVersionRecord]:
        """加载全部记录

        文件不存在、version 不符、checksum 不符或 JSON 损坏时返回空字典。
        """
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_bytes().decode("utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"[Store] Invalid store file {self.path}: {e}")
            _count_error({"op": "load", "reason": "json"})
            return {}

        if not isinstance(data, dict):
            logger.warning(f"[Store] Invalid store file {self.path}: not an object")
            _count_error({"op": "load", "reason": "json"})
            return {}

        file_version = data.get("version", 1)
        if file_version != self.version:
            logger.warning(f"[Store] Version mismatch: file={file_version}, expected={self.version}")
            _count_error({"op": "load", "reason": "version"})
            return {}

        stored_checksum = data.pop("checksum", None)
        if stored_checksum and _calculate_checksum(_dump(data)) != stored_checksum:
            logger.warning("[Store] Checksum mismatch")
            _count_error({"op": "load", "reason": "checksum"})
            return {}

        records = data.get("records", {})
        if not isinstance(records, dict) or not all(isinstance(v, dict) for v in records.values()):
            logger.warning(f"[Store] Malformed records in {self.path}")
            _count_error({"op": "load", "reason": "record"})
            return {}

        try:
            return {int(k): RuntimeVersionRecord.from_dict(v) for k, v in records.items()}
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"[Store] Malformed record: {e}")
            _count_error({"op": "load", "reason": "record"})
            return {}
