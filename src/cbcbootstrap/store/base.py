"""Runtime Store 抽象接口

定义 runtime version 记录的读写契约：
- 读取最近的 runtime version 记录
- 创建 runtime version 条目（按 spec version upsert）
- 附加 metadata（按 spec version upsert）

设计原则：
1. 最小接口：只定义 bootstrap 需要的三个操作
2. 幂等写入：同一 spec version 重复写入是安全的
"""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass

from cbcbootstrap.config import METADATA_MIN_LENGTH


def is_valid_metadata(raw_data: str | None) -> bool:
    """判断 metadata hex 是否可用

    必须以 "0x" 开头，且长度大于 METADATA_MIN_LENGTH。
    """
    if not raw_data:
        return False
    return raw_data.startswith("0x") and len(raw_data) > METADATA_MIN_LENGTH


@dataclass
class RuntimeVersionRecord:
    """Runtime version 记录

    Attributes:
        spec_name: runtime spec 名称
        spec_version: runtime spec 版本号（记录主键）
        block_num: 该版本生效的起始区块
        raw_data: "0x" 前缀的 metadata hex
        modules: "|" 分隔的模块列表
    """

    spec_name: str
    spec_version: int
    block_num: int = 0
    raw_data: str = ""
    modules: str = ""

    def is_valid(self) -> bool:
        """metadata 是否可用于解码"""
        return is_valid_metadata(self.raw_data)

    def to_dict(self) -> dict:
        """序列化为字典"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "RuntimeVersionRecord":
        """从字典反序列化"""
        return cls(
            spec_name=str(data.get("spec_name") or ""),
            spec_version=int(data["spec_version"]),
            block_num=int(data.get("block_num", 0)),
            raw_data=str(data.get("raw_data") or ""),
            modules=str(data.get("modules") or ""),
        )


class RuntimeStore(ABC):
    """Runtime version 存储协议"""

    @abstractmethod
    def read_most_recent_runtime_version(self) -> RuntimeVersionRecord | None:
        """读取 spec version 最大的记录，不存在返回 None"""
        ...

    @abstractmethod
    def create_runtime_version(self, spec_name: str, spec_version: int, block_num: int) -> bool:
        """创建 runtime version 条目

        Returns:
            是否新建（已存在时返回 False，视为成功的 upsert）
        """
        ...

    @abstractmethod
    def set_runtime_data(self, spec_version: int, modules: str, raw_data: str) -> int:
        """为指定 spec version 附加模块列表和 metadata

        Returns:
            受影响的记录数
        """
        ...
