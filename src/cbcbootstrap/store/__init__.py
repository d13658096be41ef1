"""Store 模块

Runtime version 存储：
- RuntimeStore: 存储协议
- RuntimeVersionRecord: 记录模型
- MemoryRuntimeStore: 内存实现
- JsonFileRuntimeStore: JSON 文件实现
"""

from .base import RuntimeStore, RuntimeVersionRecord, is_valid_metadata
from .json_file import JsonFileRuntimeStore
from .memory import MemoryRuntimeStore

__all__ = [
    "RuntimeStore",
    "RuntimeVersionRecord",
    "is_valid_metadata",
    "MemoryRuntimeStore",
    "JsonFileRuntimeStore",
]
