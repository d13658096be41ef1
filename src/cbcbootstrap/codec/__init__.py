"""Codec 模块 - metadata 注册表"""

from .registry import MetadataRegistry, RuntimeRaw

__all__ = [
    "MetadataRegistry",
    "RuntimeRaw",
]
