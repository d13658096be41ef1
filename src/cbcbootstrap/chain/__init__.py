"""Chain 模块

CBC 链身份识别与端点转换：
- CBCRuntimeConfig / default_cbc_config: 初始化配置
- convert_ws_to_http: WebSocket 端点转 HTTP
- is_cbc_network / is_cbc_pallet: 网络与 pallet 识别
"""

from .types import (
    CBCRuntimeConfig,
    convert_ws_to_http,
    default_cbc_config,
    is_cbc_network,
    is_cbc_pallet,
)

__all__ = [
    "CBCRuntimeConfig",
    "default_cbc_config",
    "convert_ws_to_http",
    "is_cbc_network",
    "is_cbc_pallet",
]
