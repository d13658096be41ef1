"""RPC 模块

节点 JSON-RPC 访问：
- NodeRPCClient: HTTP 请求/响应客户端
- RPCRequest / RPCResponse / RPCErrorObject: 信封模型
- RuntimeVersion: state_getRuntimeVersion 结果
"""

from .client import NodeRPCClient
from .models import RPCErrorObject, RPCRequest, RPCResponse, RuntimeVersion

__all__ = [
    "NodeRPCClient",
    "RPCRequest",
    "RPCResponse",
    "RPCErrorObject",
    "RuntimeVersion",
]
