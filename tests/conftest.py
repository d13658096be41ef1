"""Pytest 配置"""

import json
from unittest.mock import AsyncMock

import httpx
import pytest

from cbcbootstrap.codec.registry import MetadataRegistry
from cbcbootstrap.store.memory import MemoryRuntimeStore
from cbcbootstrap.telemetry import metrics

# 322 chars, well above the validity threshold
VALID_METADATA = "0x" + "6d657461" * 40

RUNTIME_VERSION = {
    "specName": "cbc-node",
    "implName": "cbc-node",
    "authoringVersion": 1,
    "specVersion": 100,
    "implVersion": 1,
    "apis": [["0xdf6acb689907609b", 4]],
    "transactionVersion": 1,
    "stateVersion": 1,
}

FINALIZED_HASH = "0x" + "ab" * 32
ZERO_HASH = "0x" + "0" * 64


class FakeNode:
    """JSON-RPC node double served through httpx.MockTransport.

    Replies are configured per method as:
    - a plain value: returned as "result" on every call
    - a list: consumed one entry per call (the last entry repeats)
    - an Exception instance: raised from the transport
    - an httpx.Response: its status, body and headers are replayed
    - a callable(body) -> httpx.Response
    Unconfigured methods answer with a JSON-RPC "Method not found" error.
    """

    def __init__(self):
        self.replies: dict = {}
        self.calls: list[str] = []
        self.bodies: list[dict] = []

    def reply(self, method: str, value) -> None:
        self.replies[method] = value

    def count(self, method: str | None = None) -> int:
        if method is None:
            return len(self.calls)
        return self.calls.count(method)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        method = body["method"]
        self.calls.append(method)
        self.bodies.append(body)

        if method not in self.replies:
            return httpx.Response(
                200,
                json={"id": body["id"], "jsonrpc": "2.0", "error": {"code": -32601, "message": "Method not found"}},
            )

        value = self.replies[method]
        if isinstance(value, list):
            value = value.pop(0) if len(value) > 1 else value[0]
        if isinstance(value, Exception):
            raise value
        if isinstance(value, httpx.Response):
            # 每次返回新的 Response，同一个实例不能被多个请求复用
            return httpx.Response(value.status_code, content=value.content, headers=value.headers)
        if callable(value):
            return value(body)
        return httpx.Response(200, json={"id": body["id"], "jsonrpc": "2.0", "result": value})


@pytest.fixture(autouse=True)
def reset_metrics():
    """每次测试前重置指标"""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def fake_node():
    """健康节点：runtime version、metadata、finality 均可用"""
    node = FakeNode()
    node.reply("state_getRuntimeVersion", dict(RUNTIME_VERSION))
    node.reply("state_getMetadata", VALID_METADATA)
    node.reply("chain_getFinalizedHead", FINALIZED_HASH)
    node.reply("chain_getBlock", {"block": {"header": {"number": "0x10"}, "extrinsics": []}})
    return node


@pytest.fixture
def store():
    return MemoryRuntimeStore()


@pytest.fixture
def registry():
    return MetadataRegistry()


@pytest.fixture
def no_sleep():
    """替代 asyncio.sleep，记录等待次数"""
    return AsyncMock()
