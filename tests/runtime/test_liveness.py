"""Finality 检查测试"""

import httpx
import pytest

from cbcbootstrap.rpc.client import NodeRPCClient
from cbcbootstrap.runtime import FinalityChecker, FinalityResult, is_genesis_like_hash
from cbcbootstrap.telemetry import metrics

from conftest import FINALIZED_HASH, ZERO_HASH


def make_checker(node) -> FinalityChecker:
    return FinalityChecker(NodeRPCClient("http://node:9933", transport=node.transport))


class TestIsGenesisLikeHash:
    """finalized head 分类"""

    @pytest.mark.parametrize("value", [None, "", "0x", ZERO_HASH, "0" * 64])
    def test_not_progressing(self, value):
        assert is_genesis_like_hash(value) is True

    @pytest.mark.parametrize("value", [FINALIZED_HASH, "0x" + "0" * 63 + "1", "0x" + "1" + "0" * 63])
    def test_progressing(self, value):
        assert is_genesis_like_hash(value) is False


class TestVerifyFinality:
    """verify_finality 流程"""

    @pytest.mark.asyncio
    async def test_finalized(self, fake_node):
        result = await make_checker(fake_node).verify_finality()

        assert result == FinalityResult.FINALIZED
        assert fake_node.calls == ["chain_getFinalizedHead", "chain_getBlock"]
        assert fake_node.bodies[1]["params"] == [FINALIZED_HASH]
        assert metrics.get_counter("finality.check", {"result": "finalized"}) == 1

    @pytest.mark.asyncio
    async def test_zero_hash_warns(self, fake_node, caplog):
        fake_node.reply("chain_getFinalizedHead", ZERO_HASH)

        with caplog.at_level("WARNING"):
            result = await make_checker(fake_node).verify_finality()

        assert result == FinalityResult.NOT_PROGRESSING
        assert "may not be syncing" in caplog.text

    @pytest.mark.asyncio
    async def test_empty_hash_warns(self, fake_node):
        fake_node.reply("chain_getFinalizedHead", "")

        result = await make_checker(fake_node).verify_finality()

        assert result == FinalityResult.NOT_PROGRESSING

    @pytest.mark.asyncio
    async def test_head_failure_is_swallowed(self, fake_node, caplog):
        """获取 finalized head 失败只记录 warning"""
        fake_node.reply("chain_getFinalizedHead", httpx.ConnectError("connection refused"))

        with caplog.at_level("WARNING"):
            result = await make_checker(fake_node).verify_finality()

        assert result == FinalityResult.UNAVAILABLE
        assert fake_node.count("chain_getBlock") == 0
        assert "connection refused" in caplog.text

    @pytest.mark.asyncio
    async def test_block_failure_is_swallowed(self, fake_node):
        del fake_node.replies["chain_getBlock"]

        result = await make_checker(fake_node).verify_finality()

        assert result == FinalityResult.UNAVAILABLE

    @pytest.mark.asyncio
    async def test_non_string_head_is_swallowed(self, fake_node):
        fake_node.reply("chain_getFinalizedHead", 12345)

        result = await make_checker(fake_node).verify_finality()

        assert result == FinalityResult.UNAVAILABLE
        assert fake_node.count("chain_getBlock") == 0

    @pytest.mark.asyncio
    async def test_undecodable_head_is_swallowed(self, fake_node):
        """响应体不是合法 UTF-8 时只记录 warning"""
        body = b'{"id":1,"jsonrpc":"2.0","result":"\xff\xfe"}'
        fake_node.reply("chain_getFinalizedHead", httpx.Response(200, content=body))

        result = await make_checker(fake_node).verify_finality()

        assert result == FinalityResult.UNAVAILABLE
        assert fake_node.count("chain_getBlock") == 0
