"""Finality 检查 - bootstrap 后的链活性诊断

只输出日志，不影响启动流程：任何 RPC 失败都记录为 warning 并吞掉。
"""

from enum import Enum

from ..config import METRICS_ENABLED
from ..errors import BootstrapError, MalformedResponseError
from ..rpc.client import NodeRPCClient
from ..telemetry import get_logger, metrics

logger = get_logger(__name__)

_ZERO_HASH = "0" * 64


class FinalityResult(Enum):
    """Finality 检查结果"""

    FINALIZED = "finalized"  # finalized head 不是创世/全零
    NOT_PROGRESSING = "not_progressing"  # finalized head 为空或全零
    UNAVAILABLE = "unavailable"  # RPC 失败


def is_genesis_like_hash(block_hash: str | None) -> bool:
    """finalized head 是否表示 finality 尚未推进

    空值、"0x"、64 位全零 hex（带或不带 0x）均视为未推进。
    """
    if not block_hash:
        return True
    digits = block_hash[2:] if block_hash.startswith("0x") else block_hash
    return digits == "" or digits == _ZERO_HASH


class FinalityChecker:
    """通过 chain_getFinalizedHead / chain_getBlock 采样 finality"""

    def __init__(self, client: NodeRPCClient):
        self.client = client

    async def verify_finality(self) -> FinalityResult:
        """检查链是否在产出 finalized 区块

        永不抛出 BootstrapError。
        """
        logger.info("[Finality] Verifying DCF finality integration...")

        try:
            finalized_hash = await self.client.call("chain_getFinalizedHead")
            if finalized_hash is not None and not isinstance(finalized_hash, str):
                raise MalformedResponseError(
                    f"failed to unmarshal finalized hash: got {type(finalized_hash).__name__}"
                )
            # 区块内容不做检查，只确认调用成功
            await self.client.call("chain_getBlock", [finalized_hash])
        except BootstrapError as e:
            logger.warning(f"[Finality] DCF finality verification warning: {e}")
            return self._record(FinalityResult.UNAVAILABLE)

        logger.info(f"[Finality] Finalized block hash: {finalized_hash}")

        if is_genesis_like_hash(finalized_hash):
            logger.warning(
                "[Finality] Finalized head appears to be genesis block - DCF finality may not be syncing properly"
            )
            logger.warning(
                "[Finality] This is expected if the chain just started. "
                "If blocks are being produced but not finalized, check the node's finality sync task"
            )
            return self._record(FinalityResult.NOT_PROGRESSING)

        logger.info("[Finality] DCF finality verification passed")
        return self._record(FinalityResult.FINALIZED)

    def _record(self, result: FinalityResult) -> FinalityResult:
        if METRICS_ENABLED:
            metrics.inc("finality.check", {"result": result.value})
        return result
