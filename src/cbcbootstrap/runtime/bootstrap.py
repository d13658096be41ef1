"""Bootstrap - CBC 链 runtime 初始化

职责：
- 检测存储中是否已有可解码的 runtime version 记录
- 缺失时通过 HTTP RPC 拉取 runtime version 与 metadata（带重试）
- 写入存储并回读校验
- 向 codec 注册表注册最新 metadata

不负责：
- metadata 内部结构解析（由 codec 负责）
- 通用初始化路径（由调用方在失败时回退）
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import httpx
from pydantic import ValidationError

from ..chain.types import CBCRuntimeConfig
from ..codec.registry import MetadataRegistry
from ..config import (
    BOOTSTRAP_BLOCK_NUM,
    CBC_MODULES,
    FETCH_RETRIES,
    FETCH_RETRY_WAIT_SECONDS,
    METRICS_ENABLED,
)
from ..errors import BootstrapError, MalformedResponseError, RetryExhaustedError, VerificationError
from ..rpc.client import NodeRPCClient
from ..rpc.models import RuntimeVersion
from ..store.base import RuntimeStore, is_valid_metadata
from ..telemetry import get_logger, metrics
from .outcome import BootstrapOutcome, OutcomeStatus

logger = get_logger(__name__)

T = TypeVar("T")


class CBCInitializer:
    """CBC 链 runtime 初始化器

    每个进程启动时调用一次 initialize()。存储中已有有效记录时直接返回，
    因此重启是幂等的。
    """

    def __init__(
        self,
        store: RuntimeStore,
        client: NodeRPCClient,
        registry: MetadataRegistry,
        retries: int = FETCH_RETRIES,
        retry_wait: float = FETCH_RETRY_WAIT_SECONDS,
        modules: str = CBC_MODULES,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        """
        Args:
            store: runtime version 存储
            client: 节点 RPC 客户端
            registry: codec metadata 注册表
            retries: 每个拉取操作的尝试次数
            retry_wait: 两次尝试之间的间隔（秒）
            modules: 写入记录的模块列表
            sleep: 等待函数（测试注入）
        """
        self.store = store
        self.client = client
        self.registry = registry
        self.retries = retries
        self.retry_wait = retry_wait
        self.modules = modules
        self._sleep = sleep

    @classmethod
    def from_config(
        cls,
        store: RuntimeStore,
        registry: MetadataRegistry,
        cbc_config: CBCRuntimeConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "CBCInitializer":
        """根据 CBCRuntimeConfig 构造（包括 RPC 客户端）"""
        client = NodeRPCClient(
            cbc_config.http_endpoint,
            timeout=cbc_config.request_timeout,
            transport=transport,
        )
        return cls(
            store,
            client,
            registry,
            retries=cbc_config.retries,
            retry_wait=cbc_config.retry_wait,
        )

    async def initialize(self) -> BootstrapOutcome:
        """执行初始化（需要时 bootstrap）

        Returns:
            ALREADY_PRESENT 或 BOOTSTRAPPED

        Raises:
            RetryExhaustedError: 拉取 runtime version 或 metadata 失败
            VerificationError: 写入后回读不一致
        """
        logger.info("[Bootstrap] Starting CBC Chain initialization...")

        recent = self.store.read_most_recent_runtime_version()
        if recent is not None and recent.is_valid():
            logger.info(
                f"[Bootstrap] Runtime version already exists (spec: {recent.spec_version}), skipping bootstrap"
            )
            return BootstrapOutcome(OutcomeStatus.ALREADY_PRESENT, spec_version=recent.spec_version)

        logger.info("[Bootstrap] Runtime versions table is empty or incomplete, bootstrapping...")

        version = await self.fetch_runtime_version()
        logger.info(f"[Bootstrap] Fetched runtime version: {version.spec_name} v{version.spec_version}")

        metadata_hex = await self.fetch_metadata()
        logger.info(f"[Bootstrap] Fetched metadata: {len(metadata_hex)} chars")

        self._persist(version, metadata_hex)

        self.registry.register_latest(version.spec_version, metadata_hex)

        logger.info("[Bootstrap] CBC Chain initialization completed successfully")
        return BootstrapOutcome(OutcomeStatus.BOOTSTRAPPED, spec_version=version.spec_version)

    async def fetch_runtime_version(self) -> RuntimeVersion:
        """拉取 state_getRuntimeVersion（带重试）"""

        async def attempt() -> RuntimeVersion:
            result = await self.client.call("state_getRuntimeVersion")
            try:
                return RuntimeVersion.model_validate(result)
            except ValidationError as e:
                raise MalformedResponseError(f"failed to unmarshal runtime version: {e}") from e

        return await self._with_retry("runtime version", attempt)

    async def fetch_metadata(self) -> str:
        """拉取 state_getMetadata（带重试）"""

        async def attempt() -> str:
            result = await self.client.call("state_getMetadata")
            if not isinstance(result, str):
                raise MalformedResponseError(
                    f"failed to unmarshal metadata: expected string, got {type(result).__name__}"
                )
            if not result.startswith("0x"):
                raise MalformedResponseError("invalid metadata format: missing 0x prefix")
            return result

        return await self._with_retry("metadata", attempt)

    async def _with_retry(self, operation: str, attempt: Callable[[], Awaitable[T]]) -> T:
        """固定次数、固定间隔的重试循环

        传输错误、格式错误、RPC 错误统一重试；最后一次失败后不再等待。
        """
        last_error: BootstrapError | None = None

        for i in range(self.retries):
            if i > 0:
                logger.warning(f"[Bootstrap] Retry {i}/{self.retries}: Fetching {operation}...")
                if METRICS_ENABLED:
                    metrics.inc("bootstrap.retries", {"op": operation})
                await self._sleep(self.retry_wait)

            try:
                return await attempt()
            except BootstrapError as e:
                logger.debug(f"[Bootstrap] Attempt {i + 1} fetching {operation} failed: {e}")
                last_error = e

        raise RetryExhaustedError(f"fetch {operation}", self.retries, last_error) from last_error

    def _persist(self, version: RuntimeVersion, metadata_hex: str) -> None:
        """写入 runtime version 与 metadata，并回读校验

        Raises:
            VerificationError: 回读结果缺失、版本不符或 metadata 不可用
        """
        spec_version = version.spec_version
        logger.info(f"[Bootstrap] Inserting runtime version {spec_version} into store...")

        recent = self.store.read_most_recent_runtime_version()
        if recent is not None and recent.spec_version == spec_version and is_valid_metadata(recent.raw_data):
            logger.info(
                f"[Bootstrap] Runtime version {spec_version} already exists with "
                f"{len(recent.raw_data)} chars of metadata - skipping insert"
            )
            return

        created = self.store.create_runtime_version(version.spec_name, spec_version, BOOTSTRAP_BLOCK_NUM)
        logger.info(f"[Bootstrap] create_runtime_version returned: {created}")

        affected = self.store.set_runtime_data(spec_version, self.modules, metadata_hex)
        logger.info(f"[Bootstrap] set_runtime_data affected {affected} rows")

        recent = self.store.read_most_recent_runtime_version()
        if recent is None or recent.spec_version != spec_version or not is_valid_metadata(recent.raw_data):
            raise VerificationError(
                f"failed to verify runtime data for spec {spec_version} after insert - "
                "metadata not found in store"
            )

        logger.info(
            f"[Bootstrap] Runtime version {spec_version} inserted/updated successfully with "
            f"{len(recent.raw_data)} chars of metadata"
        )
