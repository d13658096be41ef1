"""Startup - explorer 启动时的 runtime 初始化编排

流程：
1. 根据网络名判断是否为 CBC 链，否则返回 NOT_APPLICABLE（无 RPC 调用）
2. CBC 初始化（bootstrap + finality 检查）
3. 成功：从存储加载 metadata 到注册表（已注册则跳过）
4. 失败或不适用：回退到调用方提供的通用初始化
"""

import inspect
from collections.abc import Callable
from typing import Any, Coroutine

import httpx

from .chain.types import CBCRuntimeConfig, default_cbc_config, is_cbc_network
from .codec.registry import MetadataRegistry
from .config import METRICS_ENABLED, WS_ENDPOINT
from .errors import BootstrapError
from .runtime.bootstrap import CBCInitializer
from .runtime.liveness import FinalityChecker
from .runtime.outcome import BootstrapOutcome, OutcomeStatus
from .store.base import RuntimeStore
from .telemetry import get_logger, metrics

logger = get_logger(__name__)

GenericInit = Callable[[], Any | Coroutine[Any, Any, Any]]


async def init_cbc_chain(
    network_name: str,
    store: RuntimeStore,
    registry: MetadataRegistry,
    cbc_config: CBCRuntimeConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> BootstrapOutcome:
    """执行 CBC 链专属初始化

    Args:
        network_name: 配置的网络名
        store: runtime version 存储
        registry: codec metadata 注册表
        cbc_config: CBC 配置，默认由 WS_ENDPOINT 生成
        transport: 可选 httpx transport（测试注入）

    Returns:
        BootstrapOutcome；BootstrapError 会被转换为 FAILED，不会抛出
    """
    logger.info("[Startup] Initializing CBC Chain specific components...")

    if not is_cbc_network(network_name):
        logger.info(f"[Startup] Not a CBC Chain network (network: {network_name}), skipping CBC initialization")
        return _record(BootstrapOutcome(OutcomeStatus.NOT_APPLICABLE))

    logger.info(f"[Startup] Detected CBC Chain network: {network_name}")

    cbc_config = cbc_config or default_cbc_config(WS_ENDPOINT)
    initializer = CBCInitializer.from_config(store, registry, cbc_config, transport=transport)

    try:
        outcome = await initializer.initialize()
    except BootstrapError as e:
        logger.warning(f"[Startup] CBC initialization failed: {e}")
        return _record(BootstrapOutcome(OutcomeStatus.FAILED, error=e))

    if cbc_config.enable_finality_check:
        # 仅用于诊断，结果不影响启动
        await FinalityChecker(initializer.client).verify_finality()

    logger.info("[Startup] CBC Chain initialization completed successfully")
    return _record(outcome)


async def initialize_runtime(
    network_name: str,
    store: RuntimeStore,
    registry: MetadataRegistry,
    generic_init: GenericInit,
    cbc_config: CBCRuntimeConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> BootstrapOutcome:
    """初始化 runtime metadata，CBC 路径失败时回退到通用路径

    Args:
        generic_init: 通用初始化回调（同步或异步），行为由调用方定义

    Returns:
        CBC 路径的 BootstrapOutcome
    """
    outcome = await init_cbc_chain(network_name, store, registry, cbc_config, transport)

    if not outcome.ok:
        if outcome.status == OutcomeStatus.FAILED:
            logger.warning(f"[Startup] CBC initialization warning: {outcome.reason}")
        await _run_generic_init(generic_init)
        return outcome

    # CBC 已写入存储，只需加载到注册表，不再拉取 metadata
    recent = store.read_most_recent_runtime_version()
    if recent is not None and recent.is_valid():
        if not registry.has(recent.spec_version):
            logger.info(
                f"[Startup] Loading CBC metadata from store (spec: {recent.spec_version}, "
                f"size: {len(recent.raw_data)} chars)"
            )
            registry.register_latest(recent.spec_version, recent.raw_data)
        return outcome

    logger.warning(
        "[Startup] CBC initialization succeeded but no metadata found in store, "
        "falling back to standard initialization"
    )
    await _run_generic_init(generic_init)
    return outcome


async def _run_generic_init(generic_init: GenericInit) -> None:
    """执行通用初始化回调（支持协程）"""
    result = generic_init()
    if inspect.iscoroutine(result):
        await result


def _record(outcome: BootstrapOutcome) -> BootstrapOutcome:
    if METRICS_ENABLED:
        metrics.inc("bootstrap.outcome", {"status": outcome.status.value})
    return outcome
