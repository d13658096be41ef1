"""命令行入口 - 独立运行 runtime 初始化"""

import asyncio

from cbcbootstrap import config
from cbcbootstrap.codec.registry import MetadataRegistry
from cbcbootstrap.startup import initialize_runtime
from cbcbootstrap.store.json_file import JsonFileRuntimeStore
from cbcbootstrap.telemetry import configure_logging, get_logger

logger = get_logger(__name__)


async def run(store: JsonFileRuntimeStore, registry: MetadataRegistry) -> None:
    """以配置的网络和端点执行初始化"""

    def generic_init() -> None:
        # 独立运行时没有通用拉取路径，只接受存储中已有的 metadata
        recent = store.read_most_recent_runtime_version()
        if recent is not None and recent.raw_data.startswith("0x"):
            registry.register_latest(recent.spec_version, recent.raw_data)
            return
        raise SystemExit("Can not find chain metadata, please check network")

    outcome = await initialize_runtime(
        network_name=config.NETWORK_NODE,
        store=store,
        registry=registry,
        generic_init=generic_init,
    )

    latest = registry.latest
    if latest is not None:
        print(f"[Runtime] {outcome.status.value}: spec {latest.spec_version}, {len(latest.raw)} chars of metadata")


def main():
    """入口函数"""
    configure_logging(config.LOG_LEVEL)
    store = JsonFileRuntimeStore(config.STORE_PATH)
    try:
        asyncio.run(run(store, MetadataRegistry()))
    except KeyboardInterrupt:
        print("\nInterrupted")


if __name__ == "__main__":
    main()
