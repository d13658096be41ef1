"""cbcbootstrap 配置

配置分为以下几类：
- 网络配置：目标链名称、节点端点
- CBC 链配置：模块列表、专属 pallet
- 拉取配置：重试次数、重试间隔、RPC 超时
- 校验配置：metadata 最小长度
- 存储配置：runtime version 记录文件
"""

import os
from pathlib import Path

# === 网络配置 ===
NETWORK_NODE = os.environ.get("NETWORK_NODE", "")  # 目标链名称（决定是否走 CBC 初始化）
WS_ENDPOINT = os.environ.get("CHAIN_WS_ENDPOINT", "ws://127.0.0.1:9944")  # 节点 WebSocket 端点

# === CBC 链配置 ===
CBC_CHAIN_NAME = "cbc-chain"
CBC_NETWORK_NAMES = ("cbc", "cbc-chain")  # 精确匹配（忽略大小写）
CBC_NETWORK_KEYWORD = "cbc"  # 包含匹配
CBC_MODULES = "System|Timestamp|Balances|TransactionPayment|Sudo|PalletCbcPoi|PalletCbcPos|Dcf"
CBC_PALLET_NAMES = [
    "PalletCbcPoi",  # Proof of Integrity
    "PalletCbcPos",  # Proof of Stake
    "Dcf",  # Deterministic Consensus Framework
]

# === 拉取配置 ===
FETCH_RETRIES = 3  # 每个拉取操作的最大尝试次数
FETCH_RETRY_WAIT_SECONDS = 2.0  # 两次尝试之间的固定间隔（秒）
RPC_TIMEOUT_SECONDS = 30.0  # 单次 RPC 请求超时（秒）

# === 校验配置 ===
METADATA_MIN_LENGTH = 100  # metadata hex 长度必须大于该值才视为有效
BOOTSTRAP_BLOCK_NUM = 0  # bootstrap 写入的 runtime version 起始区块

# === Finality 检查配置 ===
ENABLE_FINALITY_CHECK = os.environ.get("CBC_ENABLE_FINALITY_CHECK", "1").lower() not in (
    "0",
    "false",
    "no",
)

# === 存储配置 ===
STORE_DIR = Path(os.environ.get("CBC_STORE_DIR", str(Path.home() / ".cbcbootstrap")))
STORE_PATH = Path(os.environ.get("CBC_STORE_PATH", str(STORE_DIR / "runtime_versions.json")))
STORE_VERSION = 1  # 存储文件格式版本

# === 日志配置 ===
LOG_LEVEL = os.environ.get("CBCBOOTSTRAP_LOG_LEVEL", "INFO")  # 日志级别

# === 指标配置 ===
METRICS_ENABLED = True  # 是否启用指标收集
