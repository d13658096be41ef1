"""Bootstrap 结果类型"""

from dataclasses import dataclass
from enum import Enum


class OutcomeStatus(Enum):
    """一次初始化的结果状态"""

    BOOTSTRAPPED = "bootstrapped"  # 从节点拉取并写入
    ALREADY_PRESENT = "already_present"  # 存储中已有可用记录，无网络调用
    NOT_APPLICABLE = "not_applicable"  # 非 CBC 网络
    FAILED = "failed"


@dataclass
class BootstrapOutcome:
    """初始化结果（不持久化）"""

    status: OutcomeStatus
    spec_version: int | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        """CBC 路径是否已使存储可用"""
        return self.status in (OutcomeStatus.BOOTSTRAPPED, OutcomeStatus.ALREADY_PRESENT)

    @property
    def reason(self) -> str:
        if self.error is not None:
            return str(self.error)
        return self.status.value
