"""Runtime module - CBC runtime bootstrap and liveness check"""

from .bootstrap import CBCInitializer
from .liveness import FinalityChecker, FinalityResult, is_genesis_like_hash
from .outcome import BootstrapOutcome, OutcomeStatus

__all__ = [
    "CBCInitializer",
    "BootstrapOutcome",
    "OutcomeStatus",
    "FinalityChecker",
    "FinalityResult",
    "is_genesis_like_hash",
]
