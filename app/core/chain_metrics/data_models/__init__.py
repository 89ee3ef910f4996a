from .activity import ChainStats, TransactionSummary, WalletInfo
from .snapshots import ChainSnapshot, L2Snapshot
from .throughput import ThroughputResult, ThroughputSample

__all__ = [
    "ChainSnapshot",
    "ChainStats",
    "L2Snapshot",
    "ThroughputResult",
    "ThroughputSample",
    "TransactionSummary",
    "WalletInfo",
]
