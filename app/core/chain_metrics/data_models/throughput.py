# app/core/chain_metrics/data_models/throughput.py
from dataclasses import dataclass
from typing import Optional

from app.core.chain_metrics.utils.format_utils import format_tps


@dataclass(frozen=True)
class ThroughputSample:
    """
    One point in a chain's canonical ordering (block height or checkpoint).

    ``timestamp`` stays in the chain's native integer unit (µs, ms); the
    estimator knows the unit and converts only the difference.
    """
    index: int
    tx_count: int
    timestamp: int


@dataclass(frozen=True)
class ThroughputResult:
    """
    Outcome of one estimator run: either a rate or the reason there is none.

    Use the ok()/degraded() constructors rather than the initializer.
    """
    chain: str
    tps: Optional[float] = None
    reason: Optional[str] = None

    @classmethod
    def ok(cls, chain: str, tps: float) -> "ThroughputResult":
        return cls(chain=chain, tps=tps)

    @classmethod
    def degraded(cls, chain: str, reason: str) -> "ThroughputResult":
        return cls(chain=chain, reason=reason)

    @property
    def is_ok(self) -> bool:
        return self.tps is not None

    def formatted(self) -> Optional[str]:
        return format_tps(self.tps)
