"""
Two-sample throughput estimation shared by all chain families.

Every estimator samples the latest unit of its chain (block or checkpoint)
and a reference unit a fixed number of positions earlier, then divides the
transaction delta by the time delta. The families only differ in how they
fetch a sample and in how the transaction delta is taken.
"""

from abc import abstractmethod
from typing import Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.data_models.throughput import ThroughputResult, ThroughputSample
from app.core.chain_metrics.providers.base_provider import BaseAPIProvider
from app.core.chain_metrics.utils.exceptions import APIException
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)


class BaseThroughputEstimator(BaseAPIProvider):
    """Basisklasse für TPS-Schätzer"""

    # display name as reported by the market data provider
    chain_name: str = ""
    # distance between latest and reference unit
    reference_offset: int = 1
    # True if tx_count is a network-wide running total
    cumulative_counter: bool = False
    # native timestamp units per second
    timestamp_resolution: int = 1

    def __init__(self, base_url: str, config: ChainMetricsConfig,
                 session: Optional[aiohttp.ClientSession] = None):
        super().__init__(self.chain_name, base_url, config, session)

    @abstractmethod
    async def fetch_latest(self) -> ThroughputSample:
        """Fetch the most recent unit"""

    @abstractmethod
    async def fetch_reference(self, index: int) -> ThroughputSample:
        """Fetch the unit at ``index``"""

    async def estimate(self) -> ThroughputResult:
        """
        Run one estimation. Never raises for upstream problems; those come
        back as a degraded result.
        """
        try:
            latest = await self.fetch_latest()
            if latest.index < self.reference_offset:
                return ThroughputResult.degraded(
                    self.chain_name,
                    f"latest index {latest.index} is below reference offset {self.reference_offset}",
                )
            reference = await self.fetch_reference(latest.index - self.reference_offset)
        except APIException as e:
            return ThroughputResult.degraded(self.chain_name, str(e))

        return self.compute(latest, reference)

    def time_delta_seconds(self, latest: ThroughputSample, reference: ThroughputSample) -> float:
        # subtract in native units first, the absolute values do not fit a float exactly
        return (latest.timestamp - reference.timestamp) / self.timestamp_resolution

    def compute(self, latest: ThroughputSample, reference: ThroughputSample) -> ThroughputResult:
        if self.cumulative_counter:
            tx_delta = latest.tx_count - reference.tx_count
        else:
            # tip approximation: only the latest unit's own count is used
            tx_delta = latest.tx_count

        time_delta_seconds = self.time_delta_seconds(latest, reference)
        if time_delta_seconds <= 0:
            return ThroughputResult.degraded(
                self.chain_name, f"non-positive time delta ({time_delta_seconds}s)"
            )
        if tx_delta < 0:
            return ThroughputResult.degraded(self.chain_name, f"negative transaction delta ({tx_delta})")

        tps = tx_delta / time_delta_seconds
        logger.debug(
            f"{self.chain_name}: {tx_delta} tx over {time_delta_seconds:.3f}s "
            f"({reference.index} -> {latest.index}) = {tps:.2f} TPS"
        )
        return ThroughputResult.ok(self.chain_name, tps)
