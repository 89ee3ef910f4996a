"""
Chain Metrics Aggregation Engine

Builds the L1 snapshot list from market data, attaches the Ethereum gas
price, fans out one throughput estimator per supported chain and merges
the results back after all of them have finished. The L2 request is an
independent cycle that only touches the protocol directory.
"""

import asyncio
from typing import Callable, Dict, List, Optional, Tuple, Type

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig, GAS_PRICED_CHAIN
from app.core.chain_metrics.data_models.snapshots import ChainSnapshot, L2Snapshot
from app.core.chain_metrics.data_models.throughput import ThroughputResult
from app.core.chain_metrics.estimators import ESTIMATORS, BaseThroughputEstimator
from app.core.chain_metrics.providers.coingecko_provider import CoinGeckoProvider
from app.core.chain_metrics.providers.defillama_provider import DefiLlamaProvider
from app.core.chain_metrics.providers.etherscan_provider import EtherscanProvider
from app.core.chain_metrics.services.observer import ThroughputObserver, default_observer
from app.core.chain_metrics.utils.exceptions import UpstreamUnavailable
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)


class ChainMetricsEngine:
    """
    Aggregates market, gas and throughput data into ChainSnapshots.

    Args:
        config: Immutable configuration shared by all providers
        observer: Receives every estimator outcome (default: log warnings)
        estimators: Chain display name -> estimator class
        session_factory: Creates the HTTP session used for one cycle
    """

    def __init__(
        self,
        config: ChainMetricsConfig,
        observer: Optional[ThroughputObserver] = None,
        estimators: Optional[Dict[str, Type[BaseThroughputEstimator]]] = None,
        session_factory: Callable[[], aiohttp.ClientSession] = aiohttp.ClientSession,
    ):
        self.config = config
        self.observer = default_observer(observer)
        self.estimators = dict(ESTIMATORS if estimators is None else estimators)
        self.session_factory = session_factory

    async def get_chain_snapshots(self) -> List[ChainSnapshot]:
        """
        Run one aggregation cycle for the tracked L1 chains.

        Returns:
            Snapshots in the order of the market data response

        Raises:
            UpstreamUnavailable: if market data or the gas oracle fails
        """
        async with self.session_factory() as session:
            market_provider = CoinGeckoProvider(self.config, session)
            gas_provider = EtherscanProvider(self.config, session)

            # both are mandatory; wait for both before deciding
            market_result, gas_result = await asyncio.gather(
                market_provider.get_markets(self.config.tracked_chain_ids),
                gas_provider.get_safe_gas_price(),
                return_exceptions=True,
            )
            for outcome in (market_result, gas_result):
                if isinstance(outcome, BaseException):
                    logger.error(f"Aggregation cycle aborted: {outcome}")
                    raise outcome

            snapshots: List[ChainSnapshot] = market_result
            self._attach_gas_fees(snapshots, gas_result)

            results = await self._estimate_throughput(snapshots, session)

        self._merge_throughput(results)
        logger.info(
            f"Aggregated {len(snapshots)} chains, "
            f"{sum(1 for s in snapshots if s.tps is not None)} with TPS"
        )
        return snapshots

    async def get_l2_snapshots(self) -> List[L2Snapshot]:
        """
        Fetch TVL for the tracked Ethereum L2s.

        Raises:
            UpstreamUnavailable: if the protocol directory fails
        """
        async with self.session_factory() as session:
            return await DefiLlamaProvider(self.config, session).get_l2_snapshots()

    def _attach_gas_fees(self, snapshots: List[ChainSnapshot], gas_fees: str) -> None:
        for snapshot in snapshots:
            if snapshot.name == GAS_PRICED_CHAIN:
                snapshot.gas_fees = gas_fees
                return
        logger.info(f"{GAS_PRICED_CHAIN} not in market data, gas price not attached")

    async def _estimate_throughput(
        self, snapshots: List[ChainSnapshot], session: aiohttp.ClientSession
    ) -> List[Tuple[ChainSnapshot, ThroughputResult]]:
        targets = [snapshot for snapshot in snapshots if snapshot.name in self.estimators]
        if not targets:
            return []
        estimators = [self.estimators[snapshot.name](self.config, session) for snapshot in targets]

        # await all; one failing estimator never cancels the others
        outcomes = await asyncio.gather(
            *(estimator.estimate() for estimator in estimators),
            return_exceptions=True,
        )

        results = []
        for snapshot, estimator, outcome in zip(targets, estimators, outcomes):
            if isinstance(outcome, Exception):
                logger.error(f"Estimator {estimator.chain_name} crashed: {outcome!r}")
                outcome = ThroughputResult.degraded(estimator.chain_name, f"unexpected error: {outcome!r}")
            elif isinstance(outcome, BaseException):
                raise outcome
            results.append((snapshot, outcome))
        return results

    def _merge_throughput(self, results: List[Tuple[ChainSnapshot, ThroughputResult]]) -> None:
        # each result goes back to the snapshot its estimator was built for
        for snapshot, result in results:
            self.observer.on_result(result)
            if result.is_ok:
                snapshot.tps = result.formatted()


__all__ = ["ChainMetricsEngine", "UpstreamUnavailable"]
