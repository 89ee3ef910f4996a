"""
Sei throughput estimator (Tendermint REST, RFC3339 block times).
"""

from typing import Any, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.data_models.throughput import ThroughputSample
from app.core.chain_metrics.estimators.base_estimator import BaseThroughputEstimator
from app.core.chain_metrics.utils.exceptions import SchemaMismatch
from app.core.chain_metrics.utils.format_utils import (
    micros_since_epoch,
    parse_int,
    parse_rfc3339,
    truncate_to_millis,
)


class SeiEstimator(BaseThroughputEstimator):
    """Sei Cosmos/Tendermint REST API"""

    chain_name = "Sei"
    reference_offset = 1
    timestamp_resolution = 1_000_000

    def __init__(self, config: ChainMetricsConfig, session: Optional[aiohttp.ClientSession] = None):
        super().__init__(config.sei_rest_url, config, session)
        self.blocks_url = f"{self.base_url}/cosmos/base/tendermint/v1beta1/blocks"

    async def fetch_latest(self) -> ThroughputSample:
        return self.parse_block(await self._make_request(f"{self.blocks_url}/latest"))

    async def fetch_reference(self, index: int) -> ThroughputSample:
        return self.parse_block(await self._make_request(f"{self.blocks_url}/{index}"))

    def time_delta_seconds(self, latest: ThroughputSample, reference: ThroughputSample) -> float:
        # block interval counted in whole milliseconds
        return truncate_to_millis(latest.timestamp - reference.timestamp) / 1000

    def parse_block(self, payload: Any) -> ThroughputSample:
        block = payload.get('block') if isinstance(payload, dict) else None
        if not isinstance(block, dict):
            raise SchemaMismatch(f"Unexpected block payload: {payload!r}", self.name)

        header = block.get('header')
        data = block.get('data')
        if not isinstance(header, dict) or not isinstance(data, dict):
            raise SchemaMismatch("Block has no header/data", self.name)

        txs = data.get('txs') or []
        if not isinstance(txs, list):
            raise SchemaMismatch("'txs' is not a list", self.name)

        block_time = parse_rfc3339(header.get('time'), 'time')
        return ThroughputSample(
            index=parse_int(header.get('height'), 'height'),
            tx_count=len(txs),
            timestamp=micros_since_epoch(block_time),
        )
