"""
Aptos throughput estimator (height-indexed blocks, microsecond timestamps).
"""

from typing import Any, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.data_models.throughput import ThroughputSample
from app.core.chain_metrics.estimators.base_estimator import BaseThroughputEstimator
from app.core.chain_metrics.utils.exceptions import SchemaMismatch
from app.core.chain_metrics.utils.format_utils import parse_int


class AptosEstimator(BaseThroughputEstimator):
    """Aptos Fullnode REST API"""

    chain_name = "Aptos"
    reference_offset = 1
    timestamp_resolution = 1_000_000

    def __init__(self, config: ChainMetricsConfig, session: Optional[aiohttp.ClientSession] = None):
        super().__init__(config.aptos_rpc_url, config, session)

    async def fetch_latest(self) -> ThroughputSample:
        ledger = await self._make_request(self.base_url)
        if not isinstance(ledger, dict):
            raise SchemaMismatch(f"Unexpected ledger info: {ledger!r}", self.name)
        height = parse_int(ledger.get('block_height'), 'block_height')
        return await self._fetch_block(height, with_transactions=True)

    async def fetch_reference(self, index: int) -> ThroughputSample:
        # the reference block only contributes its timestamp
        return await self._fetch_block(index, with_transactions=False)

    async def _fetch_block(self, height: int, with_transactions: bool) -> ThroughputSample:
        url = f"{self.base_url}/blocks/by_height/{height}"
        params = {'with_transactions': 'true' if with_transactions else 'false'}
        block = await self._make_request(url, params)
        return self.parse_block(block)

    def parse_block(self, block: Any) -> ThroughputSample:
        if not isinstance(block, dict):
            raise SchemaMismatch(f"Unexpected block payload: {block!r}", self.name)

        transactions = block.get('transactions') or []
        if not isinstance(transactions, list):
            raise SchemaMismatch("'transactions' is not a list", self.name)

        return ThroughputSample(
            index=parse_int(block.get('block_height'), 'block_height'),
            tx_count=len(transactions),
            timestamp=parse_int(block.get('block_timestamp'), 'block_timestamp'),
        )
