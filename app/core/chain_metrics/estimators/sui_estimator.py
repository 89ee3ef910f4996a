"""
Sui throughput estimator (checkpoint sequence, cumulative transaction counter).
"""

from typing import Any, Dict, List, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.data_models.throughput import ThroughputSample
from app.core.chain_metrics.estimators.base_estimator import BaseThroughputEstimator
from app.core.chain_metrics.utils.exceptions import SchemaMismatch
from app.core.chain_metrics.utils.format_utils import parse_int


class SuiEstimator(BaseThroughputEstimator):
    """Sui JSON-RPC"""

    chain_name = "Sui"
    # checkpoints are much faster than blocks, so sample further back
    reference_offset = 10
    cumulative_counter = True
    timestamp_resolution = 1000

    def __init__(self, config: ChainMetricsConfig, session: Optional[aiohttp.ClientSession] = None):
        super().__init__(config.sui_rpc_url, config, session)

    async def _rpc(self, method: str, params: Optional[List[Any]] = None) -> Any:
        payload: Dict[str, Any] = {
            'jsonrpc': '2.0',
            'id': 1,
            'method': method,
        }
        if params is not None:
            payload['params'] = params

        data = await self._make_post_request(self.base_url, payload)
        if not isinstance(data, dict):
            raise SchemaMismatch(f"Unexpected JSON-RPC response for {method}: {data!r}", self.name)
        if data.get('error'):
            raise SchemaMismatch(f"JSON-RPC error for {method}: {data['error']}", self.name)
        if 'result' not in data:
            raise SchemaMismatch(f"JSON-RPC response for {method} has no result", self.name)
        return data['result']

    async def fetch_latest(self) -> ThroughputSample:
        sequence_number = parse_int(
            await self._rpc('sui_getLatestCheckpointSequenceNumber'), 'latestCheckpointSequenceNumber'
        )
        return await self._fetch_checkpoint(sequence_number)

    async def fetch_reference(self, index: int) -> ThroughputSample:
        return await self._fetch_checkpoint(index)

    async def _fetch_checkpoint(self, sequence_number: int) -> ThroughputSample:
        checkpoint = await self._rpc('sui_getCheckpoint', [str(sequence_number)])
        return self.parse_checkpoint(checkpoint)

    def parse_checkpoint(self, checkpoint: Any) -> ThroughputSample:
        if not isinstance(checkpoint, dict):
            raise SchemaMismatch(f"Unexpected checkpoint payload: {checkpoint!r}", self.name)
        return ThroughputSample(
            index=parse_int(checkpoint.get('sequenceNumber'), 'sequenceNumber'),
            tx_count=parse_int(checkpoint.get('networkTotalTransactions'), 'networkTotalTransactions'),
            timestamp=parse_int(checkpoint.get('timestampMs'), 'timestampMs'),
        )
