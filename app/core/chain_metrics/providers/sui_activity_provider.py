"""
Sui activity over JSON-RPC: latest checkpoint and transaction blocks.
"""

from typing import Any, Dict, List, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.data_models.activity import ChainStats, TransactionSummary
from app.core.chain_metrics.providers.activity_provider import ChainActivityProvider
from app.core.chain_metrics.utils.exceptions import SchemaMismatch
from app.core.chain_metrics.utils.explorer_directory import get_transaction_url
from app.core.chain_metrics.utils.format_utils import parse_int


class SuiActivityProvider(ChainActivityProvider):
    """Sui JSON-RPC"""

    def __init__(self, config: ChainMetricsConfig, session: Optional[aiohttp.ClientSession] = None):
        super().__init__("sui", "Sui", config.sui_rpc_url, config, session)

    async def _rpc(self, method: str, params: Optional[List[Any]] = None) -> Any:
        payload: Dict[str, Any] = {
            'jsonrpc': '2.0',
            'id': 1,
            'method': method,
            'params': params or [],
        }
        data = await self._make_post_request(self.base_url, payload)
        if not isinstance(data, dict) or 'result' not in data or data.get('error'):
            raise SchemaMismatch(f"JSON-RPC {method} failed: {data!r}", self.name)
        return data['result']

    async def fetch_chain_stats(self) -> ChainStats:
        sequence_number = await self._rpc('sui_getLatestCheckpointSequenceNumber')
        return ChainStats(
            chain=self.chain,
            latest_block=parse_int(sequence_number, 'latestCheckpointSequenceNumber'),
        )

    async def fetch_latest_transactions(self, limit: int) -> List[TransactionSummary]:
        # query, cursor, limit, descending
        page = await self._rpc('suix_queryTransactionBlocks', [
            {'options': {'showInput': True}}, None, limit, True,
        ])
        entries = page.get('data') if isinstance(page, dict) else None
        if not isinstance(entries, list):
            raise SchemaMismatch(f"Unexpected transaction page: {page!r}", self.name)
        return [self.parse_transaction_block(entry) for entry in entries]

    def parse_transaction_block(self, entry: Any) -> TransactionSummary:
        if not isinstance(entry, dict) or not isinstance(entry.get('digest'), str):
            raise SchemaMismatch(f"Unexpected transaction block: {entry!r}", self.name)
        data = (entry.get('transaction') or {}).get('data') or {}
        return TransactionSummary(
            hash=entry['digest'],
            sender=data.get('sender') or "-",
            explorer_url=get_transaction_url(self.chain, entry['digest']),
        )
