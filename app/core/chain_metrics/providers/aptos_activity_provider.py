"""
Aptos fullnode activity: ledger tip and the latest committed transactions.
"""

from typing import Any, List, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.data_models.activity import ChainStats, TransactionSummary
from app.core.chain_metrics.providers.activity_provider import ChainActivityProvider
from app.core.chain_metrics.utils.exceptions import SchemaMismatch
from app.core.chain_metrics.utils.explorer_directory import get_transaction_url
from app.core.chain_metrics.utils.format_utils import parse_int


class AptosActivityProvider(ChainActivityProvider):
    """Aptos Fullnode REST API"""

    def __init__(self, config: ChainMetricsConfig, session: Optional[aiohttp.ClientSession] = None):
        super().__init__("aptos", "Aptos", config.aptos_rpc_url, config, session)

    async def fetch_chain_stats(self) -> ChainStats:
        ledger = await self._make_request(self.base_url)
        if not isinstance(ledger, dict):
            raise SchemaMismatch(f"Unexpected ledger info: {ledger!r}", self.name)
        return ChainStats(chain=self.chain, latest_block=parse_int(ledger.get('block_height'), 'block_height'))

    async def fetch_latest_transactions(self, limit: int) -> List[TransactionSummary]:
        data = await self._make_request(f"{self.base_url}/transactions", {'limit': limit})
        if not isinstance(data, list):
            raise SchemaMismatch(f"Expected a transaction list, got {type(data).__name__}", self.name)
        # the fullnode returns ascending versions
        return [self.parse_transaction(tx) for tx in reversed(data)]

    def parse_transaction(self, tx: Any) -> TransactionSummary:
        if not isinstance(tx, dict) or not isinstance(tx.get('hash'), str):
            raise SchemaMismatch(f"Unexpected transaction: {tx!r}", self.name)
        # block metadata and state checkpoint transactions have no sender
        return TransactionSummary(
            hash=tx['hash'],
            sender=tx.get('sender') or "-",
            explorer_url=get_transaction_url(self.chain, tx['hash']),
        )
