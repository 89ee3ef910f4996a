"""
Sei activity from the Tendermint REST API.

The block endpoint only carries raw transactions; their hash is the
upper-case SHA-256 of the decoded bytes, as shown by explorers.
"""

import base64
import binascii
import hashlib
from typing import Any, Dict, List, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.data_models.activity import ChainStats, TransactionSummary
from app.core.chain_metrics.providers.activity_provider import ChainActivityProvider
from app.core.chain_metrics.utils.exceptions import SchemaMismatch
from app.core.chain_metrics.utils.explorer_directory import get_transaction_url
from app.core.chain_metrics.utils.format_utils import parse_int


def tendermint_tx_hash(encoded_tx: str) -> str:
    return hashlib.sha256(base64.b64decode(encoded_tx, validate=True)).hexdigest().upper()


class SeiActivityProvider(ChainActivityProvider):
    """Sei Cosmos/Tendermint REST API"""

    def __init__(self, config: ChainMetricsConfig, session: Optional[aiohttp.ClientSession] = None):
        super().__init__("sei", "Sei", config.sei_rest_url, config, session)
        self.latest_block_url = f"{self.base_url}/cosmos/base/tendermint/v1beta1/blocks/latest"

    async def _latest_block(self) -> Dict[str, Any]:
        payload = await self._make_request(self.latest_block_url)
        block = payload.get('block') if isinstance(payload, dict) else None
        if not isinstance(block, dict) or not isinstance(block.get('header'), dict):
            raise SchemaMismatch(f"Unexpected block payload: {payload!r}", self.name)
        return block

    async def fetch_chain_stats(self) -> ChainStats:
        block = await self._latest_block()
        txs = (block.get('data') or {}).get('txs') or []
        return ChainStats(
            chain=self.chain,
            latest_block=parse_int(block['header'].get('height'), 'height'),
            latest_block_tx_count=len(txs) if isinstance(txs, list) else None,
        )

    async def fetch_latest_transactions(self, limit: int) -> List[TransactionSummary]:
        block = await self._latest_block()
        txs = (block.get('data') or {}).get('txs') or []
        if not isinstance(txs, list):
            raise SchemaMismatch("'txs' is not a list", self.name)

        summaries = []
        for encoded in reversed(txs[-limit:] if limit > 0 else []):
            try:
                tx_hash = tendermint_tx_hash(encoded)
            except (TypeError, binascii.Error):
                raise SchemaMismatch(f"Transaction is not base64: {encoded!r}", self.name)
            summaries.append(TransactionSummary(hash=tx_hash, explorer_url=get_transaction_url(self.chain, tx_hash)))
        return summaries
