"""
Etherscan-family explorer provider (Etherscan, Arbiscan, Optimistic
Etherscan, Basescan). All of them share the same query API and one key.
"""

import asyncio
import re
from typing import Any, Dict, List, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.data_models.activity import ChainStats, TransactionSummary, WalletInfo
from app.core.chain_metrics.providers.activity_provider import ChainActivityProvider
from app.core.chain_metrics.utils.exceptions import InvalidAddress, SchemaMismatch, UnsupportedChain, UpstreamUnavailable
from app.core.chain_metrics.utils.explorer_directory import get_transaction_url
from app.core.chain_metrics.utils.format_utils import format_wei_as_gwei, parse_hex_int, parse_int
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)

EVM_ADDRESS_RE = re.compile(r'^0x[a-fA-F0-9]{40}$')

# Etherscan answers an empty account history with status "0"
NO_TRANSACTIONS_MESSAGE = "No transactions found"


def validate_evm_address(address: str) -> bool:
    """0x + 40 hex characters"""
    return bool(address) and EVM_ADDRESS_RE.match(address) is not None


class EvmExplorerProvider(ChainActivityProvider):
    """Etherscan-kompatible Explorer-API"""

    def __init__(self, chain: str, config: ChainMetricsConfig,
                 session: Optional[aiohttp.ClientSession] = None):
        base_url = config.evm_explorer_apis.get(chain)
        if base_url is None:
            raise UnsupportedChain(chain)
        super().__init__(chain, f"Explorer-{chain}", base_url, config, session)
        self.api_key = config.etherscan_api_key

    def _require_api_key(self) -> None:
        if not self.api_key:
            raise UpstreamUnavailable(self.name, "ETHERSCAN_API_KEY is not configured")

    async def _proxy(self, action: str, **params: Any) -> Any:
        """module=proxy calls return a bare JSON-RPC envelope"""
        query: Dict[str, Any] = {'module': 'proxy', 'action': action, **params, 'apikey': self.api_key}
        data = await self._make_request(self.base_url, query)
        if not isinstance(data, dict):
            raise SchemaMismatch(f"Unexpected {action} response: {data!r}", self.name)
        if data.get('error'):
            raise SchemaMismatch(f"{action} failed: {data['error']}", self.name)
        # key errors come back in the account/status format
        if data.get('status') == '0':
            raise SchemaMismatch(f"{action} failed: {data.get('result')!r}", self.name)
        return data.get('result')

    async def _account(self, action: str, **params: Any) -> Any:
        query: Dict[str, Any] = {'module': 'account', 'action': action, **params, 'apikey': self.api_key}
        data = await self._make_request(self.base_url, query)
        if not isinstance(data, dict):
            raise SchemaMismatch(f"Unexpected {action} response: {data!r}", self.name)
        if data.get('status') == '1':
            return data.get('result')
        if action == 'txlist' and data.get('message') == NO_TRANSACTIONS_MESSAGE:
            return []
        raise SchemaMismatch(f"{action} failed: {data.get('message')} {data.get('result')!r}", self.name)

    async def _latest_block(self) -> Dict[str, Any]:
        block_tag = await self._proxy('eth_blockNumber')
        parse_hex_int(block_tag, 'blockNumber')
        block = await self._proxy('eth_getBlockByNumber', tag=block_tag, boolean='true')
        if not isinstance(block, dict) or not isinstance(block.get('transactions'), list):
            raise SchemaMismatch(f"Block {block_tag} has no transaction list", self.name)
        return block

    async def fetch_chain_stats(self) -> ChainStats:
        self._require_api_key()
        block, gas_price = await asyncio.gather(
            self._latest_block(),
            self._proxy('eth_gasPrice'),
        )
        return ChainStats(
            chain=self.chain,
            latest_block=parse_hex_int(block.get('number'), 'number'),
            gas_price=format_wei_as_gwei(parse_hex_int(gas_price, 'gasPrice')),
            latest_block_tx_count=len(block['transactions']),
        )

    async def fetch_latest_transactions(self, limit: int) -> List[TransactionSummary]:
        self._require_api_key()
        block = await self._latest_block()
        # full transaction objects, last ones in the block first
        transactions = block['transactions'][-limit:] if limit > 0 else []
        return [self._proxy_transaction(tx) for tx in reversed(transactions)]

    async def fetch_wallet_info(self, address: str, limit: int) -> WalletInfo:
        if not validate_evm_address(address):
            raise InvalidAddress(f"Not an EVM address: {address!r}")
        self._require_api_key()

        balance, history = await asyncio.gather(
            self._account('balance', address=address, tag='latest'),
            self._account(
                'txlist', address=address, startblock=0, endblock=99999999,
                page=1, offset=limit, sort='desc',
            ),
        )
        if not isinstance(history, list):
            raise SchemaMismatch(f"txlist result is not a list: {history!r}", self.name)

        return WalletInfo(
            chain=self.chain,
            address=address,
            balance=str(parse_int(balance, 'balance')),
            transactions=[self._account_transaction(tx) for tx in history[:limit]],
        )

    def _proxy_transaction(self, tx: Any) -> TransactionSummary:
        if not isinstance(tx, dict) or not isinstance(tx.get('hash'), str):
            raise SchemaMismatch(f"Unexpected transaction object: {tx!r}", self.name)
        return TransactionSummary(
            hash=tx['hash'],
            sender=tx.get('from') or "-",
            # contract creations have no recipient
            receiver=tx.get('to') or "-",
            value=str(parse_hex_int(tx.get('value', '0x0'), 'value')),
            explorer_url=get_transaction_url(self.chain, tx['hash']),
        )

    def _account_transaction(self, tx: Any) -> TransactionSummary:
        if not isinstance(tx, dict) or not isinstance(tx.get('hash'), str):
            raise SchemaMismatch(f"Unexpected transaction entry: {tx!r}", self.name)
        return TransactionSummary(
            hash=tx['hash'],
            sender=tx.get('from') or "-",
            receiver=tx.get('to') or "-",
            value=str(parse_int(tx.get('value', '0'), 'value')),
            explorer_url=get_transaction_url(self.chain, tx['hash']),
        )
