"""
Chain Activity Service

Per-chain lookups behind /api/chains/{chain}/...: tip stats, the latest
transactions and (EVM chains only) wallet balance plus history. Every call
is one short cycle with its own HTTP session.
"""

from typing import Callable, List, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ACTIVITY_TX_LIMIT, ChainMetricsConfig
from app.core.chain_metrics.data_models.activity import ChainStats, TransactionSummary, WalletInfo
from app.core.chain_metrics.providers.activity_provider import ChainActivityProvider
from app.core.chain_metrics.providers.aptos_activity_provider import AptosActivityProvider
from app.core.chain_metrics.providers.evm_explorer_provider import EvmExplorerProvider
from app.core.chain_metrics.providers.sei_activity_provider import SeiActivityProvider
from app.core.chain_metrics.providers.sui_activity_provider import SuiActivityProvider
from app.core.chain_metrics.utils.exceptions import UnsupportedChain
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)

NATIVE_ACTIVITY_PROVIDERS = {
    "aptos": AptosActivityProvider,
    "sui": SuiActivityProvider,
    "sei": SeiActivityProvider,
}


class ChainActivityService:
    """Wählt den passenden Provider pro Chain-Key"""

    def __init__(
        self,
        config: ChainMetricsConfig,
        session_factory: Callable[[], aiohttp.ClientSession] = aiohttp.ClientSession,
    ):
        self.config = config
        self.session_factory = session_factory

    def build_provider(self, chain: str,
                       session: Optional[aiohttp.ClientSession] = None) -> ChainActivityProvider:
        """
        Raises:
            UnsupportedChain: for unknown chain keys
        """
        key = (chain or "").lower()
        if key in self.config.evm_explorer_apis:
            return EvmExplorerProvider(key, self.config, session)
        if key in NATIVE_ACTIVITY_PROVIDERS:
            return NATIVE_ACTIVITY_PROVIDERS[key](self.config, session)
        raise UnsupportedChain(chain)

    async def get_chain_stats(self, chain: str) -> ChainStats:
        async with self.session_factory() as session:
            provider = self.build_provider(chain, session)
            stats = await provider.get_chain_stats()
        logger.info(f"{provider.chain}: latest block {stats.latest_block}")
        return stats

    async def get_latest_transactions(self, chain: str,
                                      limit: int = ACTIVITY_TX_LIMIT) -> List[TransactionSummary]:
        async with self.session_factory() as session:
            provider = self.build_provider(chain, session)
            return await provider.get_latest_transactions(limit)

    async def get_wallet_info(self, chain: str, address: str,
                              limit: int = ACTIVITY_TX_LIMIT) -> WalletInfo:
        async with self.session_factory() as session:
            provider = self.build_provider(chain, session)
            return await provider.get_wallet_info(address, limit)

