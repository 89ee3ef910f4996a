"""
Chain activity providers: chain tip stats, latest transactions and wallet
lookups for a single chain, addressed by its chain key ('eth', 'aptos', ...).
"""

from abc import abstractmethod
from typing import Awaitable, List, Optional, TypeVar

import aiohttp

from app.core.chain_metrics.config.settings import ACTIVITY_TX_LIMIT, ChainMetricsConfig
from app.core.chain_metrics.data_models.activity import ChainStats, TransactionSummary, WalletInfo
from app.core.chain_metrics.providers.base_provider import BaseAPIProvider
from app.core.chain_metrics.utils.exceptions import APIException, UnsupportedChain, UpstreamUnavailable
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ChainActivityProvider(BaseAPIProvider):
    """Basisklasse für Chain-Aktivitätsdaten"""

    def __init__(self, chain: str, name: str, base_url: str, config: ChainMetricsConfig,
                 session: Optional[aiohttp.ClientSession] = None):
        super().__init__(name, base_url, config, session)
        self.chain = chain

    async def get_chain_stats(self) -> ChainStats:
        """
        Raises:
            UpstreamUnavailable: on any network or schema failure
        """
        return await self._guarded("chain stats", self.fetch_chain_stats())

    async def get_latest_transactions(self, limit: int = ACTIVITY_TX_LIMIT) -> List[TransactionSummary]:
        return await self._guarded("latest transactions", self.fetch_latest_transactions(limit))

    async def get_wallet_info(self, address: str, limit: int = ACTIVITY_TX_LIMIT) -> WalletInfo:
        """
        Raises:
            InvalidAddress: if the address does not fit the chain
            UnsupportedChain: if the chain has no wallet lookup
            UpstreamUnavailable: on any network or schema failure
        """
        return await self._guarded("wallet info", self.fetch_wallet_info(address, limit))

    async def _guarded(self, operation: str, request: Awaitable[T]) -> T:
        try:
            return await request
        except UpstreamUnavailable:
            raise
        except APIException as e:
            logger.error(f"{self.chain} {operation} failed: {e}")
            raise UpstreamUnavailable(self.name, str(e))

    @abstractmethod
    async def fetch_chain_stats(self) -> ChainStats:
        pass

    @abstractmethod
    async def fetch_latest_transactions(self, limit: int) -> List[TransactionSummary]:
        pass

    async def fetch_wallet_info(self, address: str, limit: int) -> WalletInfo:
        raise UnsupportedChain(self.chain, "wallet lookup")
