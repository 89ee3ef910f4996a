"""
Upstream providers: market data, gas oracle, protocol directory and the
per-chain activity APIs.
"""

from .activity_provider import ChainActivityProvider
from .aptos_activity_provider import AptosActivityProvider
from .base_provider import BaseAPIProvider
from .coingecko_provider import CoinGeckoProvider
from .defillama_provider import DefiLlamaProvider
from .etherscan_provider import EtherscanProvider
from .evm_explorer_provider import EvmExplorerProvider
from .sei_activity_provider import SeiActivityProvider
from .sui_activity_provider import SuiActivityProvider

__all__ = [
    "AptosActivityProvider",
    "BaseAPIProvider",
    "ChainActivityProvider",
    "CoinGeckoProvider",
    "DefiLlamaProvider",
    "EtherscanProvider",
    "EvmExplorerProvider",
    "SeiActivityProvider",
    "SuiActivityProvider",
]
