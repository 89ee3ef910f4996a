# app/core/chain_metrics/config/settings.py
import os
from dataclasses import dataclass, field
from typing import Dict

from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_COINGECKO_URL = "https://api.coingecko.com/api/v3"
DEFAULT_ETHERSCAN_URL = "https://api.etherscan.io/api"
DEFAULT_DEFILLAMA_URL = "https://api.llama.fi"
DEFAULT_APTOS_URL = "https://fullnode.mainnet.aptoslabs.com/v1"
DEFAULT_SUI_URL = "https://explorer-rpc.mainnet.sui.io/"
DEFAULT_SEI_URL = "https://rest.sei-apis.com"

# CoinGecko ids of the tracked L1 chains, in request order
TRACKED_CHAIN_IDS = ("aptos", "sui", "sei-network", "ethereum")

# Chain whose snapshot receives the gas oracle value
GAS_PRICED_CHAIN = "Ethereum"

L2_PROTOCOL_NAMES = ("Arbitrum", "Optimism", "zkSync Era", "Base")
L2_PARENT_CHAIN = "Ethereum"

# Etherscan-family APIs for the chain activity endpoints, keyed by chain key
DEFAULT_EVM_EXPLORER_APIS = {
    "eth": "https://api.etherscan.io/api",
    "arbitrum": "https://api.arbiscan.io/api",
    "optimism": "https://api-optimistic.etherscan.io/api",
    "base": "https://api.basescan.org/api",
}

# number of transactions returned by the activity endpoints
ACTIVITY_TX_LIMIT = 10


@dataclass(frozen=True)
class ChainMetricsConfig:
    """
    Immutable configuration handed to every provider and estimator.

    Built once per process; nothing in the engine mutates it.
    """
    etherscan_api_key: str = ""
    coingecko_api_key: str = ""
    request_timeout: float = 10.0

    coingecko_base_url: str = DEFAULT_COINGECKO_URL
    etherscan_base_url: str = DEFAULT_ETHERSCAN_URL
    defillama_base_url: str = DEFAULT_DEFILLAMA_URL
    aptos_rpc_url: str = DEFAULT_APTOS_URL
    sui_rpc_url: str = DEFAULT_SUI_URL
    sei_rest_url: str = DEFAULT_SEI_URL

    tracked_chain_ids: tuple = TRACKED_CHAIN_IDS
    evm_explorer_apis: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_EVM_EXPLORER_APIS))

    @classmethod
    def from_env(cls) -> "ChainMetricsConfig":
        etherscan_api_key = os.getenv("ETHERSCAN_API_KEY", "")
        if not etherscan_api_key:
            logger.warning("ETHERSCAN_API_KEY not set, gas oracle requests will be rejected upstream")

        timeout_raw = os.getenv("CHAIN_METRICS_REQUEST_TIMEOUT", "10")
        try:
            request_timeout = float(timeout_raw)
        except ValueError:
            logger.warning(f"Invalid CHAIN_METRICS_REQUEST_TIMEOUT={timeout_raw!r}, falling back to 10s")
            request_timeout = 10.0

        config = cls(
            etherscan_api_key=etherscan_api_key,
            coingecko_api_key=os.getenv("COINGECKO_API_KEY", ""),
            request_timeout=request_timeout,
            coingecko_base_url=os.getenv("COINGECKO_BASE_URL", DEFAULT_COINGECKO_URL),
            etherscan_base_url=os.getenv("ETHERSCAN_BASE_URL", DEFAULT_ETHERSCAN_URL),
            defillama_base_url=os.getenv("DEFILLAMA_BASE_URL", DEFAULT_DEFILLAMA_URL),
            aptos_rpc_url=os.getenv("APTOS_RPC_URL", DEFAULT_APTOS_URL),
            sui_rpc_url=os.getenv("SUI_RPC_URL", DEFAULT_SUI_URL),
            sei_rest_url=os.getenv("SEI_REST_URL", DEFAULT_SEI_URL),
        )

        logger.info(
            f"Chain metrics configuration: timeout={config.request_timeout}s, "
            f"chains={','.join(config.tracked_chain_ids)}, "
            f"coingecko_key={'yes' if config.coingecko_api_key else 'no'}"
        )
        return config
