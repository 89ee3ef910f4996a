"""
Etherscan gas oracle provider.
"""

from typing import Any, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.providers.base_provider import BaseAPIProvider
from app.core.chain_metrics.utils.exceptions import APIException, SchemaMismatch, UpstreamUnavailable
from app.core.chain_metrics.utils.format_utils import format_gas_price
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)


class EtherscanProvider(BaseAPIProvider):
    """Etherscan Gas-Oracle (nur Ethereum Mainnet)"""

    def __init__(self, config: ChainMetricsConfig, session: Optional[aiohttp.ClientSession] = None):
        super().__init__("Etherscan", config.etherscan_base_url, config, session)
        self.api_key = config.etherscan_api_key

    async def get_safe_gas_price(self) -> str:
        """
        Holt den 'safe' Gaspreis und formatiert ihn ('12 Gwei').

        Raises:
            UpstreamUnavailable: on any network or schema failure
        """
        params = {
            'module': 'gastracker',
            'action': 'gasoracle',
            'apikey': self.api_key,
        }

        try:
            data = await self._make_request(self.base_url, params)
            safe_gas_price = self.parse_safe_gas_price(data)
        except APIException as e:
            logger.error(f"Gas oracle fetch failed: {e}")
            raise UpstreamUnavailable(self.name, str(e))

        return format_gas_price(safe_gas_price)

    @staticmethod
    def parse_safe_gas_price(data: Any) -> str:
        result = data.get('result') if isinstance(data, dict) else None
        # Etherscan reports errors as a plain string in 'result'
        if not isinstance(result, dict):
            raise SchemaMismatch(f"Unexpected gas oracle result: {result!r}", "Etherscan")

        safe_gas_price = result.get('SafeGasPrice')
        if not isinstance(safe_gas_price, str) or not safe_gas_price:
            raise SchemaMismatch(f"SafeGasPrice missing or not a string: {safe_gas_price!r}", "Etherscan")
        return safe_gas_price
