"""
CoinGecko API provider: batched market quotes for the tracked L1 chains.
"""

from typing import Any, Dict, Iterable, List, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.data_models.snapshots import ChainSnapshot
from app.core.chain_metrics.providers.base_provider import BaseAPIProvider
from app.core.chain_metrics.utils.exceptions import APIException, SchemaMismatch, UpstreamUnavailable
from app.core.chain_metrics.utils.explorer_directory import get_explorer_url
from app.core.chain_metrics.utils.format_utils import parse_optional_float
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)


class CoinGeckoProvider(BaseAPIProvider):
    """CoinGecko API-Anbieter für Preis, Market Cap und 24h-Änderung"""

    def __init__(self, config: ChainMetricsConfig, session: Optional[aiohttp.ClientSession] = None):
        super().__init__("CoinGecko", config.coingecko_base_url, config, session)
        self.api_key = config.coingecko_api_key

    @staticmethod
    def _is_demo_api_key(api_key: str) -> bool:
        """
        Demo/free keys start with 'CG-' and are shorter than pro keys.
        """
        if not api_key:
            return True
        if api_key.startswith("CG-") and len(api_key) <= 34:
            return True
        return "demo" in api_key.lower()

    def _auth_headers(self) -> Dict[str, str]:
        headers = {}
        if self.api_key:
            if self._is_demo_api_key(self.api_key):
                headers['x-cg-api-key'] = self.api_key
            else:
                headers['x-cg-pro-api-key'] = self.api_key
        return headers

    async def get_markets(self, chain_ids: Iterable[str]) -> List[ChainSnapshot]:
        """
        Holt Marktdaten für alle Chains in einem einzigen Request.

        Args:
            chain_ids: CoinGecko ids (e.g. 'aptos', 'sei-network')

        Returns:
            One ChainSnapshot per returned market, in response order

        Raises:
            UpstreamUnavailable: on any network or schema failure
        """
        url = f"{self.base_url}/coins/markets"
        params = {
            'vs_currency': 'usd',
            'ids': ','.join(chain_ids),
        }

        try:
            data = await self._make_request(url, params, self._auth_headers())
            snapshots = self.parse_markets(data)
        except APIException as e:
            logger.error(f"Market snapshot fetch failed: {e}")
            raise UpstreamUnavailable(self.name, str(e))

        logger.info(f"CoinGecko returned {len(snapshots)} markets")
        return snapshots

    @staticmethod
    def parse_markets(data: Any) -> List[ChainSnapshot]:
        if not isinstance(data, list):
            raise SchemaMismatch(f"Expected a list of markets, got {type(data).__name__}", "CoinGecko")

        snapshots = []
        seen = set()
        for market in data:
            if not isinstance(market, dict):
                raise SchemaMismatch(f"Market entry is not an object: {market!r}", "CoinGecko")

            chain_id = market.get('id')
            symbol = market.get('symbol')
            name = market.get('name')
            if not all(isinstance(v, str) for v in (chain_id, symbol, name)):
                raise SchemaMismatch(f"Market entry misses id/symbol/name: {market!r}", "CoinGecko")

            # one snapshot per chain id
            if chain_id in seen:
                logger.warning(f"Duplicate market entry for {chain_id} ignored")
                continue
            seen.add(chain_id)

            snapshots.append(ChainSnapshot(
                name=name,
                symbol=symbol.upper(),
                price_usd=parse_optional_float(market.get('current_price'), 'current_price'),
                market_cap=parse_optional_float(market.get('market_cap'), 'market_cap'),
                price_change_24h=parse_optional_float(
                    market.get('price_change_percentage_24h'), 'price_change_percentage_24h'
                ),
                explorer_url=get_explorer_url(chain_id),
                logo=market.get('image') if isinstance(market.get('image'), str) else None,
            ))
        return snapshots
