"""
DefiLlama protocol directory provider, filtered down to the tracked Ethereum L2s.
"""

from typing import Any, List, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig, L2_PARENT_CHAIN, L2_PROTOCOL_NAMES
from app.core.chain_metrics.data_models.snapshots import L2Snapshot
from app.core.chain_metrics.providers.base_provider import BaseAPIProvider
from app.core.chain_metrics.utils.exceptions import APIException, SchemaMismatch, UpstreamUnavailable
from app.core.chain_metrics.utils.explorer_directory import get_explorer_url
from app.core.chain_metrics.utils.format_utils import parse_optional_float
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)


class DefiLlamaProvider(BaseAPIProvider):
    """DefiLlama-Anbieter für TVL-Daten"""

    def __init__(self, config: ChainMetricsConfig, session: Optional[aiohttp.ClientSession] = None):
        super().__init__("DefiLlama", config.defillama_base_url, config, session)

    async def get_l2_snapshots(self) -> List[L2Snapshot]:
        """
        Holt die komplette Protokoll-Liste und filtert die L2s heraus.

        Raises:
            UpstreamUnavailable: on any network or schema failure
        """
        url = f"{self.base_url}/protocols"
        try:
            data = await self._make_request(url)
            snapshots = self.parse_protocols(data)
        except APIException as e:
            logger.error(f"Protocol directory fetch failed: {e}")
            raise UpstreamUnavailable(self.name, str(e))

        logger.info(f"DefiLlama: {len(snapshots)} tracked L2 protocols found")
        return snapshots

    @staticmethod
    def parse_protocols(data: Any) -> List[L2Snapshot]:
        if not isinstance(data, list):
            raise SchemaMismatch(f"Expected a list of protocols, got {type(data).__name__}", "DefiLlama")

        snapshots = []
        for protocol in data:
            if not isinstance(protocol, dict):
                continue
            name = protocol.get('name')
            if name not in L2_PROTOCOL_NAMES or protocol.get('chain') != L2_PARENT_CHAIN:
                continue

            symbol = protocol.get('symbol')
            if not isinstance(symbol, str):
                raise SchemaMismatch(f"Protocol {name} has no symbol: {symbol!r}", "DefiLlama")

            snapshots.append(L2Snapshot(
                name=name,
                symbol=symbol,
                tvl=parse_optional_float(protocol.get('tvl'), 'tvl'),
                explorer_url=get_explorer_url(name),
            ))
        return snapshots
