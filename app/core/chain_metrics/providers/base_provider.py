"""
Base provider class for all upstream API providers.
"""

import asyncio
from abc import ABC
from typing import Any, Dict, Optional

import aiohttp

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.utils.exceptions import APIException
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)


class BaseAPIProvider(ABC):
    """Basisklasse für alle API-Anbieter"""

    def __init__(self, name: str, base_url: str, config: ChainMetricsConfig,
                 session: Optional[aiohttp.ClientSession] = None):
        self.name = name
        self.base_url = base_url.rstrip("/")
        self.config = config
        self.session = session
        self._owns_session = False
        self.timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    async def __aenter__(self):
        if self.session is None:
            self.session = aiohttp.ClientSession()
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Schließt die Session, falls sie von diesem Provider geöffnet wurde"""
        if self._owns_session and self.session:
            await self.session.close()
            self.session = None
            self._owns_session = False

    def _require_session(self) -> aiohttp.ClientSession:
        if self.session is None:
            raise APIException("No client session, use the provider as an async context manager", self.name)
        return self.session

    async def _make_request(self, url: str, params: Optional[Dict[str, Any]] = None,
                            headers: Optional[Dict[str, str]] = None) -> Any:
        """Interne Methode für GET-Anfragen mit Timeout"""
        session = self._require_session()
        try:
            async with session.get(url, params=params, headers=headers, timeout=self.timeout) as response:
                response.raise_for_status()
                return await response.json(content_type=None)
        except asyncio.TimeoutError:
            logger.error(f"Timeout after {self.config.request_timeout}s for {self.name}: {url}")
            raise APIException(f"Timeout after {self.config.request_timeout}s", self.name)
        except aiohttp.ClientError as e:
            logger.error(f"Network error for {self.name}: {e}")
            raise APIException(f"Network error: {str(e)}", self.name)
        except ValueError as e:
            logger.error(f"Invalid JSON from {self.name}: {e}")
            raise APIException(f"Invalid JSON: {str(e)}", self.name)

    async def _make_post_request(self, url: str, json_data: Dict[str, Any],
                                 headers: Optional[Dict[str, str]] = None) -> Any:
        """Interne Methode für POST-Anfragen mit Timeout"""
        session = self._require_session()
        try:
            async with session.post(url, json=json_data, headers=headers, timeout=self.timeout) as response:
                response.raise_for_status()
                return await response.json(content_type=None)
        except asyncio.TimeoutError:
            logger.error(f"Timeout after {self.config.request_timeout}s for {self.name}: {url}")
            raise APIException(f"Timeout after {self.config.request_timeout}s", self.name)
        except aiohttp.ClientError as e:
            logger.error(f"Network error for {self.name}: {e}")
            raise APIException(f"Network error: {str(e)}", self.name)
        except ValueError as e:
            logger.error(f"Invalid JSON from {self.name}: {e}")
            raise APIException(f"Invalid JSON: {str(e)}", self.name)
