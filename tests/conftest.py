from typing import Any, Dict, List, Tuple

import pytest

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.providers.base_provider import BaseAPIProvider
from app.core.chain_metrics.services.observer import ThroughputObserver
from app.core.chain_metrics.utils.exceptions import APIException


class FakeUpstream:
    """
    Stands in for every HTTP endpoint.

    GET routes are keyed by URL plus optional query parameters that must
    match, JSON-RPC routes by (method, first param); a non-scalar first
    param is keyed as None.
    A route value that is an exception instance is raised instead.
    """

    def __init__(self) -> None:
        self.get_routes: List[Tuple[str, Dict[str, Any], Any]] = []
        self.rpc_routes: Dict[Tuple[str, Any], Any] = {}
        self.calls: List[Tuple[str, Any]] = []
        self.get_params: List[Dict[str, Any]] = []

    def add_get(self, url: str, payload: Any, **match: Any) -> None:
        self.get_routes.append((url, match, payload))

    def _find_get(self, url: str, params: Dict[str, Any]) -> Any:
        # later registrations win
        for route_url, match, payload in reversed(self.get_routes):
            if route_url == url and all(str(params.get(k)) == str(v) for k, v in match.items()):
                return payload
        return None

    def add_rpc(self, method: str, param: Any, result: Any) -> None:
        self.rpc_routes[(method, param)] = {"jsonrpc": "2.0", "id": 1, "result": result}

    def add_rpc_raw(self, method: str, param: Any, payload: Any) -> None:
        self.rpc_routes[(method, param)] = payload

    @staticmethod
    def _resolve(payload: Any, key: Any) -> Any:
        if payload is None:
            raise APIException(f"Network error: no route for {key}")
        if isinstance(payload, Exception):
            raise payload
        return payload

    async def get(self, provider, url, params=None, headers=None):
        self.calls.append(("GET", url))
        self.get_params.append(dict(params or {}))
        return self._resolve(self._find_get(url, params or {}), url)

    async def post(self, provider, url, json_data, headers=None):
        params = json_data.get("params") or [None]
        first = params[0] if isinstance(params[0], (str, int, type(None))) else None
        key = (json_data["method"], first)
        self.calls.append(("POST", key))
        return self._resolve(self.rpc_routes.get(key), key)


class FakeSession:
    """Replaces aiohttp.ClientSession for engine cycles"""

    closed = False

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.closed = True


class RecordingObserver(ThroughputObserver):
    def __init__(self) -> None:
        self.results = []

    def on_result(self, result) -> None:
        self.results.append(result)


@pytest.fixture
def config() -> ChainMetricsConfig:
    return ChainMetricsConfig(etherscan_api_key="test-key", request_timeout=1.0)


@pytest.fixture
def upstream(monkeypatch) -> FakeUpstream:
    fake = FakeUpstream()

    async def fake_get(self, url, params=None, headers=None):
        return await fake.get(self, url, params, headers)

    async def fake_post(self, url, json_data, headers=None):
        return await fake.post(self, url, json_data, headers)

    monkeypatch.setattr(BaseAPIProvider, "_make_request", fake_get)
    monkeypatch.setattr(BaseAPIProvider, "_make_post_request", fake_post)
    return fake


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()
