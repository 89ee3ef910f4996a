import pytest
from fastapi.testclient import TestClient

from app.core.chain_metrics.api.dependencies import get_activity_service
from app.core.chain_metrics.data_models.activity import ChainStats, TransactionSummary, WalletInfo
from app.core.chain_metrics.utils.exceptions import InvalidAddress, UnsupportedChain, UpstreamUnavailable
from app.main import app


class FakeActivityService:
    def __init__(self, error: Exception = None) -> None:
        self.error = error
        self.calls = []

    def _check(self, chain):
        if self.error is not None:
            raise self.error
        if chain == "dogecoin":
            raise UnsupportedChain(chain)

    async def get_chain_stats(self, chain):
        self.calls.append(("stats", chain))
        self._check(chain)
        return ChainStats(chain=chain, latest_block=1234567, gas_price="12.5 Gwei", latest_block_tx_count=3)

    async def get_latest_transactions(self, chain, limit=10):
        self.calls.append(("transactions", chain, limit))
        self._check(chain)
        return [TransactionSummary(hash="0xaa", sender="0x11", explorer_url="https://etherscan.io/tx/0xaa")]

    async def get_wallet_info(self, chain, address, limit=10):
        self.calls.append(("wallet", chain, address, limit))
        self._check(chain)
        if not address.startswith("0x"):
            raise InvalidAddress(address)
        return WalletInfo(chain=chain, address=address, balance="1000",
                          transactions=[TransactionSummary(hash="0xbb", value="5")])


@pytest.fixture
def client_factory():
    def build(service):
        app.dependency_overrides[get_activity_service] = lambda: service
        return TestClient(app)

    yield build
    app.dependency_overrides.clear()


def test_chain_stats_route(client_factory) -> None:
    response = client_factory(FakeActivityService()).get("/api/chains/eth/stats")

    assert response.status_code == 200
    assert response.json() == {
        "chain": "eth",
        "latest_block": 1234567,
        "gas_price": "12.5 Gwei",
        "latest_block_tx_count": 3,
    }


def test_transactions_route_uses_from_and_to_keys(client_factory) -> None:
    service = FakeActivityService()

    response = client_factory(service).get("/api/chains/eth/transactions", params={"limit": 5})

    assert response.status_code == 200
    assert response.json() == [{
        "hash": "0xaa", "from": "0x11", "to": "-", "value": "-",
        "explorer_url": "https://etherscan.io/tx/0xaa",
    }]
    assert service.calls == [("transactions", "eth", 5)]


def test_transactions_limit_is_bounded(client_factory) -> None:
    response = client_factory(FakeActivityService()).get("/api/chains/eth/transactions", params={"limit": 0})

    assert response.status_code == 422


def test_wallet_route(client_factory) -> None:
    response = client_factory(FakeActivityService()).get("/api/chains/eth/wallets/0xabc")

    assert response.status_code == 200
    body = response.json()
    assert body["balance"] == "1000"
    assert body["transactions"][0]["value"] == "5"


def test_bad_wallet_address_is_a_client_error(client_factory) -> None:
    response = client_factory(FakeActivityService()).get("/api/chains/eth/wallets/abc")

    assert response.status_code == 400
    assert response.json() == {"detail": "INVALID_ADDRESS"}


def test_unknown_chain_is_not_found(client_factory) -> None:
    response = client_factory(FakeActivityService()).get("/api/chains/dogecoin/stats")

    assert response.status_code == 404
    assert response.json() == {"detail": "UNSUPPORTED_CHAIN"}


@pytest.mark.parametrize("path", [
    "/api/chains/eth/stats",
    "/api/chains/sui/transactions",
    "/api/chains/base/wallets/0xabc",
])
def test_upstream_failure_is_the_generic_error(client_factory, path) -> None:
    service = FakeActivityService(error=UpstreamUnavailable("Explorer-eth", "Timeout after 1.0s"))

    response = client_factory(service).get(path)

    assert response.status_code == 500
    assert response.json() == {"detail": "API_REQUEST_FAILED"}
