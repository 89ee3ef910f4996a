import asyncio

import pytest

from app.core.chain_metrics.config.settings import DEFAULT_COINGECKO_URL
from app.core.chain_metrics.providers.coingecko_provider import CoinGeckoProvider
from app.core.chain_metrics.utils.exceptions import APIException, UpstreamUnavailable

MARKETS_URL = f"{DEFAULT_COINGECKO_URL}/coins/markets"


def _fetch(config, ids=("aptos", "sui", "sei-network", "ethereum")):
    return asyncio.run(CoinGeckoProvider(config).get_markets(ids))


def test_symbols_are_upper_cased_and_order_kept(config, upstream) -> None:
    upstream.add_get(MARKETS_URL, [
        {"id": "sui", "symbol": "sui", "name": "Sui", "current_price": 1.2,
         "market_cap": 3.0e9, "price_change_percentage_24h": 2.5},
        {"id": "aptos", "symbol": "apt", "name": "Aptos", "current_price": 8.0,
         "market_cap": 4.0e9, "price_change_percentage_24h": -0.3},
        {"id": "sei-network", "symbol": "Sei", "name": "Sei", "current_price": 0.4,
         "market_cap": 1.0e9, "price_change_percentage_24h": 0.0},
    ])

    snapshots = _fetch(config)

    assert [s.name for s in snapshots] == ["Sui", "Aptos", "Sei"]
    assert [s.symbol for s in snapshots] == ["SUI", "APT", "SEI"]
    assert snapshots[2].explorer_url == "https://www.seiscan.app"
    assert all(s.gas_fees is None and s.tps is None and s.tvl is None for s in snapshots)


def test_numeric_fields_are_independently_optional(config, upstream) -> None:
    upstream.add_get(MARKETS_URL, [
        {"id": "aptos", "symbol": "apt", "name": "Aptos", "current_price": None,
         "market_cap": 4.0e9},
    ])

    snapshot = _fetch(config)[0]

    assert snapshot.price_usd is None
    assert snapshot.market_cap == 4.0e9
    assert snapshot.price_change_24h is None


def test_unknown_chain_gets_empty_explorer_url(config, upstream) -> None:
    upstream.add_get(MARKETS_URL, [{"id": "dogecoin", "symbol": "doge", "name": "Dogecoin"}])

    assert _fetch(config, ["dogecoin"])[0].explorer_url == ""


def test_duplicate_ids_keep_first_entry(config, upstream) -> None:
    upstream.add_get(MARKETS_URL, [
        {"id": "sui", "symbol": "sui", "name": "Sui", "current_price": 1.0},
        {"id": "sui", "symbol": "sui", "name": "Sui", "current_price": 2.0},
    ])

    snapshots = _fetch(config)

    assert len(snapshots) == 1
    assert snapshots[0].price_usd == 1.0


@pytest.mark.parametrize("payload", [
    {"error": "rate limited"},
    [{"id": "sui", "name": "Sui"}],
    [{"id": "sui", "symbol": "sui", "name": "Sui", "current_price": "1.2"}],
    ["sui"],
])
def test_schema_mismatch_is_fatal(config, upstream, payload) -> None:
    upstream.add_get(MARKETS_URL, payload)

    with pytest.raises(UpstreamUnavailable) as exc_info:
        _fetch(config)
    assert exc_info.value.source == "CoinGecko"


def test_network_failure_is_fatal(config, upstream) -> None:
    upstream.add_get(MARKETS_URL, APIException("Timeout after 1.0s", "CoinGecko"))

    with pytest.raises(UpstreamUnavailable):
        _fetch(config)


def test_api_key_header_matches_key_type(config) -> None:
    demo = CoinGeckoProvider(config.__class__(coingecko_api_key="CG-abc"))
    pro = CoinGeckoProvider(config.__class__(coingecko_api_key="x" * 40))

    assert demo._auth_headers() == {"x-cg-api-key": "CG-abc"}
    assert pro._auth_headers() == {"x-cg-pro-api-key": "x" * 40}
    assert CoinGeckoProvider(config)._auth_headers() == {}


def test_logo_comes_from_the_coin_image(config, upstream) -> None:
    upstream.add_get(MARKETS_URL, [
        {"id": "sui", "symbol": "sui", "name": "Sui",
         "image": "https://coin-images.coingecko.com/coins/images/26375/large/sui.png"},
        {"id": "aptos", "symbol": "apt", "name": "Aptos"},
    ])

    sui, aptos = _fetch(config)

    assert sui.logo == "https://coin-images.coingecko.com/coins/images/26375/large/sui.png"
    assert sui.to_dict()["logo"] == sui.logo
    assert aptos.logo is None
