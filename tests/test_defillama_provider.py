import asyncio

import pytest

from app.core.chain_metrics.config.settings import DEFAULT_DEFILLAMA_URL
from app.core.chain_metrics.providers.defillama_provider import DefiLlamaProvider
from app.core.chain_metrics.utils.exceptions import APIException, UpstreamUnavailable

PROTOCOLS_URL = f"{DEFAULT_DEFILLAMA_URL}/protocols"


def _fetch(config):
    return asyncio.run(DefiLlamaProvider(config).get_l2_snapshots())


def test_only_ethereum_entries_of_tracked_l2s_survive(config, upstream) -> None:
    upstream.add_get(PROTOCOLS_URL, [
        {"name": "Arbitrum", "symbol": "ARB", "chain": "Ethereum", "tvl": 1.5e10},
        {"name": "Arbitrum", "symbol": "ARB", "chain": "Avalanche", "tvl": 2.0e6},
        {"name": "Uniswap", "symbol": "UNI", "chain": "Ethereum", "tvl": 5.0e9},
        {"name": "zkSync Era", "symbol": "ZK", "chain": "Ethereum", "tvl": 7.0e8},
    ])

    snapshots = _fetch(config)

    assert [s.to_dict() for s in snapshots] == [
        {"name": "Arbitrum", "symbol": "ARB", "tvl": 1.5e10, "explorer_url": "https://arbiscan.io"},
        {"name": "zkSync Era", "symbol": "ZK", "tvl": 7.0e8, "explorer_url": "https://explorer.zksync.io"},
    ]


def test_untracked_entries_are_not_validated(config, upstream) -> None:
    upstream.add_get(PROTOCOLS_URL, [
        {"name": "Weird", "chain": "Ethereum", "tvl": "n/a"},
        {"name": "Base", "symbol": "-", "chain": "Ethereum", "tvl": 3.0e9},
    ])

    assert [s.name for s in _fetch(config)] == ["Base"]


def test_malformed_tracked_entry_is_fatal(config, upstream) -> None:
    upstream.add_get(PROTOCOLS_URL, [{"name": "Optimism", "chain": "Ethereum", "tvl": 1.0}])

    with pytest.raises(UpstreamUnavailable):
        _fetch(config)


@pytest.mark.parametrize("payload", [{"protocols": []}, APIException("Network error: reset")])
def test_failures_are_fatal(config, upstream, payload) -> None:
    upstream.add_get(PROTOCOLS_URL, payload)

    with pytest.raises(UpstreamUnavailable) as exc_info:
        _fetch(config)
    assert exc_info.value.source == "DefiLlama"
