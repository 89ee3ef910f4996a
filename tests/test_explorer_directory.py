import pytest

from app.core.chain_metrics.utils.explorer_directory import get_explorer_url, get_transaction_url


@pytest.mark.parametrize(
    "identifier",
    ["aptos", "sui", "sei-network", "ethereum", "arbitrum", "optimism", "zksyncera", "base"],
)
def test_known_identifiers_have_urls(identifier) -> None:
    assert get_explorer_url(identifier).startswith("https://")


@pytest.mark.parametrize("identifier", ["", "solana", "bitcoin", "sei"])
def test_unknown_identifiers_yield_empty_string(identifier) -> None:
    assert get_explorer_url(identifier) == ""


def test_protocol_names_are_normalized() -> None:
    assert get_explorer_url("zkSync Era") == "https://explorer.zksync.io"
    assert get_explorer_url("Arbitrum") == "https://arbiscan.io"
    assert get_explorer_url("ethereum") == "https://etherscan.io"


def test_transaction_urls_per_chain_key() -> None:
    assert get_transaction_url("eth", "0xabc") == "https://etherscan.io/tx/0xabc"
    assert get_transaction_url("optimism", "0xabc") == "https://optimistic.etherscan.io/tx/0xabc"
    assert get_transaction_url("aptos", "0xabc") == "https://explorer.aptoslabs.com/txn/0xabc"
    assert get_transaction_url("sei", "ABC") == "https://www.seiscan.app/sei/tx/ABC"
    assert get_transaction_url("solana", "abc") == ""
    assert get_transaction_url("eth", "") == ""
