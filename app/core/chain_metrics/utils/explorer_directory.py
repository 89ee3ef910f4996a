# app/core/chain_metrics/utils/explorer_directory.py
from typing import Dict

EXPLORER_URLS: Dict[str, str] = {
    "aptos": "https://explorer.aptoslabs.com",
    "sui": "https://suiscan.xyz/mainnet",
    "sei-network": "https://www.seiscan.app",
    "ethereum": "https://etherscan.io",
    "arbitrum": "https://arbiscan.io",
    "optimism": "https://optimistic.etherscan.io",
    "zksyncera": "https://explorer.zksync.io",
    "base": "https://basescan.org",
}


def normalize_identifier(identifier: str) -> str:
    """'zkSync Era' -> 'zksyncera'"""
    return identifier.lower().replace(" ", "")


def get_explorer_url(identifier: str) -> str:
    """
    Look up the block explorer for a chain or L2 protocol.

    Args:
        identifier: Market-data id (e.g. 'sei-network') or protocol name

    Returns:
        Explorer URL, or an empty string for unknown identifiers
    """
    if not identifier:
        return ""
    return EXPLORER_URLS.get(normalize_identifier(identifier), "")


# chain key (activity endpoints) -> transaction page
TRANSACTION_URL_TEMPLATES: Dict[str, str] = {
    "eth": "https://etherscan.io/tx/{}",
    "arbitrum": "https://arbiscan.io/tx/{}",
    "optimism": "https://optimistic.etherscan.io/tx/{}",
    "base": "https://basescan.org/tx/{}",
    "aptos": "https://explorer.aptoslabs.com/txn/{}",
    "sui": "https://suiscan.xyz/mainnet/tx/{}",
    "sei": "https://www.seiscan.app/sei/tx/{}",
}


def get_transaction_url(chain: str, tx_hash: str) -> str:
    """Explorer page of one transaction, '' if the chain has none"""
    template = TRANSACTION_URL_TEMPLATES.get(normalize_identifier(chain or ""))
    if template is None or not tx_hash:
        return ""
    return template.format(tx_hash)
