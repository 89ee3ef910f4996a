# app/core/chain_metrics/data_models/activity.py
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

NOT_AVAILABLE = "-"


@dataclass
class ChainStats:
    """
    Tip of one chain as seen by its explorer API.

    gas_price and latest_block_tx_count are only known for EVM chains.
    """
    chain: str
    latest_block: int
    gas_price: Optional[str] = None
    latest_block_tx_count: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'chain': self.chain,
            'latest_block': self.latest_block,
            'gas_price': self.gas_price,
            'latest_block_tx_count': self.latest_block_tx_count,
        }


@dataclass
class TransactionSummary:
    """One row of a transaction list; unknown parties/values are '-'"""
    hash: str
    sender: str = NOT_AVAILABLE
    receiver: str = NOT_AVAILABLE
    value: str = NOT_AVAILABLE
    explorer_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'hash': self.hash,
            'from': self.sender,
            'to': self.receiver,
            'value': self.value,
            'explorer_url': self.explorer_url,
        }


@dataclass
class WalletInfo:
    """Native balance (smallest unit, as a decimal string) and recent transactions"""
    chain: str
    address: str
    balance: str
    transactions: List[TransactionSummary] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'chain': self.chain,
            'address': self.address,
            'balance': self.balance,
            'transactions': [tx.to_dict() for tx in self.transactions],
        }
