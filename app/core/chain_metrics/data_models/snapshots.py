# app/core/chain_metrics/data_models/snapshots.py
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ChainSnapshot:
    """
    Metrics of one tracked L1 chain for a single aggregation cycle.

    Created by the market snapshot fetcher; gas_fees and tps are filled in
    by the engine afterwards. tvl stays unset for L1 chains.
    """
    name: str
    symbol: str
    explorer_url: str
    price_usd: Optional[float] = None
    market_cap: Optional[float] = None
    price_change_24h: Optional[float] = None
    gas_fees: Optional[str] = None
    tps: Optional[str] = None
    tvl: Optional[float] = None
    logo: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization"""
        return {
            'name': self.name,
            'symbol': self.symbol,
            'price_usd': self.price_usd,
            'market_cap': self.market_cap,
            'price_change_24h': self.price_change_24h,
            'gas_fees': self.gas_fees,
            'tps': self.tps,
            'tvl': self.tvl,
            'explorer_url': self.explorer_url,
            'logo': self.logo,
        }


@dataclass
class L2Snapshot:
    """TVL of one tracked Ethereum L2 protocol"""
    name: str
    symbol: str
    tvl: Optional[float]
    explorer_url: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'symbol': self.symbol,
            'tvl': self.tvl,
            'explorer_url': self.explorer_url,
        }
