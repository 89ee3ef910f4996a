"""
Chain Metrics API Schemas
=========================

Pydantic response models for the chain and L2 endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class ChainSnapshotResponse(BaseModel):
    """Metrics of one L1 chain"""
    name: str
    symbol: str = Field(..., description="Ticker symbol, upper case")
    price_usd: Optional[float] = None
    market_cap: Optional[float] = None
    price_change_24h: Optional[float] = Field(None, description="24h price change in percent")
    gas_fees: Optional[str] = Field(None, description="Safe gas price, e.g. '12 Gwei'")
    tps: Optional[str] = Field(None, description="Estimated transactions per second, two decimals")
    tvl: Optional[float] = None
    explorer_url: str = ""
    logo: Optional[str] = Field(None, description="Coin image URL")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Ethereum",
                "symbol": "ETH",
                "price_usd": 3000.0,
                "market_cap": 3.6e11,
                "price_change_24h": -1.5,
                "gas_fees": "12 Gwei",
                "tps": None,
                "tvl": None,
                "explorer_url": "https://etherscan.io",
                "logo": "https://coin-images.coingecko.com/coins/images/279/large/ethereum.png"
            }
        }


class L2SnapshotResponse(BaseModel):
    """TVL of one Ethereum L2"""
    name: str
    symbol: str
    tvl: Optional[float] = None
    explorer_url: str = ""


class ChainStatsResponse(BaseModel):
    """Tip of one chain"""
    chain: str
    latest_block: int
    gas_price: Optional[str] = Field(None, description="Current gas price, EVM chains only")
    latest_block_tx_count: Optional[int] = None

    class Config:
        json_schema_extra = {
            "example": {
                "chain": "eth",
                "latest_block": 19876543,
                "gas_price": "12.5 Gwei",
                "latest_block_tx_count": 152
            }
        }


class TransactionResponse(BaseModel):
    """One transaction; unknown parties and values are '-'"""
    hash: str
    from_: str = Field("-", alias="from")
    to: str = "-"
    value: str = Field("-", description="Native amount in the smallest unit")
    explorer_url: str = ""


class WalletInfoResponse(BaseModel):
    chain: str
    address: str
    balance: str = Field(..., description="Native balance in the smallest unit (Wei)")
    transactions: List[TransactionResponse] = []


class ErrorResponse(BaseModel):
    detail: str = "API_REQUEST_FAILED"
