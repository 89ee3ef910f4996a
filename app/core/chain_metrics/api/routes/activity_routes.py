"""
Chain activity routes

- GET /api/chains/{chain}/stats                 - latest block, gas price (EVM)
- GET /api/chains/{chain}/transactions          - latest transactions
- GET /api/chains/{chain}/wallets/{address}     - balance + history (EVM)

chain is a chain key: eth, arbitrum, optimism, base, aptos, sui, sei
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.core.chain_metrics.api.dependencies import get_activity_service
from app.core.chain_metrics.api.routes.chain_routes import UPSTREAM_ERROR_DETAIL
from app.core.chain_metrics.api.schemas import (
    ChainStatsResponse,
    ErrorResponse,
    TransactionResponse,
    WalletInfoResponse,
)
from app.core.chain_metrics.config.settings import ACTIVITY_TX_LIMIT
from app.core.chain_metrics.services.chain_activity import ChainActivityService
from app.core.chain_metrics.utils.exceptions import InvalidAddress, UnsupportedChain, UpstreamUnavailable
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)

UNSUPPORTED_CHAIN_DETAIL = "UNSUPPORTED_CHAIN"
INVALID_ADDRESS_DETAIL = "INVALID_ADDRESS"

router = APIRouter(
    prefix="/api/chains",
    tags=["activity"],
    responses={
        404: {"model": ErrorResponse, "description": "Unknown chain key"},
        500: {"model": ErrorResponse, "description": "Upstream unavailable"},
    }
)


async def _run(path: str, request):
    try:
        return await request
    except UnsupportedChain:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=UNSUPPORTED_CHAIN_DETAIL)
    except InvalidAddress as e:
        logger.info(f"{path}: {e}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_ADDRESS_DETAIL)
    except UpstreamUnavailable as e:
        logger.error(f"{path} failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=UPSTREAM_ERROR_DETAIL)


@router.get("/{chain}/stats", response_model=ChainStatsResponse)
async def get_chain_stats(chain: str, service: ChainActivityService = Depends(get_activity_service)):
    """Letzter Block und Gaspreis einer Chain"""
    stats = await _run(f"/api/chains/{chain}/stats", service.get_chain_stats(chain))
    return stats.to_dict()


@router.get("/{chain}/transactions", response_model=List[TransactionResponse])
async def get_latest_transactions(
    chain: str,
    limit: int = Query(ACTIVITY_TX_LIMIT, ge=1, le=100),
    service: ChainActivityService = Depends(get_activity_service),
):
    """Neueste Transaktionen einer Chain"""
    transactions = await _run(
        f"/api/chains/{chain}/transactions", service.get_latest_transactions(chain, limit)
    )
    return [tx.to_dict() for tx in transactions]


@router.get("/{chain}/wallets/{address}", response_model=WalletInfoResponse)
async def get_wallet_info(
    chain: str,
    address: str,
    limit: int = Query(ACTIVITY_TX_LIMIT, ge=1, le=100),
    service: ChainActivityService = Depends(get_activity_service),
):
    """Guthaben und letzte Transaktionen einer Wallet"""
    wallet = await _run(f"/api/chains/{chain}/wallets", service.get_wallet_info(chain, address, limit))
    return wallet.to_dict()
