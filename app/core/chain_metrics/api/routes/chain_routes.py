"""
Chain metrics routes

- GET /api/chains  - L1 snapshots (market data, gas, TPS)
- GET /api/eth/l2  - TVL of the tracked Ethereum L2s
- GET /api/health
"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from app.core.chain_metrics.api.dependencies import get_engine
from app.core.chain_metrics.api.schemas import ChainSnapshotResponse, ErrorResponse, L2SnapshotResponse
from app.core.chain_metrics.services.aggregation_engine import ChainMetricsEngine
from app.core.chain_metrics.utils.exceptions import UpstreamUnavailable
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)

UPSTREAM_ERROR_DETAIL = "API_REQUEST_FAILED"

router = APIRouter(
    prefix="/api",
    tags=["chains"],
    responses={
        500: {"model": ErrorResponse, "description": "Upstream unavailable"},
    }
)


@router.get("/chains", response_model=List[ChainSnapshotResponse])
async def get_chains(engine: ChainMetricsEngine = Depends(get_engine)):
    """Aktuelle Metriken aller L1-Chains"""
    try:
        snapshots = await engine.get_chain_snapshots()
    except UpstreamUnavailable as e:
        logger.error(f"/api/chains failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=UPSTREAM_ERROR_DETAIL)
    return [snapshot.to_dict() for snapshot in snapshots]


@router.get("/eth/l2", response_model=List[L2SnapshotResponse])
async def get_eth_l2(engine: ChainMetricsEngine = Depends(get_engine)):
    """TVL der Ethereum L2s"""
    try:
        snapshots = await engine.get_l2_snapshots()
    except UpstreamUnavailable as e:
        logger.error(f"/api/eth/l2 failed: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=UPSTREAM_ERROR_DETAIL)
    return [snapshot.to_dict() for snapshot in snapshots]


@router.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "services": {
            "chains": "active",
            "l2": "active",
            "activity": "active"
        }
    }
