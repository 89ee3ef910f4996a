"""
Serverless entry point.

Routes the two read endpoints through the same ChainMetricsEngine the
FastAPI app uses and returns a gateway-style response dict.
"""

import asyncio
import json
from typing import Any, Dict, Optional

from app.core.chain_metrics.api.dependencies import get_engine
from app.core.chain_metrics.services.aggregation_engine import ChainMetricsEngine
from app.core.chain_metrics.utils.exceptions import UpstreamUnavailable
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)

CORS_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


def _response(status_code: int, body: Any) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": dict(CORS_HEADERS),
        "body": json.dumps(body),
    }


async def dispatch(path: str, engine: ChainMetricsEngine) -> Dict[str, Any]:
    path = "/" + path.strip("/")
    try:
        if path == "/api/chains":
            snapshots = await engine.get_chain_snapshots()
        elif path == "/api/eth/l2":
            snapshots = await engine.get_l2_snapshots()
        else:
            return _response(404, {"detail": "Not Found"})
    except UpstreamUnavailable as e:
        logger.error(f"{path} failed: {e}")
        return _response(500, {"detail": "API_REQUEST_FAILED"})

    return _response(200, [snapshot.to_dict() for snapshot in snapshots])


def handler(event: Dict[str, Any], context: Any = None,
            engine: Optional[ChainMetricsEngine] = None) -> Dict[str, Any]:
    """Entry point: event['path'] (or 'rawPath') selects the endpoint"""
    path = event.get("path") or event.get("rawPath") or "/"
    return asyncio.run(dispatch(path, engine or get_engine()))
