"""
FastAPI dependencies for the chain metrics routes.
"""

from typing import Optional

from app.core.chain_metrics.config.settings import ChainMetricsConfig
from app.core.chain_metrics.services.aggregation_engine import ChainMetricsEngine
from app.core.chain_metrics.services.chain_activity import ChainActivityService
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)

_engine_instance: Optional[ChainMetricsEngine] = None
_activity_service_instance: Optional[ChainActivityService] = None


def get_engine() -> ChainMetricsEngine:
    """Dependency for the shared ChainMetricsEngine (config is read once)"""
    global _engine_instance

    if _engine_instance is None:
        logger.info("Creating ChainMetricsEngine")
        _engine_instance = ChainMetricsEngine(ChainMetricsConfig.from_env())
    return _engine_instance


def get_activity_service() -> ChainActivityService:
    """Dependency for the per-chain activity lookups; shares the engine's config"""
    global _activity_service_instance

    if _activity_service_instance is None:
        _activity_service_instance = ChainActivityService(get_engine().config)
    return _activity_service_instance
