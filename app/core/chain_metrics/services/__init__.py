from .aggregation_engine import ChainMetricsEngine
from .chain_activity import ChainActivityService
from .observer import LoggingThroughputObserver, ThroughputObserver

__all__ = ["ChainActivityService", "ChainMetricsEngine", "LoggingThroughputObserver", "ThroughputObserver"]
