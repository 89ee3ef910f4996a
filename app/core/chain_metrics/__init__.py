"""
Chain Metrics Package

Aggregiert Marktdaten, Gaspreise und TPS-Schätzungen mehrerer L1-Chains
sowie TVL-Daten der Ethereum L2s.
"""

from .services import ChainMetricsEngine
from .utils.exceptions import UpstreamUnavailable

__version__ = "0.1.0"

__all__ = [
    "ChainMetricsEngine",
    "UpstreamUnavailable",
]
