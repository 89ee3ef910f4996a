"""
Throughput estimators, one per chain family.
"""

from typing import Dict, Type

from .aptos_estimator import AptosEstimator
from .base_estimator import BaseThroughputEstimator
from .sei_estimator import SeiEstimator
from .sui_estimator import SuiEstimator

# chain display name -> estimator
ESTIMATORS: Dict[str, Type[BaseThroughputEstimator]] = {
    AptosEstimator.chain_name: AptosEstimator,
    SuiEstimator.chain_name: SuiEstimator,
    SeiEstimator.chain_name: SeiEstimator,
}

__all__ = [
    "AptosEstimator",
    "BaseThroughputEstimator",
    "ESTIMATORS",
    "SeiEstimator",
    "SuiEstimator",
]
