# app/core/chain_metrics/services/observer.py
from abc import ABC, abstractmethod
from typing import Optional

from app.core.chain_metrics.data_models.throughput import ThroughputResult
from app.core.chain_metrics.utils.logger import get_logger

logger = get_logger(__name__)


class ThroughputObserver(ABC):
    """
    Receives every estimator outcome of an aggregation cycle.

    The response only shows a missing TPS value; this is where the reason
    for it ends up.
    """

    @abstractmethod
    def on_result(self, result: ThroughputResult) -> None:
        """Called once per estimator run"""


class LoggingThroughputObserver(ThroughputObserver):
    """Default observer: degraded estimators are logged as warnings"""

    def __init__(self, log=None):
        self.log = log or logger

    def on_result(self, result: ThroughputResult) -> None:
        if result.is_ok:
            self.log.debug(f"TPS estimate for {result.chain}: {result.formatted()}")
        else:
            self.log.warning(f"TPS estimate for {result.chain} degraded: {result.reason}")


def default_observer(observer: Optional[ThroughputObserver] = None) -> ThroughputObserver:
    return observer if observer is not None else LoggingThroughputObserver()
