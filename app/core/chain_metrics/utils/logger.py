# app/core/chain_metrics/utils/logger.py
import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: str = None) -> None:
    """Konfiguriert das Root-Logging einmalig (Stream-Handler auf stdout)"""
    global _configured
    if _configured:
        return

    level_name = (level or os.getenv("CHAIN_METRICS_LOG_LEVEL", "INFO")).upper()
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(getattr(logging, level_name, logging.INFO))
    _configured = True


def get_logger(name: str) -> logging.Logger:
    setup_logging()
    return logging.getLogger(name)
