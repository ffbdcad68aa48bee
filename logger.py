"""Centralized logger configuration.

Usage:
    from logger import get_logger
    logger = get_logger(__name__)
"""
import logging
import os

ENV_LOG_LEVEL = "XDG_MIMER_LOG_LEVEL"
DEFAULT_LEVEL = os.getenv(ENV_LOG_LEVEL, "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def resolve_level(level: str) -> int:
    value = getattr(logging, str(level or "").strip().upper(), None)
    if isinstance(value, int):
        return value
    return logging.INFO


def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(resolve_level(level))
        return
    logging.basicConfig(level=resolve_level(level), format=LOG_FORMAT)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
