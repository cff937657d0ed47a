"""Logging setup shared by the scheduler, predictor and simulator processes"""
import logging

from reborn.config import LOG_LEVEL

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: str = LOG_LEVEL) -> None:
    """Configure root logging with the project format"""
    logging.basicConfig(
        format=LOG_FORMAT,
        level=getattr(logging, level.upper(), logging.INFO)
    )
    logging.getLogger(__name__).debug(f"Logging configured at {level.upper()}")
