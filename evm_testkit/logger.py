"""
Logging for evm-testkit

The package logs through loguru's shared logger. Importing it leaves the
host's handlers alone; ``setup_logger`` only ever adds or removes the
handlers it created itself.
"""

import sys
from typing import Any, Dict, List

from loguru import logger

LOG_FORMAT = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"

_handler_ids: List[int] = []


def setup_logger(config: Dict[str, Any] = None) -> List[int]:
    """
    Add evm-testkit's own log handlers

    Handlers added by an earlier call are replaced.

    Args:
        config: Logging configuration dict with:
            - level: Log level
            - file: Log file path
            - rotation: Log rotation setting
            - retention: Log retention setting

    Returns:
        List[int]: loguru ids of the handlers now installed
    """
    if not config:
        return list(_handler_ids)

    remove_handlers()

    level = config.get("level", "INFO")
    _handler_ids.append(logger.add(sys.stderr, format=LOG_FORMAT, level=level))

    if log_file := config.get("file"):
        _handler_ids.append(
            logger.add(
                log_file,
                format=LOG_FORMAT,
                level=level,
                rotation=config.get("rotation", "50 MB"),
                retention=config.get("retention", "7 days"),
                compression="zip",
            )
        )

    return list(_handler_ids)


def remove_handlers() -> None:
    """Remove the handlers setup_logger added"""
    while _handler_ids:
        handler_id = _handler_ids.pop()
        try:
            logger.remove(handler_id)
        except ValueError:
            # Already removed through logger.remove() by the host
            logger.debug(f"Log handler {handler_id} was already removed")
