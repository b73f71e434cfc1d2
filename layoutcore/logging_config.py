"""Loguru sinks for the layout core."""

from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}:{line}</cyan> | {message}"
)


def setup_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
    log_file: Path | None = None,
) -> None:
    """Replace loguru's default sink with ours.

    With `json_format`, every record is written as one JSON object per line.
    `log_file` adds a second sink rotated at 10 MB.
    """
    logger.remove()
    logger.add(sys.stderr, level=level, format=TEXT_FORMAT, serialize=json_format)
    if log_file is not None:
        logger.add(log_file, level=level, format=TEXT_FORMAT, serialize=json_format, rotation="10 MB")
