"""Loguru setup shared by the bot and the report CLI.

Nothing is logged to stdout: ``scripts/holder_report.py`` prints the report
there, so both console modes write to stderr. The file sink keeps DEBUG
records, which is where per-account decode skips and the individual lookup
failures behind a False flag end up.
"""

import os
import sys

from loguru import logger

LOG_FILE = "logs/holder_radar_{time:YYYY-MM-DD}.log"

_CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - "
    "<level>{message}</level>"
)


def setup_logger(
    *, json_logs: bool = False, level: str = "INFO", log_file: str | None = LOG_FILE
) -> None:
    """Replace loguru's default handler with a stderr sink and a daily DEBUG file.

    ``LOG_LEVEL`` in the environment overrides ``level`` for the console only.
    Pass ``log_file=None`` to skip the file sink.
    """
    console_level = os.getenv("LOG_LEVEL", level).upper()
    logger.remove()

    if json_logs:
        logger.add(sys.stderr, serialize=True, level=console_level)
    else:
        logger.add(sys.stderr, format=_CONSOLE_FORMAT, level=console_level, colorize=True)

    if log_file:
        logger.add(
            log_file,
            rotation="20 MB",
            retention="7 days",
            compression="gz",
            level="DEBUG",
            serialize=json_logs,
        )
