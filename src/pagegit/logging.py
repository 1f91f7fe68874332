"""Logging configuration for pagegit."""

import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

# Third-party loggers that carry git wire traffic; only opened up at -vvv
WIRE_LOGGERS = ("dulwich", "httpx", "httpcore")


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> None:
    """Configure logging based on verbosity level and optional file output.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2=DEBUG, 3+=DEBUG including
            dulwich and httpx)
        log_file: Optional path to write logs to file
    """
    if verbose == 0 and log_file is None:
        return

    level = logging.DEBUG if verbose >= 2 else logging.INFO
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    handlers: list[logging.Handler] = []
    if verbose > 0:
        handlers.append(logging.StreamHandler(sys.stderr))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    names = ["pagegit"]
    if verbose >= 3:
        names.extend(WIRE_LOGGERS)

    for name in names:
        target = logging.getLogger(name)
        target.setLevel(level)
        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            target.addHandler(handler)

    logger = logging.getLogger("pagegit")
    timestamp = datetime.now(UTC).strftime("%Y-%m-%d %H:%M:%S UTC")
    logger.info("=" * 60)
    logger.info(
        "pagegit starting | %s | level=%s | wire=%s",
        timestamp,
        logging.getLevelName(level),
        "on" if verbose >= 3 else "off",
    )
    logger.info("=" * 60)
