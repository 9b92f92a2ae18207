# storefront/config/logging_config.py

"""Per-run log files for the storefront.

Every launch gets ``logs/run_<timestamp>.log`` at DEBUG. Only the most
recent ``Settings.LOG_RETENTION`` run logs are kept. Records at or above
``Settings.CONSOLE_LOG_LEVEL`` are echoed to stderr, which stays quiet by
default so neither the TUI nor ``--list`` JSON output is disturbed.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from storefront.config.settings import Settings

_FILE_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(funcName)s:%(lineno)d | %(message)s"
)
_STDERR_FORMAT = "%(levelname)s %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_RUN_GLOB = "run_*.log"


def _prune_run_logs(logs_dir: Path, keep: int) -> None:
    """Delete all but the *keep* newest run logs."""
    runs = sorted(logs_dir.glob(_RUN_GLOB))
    for stale in runs[: max(len(runs) - keep, 0)]:
        stale.unlink(missing_ok=True)


def _active_log_file(logger: logging.Logger) -> Path | None:
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging() -> Path:
    """Attach the run-log and stderr handlers to the ``storefront`` logger.

    Calling it again keeps the existing handlers and returns the log
    file that is already in use.
    """
    storefront_logger = logging.getLogger("storefront")
    storefront_logger.setLevel(logging.DEBUG)

    active = _active_log_file(storefront_logger)
    if active is not None:
        return active

    logs_dir: Path = Settings.LOGS_DIR
    logs_dir.mkdir(parents=True, exist_ok=True)
    _prune_run_logs(logs_dir, max(Settings.LOG_RETENTION - 1, 0))

    log_file = logs_dir / f"run_{datetime.now():%Y%m%d_%H%M%S}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_FILE_FORMAT, datefmt=_DATE_FORMAT)
    )

    stderr_handler = logging.StreamHandler(sys.stderr)
    level = logging.getLevelName(Settings.CONSOLE_LOG_LEVEL)
    stderr_handler.setLevel(level if isinstance(level, int) else logging.WARNING)
    stderr_handler.setFormatter(logging.Formatter(_STDERR_FORMAT))

    storefront_logger.addHandler(file_handler)
    storefront_logger.addHandler(stderr_handler)
    storefront_logger.info("Run log: %s", log_file)
    return log_file
