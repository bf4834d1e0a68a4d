"""
Rotating file logging shared by main_app and waitress_app.

Logs go to <LOG_DIR>/<filename>, rotated at midnight, 14 days kept.
Rotated files keep a .log extension: main_app.log.2025-10-12.log
"""
import logging
import logging.handlers
import os
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def get_timezone(name):
    """ZoneInfo for `name`, or UTC if the zone (or tzdata) is missing."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logging.warning(f"Time zone {name!r} not available, logging in UTC. Install tzdata for named zones.")
        return timezone.utc


class ZoneFormatter(logging.Formatter):
    """Formatter that stamps records in a fixed time zone instead of server local time."""

    def __init__(self, fmt=None, datefmt=None, tz=timezone.utc):
        super().__init__(fmt, datefmt)
        self.tz = tz

    def formatTime(self, record, datefmt=None):
        dt = datetime.fromtimestamp(record.created, self.tz)
        if datefmt:
            return dt.strftime(datefmt)
        return dt.strftime("%Y-%m-%d %H:%M:%S %Z")


def configure_logging(log_dir, filename, level="INFO", tz_name="UTC", logger_name=None):
    """
    Attach a TimedRotatingFileHandler to the root logger (or `logger_name`).

    Existing handlers on that logger are removed to avoid duplicates when the
    app factory runs more than once. Returns the configured logger.
    """
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, filename)

    handler = logging.handlers.TimedRotatingFileHandler(
        log_file, when="midnight", interval=1, backupCount=14, encoding="utf-8"
    )
    handler.suffix = "%Y-%m-%d.log"
    handler.setFormatter(ZoneFormatter("%(asctime)s %(levelname)s %(message)s", tz=get_timezone(tz_name)))

    logger = logging.getLogger(logger_name)
    logger.setLevel(level)
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()
    logger.addHandler(handler)
    if logger_name:
        logger.propagate = False
    return logger
