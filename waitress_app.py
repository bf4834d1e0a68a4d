"""
Filename: waitress_app.py
Description: This script sets up and runs a Waitress WSGI server
to serve the client metadata Flask application.
"""

import logging
import os
import sys

from waitress import serve

from logging_setup import configure_logging
from main_app import create_app

app = create_app()

# Waitress gets its own log file; its logger does not propagate to root.
logger = configure_logging(
    app.config["LOG_DIR"],
    "waitress_app.log",
    level=app.config["LOG_LEVEL"],
    tz_name=app.config["LOG_TIMEZONE"],
    logger_name="waitress",
)

logger.info("=== Waitress app logging configured with daily rotation ===")
logger.info(f"Current working directory: {os.getcwd()}")
logger.info(f"GeoIP DB: {app.config.get('GEOIP_DB_PATH') or '(disabled)'}")


def main():
    host = app.config["SERVER_HOST"]
    port = app.config["SERVER_PORT"]
    threads = app.config["SERVER_THREADS"]

    logger.info(f"Starting Waitress server on {host}:{port} ({threads} threads)")

    try:
        serve(
            app,
            host=host,
            port=port,
            threads=threads,
            connection_limit=1000,
        )
    except Exception:
        logger.exception("Failed to start Waitress")
        sys.exit(1)


if __name__ == "__main__":
    logger.info("Running as main script")
    main()
else:
    logging.info("Module imported by IIS")
