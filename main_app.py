#!/usr/bin/env python3
"""
Flask application that reports client metadata for each request and records
login events.

 - GET  /whoami               -> IP, browser, platform, country, language, UTC offset
 - POST /api/login-tracking   -> same metadata, also written to the logintracking table
 - GET  /health               -> liveness check

Country lookup uses the CDN's CF-IPCountry header when present and falls back
to a local MaxMind GeoLite2 database (GEOIP_DB_PATH) otherwise.
"""

import atexit
import logging
import os

from flask import Flask

from clientmeta import clientmeta_bp
from clientmeta.errors import ResourceUnavailable
from clientmeta.geoip import CountryResolver
from clientmeta.helpers import parse_networks
from clientmeta.routes import EXTENSION_KEY
from config import load_config
from database import database_reachable, db
from logging_setup import configure_logging


def open_resolver(app):
    """
    Open the GeoIP database configured in GEOIP_DB_PATH.

    - No path configured: run without GeoIP (CDN header only).
    - Path configured but unusable: raise if GEOIP_REQUIRED, else log and
      run without GeoIP.
    """
    path = app.config.get("GEOIP_DB_PATH")
    if not path:
        logging.warning("GEOIP_DB_PATH not set. Local GeoIP lookup disabled.")
        return CountryResolver.disabled()
    try:
        resolver = CountryResolver.open(path)
    except ResourceUnavailable:
        if app.config.get("GEOIP_REQUIRED"):
            logging.exception("GeoIP database required but could not be opened")
            raise
        logging.exception("Failed to open GeoIP database. Local lookup disabled.")
        return CountryResolver.disabled()
    atexit.register(resolver.close)
    return resolver


def create_app(overrides=None):
    app = Flask(__name__)

    # ---------------------------------------------------------------------------
    # CONFIGURATION
    # ---------------------------------------------------------------------------
    os.makedirs(app.instance_path, exist_ok=True)
    app.config.update(load_config(app.instance_path))
    if overrides:
        app.config.update(overrides)

    # ---------------------------------------------------------------------------
    # LOGGING SETUP
    # ---------------------------------------------------------------------------
    # Tests keep pytest's own handlers on the root logger.
    if not app.config.get("TESTING"):
        configure_logging(
            app.config["LOG_DIR"],
            "main_app.log",
            level=app.config["LOG_LEVEL"],
            tz_name=app.config["LOG_TIMEZONE"],
        )
    logging.info("Application start")

    # ---------------------------------------------------------------------------
    # DATABASE SETUP
    # ---------------------------------------------------------------------------
    db.init_app(app)

    # The logintracking table normally already exists; only create it when asked.
    if app.config.get("TRACKING_CREATE_TABLES"):
        with app.app_context():
            try:
                db.create_all()
                logging.info("Database tables created/verified")
            except Exception:
                logging.exception("Failed to create database tables")

    # ---------------------------------------------------------------------------
    # GEOIP + CDN TRUST
    # ---------------------------------------------------------------------------
    trusted_networks = parse_networks(app.config.get("TRUSTED_CDN_NETWORKS"))
    if trusted_networks:
        logging.info(f"CF-IPCountry trusted only from: {', '.join(map(str, trusted_networks))}")
    app.extensions[EXTENSION_KEY] = {
        "resolver": open_resolver(app),
        "trusted_networks": trusted_networks,
    }

    app.register_blueprint(clientmeta_bp)

    @app.route("/health")
    def health():
        """Simple health check used by monitoring or load balancers."""
        resolver = app.extensions[EXTENSION_KEY]["resolver"]
        return {"status": "ok", "geoip": resolver.enabled, "database": database_reachable()}

    return app


# ---------------------------------------------------------------------------
# MAIN ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    print("Development mode ONLY (use waitress_app.py in production).")
    app = create_app()
    app.run(host="127.0.0.1", port=5000, debug=False)
