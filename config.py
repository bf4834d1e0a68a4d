"""
Application configuration, read from environment variables.

Setup:
1. Put settings in a .env file in the project root (or export them):
   GEOIP_DB_PATH=/srv/geoip/GeoLite2-Country.mmdb
   GEOIP_REQUIRED=false
   DATABASE_URL=postgresql+psycopg2://user:pass@db/app
   TRUSTED_CDN_NETWORKS=173.245.48.0/20,103.21.244.0/22
2. Values are loaded into Flask's app.config by main_app.create_app().

Leaving GEOIP_DB_PATH empty disables the GeoIP fallback; countries then come
from the CDN header only.
"""
import logging
import os

from dotenv import load_dotenv

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))

# --------- Load environment variables from .env file ---------------- #
env_path = os.path.join(PROJECT_ROOT, ".env")
if os.path.exists(env_path):
    load_dotenv(env_path)
    logging.info(f"Loaded environment variables from {env_path}")

TRUE_VALUES = {"1", "true", "yes", "on"}


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUE_VALUES


def env_int(name, default):
    value = os.environ.get(name)
    try:
        return int(value) if value else default
    except ValueError:
        logging.warning(f"Invalid integer for {name}: {value!r}, using {default}")
        return default


def load_config(instance_path):
    """
    Build the config mapping from the current environment.

    Args:
        instance_path: Flask instance folder, used for the default SQLite file.
    """
    default_db = f"sqlite:///{os.path.join(instance_path, 'tracking.db')}"
    return {
        # GeoIP
        "GEOIP_DB_PATH": os.environ.get("GEOIP_DB_PATH", "").strip(),
        "GEOIP_REQUIRED": env_bool("GEOIP_REQUIRED"),
        # Tracking database
        "SQLALCHEMY_DATABASE_URI": os.environ.get("DATABASE_URL") or default_db,
        "SQLALCHEMY_TRACK_MODIFICATIONS": False,
        "TRACKING_CREATE_TABLES": env_bool("TRACKING_CREATE_TABLES"),
        # Comma-separated IPs/CIDRs of the CDN edge; empty trusts CF-IPCountry from anyone
        "TRUSTED_CDN_NETWORKS": os.environ.get("TRUSTED_CDN_NETWORKS", ""),
        # Logging
        "LOG_DIR": os.environ.get("LOG_DIR") or os.path.join(PROJECT_ROOT, "logs"),
        "LOG_LEVEL": os.environ.get("LOG_LEVEL", "INFO").upper(),
        "LOG_TIMEZONE": os.environ.get("LOG_TIMEZONE", "UTC"),
        # Server (waitress); IIS hands us the port in HTTP_PLATFORM_PORT
        "SERVER_HOST": os.environ.get("SERVER_HOST", "127.0.0.1"),
        "SERVER_PORT": env_int("HTTP_PLATFORM_PORT", env_int("SERVER_PORT", 8080)),
        "SERVER_THREADS": env_int("SERVER_THREADS", 16),
    }
