import pytest

from main_app import create_app


@pytest.fixture
def app(tmp_path):
    """App wired to an in-memory SQLite database with the tracking table created."""
    app = create_app(
        {
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": "sqlite://",
            "TRACKING_CREATE_TABLES": True,
            "GEOIP_DB_PATH": "",
            "GEOIP_REQUIRED": False,
            "TRUSTED_CDN_NETWORKS": "",
            "LOG_DIR": str(tmp_path / "logs"),
        }
    )
    yield app


@pytest.fixture
def client(app):
    return app.test_client()
