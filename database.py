"""
Shared SQLAlchemy handle for the tracking database.
`db` is bound to the Flask app in main_app.create_app().
"""
import logging

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

db = SQLAlchemy()


def database_reachable():
    """Run SELECT 1 against the tracking database. Returns False instead of raising."""
    try:
        db.session.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        logging.exception("Tracking database not reachable")
        db.session.rollback()
        return False
