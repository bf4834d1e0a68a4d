import logging

from sqlalchemy.exc import SQLAlchemyError

from database import db
from .errors import PersistenceFailure
from .models import logintracking


def insert_tracking(record):
    """
    Insert one LoginTracking row into the logintracking table.

    One parameterized INSERT, committed immediately. There is no retry and no
    de-duplication: calling this twice with the same record writes two rows.

    Raises:
        PersistenceFailure: the insert or commit failed. The session is
            rolled back and the original error is chained.
    """
    try:
        db.session.execute(logintracking.insert(), record.as_row())
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        logging.error(f"Failed to insert login tracking for user {record.user_id!r}: {exc}", exc_info=True)
        raise PersistenceFailure(exc) from exc

    logging.info(
        "Tracking inserted: user=%s action=%s ip=%s", record.user_id, record.action, record.ip
    )
