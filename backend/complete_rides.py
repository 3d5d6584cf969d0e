"""
Mark upcoming rides whose date has passed as completed.
"""
import sys
import os

# Add the backend directory to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import logging
from app.core.config import Settings
from app.core.logging import setup_logging
from app.db.session import create_db_engine, create_session_factory
from app.services.ride_service import mark_completed_rides

logger = logging.getLogger("complete_rides")


def main():
    settings = Settings()
    setup_logging(settings.LOG_LEVEL)
    engine = create_db_engine(settings)
    db = create_session_factory(engine)()
    try:
        changed = mark_completed_rides(db)
        logger.info(f"Completed {changed} rides")
    except Exception:
        db.rollback()
        logger.exception("Failed to complete past rides")
        raise
    finally:
        db.close()
        engine.dispose()


if __name__ == "__main__":
    main()
