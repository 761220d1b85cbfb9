"""
Script to create tables and insert the demo rubrics, candidates and evaluations.
Run: python -m scripts.seed_demo_data
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from assessdesk.db.init_db import init_db
from assessdesk.db.seed import seed_demo_data
from assessdesk.db.session import SessionLocal
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> int:
    init_db()
    db = SessionLocal()
    try:
        if seed_demo_data(db):
            logger.info("Demo data inserted")
        else:
            logger.info("Database already has rubrics, nothing inserted")
        return 0
    except Exception as e:
        logger.error(f"Seeding failed: {e}", exc_info=True)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
