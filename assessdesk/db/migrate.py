"""
Database migration runner for Alembic migrations.
"""
import logging
import os
from alembic.config import Config
from alembic import command

logger = logging.getLogger(__name__)

ALEMBIC_INI_PATH = os.path.join(
    os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    "alembic.ini",
)


def get_alembic_config(database_url: str = None) -> Config:
    from assessdesk.core import config as app_config

    alembic_cfg = Config(ALEMBIC_INI_PATH)
    alembic_cfg.set_main_option("sqlalchemy.url", database_url or app_config.DATABASE_URL)
    return alembic_cfg


def run_migrations(database_url: str = None):
    """
    Run Alembic migrations to head revision.
    """
    from assessdesk.core import config as app_config

    url = database_url or app_config.DATABASE_URL
    if not url:
        raise ValueError("DATABASE_URL is not set")

    logger.info("RUN_MIGRATIONS=1 -> running alembic upgrade head")
    try:
        command.upgrade(get_alembic_config(url), "head")
    except Exception as e:
        logger.error(f"Migration failed: {e}", exc_info=True)
        raise
    logger.info("Migrations complete")
