import logging

from assessdesk.db.base import Base
from assessdesk.db.session import engine
import assessdesk.db.models  # noqa: F401  (registers models on Base.metadata)

logger = logging.getLogger(__name__)


def init_db(bind=None):
    """Create any missing tables."""
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info(f"Database tables ensured: {', '.join(sorted(Base.metadata.tables))}")
