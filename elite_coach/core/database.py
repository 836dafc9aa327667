import logging

from elite_coach.core.base import Base
from elite_coach.core.config import settings
from elite_coach.core.db import engine

logger = logging.getLogger(__name__)


async def init_database():
    """Create tables, dropping them first when RESET_DATABASE is set."""
    # models register themselves on Base.metadata at import time
    import elite_coach.models  # noqa: F401

    async with engine.begin() as conn:
        if settings.RESET_DATABASE:
            logger.warning("RESET_DATABASE=true - dropping all tables")
            await conn.run_sync(Base.metadata.drop_all)

        await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created/verified")
