from elite_coach.core.config import settings
from elite_coach.core.base import Base
from elite_coach.core.db import engine, get_db
from elite_coach.core.database import init_database

__all__ = ["settings", "engine", "Base", "get_db", "init_database"]
