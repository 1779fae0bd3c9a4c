from hydration_tracker.db.session import async_session_maker, get_db, init_db
from hydration_tracker.db.base import Base

__all__ = ["Base", "async_session_maker", "get_db", "init_db"]
