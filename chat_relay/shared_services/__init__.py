from .session_store import SessionStore, InMemorySessionStore, RedisSessionStore, build_session_store
from .history import HistoryRepository, Turn

__all__ = [
    "SessionStore",
    "InMemorySessionStore",
    "RedisSessionStore",
    "build_session_store",
    "HistoryRepository",
    "Turn",
]
