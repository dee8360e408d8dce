"""Per-session conversation history on top of a SessionStore.

History is a JSON array of {"role", "content"} objects stored under
``session:<session_id>``. It is capped on every save (oldest turns dropped first),
so storage per session stays bounded regardless of conversation length.
"""
import logging
from dataclasses import dataclass
from typing import Literal, Optional, Sequence

from pydantic import TypeAdapter, ValidationError

from ..errors import HistoryCorrupt, UpstreamFailure
from .session_store import SessionStore

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "session:"
MAX_STORED_TURNS = 30
MAX_CONTEXT_TURNS = 8


@dataclass(frozen=True)
class Turn:
    """A single conversation turn."""
    role: Literal["user", "assistant"]
    content: str


_turns_adapter = TypeAdapter(list[Turn])


def session_key(session_id: str) -> str:
    return SESSION_KEY_PREFIX + session_id


def truncate(turns: Sequence[Turn], max_turns: int = MAX_STORED_TURNS) -> list[Turn]:
    """Keep the most recent max_turns turns, in order."""
    if len(turns) > max_turns:
        return list(turns[len(turns) - max_turns:])
    return list(turns)


def context_window(turns: Sequence[Turn], size: int = MAX_CONTEXT_TURNS) -> list[Turn]:
    """Most recent turns used for prompt construction. Never persisted."""
    return truncate(turns, size)


def encode_turns(turns: Sequence[Turn]) -> str:
    return _turns_adapter.dump_json(list(turns)).decode("utf-8")


def decode_turns(raw: str, key: str = "") -> list[Turn]:
    """Parse a stored value; raises HistoryCorrupt on bad JSON or wrong shape."""
    try:
        return _turns_adapter.validate_json(raw)
    except ValidationError as exc:
        raise HistoryCorrupt(key, f"{exc.error_count()} validation error(s)") from exc


class HistoryRepository:
    """Load and save session history. One store read per load, one store write per save."""

    def __init__(self, store: SessionStore, max_turns: int = MAX_STORED_TURNS) -> None:
        self.store = store
        self.max_turns = max_turns

    def load(self, session_id: str) -> list[Turn]:
        """Stored history for the session; empty list when nothing is stored."""
        key = session_key(session_id)
        try:
            raw: Optional[str] = self.store.get(key)
        except Exception as exc:
            raise UpstreamFailure("session store", exc) from exc
        if not raw:
            return []
        return decode_turns(raw, key)

    def save(self, session_id: str, turns: Sequence[Turn]) -> list[Turn]:
        """Truncate to max_turns and write back. Returns what was stored."""
        key = session_key(session_id)
        kept = truncate(turns, self.max_turns)
        if len(kept) < len(turns):
            logger.debug("Dropped %d oldest turns for %s", len(turns) - len(kept), key)
        value = encode_turns(kept)
        try:
            self.store.put(key, value)
        except Exception as exc:
            raise UpstreamFailure("session store", exc) from exc
        return kept
