"""GraphQL schema for conversation history query API (read-only)."""
from typing import Optional

import strawberry

from ..shared_services.history import HistoryRepository


@strawberry.type
class Turn:
    """A single conversation turn."""
    role: str
    content: str

    @classmethod
    def from_store_turn(cls, turn) -> "Turn":
        return cls(role=turn.role, content=turn.content)


@strawberry.type
class Conversation:
    """Stored conversation history for a session (at most the capped number of turns)."""
    session_id: str
    turns: list[Turn]


@strawberry.type
class Query:
    """Conversation history queries."""

    @strawberry.field
    def conversation(
        self,
        info: strawberry.Info,
        session_id: str,
        limit: Optional[int] = None,
    ) -> Optional[Conversation]:
        """Get conversation history for a session (last `limit` turns). Returns null if nothing is stored."""
        history: HistoryRepository = info.context["history"]
        turns = history.load(session_id)
        if not turns:
            return None
        # limit <= 0 means no limit
        if limit is not None and limit > 0:
            turns = turns[-limit:]
        return Conversation(
            session_id=session_id,
            turns=[Turn.from_store_turn(t) for t in turns],
        )


schema = strawberry.Schema(Query)
