"""Chat turn handling: load history → build prompt → inference → persist capped history.

No lock is held across the read-modify-write: two concurrent turns on the same
session race, and the store's last writer wins.
"""
import logging
from typing import Callable, Optional

from .config import config
from .errors import BadRequest, UpstreamFailure
from .inference.backend import LlmBackend, get_llm_backend
from .prompt_builder import Mode, build_prompt
from .shared_services.history import HistoryRepository, Turn, context_window

logger = logging.getLogger(__name__)

# Sampling policy for every chat turn; not user-configurable.
MAX_OUTPUT_TOKENS = 120
TEMPERATURE = 0.25


def _utf8_encodable(text: str) -> bool:
    # Lone surrogates (e.g. "\ud800") parse from JSON but cannot be stored.
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


class ChatHandler:
    """Handles one chat turn per call to handle(). Stateless between calls."""

    def __init__(
        self,
        history: HistoryRepository,
        backend: Optional[LlmBackend] = None,
        model: Optional[str] = None,
        backend_factory: Callable[[], LlmBackend] = get_llm_backend,
    ) -> None:
        self.history = history
        self.model = model or config.default_model
        self._backend = backend
        self._backend_factory = backend_factory

    def _get_backend(self) -> LlmBackend:
        if self._backend is None:
            self._backend = self._backend_factory()
        return self._backend

    def handle(self, session_id: Optional[str], message: Optional[str], mode: Optional[str] = None) -> str:
        """
        Run one turn and return the assistant reply.
        Raises BadRequest (no side effects), HistoryCorrupt, or UpstreamFailure.
        Stored history is only written after inference succeeds.
        """
        if not session_id or not message:
            raise BadRequest("Missing sessionId or message")
        if not (_utf8_encodable(session_id) and _utf8_encodable(message)):
            raise BadRequest("sessionId and message must be valid Unicode text")

        selected = Mode.parse(mode)
        turns = self.history.load(session_id)
        logger.info("Chat turn: session=%s mode=%s stored_turns=%d", session_id, selected.value, len(turns))

        turns.append(Turn(role="user", content=message))
        prompt = build_prompt(context_window(turns), selected)

        try:
            result = self._get_backend().run(
                self.model,
                prompt,
                max_tokens=MAX_OUTPUT_TOKENS,
                temperature=TEMPERATURE,
            )
        except Exception as exc:
            raise UpstreamFailure("inference", exc) from exc

        reply = result.response
        turns.append(Turn(role="assistant", content=reply))
        self.history.save(session_id, turns)
        return reply
