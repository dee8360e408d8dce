"""Error taxonomy for the chat flow. The /api/chat route maps these to HTTP status codes."""


class ChatRelayError(Exception):
    """Base class for chat relay failures."""


class BadRequest(ChatRelayError):
    """Session id or message missing. Raised before any store or inference call."""


class HistoryCorrupt(ChatRelayError):
    """A stored history value exists but is not a valid turn sequence."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Stored history under {key!r} is corrupt: {reason}")
        self.key = key


class UpstreamFailure(ChatRelayError):
    """The store or the inference collaborator raised."""

    def __init__(self, collaborator: str, exc: BaseException) -> None:
        super().__init__(f"{collaborator} failed: {exc}")
        self.collaborator = collaborator
