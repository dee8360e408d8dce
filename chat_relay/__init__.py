"""Chat relay: HTTP front end that relays chat turns to a hosted LLM with per-session history."""

__version__ = "0.1.0"
