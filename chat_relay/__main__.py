"""
Run the chat relay HTTP server.

  python -m chat_relay
  # or: uvicorn chat_relay.api:app --reload

Reads HOST / PORT (and everything else) from env or .env.
"""
import uvicorn

from .config import config

uvicorn.run("chat_relay.api:app", host=config.host, port=config.port)
