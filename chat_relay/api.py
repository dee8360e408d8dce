"""FastAPI entrypoint: chat page → /api/chat (history + prompt + inference) → reply; GraphQL for history."""
import logging
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException
from strawberry.fastapi import GraphQLRouter

from . import __version__
from .chat_handler import ChatHandler
from .config import config
from .errors import BadRequest
from .graphql.conversation_schema import schema as graphql_schema
from .shared_services.history import HistoryRepository
from .shared_services.session_store import SessionStore, build_session_store

logging.basicConfig(level=config.log_level, format="[%(asctime)s] %(levelname)s %(name)s - %(message)s")
logger = logging.getLogger(__name__)

CHAT_PAGE = Path(__file__).resolve().parent / "static" / "index.html"

# --- App setup ---

app = FastAPI(title="Chat Relay", version=__version__)
session_store: SessionStore = build_session_store(config.redis_url, config.session_ttl_seconds)


def get_history() -> HistoryRepository:
    return HistoryRepository(session_store)


def get_chat_handler(history: HistoryRepository = Depends(get_history)) -> ChatHandler:
    return ChatHandler(history)


# GraphQL: conversation history query API at /graphql
def get_graphql_context(history: HistoryRepository = Depends(get_history)):
    return {"history": history}


if config.graphql_enabled:
    graphql_app = GraphQLRouter(graphql_schema, context_getter=get_graphql_context)
    app.include_router(graphql_app, prefix="/graphql")


# --- Error mapping ---

@app.exception_handler(StarletteHTTPException)
async def not_found_handler(request: Request, exc: StarletteHTTPException):
    """Unknown paths and wrong methods on known paths are both plain-text 404s."""
    if exc.status_code in (404, 405):
        return PlainTextResponse("Not found", status_code=404)
    return await http_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected chat request body: %s", exc.errors())
    return JSONResponse(status_code=400, content={"error": "Invalid request body"})


# --- Request / Response models ---

class ChatRequest(BaseModel):
    """Incoming chat message. Presence of sessionId/message is checked by the handler."""
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(default=None, alias="sessionId")
    message: Optional[str] = None
    mode: Optional[str] = None


class ChatResponse(BaseModel):
    """Chat reply."""
    reply: str


# --- Endpoints ---

@app.get("/", include_in_schema=False)
def chat_page() -> FileResponse:
    return FileResponse(CHAT_PAGE, media_type="text/html; charset=utf-8")


@app.get("/health")
def health():
    """Liveness check; reports which session store backend is active."""
    return {"status": "ok", "store": session_store.backend_name}


@app.post("/api/chat", response_model=ChatResponse)
def chat(req: ChatRequest, handler: ChatHandler = Depends(get_chat_handler)):
    """
    Chat endpoint: load session history → build prompt → inference → save capped history → reply.
    Every failure is converted here to a JSON {"error": ...} body; nothing is retried.
    """
    try:
        reply = handler.handle(req.session_id, req.message, req.mode)
    except BadRequest as e:
        logger.warning("Bad chat request: %s", e)
        return JSONResponse(status_code=400, content={"error": str(e)})
    except Exception as e:
        logger.exception("Chat processing failed: session=%s", req.session_id)
        return JSONResponse(status_code=500, content={"error": str(e)})

    return ChatResponse(reply=reply)
