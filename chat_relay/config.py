"""Configuration for the chat relay."""
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


@dataclass
class Config:
    """App configuration from environment."""
    # Model identifier sent with every inference call. Not user-selectable per request.
    default_model: str = os.getenv("DEFAULT_MODEL", "@cf/meta/llama-3.3-70b-instruct-fp8-fast").strip()

    # Inference backend: which implementation handles LLM calls.
    # "self_hosted" (default) = OpenAI-compatible server (Workers AI, vLLM, TensorRT-LLM, etc.); "openai" = OpenAI API.
    inference_backend: str = os.getenv("INFERENCE_BACKEND", "self_hosted").strip().lower()
    # When inference_backend is self_hosted: base URL of the inference server.
    # Chat completions are called at {inference_url}/v1/chat/completions.
    inference_url: str = os.getenv("INFERENCE_URL", "").strip()
    # Optional API key for self-hosted server (many accept any value; use "dummy" if not required).
    inference_api_key: str = os.getenv("INFERENCE_API_KEY", "dummy").strip()

    # Session history store: Redis when set, in-memory otherwise.
    redis_url: str = os.getenv("REDIS_URL", "").strip()
    # History TTL in seconds (e.g. 86400 = 24h). Only used when redis_url is set. 0 = no expiry.
    session_ttl_seconds: int = int(os.getenv("SESSION_TTL_SECONDS", "0"))

    # GraphQL: read-only conversation history query API at /graphql.
    graphql_enabled: bool = os.getenv("GRAPHQL_ENABLED", "true").lower() in ("true", "1", "yes")

    log_level: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8000"))


config = Config()
