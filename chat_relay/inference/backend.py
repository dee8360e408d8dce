"""Inference backend abstraction for the chat LLM call.

- OpenAIBackend: uses OpenAI API via langchain_openai.ChatOpenAI.
- SelfHostedBackend: uses an OpenAI-compatible HTTP API (Cloudflare Workers AI, vLLM,
  TensorRT-LLM) by pointing ChatOpenAI at base_url=INFERENCE_URL. This is the default;
  set INFERENCE_BACKEND=openai to call OpenAI directly.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from langchain_openai import ChatOpenAI

from ..config import config

logger = logging.getLogger(__name__)


@dataclass
class InferenceResult:
    """Output of one inference call."""
    response: str


class LlmBackend(ABC):
    """Abstract backend for LLM inference."""

    @abstractmethod
    def create_text_llm(
        self,
        model: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> Any:
        """Return an object with .invoke(prompt) that returns a message with .content."""

    def run(
        self,
        model: str,
        prompt: str,
        *,
        max_tokens: int,
        temperature: float,
    ) -> InferenceResult:
        """Run the model once on a plain text prompt."""
        llm = self.create_text_llm(model, temperature=temperature, max_tokens=max_tokens)
        message = llm.invoke(prompt)
        content = message.content if isinstance(message.content, str) else str(message.content or "")
        logger.debug("Inference model=%s prompt_chars=%d reply_chars=%d", model, len(prompt), len(content))
        return InferenceResult(response=content)


class OpenAIBackend(LlmBackend):
    """Backend using OpenAI's ChatCompletion via langchain_openai. Reads OPENAI_API_KEY."""

    def create_text_llm(
        self,
        model: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> Any:
        return ChatOpenAI(model=model, temperature=temperature, max_tokens=max_tokens)


class SelfHostedBackend(LlmBackend):
    """Self-hosted inference via an OpenAI-compatible API.

    Requires INFERENCE_URL (e.g. http://vllm:8000, or
    https://api.cloudflare.com/client/v4/accounts/<id>/ai for Workers AI). Requests go to
    {base_url}/v1/chat/completions. Use INFERENCE_API_KEY if your server expects one.
    """

    def __init__(self, api_url: str | None = None, api_key: str | None = None) -> None:
        self.api_url = (api_url or getattr(config, "inference_url", "") or "").rstrip("/")
        self.api_key = api_key if api_key is not None else getattr(config, "inference_api_key", "dummy")
        if not self.api_url:
            raise ValueError(
                "Self-hosted inference requires INFERENCE_URL (e.g. http://vllm:8000). "
                "Set it in env or use INFERENCE_BACKEND=openai."
            )
        self.base_url = f"{self.api_url}/v1"

    def create_text_llm(
        self,
        model: str,
        *,
        temperature: float,
        max_tokens: int,
    ) -> Any:
        return ChatOpenAI(
            base_url=self.base_url,
            api_key=self.api_key,
            model=model,
            temperature=temperature,
            max_tokens=max_tokens,
        )


_backend_singleton: LlmBackend | None = None


def get_llm_backend() -> LlmBackend:
    """Return a singleton LlmBackend based on config.inference_backend."""
    global _backend_singleton
    if _backend_singleton is not None:
        return _backend_singleton

    backend_name = getattr(config, "inference_backend", "self_hosted") or "self_hosted"
    backend_name = backend_name.strip().lower()

    if backend_name == "openai":
        _backend_singleton = OpenAIBackend()
    elif backend_name in ("self_hosted", "self-hosted", "local"):
        _backend_singleton = SelfHostedBackend()
    else:
        logger.warning("Unknown INFERENCE_BACKEND=%r; falling back to self_hosted", backend_name)
        _backend_singleton = SelfHostedBackend()
    return _backend_singleton
