from .backend import InferenceResult, LlmBackend, OpenAIBackend, SelfHostedBackend, get_llm_backend

__all__ = ["InferenceResult", "LlmBackend", "OpenAIBackend", "SelfHostedBackend", "get_llm_backend"]
