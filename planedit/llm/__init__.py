from .base import LLM, LLMRequest
from .dummy import DummyLLM
from .errors import LLMCallError
from .http import OpenAICompatLLM

__all__ = ["LLM", "LLMRequest", "DummyLLM", "LLMCallError", "OpenAICompatLLM"]
