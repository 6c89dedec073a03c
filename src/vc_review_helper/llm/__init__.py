"""
Language model integration for vc_review_helper.

This package contains the :class:`OllamaClient` used to stream
tool-calling chat completions from an Ollama server.
"""

from .ollama_client import ChatChunk, LLMError, OllamaClient, ToolCall  # noqa: F401
