"""
Vendor adapters for the LLM gateway.
"""

from .openai_adapter import OpenAIAdapter
from .gemini_adapter import GeminiAdapter
from .anthropic_adapter import AnthropicAdapter

__all__ = [
    "OpenAIAdapter",
    "GeminiAdapter",
    "AnthropicAdapter",
]
