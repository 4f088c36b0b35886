"""
LLM gateway data models.
"""

from .message import (
    Message,
    MessageRole,
    ModelInfo,
    ModelOption,
    ThinkingResponse,
    ThoughtExtractionResult,
)
from .config import ModelConfig, DEFAULT_TEMPERATURE
from .stream import StreamHandlers, GuardedStreamHandlers

__all__ = [
    "Message",
    "MessageRole",
    "ModelInfo",
    "ModelOption",
    "ThinkingResponse",
    "ThoughtExtractionResult",
    "ModelConfig",
    "DEFAULT_TEMPERATURE",
    "StreamHandlers",
    "GuardedStreamHandlers",
]
