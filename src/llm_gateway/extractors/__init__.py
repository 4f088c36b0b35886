"""
Thinking extraction: marker scanners and the channel helper.
"""

from .base import Marker, MarkerKind, MarkerScan, ThoughtExtractor, find_first, find_marker
from .deepseek import DeepSeekThoughtExtractor
from .helper import (
    ThinkingExtractor,
    THINKING_TOOL,
    THINKING_TOOL_NAME,
    DISPLAY_HEADERS,
    first_message,
)

__all__ = [
    "Marker",
    "MarkerKind",
    "MarkerScan",
    "ThoughtExtractor",
    "DeepSeekThoughtExtractor",
    "ThinkingExtractor",
    "THINKING_TOOL",
    "THINKING_TOOL_NAME",
    "DISPLAY_HEADERS",
    "find_first",
    "find_marker",
    "first_message",
]
