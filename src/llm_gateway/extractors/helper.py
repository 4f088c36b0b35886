"""
Thinking extraction helper.

Recovers a reasoning trace from a chat-completion response through
three channels, tried in fixed order:

1. a native reasoning field on the response message (authoritative)
2. a ``thinking`` tool call whose arguments carry ``thoughts``
3. marker scanning of the plain response text
"""

import json
import logging
from typing import Any, Awaitable, Callable, Dict, List, Mapping, Optional

from ..models import ThinkingResponse
from .base import ThoughtExtractor

logger = logging.getLogger(__name__)

THINKING_TOOL_NAME = "thinking"

THINKING_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": THINKING_TOOL_NAME,
        "description": "Show the reasoning process",
        "parameters": {
            "type": "object",
            "properties": {
                "thoughts": {
                    "type": "string",
                    "description": "Detailed reasoning process",
                },
            },
            "required": ["thoughts"],
        },
    },
}

NATIVE_REASONING_FIELDS = ("reasoning_content", "reasoning")

DISPLAY_HEADERS = {
    "en": ("Thinking process:", "Final answer:"),
    "zh": ("思考过程:", "最终回答:"),
}

CompletionCall = Callable[[Dict[str, Any]], Awaitable[Dict[str, Any]]]


def first_message(response: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``choices[0].message`` of a chat-completion body, or {}."""
    choices = response.get("choices") or []
    if not choices or not isinstance(choices[0], Mapping):
        return {}
    message = choices[0].get("message")
    return dict(message) if isinstance(message, Mapping) else {}


class ThinkingExtractor:
    """Coordinates thinking extraction across response channels."""

    def __init__(self, thought_extractor: Optional[ThoughtExtractor] = None):
        self.thought_extractor = thought_extractor or ThoughtExtractor()

    def native_reasoning(self, message: Mapping[str, Any]) -> Optional[str]:
        for field in NATIVE_REASONING_FIELDS:
            value = message.get(field)
            if isinstance(value, str) and value.strip():
                return value
        return None

    def tool_call_thoughts(self, message: Mapping[str, Any]) -> Optional[str]:
        """Thoughts carried by a ``thinking`` tool call, if any."""
        for call in message.get("tool_calls") or []:
            function = (call or {}).get("function") or {}
            if function.get("name") != THINKING_TOOL_NAME:
                continue
            arguments = function.get("arguments") or "{}"
            try:
                parsed = json.loads(arguments) if isinstance(arguments, str) else dict(arguments)
            except (ValueError, TypeError) as e:
                logger.warning(f"Could not parse thinking tool arguments: {e}")
                return None
            thoughts = parsed.get("thoughts") if isinstance(parsed, dict) else None
            if isinstance(thoughts, str) and thoughts.strip():
                return thoughts
            return None
        return None

    def extract_from_message(
        self,
        message: Mapping[str, Any],
        use_tool_channel: bool = True,
        use_text_channel: bool = True,
    ) -> ThinkingResponse:
        """
        Resolve thinking and content from a response message.

        Args:
            message: ``choices[0].message`` of a chat-completion response
            use_tool_channel: Consider ``thinking`` tool calls
            use_text_channel: Fall back to marker scanning of the content

        Returns:
            ThinkingResponse; content falls back to the raw message text
        """
        content = message.get("content") or ""
        if not isinstance(content, str):
            content = str(content)

        try:
            reasoning = self.native_reasoning(message)
            if reasoning is not None:
                return ThinkingResponse(thinking=reasoning, content=content)

            if use_tool_channel:
                thoughts = self.tool_call_thoughts(message)
                if thoughts is not None:
                    return ThinkingResponse(thinking=thoughts, content=content)
        except Exception as e:
            logger.warning(f"Thinking channel lookup failed: {e}")

        if use_text_channel:
            return self.fallback_extract_thinking(content)
        return ThinkingResponse(thinking=None, content=content)

    def fallback_extract_thinking(self, content: str) -> ThinkingResponse:
        """Extract thinking from plain response text."""
        result = self.thought_extractor.extract(content)
        return ThinkingResponse(
            thinking=result.thinking or None,
            content=result.answer or content or "",
        )

    async def get_thinking_from_reasoner(
        self,
        complete: CompletionCall,
        payload: Dict[str, Any],
    ) -> ThinkingResponse:
        """
        Request a completion from a reasoning model.

        Args:
            complete: Adapter coroutine posting a chat-completion payload
            payload: Request body

        Returns:
            ThinkingResponse from the native field, else from text markers
        """
        response = await complete(payload)
        return self.extract_from_message(first_message(response), use_tool_channel=False)

    async def get_thinking_from_tool_call(
        self,
        complete: CompletionCall,
        payload: Dict[str, Any],
        tools: Optional[List[Dict[str, Any]]] = None,
    ) -> ThinkingResponse:
        """
        Request a completion with the thinking tool attached.

        Args:
            complete: Adapter coroutine posting a chat-completion payload
            payload: Request body without tools
            tools: Tool definitions, the thinking tool by default

        Returns:
            ThinkingResponse from the native field, the tool call, or text
        """
        request = {**payload, "tools": tools or [THINKING_TOOL], "tool_choice": "auto"}
        response = await complete(request)
        return self.extract_from_message(first_message(response))

    def process_response_with_thinking(
        self,
        response: Mapping[str, Any],
        use_tool_channel: bool = True,
        use_text_channel: bool = True,
        locale: str = "en",
    ) -> str:
        """
        Render a chat-completion response as one display string.

        When a thinking segment is found the result is prefixed with a
        localized "thinking process" / "final answer" header pair.
        """
        message = first_message(response)
        result = self.extract_from_message(
            message,
            use_tool_channel=use_tool_channel,
            use_text_channel=use_text_channel,
        )
        if not result.thinking:
            return message.get("content") or ""

        thinking_header, answer_header = DISPLAY_HEADERS.get(locale, DISPLAY_HEADERS["en"])
        return f"{thinking_header}\n{result.thinking}\n\n{answer_header}\n{result.content}"
