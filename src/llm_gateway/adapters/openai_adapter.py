"""
OpenAI-compatible chat-completion adapter.

Serves OpenAI itself and every wire-compatible vendor (DeepSeek,
SiliconFlow, Ollama, custom endpoints).
"""

import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Set, Tuple

import httpx

from ..core.config import GatewaySettings
from ..core.environment import resolve_url
from ..core.errors import APIError, ERROR_MESSAGES, LLMServiceError
from ..core.interface import BaseProvider, ProviderCapability
from ..extractors import DeepSeekThoughtExtractor, ThoughtExtractor
from ..models import Message, ModelConfig, ModelInfo, ThinkingResponse

logger = logging.getLogger(__name__)


THINKING_INSTRUCTION = (
    "Before answering, show your detailed reasoning inside a ```thinking "
    "code block, then give the final answer. For example:\n"
    "```thinking\nyour detailed reasoning here\n```\n\n"
    "Final answer: ..."
)


class OpenAIAdapter(BaseProvider):
    """
    Adapter for the chat-completion protocol.

    Attaches the ``thinking`` tool only to models that accept tool
    definitions, and asks reasoning models for a fenced thinking block
    instead.
    """

    OPENAI_BASE_URL = "https://api.openai.com/v1"

    # (vendor, model-name substring) pairs known to reject tool definitions
    TOOL_CALLING_DENYLIST: Tuple[Tuple[str, str], ...] = (
        ("deepseek", "deepseek-reasoner"),
        ("deepseek", "deepseek-chat"),
    )

    REASONER_MODEL_MARKERS: Tuple[str, ...] = (
        "deepseek-reasoner",
        "deepseek-r1",
    )

    BUILTIN_CATALOGS: Dict[str, List[ModelInfo]] = {
        "deepseek": [
            ModelInfo(id="deepseek-chat", name="DeepSeek Chat"),
            ModelInfo(id="deepseek-coder", name="DeepSeek Coder"),
            ModelInfo(id="deepseek-reasoner", name="DeepSeek Reasoner"),
        ],
    }

    def __init__(
        self,
        config: ModelConfig,
        streaming: bool = False,
        settings: Optional[GatewaySettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        thought_extractor: Optional[ThoughtExtractor] = None,
    ):
        super().__init__(
            config,
            streaming=streaming,
            settings=settings,
            transport=transport,
            thought_extractor=thought_extractor or DeepSeekThoughtExtractor(),
        )
        self._base_url = self._normalize_base_url(config.base_url or self.OPENAI_BASE_URL)

    @staticmethod
    def _normalize_base_url(base_url: str) -> str:
        base_url = base_url.rstrip("/")
        suffix = "/chat/completions"
        if base_url.endswith(suffix):
            base_url = base_url[: -len(suffix)]
        return base_url

    @property
    def provider_type(self) -> str:
        return "openai"

    @property
    def capabilities(self) -> Set[ProviderCapability]:
        capabilities = {
            ProviderCapability.CHAT_COMPLETION,
            ProviderCapability.STREAMING,
            ProviderCapability.MODEL_LISTING,
        }
        if self.supports_tool_calling():
            capabilities.add(ProviderCapability.FUNCTION_CALLING)
        if self.is_reasoner():
            capabilities.add(ProviderCapability.NATIVE_REASONING)
        return capabilities

    def _default_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.config.api_key}",
        }

    def _url(self, path: str) -> str:
        return resolve_url(
            self._base_url,
            path,
            use_proxy=self.config.use_proxy,
            streaming=self._streaming,
        )

    def supports_tool_calling(self) -> bool:
        """Check whether the configured model accepts tool definitions."""
        model_name = self.model.lower()
        for vendor, model_marker in self.TOOL_CALLING_DENYLIST:
            if self.vendor == vendor and model_marker in model_name:
                return False
        return True

    def is_reasoner(self) -> bool:
        """Check whether the configured model is a dedicated reasoning model."""
        model_name = self.model.lower()
        return any(marker in model_name for marker in self.REASONER_MODEL_MARKERS)

    def _build_payload(
        self,
        messages: List[Any],
        max_tokens: Optional[int] = None,
        stream: bool = False,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                m.to_openai_format() if isinstance(m, Message) else dict(m)
                for m in messages
            ],
            "temperature": self.config.effective_temperature,
        }
        tokens = max_tokens or self.config.max_tokens
        if tokens is not None:
            payload["max_tokens"] = tokens
        if stream:
            payload["stream"] = True
        return payload

    async def _post_completion(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        return await self._post_json(self._url("/chat/completions"), payload)

    async def _complete(self, messages: List[Message], max_tokens: Optional[int] = None) -> str:
        logger.info(f"Sending {len(messages)} messages to {self.vendor} model {self.model}")
        data = await self._post_completion(self._build_payload(messages, max_tokens=max_tokens))

        choices = data.get("choices") or []
        if not choices:
            return ""
        message = choices[0].get("message") or {}
        return message.get("content") or ""

    async def _stream_fragments(self, messages: List[Message]) -> AsyncIterator[str]:
        logger.info(f"Streaming {len(messages)} messages from {self.vendor} model {self.model}")
        payload = self._build_payload(messages, stream=True)

        async for chunk in self._iter_sse_data(self._url("/chat/completions"), payload):
            choices = chunk.get("choices") or []
            if not choices:
                continue
            delta = choices[0].get("delta") or {}
            content = delta.get("content")
            if content:
                yield content

    def _with_thinking_instruction(self, messages: List[Message]) -> List[Dict[str, str]]:
        """Merge the thinking instruction into the first system message, or prepend one."""
        formatted = [m.to_openai_format() for m in messages]

        for msg in formatted:
            if msg["role"] == "system":
                msg["content"] = f"{msg['content']}\n\n{THINKING_INSTRUCTION}"
                return formatted

        return [{"role": "system", "content": THINKING_INSTRUCTION}] + formatted

    async def send_message_with_thinking(self, messages: List[Message]) -> ThinkingResponse:
        """
        Send a conversation and recover the reasoning trace.

        Reasoning models, and models that reject tools, get a prompt
        instruction asking for a fenced thinking block; other models get
        the ``thinking`` tool. Either way a native reasoning field wins
        when present.
        """
        if self.is_reasoner() or not self.supports_tool_calling():
            payload = self._build_payload(self._with_thinking_instruction(messages))
            result = await self.thinking_extractor.get_thinking_from_reasoner(
                self._post_completion, payload
            )
        else:
            payload = self._build_payload(messages)
            result = await self.thinking_extractor.get_thinking_from_tool_call(
                self._post_completion, payload
            )

        if not result.content.strip() and not result.thinking:
            raise APIError(ERROR_MESSAGES["EMPTY_RESPONSE"], context=self._error_context())
        return result

    async def fetch_models(self) -> List[ModelInfo]:
        """
        List models from ``GET /models``.

        Vendors with a built-in catalog answer without a network call.
        Failures degrade to an empty list.
        """
        catalog = self.BUILTIN_CATALOGS.get(self.vendor)
        if catalog is not None:
            return list(catalog)

        try:
            data = await self._get_json(self._url("/models"))
        except LLMServiceError as e:
            logger.warning(f"Failed to list models for {self.vendor}: {e}")
            return []

        entries = data.get("data") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            logger.warning(f"Unexpected model listing shape from {self.vendor}")
            return []

        models = []
        for item in entries:
            model_id = item.get("id") if isinstance(item, dict) else None
            if isinstance(model_id, str) and model_id:
                models.append(ModelInfo(id=model_id, name=model_id))
        return models
