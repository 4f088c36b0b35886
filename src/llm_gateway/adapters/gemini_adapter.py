"""
Google Gemini adapter.

Talks to the Generative Language REST API. System messages become the
``systemInstruction`` field, earlier turns become chat history and the
final user message is sent as the new turn.
"""

import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Set, Tuple

import httpx

from ..core.config import GatewaySettings
from ..core.environment import resolve_url
from ..core.errors import APIError, ERROR_MESSAGES, LLMServiceError, ValidationError
from ..core.interface import BaseProvider, ProviderCapability
from ..extractors import ThoughtExtractor
from ..models import Message, ModelConfig, ModelInfo, ThinkingResponse

logger = logging.getLogger(__name__)


THINKING_PROMPT_SUFFIX = (
    "\n\nPlease show your reasoning inside a ```thinking code block first, "
    "then give the final answer after the block."
)


class GeminiAdapter(BaseProvider):
    """
    Adapter for Google Gemini models.

    Gemini exposes no reasoning field, so thinking is requested through
    a prompt instruction and recovered with the generic marker scanner.
    """

    GEMINI_BASE_URL = "https://generativelanguage.googleapis.com"
    API_VERSION = "v1beta"

    ROLE_MAP = {
        "user": "user",
        "assistant": "model",
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
            thought_extractor=thought_extractor,
        )
        self._base_url = self._normalize_base_url(config.base_url or self.GEMINI_BASE_URL)

    @classmethod
    def _normalize_base_url(cls, base_url: str) -> str:
        base_url = base_url.rstrip("/")
        suffix = f"/{cls.API_VERSION}"
        if base_url.endswith(suffix):
            base_url = base_url[: -len(suffix)]
        return base_url

    @property
    def provider_type(self) -> str:
        return "gemini"

    @property
    def capabilities(self) -> Set[ProviderCapability]:
        return {
            ProviderCapability.CHAT_COMPLETION,
            ProviderCapability.STREAMING,
            ProviderCapability.MODEL_LISTING,
        }

    def _default_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "x-goog-api-key": self.config.api_key or "",
        }

    def _url(self, path: str) -> str:
        return resolve_url(
            self._base_url,
            f"/{self.API_VERSION}{path}",
            use_proxy=self.config.use_proxy,
            streaming=self._streaming,
        )

    def _split_conversation(
        self, messages: List[Message]
    ) -> Tuple[str, List[Dict[str, Any]], str]:
        """
        Split messages into system instruction, history and final prompt.

        Raises:
            ValidationError: If the conversation does not end with a user message
        """
        system_instruction = "\n".join(m.content for m in messages if m.role == "system")
        conversation = [m for m in messages if m.role != "system"]

        if not conversation or conversation[-1].role != "user":
            raise ValidationError(
                ERROR_MESSAGES["NO_USER_MESSAGE"],
                context=self._error_context(field="messages"),
            )

        history = [
            {"role": self.ROLE_MAP[m.role], "parts": [{"text": m.content}]}
            for m in conversation[:-1]
        ]
        return system_instruction, history, conversation[-1].content

    def _build_payload(
        self,
        messages: List[Message],
        max_tokens: Optional[int] = None,
        prompt_suffix: str = "",
    ) -> Dict[str, Any]:
        system_instruction, history, prompt = self._split_conversation(messages)

        payload: Dict[str, Any] = {
            "contents": history + [
                {"role": "user", "parts": [{"text": prompt + prompt_suffix}]}
            ],
            "generationConfig": {
                "temperature": self.config.effective_temperature,
            },
        }
        if system_instruction:
            payload["systemInstruction"] = {"parts": [{"text": system_instruction}]}

        tokens = max_tokens or self.config.max_tokens
        if tokens is not None:
            payload["generationConfig"]["maxOutputTokens"] = tokens
        return payload

    @staticmethod
    def _candidate_text(data: Dict[str, Any]) -> str:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        content = candidates[0].get("content") or {}
        return "".join(
            part.get("text", "")
            for part in content.get("parts") or []
            if isinstance(part, dict)
        )

    async def _generate(self, payload: Dict[str, Any]) -> str:
        data = await self._post_json(self._url(f"/models/{self.model}:generateContent"), payload)
        return self._candidate_text(data)

    async def _complete(self, messages: List[Message], max_tokens: Optional[int] = None) -> str:
        logger.info(f"Sending {len(messages)} messages to gemini model {self.model}")
        return await self._generate(self._build_payload(messages, max_tokens=max_tokens))

    async def _stream_fragments(self, messages: List[Message]) -> AsyncIterator[str]:
        logger.info(f"Streaming {len(messages)} messages from gemini model {self.model}")
        payload = self._build_payload(messages)
        url = self._url(f"/models/{self.model}:streamGenerateContent?alt=sse")

        async for chunk in self._iter_sse_data(url, payload):
            text = self._candidate_text(chunk)
            if text:
                yield text

    async def send_message_with_thinking(self, messages: List[Message]) -> ThinkingResponse:
        """
        Ask for a fenced thinking block and split it from the answer.

        Args:
            messages: Conversation messages

        Returns:
            ThinkingResponse parsed from the response text
        """
        payload = self._build_payload(messages, prompt_suffix=THINKING_PROMPT_SUFFIX)
        text = await self._generate(payload)
        if not text.strip():
            raise APIError(ERROR_MESSAGES["EMPTY_RESPONSE"], context=self._error_context())
        return self.thinking_extractor.fallback_extract_thinking(text)

    async def fetch_models(self) -> List[ModelInfo]:
        """List models from ``GET /v1beta/models``; failures degrade to []."""
        try:
            data = await self._get_json(self._url("/models"))
        except LLMServiceError as e:
            logger.warning(f"Failed to list gemini models: {e}")
            return []

        entries = data.get("models") if isinstance(data, dict) else None
        if not isinstance(entries, list):
            logger.warning("Unexpected gemini model listing shape")
            return []

        models = []
        for item in entries:
            name = item.get("name") if isinstance(item, dict) else None
            if not isinstance(name, str) or not name:
                continue
            methods = item.get("supportedGenerationMethods")
            if isinstance(methods, list) and "generateContent" not in methods:
                continue
            model_id = name.split("/", 1)[-1]
            display_name = item.get("displayName")
            if not isinstance(display_name, str) or not display_name:
                display_name = model_id
            models.append(ModelInfo(id=model_id, name=display_name))
        return models
