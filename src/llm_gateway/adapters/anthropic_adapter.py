"""
Anthropic Claude adapter.

Anthropic serves an OpenAI-compatible chat-completion endpoint, so wire
execution is delegated to the generic adapter. The model catalog is
fixed because no listing endpoint is used.
"""

import logging
from typing import AsyncIterator, List, Optional, Set

import httpx

from ..core.config import GatewaySettings
from ..core.interface import BaseProvider, ProviderCapability
from ..extractors import ThoughtExtractor
from ..models import Message, ModelConfig, ModelInfo
from .openai_adapter import OpenAIAdapter

logger = logging.getLogger(__name__)


class AnthropicAdapter(BaseProvider):
    """
    Adapter for Anthropic Claude models.

    Thinking extraction uses the default text scan of the answer.
    """

    ANTHROPIC_BASE_URL = "https://api.anthropic.com/v1"

    MODEL_CATALOG = (
        ModelInfo(id="claude-3-opus-20240229", name="Claude 3 Opus"),
        ModelInfo(id="claude-3-sonnet-20240229", name="Claude 3 Sonnet"),
        ModelInfo(id="claude-3-haiku-20240307", name="Claude 3 Haiku"),
        ModelInfo(id="claude-2.1", name="Claude 2.1"),
    )

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
        wire_config = config if config.base_url else config.merged(base_url=self.ANTHROPIC_BASE_URL)
        self._delegate = OpenAIAdapter(
            wire_config,
            streaming=streaming,
            settings=self._settings,
            transport=transport,
            thought_extractor=self.thought_extractor,
        )

    @property
    def provider_type(self) -> str:
        return "anthropic"

    @property
    def capabilities(self) -> Set[ProviderCapability]:
        return {
            ProviderCapability.CHAT_COMPLETION,
            ProviderCapability.STREAMING,
        }

    async def connect(self) -> None:
        await self._delegate.connect()

    async def disconnect(self) -> None:
        await self._delegate.disconnect()

    async def _complete(self, messages: List[Message], max_tokens: Optional[int] = None) -> str:
        return await self._delegate._complete(messages, max_tokens=max_tokens)

    async def _stream_fragments(self, messages: List[Message]) -> AsyncIterator[str]:
        async for fragment in self._delegate._stream_fragments(messages):
            yield fragment

    async def fetch_models(self) -> List[ModelInfo]:
        logger.info(f"Returning built-in model catalog for {self.vendor}")
        return list(self.MODEL_CATALOG)
