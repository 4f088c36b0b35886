"""
Abstract provider interface definition.

Defines the contract that every vendor adapter implements, and the
shared HTTP plumbing adapters build on.
"""

import json
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, AsyncIterator, Dict, List, Optional, Set

import httpx

from ..extractors import ThinkingExtractor, ThoughtExtractor
from ..models import (
    GuardedStreamHandlers,
    Message,
    ModelConfig,
    ModelInfo,
    StreamHandlers,
    ThinkingResponse,
)
from .config import GatewaySettings
from .errors import (
    APIAuthenticationError,
    APIConnectionError,
    APIError,
    APIRateLimitError,
    ERROR_MESSAGES,
    LLMServiceError,
)

logger = logging.getLogger(__name__)


class ProviderCapability(str, Enum):
    """Capabilities that a provider may support."""
    CHAT_COMPLETION = "chat_completion"
    STREAMING = "streaming"
    FUNCTION_CALLING = "function_calling"
    NATIVE_REASONING = "native_reasoning"
    MODEL_LISTING = "model_listing"


class AbstractProvider(ABC):
    """
    Abstract base class for vendor adapters.

    All adapters must implement this interface to be usable by the
    provider factory and the LLM service.
    """

    @property
    @abstractmethod
    def provider_type(self) -> str:
        """
        Vendor family of this adapter (e.g., "openai", "gemini").

        Returns:
            Provider type identifier
        """
        pass

    @property
    @abstractmethod
    def capabilities(self) -> Set[ProviderCapability]:
        """
        Set of capabilities this adapter supports for its configured model.

        Returns:
            Set of ProviderCapability values
        """
        pass

    @abstractmethod
    async def send_message(self, messages: List[Message]) -> str:
        """
        Send a conversation and return the complete answer.

        Args:
            messages: Conversation messages

        Returns:
            Non-empty response text
        """
        pass

    @abstractmethod
    async def send_message_stream(
        self,
        messages: List[Message],
        handlers: StreamHandlers,
    ) -> None:
        """
        Send a conversation and deliver the answer as token callbacks.

        Args:
            messages: Conversation messages
            handlers: Token, completion and error callbacks
        """
        pass

    @abstractmethod
    async def send_message_with_thinking(self, messages: List[Message]) -> ThinkingResponse:
        """
        Send a conversation and separate the reasoning trace from the answer.

        Args:
            messages: Conversation messages

        Returns:
            ThinkingResponse
        """
        pass

    @abstractmethod
    async def fetch_models(self) -> List[ModelInfo]:
        """
        List models available from this vendor.

        Returns:
            List of ModelInfo, empty when listing fails
        """
        pass

    @abstractmethod
    async def test_connection(self) -> None:
        """Perform a minimal round trip, raising on failure."""
        pass

    def supports(self, capability: ProviderCapability) -> bool:
        return capability in self.capabilities

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.provider_type!r})"


class BaseProvider(AbstractProvider):
    """
    Shared implementation for HTTP vendor adapters.

    Owns the httpx client lifecycle, vendor error mapping, SSE line
    reading and the streaming callback protocol. Subclasses implement
    ``_complete`` and ``_stream_fragments``.
    """

    TEST_PROMPT = "ok"

    def __init__(
        self,
        config: ModelConfig,
        streaming: bool = False,
        settings: Optional[GatewaySettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        thought_extractor: Optional[ThoughtExtractor] = None,
    ):
        """
        Initialize the adapter.

        Args:
            config: Model configuration
            streaming: Use streaming transport settings and relay endpoint
            settings: Transport settings; read from the environment if omitted
            transport: Custom httpx transport
            thought_extractor: Text scanner used for thinking extraction
        """
        self.config = config
        self._streaming = streaming
        self._settings = settings or GatewaySettings.from_env()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self.thought_extractor = thought_extractor or ThoughtExtractor()
        self.thinking_extractor = ThinkingExtractor(self.thought_extractor)

    @property
    def model(self) -> str:
        return self.config.default_model

    @property
    def vendor(self) -> str:
        return self.config.provider_key or self.provider_type

    def _default_headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json"}

    def _error_context(self, **extra: Any) -> Dict[str, Any]:
        return {"provider": self.vendor, "model": self.model or None, **extra}

    # ------------------------------------------------------------------
    # Client lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        """Initialize the HTTP client."""
        if self._client is not None:
            return

        timeout = self._settings.stream_timeout if self._streaming else self._settings.timeout
        transport = self._transport or httpx.AsyncHTTPTransport(retries=self._settings.max_retries)

        self._client = httpx.AsyncClient(
            headers=self._default_headers(),
            timeout=timeout,
            transport=transport,
        )
        logger.debug(f"Opened HTTP client for {self.vendor}")

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BaseProvider":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.disconnect()

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    async def _post_json(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST a JSON body and return the decoded JSON response."""
        if not self._client:
            await self.connect()

        try:
            response = await self._client.post(url, json=payload)
        except httpx.TimeoutException as e:
            raise APIConnectionError(
                ERROR_MESSAGES["TIMEOUT"], context=self._error_context()
            ) from e
        except httpx.RequestError as e:
            raise APIConnectionError(
                f"{ERROR_MESSAGES['REQUEST_FAILED']}: {e}", context=self._error_context()
            ) from e

        self._check_response_errors(response)
        return self._decode_json(response)

    async def _get_json(self, url: str) -> Dict[str, Any]:
        if not self._client:
            await self.connect()

        try:
            response = await self._client.get(url)
        except httpx.RequestError as e:
            raise APIConnectionError(
                f"{ERROR_MESSAGES['REQUEST_FAILED']}: {e}", context=self._error_context()
            ) from e

        self._check_response_errors(response)
        return self._decode_json(response)

    def _decode_json(self, response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise APIError(
                ERROR_MESSAGES["RESPONSE_ERROR"],
                context=self._error_context(status_code=response.status_code),
            ) from e
        if not isinstance(data, dict):
            raise APIError(
                ERROR_MESSAGES["RESPONSE_ERROR"],
                context=self._error_context(status_code=response.status_code),
            )
        return data

    async def _iter_sse_data(self, url: str, payload: Dict[str, Any]) -> AsyncIterator[Dict[str, Any]]:
        """
        POST a streaming request and yield decoded ``data:`` frames.

        Stops at the ``[DONE]`` sentinel; undecodable frames are skipped.
        """
        if not self._client:
            await self.connect()

        try:
            async with self._client.stream("POST", url, json=payload) as response:
                if response.status_code >= 300:
                    await response.aread()
                    self._check_response_errors(response)

                async for line in response.aiter_lines():
                    if not line.startswith("data:"):
                        continue
                    data = line[5:].strip()
                    if data == "[DONE]":
                        break
                    try:
                        frame = json.loads(data)
                    except json.JSONDecodeError:
                        logger.debug(f"Skipping undecodable stream frame from {self.vendor}")
                        continue
                    if isinstance(frame, dict):
                        if frame.get("error"):
                            raise APIError(
                                self._error_detail(frame) or ERROR_MESSAGES["RESPONSE_ERROR"],
                                context=self._error_context(),
                            )
                        yield frame

        except httpx.TimeoutException as e:
            raise APIConnectionError(
                ERROR_MESSAGES["TIMEOUT"], context=self._error_context()
            ) from e
        except httpx.RequestError as e:
            raise APIConnectionError(
                f"{ERROR_MESSAGES['REQUEST_FAILED']}: {e}", context=self._error_context()
            ) from e

    @staticmethod
    def _error_detail(body: Any) -> str:
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict):
                return str(error.get("message") or error)
            if error:
                return str(error)
            if body.get("message"):
                return str(body["message"])
        if isinstance(body, list) and body:
            return BaseProvider._error_detail(body[0])
        return ""

    def _check_response_errors(self, response: httpx.Response) -> None:
        """Check response for errors and raise appropriate exceptions."""
        if 200 <= response.status_code < 300:
            return

        try:
            detail = self._error_detail(response.json())
        except ValueError:
            detail = response.text[:500]

        context = self._error_context(status_code=response.status_code)

        if response.status_code in (401, 403):
            raise APIAuthenticationError(
                f"Authentication failed: {detail or 'invalid API key'}", context=context
            )

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            try:
                retry_seconds = float(retry_after) if retry_after else None
            except ValueError:
                retry_seconds = None
            raise APIRateLimitError(
                "Rate limit exceeded", context=context, retry_after=retry_seconds
            )

        raise APIError(
            f"{ERROR_MESSAGES['REQUEST_FAILED']}: {response.status_code} - {detail}",
            context=context,
        )

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    @abstractmethod
    async def _complete(self, messages: List[Message], max_tokens: Optional[int] = None) -> str:
        """Run one non-streaming completion and return its text, possibly empty."""
        pass

    @abstractmethod
    def _stream_fragments(self, messages: List[Message]) -> AsyncIterator[str]:
        """Yield response text fragments in wire order."""
        pass

    async def send_message(self, messages: List[Message]) -> str:
        text = await self._complete(messages)
        if not text or not text.strip():
            raise APIError(ERROR_MESSAGES["EMPTY_RESPONSE"], context=self._error_context())
        return text

    async def send_message_stream(
        self,
        messages: List[Message],
        handlers: StreamHandlers,
    ) -> None:
        guard = GuardedStreamHandlers.wrap(handlers)

        try:
            async for fragment in self._stream_fragments(messages):
                if fragment:
                    await guard.token(fragment)
        except LLMServiceError as e:
            logger.error(f"Stream from {self.vendor} failed: {e}")
            await guard.error(e)
            raise
        except Exception as e:
            error = APIError(f"Stream failed: {e}", context=self._error_context())
            logger.error(f"Stream from {self.vendor} failed: {e}")
            await guard.error(error)
            raise error from e

        await guard.complete()

    async def send_message_with_thinking(self, messages: List[Message]) -> ThinkingResponse:
        content = await self.send_message(messages)
        return self.thinking_extractor.fallback_extract_thinking(content)

    async def test_connection(self) -> None:
        await self._complete([Message(role="user", content=self.TEST_PROMPT)], max_tokens=1)
