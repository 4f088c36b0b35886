"""
LLM service facade.

Every operation follows the same path: resolve the model configuration,
validate it and the messages, create an adapter, run the adapter call,
and wrap unexpected failures in the gateway error taxonomy. No retries
happen at this layer.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Tuple, TypeVar, Union

import httpx

from .core.config import GatewaySettings, InMemoryModelStore, ModelConfigStore, load_model_configs
from .core.errors import (
    ERROR_MESSAGES,
    LLMServiceError,
    create_api_error,
    create_config_error,
    create_dependency_error,
)
from .core.interface import BaseProvider
from .core.registry import ProviderFactory
from .core.validator import ValidationLevel, Validator
from .models import (
    GuardedStreamHandlers,
    Message,
    ModelConfig,
    ModelOption,
    StreamHandlers,
    ThinkingResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

MessagesInput = Sequence[Union[Message, Dict[str, Any]]]


class LLMService:
    """
    Gateway between the application and the vendor adapters.

    Args:
        model_store: Read-only model configuration store
        factory: Provider factory used to create adapters
    """

    def __init__(
        self,
        model_store: Optional[ModelConfigStore] = None,
        factory: Optional[ProviderFactory] = None,
    ):
        self.model_store = model_store if model_store is not None else InMemoryModelStore(load_model_configs())
        self.factory = factory or ProviderFactory()

    # ------------------------------------------------------------------
    # Skeleton
    # ------------------------------------------------------------------

    def _lookup_config(self, model_key: str) -> Optional[ModelConfig]:
        if not model_key:
            raise create_config_error(ERROR_MESSAGES["MODEL_KEY_REQUIRED"], field="model_key")

        try:
            return self.model_store.get_model(model_key)
        except LLMServiceError:
            raise
        except Exception as e:
            logger.error(f"Model store lookup failed for {model_key}: {e}")
            raise create_dependency_error(
                ERROR_MESSAGES["STORE_UNAVAILABLE"], model_key=model_key
            ) from e

    def _resolve_config(self, model_key: str) -> ModelConfig:
        config = self._lookup_config(model_key)
        if config is None:
            raise create_config_error(
                f"{ERROR_MESSAGES['MODEL_NOT_FOUND']}: {model_key}", model_key=model_key
            )
        return config

    async def _execute(
        self,
        config: ModelConfig,
        call: Callable[[BaseProvider], Awaitable[T]],
        streaming: bool = False,
    ) -> T:
        """
        Run one adapter call.

        Adapter construction failures become DependencyError and failures
        during the call become APIError; taxonomy errors pass through.
        """
        try:
            adapter = self.factory.create_provider(config, streaming=streaming)
        except LLMServiceError:
            raise
        except Exception as e:
            logger.error(f"Failed to create {config.provider} adapter: {e}")
            raise create_dependency_error(
                f"{ERROR_MESSAGES['ADAPTER_UNAVAILABLE']}: {e}",
                provider=config.provider,
                model=config.default_model,
            ) from e

        try:
            async with adapter:
                return await call(adapter)
        except LLMServiceError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error from {config.provider} adapter: {e}")
            raise create_api_error(
                f"{ERROR_MESSAGES['REQUEST_FAILED']}: {e}",
                provider=config.provider,
                model=config.default_model,
            ) from e

    def _prepare(
        self,
        messages: MessagesInput,
        model_key: str,
    ) -> Tuple[List[Message], ModelConfig]:
        config = self._resolve_config(model_key)
        validated = Validator.validate_messages(messages)
        Validator.validate_model_config(config)
        return validated, config

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def send_message(self, messages: MessagesInput, model_key: str) -> str:
        """
        Send a conversation and return the complete answer.

        Args:
            messages: Conversation messages
            model_key: Key of the model configuration in the store

        Returns:
            Non-empty response text

        Raises:
            ValidationError: Malformed messages
            ConfigurationError: Missing, invalid or disabled configuration
            DependencyError: Model store unavailable
            APIError: Vendor call failed or returned nothing
        """
        validated, config = self._prepare(messages, model_key)
        logger.info(f"Sending message via {model_key} ({config.provider}/{config.default_model})")
        return await self._execute(config, lambda adapter: adapter.send_message(validated))

    async def send_message_stream(
        self,
        messages: MessagesInput,
        model_key: str,
        handlers: StreamHandlers,
    ) -> None:
        """
        Send a conversation and deliver the answer through callbacks.

        Exactly one of ``on_complete`` or ``on_error`` fires. Failures are
        also raised to the awaiting caller.
        """
        guard = GuardedStreamHandlers.wrap(handlers)
        try:
            validated, config = self._prepare(messages, model_key)
            logger.info(f"Streaming message via {model_key} ({config.provider}/{config.default_model})")
            await self._execute(
                config,
                lambda adapter: adapter.send_message_stream(validated, guard),
                streaming=True,
            )
        except LLMServiceError as e:
            await guard.error(e)
            raise

    async def send_message_with_thinking(
        self,
        messages: MessagesInput,
        model_key: str,
    ) -> ThinkingResponse:
        """Send a conversation and separate the reasoning trace from the answer."""
        validated, config = self._prepare(messages, model_key)
        logger.info(f"Sending thinking request via {model_key} ({config.provider}/{config.default_model})")
        return await self._execute(
            config, lambda adapter: adapter.send_message_with_thinking(validated)
        )

    async def test_connection(self, model_key: str) -> None:
        """Check that the configured vendor answers a one-token request."""
        config = self._resolve_config(model_key)
        Validator.validate_model_config(config)
        logger.info(f"Testing connection for {model_key}")
        await self._execute(config, lambda adapter: adapter.test_connection())

    async def fetch_model_list(
        self,
        model_key: str,
        custom_config: Optional[Dict[str, Any]] = None,
    ) -> List[ModelOption]:
        """
        List models offered by a vendor as picker options.

        Args:
            model_key: Key of the model configuration in the store
            custom_config: Field overrides, e.g. an unsaved API key or base URL.
                When the key is not in the store, the overrides alone describe
                the vendor.

        Returns:
            List of ModelOption; empty when the vendor listing fails
        """
        config = self._lookup_config(model_key)
        if config is None:
            if not custom_config:
                raise create_config_error(
                    f"{ERROR_MESSAGES['MODEL_NOT_FOUND']}: {model_key}", model_key=model_key
                )
            logger.info(f"Listing models for unsaved configuration {model_key}")
            config = ModelConfig()
        if custom_config:
            try:
                config = config.merged(**custom_config)
            except ValueError as e:
                raise create_config_error(
                    f"{ERROR_MESSAGES['INVALID_CUSTOM_CONFIG']}: {e}",
                    field="custom_config",
                    model_key=model_key,
                ) from e
        Validator.validate_model_config(config, ValidationLevel.MINIMAL)

        models = await self._execute(config, lambda adapter: adapter.fetch_models())
        logger.info(f"Fetched {len(models)} models for {model_key}")
        return [ModelOption.from_model_info(m) for m in models]


def create_llm_service(
    model_store: Optional[ModelConfigStore] = None,
    config_path: Optional[str] = None,
    settings: Optional[GatewaySettings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> LLMService:
    """
    Build an LLMService with default collaborators.

    Args:
        model_store: Model configuration store; loaded from YAML or presets if omitted
        config_path: Model configuration file used when no store is given
        settings: Transport settings for all adapters
        transport: Custom httpx transport for all adapters

    Returns:
        Configured LLMService
    """
    if model_store is None:
        model_store = InMemoryModelStore(load_model_configs(config_path))
    return LLMService(
        model_store=model_store,
        factory=ProviderFactory(settings=settings, transport=transport),
    )
