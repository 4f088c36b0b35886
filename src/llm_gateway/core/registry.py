"""
Provider factory for selecting vendor adapters.
"""

import logging
from enum import Enum
from typing import Dict, Optional, Type, Union

import httpx

from ..adapters.anthropic_adapter import AnthropicAdapter
from ..adapters.gemini_adapter import GeminiAdapter
from ..adapters.openai_adapter import OpenAIAdapter
from ..models import ModelConfig
from .config import GatewaySettings
from .interface import BaseProvider

logger = logging.getLogger(__name__)


class Vendor(str, Enum):
    """Vendors known to the factory."""
    OPENAI = "openai"
    DEEPSEEK = "deepseek"
    OLLAMA = "ollama"
    SILICONFLOW = "siliconflow"
    CUSTOM = "custom"
    GEMINI = "gemini"
    ANTHROPIC = "anthropic"

    @classmethod
    def parse(cls, value: Union[str, "Vendor", None]) -> Optional["Vendor"]:
        """Case-insensitive lookup; None for vendors outside the enum."""
        if isinstance(value, Vendor):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return None


DEFAULT_ADAPTERS: Dict[Vendor, Type[BaseProvider]] = {
    Vendor.OPENAI: OpenAIAdapter,
    Vendor.DEEPSEEK: OpenAIAdapter,
    Vendor.OLLAMA: OpenAIAdapter,
    Vendor.SILICONFLOW: OpenAIAdapter,
    Vendor.CUSTOM: OpenAIAdapter,
    Vendor.GEMINI: GeminiAdapter,
    Vendor.ANTHROPIC: AnthropicAdapter,
}


class ProviderFactory:
    """
    Creates vendor adapters from model configurations.

    Vendors without a registered adapter are served by the generic
    chat-completion adapter.
    """

    fallback_adapter: Type[BaseProvider] = OpenAIAdapter

    def __init__(
        self,
        settings: Optional[GatewaySettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the factory.

        Args:
            settings: Transport settings passed to every adapter
            transport: Custom httpx transport passed to every adapter
        """
        self._settings = settings
        self._transport = transport
        self._adapters: Dict[str, Type[BaseProvider]] = {
            vendor.value: adapter for vendor, adapter in DEFAULT_ADAPTERS.items()
        }

    def register_provider(
        self,
        vendor: Union[str, Vendor],
        adapter_class: Type[BaseProvider],
    ) -> None:
        """
        Register an adapter class for a vendor.

        Args:
            vendor: Vendor enum member or vendor id (case-insensitive)
            adapter_class: Adapter class to register
        """
        key = vendor.value if isinstance(vendor, Vendor) else vendor.strip().lower()
        self._adapters[key] = adapter_class
        logger.info(f"Registered provider adapter: {key} -> {adapter_class.__name__}")

    def get_adapter_class(self, vendor: Union[str, Vendor, None]) -> Type[BaseProvider]:
        if isinstance(vendor, Vendor):
            key = vendor.value
        else:
            key = (vendor or "").strip().lower()
        return self._adapters.get(key, self.fallback_adapter)

    def create_provider(self, config: ModelConfig, streaming: bool = False) -> BaseProvider:
        """
        Create an adapter for a model configuration.

        Args:
            config: Model configuration
            streaming: Whether the adapter serves a streaming call

        Returns:
            Adapter instance (not yet connected)
        """
        adapter_class = self.get_adapter_class(config.provider)
        if config.provider_key not in self._adapters:
            logger.info(
                f"No adapter registered for vendor {config.provider!r}, "
                f"using {adapter_class.__name__}"
            )

        adapter = adapter_class(
            config,
            streaming=streaming,
            settings=self._settings,
            transport=self._transport,
        )
        logger.debug(f"Created provider {adapter!r} for model {config.default_model}")
        return adapter

