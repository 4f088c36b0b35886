"""
LLM Gateway

A uniform interface over chat-completion vendors:
- OpenAI-compatible, Gemini and Anthropic adapters
- Streaming with exactly-once terminal callbacks
- Reasoning trace extraction from native fields, tool calls or text
- A single error taxonomy for validation, configuration, vendor and store failures
"""

from .core.interface import AbstractProvider, BaseProvider, ProviderCapability
from .core.registry import ProviderFactory, Vendor
from .core.config import (
    GatewaySettings,
    InMemoryModelStore,
    ModelConfigStore,
    configure_logging,
    load_model_configs,
)
from .core.errors import (
    LLMServiceError,
    ValidationError,
    ConfigurationError,
    APIError,
    DependencyError,
)
from .core.validator import Validator, ValidationLevel
from .extractors import DeepSeekThoughtExtractor, ThinkingExtractor, ThoughtExtractor
from .models import (
    Message,
    ModelConfig,
    ModelInfo,
    ModelOption,
    StreamHandlers,
    ThinkingResponse,
    ThoughtExtractionResult,
)
from .service import LLMService, create_llm_service

__all__ = [
    "AbstractProvider",
    "BaseProvider",
    "ProviderCapability",
    "ProviderFactory",
    "Vendor",
    "GatewaySettings",
    "InMemoryModelStore",
    "ModelConfigStore",
    "configure_logging",
    "load_model_configs",
    "LLMServiceError",
    "ValidationError",
    "ConfigurationError",
    "APIError",
    "DependencyError",
    "Validator",
    "ValidationLevel",
    "DeepSeekThoughtExtractor",
    "ThinkingExtractor",
    "ThoughtExtractor",
    "Message",
    "ModelConfig",
    "ModelInfo",
    "ModelOption",
    "StreamHandlers",
    "ThinkingResponse",
    "ThoughtExtractionResult",
    "LLMService",
    "create_llm_service",
]
