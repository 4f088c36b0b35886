"""
Core gateway components.

The provider factory lives in ``llm_gateway.core.registry``; it imports
the adapters, which in turn build on this package.
"""

from .interface import AbstractProvider, BaseProvider, ProviderCapability
from .config import (
    GatewaySettings,
    InMemoryModelStore,
    ModelConfigStore,
    configure_logging,
    default_model_configs,
    load_model_configs,
)
from .environment import get_proxy_url, is_relay_available, resolve_url
from .validator import Validator, ValidationLevel
from .errors import (
    ERROR_MESSAGES,
    ErrorKind,
    LLMServiceError,
    ValidationError,
    ConfigurationError,
    APIError,
    APIConnectionError,
    APIAuthenticationError,
    APIRateLimitError,
    DependencyError,
)

__all__ = [
    "AbstractProvider",
    "BaseProvider",
    "ProviderCapability",
    "GatewaySettings",
    "InMemoryModelStore",
    "ModelConfigStore",
    "configure_logging",
    "default_model_configs",
    "load_model_configs",
    "get_proxy_url",
    "is_relay_available",
    "resolve_url",
    "Validator",
    "ValidationLevel",
    "ERROR_MESSAGES",
    "ErrorKind",
    "LLMServiceError",
    "ValidationError",
    "ConfigurationError",
    "APIError",
    "APIConnectionError",
    "APIAuthenticationError",
    "APIRateLimitError",
    "DependencyError",
]
