"""
LLM gateway error types.

Every failure surfaced by the gateway belongs to one of four kinds:
validation, configuration, vendor API, or dependency.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional


ERROR_MESSAGES = {
    # Configuration
    "API_KEY_REQUIRED": "API key is required",
    "BASE_URL_REQUIRED": "API base URL is required",
    "PROVIDER_REQUIRED": "Model provider is required",
    "MODEL_NOT_FOUND": "Model configuration not found",
    "MODEL_KEY_REQUIRED": "Model key is required",
    "DEFAULT_MODEL_REQUIRED": "Default model is required",
    "DEFAULT_MODEL_UNSUPPORTED": "Default model is not in the supported model list",
    "MODEL_DISABLED": "Model is disabled",
    "CONFIG_REQUIRED": "Model configuration is required",
    "INVALID_CUSTOM_CONFIG": "Invalid configuration overrides",
    # Request
    "REQUEST_FAILED": "Request failed",
    "RESPONSE_ERROR": "Malformed response",
    "EMPTY_RESPONSE": "Empty response from model",
    "TIMEOUT": "Request timed out",
    # Messages
    "EMPTY_MESSAGES": "Message list must not be empty",
    "MESSAGES_NOT_SEQUENCE": "Messages must be a list",
    "INVALID_MESSAGE_FORMAT": "Invalid message format: missing required field",
    "INVALID_ROLE": "Unsupported message role",
    "INVALID_CONTENT": "Message content must be a string",
    "NO_USER_MESSAGE": "Conversation must end with a user message",
    # Dependencies
    "STORE_UNAVAILABLE": "Model configuration store is unavailable",
    "ADAPTER_UNAVAILABLE": "Provider adapter could not be created",
}


class ErrorKind(str, Enum):
    """Closed set of error kinds."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    API = "api"
    DEPENDENCY = "dependency"


class LLMServiceError(Exception):
    """Base exception for LLM gateway errors."""

    kind: ErrorKind = ErrorKind.API
    default_code = "LLM_SERVICE_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.context: Mapping[str, Any] = MappingProxyType(
            {k: v for k, v in (context or {}).items() if v is not None}
        )
        super().__init__(message)

    @property
    def provider(self) -> Optional[str]:
        return self.context.get("provider")

    @property
    def model(self) -> Optional[str]:
        return self.context.get("model")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for logs and API responses."""
        return {
            "name": self.__class__.__name__,
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "context": {
                k: v for k, v in self.context.items() if k != "original_error"
            },
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ValidationError(LLMServiceError):
    """Raised when a message list or message is malformed."""

    kind = ErrorKind.VALIDATION
    default_code = "VALIDATION_ERROR"

    @property
    def field(self) -> Optional[str]:
        return self.context.get("field")


class ConfigurationError(LLMServiceError):
    """Raised when a model configuration is missing, invalid or disabled."""

    kind = ErrorKind.CONFIGURATION
    default_code = "LLM_CONFIG_ERROR"

    @property
    def field(self) -> Optional[str]:
        return self.context.get("field")


class APIError(LLMServiceError):
    """Raised when the vendor API call fails."""

    kind = ErrorKind.API
    default_code = "LLM_API_ERROR"

    @property
    def status_code(self) -> Optional[int]:
        return self.context.get("status_code")


class APIConnectionError(APIError):
    """Raised when the vendor endpoint cannot be reached or times out."""
    pass


class APIAuthenticationError(APIError):
    """Raised when the vendor rejects the credential."""
    pass


class APIRateLimitError(APIError):
    """Raised when the vendor rate limit is exceeded."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        context: Optional[Mapping[str, Any]] = None,
        retry_after: Optional[float] = None,
    ):
        super().__init__(message, code, context)
        self.retry_after = retry_after


class DependencyError(LLMServiceError):
    """Raised when a required collaborator is unavailable."""

    kind = ErrorKind.DEPENDENCY
    default_code = "DEPENDENCY_ERROR"


def create_api_error(message: str, **context: Any) -> APIError:
    return APIError(message, context=context)


def create_config_error(message: str, **context: Any) -> ConfigurationError:
    return ConfigurationError(message, context=context)


def create_validation_error(message: str, **context: Any) -> ValidationError:
    return ValidationError(message, context=context)


def create_dependency_error(message: str, **context: Any) -> DependencyError:
    return DependencyError(message, context=context)
