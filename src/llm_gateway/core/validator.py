"""
Stateless checks guarding every gateway call.

Validation and configuration failures are raised before any network
call is attempted.
"""

from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, List

from ..models import Message, ModelConfig
from .errors import ConfigurationError, ValidationError, ERROR_MESSAGES

VALID_ROLES = ("system", "user", "assistant")


class ValidationLevel(str, Enum):
    """How strictly a model configuration is checked."""
    FULL = "full"        # before a completion call
    MINIMAL = "minimal"  # before listing models: credential and base URL only


class Validator:
    """Validation helpers for messages and model configurations."""

    @staticmethod
    def validate_messages(messages: Any) -> List[Message]:
        """
        Validate a message sequence.

        Args:
            messages: Sequence of Message objects or role/content mappings

        Returns:
            The messages normalized to Message objects

        Raises:
            ValidationError: If the sequence is empty, not a sequence, or
                contains a malformed entry
        """
        if isinstance(messages, (str, bytes)) or not isinstance(messages, Sequence):
            raise ValidationError(ERROR_MESSAGES["MESSAGES_NOT_SEQUENCE"])
        if len(messages) == 0:
            raise ValidationError(ERROR_MESSAGES["EMPTY_MESSAGES"])

        normalized = []
        for index, msg in enumerate(messages):
            if isinstance(msg, Message):
                role, content = msg.role, msg.content
            elif isinstance(msg, Mapping):
                role, content = msg.get("role"), msg.get("content")
            else:
                raise ValidationError(
                    ERROR_MESSAGES["INVALID_MESSAGE_FORMAT"],
                    context={"field": f"messages[{index}]"},
                )

            if not role or content is None or content == "":
                raise ValidationError(
                    ERROR_MESSAGES["INVALID_MESSAGE_FORMAT"],
                    context={"field": f"messages[{index}]"},
                )
            if role not in VALID_ROLES:
                raise ValidationError(
                    f"{ERROR_MESSAGES['INVALID_ROLE']}: {role}",
                    context={"field": f"messages[{index}].role"},
                )
            if not isinstance(content, str):
                raise ValidationError(
                    ERROR_MESSAGES["INVALID_CONTENT"],
                    context={"field": f"messages[{index}].content"},
                )

            normalized.append(msg if isinstance(msg, Message) else Message(role=role, content=content))

        return normalized

    @staticmethod
    def validate_model_config(
        config: ModelConfig,
        level: ValidationLevel = ValidationLevel.FULL,
    ) -> None:
        """
        Validate a model configuration.

        Args:
            config: Configuration to check
            level: FULL before completions, MINIMAL before model listing

        Raises:
            ConfigurationError: If a required field is missing, the default
                model is unsupported, or the model is disabled
        """
        if config is None:
            raise ConfigurationError(ERROR_MESSAGES["CONFIG_REQUIRED"])

        context = {"provider": config.provider or None, "model": config.default_model or None}

        if not config.api_key:
            raise ConfigurationError(
                ERROR_MESSAGES["API_KEY_REQUIRED"], context={**context, "field": "api_key"}
            )
        if not config.base_url:
            raise ConfigurationError(
                ERROR_MESSAGES["BASE_URL_REQUIRED"], context={**context, "field": "base_url"}
            )

        if level is ValidationLevel.MINIMAL:
            return

        if not config.provider:
            raise ConfigurationError(
                ERROR_MESSAGES["PROVIDER_REQUIRED"], context={**context, "field": "provider"}
            )
        if not config.default_model:
            raise ConfigurationError(
                ERROR_MESSAGES["DEFAULT_MODEL_REQUIRED"],
                context={**context, "field": "default_model"},
            )
        if config.models and config.default_model not in config.models:
            raise ConfigurationError(
                ERROR_MESSAGES["DEFAULT_MODEL_UNSUPPORTED"],
                context={**context, "field": "default_model"},
            )
        if not config.enabled:
            raise ConfigurationError(
                ERROR_MESSAGES["MODEL_DISABLED"], context={**context, "field": "enabled"}
            )
