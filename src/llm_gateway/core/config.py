"""
Configuration loading for the LLM gateway.

Covers transport settings, logging setup, model configuration presets
and the read-only model configuration store boundary.
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable

import yaml

from ..models import ModelConfig

logger = logging.getLogger(__name__)


@dataclass
class GatewaySettings:
    """Transport-level settings shared by all adapters."""
    timeout: float = 60.0
    stream_timeout: float = 30.0
    max_retries: int = 2
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "GatewaySettings":
        return cls(
            timeout=float(os.getenv("LLM_GATEWAY_TIMEOUT", "60")),
            stream_timeout=float(os.getenv("LLM_GATEWAY_STREAM_TIMEOUT", "30")),
            max_retries=int(os.getenv("LLM_GATEWAY_MAX_RETRIES", "2")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for applications embedding the gateway."""
    level_name = (level or os.getenv("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO))


@runtime_checkable
class ModelConfigStore(Protocol):
    """Read-only view of the model configuration store."""

    def get_model(self, key: str) -> Optional[ModelConfig]:
        ...


class InMemoryModelStore:
    """Model configuration store backed by a dict."""

    def __init__(self, models: Optional[Mapping[str, ModelConfig]] = None):
        self._models: Dict[str, ModelConfig] = dict(models or {})

    def get_model(self, key: str) -> Optional[ModelConfig]:
        return self._models.get(key)

    def keys(self):
        return list(self._models.keys())

    def enabled_models(self) -> Dict[str, ModelConfig]:
        return {k: m for k, m in self._models.items() if m.enabled}

    def __contains__(self, key: str) -> bool:
        return key in self._models

    def __len__(self) -> int:
        return len(self._models)


def default_model_configs() -> Dict[str, ModelConfig]:
    """
    Built-in model presets.

    API keys, and the custom endpoint, come from environment variables.
    A preset is enabled only when its credential is present.
    """
    openai_key = os.getenv("OPENAI_API_KEY", "").strip()
    gemini_key = os.getenv("GEMINI_API_KEY", "").strip()
    deepseek_key = os.getenv("DEEPSEEK_API_KEY", "").strip()
    siliconflow_key = os.getenv("SILICONFLOW_API_KEY", "").strip()
    custom_key = os.getenv("CUSTOM_API_KEY", "").strip()
    custom_base_url = os.getenv("CUSTOM_API_BASE_URL", "").strip()
    custom_model = os.getenv("CUSTOM_API_MODEL", "").strip() or "custom-model"

    return {
        "openai": ModelConfig(
            name="OpenAI",
            base_url="https://api.openai.com/v1",
            models=["gpt-4", "gpt-3.5-turbo"],
            default_model="gpt-3.5-turbo",
            api_key=openai_key,
            enabled=bool(openai_key),
            provider="openai",
        ),
        "gemini": ModelConfig(
            name="Gemini",
            base_url="https://generativelanguage.googleapis.com",
            models=["gemini-2.0-flash"],
            default_model="gemini-2.0-flash",
            api_key=gemini_key,
            enabled=bool(gemini_key),
            provider="gemini",
        ),
        "deepseek": ModelConfig(
            name="DeepSeek",
            base_url="https://api.deepseek.com/v1",
            models=["deepseek-chat", "deepseek-reasoner"],
            default_model="deepseek-chat",
            api_key=deepseek_key,
            enabled=bool(deepseek_key),
            provider="deepseek",
        ),
        "siliconflow": ModelConfig(
            name="SiliconFlow",
            base_url="https://api.siliconflow.cn/v1",
            models=["Pro/deepseek-ai/DeepSeek-V3"],
            default_model="Pro/deepseek-ai/DeepSeek-V3",
            api_key=siliconflow_key,
            enabled=bool(siliconflow_key),
            provider="siliconflow",
        ),
        "custom": ModelConfig(
            name="Custom",
            base_url=custom_base_url,
            models=[custom_model],
            default_model=custom_model,
            api_key=custom_key,
            enabled=bool(custom_key) and bool(custom_base_url),
            provider="custom",
        ),
    }


def load_model_configs(config_path: Optional[str] = None) -> Dict[str, ModelConfig]:
    """
    Load model configurations from a YAML file.

    Args:
        config_path: Path to config file. If None, common locations are tried.

    Returns:
        Mapping of model key to configuration; the built-in presets when
        no file is found or it cannot be parsed
    """
    if config_path is None:
        paths = [
            Path("config/llm-gateway/models.yaml"),
            Path("/etc/llm-gateway/models.yaml"),
            Path.home() / ".config/llm-gateway/models.yaml",
        ]
        for p in paths:
            if p.exists():
                config_path = str(p)
                break

    if config_path is None or not Path(config_path).exists():
        logger.warning("No model config file found, using built-in presets")
        return default_model_configs()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}

        return parse_model_configs(data)

    except (OSError, yaml.YAMLError, ValueError) as e:
        logger.error(f"Failed to load model config from {config_path}: {e}")
        return default_model_configs()


def _expand_env(value: Any) -> Any:
    if isinstance(value, str) and value.startswith("${") and value.endswith("}"):
        return os.environ.get(value[2:-1], "")
    return value


def parse_model_configs(data: Mapping[str, Any]) -> Dict[str, ModelConfig]:
    """Parse the ``models`` section of a configuration dictionary."""
    configs = {}

    for key, model_data in (data.get("models") or {}).items():
        model_data = dict(model_data or {})
        model_data["api_key"] = _expand_env(model_data.get("api_key", ""))
        model_data["base_url"] = _expand_env(model_data.get("base_url", ""))
        if "enabled" not in model_data:
            model_data["enabled"] = bool(model_data["api_key"])
        configs[key] = ModelConfig(**model_data)

    return configs
