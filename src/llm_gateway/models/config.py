"""
Model configuration value object.
"""

from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_TEMPERATURE = 0.7


class ModelConfig(BaseModel):
    """
    Connection settings for one vendor model.

    Supplied by the model configuration store and never mutated by
    the gateway. Use ``merged`` to derive an overridden copy.
    """
    model_config = ConfigDict(frozen=True)

    provider: str = ""
    name: str = ""
    base_url: str = ""
    api_key: Optional[str] = Field(default=None, repr=False)
    models: List[str] = Field(default_factory=list)
    default_model: str = ""
    enabled: bool = True
    use_proxy: bool = False

    # Generation parameters
    temperature: Optional[float] = Field(default=None, ge=0, le=2)
    max_tokens: Optional[int] = Field(default=None, ge=1)

    @property
    def provider_key(self) -> str:
        return self.provider.strip().lower()

    @property
    def effective_temperature(self) -> float:
        if self.temperature is None:
            return DEFAULT_TEMPERATURE
        return self.temperature

    def merged(self, **overrides: Any) -> "ModelConfig":
        """
        Return a validated copy with non-None overrides applied.

        Raises:
            ValueError: Unknown field names or out-of-range values
        """
        unknown = sorted(set(overrides) - set(type(self).model_fields))
        if unknown:
            raise ValueError(f"Unknown model configuration fields: {', '.join(unknown)}")
        updates = {k: v for k, v in overrides.items() if v is not None}
        return self.model_validate({**self.model_dump(), **updates})
