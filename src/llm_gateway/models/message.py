"""
Request and response value objects shared by every provider.
"""

from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict


MessageRole = Literal["system", "user", "assistant"]


class Message(BaseModel):
    """A single conversation turn."""
    model_config = ConfigDict(frozen=True)

    role: MessageRole
    content: str

    def to_openai_format(self) -> dict:
        return {"role": self.role, "content": self.content}


class ModelInfo(BaseModel):
    """A model exposed by a vendor."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str


class ModelOption(BaseModel):
    """Model entry in the shape a picker consumes."""
    model_config = ConfigDict(frozen=True)

    value: str
    label: str

    @classmethod
    def from_model_info(cls, info: ModelInfo) -> "ModelOption":
        return cls(value=info.id, label=info.name)


class ThinkingResponse(BaseModel):
    """
    Answer paired with the reasoning trace that produced it.

    ``thinking`` is None when no channel yielded a trace; ``content``
    always holds text, falling back to the raw response.
    """
    model_config = ConfigDict(frozen=True)

    thinking: Optional[str] = None
    content: str = ""

    @property
    def has_thinking(self) -> bool:
        return bool(self.thinking)


class ThoughtExtractionResult(BaseModel):
    """
    Output of the text marker scanner.

    ``answer`` is None when the reasoning block is never closed.
    """
    model_config = ConfigDict(frozen=True)

    thinking: Optional[str] = None
    answer: Optional[str] = None
