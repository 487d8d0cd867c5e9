"""Domain models for design generation sessions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

GENERATED_MIME_TYPE = "image/png"

PLACEHOLDER_PROS = ["Analysis failed to generate."]
PLACEHOLDER_CONS = ["Could not connect to the analysis service."]


class CycleState(str, Enum):
    """Lifecycle of a single generation cycle."""

    IDLE = "idle"
    VALIDATING = "validating"
    ENCODING = "encoding"
    EDITING = "editing"
    ANALYZING = "analyzing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class SourceImage:
    """User-supplied product image."""

    content: bytes
    mime_type: str
    filename: Optional[str] = None


@dataclass(frozen=True)
class EncodedImage:
    """Base64 text of an image (no data URL prefix) and its MIME type."""

    data: str
    mime_type: str


@dataclass(frozen=True)
class GenerationRequest:
    """Payload shared by every edit request of a cycle."""

    image_data: str
    mime_type: str
    prompt: str


@dataclass(frozen=True)
class GeneratedVariant:
    """One AI-edited image, base64 encoded."""

    data: str
    mime_type: str = GENERATED_MIME_TYPE

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


class Critique(BaseModel):
    """Pros and cons of a generated design relative to the user's request."""

    model_config = ConfigDict(extra="forbid")

    pros: List[str]
    cons: List[str]

    @classmethod
    def placeholder(cls) -> "Critique":
        """Return the critique shown when analysis is unavailable."""
        return cls(pros=list(PLACEHOLDER_PROS), cons=list(PLACEHOLDER_CONS))

    @property
    def is_placeholder(self) -> bool:
        return self.pros == PLACEHOLDER_PROS and self.cons == PLACEHOLDER_CONS


@dataclass
class GenerationSession:
    """Ephemeral state for one user's design workspace.

    `critiques` is either empty or index-aligned with `variants`. `cycle_token`
    identifies the current cycle; a cycle whose token is stale writes nothing.
    """

    session_id: str
    source_image: Optional[SourceImage] = None
    prompt: str = ""
    variants: List[GeneratedVariant] = field(default_factory=list)
    critiques: List[Critique] = field(default_factory=list)
    in_flight: bool = False
    error: Optional[str] = None
    state: CycleState = CycleState.IDLE
    cycle_token: int = 0

    def reset(self) -> None:
        """Discard results of any previous cycle."""
        self.variants = []
        self.critiques = []
        self.error = None
        self.state = CycleState.IDLE

    @property
    def can_generate(self) -> bool:
        return self.source_image is not None and bool(self.prompt.strip()) and not self.in_flight
