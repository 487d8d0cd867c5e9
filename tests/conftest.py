"""Shared fixtures: fake OpenAI Responses client and sample images."""

from __future__ import annotations

import asyncio
import io
import json
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
from PIL import Image

from models.design_models import SourceImage
from services.openai.critique_schema import FUNCTION_NAME


def image_response(data: Optional[str]) -> SimpleNamespace:
    """Build a Responses API result with one image generation call."""
    output = [] if data is None else [SimpleNamespace(type="image_generation_call", result=data)]
    return SimpleNamespace(output=output, usage=SimpleNamespace(input_tokens=10, output_tokens=20))


def critique_response(arguments: Any) -> SimpleNamespace:
    """Build a Responses API result with one critique function call."""
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    call = SimpleNamespace(type="function_call", name=FUNCTION_NAME, arguments=arguments)
    return SimpleNamespace(output=[call], usage=None)


class FakeOpenAI:
    """Stand-in for `AsyncOpenAI` that routes edit and critique calls.

    `edit_outcome(n)` returns the variant data (or raises) for the n-th edit
    call; `critique_outcome(data)` returns critique arguments (or raises) for
    the variant whose base64 data is `data`. `edit_delay(n)` lets tests make
    responses arrive out of order.
    """

    def __init__(
        self,
        edit_outcome: Optional[Callable[[int], Optional[str]]] = None,
        critique_outcome: Optional[Callable[[str], Any]] = None,
        edit_delay: Optional[Callable[[int], float]] = None,
    ) -> None:
        self.edit_outcome = edit_outcome or (lambda n: f"variant-{n}")
        self.critique_outcome = critique_outcome or (
            lambda data: {"pros": [f"{data} looks sleek"], "cons": [f"{data} is costly"]}
        )
        self.edit_delay = edit_delay or (lambda n: 0)
        self.edit_calls: List[Dict[str, Any]] = []
        self.critique_calls: List[Dict[str, Any]] = []
        self.responses = SimpleNamespace(create=AsyncMock(side_effect=self._create))

    @property
    def call_count(self) -> int:
        return self.responses.create.await_count

    async def _create(self, **kwargs: Any) -> Any:
        tool_type = kwargs["tools"][0]["type"]
        if tool_type == "image_generation":
            index = len(self.edit_calls)
            self.edit_calls.append(kwargs)
            await asyncio.sleep(self.edit_delay(index))
            return image_response(self.edit_outcome(index))

        self.critique_calls.append(kwargs)
        image_url = kwargs["input"][1]["content"][0]["image_url"]
        data = image_url.split(",", 1)[1]
        outcome = self.critique_outcome(data)
        if isinstance(outcome, SimpleNamespace):
            return outcome
        return critique_response(outcome)


def make_png_bytes(color: str = "red") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8), color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png_bytes()


@pytest.fixture
def source_image(png_bytes: bytes) -> SourceImage:
    return SourceImage(content=png_bytes, mime_type="image/png", filename="shoe.png")


@pytest.fixture
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()
