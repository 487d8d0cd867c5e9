"""Product image editing via the Responses API image generation tool."""

import logging
import os
import time
from typing import Any

from openai import AsyncOpenAI

from models.design_models import GeneratedVariant, GenerationRequest
from services.openai.media_inputs import build_edit_inputs
from services.openai.response_parser import extract_generated_image, extract_usage

LOGGER = logging.getLogger(__name__)
EDIT_MODEL = os.getenv("OPENAI_IMAGE_EDIT_MODEL", "gpt-4.1")

IMAGE_TOOL = {"type": "image_generation", "output_format": "png"}


class ImageEditor:
    """Produce one edited variant of a source image per call."""

    def __init__(self, client: AsyncOpenAI, model: str = EDIT_MODEL) -> None:
        """Initialize the editor with an OpenAI async client."""
        if client is None:
            raise ValueError("OpenAI client must be provided.")
        self.client = client
        self.model = model

    async def edit(self, request: GenerationRequest) -> GeneratedVariant:
        """Return the first image produced for `request`.

        Raises:
            NoContentError: If the response contains no image.
        """
        start = time.time()
        response = await self._create_response(request)
        data = extract_generated_image(response)
        LOGGER.debug(
            "Edit completed in %.3fs (usage=%s)", time.time() - start, extract_usage(response)
        )
        return GeneratedVariant(data=data)

    async def _create_response(self, request: GenerationRequest) -> Any:
        """Send the edit request, forcing an image output."""
        try:
            return await self.client.responses.create(
                model=self.model,
                input=build_edit_inputs(request),
                tools=[IMAGE_TOOL],
                tool_choice={"type": "image_generation"},
            )
        except Exception as exc:
            LOGGER.error("Error during image edit request: %s", exc)
            raise
