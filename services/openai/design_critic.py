"""Structured pros/cons critique of generated designs."""

import logging
import os
from typing import Any

from openai import AsyncOpenAI
from pydantic import ValidationError as SchemaValidationError

from models.design_models import Critique, GeneratedVariant
from services.generation.errors import AnalysisFailure
from services.openai.critique_schema import FUNCTION_DEFINITION, FUNCTION_NAME
from services.openai.media_inputs import build_critique_inputs
from services.openai.response_parser import parse_function_call

LOGGER = logging.getLogger(__name__)
CRITIQUE_MODEL = os.getenv("OPENAI_CRITIQUE_MODEL", "gpt-5")


class DesignCritic:
    """Ask a vision model for the pros and cons of a generated variant."""

    def __init__(self, client: AsyncOpenAI, model: str = CRITIQUE_MODEL) -> None:
        if client is None:
            raise ValueError("OpenAI client must be provided.")
        self.client = client
        self.model = model

    async def critique(self, variant: GeneratedVariant, user_prompt: str) -> Critique:
        """Return a validated critique of `variant` against `user_prompt`.

        Raises:
            AnalysisFailure: On transport errors, unparseable arguments, or
                arguments that do not match the critique schema.
        """
        try:
            response = await self._create_response(variant, user_prompt)
            arguments = parse_function_call(response, tool_name=FUNCTION_NAME)
            return Critique.model_validate(arguments)
        except SchemaValidationError as exc:
            LOGGER.error("Critique did not match schema: %s", exc)
            raise AnalysisFailure("Critique did not match the expected schema.") from exc
        except Exception as exc:
            LOGGER.error("Error analyzing design: %s", exc)
            raise AnalysisFailure() from exc

    async def _create_response(self, variant: GeneratedVariant, user_prompt: str) -> Any:
        return await self.client.responses.create(
            model=self.model,
            input=build_critique_inputs(variant, user_prompt),
            tools=[FUNCTION_DEFINITION],
            tool_choice={"type": "function", "name": FUNCTION_NAME},
        )
