"""Generate-then-critique orchestration for one design session.

A cycle encodes the source image once, requests `VARIANT_COUNT` edits in
parallel (all-or-nothing), then requests one critique per variant in parallel
(each failure degrades to a placeholder). Every mutation of a
`GenerationSession` goes through `select_image`, `set_prompt` or
`run_generation_cycle`.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from models.design_models import (
    Critique,
    CycleState,
    GeneratedVariant,
    GenerationRequest,
    GenerationSession,
    SourceImage,
)
from services.generation.batching import gather_fail_fast, gather_isolated
from services.generation.errors import (
    CycleInProgressError,
    GenerationFailure,
    ReadError,
    ValidationError,
)
from services.openai.design_critic import DesignCritic
from services.openai.image_editor import ImageEditor
from utils.image_encoding import encode_image

LOGGER = logging.getLogger(__name__)

VARIANT_COUNT = 4


def select_image(session: GenerationSession, image: Optional[SourceImage]) -> GenerationSession:
    """Set or clear the session's source image, discarding previous results.

    A cycle still in flight is abandoned: its results are never written back.
    """
    session.cycle_token += 1
    session.source_image = image
    session.in_flight = False
    session.reset()
    return session


def set_prompt(session: GenerationSession, prompt: Optional[str]) -> GenerationSession:
    """Store the design prompt for the next cycle without touching results."""
    session.prompt = (prompt or "").strip()
    return session


async def run_generation_cycle(
    session: GenerationSession,
    image: Optional[SourceImage],
    prompt: Optional[str],
    *,
    editor: ImageEditor,
    critic: DesignCritic,
) -> GenerationSession:
    """Run a full cycle and store the aligned variants and critiques on `session`.

    If the session's image is replaced while the cycle runs, the cycle's
    results are dropped and `session` is returned as the new selection left it.

    Raises:
        CycleInProgressError: If `session` already has a cycle in flight.
        ValidationError: If the image is missing or the prompt is empty.
        ReadError: If the image cannot be encoded.
        GenerationFailure: If any edit request fails.
    """
    if session.in_flight:
        raise CycleInProgressError()

    prompt_text = (prompt or "").strip()
    if image is None or not prompt_text:
        session.error = ValidationError.user_message
        raise ValidationError()

    session.cycle_token += 1
    token = session.cycle_token
    session.reset()
    session.state = CycleState.VALIDATING
    session.source_image = image
    session.prompt = prompt_text
    session.in_flight = True
    start = time.time()
    try:
        session.state = CycleState.ENCODING
        try:
            encoded = await encode_image(image)
        except ReadError as exc:
            if session.cycle_token == token:
                _fail(session, exc)
            raise

        request = GenerationRequest(
            image_data=encoded.data, mime_type=encoded.mime_type, prompt=prompt_text
        )

        if session.cycle_token != token:
            return _abandoned(session)
        session.state = CycleState.EDITING
        try:
            variants = await _generate_variants(editor, request)
        except Exception as exc:
            LOGGER.error("Edit batch failed for session %s: %s", session.session_id, exc)
            failure = GenerationFailure(exc)
            if session.cycle_token == token:
                _fail(session, failure)
            raise failure from exc

        if session.cycle_token != token:
            return _abandoned(session)
        session.state = CycleState.ANALYZING
        critiques = await _critique_variants(critic, variants, prompt_text)

        if session.cycle_token != token:
            return _abandoned(session)
        session.variants = variants
        session.critiques = critiques
        session.state = CycleState.COMPLETED
        LOGGER.info(
            "Generation cycle for session %s completed in %.3fs", session.session_id, time.time() - start
        )
        return session
    finally:
        if session.cycle_token == token:
            session.in_flight = False


def _abandoned(session: GenerationSession) -> GenerationSession:
    LOGGER.info("Generation cycle for session %s abandoned after image change", session.session_id)
    return session


async def _generate_variants(editor: ImageEditor, request: GenerationRequest) -> list[GeneratedVariant]:
    factories = [lambda: editor.edit(request) for _ in range(VARIANT_COUNT)]
    return await gather_fail_fast(factories)


async def _critique_variants(
    critic: DesignCritic, variants: list[GeneratedVariant], prompt: str
) -> list[Critique]:
    def _factory(variant: GeneratedVariant):
        return lambda: critic.critique(variant, prompt)

    def _fallback(index: int, exc: BaseException) -> Critique:
        LOGGER.warning("Critique %d unavailable, using placeholder: %s", index, exc)
        return Critique.placeholder()

    return await gather_isolated([_factory(variant) for variant in variants], _fallback)


def _fail(session: GenerationSession, exc: Exception) -> None:
    session.variants = []
    session.critiques = []
    session.state = CycleState.FAILED
    session.error = str(exc)
