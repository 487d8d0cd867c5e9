"""Session and generation handlers for the design studio API."""

from __future__ import annotations

from typing import Any, Dict

from fastapi import HTTPException, Request, UploadFile

from models.design_models import GenerationSession
from services.generation.cycle import run_generation_cycle, select_image, set_prompt
from services.generation.errors import (
	CycleInProgressError,
	GenerationFailure,
	ReadError,
	ValidationError,
)
from services.openai.design_critic import DesignCritic
from services.openai.image_editor import ImageEditor
from services.session_store import SessionStore
from utils.image_encoding import read_upload
from utils.media_validation import resolve_image_type


def session_view(session: GenerationSession) -> Dict[str, Any]:
	"""Serialize a session for the frontend."""
	results = [
		{
			"index": index,
			"image_url": variant.data_url,
			"critique": critique.model_dump(),
			"critique_available": not critique.is_placeholder,
		}
		for index, (variant, critique) in enumerate(zip(session.variants, session.critiques))
	]
	return {
		"session_id": session.session_id,
		"state": session.state.value,
		"in_flight": session.in_flight,
		"error": session.error,
		"prompt": session.prompt,
		"has_image": session.source_image is not None,
		"can_generate": session.can_generate,
		"results": results,
	}


def _get_session(request: Request, session_id: str) -> GenerationSession:
	store: SessionStore = request.app.state.session_store
	try:
		return store.get(session_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc


async def start_session(request: Request) -> Dict[str, Any]:
	"""Create a new empty session."""
	store: SessionStore = request.app.state.session_store
	return session_view(store.create())


async def get_session(request: Request, session_id: str) -> Dict[str, Any]:
	"""Return the current state of a session."""
	return session_view(_get_session(request, session_id))


async def discard_session(request: Request, session_id: str) -> Dict[str, Any]:
	"""Drop a session."""
	store: SessionStore = request.app.state.session_store
	try:
		store.discard(session_id)
	except KeyError as exc:
		raise HTTPException(status_code=404, detail=str(exc)) from exc
	return {"session_id": session_id, "discarded": True}


async def upload_image(request: Request, session_id: str, image: UploadFile) -> Dict[str, Any]:
	"""Select a new source image, abandoning any running cycle and its results."""
	session = _get_session(request, session_id)
	try:
		source = await read_upload(image, resolve_image_type)
	except ReadError as exc:
		raise HTTPException(status_code=400, detail=exc.message) from exc
	select_image(session, source)
	return session_view(session)


async def clear_image(request: Request, session_id: str) -> Dict[str, Any]:
	"""Remove the source image and any results."""
	session = _get_session(request, session_id)
	select_image(session, None)
	return session_view(session)


async def update_prompt(request: Request, session_id: str, prompt: str | None) -> Dict[str, Any]:
	"""Store the design prompt so the view can report whether generation is possible."""
	session = _get_session(request, session_id)
	set_prompt(session, prompt)
	return session_view(session)


async def generate_designs(request: Request, session_id: str, prompt: str | None) -> Dict[str, Any]:
	"""Run a generation cycle for the session's current image.

	`prompt` overrides the stored prompt when given.
	"""
	session = _get_session(request, session_id)
	openai_client = request.app.state.openai_client
	try:
		await run_generation_cycle(
			session,
			session.source_image,
			session.prompt if prompt is None else prompt,
			editor=ImageEditor(openai_client),
			critic=DesignCritic(openai_client),
		)
	except CycleInProgressError as exc:
		raise HTTPException(status_code=409, detail=exc.message) from exc
	except ValidationError as exc:
		raise HTTPException(status_code=400, detail=exc.message) from exc
	except ReadError as exc:
		raise HTTPException(status_code=422, detail=exc.message) from exc
	except GenerationFailure as exc:
		raise HTTPException(status_code=502, detail=exc.message) from exc
	return session_view(session)
