"""FastAPI routes for design sessions."""

from typing import Optional

from fastapi import APIRouter, File, HTTPException, Request, UploadFile
from pydantic import BaseModel

from controllers.design_controller import (
	clear_image,
	discard_session,
	generate_designs,
	get_session,
	start_session,
	update_prompt,
	upload_image,
)

router = APIRouter(prefix="/api/sessions", tags=["designs"])


class PromptPayload(BaseModel):
	prompt: Optional[str] = None


class GeneratePayload(BaseModel):
	prompt: Optional[str] = None


@router.post("")
async def start_session_route(request: Request):
	try:
		return await start_session(request)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.get("/{session_id}")
async def get_session_route(request: Request, session_id: str):
	try:
		return await get_session(request, session_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.delete("/{session_id}")
async def discard_session_route(request: Request, session_id: str):
	try:
		return await discard_session(request, session_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.put("/{session_id}/image")
async def upload_image_route(request: Request, session_id: str, image: UploadFile = File(...)):
	"""Select the product image for the session."""
	try:
		return await upload_image(request, session_id, image)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.delete("/{session_id}/image")
async def clear_image_route(request: Request, session_id: str):
	try:
		return await clear_image(request, session_id)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.put("/{session_id}/prompt")
async def update_prompt_route(request: Request, session_id: str, payload: PromptPayload):
	"""Store the design prompt for the next generation."""
	try:
		return await update_prompt(request, session_id, payload.prompt)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))


@router.post("/{session_id}/generate")
async def generate_route(request: Request, session_id: str, payload: GeneratePayload):
	"""Generate four edited variants of the session image with critiques."""
	try:
		return await generate_designs(request, session_id, payload.prompt)
	except HTTPException:
		raise
	except Exception as exc:
		raise HTTPException(status_code=500, detail=str(exc))
