"""Utilities to build multimodal input payloads for the Responses API."""

from typing import Any, Dict, List

from models.design_models import GeneratedVariant, GenerationRequest
from services.openai.design_prompts import (
    build_critique_prompt,
    build_critique_system_prompt,
    build_edit_prompt,
)
from utils.image_encoding import to_data_url


def build_edit_inputs(request: GenerationRequest) -> List[Dict[str, Any]]:
    """Build the input array for one edit request: source image, then instruction."""
    image_url = to_data_url(request.image_data, request.mime_type)
    return [
        {
            "type": "message",
            "role": "user",
            "content": [
                {"type": "input_image", "image_url": image_url},
                {"type": "input_text", "text": build_edit_prompt(request.prompt)},
            ],
        }
    ]


def build_critique_inputs(variant: GeneratedVariant, user_prompt: str) -> List[Dict[str, Any]]:
    """Build the input array for one critique request."""
    return [
        {
            "type": "message",
            "role": "system",
            "content": [{"type": "input_text", "text": build_critique_system_prompt()}],
        },
        {
            "type": "message",
            "role": "user",
            "content": [
                {"type": "input_image", "image_url": variant.data_url},
                {"type": "input_text", "text": build_critique_prompt(user_prompt)},
            ],
        },
    ]
