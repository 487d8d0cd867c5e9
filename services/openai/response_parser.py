"""Helpers to parse Responses API outputs."""

import json
from typing import Any, Dict, Optional

from services.generation.errors import NoContentError

IMAGE_CALL_TYPE = "image_generation_call"


def extract_generated_image(response: Any) -> str:
    """Return the base64 result of the first image generation call.

    Raises:
        NoContentError: If the response carries no image data.
    """
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) != IMAGE_CALL_TYPE:
            continue
        result = getattr(item, "result", None)
        if result:
            return result
    raise NoContentError()


def parse_function_call(response: Any, *, tool_name: str) -> Dict[str, Any]:
    """Return the decoded arguments of the named function call.

    Raises:
        RuntimeError: If no matching call is present.
        json.JSONDecodeError: If the arguments are not valid JSON.
    """
    for item in getattr(response, "output", None) or []:
        if getattr(item, "type", None) == "function_call" and getattr(item, "name", None) == tool_name:
            args = json.loads(getattr(item, "arguments", "") or "")
            if not isinstance(args, dict):
                raise RuntimeError(f"Arguments for '{tool_name}' are not a JSON object.")
            return args
    raise RuntimeError(f"No function_call output for '{tool_name}' found in Responses API output.")


def extract_usage(response: Any) -> Dict[str, Optional[int]]:
    """Return token usage information from the response, if present."""
    usage = getattr(response, "usage", None)
    return {
        "input_tokens": getattr(usage, "input_tokens", None) if usage else None,
        "output_tokens": getattr(usage, "output_tokens", None) if usage else None,
    }
