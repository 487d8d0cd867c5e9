"""Schema definition for the design critique tool."""

from typing import Any, Dict

FUNCTION_NAME = "record_design_critique"

FUNCTION_DEFINITION: Dict[str, Any] = {
    "type": "function",
    "name": FUNCTION_NAME,
    "description": "Record the pros and cons of the product design shown in the image.",
    "parameters": {
        "type": "object",
        "properties": {
            "pros": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Positive aspects of the design based on the user prompt.",
            },
            "cons": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Potential drawbacks or areas for improvement.",
            },
        },
        "required": ["pros", "cons"],
        "additionalProperties": False,
    },
    "strict": True,
}
