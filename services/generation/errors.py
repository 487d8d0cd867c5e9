"""Exception hierarchy for the design generation pipeline."""

from typing import Optional

VALIDATION_MESSAGE = "Please upload an image and provide a design prompt."
IN_FLIGHT_MESSAGE = "A generation is already in progress for this session."
READ_MESSAGE = "Could not process the uploaded image."
GENERATION_MESSAGE = "Failed to generate design variations. Please try again."


class DesignStudioError(Exception):
    """Base class for errors surfaced to the presentation layer."""

    user_message = "An unexpected error occurred. Please try again."

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.user_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(DesignStudioError):
    """Missing image or empty prompt; raised before any remote call."""

    user_message = VALIDATION_MESSAGE


class CycleInProgressError(ValidationError):
    """A cycle was requested while another is still in flight."""

    user_message = IN_FLIGHT_MESSAGE


class ReadError(DesignStudioError):
    """The source image could not be read or encoded."""

    user_message = READ_MESSAGE


class NoContentError(DesignStudioError):
    """An edit response carried no image data."""

    user_message = "No image data found in the model response."


class GenerationFailure(DesignStudioError):
    """The edit batch failed; no variants are kept."""

    user_message = GENERATION_MESSAGE

    def __init__(self, cause: BaseException, message: Optional[str] = None) -> None:
        super().__init__(message)
        self.cause = cause


class AnalysisFailure(DesignStudioError):
    """A single critique request failed."""

    user_message = "Design analysis failed."
