"""Prompt builders for design editing and critique."""


def build_critique_system_prompt() -> str:
    """Return the system prompt for the design critic."""
    return (
        "You are a product design expert. You review product images produced from a "
        "customer's edit request and judge them honestly and concisely."
    )


def build_critique_prompt(user_prompt: str) -> str:
    """Return the analysis instruction embedding the user's original request."""
    return (
        "Analyze the following product image based on the user's request.\n"
        f'User\'s request: "{user_prompt}"\n\n'
        "Evaluate the design in the image and list its pros and cons in relation to the "
        "user's request. Each point should be a single concise sentence. "
        "Record the result with the record_design_critique tool."
    )


def build_edit_prompt(user_prompt: str) -> str:
    """Return the edit instruction sent alongside the source image."""
    return user_prompt.strip()
