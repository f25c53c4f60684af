"""Theme JSON validation."""
from __future__ import annotations

from typing import Any

_HEX_DIGITS = set("0123456789abcdefABCDEF")


def validate_theme(data: Any) -> list[str]:
    """Validate a decoded theme document.

    Returns a list of error messages (empty if valid).
    """
    if not isinstance(data, dict):
        return ["Theme must be a JSON object"]

    errors: list[str] = []
    if "name" not in data:
        errors.append("Missing required field: 'name'")

    if "colors" not in data:
        errors.append("Missing required field: 'colors'")
    elif not isinstance(data["colors"], dict):
        errors.append("'colors' must be an object")
    else:
        for key, value in data["colors"].items():
            if not isinstance(value, str):
                errors.append(
                    f"Color value for '{key}' must be a string, got: {type(value).__name__}"
                )
            elif value.startswith("#"):
                digits = value[1:]
                if len(digits) not in (3, 6) or not set(digits) <= _HEX_DIGITS:
                    errors.append(f"Invalid hex color for '{key}': {value}")

    variables = data.get("variables", {})
    if not isinstance(variables, dict):
        errors.append("'variables' must be an object")
    else:
        for key, value in variables.items():
            if not isinstance(value, str):
                errors.append(f"Variable '{key}' must be a string, got: {type(value).__name__}")

    return errors
