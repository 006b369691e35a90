# SPDX-License-Identifier: MIT

from pydantic import ValidationError


def format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one readable message."""
    messages = []
    for detail in error.errors():
        message = detail["msg"]
        # Show the raised message without pydantic's "Value error, " prefix
        if detail["type"] == "value_error" and "error" in detail.get("ctx", {}):
            message = str(detail["ctx"]["error"])
        location = ".".join(str(part) for part in detail["loc"])
        messages.append(f"{location}: {message}" if location else message)
    return f"Validation failed: {', '.join(messages)}"
