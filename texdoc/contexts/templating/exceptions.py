"""Custom exceptions for templating context."""

from typing import Optional


class TemplatingError(Exception):
    """
    Exception raised when template expansion fails.

    Attributes:
        message: Error description
        stage: Which step failed ('expand' or 'layout')
        lineno: Line number reported by Jinja2, if any
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        lineno: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.stage = stage
        self.lineno = lineno
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if stage:
            parts.append(f"Stage: {stage}")

        if lineno is not None:
            parts.append(f"Line: {lineno}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class FilterError(LookupError):
    """Exception raised when a named content filter is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"No `{name}' filter")
