"""Custom exceptions for rendering context."""

from pathlib import Path
from typing import Optional

from texdoc.contexts.templating.exceptions import FilterError, TemplatingError

__all__ = [
    "ExecutableNotFound",
    "FilterError",
    "GenerationError",
    "RenderingError",
    "TemplatingError",
]


class RenderingError(Exception):
    """Base class for errors raised while generating a document."""


class ExecutableNotFound(RenderingError):
    """
    Raised when a typesetting executable is neither directly executable nor
    found on the search path. Signals a misconfigured environment.
    """

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Executable not found: {command}")


class GenerationError(RenderingError):
    """
    Exception raised when an external tool fails or produces no result.

    Attributes:
        message: Error description
        tool: Executable that failed (None when the result file is missing)
        result_file: Expected output file
        log_file: Log file to inspect for details
        returncode: Exit status of the failing tool, if any
        output: Captured tool output, if any
    """

    def __init__(
        self,
        message: str,
        tool: Optional[str] = None,
        result_file: Optional[Path] = None,
        log_file: Optional[Path] = None,
        returncode: Optional[int] = None,
        output: Optional[str] = None,
    ):
        self.message = message
        self.tool = tool
        self.result_file = result_file
        self.log_file = log_file
        self.returncode = returncode
        self.output = output

        parts = [message]
        if log_file is not None:
            parts.append(f"Check {log_file}")

        super().__init__("\n".join(parts))
