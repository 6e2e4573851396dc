"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from texdoc.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"

# Lines of tool output kept when a command fails
OUTPUT_TAIL_LINES = 20


def setup_rendering_logger(log_dir: Optional[Path] = None, level: str = "WARNING", processor: str = None):
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session (default: console only)
        level: Console log level
        processor: Processor executable, recorded in the provenance header

    Returns:
        Path to log file, or None
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        level=level,
        extra_provenance={"Processor": processor} if processor else None,
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_generation_start(working_dir: Path, preprocess_count: int, generating: bool) -> None:
    """Log start of generation with context."""
    _log_info(f"Generating document in {working_dir}")
    if generating:
        _log_debug(f"  Preprocessing passes: {preprocess_count}")
    else:
        _log_debug("  Markup-only mode: skipping external tools")


def log_command(command_line: str) -> None:
    _log_debug(f"  $ {command_line}")


def log_command_failure(tool: str, returncode: int, output: Optional[str]) -> None:
    """
    Log a failed tool invocation with the tail of its output.

    Uses opt(raw=True) so multi-line output keeps its original formatting.
    """
    _log_error(f"{tool} exited with status {returncode}")
    if output:
        tail = "\n".join(output.rstrip().splitlines()[-OUTPUT_TAIL_LINES:])
        logger.opt(raw=True).debug(f"\n{'=' * 80}\n{tool.upper()} OUTPUT (tail):\n{'=' * 80}\n{tail}\n")


def log_generation_result(result_file: Path, elapsed_time: float, pages: Optional[int] = None) -> None:
    """Log successful generation."""
    size = result_file.stat().st_size if result_file.exists() else 0
    summary = f"Generated {result_file.name}: {size} bytes"
    if pages is not None:
        summary += f", {pages} page{'s' if pages != 1 else ''}"
    _log_success(f"{summary} ({elapsed_time:.2f}s)")
