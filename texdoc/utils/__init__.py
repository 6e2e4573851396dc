"""
Shared utilities for texdoc.

Common functionality used across contexts:
- Logger setup
- PDF inspection
"""

from texdoc.utils.logger import setup_logger
from texdoc.utils.pdf_processing import is_pdf, page_count

__all__ = ["is_pdf", "page_count", "setup_logger"]
