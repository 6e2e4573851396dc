"""
texdoc - LaTeX documents from templates

Renders templated LaTeX sources into PDFs by driving an external typesetting
toolchain (latex/pdflatex) inside isolated, auto-cleaned workspaces.

Architecture:
- Templating Context: template expansion, content filters, escaping
- Rendering Context: workspaces, tool invocation, output verification
"""

__version__ = "0.1.0"

from texdoc.config import DocumentOptions, default_options, load_options
from texdoc.contexts.rendering import (
    Document,
    ExecutableNotFound,
    FilterError,
    GenerationError,
    TemplatingError,
    Workspace,
    run_scoped,
    scoped_workspace,
)
from texdoc.contexts.templating import escape, register_filter

__all__ = [
    "Document",
    "DocumentOptions",
    "ExecutableNotFound",
    "FilterError",
    "GenerationError",
    "TemplatingError",
    "Workspace",
    "default_options",
    "escape",
    "load_options",
    "register_filter",
    "run_scoped",
    "scoped_workspace",
]
