"""
Rendering Context

Responsibilities:
- Creates and cleans up uniquely named workspaces
- Writes document source and runs the LaTeX toolchain
- Verifies the result file and hands it back as bytes or a path
- Keeps failed workspaces on disk with their log files for diagnosis

Owns: workspace lifecycle, external tool invocation, output verification
Never: Interprets LaTeX markup
"""

from texdoc.contexts.rendering.document import Document
from texdoc.contexts.rendering.exceptions import (
    ExecutableNotFound,
    FilterError,
    GenerationError,
    RenderingError,
    TemplatingError,
)
from texdoc.contexts.rendering.workspace import Workspace, run_scoped, scoped_workspace

__all__ = [
    "Document",
    "ExecutableNotFound",
    "FilterError",
    "GenerationError",
    "RenderingError",
    "TemplatingError",
    "Workspace",
    "run_scoped",
    "scoped_workspace",
]
