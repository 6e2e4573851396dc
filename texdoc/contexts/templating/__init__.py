"""
Templating Context

Responsibilities:
- Expands document templates (Jinja2 with LaTeX-friendly delimiters)
- Applies named content filters to expanded text
- Wraps expanded text in optional layouts
- Escapes untrusted text for inclusion in LaTeX

Owns: template expansion, content filters, escaping
Never: Invokes external typesetting tools
"""

from texdoc.contexts.templating.engine import TemplateEngine, expand, wrap_in_layout
from texdoc.contexts.templating.escaping import escape, latex_safe_filename
from texdoc.contexts.templating.exceptions import FilterError, TemplatingError
from texdoc.contexts.templating.filters import (
    apply_filter,
    available_filters,
    lookup,
    register_filter,
    unregister_filter,
)

__all__ = [
    "FilterError",
    "TemplateEngine",
    "TemplatingError",
    "apply_filter",
    "available_filters",
    "escape",
    "expand",
    "latex_safe_filename",
    "lookup",
    "register_filter",
    "unregister_filter",
    "wrap_in_layout",
]
