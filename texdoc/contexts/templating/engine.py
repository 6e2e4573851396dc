"""
Template Engine

Expands document templates and wraps them in optional layouts using Jinja2.

Templates use custom delimiters to avoid conflicts with LaTeX syntax:
- Variable: <<< var >>>
- Block: <%% block %%>
- Comment: <# comment #>

Layouts are ordinary templates that receive the expanded body as `content`:

    \\documentclass{article}
    \\begin{document}
    <<< content >>>
    \\end{document}
"""

from typing import Any, Dict, Mapping, Optional

from jinja2 import Environment, StrictUndefined, Template, TemplateError

from texdoc.contexts.templating.escaping import escape
from texdoc.contexts.templating.exceptions import TemplatingError


def create_environment() -> Environment:
    """Create a Jinja2 environment configured for LaTeX sources."""
    env = Environment(
        # Catches silent failures
        undefined=StrictUndefined,
        # Custom delimiters to avoid LaTeX brace conflicts
        variable_start_string="<<<",
        variable_end_string=">>>",
        block_start_string="<%%",
        block_end_string="%%>",
        comment_start_string="<#",
        comment_end_string="#>",
        # Preserve whitespace (important for LaTeX)
        trim_blocks=False,
        lstrip_blocks=False,
        keep_trailing_newline=True,
        autoescape=False,
    )
    # <<< value | latex >>> escapes special characters inside templates
    env.filters["latex"] = escape
    return env


class TemplateEngine:
    """Compiles and renders document templates."""

    def __init__(self, env: Optional[Environment] = None):
        self.env = env or create_environment()

    def compile(self, text: str, stage: str = "expand") -> Template:
        try:
            return self.env.from_string(text)
        except TemplateError as e:
            raise TemplatingError(
                "Malformed template directive",
                stage=stage,
                lineno=getattr(e, "lineno", None),
                original_error=e,
            ) from e

    def expand(self, text: str, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Expand a template string.

        Args:
            text: Template source
            context: Variables available to the template

        Returns:
            Expanded text

        Raises:
            TemplatingError: On syntax errors or undefined variables
        """
        return self._render(self.compile(text), dict(context or {}), stage="expand")

    def wrap_in_layout(
        self, body: str, layout: Optional[str], context: Optional[Mapping[str, Any]] = None
    ) -> str:
        """
        Render layout with body exposed as `content`.

        A layout of None returns the body unchanged.
        """
        if not layout:
            return body
        variables: Dict[str, Any] = dict(context or {})
        variables["content"] = body
        return self._render(self.compile(layout, stage="layout"), variables, stage="layout")

    def _render(self, template: Template, variables: Dict[str, Any], stage: str) -> str:
        try:
            return template.render(variables)
        except TemplateError as e:
            raise TemplatingError(
                "Template rendering failed",
                stage=stage,
                lineno=getattr(e, "lineno", None),
                original_error=e,
            ) from e


_default_engine = TemplateEngine()


def expand(text: str, context: Optional[Mapping[str, Any]] = None) -> str:
    """Expand text with the shared engine."""
    return _default_engine.expand(text, context)


def wrap_in_layout(
    body: str, layout: Optional[str], context: Optional[Mapping[str, Any]] = None
) -> str:
    """Wrap body in layout with the shared engine."""
    return _default_engine.wrap_in_layout(body, layout, context)
