"""
Content Filters

Named text transforms applied to the expanded template before it is wrapped
in a layout. Filters are looked up by name so they can be chosen from the
command line (--filter markdown).

Built-in filters:
    markdown        inline **bold**, *italic*, `code` and [text](url) to LaTeX
    strip_comments  drop LaTeX % comments, keeping escaped \\% intact
"""

import re
from typing import Callable, Dict, List, Optional

from texdoc.contexts.templating.exceptions import FilterError

FilterFunc = Callable[[str], str]

_FILTERS: Dict[str, FilterFunc] = {}


def register_filter(name: str) -> Callable[[FilterFunc], FilterFunc]:
    """
    Decorator registering a text filter under a name.

    Example:
        @register_filter("upper")
        def upper(text: str) -> str:
            return text.upper()
    """

    def decorator(func: FilterFunc) -> FilterFunc:
        _FILTERS[name] = func
        return func

    return decorator


def unregister_filter(name: str) -> None:
    """Remove a filter; unknown names are ignored."""
    _FILTERS.pop(name, None)


def lookup(name: str) -> Optional[FilterFunc]:
    """Return the filter registered under name, or None."""
    return _FILTERS.get(name)


def available_filters() -> List[str]:
    return sorted(_FILTERS)


def apply_filter(name: Optional[str], text: str) -> str:
    """
    Run text through the named filter.

    A name of None means no filtering and returns the text unchanged.

    Raises:
        FilterError: If no filter is registered under name
    """
    if not name:
        return text

    process = lookup(name)
    if process is None:
        raise FilterError(name)
    return process(text)


# Markdown-style inline markup, longest delimiters first
_MARKDOWN_RULES = [
    (re.compile(r"\*\*(.+?)\*\*"), r"\\textbf{\1}"),
    (re.compile(r"(?<![\*\\])\*(?!\s)(.+?)(?<!\s)\*"), r"\\textit{\1}"),
    (re.compile(r"`([^`]+)`"), r"\\texttt{\1}"),
    (re.compile(r"\[([^\]]+)\]\(([^)\s]+)\)"), r"\\href{\2}{\1}"),
]


@register_filter("markdown")
def markdown_to_latex(text: str) -> str:
    """
    Convert inline markdown emphasis and links to LaTeX commands.

    Only inline markup is handled; block structure (headings, lists) passes
    through unchanged.
    """
    for pattern, replacement in _MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text


# Unescaped % starts a comment that runs to end of line
_COMMENT_PATTERN = re.compile(r"(?<!\\)%.*$", re.MULTILINE)


@register_filter("strip_comments")
def strip_comments(text: str) -> str:
    """Remove LaTeX comments. Lines that were only a comment are dropped."""
    lines = []
    for line in text.split("\n"):
        stripped = _COMMENT_PATTERN.sub("", line)
        if stripped.strip() or not line.strip():
            lines.append(stripped.rstrip())
    return "\n".join(lines)
