"""
LaTeX Escaping

Helpers for callers assembling document source from untrusted text:
- escape(): make arbitrary text safe to drop into LaTeX markup
- latex_safe_filename(): turn an arbitrary filename into one LaTeX can include
"""

import re
import unicodedata

# Characters with special meaning to LaTeX and their literal replacements
LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "#": r"\#",
    "$": r"\$",
    "%": r"\%",
    "&": r"\&",
    "^": r"\^{}",
    "_": r"\_",
    "~": r"\~{}",
}

_SPECIAL_CHAR_PATTERN = re.compile("|".join(re.escape(char) for char in LATEX_SPECIAL_CHARS))

# Anything outside this set is replaced in filenames
_UNSAFE_FILENAME_PATTERN = re.compile(r"[^a-z0-9\-_+.]+", re.IGNORECASE)


def escape(text) -> str:
    """
    Escape LaTeX special characters, the way html.escape() works for HTML.

    Replacement happens in a single pass so the backslashes introduced for
    one character are never escaped again.

    Args:
        text: Raw text (non-strings are converted with str())

    Returns:
        Markup-safe text

    Examples:
        >>> escape("50% off & free_shipping")
        '50\\\\% off \\\\& free\\\\_shipping'
    """
    return _SPECIAL_CHAR_PATTERN.sub(lambda m: LATEX_SPECIAL_CHARS[m.group(0)], str(text))


def transliterate(text: str) -> str:
    """Strip accents and drop characters without an ASCII equivalent."""
    normalized = unicodedata.normalize("NFKD", text)
    return normalized.encode("ascii", "ignore").decode("ascii")


def latex_safe_filename(name) -> str:
    """
    Make a filename safe for \\includegraphics and friends.

    Non-ASCII characters are transliterated, then every run of characters
    outside [a-z0-9-_+.] becomes a single dash.

    Examples:
        >>> latex_safe_filename("Café logo (final).png")
        'Cafe-logo-final-.png'
    """
    return _UNSAFE_FILENAME_PATTERN.sub("-", transliterate(str(name)))
