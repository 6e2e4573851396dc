#!/usr/bin/env python3
"""
Render templated LaTeX to PDF without installing the package.

Examples:\n

    render_pdf.py letter.tex.jinja -o letter.pdf

    render_pdf.py body.tex --layout layout.tex.jinja --no-pdf
"""

from texdoc.cli import app

if __name__ == "__main__":
    app()
