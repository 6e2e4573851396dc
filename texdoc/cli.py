"""
Document Generation CLI

Renders templated LaTeX sources to PDF (or to expanded LaTeX with --no-pdf).

Examples:\n

    texdoc letter.tex.jinja -o letter.pdf                   # Render a template

    cat body.tex | texdoc -l layout.tex.jinja > out.pdf     # Read stdin, wrap in layout

    texdoc notes.tex --filter markdown --no-pdf             # Print expanded LaTeX

    texdoc report.tex --preprocess 2 -p xelatex -o r.pdf    # Two latex passes, then xelatex
"""

import sys
from pathlib import Path
from typing import List, Optional

import typer
from typing_extensions import Annotated

from texdoc import __version__
from texdoc.config import default_options, load_options
from texdoc.contexts.rendering import Document, GenerationError, RenderingError, TemplatingError
from texdoc.contexts.rendering.logger import setup_rendering_logger
from texdoc.contexts.templating import FilterError, available_filters

app = typer.Typer(
    help="Render templated LaTeX documents to PDF",
    add_completion=False,
)


def _read_sources(files: List[Path]) -> str:
    """Concatenate input files; no files (or '-') reads standard input."""
    if not files:
        return sys.stdin.read()
    parts = []
    for path in files:
        if str(path) == "-":
            parts.append(sys.stdin.read())
        else:
            parts.append(path.read_text(encoding="utf-8"))
    return "".join(parts)


def _version_callback(value: bool):
    if value:
        typer.echo(f"texdoc {__version__}")
        raise typer.Exit()


@app.command()
def main(
    files: Annotated[
        Optional[List[Path]],
        typer.Argument(help="Template files to concatenate (default: standard input)"),
    ] = None,
    layout: Annotated[
        Optional[Path],
        typer.Option("--layout", "-l", help="Layout template; the document is available as <<< content >>>"),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file (default: standard output)"),
    ] = None,
    filter_name: Annotated[
        Optional[str],
        typer.Option("--filter", "-f", help="Named content filter applied before the layout"),
    ] = None,
    no_pdf: Annotated[
        bool,
        typer.Option("--no-pdf", help="Only emit the expanded LaTeX, skip the toolchain"),
    ] = False,
    processor: Annotated[
        Optional[str],
        typer.Option("--processor", "-p", help="Processor executable (default: pdflatex)"),
    ] = None,
    preprocess: Annotated[
        Optional[int],
        typer.Option("--preprocess", help="Number of preprocessor passes", min=0),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML file with document options", exists=True, dir_okay=False),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log each command and its output to stderr"),
    ] = False,
    list_filters: Annotated[
        bool,
        typer.Option("--list-filters", help="List available filters and exit"),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show version and exit"),
    ] = None,
):
    """
    Render templated LaTeX to PDF.

    The input is a Jinja2 template using <<< var >>> and <%% block %%>
    delimiters. It is expanded, filtered, wrapped in the layout and run
    through the LaTeX toolchain in a temporary workspace. Failed workspaces
    are kept for inspection.
    """
    if list_filters:
        for name in available_filters():
            typer.echo(name)
        raise typer.Exit()

    setup_rendering_logger(level="DEBUG" if verbose else "WARNING", processor=processor)

    try:
        options = load_options(config) if config else default_options()
        overrides = {}
        if no_pdf:
            overrides["tex"] = True
        if layout is not None:
            overrides["layout"] = layout.read_text(encoding="utf-8")
        if filter_name is not None:
            overrides["filter"] = filter_name
        if processor is not None:
            overrides["processor"] = processor
        if preprocess is not None:
            overrides["preprocess"] = preprocess

        content = _read_sources(files or [])

        with Document.create(content, options, **overrides) as document:
            result = document.generate()

        if output is None:
            sys.stdout.buffer.write(result)
            sys.stdout.buffer.flush()
        else:
            output.write_bytes(result)
            typer.secho(f"Wrote {output}", fg=typer.colors.GREEN, err=True)
    except GenerationError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        if e.log_file is not None:
            typer.secho(f"Workspace kept at: {e.log_file.parent}", fg=typer.colors.YELLOW, err=True)
        raise typer.Exit(code=1)
    except (RenderingError, TemplatingError, FilterError, ValueError, OSError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
