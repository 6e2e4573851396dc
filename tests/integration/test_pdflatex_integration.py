"""
Integration tests for document generation - runs the real LaTeX toolchain.
"""

import shutil

import pytest

from texdoc.contexts.rendering import Document, GenerationError, run_scoped
from texdoc.utils.pdf_processing import is_pdf, page_count

PDFLATEX_AVAILABLE = shutil.which("pdflatex") is not None and shutil.which("latex") is not None
skip_if_no_pdflatex = pytest.mark.skipif(
    not PDFLATEX_AVAILABLE,
    reason="pdflatex not installed - install TeX Live, MiKTeX, or MacTeX"
)

LAYOUT = r"""\documentclass{article}
\begin{document}
<<< content >>>
\end{document}
"""


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_pdflatex
def test_generate_pdf(workspace_root):
    """Test a templated document compiles to a one-page PDF."""
    with Document.create(r"Hello, <<< name | latex >>>!", layout=LAYOUT) as document:
        pdf = document.generate(context={"name": "R&D"})
        result_file = document.result_file
        assert page_count(result_file) == 1

    assert pdf.startswith(b"%PDF-")
    assert not result_file.parent.exists()


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_pdflatex
def test_preprocess_resolves_references(workspace_root):
    """Test preprocessing passes run before the final pass."""
    body = r"See section~\ref{sec:intro}.\section{Intro}\label{sec:intro}"

    def body_fn(workspace):
        document = Document(body, layout=LAYOUT, tempdir=workspace, preprocess=2)
        return document.generate(lambda path: is_pdf(path) and (workspace.path / "document.aux").exists())

    assert run_scoped(body_fn) is True


@pytest.mark.integration
@pytest.mark.latex
@skip_if_no_pdflatex
def test_broken_document_keeps_log(workspace_root):
    """Test a LaTeX error fails generation and leaves the log for inspection."""
    broken = "\\documentclass{article}\n\\begin{document}\n\\undefinedcommand\n"

    with pytest.raises(GenerationError) as excinfo:
        with Document.create(broken, processed=True) as document:
            document.generate()

    assert excinfo.value.log_file.exists()
    assert "Undefined control sequence" in excinfo.value.log_file.read_text(encoding="latin-1")
