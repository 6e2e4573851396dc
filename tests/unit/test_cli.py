"""Unit tests for the texdoc command line."""

import pytest
from typer.testing import CliRunner

from texdoc import __version__
from texdoc.cli import app

runner = CliRunner()

PAYLOAD = "STUBBED-PDF-BYTES"


@pytest.mark.unit
def test_version():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


@pytest.mark.unit
def test_list_filters():
    result = runner.invoke(app, ["--list-filters"])
    assert result.exit_code == 0
    assert "markdown" in result.stdout.split()


@pytest.mark.unit
def test_no_pdf_from_stdin(workspace_root):
    result = runner.invoke(app, ["--no-pdf"], input="Hello\n")
    assert result.exit_code == 0
    assert result.stdout_bytes == b"Hello\n\n"


@pytest.mark.unit
def test_files_concatenated_with_layout(tmp_path, workspace_root):
    first = tmp_path / "a.tex"
    second = tmp_path / "b.tex"
    layout = tmp_path / "layout.tex"
    first.write_text("one ")
    second.write_text("**two**")
    layout.write_text("[<<< content >>>]")

    result = runner.invoke(
        app, [str(first), str(second), "--layout", str(layout), "--filter", "markdown", "--no-pdf"]
    )

    assert result.exit_code == 0
    assert result.stdout_bytes == b"[one \\textbf{two}]\n"


@pytest.mark.unit
def test_pdf_to_output_file(tmp_path, workspace_root, stub_tools):
    stub_tools.make("latex")
    stub_tools.make("pdflatex", writes=PAYLOAD)
    source = tmp_path / "doc.tex"
    source.write_text("Hello")
    output = tmp_path / "out.pdf"

    result = runner.invoke(app, [str(source), "-o", str(output), "--preprocess", "1"])

    assert result.exit_code == 0
    assert output.read_bytes() == PAYLOAD.encode()
    assert stub_tools.tools_called() == ["latex", "pdflatex"]
    # Successful workspaces are cleaned up
    assert list((workspace_root / "texdoc").iterdir()) == []


@pytest.mark.unit
def test_processor_override(tmp_path, workspace_root, stub_tools):
    stub_tools.make("xelatex", writes=PAYLOAD)
    result = runner.invoke(app, ["-p", "xelatex"], input="Hello")
    assert result.exit_code == 0
    assert result.stdout_bytes == PAYLOAD.encode()


@pytest.mark.unit
def test_generation_failure_keeps_workspace(workspace_root, stub_tools):
    stub_tools.make("pdflatex")

    result = runner.invoke(app, [], input="Hello")

    assert result.exit_code == 1
    kept = list((workspace_root / "texdoc").iterdir())
    assert len(kept) == 1
    assert (kept[0] / "document.tex").read_text() == "Hello\n"


@pytest.mark.unit
def test_missing_processor(workspace_root, stub_tools):
    result = runner.invoke(app, ["-p", "no-such-tex-binary"], input="Hello")
    assert result.exit_code == 1
    assert "Executable not found: no-such-tex-binary" in result.output


@pytest.mark.unit
def test_unknown_filter(workspace_root):
    result = runner.invoke(app, ["--filter", "textile", "--no-pdf"], input="Hello")
    assert result.exit_code == 1


@pytest.mark.unit
def test_config_file(tmp_path, workspace_root, stub_tools):
    stub_tools.make("lualatex", writes=PAYLOAD)
    config = tmp_path / "texdoc.yaml"
    config.write_text("processor: lualatex\n")

    result = runner.invoke(app, ["--config", str(config)], input="Hello")

    assert result.exit_code == 0
    assert stub_tools.tools_called() == ["lualatex"]


@pytest.mark.unit
def test_config_markup_only(tmp_path, workspace_root, monkeypatch):
    config = tmp_path / "texdoc.yaml"
    config.write_text("tex: true\n")
    monkeypatch.setenv("PATH", "")

    result = runner.invoke(app, ["--config", str(config)], input="Hello")

    assert result.exit_code == 0
    assert result.stdout_bytes == b"Hello\n"
