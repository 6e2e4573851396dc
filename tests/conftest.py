"""Shared fixtures: stub typesetting tools and an isolated workspace root."""

import os
import sys
from pathlib import Path
from typing import List, Optional

import pytest
from loguru import logger


class StubTools:
    """
    Writes fake latex/pdflatex executables onto PATH.

    Each stub appends "<name> <args>" to a shared calls file, optionally
    writes a payload to <output-directory>/document.pdf, and exits with the
    given status.
    """

    def __init__(self, bin_dir: Path, calls_file: Path):
        self.bin_dir = bin_dir
        self.calls_file = calls_file

    def make(self, name: str, writes: Optional[str] = None, exit_code: int = 0) -> Path:
        lines = [
            "#!/bin/sh",
            f'echo "{name} $*" >> "{self.calls_file}"',
            'for arg in "$@"; do',
            '  case "$arg" in',
            '    --output-directory=*) outdir="${arg#--output-directory=}" ;;',
            "  esac",
            "done",
        ]
        if writes is not None:
            lines.append(f"printf '%s' '{writes}' > \"$outdir/document.pdf\"")
        lines.append(f"exit {exit_code}")

        script = self.bin_dir / name
        script.write_text("\n".join(lines) + "\n")
        script.chmod(0o755)
        return script

    def calls(self) -> List[str]:
        if not self.calls_file.exists():
            return []
        return self.calls_file.read_text().splitlines()

    def tools_called(self) -> List[str]:
        return [line.split()[0] for line in self.calls()]


@pytest.fixture
def workspace_root(tmp_path, monkeypatch):
    """Route workspaces created with default arguments into tmp_path."""
    root = tmp_path / "workspaces"
    monkeypatch.setenv("TEXDOC_TEMPDIR", str(root))
    return root


@pytest.fixture
def stub_tools(tmp_path, monkeypatch):
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    monkeypatch.setenv("PATH", f"{bin_dir}{os.pathsep}{os.environ.get('PATH', '')}")
    return StubTools(bin_dir, tmp_path / "calls.log")


@pytest.fixture
def workdir(tmp_path):
    """An existing directory for documents bound to a plain path."""
    directory = tmp_path / "work"
    directory.mkdir()
    return directory


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop sinks bound to streams that only live for one test (CliRunner)."""
    yield
    logger.remove()
    logger.add(sys.stderr)
