"""
Document Generation Module

Turns document source into a PDF by running the LaTeX toolchain inside a
working directory.

The general call sequence is:

    generate() => source() => prepare => preprocess x N => process => verify
               => result bytes, or on_file_ready(result_file)

Example:
    with Document.create(r"Hello <<< name >>>", layout=LAYOUT) as document:
        pdf = document.generate(context={"name": "world"})
"""

import os
import shlex
import subprocess
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple, TypeVar

from texdoc.config import DocumentOptions, default_options
from texdoc.contexts.rendering.exceptions import ExecutableNotFound, GenerationError
from texdoc.contexts.rendering.logger import (
    _log_debug,
    log_command,
    log_command_failure,
    log_generation_result,
    log_generation_start,
)
from texdoc.contexts.rendering.workspace import scoped_workspace
from texdoc.contexts.templating import engine, escaping, filters
from texdoc.utils.pdf_processing import is_pdf, page_count

# Every artifact in the working directory shares this stem
DOCUMENT_STEM = "document"
SOURCE_EXTENSION = ".tex"
LOG_EXTENSION = ".log"
RESULT_EXTENSION = ".pdf"

T = TypeVar("T")


def _is_executable(path: str) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def _parse_command_prefix(prefix) -> List[Tuple[str, str]]:
    """
    Split command_prefix into (name, value) environment assignments.

    Accepts a string ("LATEXPRG=pdflatex FOO=bar") or a list of them.

    Raises:
        ValueError: If a token is not a NAME=value assignment
    """
    if prefix is None:
        return []
    if not isinstance(prefix, str):
        prefix = " ".join(prefix)

    assignments = []
    for token in shlex.split(prefix):
        name, sep, value = token.partition("=")
        if not sep or not name.isidentifier():
            raise ValueError(f"command_prefix must contain NAME=value assignments, got {token!r}")
        assignments.append((name, value))
    return assignments


class Document:
    """
    A LaTeX document bound to a working directory.

    The working directory is borrowed from options.tempdir (a path or a
    Workspace); the document never creates or removes it. Use
    Document.create() to get a document inside a scoped workspace.

    Attributes:
        content: Template (or final markup when options.processed is set)
        options: Resolved, immutable DocumentOptions
        tempdir: Absolute working directory
        source_file: document.tex inside tempdir
        log_file: document.log inside tempdir
        result_file: document.pdf, or document.tex in markup-only mode
    """

    def __init__(self, content: str, options: Optional[DocumentOptions] = None, **overrides):
        base = options if options is not None else default_options()
        self.options = base.merge(**overrides) if overrides else base
        self.content = content

        tempdir = self.options.tempdir
        self.tempdir = Path(os.path.abspath(os.fspath(tempdir) if tempdir is not None else os.getcwd()))

        self.source_file = self._file(SOURCE_EXTENSION)
        self.log_file = self._file(LOG_EXTENSION)
        self.result_file = self._file(SOURCE_EXTENSION if self.options.tex else RESULT_EXTENSION)

        self._prefix_assignments = _parse_command_prefix(self.options.command_prefix)

        # Filled on first use, then frozen
        self._source: Optional[str] = None
        self._executables: Dict[str, str] = {}

    def __repr__(self) -> str:
        return f"Document(tempdir={str(self.tempdir)!r}, processor={self.options.processor!r})"

    @classmethod
    @contextmanager
    def create(
        cls, content: str, options: Optional[DocumentOptions] = None, **overrides
    ) -> Iterator["Document"]:
        """
        Yield a document bound to a fresh scoped workspace.

        The workspace is created under the tempdir option (default:
        TEXDOC_TEMPDIR or the system temp root) and removed after the block,
        unless the block raises.

        Example:
            with Document.create(source, processor="xelatex") as document:
                document.generate(lambda path: shutil.copy(path, "out.pdf"))
        """
        base = options if options is not None else default_options()
        parent = overrides.pop("tempdir", base.tempdir)
        with scoped_workspace(parent) as workspace:
            yield cls(content, base, **{**overrides, "tempdir": workspace})

    # ------------------------------------------------------------------
    # Configuration accessors
    # ------------------------------------------------------------------

    @property
    def preprocess_count(self) -> int:
        return self.options.preprocess_count

    @property
    def generating(self) -> bool:
        return self.options.generating

    @property
    def system_path(self) -> str:
        return os.environ.get("PATH", os.defpath)

    @property
    def processor(self) -> str:
        """Processor executable, resolved on first use and cached."""
        return self._resolved(self.options.processor)

    @property
    def preprocessor(self) -> str:
        """Preprocessor executable, resolved on first use and cached."""
        return self._resolved(self.options.preprocessor)

    @staticmethod
    def escape(text) -> str:
        """Escape LaTeX special characters in text."""
        return escaping.escape(text)

    # ------------------------------------------------------------------
    # Source
    # ------------------------------------------------------------------

    def source(self, context: Optional[Mapping[str, Any]] = None) -> str:
        """
        Get the compiled source for the entire document.

        Processed content is returned verbatim. Otherwise the template is
        expanded, run through the configured filter and wrapped in the
        layout. The result is computed once; later calls ignore context.

        Raises:
            TemplatingError: On malformed template directives
            FilterError: If the configured filter is not registered
        """
        if self._source is None:
            if self.options.processed:
                self._source = self.content
            else:
                expanded = engine.expand(self.content, context)
                filtered = filters.apply_filter(self.options.filter, expanded)
                self._source = engine.wrap_in_layout(filtered, self.options.layout, context)
        return self._source

    # ------------------------------------------------------------------
    # Executables and commands
    # ------------------------------------------------------------------

    def resolve_executable(self, command: str) -> str:
        """
        Verify that command can be run.

        The command itself is checked first, then every directory of PATH.

        Returns:
            The command, unchanged

        Raises:
            ExecutableNotFound: If no executable file matches
        """
        if _is_executable(command):
            return command
        for directory in self.system_path.split(os.pathsep):
            if directory and _is_executable(os.path.join(directory, command)):
                return command
        raise ExecutableNotFound(command)

    def _resolved(self, command: str) -> str:
        if command not in self._executables:
            self._executables[command] = self.resolve_executable(command)
        return self._executables[command]

    def tex_inputs(self) -> Optional[str]:
        """
        TEXINPUTS value for the configured extra directories.

        Directories that do not exist are dropped. The trailing separator
        keeps the toolchain's default search path.
        """
        if not self.options.tex_inputs:
            return None
        existing = [path for path in self.options.tex_inputs if os.path.exists(path)]
        return os.pathsep.join(existing) + os.pathsep

    def environment_assignments(self) -> List[Tuple[str, str]]:
        """Environment variables set for every tool invocation, in order."""
        assignments = []
        tex_inputs = self.tex_inputs()
        if tex_inputs is not None:
            assignments.append(("TEXINPUTS", tex_inputs))
        assignments.extend(self._prefix_assignments)
        return assignments

    def command_env(self) -> Dict[str, str]:
        env = dict(os.environ)
        env.update(self.environment_assignments())
        return env

    def command_args(self, executable: str) -> List[str]:
        """Argument vector for running executable on the source file."""
        return [
            executable,
            f"--output-directory={self.tempdir}",
            "--interaction=nonstopmode",
            self.source_file.name,
        ]

    def command_line(self, executable: str) -> str:
        """
        Shell rendering of the command, with every value quoted.

        Shape: [NAME=value ...] <executable> --output-directory=<dir>
        --interaction=nonstopmode document.tex [<shell_redirect>]
        """
        prefix = "".join(
            f"{name}={shlex.quote(value)} " for name, value in self.environment_assignments()
        )
        line = prefix + shlex.join(self.command_args(executable))
        if self.options.shell_redirect:
            line += f" {self.options.shell_redirect}"
        return line

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate(
        self,
        on_file_ready: Optional[Callable[[Path], T]] = None,
        context: Optional[Mapping[str, Any]] = None,
    ):
        """
        Generate the document.

            generate()                     # => PDF as bytes
            generate(lambda path: ...)     # => whatever the callback returns

        In markup-only mode (tex=True) no external tool runs and the written
        source file is the result.

        Args:
            on_file_ready: Called with the result file path instead of reading it
            context: Template variables (ignored for processed content)

        Raises:
            ExecutableNotFound: Before anything is written, if a tool is missing
            TemplatingError / FilterError: If the source cannot be built
            GenerationError: If a tool fails or the result file is missing
            OSError: If the source or result file cannot be written or read
        """
        source = self.source(context)

        count = self.preprocess_count
        if self.generating:
            processor = self.processor
            preprocessor = self.preprocessor if count > 0 else None

        log_generation_start(self.tempdir, count, self.generating)
        start_time = time.time()

        self._prepare(source)
        if self.generating:
            for _ in range(count):
                self._run(preprocessor, "preprocess")
            self._run(processor, "generate PDF")
            self._verify()

        pages = page_count(self.result_file) if is_pdf(self.result_file) else None
        log_generation_result(self.result_file, time.time() - start_time, pages)

        if on_file_ready is not None:
            return on_file_ready(self.result_file)
        return self.result_file.read_bytes()

    to_pdf = generate

    def _file(self, extension: str) -> Path:
        return self.tempdir / f"{DOCUMENT_STEM}{extension}"

    def _prepare(self, source: str) -> None:
        """Save the document source, ready for LaTeX to compile."""
        with open(self.source_file, "wb") as f:
            f.write(source.encode("utf-8"))
            f.write(b"\n")
        _log_debug(f"  Source: {self.source_file}")

    def _run(self, executable: str, action: str) -> None:
        """
        Run one tool pass in the working directory.

        Without a shell redirect the argument vector is spawned directly; with
        one, the quoted command line goes through the shell so the redirect
        applies. The exit status decides success.
        """
        if os.sep in executable:
            executable = os.path.abspath(executable)

        command_line = self.command_line(executable)
        log_command(command_line)

        if self.options.shell_redirect:
            completed = subprocess.run(
                command_line,
                shell=True,
                cwd=self.tempdir,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",
            )
        else:
            completed = subprocess.run(
                self.command_args(executable),
                cwd=self.tempdir,
                env=self.command_env(),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                encoding="utf-8",
                errors="replace",  # Replace invalid UTF-8 bytes instead of crashing
            )

        if completed.returncode != 0:
            log_command_failure(executable, completed.returncode, completed.stdout)
            raise GenerationError(
                f"Could not {action} using {executable}",
                tool=executable,
                log_file=self.log_file,
                returncode=completed.returncode,
                output=completed.stdout,
            )

    def _verify(self) -> None:
        """Check the output file has been generated."""
        if not self.result_file.exists():
            raise GenerationError(
                f"Could not find result PDF {self.result_file} after generation.",
                result_file=self.result_file,
                log_file=self.log_file,
            )
