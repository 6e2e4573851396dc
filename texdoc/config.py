"""
Document Configuration

Resolves the options a document is generated with. Values are layered:

    built-in defaults <- environment (.env) <- YAML config file <- caller overrides

Every layer produces a new immutable DocumentOptions; nothing here is
mutated after construction.

Environment variables:
    TEXDOC_PREPROCESSOR     preprocessing executable (default: latex)
    TEXDOC_PROCESSOR        processing executable (default: pdflatex)
    TEXDOC_PREPROCESS       true, false or number of preprocessing passes (default: 0)
    TEXDOC_TEX_INPUTS       extra TEXINPUTS directories, os.pathsep separated
    TEXDOC_SHELL_REDIRECT   trailing shell redirection, e.g. "> /dev/null 2>&1"
    TEXDOC_TEMPDIR          parent directory for workspaces (default: system temp)
"""

import dataclasses
import math
import os
import tempfile
from dataclasses import dataclass
from numbers import Real
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence, Tuple, Union

from dotenv import load_dotenv
from omegaconf import OmegaConf

load_dotenv()

PathLike = Union[str, Path]


def default_temp_root() -> Path:
    """Parent directory for workspaces: TEXDOC_TEMPDIR or the system temp root."""
    return Path(os.getenv("TEXDOC_TEMPDIR") or tempfile.gettempdir())


def _as_tuple(value) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (str, Path)):
        return (str(value),)
    return tuple(str(v) for v in value)


@dataclass(frozen=True)
class DocumentOptions:
    """
    Resolved options for generating one document.

    Attributes:
        preprocessor: Executable run before the processor (e.g. latex)
        processor: Executable producing the final output (e.g. pdflatex)
        preprocess: True, False or a number of preprocessing passes
        shell_redirect: Optional redirection appended to each command
        tex_inputs: Extra directories exported through TEXINPUTS
        command_prefix: Environment assignments (string or list) for each command
        tempdir: Directory or Workspace to generate in (default: current directory)
        tex: Markup-only mode; return the LaTeX source instead of a PDF
        processed: Content is final markup; skip template expansion
        filter: Name of a registered content filter
        layout: Layout template the expanded content is wrapped in
    """

    preprocessor: str = "latex"
    processor: str = "pdflatex"
    preprocess: Union[bool, int, float, None] = False
    shell_redirect: Optional[str] = None
    tex_inputs: Tuple[str, ...] = ()
    command_prefix: Union[str, Sequence[str], None] = None
    tempdir: Any = None
    tex: bool = False
    processed: bool = False
    filter: Optional[str] = None
    layout: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "tex_inputs", _as_tuple(self.tex_inputs))
        if self.command_prefix is not None and not isinstance(self.command_prefix, str):
            object.__setattr__(self, "command_prefix", tuple(self.command_prefix))

    @property
    def preprocess_count(self) -> int:
        """
        Number of preprocessing passes.

        True means one pass, a finite number is truncated to an int (never
        below zero), anything else means no preprocessing.
        """
        value = self.preprocess
        if value is True:
            return 1
        if isinstance(value, bool) or not isinstance(value, Real):
            return 0
        if not math.isfinite(value):
            return 0
        return max(0, int(value))

    @property
    def generating(self) -> bool:
        """Whether external tools run at all (False in markup-only mode)."""
        return not self.tex

    def merge(self, **overrides) -> "DocumentOptions":
        """
        Return a copy with overrides applied.

        Raises:
            TypeError: If an override names an unknown option
        """
        return dataclasses.replace(self, **overrides)

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)


def parse_preprocess(value: str) -> Union[bool, float, str]:
    """
    Read a preprocess setting from text.

    "true"/"false" (any case) become booleans and numeric text becomes a
    float. Anything else is returned as-is and counts as no preprocessing.
    """
    lowered = value.strip().lower()
    if lowered in ("true", "false"):
        return lowered == "true"
    try:
        return float(lowered)
    except ValueError:
        return value


def default_options() -> DocumentOptions:
    """Built-in defaults with environment overrides applied."""
    overrides = {}

    if os.getenv("TEXDOC_PREPROCESSOR"):
        overrides["preprocessor"] = os.getenv("TEXDOC_PREPROCESSOR")
    if os.getenv("TEXDOC_PROCESSOR"):
        overrides["processor"] = os.getenv("TEXDOC_PROCESSOR")
    if os.getenv("TEXDOC_PREPROCESS"):
        overrides["preprocess"] = parse_preprocess(os.getenv("TEXDOC_PREPROCESS"))
    if os.getenv("TEXDOC_TEX_INPUTS"):
        overrides["tex_inputs"] = [p for p in os.getenv("TEXDOC_TEX_INPUTS").split(os.pathsep) if p]
    if os.getenv("TEXDOC_SHELL_REDIRECT"):
        overrides["shell_redirect"] = os.getenv("TEXDOC_SHELL_REDIRECT")

    return DocumentOptions(**overrides)


def options_from_mapping(
    mapping: Mapping[str, Any], base: Optional[DocumentOptions] = None
) -> DocumentOptions:
    """
    Merge a plain mapping over base (default: default_options()).

    Raises:
        ValueError: If the mapping contains unknown option names
    """
    base = base if base is not None else default_options()
    known = {f.name for f in dataclasses.fields(DocumentOptions)}
    unknown = sorted(set(mapping) - known)
    if unknown:
        raise ValueError(f"Unknown document option(s): {', '.join(unknown)}")
    return base.merge(**dict(mapping))


def load_options(config_path: PathLike, base: Optional[DocumentOptions] = None) -> DocumentOptions:
    """
    Load document options from a YAML file.

    Example config:
        processor: xelatex
        preprocess: 2
        tex_inputs:
          - ./styles

    Args:
        config_path: Path to YAML file
        base: Options to merge over (default: default_options())

    Returns:
        New DocumentOptions
    """
    loaded = OmegaConf.to_container(OmegaConf.load(config_path), resolve=True)
    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")
    return options_from_mapping(loaded, base=base)
