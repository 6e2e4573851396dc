"""
Workspace Module

Uniquely named temporary directories holding every artifact of one document
generation. A workspace is removed after a successful run and deliberately
left on disk after a failure so the LaTeX log can be inspected.

    with scoped_workspace() as workspace:
        ...  # workspace.path exists here
    # removed, unless the block raised
"""

import os
import shutil
import threading
import time
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Callable, Iterator, Optional, TypeVar, Union

from texdoc.config import default_temp_root
from texdoc.contexts.rendering.logger import _log_debug, _log_warning
from texdoc.contexts.templating.escaping import latex_safe_filename

# Directory between the parent path and each workspace
WORKSPACE_ROOT_NAME = "texdoc"
DEFAULT_BASE_NAME = "rtex"

T = TypeVar("T")


def unique_token(owner: object = None) -> str:
    """
    Generate a token for a workspace directory name.

    Uses a random UUID. If the OS randomness source is unavailable, falls
    back to timestamp, thread hash and owner identity, which is unlikely to
    collide within a single process run but is not cryptographically unique.
    """
    try:
        return str(uuid.uuid4())
    except NotImplementedError:
        return f"{int(time.time())}-{hash(threading.current_thread())}-{id(owner)}"


class Workspace:
    """
    A temporary directory for one document generation.

    Constructing a Workspace has no filesystem side effect; the path is
    computed once here and never changes for the lifetime of the instance.

    Attributes:
        parent_path: Base directory (default: TEXDOC_TEMPDIR or system temp)
        base_name: Label prefix of the directory name
        path: Absolute path of the directory
        removed: True once remove() has run
    """

    def __init__(self, parent_path: Union[str, Path, None] = None, base_name: str = DEFAULT_BASE_NAME):
        self.parent_path = Path(parent_path) if parent_path is not None else default_temp_root()
        self.base_name = base_name
        self.path = Path(
            os.path.abspath(self.parent_path / WORKSPACE_ROOT_NAME / f"{base_name}-{unique_token(self)}")
        )
        self.removed = False

    def __repr__(self) -> str:
        return f"Workspace({str(self.path)!r})"

    def __fspath__(self) -> str:
        return str(self.path)

    @property
    def exists(self) -> bool:
        return self.path.is_dir()

    def materialize(self) -> Path:
        """
        Create the directory and any missing parents.

        Raises:
            OSError: If the directory cannot be created
        """
        self.path.mkdir(parents=True, exist_ok=True)
        self.removed = False
        _log_debug(f"Created workspace {self.path}")
        return self.path

    def remove(self) -> bool:
        """
        Delete the directory tree.

        Returns:
            False if already removed, True otherwise. Deletion errors (such as
            another process removing the tree first) are ignored.
        """
        if self.removed:
            return False
        shutil.rmtree(self.path, ignore_errors=True)
        self.removed = True
        _log_debug(f"Removed workspace {self.path}")
        return True

    def add_file(self, source: Union[str, Path], name: Optional[str] = None) -> Path:
        """
        Copy a file (e.g. an image for \\includegraphics) into the workspace.

        The destination name is made LaTeX-safe.

        Returns:
            Path of the copy
        """
        source = Path(source)
        destination = self.path / latex_safe_filename(name or source.name)
        shutil.copyfile(source, destination)
        return destination

    def add_data(self, data: Union[bytes, str], name: str) -> Path:
        """Write raw data to a LaTeX-safe filename inside the workspace."""
        destination = self.path / latex_safe_filename(name)
        if isinstance(data, str):
            data = data.encode("utf-8")
        destination.write_bytes(data)
        return destination


@contextmanager
def scoped_workspace(
    parent_path: Union[str, Path, None] = None, base_name: str = DEFAULT_BASE_NAME
) -> Iterator[Workspace]:
    """
    Materialize a workspace for the duration of a with-block.

    The workspace is removed when the block finishes normally. If the block
    raises, the directory is kept for diagnosis and the exception propagates
    unchanged.
    """
    workspace = Workspace(parent_path, base_name)
    workspace.materialize()
    try:
        yield workspace
    except BaseException:
        _log_warning(f"Keeping workspace for inspection: {workspace.path}")
        raise
    workspace.remove()


def run_scoped(
    body: Callable[[Workspace], T],
    parent_path: Union[str, Path, None] = None,
    base_name: str = DEFAULT_BASE_NAME,
) -> T:
    """
    Call body with a fresh workspace and return its result.

    Same cleanup rules as scoped_workspace().

    Example:
        >>> run_scoped(lambda workspace: "done")
        'done'
    """
    with scoped_workspace(parent_path, base_name) as workspace:
        return body(workspace)
