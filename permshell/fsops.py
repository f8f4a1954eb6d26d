"""
Working Tree - Filesystem operations confined to the shell's root directory.

Names typed at the prompt are resolved against the current directory and
must stay inside the root the shell was started in. Store keys are the
root-relative, '/'-separated form of those names, so a file keeps the same
key whichever directory it is addressed from.

OS failures are reported as OperationFailedError carrying the message the
shell shows to the user.
"""

import os
import shutil
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, List, Optional, Tuple, Union

from .errors import InvalidInputError, NotDirectoryError, NotFoundError, OperationFailedError
from .logger import get_logger

_logger = get_logger()


@contextmanager
def _os_call(operation: str, failure_message: str) -> Generator[None, None, None]:
    """Translate OSError into OperationFailedError."""
    try:
        yield
    except OSError as e:
        _logger.warn("fsops", f"{operation}_failed", {"error": e})
        raise OperationFailedError(failure_message) from e


class WorkingTree:
    """The directory tree the shell operates on.

    Example:
        tree = WorkingTree("/srv/data")
        path = tree.resolve("notes.txt")      # /srv/data/notes.txt
        tree.change_directory("reports")
        tree.key("q1.txt")                     # "reports/q1.txt"
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve()
        if not self.root.is_dir():
            raise NotADirectoryError(f"Root is not a directory: {self.root}")
        self.cwd = self.root

    def resolve(self, name: str) -> Path:
        """Resolve a typed name against the current directory.

        Raises:
            InvalidInputError: If the path escapes the root
        """
        candidate = Path(os.path.normpath(self.cwd / name))
        try:
            candidate.relative_to(self.root)
        except ValueError:
            raise InvalidInputError(f"Path '{name}' is outside the explorer root.")
        return candidate

    def key(self, name: str) -> str:
        """Store key for a typed name: its root-relative posix path."""
        relative = self.resolve(name).relative_to(self.root)
        return relative.as_posix()

    def display_cwd(self) -> str:
        """Name of the current directory, for the prompt."""
        return self.cwd.name or str(self.cwd)

    def change_directory(self, name: Optional[str]) -> Path:
        """Move to another directory inside the root (root when name is None)."""
        target = self.root if name is None else self.resolve(name)
        if not target.exists():
            raise NotFoundError("Not found.")
        if not target.is_dir():
            raise NotDirectoryError("Not a directory.")
        self.cwd = target
        return target

    def list_entries(self) -> List[Tuple[str, bool]]:
        """Entries of the current directory as (name, is_dir), sorted by name."""
        with _os_call("list", "Failed to list directory."):
            entries = [(p.name, p.is_dir()) for p in self.cwd.iterdir()]
        return sorted(entries)

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_empty_dir(self, path: Path) -> bool:
        return path.is_dir() and next(path.iterdir(), None) is None

    def create_dir(self, path: Path) -> None:
        with _os_call("create_dir", "Failed to create directory."):
            path.mkdir()

    def remove(self, path: Path) -> None:
        """Remove a file or an empty directory."""
        with _os_call("remove", "Remove failed."):
            if path.is_dir() and not path.is_symlink():
                path.rmdir()
            else:
                path.unlink()

    def copy_file(self, src: Path, dest: Path) -> None:
        """Copy file contents, replacing dest if it exists."""
        with _os_call("copy", "Copy failed."):
            if src.is_dir():
                raise IsADirectoryError(f"Cannot copy a directory: {src}")
            shutil.copyfile(src, dest)

    def rename(self, src: Path, dest: Path) -> None:
        with _os_call("rename", "Move failed."):
            src.rename(dest)
