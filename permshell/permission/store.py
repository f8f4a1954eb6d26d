"""
Permission Store - Durable mapping from path name to symbolic mode.

The store is a side-table: it records simulated permissions for names in the
working tree and knows nothing about the files themselves. Lookups never
fail; a name without an entry has the default mode.

Backing file format, one record per line:

    <name> <mode>

Names containing whitespace are not supported.
"""

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Generator, List, Optional, Tuple, Union

from ..logger import get_logger
from .codec import DEFAULT_MODE, is_symbolic

_logger = get_logger()


class PermissionStore:
    """In-memory permission table with write-through persistence.

    Mutators (`set`, `remove`, `rename`) only change memory. Group them in
    `transaction()` so the table is saved before the caller reports success.

    Example:
        store = PermissionStore(".permissions.txt")
        store.load()
        with store.transaction():
            store.set("notes.txt", "-r--------")
        store.get("notes.txt")   # "-r--------"
        store.get("other.txt")   # "-rw-r--r--"
    """

    def __init__(self, path: Union[str, Path], default_mode: str = DEFAULT_MODE):
        """Initialize the store.

        Args:
            path: Backing file location
            default_mode: Mode reported for names without an entry
        """
        if not is_symbolic(default_mode):
            raise ValueError(f"Invalid default mode: {default_mode!r}")
        self.path = Path(path)
        self.default_mode = default_mode
        self._entries: Dict[str, str] = {}

    def load(self) -> None:
        """Replace the in-memory table with the backing file's contents.

        A missing file leaves the store empty. Malformed lines are skipped.
        """
        self._entries = {}
        if not self.path.exists():
            _logger.debug("store", "load_missing", {"path": self.path})
            return

        skipped = 0
        with open(self.path, "r", encoding="utf-8") as f:
            for line_no, line in enumerate(f, 1):
                parts = line.split()
                if not parts:
                    continue
                if len(parts) != 2 or not is_symbolic(parts[1]):
                    skipped += 1
                    _logger.debug("store", "line_skipped", {"line": line_no})
                    continue
                name, mode = parts
                self._entries[name] = mode

        _logger.info("store", "loaded", {
            "path": self.path,
            "entries": len(self._entries),
            "skipped": skipped,
        })

    def save(self) -> None:
        """Rewrite the backing file with every entry, sorted by name.

        The file is written to a sibling temp file and swapped into place,
        so readers see either the old or the new table.
        """
        with _logger.span("store", "save", {"entries": len(self._entries)}) as span:
            text = self.dumps()
            directory = self.path.parent
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=str(directory)
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                    f.write(text)
                os.replace(tmp_name, self.path)
                span.set_data({"path": self.path, "bytes": len(text.encode("utf-8"))})
            except BaseException:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
                raise

    def dumps(self) -> str:
        """Serialize the table in backing-file format."""
        return "".join(f"{name} {mode}\n" for name, mode in sorted(self._entries.items()))

    def get(self, name: str) -> str:
        """Return the stored mode for name, or the default mode."""
        return self._entries.get(name, self.default_mode)

    def set(self, name: str, mode: str) -> None:
        """Insert or overwrite the entry for name."""
        if not is_symbolic(mode):
            raise ValueError(f"Invalid symbolic mode: {mode!r}")
        self._entries[name] = mode

    def remove(self, name: str) -> None:
        """Drop the entry for name. Absent names are ignored."""
        self._entries.pop(name, None)

    def rename(self, old_name: str, new_name: str) -> None:
        """Move the entry for old_name to new_name.

        Whatever new_name held before is discarded. If old_name has no
        entry, new_name is left without one and reads the default mode.
        """
        if old_name == new_name:
            return
        mode: Optional[str] = self._entries.pop(old_name, None)
        self._entries.pop(new_name, None)
        if mode is not None:
            self._entries[new_name] = mode

    @contextmanager
    def transaction(self) -> Generator["PermissionStore", None, None]:
        """Group mutations and persist them as one unit.

        Saves on normal exit. If the block (or the save) raises, the
        in-memory table is restored to what it was on entry.
        """
        snapshot = dict(self._entries)
        try:
            yield self
            self.save()
        except BaseException:
            self._entries = snapshot
            raise

    def items(self) -> List[Tuple[str, str]]:
        """Entries as (name, mode) pairs, sorted by name."""
        return sorted(self._entries.items())

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)
