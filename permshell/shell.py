"""
Shell - Interactive file explorer with simulated permissions.

Each input line is one command. The shell resolves it through the Command
registry, asks the AuthorizationGate whether the operation may proceed,
performs it on the WorkingTree, and only then records the new state in the
PermissionStore (saved before the result is reported).

Every command runs inside the gate's command scope, so an escalation from
`sudo` covers exactly the next command whatever its outcome.
"""

import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Generator, List, Optional, TextIO, Union

from .command import Command, CommandNames, register_builtin_commands
from .config import ShellConfig
from .errors import (
    InvalidInputError,
    NotDirectoryError,
    NotEmptyError,
    NotFoundError,
    OperationFailedError,
    PermissionDeniedError,
    ShellError,
)
from .fsops import WorkingTree
from .logger import get_logger
from .permission import (
    DIRECTORY_MODE,
    AuthorizationGate,
    Operation,
    PermissionStore,
    classify,
    encode_numeric,
    has_write_bit,
)

_logger = get_logger()

ANSI_COLORS = {
    "reset": "\033[0m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
}


@dataclass
class OutputLine:
    """One line of command output and the color it is shown in."""
    text: str
    color: str = "reset"


@dataclass
class CommandResult:
    """Outcome of one processed input line.

    Attributes:
        command: Command word ("" for blank input)
        ok: False if the command failed
        lines: Output to show the user
        should_exit: True when the session should end
        error: The error that failed the command, if any
    """
    command: str
    ok: bool = True
    lines: List[OutputLine] = field(default_factory=list)
    should_exit: bool = False
    error: Optional[ShellError] = None

    @property
    def text(self) -> str:
        """Output without colors, one line per entry."""
        return "\n".join(line.text for line in self.lines)


Handler = Callable[[List[str]], CommandResult]


class Shell:
    """Read-eval-print loop over a WorkingTree.

    Example:
        shell = Shell("/srv/data")
        shell.execute("chmod secret.txt 400")
        shell.execute("del secret.txt").ok    # False, permission denied
        shell.execute("sudo")
        shell.execute("del secret.txt").ok    # True
    """

    def __init__(self, root: Union[str, Path], config: Optional[ShellConfig] = None):
        """Initialize the shell and load the permission store.

        Args:
            root: Directory the shell operates in; the sidecar lives here
            config: Shell configuration (defaults if omitted)
        """
        self.config = config or ShellConfig()
        self.tree = WorkingTree(root)
        self.store = PermissionStore(
            self.tree.root / self.config.permissions_file,
            default_mode=self.config.default_mode,
        )
        self.gate = AuthorizationGate(guard_destinations=self.config.guard_destinations)

        register_builtin_commands()
        self._handlers: Dict[str, Handler] = {
            CommandNames.LS: self._cmd_ls,
            CommandNames.CD: self._cmd_cd,
            CommandNames.MKDIR: self._cmd_mkdir,
            CommandNames.RMDIR: self._cmd_rmdir,
            CommandNames.DEL: self._cmd_del,
            CommandNames.CHMOD: self._cmd_chmod,
            CommandNames.PERM: self._cmd_perm,
            CommandNames.CP: self._cmd_cp,
            CommandNames.MV: self._cmd_mv,
            CommandNames.SUDO: self._cmd_sudo,
            CommandNames.HELP: self._cmd_help,
            CommandNames.EXIT: self._cmd_exit,
        }

        self.store.load()

    # =========================================================================
    # Loop
    # =========================================================================

    def prompt(self) -> str:
        return f"{self.config.user}@explorer {self.tree.display_cwd()} $ "

    def run(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None) -> int:
        """Run the interactive loop until `exit` or end of input.

        Returns:
            Process exit code (always 0)
        """
        stdin = stdin or sys.stdin
        stdout = stdout or sys.stdout

        stdout.write("==============================\n")
        stdout.write(" FILE EXPLORER\n")
        stdout.write("==============================\n")
        stdout.write(f"Current Directory: {self.tree.cwd}\n\n")

        _logger.info("shell", "session_started", {"root": self.tree.root})

        while True:
            stdout.write(self.prompt())
            stdout.flush()
            line = stdin.readline()
            if not line:
                stdout.write("\n")
                break

            result = self.execute(line)
            self.render(result, stdout)
            if result.should_exit:
                break

        stdout.write(self._paint("Exiting. Goodbye!", "yellow") + "\n")
        _logger.info("shell", "session_ended")
        return 0

    def render(self, result: CommandResult, stdout: TextIO) -> None:
        for line in result.lines:
            stdout.write(self._paint(line.text, line.color) + "\n")

    def execute(self, line: str) -> CommandResult:
        """Process one input line.

        Blank lines are not commands: they produce no output and leave a
        pending escalation in place.
        """
        parts = line.split()
        if not parts:
            return CommandResult(command="")

        name, args = parts[0], parts[1:]
        with self.gate.command_scope():
            return self._dispatch(name, args)

    def _dispatch(self, name: str, args: List[str]) -> CommandResult:
        definition = Command.get(name)
        handler = self._handlers.get(name)
        if definition is None or handler is None:
            _logger.debug("shell", "unknown_command", {"command": name})
            return CommandResult(
                command=name,
                ok=False,
                lines=[OutputLine("Unknown command.", "red")],
            )

        _logger.debug("shell", "command_received", {
            "command": name,
            "args": args,
            "escalated": self.gate.is_escalated,
            "read_only": definition.is_read_only,
        })

        try:
            if len(args) < definition.min_args:
                raise InvalidInputError(f"Usage: {definition.usage}")
            return handler(args)
        except ShellError as e:
            _logger.warn("shell", "command_error", {
                "command": name,
                "args": args,
                "error_type": type(e).__name__,
                "error": e.message,
            })
            return CommandResult(
                command=name,
                ok=False,
                lines=[OutputLine(e.message, e.color)],
                error=e,
            )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _paint(self, text: str, color: str) -> str:
        if not self.config.color or color == "reset":
            return text
        return f"{ANSI_COLORS[color]}{text}{ANSI_COLORS['reset']}"

    def _ok(self, command: str, message: str, color: str = "green") -> CommandResult:
        return CommandResult(command=command, lines=[OutputLine(message, color)])

    def _require(self, operation: Operation, mode: str, message: str = "Permission denied.") -> None:
        if not self.gate.authorize(operation, mode):
            raise PermissionDeniedError(message)

    def _require_existing(self, name: str, message: str = "Not found.") -> Path:
        path = self.tree.resolve(name)
        if not self.tree.exists(path):
            raise NotFoundError(message)
        return path

    def _check_protected(self, path: Path) -> None:
        if path == self.store.path:
            raise InvalidInputError("The permissions file is managed by the shell.")
        if path == self.tree.root or path == self.tree.cwd:
            raise InvalidInputError("Cannot modify the current or root directory.")

    def _guard_destination(self, dest: Path, dest_key: str) -> None:
        if self.tree.exists(dest):
            self._require(
                Operation.OVERWRITE_DESTINATION,
                self.store.get(dest_key),
                "Permission denied (destination not writable).",
            )

    @contextmanager
    def _persist(self) -> Generator[PermissionStore, None, None]:
        """Store transaction whose save failure is a command failure."""
        try:
            with self.store.transaction() as store:
                yield store
        except OSError as e:
            _logger.error("shell", "store_save_failed", {"error": e})
            raise OperationFailedError("Failed to save permissions.") from e

    @staticmethod
    def _mode_color(mode: str) -> str:
        if classify(mode).is_directory:
            return "blue"
        if has_write_bit(mode):
            return "green"
        return "yellow"

    # =========================================================================
    # Commands
    # =========================================================================

    def _cmd_ls(self, args: List[str]) -> CommandResult:
        self._require(Operation.LIST, self.store.get(self.tree.key(".")))
        result = CommandResult(command=CommandNames.LS, lines=[OutputLine("")])
        for name, _ in self.tree.list_entries():
            if self.tree.cwd / name == self.store.path:
                continue
            mode = self.store.get(self.tree.key(name))
            result.lines.append(OutputLine(f"{mode}  {name}", self._mode_color(mode)))
        return result

    def _cmd_cd(self, args: List[str]) -> CommandResult:
        self.tree.change_directory(args[0] if args else None)
        return CommandResult(command=CommandNames.CD)

    def _cmd_mkdir(self, args: List[str]) -> CommandResult:
        name = args[0]
        path = self.tree.resolve(name)
        if self.tree.exists(path):
            raise OperationFailedError("Failed to create directory.")
        self._require(Operation.CREATE, self.store.default_mode)

        self.tree.create_dir(path)
        with self._persist() as store:
            store.set(self.tree.key(name), DIRECTORY_MODE)

        _logger.info("shell", "directory_created", {"name": name})
        return self._ok(CommandNames.MKDIR, f"Directory created: {name}")

    def _cmd_rmdir(self, args: List[str]) -> CommandResult:
        name = args[0]
        path = self._require_existing(name)
        self._check_protected(path)
        if not self.tree.is_dir(path):
            raise NotDirectoryError("Not a directory.")
        if not self.tree.is_empty_dir(path):
            raise NotEmptyError("Directory not empty.")
        key = self.tree.key(name)
        self._require(Operation.REMOVE_DIRECTORY, self.store.get(key))

        self.tree.remove(path)
        with self._persist() as store:
            store.remove(key)

        _logger.info("shell", "directory_removed", {"name": name})
        return self._ok(CommandNames.RMDIR, "Directory removed.")

    def _cmd_del(self, args: List[str]) -> CommandResult:
        name = args[0]
        path = self._require_existing(name, "File not found.")
        self._check_protected(path)
        key = self.tree.key(name)
        self._require(Operation.DELETE, self.store.get(key))

        self.tree.remove(path)
        with self._persist() as store:
            store.remove(key)

        _logger.info("shell", "file_deleted", {"name": name, "escalated": self.gate.is_escalated})
        return self._ok(CommandNames.DEL, f"Deleted: {name}")

    def _cmd_chmod(self, args: List[str]) -> CommandResult:
        name, code = args[0], args[1]
        path = self._require_existing(name)
        self._check_protected(path)
        mode = encode_numeric(code, self.tree.is_dir(path))
        key = self.tree.key(name)
        self._require(Operation.CHANGE_MODE, self.store.get(key))

        with self._persist() as store:
            store.set(key, mode)

        _logger.info("shell", "mode_changed", {"name": name, "mode": mode})
        return self._ok(CommandNames.CHMOD, f"Changed permission of {name} to {mode}")

    def _cmd_perm(self, args: List[str]) -> CommandResult:
        name = args[0]
        self._require_existing(name)
        mode = self.store.get(self.tree.key(name))
        self._require(Operation.SHOW, mode)
        return self._ok(CommandNames.PERM, f"{name}: {mode}", "yellow")

    def _cmd_cp(self, args: List[str]) -> CommandResult:
        src, dest = args[0], args[1]
        src_path = self._require_existing(src, "Source not found.")
        src_mode = self.store.get(self.tree.key(src))
        self._require(Operation.COPY_SOURCE, src_mode, "Permission denied (no read).")

        dest_path = self.tree.resolve(dest)
        self._check_protected(dest_path)
        dest_key = self.tree.key(dest)
        self._guard_destination(dest_path, dest_key)

        self.tree.copy_file(src_path, dest_path)
        with self._persist() as store:
            store.set(dest_key, src_mode)

        _logger.info("shell", "file_copied", {"src": src, "dest": dest})
        return self._ok(CommandNames.CP, f"Copied {src} → {dest}")

    def _cmd_mv(self, args: List[str]) -> CommandResult:
        src, dest = args[0], args[1]
        src_path = self._require_existing(src, "Source not found.")
        self._check_protected(src_path)
        src_key = self.tree.key(src)
        self._require(Operation.MOVE_SOURCE, self.store.get(src_key), "Permission denied (no write).")

        dest_path = self.tree.resolve(dest)
        self._check_protected(dest_path)
        dest_key = self.tree.key(dest)
        self._guard_destination(dest_path, dest_key)

        self.tree.rename(src_path, dest_path)
        with self._persist() as store:
            store.rename(src_key, dest_key)

        _logger.info("shell", "file_moved", {"src": src, "dest": dest})
        return self._ok(CommandNames.MV, f"Moved {src} → {dest}")

    def _cmd_sudo(self, args: List[str]) -> CommandResult:
        self.gate.escalate()
        result = self._ok(CommandNames.SUDO, "Sudo mode active (for one command).", "yellow")
        if args:
            result.lines.append(OutputLine(
                f"Ignored '{' '.join(args)}': enter the command on the next line.", "yellow"
            ))
        return result

    def _cmd_help(self, args: List[str]) -> CommandResult:
        rule = "=============================="
        lines = [
            OutputLine(""),
            OutputLine(rule),
            OutputLine(" Available Commands (Linux-style)"),
            OutputLine(rule),
        ]
        for definition in Command.list():
            lines.append(OutputLine(f"{definition.usage:<20}- {definition.description}"))
        lines.append(OutputLine(rule))
        return CommandResult(command=CommandNames.HELP, lines=lines)

    def _cmd_exit(self, args: List[str]) -> CommandResult:
        return CommandResult(command=CommandNames.EXIT, should_exit=True)
