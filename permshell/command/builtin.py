"""
Built-in Command Definitions - Registers the shell's commands.

Call `register_builtin_commands()` to populate the global Command registry.
"""

from .registry import Command


class CommandNames:
    """Names of the built-in commands."""
    LS = "ls"
    CD = "cd"
    MKDIR = "mkdir"
    RMDIR = "rmdir"
    DEL = "del"
    CHMOD = "chmod"
    PERM = "perm"
    CP = "cp"
    MV = "mv"
    SUDO = "sudo"
    HELP = "help"
    EXIT = "exit"


def register_builtin_commands() -> None:
    """Register all built-in commands in the global registry.

    This function is idempotent - calling it multiple times is safe.
    """
    # =========================================================================
    # Navigation
    # =========================================================================

    Command.register(
        CommandNames.LS,
        usage="ls",
        description="List directory contents with color + permissions",
        is_read_only=True,
    )

    Command.register(
        CommandNames.CD,
        usage="cd <dir>",
        description="Change directory",
        is_read_only=True,
    )

    # =========================================================================
    # File operations
    # =========================================================================

    Command.register(
        CommandNames.MKDIR,
        usage="mkdir <name>",
        description="Create directory",
        min_args=1,
    )

    Command.register(
        CommandNames.RMDIR,
        usage="rmdir <name>",
        description="Remove directory (if empty)",
        min_args=1,
    )

    Command.register(
        CommandNames.DEL,
        usage="del <file>",
        description="Delete a file",
        min_args=1,
    )

    Command.register(
        CommandNames.CHMOD,
        usage="chmod <file> <perm>",
        description="Change file permissions (e.g. 755)",
        min_args=2,
    )

    Command.register(
        CommandNames.PERM,
        usage="perm <file>",
        description="Show permissions",
        min_args=1,
        is_read_only=True,
    )

    Command.register(
        CommandNames.CP,
        usage="cp <src> <dest>",
        description="Copy file to destination",
        min_args=2,
    )

    Command.register(
        CommandNames.MV,
        usage="mv <src> <dest>",
        description="Move (rename) file or directory",
        min_args=2,
    )

    # =========================================================================
    # Session
    # =========================================================================

    Command.register(
        CommandNames.SUDO,
        usage="sudo <cmd>",
        description="Temporary permission override (next command only)",
        is_read_only=True,
    )

    Command.register(
        CommandNames.HELP,
        usage="help",
        description="Show this help menu",
        is_read_only=True,
    )

    Command.register(
        CommandNames.EXIT,
        usage="exit",
        description="Quit program",
        is_read_only=True,
    )
