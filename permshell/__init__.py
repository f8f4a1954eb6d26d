"""
permshell - Interactive file explorer with simulated Unix permissions.

The shell overlays a side-table of symbolic permissions ("-rw-r--r--",
"drwxr-xr-x", ...) on the working tree and enforces it on every command,
with a one-command `sudo` override. The host's real permissions are never
touched.
"""

from .config import ShellConfig, load_config
from .errors import ShellError
from .permission import AuthorizationGate, Operation, PermissionStore
from .shell import CommandResult, Shell

__version__ = "0.1.0"
__all__ = [
    "AuthorizationGate",
    "CommandResult",
    "Operation",
    "PermissionStore",
    "Shell",
    "ShellConfig",
    "ShellError",
    "load_config",
]
