"""
Command Registry - Global command registry using namespace singleton pattern.

Commands are registered once with their usage and arity. The shell looks
them up to validate arguments and to render the help screen; the handlers
themselves live on the Shell.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass
class CommandDefinition:
    """Definition of a shell command.

    Attributes:
        name: Word typed at the prompt (e.g., "chmod")
        usage: Usage line (e.g., "chmod <file> <perm>")
        description: One-line help text
        min_args: Number of operands the command requires
        is_read_only: True if the command never changes the tree or store
    """
    name: str
    usage: str
    description: str
    min_args: int = 0
    is_read_only: bool = False


class _CommandRegistry:
    """Global command registry (singleton).

    Example:
        Command.register("ls", usage="ls", description="List directory")
        Command.get("ls").is_read_only
    """

    _instance: Optional["_CommandRegistry"] = None

    def __new__(cls) -> "_CommandRegistry":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._commands: Dict[str, CommandDefinition] = {}
        return cls._instance

    def register(
        self,
        name: str,
        *,
        usage: str = "",
        description: str = "",
        min_args: int = 0,
        is_read_only: bool = False,
    ) -> CommandDefinition:
        """Register a command.

        Re-registering an existing name returns the existing definition.

        Returns:
            The registered CommandDefinition
        """
        if name in self._commands:
            return self._commands[name]

        definition = CommandDefinition(
            name=name,
            usage=usage or name,
            description=description,
            min_args=min_args,
            is_read_only=is_read_only,
        )
        self._commands[name] = definition
        return definition

    def get(self, name: str) -> Optional[CommandDefinition]:
        """Get a command definition by name, or None."""
        return self._commands.get(name)

    def list(self) -> List[CommandDefinition]:
        """All registered commands, in registration order."""
        return list(self._commands.values())


# Global singleton instance
Command = _CommandRegistry()
