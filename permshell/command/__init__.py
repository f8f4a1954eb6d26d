"""
Command system - Global command registry and built-in command definitions.

This module provides:
- Command: Global command registry (namespace singleton pattern)
- CommandDefinition: Usage, arity and help text of a command
- register_builtin_commands: Registers ls, cd, mkdir, ... exit
"""

from .builtin import CommandNames, register_builtin_commands
from .registry import Command, CommandDefinition

__all__ = ["Command", "CommandDefinition", "CommandNames", "register_builtin_commands"]
