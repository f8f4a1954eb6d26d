"""
Configuration System - Load configs from multiple sources with precedence.

Provides:
- ConfigLoader: Load and merge configuration from files and environment
- ShellConfig: Parsed configuration

Configuration precedence (low → high):
1. ~/.permshell/config.json (user defaults)
2. <root>/.permshell/config.json and config.yaml (tree config)
3. PERMSHELL_* environment variables
4. Runtime overrides
"""

from .loader import ConfigLoader, ShellConfig, load_config

__all__ = ["ConfigLoader", "ShellConfig", "load_config"]
