"""
Configuration Loader - Load and merge configuration from multiple sources.

Configuration precedence (low → high):
1. ~/.permshell/config.json (user defaults)
2. <root>/.permshell/config.json (tree config)
3. <root>/.permshell/config.yaml (tree config, YAML)
4. Environment variables (PERMSHELL_*)
5. Runtime overrides (command-line flags)
"""

import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..permission.codec import DEFAULT_MODE, is_symbolic


@dataclass
class ShellConfig:
    """Parsed permshell configuration.

    Attributes:
        permissions_file: Sidecar file name, relative to the root
        default_mode: Mode reported for names without an entry
        user: User name shown in the prompt
        color: Emit ANSI colors
        guard_destinations: Gate overwriting existing cp/mv destinations
            on their owner write bit
        log_enabled: Write the JSON-lines session log
        log_level: Logging level
        log_directory: Directory for log files (system temp dir if unset)
    """
    permissions_file: str = ".permissions.txt"
    default_mode: str = DEFAULT_MODE
    user: str = "user"
    color: bool = True
    guard_destinations: bool = False
    log_enabled: bool = True
    log_level: str = "INFO"
    log_directory: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


_BOOL_KEYS = {"color", "guard_destinations", "log_enabled"}
_STR_KEYS = {"permissions_file", "user", "log_directory"}


class ConfigLoader:
    """Load configuration from multiple sources with precedence.

    Example:
        loader = ConfigLoader(root="/srv/data")
        config = loader.load(overrides={"color": False})
        print(config.permissions_file)  # .permissions.txt
    """

    ENV_MAPPINGS = {
        "PERMSHELL_PERMISSIONS_FILE": "permissions_file",
        "PERMSHELL_DEFAULT_MODE": "default_mode",
        "PERMSHELL_USER": "user",
        "PERMSHELL_COLOR": "color",
        "PERMSHELL_GUARD_DESTINATIONS": "guard_destinations",
        "PERMSHELL_LOG_ENABLED": "log_enabled",
        "PERMSHELL_LOG_LEVEL": "log_level",
        "PERMSHELL_LOG_DIR": "log_directory",
    }

    def __init__(
        self,
        root: Optional[str] = None,
        home_dir: Optional[str] = None,
    ):
        """Initialize the config loader.

        Args:
            root: Explorer root directory (default: current working dir)
            home_dir: Home directory (default: user's home)
        """
        self.root = Path(root) if root else Path.cwd()
        self.home_dir = Path(home_dir) if home_dir else Path.home()

        self.user_config_path = self.home_dir / ".permshell" / "config.json"
        self.tree_config_path = self.root / ".permshell" / "config.json"
        self.tree_yaml_path = self.root / ".permshell" / "config.yaml"

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> ShellConfig:
        """Load and merge configuration from all sources.

        Args:
            overrides: Highest-priority values; None entries are ignored

        Returns:
            Merged ShellConfig object
        """
        config_dict: Dict[str, Any] = {}

        if self.user_config_path.exists():
            config_dict.update(self._load_json(self.user_config_path))

        if self.tree_config_path.exists():
            config_dict.update(self._load_json(self.tree_config_path))

        if self.tree_yaml_path.exists():
            config_dict.update(self._load_yaml(self.tree_yaml_path))

        config_dict = self._apply_env_vars(config_dict)

        if overrides:
            config_dict.update({k: v for k, v in overrides.items() if v is not None})

        defaults = ShellConfig()
        known = {k: v for k, v in config_dict.items() if hasattr(defaults, k)}
        return ShellConfig(**self._validate(known, defaults))

    def _load_json(self, path: Path) -> Dict[str, Any]:
        """Load a JSON configuration file, or {} if it is unreadable."""
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load a YAML configuration file, or {} if it is unreadable."""
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError):
            return {}
        return data if isinstance(data, dict) else {}

    def _apply_env_vars(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply PERMSHELL_* environment variable overrides."""
        for env_var, config_key in self.ENV_MAPPINGS.items():
            value = os.environ.get(env_var)
            if value is not None:
                config[config_key] = value
        return config

    def _validate(self, config: Dict[str, Any], defaults: ShellConfig) -> Dict[str, Any]:
        """Coerce known keys to their types, dropping values that cannot be used.

        A dropped key falls back to its default, the same way an unreadable
        config file does.
        """
        for key in _BOOL_KEYS & config.keys():
            config[key] = _coerce_bool(config[key], getattr(defaults, key))

        for key in _STR_KEYS & config.keys():
            value = config[key]
            if value is None and key == "log_directory":
                continue
            if not isinstance(value, str) or not value.strip():
                del config[key]

        if "default_mode" in config:
            mode = config["default_mode"]
            if not isinstance(mode, str) or not is_symbolic(mode):
                del config["default_mode"]

        if "log_level" in config:
            config["log_level"] = str(config["log_level"])

        return config


def _coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if value is None:
        return default
    return bool(value)


def load_config(
    root: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ShellConfig:
    """Convenience function to load configuration.

    Args:
        root: Optional explorer root directory
        overrides: Optional runtime overrides

    Returns:
        Loaded ShellConfig
    """
    loader = ConfigLoader(root=root)
    return loader.load(overrides=overrides)
