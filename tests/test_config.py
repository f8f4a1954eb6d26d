import json

import pytest

from permshell.config import ConfigLoader, ShellConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ConfigLoader.ENV_MAPPINGS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def dirs(tmp_path):
    root = tmp_path / "root"
    home = tmp_path / "home"
    (root / ".permshell").mkdir(parents=True)
    (home / ".permshell").mkdir(parents=True)
    return root, home


def loader_for(dirs):
    root, home = dirs
    return ConfigLoader(root=str(root), home_dir=str(home))


def test_defaults(dirs):
    config = loader_for(dirs).load()
    assert config == ShellConfig()
    assert config.permissions_file == ".permissions.txt"
    assert config.default_mode == "-rw-r--r--"
    assert config.color is True
    assert config.guard_destinations is False


def test_tree_config_overrides_user_config(dirs):
    root, home = dirs
    (home / ".permshell" / "config.json").write_text(json.dumps({"user": "alice", "color": False}))
    (root / ".permshell" / "config.json").write_text(json.dumps({"user": "bob"}))

    config = loader_for(dirs).load()
    assert config.user == "bob"
    assert config.color is False


def test_yaml_config(dirs):
    root, _ = dirs
    (root / ".permshell" / "config.json").write_text(json.dumps({"user": "json"}))
    (root / ".permshell" / "config.yaml").write_text(
        "user: yaml\nguard_destinations: true\npermissions_file: .perms\n"
    )

    config = loader_for(dirs).load()
    assert config.user == "yaml"
    assert config.guard_destinations is True
    assert config.permissions_file == ".perms"


def test_environment_overrides_files(dirs, monkeypatch):
    root, _ = dirs
    (root / ".permshell" / "config.json").write_text(json.dumps({"log_level": "ERROR"}))
    monkeypatch.setenv("PERMSHELL_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("PERMSHELL_COLOR", "false")

    config = loader_for(dirs).load()
    assert config.log_level == "DEBUG"
    assert config.color is False


def test_runtime_overrides_win_and_none_is_ignored(dirs, monkeypatch):
    monkeypatch.setenv("PERMSHELL_USER", "env")
    config = loader_for(dirs).load(overrides={"user": "cli", "color": None})
    assert config.user == "cli"
    assert config.color is True


def test_unreadable_files_and_unknown_keys_are_ignored(dirs):
    root, home = dirs
    (home / ".permshell" / "config.json").write_text("{not json")
    (root / ".permshell" / "config.yaml").write_text("- just\n- a list\n")
    (root / ".permshell" / "config.json").write_text(json.dumps({"nonsense": 1, "user": "ok"}))

    config = loader_for(dirs).load()
    assert config.user == "ok"


def test_to_dict_round_trips_fields():
    data = ShellConfig(user="x").to_dict()
    assert data["user"] == "x"
    assert set(data) == {
        "permissions_file", "default_mode", "user", "color",
        "guard_destinations", "log_enabled", "log_level", "log_directory",
    }


def test_invalid_default_mode_falls_back(dirs, monkeypatch):
    monkeypatch.setenv("PERMSHELL_DEFAULT_MODE", "rw-")
    assert loader_for(dirs).load().default_mode == "-rw-r--r--"


def test_non_string_values_are_ignored_or_coerced(dirs):
    root, _ = dirs
    (root / ".permshell" / "config.yaml").write_text(
        "log_level: 10\npermissions_file: 42\nuser: [a, b]\ndefault_mode: 644\n"
    )

    config = loader_for(dirs).load()
    assert config.log_level == "10"
    assert config.permissions_file == ".permissions.txt"
    assert config.user == "user"
    assert config.default_mode == "-rw-r--r--"


def test_valid_default_mode_is_kept(dirs, monkeypatch):
    monkeypatch.setenv("PERMSHELL_DEFAULT_MODE", "-r--r--r--")
    assert loader_for(dirs).load().default_mode == "-r--r--r--"
