import pytest

from permshell.config import ShellConfig
from permshell.logger import configure_logger
from permshell.shell import Shell


@pytest.fixture(autouse=True)
def quiet_logger():
    """Keep the session log out of the test run."""
    configure_logger(enabled=False)
    yield
    configure_logger(enabled=False)


@pytest.fixture
def config():
    return ShellConfig(color=False, log_enabled=False)


@pytest.fixture
def shell(tmp_path, config):
    return Shell(tmp_path, config)


@pytest.fixture
def make_file(tmp_path):
    def _make(name, content="data"):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path
    return _make
