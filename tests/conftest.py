"""
Pytest configuration and fixtures
"""

import pytest
import yaml
from unittest.mock import Mock

from zenith.controller import BarController
from zenith.scheduler import Scheduler
from zenith.surface.memory import MemorySurface
from zenith.tasks.model import TaskRecord
from zenith.tasks.store import TaskStore


class FakeClock:
    """Manually advanced monotonic clock"""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture(autouse=True)
def isolated_config_home(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config/zenith"""
    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "zenith"


@pytest.fixture(autouse=True)
def no_subprocess_calls(monkeypatch):
    """Prevent actual subprocess calls during testing"""
    mock_popen = Mock()
    mock_popen.returncode = 0
    monkeypatch.setattr("subprocess.Popen", Mock(return_value=mock_popen))
    monkeypatch.setattr("subprocess.run", Mock(return_value=Mock(returncode=0, stdout="", stderr="")))


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def store_path(tmp_path):
    """Path of a task file that does not exist yet"""
    return tmp_path / "tasks" / "todos.json"


@pytest.fixture
def store(store_path):
    """Empty task store backed by a temporary file"""
    return TaskStore(store_path)


@pytest.fixture
def sample_store(store_path):
    """Store with a mix of pending and done tasks, not yet saved"""
    return TaskStore(
        store_path,
        records=[
            TaskRecord("Deploy server", done=False, priority=3),
            TaskRecord("Write release notes", done=True, priority=0),
            TaskRecord("Review pull request", done=False, priority=5),
        ],
    )


@pytest.fixture
def fake_sysfs(tmp_path):
    """Empty thermal and DRM roots so tests never read the host's sensors"""
    thermal_root = tmp_path / "thermal"
    drm_root = tmp_path / "drm"
    thermal_root.mkdir()
    drm_root.mkdir()
    return {"thermal_root": str(thermal_root), "drm_root": str(drm_root)}


@pytest.fixture
def sample_config(store_path, fake_sysfs):
    """Sample configuration for testing"""
    return {
        "bar": {
            "surface": "memory",
            "separator": " | ",
        },
        "modules": {
            "clock": True,
            "clock_format": "%H:%M:%S",
            "calendar": True,
            "date_format": "%d %b",
            "system_stats": True,
            "todo": True,
            "todo_storage": str(store_path),
            "thermal_root": fake_sysfs["thermal_root"],
            "drm_root": fake_sysfs["drm_root"],
        },
    }


@pytest.fixture
def config_file(tmp_path, sample_config):
    """Create a temporary config file"""
    config_path = tmp_path / "test_config.yaml"
    with open(config_path, "w") as f:
        yaml.dump(sample_config, f)
    return config_path


@pytest.fixture
def surface():
    """Headless surface"""
    return MemorySurface()


@pytest.fixture
def controller(config_file, surface, fake_clock):
    """Bar controller set up on the headless surface with every module enabled"""
    bar = BarController(str(config_file), surface=surface, scheduler=Scheduler(clock=fake_clock))
    bar.load_config()
    bar.setup()
    yield bar
    bar.shutdown()
