"""Pytest configuration for grab-rig tests."""
import sys
from pathlib import Path
import pytest

# Add src directory to Python path so tests can import grab_rig, cli, services.
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))


@pytest.fixture(autouse=True)
def clean_grab_rig_env(monkeypatch):
    """Keep developer environment settings out of the tests."""
    for var in (
        "GRAB_RIG_LOG_LEVEL",
        "GRAB_RIG_JSON_INDENT",
        "GRAB_RIG_BACKUP_ON_SAVE",
        "GRAB_RIG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    yield
    from cli.utils.config import set_config
    set_config(None)


@pytest.fixture
def template_file(tmp_path):
    """Factory writing a hierarchy to a template file and returning its path."""
    from grab_rig.template_store import write_template

    def _write(root, name: str = "template.json") -> Path:
        return write_template(tmp_path / name, root)

    return _write
