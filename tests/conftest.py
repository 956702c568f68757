import json
import logging
import sys
from pathlib import Path

import pytest



def pytest_configure(config: pytest.Config) -> None:
    if sys.flags.optimize:
        raise RuntimeError("Assertions are disabled (optimize > 0)")



@pytest.fixture(autouse=True)
def restore_root_logging():
    # configureLogging() replaces root handlers; give each test a clean slate back
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)



def write_files(base: Path, files: dict[str, str | bytes]) -> None:
    for rel, content in files.items():
        target = base / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")



@pytest.fixture()
def make_mod(tmp_path):
    """Creates a mod folder with a boot.json and extra files; returns its path."""
    def _make(name: str = "Demo", manifest: dict | None = None, files: dict[str, str | bytes] | None = None, *, root: Path | None = None) -> Path:
        mod_dir = (root or tmp_path) / name
        mod_dir.mkdir(parents=True, exist_ok=True)
        payload = {"name": name} if manifest is None else manifest
        (mod_dir / "boot.json").write_text(json.dumps(payload), encoding="utf-8")
        write_files(mod_dir, files or {})
        return mod_dir
    return _make
