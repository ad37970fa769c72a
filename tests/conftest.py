import importlib
import json
import uuid

import pytest


@pytest.fixture
def home_dir(tmp_path):
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def work_dir(tmp_path):
    path = tmp_path / "work"
    (path / "etc").mkdir(parents=True)
    return path


@pytest.fixture
def resource_package(tmp_path, monkeypatch):
    """Factory creating an importable package carrying the given JSON files."""
    root = tmp_path / "site"
    root.mkdir()
    monkeypatch.syspath_prepend(str(root))

    def make(files):
        name = f"cfgres_{uuid.uuid4().hex[:8]}"
        pkg = root / name
        pkg.mkdir()
        (pkg / "__init__.py").write_text("", encoding="utf-8")
        for filename, content in files.items():
            text = content if isinstance(content, str) else json.dumps(content)
            (pkg / filename).write_text(text, encoding="utf-8")
        importlib.invalidate_caches()
        return name

    return make
