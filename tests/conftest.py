"""Root test configuration: environment isolation and a throwaway blog root"""

import pytest

from blogpub.config import Settings


@pytest.fixture(autouse=True)
def isolate_env(tmp_path, monkeypatch):
    """Run each test from a clean cwd with no BLOGPUB_* variables leaking in."""
    for name in Settings.model_fields:
        monkeypatch.delenv(f"BLOGPUB_{name.upper()}", raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(name="blog_root")
def blog_root_fixture(tmp_path):
    """Blog root with an empty posts index."""
    root = tmp_path / "blog"
    (root / "posts").mkdir(parents=True)
    (root / "posts" / "index.json").write_text('{"posts": []}\n', encoding="utf-8")
    return root


@pytest.fixture(name="settings")
def settings_fixture(blog_root):
    return Settings(blog_root=str(blog_root), site_url="https://blog.test")
