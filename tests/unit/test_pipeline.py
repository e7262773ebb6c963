"""Unit tests for pipeline.py"""

import json
import logging

import pytest

from blogpub.pipeline import build_all
from blogpub.store import save_post


def _write_index(blog_root, posts: list[dict]) -> None:
    (blog_root / "posts" / "index.json").write_text(json.dumps({"posts": posts}), encoding="utf-8")


def _write_post(blog_root, rel: str, content: str) -> None:
    path = blog_root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def test_build_all_renders_every_post(settings, blog_root):
    _write_post(blog_root, "posts/web/a.txt", "---\ntitle: A\n---\n## One\n")
    _write_post(blog_root, "posts/life/b.txt", "Plain body.")
    _write_index(blog_root, [
        {"id": "a", "path": "posts/web/a.txt", "category": "Web"},
        {"id": "b", "path": "posts/life/b.txt", "category": "Life"},
    ])

    report = build_all(settings)

    assert [post_id for post_id, _ in report.built] == ["a", "b"]
    assert report.failed == []
    page_a = (blog_root / "posts" / "web" / "a.html").read_text(encoding="utf-8")
    assert '<h2 id="one">One</h2>' in page_a
    assert "https://blog.test/posts/web/a.html" in page_a
    page_b = (blog_root / "posts" / "life" / "b.html").read_text(encoding="utf-8")
    assert "<title>b - " in page_b
    assert "<p>Plain body.</p>" in page_b


def test_build_all_continues_past_failures(settings, blog_root, caplog):
    """A missing source file is recorded as a failure; later posts still build."""
    _write_post(blog_root, "posts/web/ok.txt", "Fine.")
    _write_index(blog_root, [
        {"id": "ghost", "path": "posts/web/ghost.txt", "category": "Web"},
        {"id": "ok", "path": "posts/web/ok.txt", "category": "Web"},
    ])

    with caplog.at_level(logging.ERROR, logger="blogpub.pipeline"):
        report = build_all(settings)

    assert [post_id for post_id, _ in report.built] == ["ok"]
    assert [post_id for post_id, _ in report.failed] == ["ghost"]
    assert "ghost" in caplog.text
    assert (blog_root / "posts" / "web" / "ok.html").exists()


def test_build_all_empty_index(settings):
    report = build_all(settings)
    assert report.built == []
    assert report.failed == []


def test_build_all_regenerates_saved_posts(settings, blog_root):
    save_post(settings, "web", "post", "## Before\n")
    (blog_root / "posts" / "web" / "post.txt").write_text("## After\n", encoding="utf-8")
    build_all(settings)
    page = (blog_root / "posts" / "web" / "post.html").read_text(encoding="utf-8")
    assert '<h2 id="after">After</h2>' in page
    assert "Before" not in page


def test_build_all_missing_index_raises(settings, blog_root):
    (blog_root / "posts" / "index.json").unlink()
    with pytest.raises(RuntimeError):
        build_all(settings)
