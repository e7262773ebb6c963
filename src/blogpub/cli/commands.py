"""CLI command implementations"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from blogpub.config import Settings, load_config
from blogpub.core.frontmatter import split_frontmatter
from blogpub.core.page import build_post_html
from blogpub.core.render import render
from blogpub.core.toc import extract_headings
from blogpub.core.utils.slug import slugify
from blogpub.pipeline import build_all
from blogpub.store import PostNotFoundError, delete_post, init_index, load_index, save_post


BlogRoot = Annotated[Optional[str], typer.Option("--blog-root", help="Blog repository root")]


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _read(path: str, settings: Settings) -> str:
    try:
        return Path(path).read_text(encoding=settings.encoding)
    except OSError as e:
        _fail(f"Cannot read {path}", e)


def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log progress at INFO level")] = False,
    ):
    """Manage and build the posts of a static blog."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def init_cmd(
    reset: Annotated[bool, typer.Option("--reset", help="Overwrite an existing index with an empty one")] = False,
    blog_root: BlogRoot = None,
    ):
    """Create posts/index.json under the blog root."""
    settings = _settings(overrides={"blog_root": blog_root})
    path = init_index(settings, reset=reset)
    typer.echo(f"Posts index at: {path}")


def list_cmd(blog_root: BlogRoot = None):
    """List indexed posts as id, category, and source path."""
    settings = _settings(overrides={"blog_root": blog_root})
    try:
        index = load_index(settings)
    except RuntimeError as e:
        _fail(str(e))
    if not index.posts:
        typer.echo("No posts in index.")
        raise typer.Exit(1)
    for info in index.posts:
        typer.echo(f"{info.id}\t{info.category}\t{info.path}")


def render_cmd(
    path: Annotated[str, typer.Argument(help="Post file to render")],
    page: Annotated[bool, typer.Option("--page", help="Emit the full page instead of the fragment")] = False,
    post_id: Annotated[Optional[str], typer.Option("--id", help="Post id for the page (default: file stem)")] = None,
    category: Annotated[str, typer.Option("--category", help="Category for the page URL")] = "",
    out: Annotated[Optional[str], typer.Option("--out", help="Write to this file instead of stdout")] = None,
    blog_root: BlogRoot = None,
    ):
    """Render one post file to HTML."""
    settings = _settings(overrides={"blog_root": blog_root})
    raw = _read(path, settings)
    if page:
        html = build_post_html(post_id or Path(path).stem, category, raw, settings)
    else:
        html = render(split_frontmatter(raw).body)

    if out:
        try:
            Path(out).write_text(html, encoding=settings.encoding)
        except OSError as e:
            _fail(f"Cannot write {out}", e)
        typer.echo(f"  {path} -> {out}")
    else:
        typer.echo(html)


def toc_cmd(
    path: Annotated[str, typer.Argument(help="Post file to scan")],
    blog_root: BlogRoot = None,
    ):
    """Print the h2/h3 headings of a post as JSON."""
    settings = _settings(overrides={"blog_root": blog_root})
    html = render(split_frontmatter(_read(path, settings)).body)
    typer.echo(json.dumps([h.model_dump() for h in extract_headings(html)], ensure_ascii=False, indent=2))


def add_cmd(
    category: Annotated[str, typer.Argument(help="Category directory, e.g. web")],
    path: Annotated[str, typer.Argument(help="Post file to add")],
    post_id: Annotated[Optional[str], typer.Option("--id", help="Post id (default: slugified file stem)")] = None,
    blog_root: BlogRoot = None,
    ):
    """Save a post into the blog, generate its page, and index it."""
    settings = _settings(overrides={"blog_root": blog_root})
    content = _read(path, settings)
    post_id = post_id or slugify(Path(path).stem)
    if not post_id:
        _fail(f"Cannot derive a post id from {path}; pass --id")
    try:
        info = save_post(settings, category, post_id, content)
    except (RuntimeError, OSError) as e:
        _fail("Save failed", e)
    typer.echo(f"  {info.id} -> {info.path}")


def delete_cmd(
    post_id: Annotated[str, typer.Argument(help="Id of the post to delete")],
    blog_root: BlogRoot = None,
    ):
    """Delete a post's source, page, and index entry."""
    settings = _settings(overrides={"blog_root": blog_root})
    try:
        info = delete_post(settings, post_id)
    except (PostNotFoundError, RuntimeError, OSError) as e:
        _fail(str(e))
    typer.echo(f"Deleted {info.id} ({info.path})")


def build_cmd(blog_root: BlogRoot = None):
    """Regenerate the page of every indexed post."""
    settings = _settings(overrides={"blog_root": blog_root})
    try:
        report = build_all(settings)
    except RuntimeError as e:
        _fail(str(e))
    for post_id, html_path in report.built:
        typer.echo(f"  ok {post_id} -> {html_path}")
    for post_id, error in report.failed:
        typer.echo(f"  failed {post_id}: {error}", err=True)
    typer.echo(f"Build complete - {len(report.built)} built, {len(report.failed)} failed")
    if report.failed:
        raise typer.Exit(1)
