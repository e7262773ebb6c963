"""Posts store: post files and the posts index under the blog root"""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from blogpub.config import Settings
from blogpub.core.models import PostInfo, PostsIndex
from blogpub.core.page import build_post_html


logger = logging.getLogger(__name__)


class PostNotFoundError(LookupError):
    """Raised when a post id is not present in the posts index."""

    def __init__(self, post_id: str):
        super().__init__(f"Post not found: {post_id}")
        self.post_id = post_id


def load_index(settings: Settings) -> PostsIndex:
    """Read posts/index.json; a missing or invalid index raises RuntimeError."""
    path = settings.index_path
    try:
        return PostsIndex.model_validate_json(path.read_text(encoding=settings.encoding))
    except (OSError, ValidationError) as e:
        raise RuntimeError(f"Failed to read posts index {path}: {e}") from e


def save_index(settings: Settings, index: PostsIndex) -> Path:
    path = settings.index_path
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(index.model_dump_json(indent=2) + "\n", encoding=settings.encoding)
    return path


def init_index(settings: Settings, reset: bool = False) -> Path:
    """Create an empty index unless one exists; reset=True overwrites it."""
    path = settings.index_path
    if path.exists() and not reset:
        return path
    save_index(settings, PostsIndex())
    logger.info(f"Posts index initialized at {path}")
    return path


def find_post(index: PostsIndex, post_id: str) -> Optional[PostInfo]:
    return next((p for p in index.posts if p.id == post_id), None)


def category_of(info: PostInfo) -> str:
    """Category directory from the index path: posts/web/x.txt -> web."""
    parts = Path(info.path).parts
    return parts[1] if len(parts) > 2 else ""


def post_files(settings: Settings, info: PostInfo) -> tuple[Path, Path]:
    """Return (source .txt path, generated .html path) for an index entry."""
    src = settings.root / info.path
    return src, src.with_suffix(".html")


def read_post(settings: Settings, post_id: str) -> tuple[PostInfo, str]:
    info = find_post(load_index(settings), post_id)
    if info is None:
        raise PostNotFoundError(post_id)
    src, _ = post_files(settings, info)
    try:
        return info, src.read_text(encoding=settings.encoding)
    except OSError as e:
        raise RuntimeError(f"Failed to read post {post_id}: {e}") from e


def save_post(settings: Settings, category: str, post_id: str, content: str) -> PostInfo:
    """Write the post source and its page, then upsert the index entry.

    An existing entry is replaced in place; a new one goes to the front.
    """
    info = PostInfo(
        id=post_id,
        path=f"posts/{category}/{post_id}.txt",
        category=category[:1].upper() + category[1:],
    )
    src, html_path = post_files(settings, info)
    src.parent.mkdir(parents=True, exist_ok=True)
    src.write_text(content, encoding=settings.encoding)
    logger.info(f"Post written: {src}")

    html_path.write_text(build_post_html(post_id, category, content, settings), encoding=settings.encoding)
    logger.info(f"Page generated: {html_path}")

    index = load_index(settings)
    for i, existing in enumerate(index.posts):
        if existing.id == post_id:
            index.posts[i] = info
            break
    else:
        index.posts.insert(0, info)
    save_index(settings, index)
    return info


def delete_post(settings: Settings, post_id: str) -> PostInfo:
    """Remove the post source, its page, and its index entry."""
    index = load_index(settings)
    info = find_post(index, post_id)
    if info is None:
        raise PostNotFoundError(post_id)

    for path in post_files(settings, info):
        if path.exists():
            path.unlink()
            logger.info(f"File deleted: {path}")

    index.posts = [p for p in index.posts if p.id != post_id]
    save_index(settings, index)
    return info
