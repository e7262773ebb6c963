"""Data models for split documents, rendered posts, and the posts index"""

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class SplitDoc:
    """Front matter and body of a raw post file; not persisted."""
    meta: dict[str, str] = field(default_factory=dict)
    body: str = ""


class HeadingEntry(BaseModel):
    """A jump-link target found in a rendered fragment."""
    level: Literal[2, 3]
    anchor_id: str
    title: str


class Post(BaseModel):
    """Page-level view of a rendered post, consumed by the page template."""
    id: str
    category: str
    title: str
    description: str = ""
    date: str = ""
    tags: str = ""
    html: str
    headings: list[HeadingEntry] = []


class PostInfo(BaseModel):
    """One entry of posts/index.json."""
    model_config = ConfigDict(extra="allow")

    id: str
    path: str                       # relative to blog root, e.g. posts/web/hello.txt
    category: str = ""              # capitalised display name


class PostsIndex(BaseModel):
    """Persisted posts index; unknown top-level keys survive a rewrite."""
    model_config = ConfigDict(extra="allow")

    posts: list[PostInfo] = Field(default_factory=list)
