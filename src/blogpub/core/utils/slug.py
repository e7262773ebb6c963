"""Slug generation for post ids and heading anchors"""

import re


ANCHOR_INVALID_RE = re.compile(r'[^a-z0-9가-힣]')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = text.lower()
    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'[\s_]+', '-', text)
    return re.sub(r'-+', '-', text).strip('-')


def anchor_id(title: str) -> str:
    """Heading anchor: ASCII alphanumerics and Hangul syllables kept, everything else one hyphen.

    "Hello World!" -> "hello-world", "C++ 기초" -> "c-기초", "!!!" -> "-".
    Edge hyphens are dropped unless nothing else is left.
    """
    text = re.sub(r'-+', '-', ANCHOR_INVALID_RE.sub('-', title.lower()))
    return text.strip('-') or text
