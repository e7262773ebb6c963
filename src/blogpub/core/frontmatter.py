"""Front matter extraction: split a post file into a key/value header and body"""

import re

from blogpub.core.models import SplitDoc


FRONTMATTER_RE = re.compile(r'\A---\n(.*?)\n---\n(.*)\Z', re.DOTALL)


def _parse_header(block: str) -> dict[str, str]:
    """Split each header line at its first colon; lines without a usable colon are skipped."""
    meta: dict[str, str] = {}
    for line in block.split('\n'):
        colon = line.find(':')
        if colon > 0:
            meta[line[:colon].strip()] = line[colon + 1:].strip()
    return meta


def split_frontmatter(raw: str) -> SplitDoc:
    """Return SplitDoc(meta, body); a missing or malformed header yields ({}, raw).

    Values are never coerced: `tags: [a, b]` stays the string "[a, b]".
    """
    m = FRONTMATTER_RE.match(raw)
    if not m:
        return SplitDoc(meta={}, body=raw)
    return SplitDoc(meta=_parse_header(m.group(1)), body=m.group(2))
