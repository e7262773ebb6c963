"""Table-of-contents extraction from rendered fragments"""

import re

from blogpub.core.models import HeadingEntry


# Pattern scan, not an HTML parse: a title containing a nested tag does not match.
HEADING_TAG_RE = re.compile(r'<h([23]) id="([^"]+)">([^<]+)</h[23]>')


def extract_headings(html: str) -> list[HeadingEntry]:
    """Return h2/h3 headings with an id, in document order."""
    return [
        HeadingEntry(level=int(m.group(1)), anchor_id=m.group(2), title=m.group(3))
        for m in HEADING_TAG_RE.finditer(html)
    ]


def render_toc(headings: list[HeadingEntry]) -> str:
    """Jump-link menu markup, one anchor per heading."""
    return '\n'.join(
        f'<a href="#{h.anchor_id}" class="toc-h{h.level}" data-section="{h.anchor_id}">{h.title}</a>'
        for h in headings
    )
