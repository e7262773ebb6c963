"""Markdown-subset to HTML renderer.

The conversion is an ordered pipeline of regex stages. Each stage takes an
immutable Draft (running text plus the code snippets stashed so far) and
returns a new one. Later stages see the output of earlier ones, so the order
in PIPELINE is part of the output format: code is stashed behind placeholders
first so no other stage can touch it, and paragraph wrapping runs after every
stage that emits block markup so it can recognise and skip that markup.

Only the constructs the blog's posts use are supported. Escaping is partial
(fenced code escapes `<` and `>` only, inline code is not escaped) and list
markup may fuse with a following line of text; both are part of the format.
"""

import re
from dataclasses import dataclass, replace
from typing import Callable

from blogpub.core.utils.slug import anchor_id


# Rest of the line up to, not including, a \r or \n terminator.
LINE_TEXT        = r'([^\r\n]+)(?=\r|$)'
CODE_FENCE_RE    = re.compile(r'```([A-Za-z0-9_]*)\n?(.*?)```', re.DOTALL)
EDGE_NEWLINES_RE = re.compile(r'\A\n+|\n+\Z')
INLINE_CODE_RE   = re.compile(r'`([^`\n]+)`')
H3_RE            = re.compile(r'^### ' + LINE_TEXT, re.MULTILINE)
H2_RE            = re.compile(r'^## ' + LINE_TEXT, re.MULTILINE)
H1_RE            = re.compile(r'^# ' + LINE_TEXT, re.MULTILINE)
STRONG_RE        = re.compile(r'\*\*([^*]+)\*\*')
EM_RE            = re.compile(r'\*([^*]+)\*')
LINK_RE          = re.compile(r'\[([^\]]+)\]\(([^)]+)\)')
IFRAME_RE        = re.compile(r'<iframe([^>]*)></iframe>')
UL_ITEM_RE       = re.compile(r'^- ' + LINE_TEXT, re.MULTILINE)
OL_ITEM_RE       = re.compile(r'^[0-9]+\. ' + LINE_TEXT, re.MULTILINE)
EMPTY_P_RE       = re.compile(r'<p>\s*</p>')

CODE_BLOCK_PREFIX  = '__CODE_BLOCK_'
INLINE_CODE_PREFIX = '__INLINE_CODE_'


@dataclass(frozen=True)
class Draft:
    """Running state of one render call."""
    text: str
    code_blocks: tuple[str, ...] = ()
    inline_codes: tuple[str, ...] = ()


def _placeholder(prefix: str, n: int) -> str:
    return f'{prefix}{n}__'


def _stash_code_blocks(draft: Draft) -> Draft:
    """Replace fenced blocks with placeholders and record their finished markup.

    Runs on the raw body.
    """
    blocks: list[str] = []

    def _stash(m: re.Match) -> str:
        code = EDGE_NEWLINES_RE.sub('', m.group(2))
        escaped = code.replace('<', '&lt;').replace('>', '&gt;')
        blocks.append(f'<pre><code class="language-{m.group(1) or "text"}">{escaped}</code></pre>')
        return _placeholder(CODE_BLOCK_PREFIX, len(blocks) - 1)

    text = CODE_FENCE_RE.sub(_stash, draft.text)
    return replace(draft, text=text, code_blocks=tuple(blocks))


def _stash_inline_code(draft: Draft) -> Draft:
    """Replace single-backtick spans with placeholders; content is kept verbatim.

    Pre: fenced blocks are stashed, so their backticks are gone.
    """
    codes: list[str] = []

    def _stash(m: re.Match) -> str:
        codes.append(f'<code>{m.group(1)}</code>')
        return _placeholder(INLINE_CODE_PREFIX, len(codes) - 1)

    text = INLINE_CODE_RE.sub(_stash, draft.text)
    return replace(draft, text=text, inline_codes=tuple(codes))


def _headings(draft: Draft) -> Draft:
    """h3, h2 then h1 so the longer prefix wins; only h2/h3 get an anchor id.

    Pre: all code is behind placeholders.
    """
    text = H3_RE.sub(lambda m: f'<h3 id="{anchor_id(m.group(1))}">{m.group(1)}</h3>', draft.text)
    text = H2_RE.sub(lambda m: f'<h2 id="{anchor_id(m.group(1))}">{m.group(1)}</h2>', text)
    text = H1_RE.sub(r'<h1>\1</h1>', text)
    return replace(draft, text=text)


def _emphasis(draft: Draft) -> Draft:
    """Bold before italic so `**` is never read as two `*`."""
    text = STRONG_RE.sub(r'<strong>\1</strong>', draft.text)
    text = EM_RE.sub(r'<em>\1</em>', text)
    return replace(draft, text=text)


def _links(draft: Draft) -> Draft:
    return replace(draft, text=LINK_RE.sub(r'<a href="\2" target="_blank">\1</a>', draft.text))


def _iframes(draft: Draft) -> Draft:
    """Wrap raw iframe tags for responsive styling."""
    text = IFRAME_RE.sub(r'<div class="iframe-container"><iframe\1></iframe></div>', draft.text)
    return replace(draft, text=text)


def _lists(draft: Draft) -> Draft:
    """One list per item line, then merge the junctions between consecutive lines.

    Pre: inline markup on item lines is already converted.
    """
    text = UL_ITEM_RE.sub(r'<ul><li>\1</li></ul>', draft.text)
    text = OL_ITEM_RE.sub(r'<ol><li>\1</li></ol>', text)
    text = text.replace('</ul>\n<ul>', '\n').replace('</ol>\n<ol>', '\n')
    return replace(draft, text=text)


def _paragraphs(draft: Draft) -> Draft:
    """Wrap blank-line separated blocks in <p> unless they already are markup.

    Pre: headings, lists and iframes are finished markup starting with `<`;
    fenced blocks are still placeholders.
    """
    blocks = []
    for block in draft.text.split('\n\n'):
        block = block.strip()
        if block and not block.startswith(('<', CODE_BLOCK_PREFIX)):
            block = f'<p>{block}</p>'
        blocks.append(block)
    return replace(draft, text='\n'.join(blocks))


def _drop_empty_paragraphs(draft: Draft) -> Draft:
    return replace(draft, text=EMPTY_P_RE.sub('', draft.text))


def _restore_code(draft: Draft) -> Draft:
    """Put stashed code back, each placeholder exactly once, in stash order."""
    text = draft.text
    for i, block in enumerate(draft.code_blocks):
        text = text.replace(_placeholder(CODE_BLOCK_PREFIX, i), block, 1)
    for i, code in enumerate(draft.inline_codes):
        text = text.replace(_placeholder(INLINE_CODE_PREFIX, i), code, 1)
    return Draft(text=text)


PIPELINE: tuple[Callable[[Draft], Draft], ...] = (
    _stash_code_blocks,
    _stash_inline_code,
    _headings,
    _emphasis,
    _links,
    _iframes,
    _lists,
    _paragraphs,
    _drop_empty_paragraphs,
    _restore_code,
)


def render(body: str) -> str:
    """Convert a post body to an HTML fragment. Never raises on malformed input."""
    draft = Draft(text=body)
    for stage in PIPELINE:
        draft = stage(draft)
    return draft.text
