"""Post assembly and full-page templating"""

from datetime import date
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from blogpub.config import Settings
from blogpub.core.frontmatter import split_frontmatter
from blogpub.core.models import Post
from blogpub.core.render import render
from blogpub.core.toc import extract_headings, render_toc


TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
POST_TEMPLATE = "post.html"


def _environment(settings: Settings) -> Environment:
    """Jinja environment searching templates_dir (if set) before the bundled templates.

    Autoescape stays off: the fragment and metadata are embedded verbatim.
    """
    search_path = [str(TEMPLATES_DIR)]
    if settings.templates_dir:
        search_path.insert(0, settings.templates_dir)
    return Environment(loader=FileSystemLoader(search_path), autoescape=False)


def build_post(post_id: str, category: str, raw: str) -> Post:
    """Split, render, and collect headings for one post file."""
    doc = split_frontmatter(raw)
    html = render(doc.body)
    return Post(
        id=post_id,
        category=category,
        title=doc.meta.get("title") or post_id,
        description=doc.meta.get("description", ""),
        date=doc.meta.get("date", ""),
        tags=doc.meta.get("tags", ""),
        html=html,
        headings=extract_headings(html),
    )


def render_page(post: Post, settings: Settings) -> str:
    """Embed a rendered post into the full page template."""
    template = _environment(settings).get_template(POST_TEMPLATE)
    return template.render(
        post=post,
        toc=render_toc(post.headings),
        site=settings,
        url=f"{settings.site_url}/posts/{post.category}/{post.id}.html",
        published=post.date or date.today().isoformat(),
    )


def build_post_html(post_id: str, category: str, raw: str, settings: Settings) -> str:
    return render_page(build_post(post_id, category, raw), settings)
