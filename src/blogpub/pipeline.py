"""Batch build: regenerate the page of every indexed post"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

from blogpub.config import Settings
from blogpub.core.page import build_post_html
from blogpub.store import category_of, load_index, post_files


logger = logging.getLogger(__name__)


@dataclass
class BuildReport:
    built:  list[tuple[str, Path]] = field(default_factory=list)   # (post id, html path)
    failed: list[tuple[str, str]]  = field(default_factory=list)   # (post id, error message)


def build_all(settings: Settings) -> BuildReport:
    """Render each post in the index next to its source file.

    A failing post is logged and recorded; the rest of the batch still runs.
    """
    index = load_index(settings)
    logger.info(f"Building {len(index.posts)} post(s) under {settings.root}")
    report = BuildReport()

    for info in index.posts:
        src, html_path = post_files(settings, info)
        try:
            raw = src.read_text(encoding=settings.encoding)
            html_path.write_text(
                build_post_html(info.id, category_of(info), raw, settings),
                encoding=settings.encoding,
            )
        except Exception as e:
            logger.error(f"Failed to build {info.id}: {e}")
            report.failed.append((info.id, str(e)))
            continue
        logger.info(f"Built {html_path}")
        report.built.append((info.id, html_path))

    logger.info(f"Build complete: {len(report.built)} built, {len(report.failed)} failed")
    return report
