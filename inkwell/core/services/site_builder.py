"""
Site builder — render ``source/`` into ``public/``.

Deliberately minimal: markdown articles become standalone HTML pages,
everything else is copied as-is, and an index lists the articles.
There is no theme or template layer.

``public/`` is updated in place and never wiped, because it usually
holds the publish target's own metadata (e.g. a ``.git`` directory).
"""

from __future__ import annotations

import html
import logging
import shutil
import time
from dataclasses import dataclass, field
from pathlib import Path

import markdown

from inkwell.core.models.article import ArticleFrontMatter
from inkwell.core.services.front_matter import (
    FrontMatterError,
    parse_front_matter,
    split_article,
)

logger = logging.getLogger(__name__)

SOURCE_DIR = "source"
PUBLIC_DIR = "public"

_MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]

LIVE_RELOAD_SCRIPT = (
    "<script>"
    "new EventSource('/live').addEventListener('change',"
    "function(){location.reload();});"
    "</script>"
)

_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
{body}
{script}</body>
</html>
"""


class BuildError(RuntimeError):
    """Raised when the site cannot be generated."""


@dataclass
class RenderedArticle:
    """An article written to public/."""

    front_matter: ArticleFrontMatter
    url: str


@dataclass
class BuildReport:
    """What a build produced."""

    articles: list[RenderedArticle] = field(default_factory=list)
    copied: int = 0
    duration_ms: int = 0

    def to_dict(self) -> dict:
        return {
            "articles": len(self.articles),
            "copied": self.copied,
            "duration_ms": self.duration_ms,
        }


def _page(title: str, body: str, live_reload: bool) -> str:
    return _PAGE.format(
        title=html.escape(title),
        body=body,
        script=LIVE_RELOAD_SCRIPT + "\n" if live_reload else "",
    )


def render_article(path: Path, live_reload: bool = False) -> tuple[ArticleFrontMatter, str]:
    """Render one markdown article into a full HTML page.

    Raises:
        BuildError: Unreadable file or invalid front matter.
    """
    try:
        content = path.read_text(encoding="utf-8")
        front, body = split_article(content)
        article = parse_front_matter(front)
    except (OSError, UnicodeDecodeError, FrontMatterError) as e:
        raise BuildError(f"{path.name}: {e}") from e

    title = article.title or path.stem
    rendered = markdown.markdown(body, extensions=_MARKDOWN_EXTENSIONS)
    page_body = f"<article>\n<h1>{html.escape(title)}</h1>\n{rendered}\n</article>"
    return article, _page(title, page_body, live_reload)


def render_index(articles: list[RenderedArticle], site_title: str, live_reload: bool = False) -> str:
    """Article list, newest first."""
    ordered = sorted(articles, key=lambda a: a.front_matter.date, reverse=True)
    items = "\n".join(
        f'<li><a href="{html.escape(a.url)}">'
        f"{html.escape(a.front_matter.title or a.url)}</a>"
        f" <time>{html.escape(a.front_matter.date)}</time></li>"
        for a in ordered
    )
    body = f"<h1>{html.escape(site_title)}</h1>\n<ul>\n{items}\n</ul>"
    return _page(site_title, body, live_reload)


def build_site(
    root: Path,
    *,
    live_reload: bool = False,
    site_title: str = "",
) -> BuildReport:
    """Generate ``root/public`` from ``root/source``.

    Args:
        root: Site root directory.
        live_reload: Embed the live reload client in every page.
        site_title: Heading for the generated index page.

    Raises:
        BuildError: Missing source directory, bad article, or I/O failure.
    """
    source = root / SOURCE_DIR
    public = root / PUBLIC_DIR
    if not source.is_dir():
        raise BuildError(f"Source directory not found: {source}")

    start = time.monotonic()
    report = BuildReport()

    try:
        public.mkdir(parents=True, exist_ok=True)
        for path in sorted(source.rglob("*")):
            if not path.is_file():
                continue
            rel = path.relative_to(source)
            if path.suffix.lower() == ".md":
                front_matter, page = render_article(path, live_reload)
                out = public / rel.with_suffix(".html")
                out.parent.mkdir(parents=True, exist_ok=True)
                out.write_text(page, encoding="utf-8")
                url = "/" + rel.with_suffix(".html").as_posix()
                report.articles.append(RenderedArticle(front_matter=front_matter, url=url))
            else:
                out = public / rel
                out.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(path, out)
                report.copied += 1

        if not (source / "index.html").exists():
            index = render_index(report.articles, site_title or "Articles", live_reload)
            (public / "index.html").write_text(index, encoding="utf-8")
    except OSError as e:
        raise BuildError(f"Build failed: {e}") from e

    report.duration_ms = int((time.monotonic() - start) * 1000)
    logger.info(
        "Built %d articles, copied %d files in %dms",
        len(report.articles), report.copied, report.duration_ms,
    )
    return report
