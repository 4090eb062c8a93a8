"""
Post conversion — import Jekyll/Hexo posts as inkwell posts.

For every ``.md`` / ``.html`` file under the source tree:

  1. split off the front matter (Jekyll or Hexo layout)
  2. parse it, merge categories into tags, default the author,
     normalize the date, clear ``update``
  3. write ``<yaml>\\n\\n---\\n\\n<body>\\n`` to ``<target>/source/``

Failure policy
──────────────
- Unreadable source files and malformed YAML abort the whole batch
  (``ConvertError``).
- A post without any ``---`` delimiter is rejected and recorded; the
  batch continues.
- A converted file that cannot be written is recorded as a warning;
  the batch continues.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from inkwell.core.models.article import ArticleFrontMatter
from inkwell.core.observability.logging_config import progress_logger
from inkwell.core.services.front_matter import (
    DELIMITER,
    FrontMatterError,
    FrontMatterSplitError,
    dump_front_matter,
    parse_front_matter,
    split_front_matter,
)

logger = logging.getLogger(__name__)
progress = progress_logger("convert")

CONVERTIBLE_SUFFIXES = (".md", ".html")
DEFAULT_AUTHOR = "me"
EPOCH_DATE = "1970-01-01 00:00:00"
MIDNIGHT = " 00:00:00"


class ConvertError(Exception):
    """Raised when conversion must abort."""


@dataclass
class ConvertFailure:
    """A file that was skipped during conversion."""

    path: Path
    error: str


@dataclass
class ConvertResult:
    """Outcome of a convert_tree() run."""

    converted: list[Path] = field(default_factory=list)
    failures: list[ConvertFailure] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.converted)

    def to_dict(self) -> dict:
        return {
            "count": self.count,
            "converted": [str(p) for p in self.converted],
            "failures": [
                {"path": str(f.path), "error": f.error} for f in self.failures
            ],
        }


# ── Normalization ───────────────────────────────────────────────


def merge_tags(tags: list[str], categories: list[str]) -> list[str]:
    """Tags first, then categories not already tagged, without duplicates."""
    seen: set[str] = set()
    merged: list[str] = []
    for item in [*tags, *categories]:
        if item not in seen:
            seen.add(item)
            merged.append(item)
    return merged


def normalize_date(date: str) -> str:
    """Normalize a legacy date to ``YYYY-MM-DD HH:MM:SS``.

    ``2015-01-02``        → ``2015-01-02 00:00:00``
    ``2015-01-02.10:00``  → ``2015-01-02 00:00:00``
    ``""``                → ``1970-01-01 00:00:00``
    """
    date = date.split(".", 1)[0]
    if len(date) == 10:
        date += MIDNIGHT
    if not date:
        date = EPOCH_DATE
    return date


def normalize_front_matter(front_matter: ArticleFrontMatter) -> ArticleFrontMatter:
    """Return the inkwell form of a legacy header."""
    return front_matter.model_copy(update={
        "tags": merge_tags(front_matter.tags, front_matter.categories),
        "author": front_matter.author or DEFAULT_AUTHOR,
        "date": normalize_date(front_matter.date),
        "update": "",
    })


def render_post(front_matter: ArticleFrontMatter, body: str) -> str:
    """Assemble a converted post: header, delimiter, body."""
    return f"{dump_front_matter(front_matter)}\n\n{DELIMITER}\n\n{body}\n"


def target_name(source_file: Path) -> str:
    """Output filename — ``.md`` appended unless already markdown."""
    name = source_file.name
    if source_file.suffix.lower() != ".md":
        name += ".md"
    return name


# ── Conversion ──────────────────────────────────────────────────


def convert_file(source_file: Path, target_root: Path) -> Path:
    """Convert one post and write it under ``target_root/source``.

    Returns:
        The path written.

    Raises:
        ConvertError: Unreadable file or malformed front matter.
        FrontMatterSplitError: Post has no front matter delimiter.
        OSError: The converted file could not be written.
    """
    try:
        content = source_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConvertError(f"Cannot read {source_file}: {e}") from e

    front, body = split_front_matter(content)

    try:
        article = parse_front_matter(front)
    except FrontMatterError as e:
        raise ConvertError(f"{source_file.name}: {e}") from e

    article = normalize_front_matter(article)

    out_path = target_root / "source" / target_name(source_file)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(render_post(article, body), encoding="utf-8")
    return out_path


def iter_posts(source: Path) -> list[Path]:
    """Convertible files under ``source`` (or ``source`` itself), sorted."""
    if source.is_file():
        candidates = [source]
    else:
        candidates = sorted(p for p in source.rglob("*") if p.is_file())
    return [p for p in candidates if p.suffix.lower() in CONVERTIBLE_SUFFIXES]


def convert_tree(source: Path, target: Path) -> ConvertResult:
    """Convert every Jekyll/Hexo post under ``source`` into ``target``.

    Raises:
        ConvertError: Missing paths, unreadable posts, malformed YAML.
    """
    if not source.exists() or not target.exists():
        raise ConvertError("Please specify valid path")

    result = ConvertResult()

    for post in iter_posts(source):
        progress.info("Converting %s", post.name)
        try:
            out_path = convert_file(post, target)
        except FrontMatterSplitError as e:
            logger.warning("Skipped %s: %s", post, e)
            result.failures.append(ConvertFailure(path=post, error=str(e)))
            continue
        except OSError as e:
            logger.warning("Failed to write converted %s: %s", post.name, e)
            result.failures.append(ConvertFailure(path=post, error=f"write failed: {e}"))
            continue
        result.converted.append(out_path)

    logger.info("Converted %d articles (%d skipped)", result.count, len(result.failures))
    return result
