"""
Front matter — split a post into its YAML header and body, and
(de)serialize the header.

Two on-disk layouts are recognised, both using ``---`` as the
delimiter:

    ---                     title: Hello       (Hexo / inkwell)
    title: Hello            ---
    ---                     body...
    body...
    (Jekyll)

The text is split on the delimiter at most twice, so a body that
contains its own ``---`` rules survives intact.
"""

from __future__ import annotations

import re

import yaml

from inkwell.core.models.article import ArticleFrontMatter

DELIMITER = "---"

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"

_DELIMITER_LINE = re.compile(r"^---[ \t]*$", re.MULTILINE)


class FrontMatterError(Exception):
    """Raised when a front matter document cannot be parsed."""


class FrontMatterSplitError(FrontMatterError):
    """Raised when a post has neither the Jekyll nor the Hexo layout."""


class _FrontMatterLoader(yaml.SafeLoader):
    """SafeLoader that keeps timestamps as their literal text."""


_FrontMatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def split_front_matter(content: str) -> tuple[str, str]:
    """Split post text into ``(front_matter, body)``.

    The content is stripped first.  Three segments means the Jekyll
    layout (header is the middle segment); two means the Hexo layout
    (header first).

    Raises:
        FrontMatterSplitError: If the delimiter is missing.
    """
    parts = content.strip().split(DELIMITER, 2)
    if len(parts) == 3:
        return parts[1], parts[2]
    if len(parts) == 2:
        return parts[0], parts[1]
    raise FrontMatterSplitError(f"no '{DELIMITER}' delimiter between front matter and body")


def split_article(content: str) -> tuple[str, str]:
    """Split an inkwell article (header first) into ``(front_matter, body)``.

    Unlike split_front_matter(), the delimiter only counts on a line of
    its own, and only the first one closes the header.  Horizontal rules
    in the body and ``---`` inside a header value are left alone.  Text
    that opens with a delimiter line is read as Jekyll.

    Raises:
        FrontMatterSplitError: If there is no delimiter line.
    """
    text = content.strip()
    delimiters = _DELIMITER_LINE.finditer(text)
    first = next(delimiters, None)
    if first is None:
        raise FrontMatterSplitError(f"no '{DELIMITER}' delimiter between front matter and body")
    if first.start() == 0:
        second = next(delimiters, None)
        if second is None:
            return "", text[first.end():]
        return text[first.end():second.start()], text[second.end():]
    return text[:first.start()], text[first.end():]


def parse_front_matter(text: str) -> ArticleFrontMatter:
    """Parse a YAML header into an ArticleFrontMatter.

    An empty header yields an all-default model.

    Raises:
        FrontMatterError: On invalid YAML, a non-mapping document or
            values that fail validation.
    """
    try:
        data = yaml.load(text, Loader=_FrontMatterLoader)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"invalid YAML: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(f"expected a YAML mapping, got {type(data).__name__}")

    try:
        return ArticleFrontMatter.model_validate(data)
    except Exception as e:
        raise FrontMatterError(f"invalid front matter: {e}") from e


def dump_front_matter(front_matter: ArticleFrontMatter) -> str:
    """Serialize a header back to YAML, keeping field order."""
    return yaml.safe_dump(
        front_matter.model_dump(),
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
