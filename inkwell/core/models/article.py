"""
Article front matter — the YAML header at the top of a post.

Legacy (Jekyll/Hexo) posts are loose about types: ``tags`` may be a
single string, Hexo ``categories`` may nest, and titles may parse as
numbers.  The validators below coerce all of that into plain strings
and flat string lists.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ArticleFrontMatter(BaseModel):
    """Metadata header of one article.

    Field order is the serialization order of converted posts.
    """

    title: str = ""
    date: str = ""
    update: str = ""
    author: str = ""
    tags: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)

    @field_validator("title", "date", "update", "author", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: object) -> str:
        if value is None:
            return ""
        return str(value)

    @field_validator("tags", "categories", mode="before")
    @classmethod
    def _to_str_list(cls, value: object) -> list[str]:
        if value is None:
            return []
        if isinstance(value, (list, tuple)):
            return _flatten(value)
        return [str(value)]


def _flatten(items: list | tuple) -> list[str]:
    """Flatten nested lists (Hexo hierarchical categories)."""
    result: list[str] = []
    for item in items:
        if item is None:
            continue
        if isinstance(item, (list, tuple)):
            result.extend(_flatten(item))
        else:
            result.append(str(item))
    return result
