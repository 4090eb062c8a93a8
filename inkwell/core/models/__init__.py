"""
Domain models — Pydantic types for inkwell.

    from inkwell.core.models import ArticleFrontMatter, SiteConfig
"""

from inkwell.core.models.article import ArticleFrontMatter
from inkwell.core.models.site import BuildSettings, SiteConfig, SiteInfo

__all__ = [
    "ArticleFrontMatter",
    "BuildSettings",
    "SiteConfig",
    "SiteInfo",
]
