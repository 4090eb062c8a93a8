"""
Build use case — regenerate ``public/`` from ``source/``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from inkwell.core.config.loader import ConfigError, load_site
from inkwell.core.models.site import SiteConfig
from inkwell.core.services.site_builder import BuildError, BuildReport, build_site


@dataclass
class BuildResult:
    """Outcome of a site build."""

    site_root: Path | None = None
    config: SiteConfig | None = None
    report: BuildReport | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        if self.error:
            return {"error": self.error}
        return {
            "site_root": str(self.site_root),
            **(self.report.to_dict() if self.report else {}),
        }


def run_build(root: Path | str | None = None, *, live_reload: bool = False) -> BuildResult:
    """Load the site config and build the site once.

    Args:
        root: Site root (default: cwd, falling back to ``blog``).
        live_reload: Embed the live reload client in generated pages.
    """
    result = BuildResult()

    try:
        result.site_root, result.config = load_site(root)
    except ConfigError as e:
        result.error = str(e)
        return result

    try:
        result.report = build_site(
            result.site_root,
            live_reload=live_reload,
            site_title=result.config.site.title,
        )
    except BuildError as e:
        result.error = str(e)

    return result
