"""
Site model — the parsed contents of ``config.yml``.

Only the settings the build/preview/publish operations consume are
modelled; any other keys in the file are ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

DEFAULT_PORT = 8000


class SiteInfo(BaseModel):
    """Descriptive site metadata, used by the renderer."""

    title: str = ""
    subtitle: str = ""
    author: str = ""


class BuildSettings(BaseModel):
    """The ``build:`` section."""

    port: int = DEFAULT_PORT
    publish: str = ""

    @field_validator("port", mode="before")
    @classmethod
    def _port_from_string(cls, value: object) -> object:
        # Older configs quote the port ("8000"); empty means default
        if value is None or value == "":
            return DEFAULT_PORT
        return value


class SiteConfig(BaseModel):
    """Root configuration — loaded from config.yml."""

    site: SiteInfo = Field(default_factory=SiteInfo)
    build: BuildSettings = Field(default_factory=BuildSettings)
