"""
Convert use case — import Jekyll/Hexo posts into a site.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from inkwell.core.services.convert import ConvertError, ConvertResult, convert_tree


@dataclass
class ConvertOutcome:
    """Outcome of a convert run."""

    result: ConvertResult | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        if self.error:
            return {"error": self.error}
        return self.result.to_dict() if self.result else {}


def run_convert(source: Path | str, target: Path | str = ".") -> ConvertOutcome:
    """Convert every post under ``source`` into ``target/source``."""
    outcome = ConvertOutcome()
    try:
        outcome.result = convert_tree(Path(source), Path(target))
    except ConvertError as e:
        outcome.error = str(e)
    return outcome
