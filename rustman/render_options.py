"""Options that shape rendering of every page in a run."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class RenderOptions:
    """Per-run rendering settings."""

    max_width: int = 80  # width budget for module index summary lines
    manual_section: str = "3r"
    repr_attributes_only: bool = True

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "RenderOptions":
        """Build options from the `render` table of a loaded configuration."""
        render = config.get("render") or {}
        return cls(
            max_width=int(render.get("max_width", cls.max_width)),
            manual_section=str(render.get("manual_section", cls.manual_section)),
            repr_attributes_only=bool(
                render.get("repr_attributes_only", cls.repr_attributes_only)
            ),
        )
