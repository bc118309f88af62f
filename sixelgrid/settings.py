from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .models import TerminalProfile
from .rendering.quad import SizeInfo

DEFAULT_PROFILE = "vt340"


@dataclass
class RenderSettings:
    profile: str = DEFAULT_PROFILE
    cell_width: Optional[int] = None
    cell_height: Optional[int] = None
    line: int = 0
    column: int = 0

    def resolve_size_info(self, profile: TerminalProfile) -> SizeInfo:
        """Apply cell overrides to ``profile`` keeping its grid dimensions."""
        cell_width = self.cell_width or profile.cell_width
        cell_height = self.cell_height or profile.cell_height
        return SizeInfo(
            cell_width,
            cell_height,
            cell_width * profile.columns,
            cell_height * profile.rows,
        )
