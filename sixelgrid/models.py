from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from .rendering.quad import SizeInfo

DATA_PATH = Path(__file__).resolve().parent / "data" / "terminal_profiles.json"


@dataclass(frozen=True)
class TerminalProfile:
    name: str
    cell_width: int
    cell_height: int
    columns: int
    rows: int
    description: str = ""

    @property
    def screen_width(self) -> int:
        return self.cell_width * self.columns

    @property
    def screen_height(self) -> int:
        return self.cell_height * self.rows

    def size_info(self) -> SizeInfo:
        return SizeInfo(self.cell_width, self.cell_height, self.screen_width, self.screen_height)


class TerminalProfileRegistry:
    _cache: Dict[Path, "TerminalProfileRegistry"] = {}

    def __init__(self, profiles: Iterable[TerminalProfile]) -> None:
        self._profiles = list(profiles)

    @classmethod
    def load(cls, path: Path = DATA_PATH) -> "TerminalProfileRegistry":
        key = path.resolve()
        cached = cls._cache.get(key)
        if cached:
            return cached
        raw = json.loads(path.read_text(encoding="utf-8"))
        profiles = [TerminalProfile(**item) for item in raw]
        registry = cls(profiles)
        cls._cache[key] = registry
        return registry

    @property
    def profiles(self) -> List[TerminalProfile]:
        return list(self._profiles)

    def get(self, name: str) -> Optional[TerminalProfile]:
        target = name.lower()
        for profile in self._profiles:
            if profile.name.lower() == target:
                return profile
        return None

    def require(self, name: str) -> TerminalProfile:
        profile = self.get(name)
        if not profile:
            raise RuntimeError(f"Unknown terminal profile '{name}' (see --list-profiles)")
        return profile
