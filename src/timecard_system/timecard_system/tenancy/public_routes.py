from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Pattern, Tuple


@dataclass(frozen=True)
class PublicRoutes:
    """Allow-list of paths reachable without a session.

    Patterns are full-match regular expressions (``/blog(.*)`` covers every
    blog page). Matching depends on the path alone.
    """

    patterns: Tuple[str, ...]
    _compiled: Tuple[Pattern[str], ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_compiled", tuple(re.compile(p) for p in self.patterns))

    @classmethod
    def of(cls, patterns: Iterable[str]) -> "PublicRoutes":
        return cls(tuple(patterns))

    def is_public(self, path: str) -> bool:
        return any(rx.fullmatch(path) for rx in self._compiled)
