"""In-memory parameter source."""

from __future__ import annotations

from typing import Iterable

from ..models import NeighborhoodParameters
from .base import ParameterSource, SourceResult


class StaticParameterSource(ParameterSource):
    """Serves a table the caller already holds."""

    def __init__(self, entries: Iterable[NeighborhoodParameters]) -> None:
        self._entries = tuple(entries)

    @property
    def source_name(self) -> str:
        return "static"

    def fetch(self, city: str | None = None) -> SourceResult:
        city_key = city.strip().lower() if city else None
        entries = [
            e for e in self._entries
            if city_key is None or e.city.strip().lower() == city_key
        ]
        return SourceResult(entries=entries, source=self.source_name)
