"""Data models used across the pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class HeaderInfo:
    row_index: int
    column_names: list[str]


@dataclass(frozen=True)
class EnrichedRecord:
    admin_code: str | None
    region_code: str | None
    display_name: str
    normalization_key: str
    metric_value: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class BoundaryRecord:
    display_name: str
    normalization_key: str
    geometry: Any
    centroid: tuple[float, float]


@dataclass(frozen=True)
class JoinedRecord:
    display_name: str
    normalization_key: str
    geometry: Any
    centroid: tuple[float, float]
    metric_value: float
    matched: bool
    metric_name: str | None = None

    @property
    def label(self) -> str:
        """Name shown in rankings: the CSV spelling when matched, else the boundary name."""
        if self.matched and self.metric_name:
            return self.metric_name
        return self.display_name
