"""Left join of metric rows onto municipal boundaries by normalised name."""

from __future__ import annotations

from typing import Iterable

import geopandas as gpd

from sus_choropleth.common.constants import DUPLICATE_POLICIES, MISSING_METRIC_DEFAULT
from sus_choropleth.common.errors import AmbiguousJoinKey, ConfigError
from sus_choropleth.common.geometry import approximate_center
from sus_choropleth.common.logging import get_logger
from sus_choropleth.common.models import BoundaryRecord, EnrichedRecord, JoinedRecord
from sus_choropleth.common.normalise import normalize_key

logger = get_logger("join")


def build_boundary_record(name: str, geometry) -> BoundaryRecord:
    display_name = str(name).strip()
    return BoundaryRecord(
        display_name=display_name,
        normalization_key=normalize_key(display_name),
        geometry=geometry,
        centroid=approximate_center(geometry),
    )


def build_boundary_records(frame: gpd.GeoDataFrame, name_field: str = "name") -> list[BoundaryRecord]:
    return [
        build_boundary_record(name, geometry)
        for name, geometry in zip(frame[name_field], frame.geometry)
    ]


def duplicate_keys(records: Iterable[EnrichedRecord]) -> list[str]:
    seen: set[str] = set()
    dupes: list[str] = []
    for record in records:
        key = record.normalization_key
        if key in seen and key not in dupes:
            dupes.append(key)
        seen.add(key)
    return dupes


def metric_index(enriched_records: list[EnrichedRecord], duplicate_policy: str = "first") -> dict[str, EnrichedRecord]:
    """Map join key to metric row, keeping the first occurrence in source order."""
    if duplicate_policy not in DUPLICATE_POLICIES:
        raise ConfigError(f"Unknown duplicate policy: {duplicate_policy}")

    dupes = duplicate_keys(enriched_records)
    if dupes and duplicate_policy == "error":
        raise AmbiguousJoinKey(dupes)
    if dupes:
        logger.warning(
            f"duplicate join keys, keeping first occurrence: {', '.join(dupes)}",
            extra={"stage": "join", "event": "DUPLICATE_JOIN_KEY", "status": "warn"},
        )

    index: dict[str, EnrichedRecord] = {}
    for record in enriched_records:
        index.setdefault(record.normalization_key, record)
    return index


def join(
    boundary_records: list[BoundaryRecord],
    enriched_records: list[EnrichedRecord],
    duplicate_policy: str = "first",
) -> list[JoinedRecord]:
    """Every boundary appears exactly once, in input order; unmatched ones get 0.0."""
    index = metric_index(enriched_records, duplicate_policy)

    joined: list[JoinedRecord] = []
    for boundary in boundary_records:
        match = index.get(boundary.normalization_key)
        joined.append(
            JoinedRecord(
                display_name=boundary.display_name,
                normalization_key=boundary.normalization_key,
                geometry=boundary.geometry,
                centroid=boundary.centroid,
                metric_value=match.metric_value if match is not None else MISSING_METRIC_DEFAULT,
                matched=match is not None,
                metric_name=match.display_name if match is not None else None,
            )
        )
    return joined


def unmatched_records(
    boundary_records: list[BoundaryRecord],
    enriched_records: list[EnrichedRecord],
) -> list[EnrichedRecord]:
    """Metric rows the left join drops because no boundary shares their key."""
    boundary_keys = {boundary.normalization_key for boundary in boundary_records}
    return [record for record in enriched_records if record.normalization_key not in boundary_keys]
