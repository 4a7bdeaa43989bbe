"""Boundary source orchestration with fail-soft semantics."""

from __future__ import annotations

from pathlib import Path

import geopandas as gpd

from sus_choropleth.common.errors import StageError
from sus_choropleth.common.http import HttpClient
from sus_choropleth.common.logging import get_logger
from sus_choropleth.boundaries.file_loader import load_boundary_file
from sus_choropleth.boundaries.ibge_harvest import run_ibge_boundaries

logger = get_logger("boundaries")


def _load_from_source(
    source: str,
    region_code: str,
    boundaries_config: dict,
    http_client: HttpClient | None,
) -> gpd.GeoDataFrame:
    source_config = boundaries_config.get(source) or {}
    if source == "ibge":
        return run_ibge_boundaries(region_code, source_config, http_client=http_client)
    if source == "file":
        return load_boundary_file(
            Path(source_config["path"]),
            name_field=source_config["name_field"],
            region_code=region_code,
            region_field=source_config.get("region_field"),
        )
    raise ValueError(f"Unknown boundary source: {source}")


def load_boundaries(
    region_code: str,
    boundaries_config: dict,
    http_client: HttpClient | None = None,
) -> tuple[str, gpd.GeoDataFrame]:
    """Try each enabled source in ``source_order``; the first that loads wins."""
    enabled = [
        source
        for source in boundaries_config["source_order"]
        if (boundaries_config.get(source) or {}).get("enabled", True)
    ]
    if not enabled:
        raise StageError("No boundary source is enabled")

    failures: list[str] = []
    for source in enabled:
        try:
            frame = _load_from_source(source, region_code, boundaries_config, http_client)
        except Exception as exc:
            failures.append(source)
            logger.warning(
                f"boundary source {source} failed: {exc}",
                extra={"region": region_code, "source": source, "event": "SOURCE_FAIL", "status": "error"},
            )
            continue
        logger.info(
            "boundaries loaded",
            extra={"region": region_code, "source": source, "event": "SOURCE_OK", "status": "ok", "rows_out": len(frame)},
        )
        return source, frame

    raise StageError(f"All enabled boundary sources failed for region {region_code}: {', '.join(failures)}")
