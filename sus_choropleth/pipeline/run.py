"""End-to-end pipeline: source table -> records -> boundaries -> join -> map and report."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from sus_choropleth.boundaries.runner import load_boundaries
from sus_choropleth.common.config_loader import PipelineConfig
from sus_choropleth.common.http import HttpClient
from sus_choropleth.common.logging import get_logger, log_event
from sus_choropleth.common.models import BoundaryRecord, EnrichedRecord, HeaderInfo, JoinedRecord
from sus_choropleth.pipeline.colour_scale import ColourScale, map_colors
from sus_choropleth.pipeline.header import locate_header
from sus_choropleth.pipeline.join import build_boundary_records, join
from sus_choropleth.pipeline.records import build_records
from sus_choropleth.pipeline.render import render_map
from sus_choropleth.pipeline.reports import ConsistencySummary, build_consistency, write_report
from sus_choropleth.pipeline.source_table import read_source_table


@dataclass
class PipelineResult:
    header: HeaderInfo
    records: list[EnrichedRecord]
    boundaries: list[BoundaryRecord] = field(default_factory=list)
    joined: list[JoinedRecord] = field(default_factory=list)
    scale: ColourScale | None = None
    summary: ConsistencySummary | None = None
    boundary_source: str | None = None
    map_path: Path | None = None


def ingest(config: PipelineConfig, *, run_id: str | None = None) -> tuple[HeaderInfo, list[EnrichedRecord]]:
    logger = get_logger()
    log_event(logger, "stage start", run_id=run_id, stage="ingest", region=config.region_code, event="STAGE_START", status="ok")
    table = read_source_table(
        config.input_path,
        delimiter=config.delimiter,
        missing_values=config.missing_values,
        encoding=config.encoding,
    )
    header = locate_header(table)
    log_event(
        logger,
        f"header detected at row {header.row_index}",
        run_id=run_id,
        stage="ingest",
        region=config.region_code,
        event="HEADER_FOUND",
        status="ok",
    )
    records = build_records(table, header, config.region_code, config.year)
    log_event(
        logger,
        "stage end",
        run_id=run_id,
        stage="ingest",
        region=config.region_code,
        event="STAGE_END",
        status="ok",
        rows_in=len(table),
        rows_out=len(records),
    )
    return header, records


def run_pipeline(
    config: PipelineConfig,
    *,
    output_dir: Path,
    render: bool = True,
    run_id: str | None = None,
    http_client: HttpClient | None = None,
    stream: TextIO | None = None,
) -> PipelineResult:
    logger = get_logger()
    header, records = ingest(config, run_id=run_id)
    result = PipelineResult(header=header, records=records)

    source, frame = load_boundaries(config.region_code, config.boundaries, http_client=http_client)
    result.boundary_source = source
    result.boundaries = build_boundary_records(frame, "name")

    result.joined = join(result.boundaries, records, duplicate_policy=config.duplicate_policy)
    result.summary = build_consistency(result.boundaries, records, result.joined)
    log_event(
        logger,
        "join complete",
        run_id=run_id,
        stage="join",
        region=config.region_code,
        source=source,
        event="STAGE_END",
        status="ok" if not result.summary.metrics_without_boundary else "warn",
        rows_in=len(records),
        rows_out=len(result.joined),
    )

    result.scale = map_colors([record.metric_value for record in result.joined], config.render["palette"])

    if render and config.render.get("enabled", True):
        result.map_path = render_map(
            result.joined,
            result.scale,
            region_code=config.region_code,
            region_name=config.region_name,
            year=config.year,
            output_dir=output_dir,
            render_cfg=config.render,
        )
        log_event(logger, f"map written to {result.map_path}", run_id=run_id, stage="render", region=config.region_code, event="STAGE_END", status="ok")

    write_report(
        result.joined,
        result.summary,
        region_code=config.region_code,
        region_name=config.region_name,
        year=config.year,
        top_n=int(config.report["top_n"]),
        bottom_n=int(config.report["bottom_n"]),
        stream=stream,
    )
    return result
