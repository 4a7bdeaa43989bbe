"""Console rankings and consistency checks for the joined table."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import TextIO

from sus_choropleth.common.models import BoundaryRecord, EnrichedRecord, JoinedRecord
from sus_choropleth.pipeline.join import unmatched_records


@dataclass(frozen=True)
class ConsistencySummary:
    boundary_count: int
    enriched_count: int
    joined_count: int
    boundaries_without_metric: list[str]
    metrics_without_boundary: list[str]
    total_csv: float
    total_map: float

    @property
    def totals_match(self) -> bool:
        return abs(self.total_csv - self.total_map) < 1e-9


def rank_records(joined: list[JoinedRecord], n: int | None = None, *, descending: bool = True) -> list[JoinedRecord]:
    ranked = sorted(joined, key=lambda record: record.metric_value, reverse=descending)
    if n is None:
        return ranked
    return ranked[: min(n, len(ranked))]


def zero_records(joined: list[JoinedRecord]) -> list[JoinedRecord]:
    return [record for record in joined if record.metric_value == 0.0]


def format_ranking_line(rank: int, record: JoinedRecord) -> str:
    return f"{rank}. {record.label}: {float(round(record.metric_value, 0))} internações"


def build_consistency(
    boundary_records: list[BoundaryRecord],
    enriched_records: list[EnrichedRecord],
    joined: list[JoinedRecord],
) -> ConsistencySummary:
    return ConsistencySummary(
        boundary_count=len(boundary_records),
        enriched_count=len(enriched_records),
        joined_count=len(joined),
        boundaries_without_metric=[record.display_name for record in joined if not record.matched],
        metrics_without_boundary=[
            record.display_name for record in unmatched_records(boundary_records, enriched_records)
        ],
        total_csv=sum(record.metric_value for record in enriched_records),
        total_map=sum(record.metric_value for record in joined),
    )


def write_report(
    joined: list[JoinedRecord],
    summary: ConsistencySummary,
    *,
    region_code: str,
    region_name: str,
    year: int,
    top_n: int = 10,
    bottom_n: int = 10,
    stream: TextIO | None = None,
) -> None:
    out = stream if stream is not None else sys.stdout

    def emit(line: str = "") -> None:
        out.write(line + "\n")

    emit(f"Top {top_n} municípios de {region_code} em internações por Dengue ({year}):")
    for rank, record in enumerate(rank_records(joined, top_n), start=1):
        emit(format_ranking_line(rank, record))

    emit()
    emit(f"{bottom_n} municípios de {region_code} com MENOS internações por Dengue ({year}):")
    for rank, record in enumerate(rank_records(joined, bottom_n, descending=False), start=1):
        emit(format_ranking_line(rank, record))

    emit()
    emit(f"Municípios de {region_code} com 0 internações registradas em {year}:")
    for record in zero_records(joined):
        emit(f"- {record.label}")

    emit()
    emit("===== CHECAGENS DE CONSISTÊNCIA =====")
    emit(f"N municípios na malha ({region_code}): {summary.boundary_count}")
    emit(f"N municípios de {region_code} no CSV: {summary.enriched_count}")
    emit(f"N linhas no mapa (join): {summary.joined_count}")

    emit()
    emit(f"Municípios de {region_code} SEM registro de internação em {year} (antes do coalesce):")
    for name in summary.boundaries_without_metric:
        emit(f"- {name}")

    if summary.metrics_without_boundary:
        emit()
        emit(f"Municípios do CSV sem correspondência na malha ({len(summary.metrics_without_boundary)}):")
        for name in summary.metrics_without_boundary:
            emit(f"- {name}")

    emit()
    emit(f"Total de internações {region_name} no CSV:  {summary.total_csv}")
    emit(f"Total de internações {region_name} no mapa: {summary.total_map}")
