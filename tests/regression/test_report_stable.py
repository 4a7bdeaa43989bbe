import io

import pytest
from shapely.geometry import Polygon

from sus_choropleth.pipeline.header import locate_header
from sus_choropleth.pipeline.join import build_boundary_record, join
from sus_choropleth.pipeline.records import build_records
from sus_choropleth.pipeline.reports import build_consistency, write_report

TABLE = [
    ["Internações por Município", None, None],
    ["Município", "2023", "2024"],
    ["260005 Abreu e Lima", "2", "7"],
    ["260170 Petrolina", "10", "7"],
    ["261160 Recife", "30", "-"],
    ["Total", "42", "14"],
]


def _report() -> str:
    records = build_records(TABLE, locate_header(TABLE), "PE", 2024)
    square = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
    boundaries = [build_boundary_record(name, square) for name in ["Recife", "Petrolina", "Abreu e Lima"]]
    joined = join(boundaries, records)
    out = io.StringIO()
    write_report(
        joined,
        build_consistency(boundaries, records, joined),
        region_code="PE",
        region_name="Pernambuco",
        year=2024,
        stream=out,
    )
    return out.getvalue()


@pytest.mark.regression
def test_report_is_identical_across_runs():
    assert _report() == _report()


@pytest.mark.regression
def test_ties_keep_boundary_order_in_rankings():
    text = _report()
    assert "1. Petrolina: 7.0 internações\n2. Abreu e Lima: 7.0 internações\n3. Recife: 0.0 internações\n" in text
