from pathlib import Path

import pytest
from shapely.geometry import MultiPolygon, Polygon

from sus_choropleth.common.config_loader import DEFAULT_RENDER
from sus_choropleth.common.models import EnrichedRecord
from sus_choropleth.pipeline.colour_scale import map_colors
from sus_choropleth.pipeline.join import build_boundary_record, join
from sus_choropleth.pipeline.render import output_path, render_map


def _square(x0: float, y0: float = -8.0) -> Polygon:
    return Polygon([(x0, y0), (x0 + 0.4, y0), (x0 + 0.4, y0 + 0.4), (x0, y0 + 0.4)])


def _joined(values: list[float]):
    boundaries = [build_boundary_record(f"Cidade {i}", _square(-40 + i)) for i in range(len(values))]
    boundaries.append(build_boundary_record("Ilhas", MultiPolygon([_square(-33.0), _square(-32.5)])))
    records = [
        EnrichedRecord(f"26{i:04d}", "PE", f"Cidade {i}", boundaries[i].normalization_key, value)
        for i, value in enumerate(values)
    ]
    return join(boundaries, records)


def test_output_path_formats_region_and_year(tmp_path: Path):
    assert output_path(tmp_path, DEFAULT_RENDER, region_code="PE", year=2024) == (
        tmp_path / "mapa_dengue_municipios_PE_2024.png"
    )


@pytest.mark.parametrize("values", [[5.0, 1.0, 0.0, 12.0], [3.0, 3.0]])
def test_render_map_writes_png(tmp_path: Path, values):
    joined = _joined(values)
    scale = map_colors([record.metric_value for record in joined], DEFAULT_RENDER["palette"])

    path = render_map(
        joined,
        scale,
        region_code="PE",
        region_name="Pernambuco",
        year=2024,
        output_dir=tmp_path / "out",
        render_cfg={**DEFAULT_RENDER, "dpi": 40, "top_n": 3},
    )

    assert path.exists()
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_render_map_rejects_empty_input(tmp_path: Path):
    with pytest.raises(ValueError):
        render_map(
            [],
            map_colors([1.0]),
            region_code="PE",
            region_name="Pernambuco",
            year=2024,
            output_dir=tmp_path,
            render_cfg=DEFAULT_RENDER,
        )
