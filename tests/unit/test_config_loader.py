from pathlib import Path

import pytest

from sus_choropleth.common.config_loader import load_pipeline_config
from sus_choropleth.common.errors import ConfigError

MINIMAL = """region:
  code: PE
year: 2024
input:
  path: data/raw/export.csv
boundaries:
  source_order: [file]
  file:
    path: data/raw/municipios.geojson
    name_field: name_muni
"""


def _write(base: Path, text: str = MINIMAL) -> Path:
    base.mkdir(parents=True, exist_ok=True)
    (base / "pipeline.yml").write_text(text, encoding="utf-8")
    return base


def test_load_pipeline_config_from_repo_config_dir():
    config = load_pipeline_config(Path("config"))
    assert config.region_code == "PE"
    assert config.region_name == "Pernambuco"
    assert config.year == 2024
    assert config.delimiter == ";"
    assert config.missing_values == ("-", ".")
    assert config.boundaries["source_order"] == ["ibge", "file"]


def test_minimal_config_gets_defaults(tmp_path: Path):
    config = load_pipeline_config(_write(tmp_path / "base"))
    assert config.region_name == "Pernambuco"
    assert config.duplicate_policy == "first"
    assert config.encoding == "latin-1"
    assert config.render["palette"] == "viridis"
    assert config.render["top_n"] == 10
    assert config.report == {"top_n": 10, "bottom_n": 10}


def test_overlay_and_overrides_are_merged(tmp_path: Path):
    base = _write(tmp_path / "base")
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "pipeline.yml").write_text("render:\n  palette: magma\nyear: 2023\n", encoding="utf-8")

    config = load_pipeline_config(
        base,
        overlay_config_dir=overlay,
        overrides={"region": {"code": "BA", "name": None}, "input": {"path": "other.csv"}},
    )

    assert config.render["palette"] == "magma"
    assert config.render["dpi"] == 150
    assert config.year == 2023
    assert config.region_code == "BA"
    assert config.region_name == "Bahia"
    assert config.input_path == Path("other.csv")


def test_empty_overlay_is_ignored(tmp_path: Path):
    base = _write(tmp_path / "base")
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "pipeline.yml").write_text("", encoding="utf-8")
    assert load_pipeline_config(base, overlay_config_dir=overlay).year == 2024


def test_non_mapping_overlay_rejected(tmp_path: Path):
    base = _write(tmp_path / "base")
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "pipeline.yml").write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_pipeline_config(base, overlay_config_dir=overlay)


def test_missing_config_file(tmp_path: Path):
    with pytest.raises(ConfigError):
        load_pipeline_config(tmp_path)


@pytest.mark.parametrize(
    "text",
    [
        MINIMAL.replace("code: PE", "code: XX"),
        MINIMAL.replace("year: 2024", "year: soon"),
        MINIMAL + "join:\n  duplicate_policy: last\n",
        MINIMAL.replace("[file]", "[osm]"),
        MINIMAL.replace("[file]", "[]"),
        MINIMAL + "surprise: true\n",
        MINIMAL + "report:\n  top_n: 0\n",
        MINIMAL + "render:\n  palette: virdis\n",
        MINIMAL.replace("    name_field: name_muni\n", ""),
    ],
)
def test_invalid_configs_rejected(tmp_path: Path, text: str):
    with pytest.raises(ConfigError):
        load_pipeline_config(_write(tmp_path / "base", text))


def test_unknown_keys_allowed_when_requested(tmp_path: Path):
    config = load_pipeline_config(_write(tmp_path / "base", MINIMAL + "surprise: true\n"), allow_unknown=True)
    assert config.region_code == "PE"
