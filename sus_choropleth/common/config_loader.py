"""Configuration loading and validation."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sus_choropleth.common.constants import REGION_NAME_BY_CODE
from sus_choropleth.common.errors import ConfigError
from sus_choropleth.common.fs import read_yaml
from sus_choropleth.common.schema import validate_pipeline_config

CONFIG_FILENAME = "pipeline.yml"

DEFAULT_RENDER = {
    "enabled": True,
    "palette": "viridis",
    "top_n": 10,
    "dpi": 150,
    "width": 9.0,
    "height": 8.0,
    "title_template": "Internações por Dengue – Municípios de {region_name} ({year}, SIH/SUS)",
    "colorbar_label": "Internações por Dengue ({year})",
    "filename_template": "mapa_dengue_municipios_{region}_{year}.png",
}
DEFAULT_REPORT = {"top_n": 10, "bottom_n": 10}


@dataclass(frozen=True)
class PipelineConfig:
    region_code: str
    region_name: str
    year: int
    input_path: Path
    delimiter: str = ";"
    missing_values: tuple[str, ...] = ("-", ".")
    encoding: str = "latin-1"
    duplicate_policy: str = "first"
    boundaries: dict = field(default_factory=dict)
    render: dict = field(default_factory=lambda: dict(DEFAULT_RENDER))
    report: dict = field(default_factory=lambda: dict(DEFAULT_REPORT))


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> dict:
    if not path.exists():
        raise ConfigError(f"Missing config file: {path}")
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay config must be a mapping: {overlay_path}")
    return _deep_merge(base, overlay)


def load_pipeline_config(
    config_dir: Path,
    *,
    allow_unknown: bool = False,
    overlay_config_dir: Path | None = None,
    overrides: dict | None = None,
) -> PipelineConfig:
    overlay_path = (overlay_config_dir / CONFIG_FILENAME) if overlay_config_dir is not None else None
    raw = _load_yaml_with_overlay(config_dir / CONFIG_FILENAME, overlay_path)
    if overrides:
        raw = _deep_merge(raw, overrides)
    cfg = validate_pipeline_config(raw, allow_unknown=allow_unknown)

    region_code = cfg["region"]["code"]
    input_cfg = cfg["input"]

    return PipelineConfig(
        region_code=region_code,
        region_name=cfg["region"].get("name") or REGION_NAME_BY_CODE[region_code],
        year=int(cfg["year"]),
        input_path=Path(input_cfg["path"]),
        delimiter=input_cfg.get("delimiter", ";"),
        missing_values=tuple(input_cfg.get("missing_values", ["-", "."])),
        encoding=input_cfg.get("encoding", "latin-1"),
        duplicate_policy=cfg.get("join", {}).get("duplicate_policy", "first"),
        boundaries=cfg["boundaries"],
        render=_deep_merge(DEFAULT_RENDER, cfg.get("render", {})),
        report=_deep_merge(DEFAULT_REPORT, cfg.get("report", {})),
    )
