"""Minimal strict schema for the pipeline YAML config."""

from __future__ import annotations

import matplotlib

from sus_choropleth.common.constants import BOUNDARY_SOURCES, DUPLICATE_POLICIES, SUPPORTED_REGIONS
from sus_choropleth.common.errors import ConfigError

_SECTIONS = {
    "region": ({"code"}, {"code", "name"}),
    "input": ({"path"}, {"path", "delimiter", "missing_values", "encoding"}),
    "join": (set(), {"duplicate_policy"}),
    "boundaries": (
        {"source_order"},
        {"source_order", "ibge", "file"},
    ),
    "render": (
        set(),
        {"enabled", "palette", "top_n", "dpi", "width", "height", "title_template", "colorbar_label", "filename_template"},
    ),
    "report": (set(), {"top_n", "bottom_n"}),
}


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_mapping(obj: object, ctx: str) -> dict:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")
    return obj


def _assert_positive_int(value: object, ctx: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{ctx} must be a positive integer, got {value!r}")


def validate_pipeline_config(cfg: object, *, allow_unknown: bool = False) -> dict:
    cfg = _assert_mapping(cfg, "pipeline config")
    top_required = {"region", "year", "input", "boundaries"}
    top_known = top_required | {"join", "render", "report"}
    _assert_required_keys(cfg, top_required, "pipeline config")
    _assert_no_unknown_keys(cfg, top_known, "pipeline config", allow_unknown)

    for section, (required, known) in _SECTIONS.items():
        if section not in cfg:
            continue
        body = _assert_mapping(cfg[section], section)
        _assert_required_keys(body, required, section)
        _assert_no_unknown_keys(body, known, section, allow_unknown)

    if cfg["region"]["code"] not in SUPPORTED_REGIONS:
        raise ConfigError(f"Unknown region code: {cfg['region']['code']}")

    _assert_positive_int(cfg["year"], "year")

    policy = cfg.get("join", {}).get("duplicate_policy", "first")
    if policy not in DUPLICATE_POLICIES:
        raise ConfigError(f"join.duplicate_policy must be one of {', '.join(DUPLICATE_POLICIES)}")

    source_order = cfg["boundaries"]["source_order"]
    if not isinstance(source_order, list) or not source_order:
        raise ConfigError("boundaries.source_order must be a non-empty list")
    unknown_sources = [name for name in source_order if name not in BOUNDARY_SOURCES]
    if unknown_sources:
        raise ConfigError(f"Unknown boundary sources: {', '.join(unknown_sources)}")
    for name in source_order:
        source_cfg = _assert_mapping(cfg["boundaries"].get(name, {}), f"boundaries.{name}")
        if name == "file" and source_cfg.get("enabled", True):
            _assert_required_keys(source_cfg, {"path", "name_field"}, "boundaries.file")

    for section, key in (("render", "top_n"), ("report", "top_n"), ("report", "bottom_n")):
        if key in cfg.get(section, {}):
            _assert_positive_int(cfg[section][key], f"{section}.{key}")

    palette = cfg.get("render", {}).get("palette")
    if isinstance(palette, str) and palette not in matplotlib.colormaps:
        raise ConfigError(f"Unknown render.palette colormap: {palette}")

    return cfg
