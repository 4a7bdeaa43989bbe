"""Municipal boundaries for one state from the IBGE public APIs.

Names come from the localidades API and polygons from the malhas API; the
two are joined on the 7-digit IBGE municipality id (``codarea``).
"""

from __future__ import annotations

import geopandas as gpd

from sus_choropleth.common.constants import REGION_CODE_BY_PREFIX
from sus_choropleth.common.http import HttpClient, HttpRequestError, TimeoutConfig
from sus_choropleth.common.logging import get_logger
from sus_choropleth.boundaries.crs import ensure_polygonal, ensure_wgs84

DEFAULT_LOCALIDADES_URL = "https://servicodados.ibge.gov.br/api/v1/localidades/estados/{state_id}/municipios"
DEFAULT_MALHAS_URL = "https://servicodados.ibge.gov.br/api/v3/malhas/estados/{state_id}"

logger = get_logger("boundaries.ibge")


def state_id_for(region_code: str) -> int:
    for prefix, code in REGION_CODE_BY_PREFIX.items():
        if code == region_code:
            return prefix
    raise KeyError(region_code)


def _fetch_names(client: HttpClient, url: str) -> dict[str, str]:
    payload = client.get_json(url, timeout=TimeoutConfig(connect=20, read=60))
    if not isinstance(payload, list):
        raise HttpRequestError(f"Unexpected localidades payload from {url}")
    return {str(item["id"]): str(item["nome"]) for item in payload if "id" in item and "nome" in item}


def _fetch_features(client: HttpClient, url: str, quality: str) -> list[dict]:
    payload = client.get_json(
        url,
        params={
            "formato": "application/vnd.geo+json",
            "intrarregiao": "municipio",
            "qualidade": quality,
        },
        headers={"Accept": "application/vnd.geo+json, application/json"},
        timeout=TimeoutConfig(connect=20, read=180),
    )
    if not isinstance(payload, dict) or payload.get("type") != "FeatureCollection":
        raise HttpRequestError(f"Unexpected malhas payload from {url}")
    return payload.get("features") or []


def run_ibge_boundaries(
    region_code: str,
    source_config: dict,
    http_client: HttpClient | None = None,
) -> gpd.GeoDataFrame:
    state_id = state_id_for(region_code)
    names_url = source_config.get("localidades_url", DEFAULT_LOCALIDADES_URL).format(
        state_id=state_id, region=region_code
    )
    shapes_url = source_config.get("malhas_url", DEFAULT_MALHAS_URL).format(state_id=state_id, region=region_code)
    quality = source_config.get("quality", "intermediaria")

    owns_client = http_client is None
    client = http_client or HttpClient()
    try:
        names = _fetch_names(client, names_url)
        features = _fetch_features(client, shapes_url, quality)
    finally:
        if owns_client:
            client.close()

    named_features = []
    unnamed: list[str] = []
    for feature in features:
        properties = dict(feature.get("properties") or {})
        code = str(properties.get("codarea", ""))
        if code not in names:
            unnamed.append(code)
            continue
        properties["name"] = names[code]
        properties["code"] = code
        named_features.append({**feature, "properties": properties})

    if unnamed:
        logger.warning(
            f"{len(unnamed)} IBGE polygons without a municipality name were skipped",
            extra={"region": region_code, "source": "ibge", "event": "BOUNDARY_UNNAMED", "status": "warn"},
        )
    if not named_features:
        raise HttpRequestError(f"IBGE returned no named municipal polygons for {region_code}")

    frame = gpd.GeoDataFrame.from_features(named_features, crs="EPSG:4326")
    return ensure_polygonal(ensure_wgs84(frame[["code", "name", "geometry"]]))
