"""Static choropleth rendering with matplotlib."""

from __future__ import annotations

from pathlib import Path

import geopandas as gpd
import matplotlib
import matplotlib.pyplot as plt
from matplotlib.cm import ScalarMappable
from matplotlib.colors import Colormap, ListedColormap, Normalize
from matplotlib.lines import Line2D
from matplotlib.ticker import MaxNLocator

from sus_choropleth.common.fs import ensure_dir
from sus_choropleth.common.geometry import map_extent
from sus_choropleth.common.models import JoinedRecord
from sus_choropleth.pipeline.colour_scale import ColourScale, Palette, resolve_palette
from sus_choropleth.pipeline.reports import rank_records


def _colormap(palette: Palette) -> Colormap:
    sample = resolve_palette(palette)
    if isinstance(sample, Colormap):
        return sample
    return ListedColormap([sample(i / 255) for i in range(256)])


def _marker_colours(n: int) -> list:
    cmap = matplotlib.colormaps["tab10" if n <= 10 else "tab20"]
    return [cmap(i % cmap.N) for i in range(n)]


def output_path(output_dir: Path, render_cfg: dict, *, region_code: str, year: int) -> Path:
    filename = render_cfg["filename_template"].format(region=region_code, year=year)
    return output_dir / filename


def render_map(
    joined: list[JoinedRecord],
    scale: ColourScale,
    *,
    region_code: str,
    region_name: str,
    year: int,
    output_dir: Path,
    render_cfg: dict,
) -> Path:
    if not joined:
        raise ValueError("Nothing to render: no boundary records")

    lon_min, lon_max, lat_min, lat_max = map_extent([record.geometry for record in joined])
    top_n = min(int(render_cfg["top_n"]), len(joined))
    top = rank_records(joined, top_n)
    out_path = output_path(output_dir, render_cfg, region_code=region_code, year=year)
    ensure_dir(out_path.parent)

    with plt.style.context("dark_background"):
        fig, ax = plt.subplots(figsize=(float(render_cfg["width"]), float(render_cfg["height"])))
        try:
            shapes = gpd.GeoSeries([record.geometry for record in joined], crs="EPSG:4326")
            shapes.plot(ax=ax, color=scale.colours, edgecolor=(0.0, 0.0, 0.0, 0.3), linewidth=0.3)

            ax.set_title(render_cfg["title_template"].format(region_name=region_name, region=region_code, year=year))
            ax.set_xlabel("Longitude")
            ax.set_ylabel("Latitude")
            ax.set_xlim(lon_min, lon_max)
            ax.set_ylim(lat_min, lat_max)
            ax.set_aspect("equal")
            ax.grid(True, color="gray", alpha=0.2, linestyle="--")

            handles = []
            for record, colour in zip(top, _marker_colours(top_n)):
                cx, cy = record.centroid
                ax.scatter([cx], [cy], s=60, color=colour, edgecolors="black", linewidths=0.4, zorder=3)
                handles.append(
                    Line2D([], [], marker="o", linestyle="", markerfacecolor=colour, markeredgecolor="black", label=record.label)
                )
            if handles:
                ax.legend(
                    handles=handles,
                    title=f"Top {top_n} municípios (internações)",
                    loc="upper right",
                    frameon=True,
                    facecolor="black",
                    framealpha=0.6,
                    fontsize=8,
                    title_fontsize=9,
                )

            mappable = ScalarMappable(
                norm=Normalize(vmin=scale.display_min, vmax=scale.display_max),
                cmap=_colormap(render_cfg["palette"]),
            )
            cbar = fig.colorbar(mappable, ax=ax, fraction=0.035, pad=0.03)
            cbar.set_label(render_cfg["colorbar_label"].format(year=year, region=region_code))
            cbar.ax.yaxis.set_major_locator(MaxNLocator(5))

            fig.savefig(out_path, dpi=int(render_cfg["dpi"]), bbox_inches="tight")
        finally:
            plt.close(fig)
    return out_path
