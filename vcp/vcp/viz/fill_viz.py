from __future__ import annotations

from pathlib import Path
from typing import List, Mapping, Optional, Set

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Patch

from vcp.vcp.models.items import CacheInfo, Video


USED_COLOR = "#1f77b4"      # blue
FREE_COLOR = "#d3d3d3"      # light gray

TITLE_FONT_SIZE = 13
LABEL_FONT_SIZE = 12
TICK_FONT_SIZE = 10


def cache_usage(mapping: Mapping[int, Set[int]], cache_info: CacheInfo, videos: List[Video]) -> List[int]:
    sizes = {v.id: v.size for v in videos}
    return [sum(sizes[v] for v in mapping.get(c, set())) for c in range(cache_info.count)]


def plot_cache_fill(
    mapping: Mapping[int, Set[int]],
    cache_info: CacheInfo,
    videos: List[Video],
    title: str = "Cache fill",
    out_path: Optional[Path] = None,
):
    """
    Stacked bars per cache: used capacity, then what is left.

    With out_path the figure is saved, closed, and None is returned.
    Without it the open figure is returned and the caller must plt.close it.
    """
    used = cache_usage(mapping, cache_info, videos)
    free = [cache_info.capacity - u for u in used]
    x = list(range(cache_info.count))

    fig, ax = plt.subplots(figsize=(max(6, 0.4 * len(x)), 5))
    ax.bar(x, used, color=USED_COLOR)
    ax.bar(x, free, bottom=used, color=FREE_COLOR)

    ax.set_title(title, fontsize=TITLE_FONT_SIZE)
    ax.set_xlabel("Cache id", fontsize=LABEL_FONT_SIZE)
    ax.set_ylabel("Capacity (MB)", fontsize=LABEL_FONT_SIZE)
    ax.tick_params(labelsize=TICK_FONT_SIZE)
    ax.legend(
        handles=[Patch(color=USED_COLOR, label="used"), Patch(color=FREE_COLOR, label="free")],
        loc="upper right",
    )
    fig.tight_layout()

    if out_path is not None:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(out_path, dpi=150)
        plt.close(fig)
        return None

    return fig
