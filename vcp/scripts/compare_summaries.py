from __future__ import annotations

from pathlib import Path
import pandas as pd
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import Patch

from vcp.configurations import RESULTS_DIR


FILE_FLAT = RESULTS_DIR / "_summary" / "vcp_flat.xlsx"
OUT_DIR = RESULTS_DIR / "_comparison_plots"

DECODER_COLORS = {
    "spreading": "#7f7f7f",     # gray
    "filling": "#bcbd22",       # olive
    "best_video": "#2ca02c",    # green
    "descent": "#1f77b4",       # blue
    "descent_amend": "#d62728", # red
}

TITLE_FONT_SIZE = 13
LABEL_FONT_SIZE = 12
TICK_FONT_SIZE = 11
LEGEND_FONT_SIZE = 11


def load_flat(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(path)
    df = pd.read_excel(path)
    df.columns = [str(c).strip() for c in df.columns]
    df["label"] = df["decoder"] + " / " + df["scoring_policy"]
    return df


def best_per_dataset(df: pd.DataFrame) -> pd.DataFrame:
    """Best scoring decoder/policy row for each dataset."""
    idx = df.groupby("dataset")["score"].idxmax()
    return df.loc[idx, ["dataset", "decoder", "scoring_policy", "score"]].reset_index(drop=True)


def plot_scores(df: pd.DataFrame, out_path: Path) -> None:
    piv = df.pivot_table(index="dataset", columns="label", values="score", aggfunc="max")
    piv = piv.reindex(sorted(piv.index))

    labels = list(piv.columns)
    decoders = [lab.split(" / ")[0] for lab in labels]
    colors = [DECODER_COLORS.get(d, "#17becf") for d in decoders]

    fig, ax = plt.subplots(figsize=(max(8, 2.5 * len(piv.index)), 6))
    n = len(labels)
    width = 0.8 / max(n, 1)
    for j, lab in enumerate(labels):
        xs = [i - 0.4 + width * (j + 0.5) for i in range(len(piv.index))]
        ax.bar(xs, piv[lab].fillna(0).values, width=width, color=colors[j],
               edgecolor="black", linewidth=0.4)

    ax.set_xticks(range(len(piv.index)))
    ax.set_xticklabels(piv.index, fontsize=TICK_FONT_SIZE)
    ax.set_ylabel("Score (avg. µs saved per request)", fontsize=LABEL_FONT_SIZE)
    ax.set_title("Decoder comparison", fontsize=TITLE_FONT_SIZE)

    seen = {}
    for d, c in zip(decoders, colors):
        seen.setdefault(d, c)
    ax.legend(handles=[Patch(color=c, label=d) for d, c in seen.items()],
              fontsize=LEGEND_FONT_SIZE, loc="upper left")

    fig.tight_layout()
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=200)
    plt.close(fig)


def main() -> None:
    df = load_flat(FILE_FLAT)
    plot_scores(df, OUT_DIR / "scores_by_dataset.png")
    print(best_per_dataset(df).to_string(index=False))


if __name__ == "__main__":
    main()
