# ============================================================
# Decoder / Placement
# ============================================================
from pathlib import Path
from typing import List, Dict, Any, Optional


DECODERS = [
    "dummy",
    "spreading",
    "filling",
    "descent",
    "best_video",
    "descent_amend",
]

SCORING_POLICIES = ["pure_gain", "gain_over_cost", "gain_over_audience"]

DECODER_KIND = DECODERS[3]              # "descent" is the default submission
SCORING_POLICY = SCORING_POLICIES[0]

# descent_amend re-selects after every commit; cap the number of selections
AMEND_MAX_ITERATIONS: Optional[int] = 2_000_000

DEBUG_F = [True, False]

# ============================================================
# Dataset / Results
# ============================================================
ROOT = Path(__file__).resolve().parents[1]

INPUT_FILES = [
    "kittens.in",
    "me_at_the_zoo.in",
    "trending_today.in",
    "videos_worth_spreading.in",
]

RESOURCES_DIR = ROOT / "resources"
OUTPUT_DIR = ROOT / "output"
RESULTS_DIR = ROOT / "results"
RUN_INDEX_PATH = RESULTS_DIR / "run_index.json"

# ============================================================
# Debug / Visualization
# ============================================================
PLOT_CACHE_FILL = DEBUG_F[1]

debug = DEBUG_F[1]                        # verbose debug prints

# ============================================================
# Batch comparison (every decoder x every policy)
# ============================================================
COMPARE_DECODERS = ["spreading", "filling", "best_video", "descent", "descent_amend"]


def iter_compare_grid() -> List[Dict[str, Any]]:
    grid: List[Dict[str, Any]] = []
    for decoder in COMPARE_DECODERS:
        # naive decoders ignore the scoring policy, one run is enough
        policies = SCORING_POLICIES if decoder in ("descent", "descent_amend") else [SCORING_POLICY]
        for policy in policies:
            grid.append({"decoder": decoder, "scoring_policy": policy})
    return grid
