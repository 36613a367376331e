import textwrap
from pathlib import Path
from typing import Optional
import matplotlib.pyplot as plt
from intel_workbench.ach.scoring_engine import AchScoringEngine
from intel_workbench.reports.models import AchMatrix
from intel_workbench.utils.logger import get_logger
from intel_workbench.visual.chart_theme import apply_default_theme, PREFERRED_COLOR, DEFAULT_BAR_COLOR

apply_default_theme()


def generate_score_chart(
    matrix: AchMatrix,
    output_path: Path,
    engine: Optional[AchScoringEngine] = None
) -> Optional[Path]:
    """
    Draws the normalized (0-100) inconsistency scores of a matrix as a horizontal bar chart.

    The preferred hypothesis (lowest score) is highlighted. Returns the written
    path, or None when the matrix has no hypotheses to plot.
    """
    logger = get_logger()
    if not matrix.hypotheses:
        logger.warning(f"[~] No hypotheses to chart for matrix '{matrix.name}'")
        return None

    engine = engine or AchScoringEngine()
    ranked = engine.rank(matrix)
    labels = [textwrap.shorten(s.name or s.hypothesis_id, 40, placeholder="...") for s in ranked]
    values = [s.normalized for s in ranked]
    colors = [PREFERRED_COLOR if s.preferred else DEFAULT_BAR_COLOR for s in ranked]

    fig, ax = plt.subplots(figsize=(8, max(2.5, 0.6 * len(ranked) + 1)))
    positions = list(range(len(ranked)))
    bars = ax.barh(positions, values, color=colors)
    ax.set_yticks(positions, labels)
    ax.invert_yaxis()
    ax.set_xlim(0, 100)
    ax.set_xlabel("Normalized inconsistency (lower is more likely)")
    ax.set_title(textwrap.shorten(matrix.name or "ACH Matrix", 80, placeholder="..."))
    ax.bar_label(bars, labels=[f"{s.normalized} ({s.score:g})" for s in ranked], padding=3, fontsize=8)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(output_path)
    plt.close(fig)
    logger.info(f"[✓] Saved score chart: {output_path}")
    return output_path
