import matplotlib.pyplot as plt
import matplotlib as mpl

PREFERRED_COLOR = "#2a9d8f"
DEFAULT_BAR_COLOR = "#adb5bd"


def apply_default_theme():
    plt.style.use("seaborn-v0_8-whitegrid")

    mpl.rcParams.update({
        "font.family": "DejaVu Sans",
        "font.size": 10,
        "axes.titlesize": 12,
        "axes.labelsize": 10,
        "ytick.labelsize": 9,
        "figure.dpi": 120,
        "savefig.dpi": 120,
        "axes.spines.top": False,
        "axes.spines.right": False,
        "grid.alpha": 0.3,
    })
