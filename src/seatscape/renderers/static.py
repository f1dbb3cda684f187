"""Matplotlib static PNG renderer."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from seatscape.models import Recommendation
from seatscape.sun import ALTITUDE_THRESHOLD_DEG

_ROOT = Path(__file__).parent.parent.parent.parent

_SIDE_COLORS = {"A": "#60a5fa", "F": "#f472b6", "none": "#64748b"}


def render_static_profile(rec: Recommendation, chart_width: int = 10) -> Figure:
    """Render the sun-altitude profile as a static matplotlib image.

    Args:
        rec: Simulation result.
        chart_width: Output image width in inches.

    Returns:
        matplotlib Figure object.
    """
    fig, ax = plt.subplots(figsize=(chart_width, chart_width / 4))
    fig.patch.set_facecolor("#0d1b35")
    ax.set_facecolor("#0d1b35")

    elapsed = np.arange(len(rec.samples)) * rec.sample_minutes
    alts = np.array([s.altitude_deg for s in rec.samples])
    colors = [_SIDE_COLORS[s.side] for s in rec.samples]

    floor = min(-10.0, float(alts.min(initial=0.0))) - 1
    ax.axhspan(floor, 0, color="black", alpha=0.3)
    ax.axhline(0, color="#334466", linewidth=0.8)
    ax.axhline(ALTITUDE_THRESHOLD_DEG, color="#64748b", linewidth=0.8, linestyle=":")
    ax.plot(elapsed, alts, color="#fbbf24", linewidth=1.5, zorder=1)
    ax.scatter(elapsed, alts, c=colors, s=12, linewidths=0, zorder=2)

    for event, color in ((rec.sunrise, "#22c55e"), (rec.sunset, "#ef4444")):
        if event is not None:
            ax.axvline(event.sample_index * rec.sample_minutes, color=color, linewidth=1)

    ax.set_xlabel("minutes after departure", color="#cccccc")
    ax.set_ylabel("sun altitude (°)", color="#cccccc")
    ax.tick_params(colors="#cccccc")
    for spine in ax.spines.values():
        spine.set_visible(False)
    ax.set_title(
        f"{rec.side} · left {rec.left_minutes} min · right {rec.right_minutes} min",
        color="#e8d5a3",
    )
    fig.tight_layout()
    return fig


def save_static_profile(rec: Recommendation, output_path: Path | None = None) -> Path:
    """Save the sun-altitude profile as a PNG file.

    Args:
        rec: Simulation result.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        first = rec.samples[0]
        when_str = first.utc.strftime("%Y_%m_%d_%H_%M")
        filename = f"sun_profile__{when_str}__{rec.side[0]}.png"
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_profile(rec)
    fig.savefig(output_path, facecolor=fig.get_facecolor())
    plt.close(fig)
    return output_path
