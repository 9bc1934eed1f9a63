"""Matplotlib static PNG renderer."""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.figure import Figure

from sunpos.models import SunData

_ROOT = Path(__file__).parent.parent.parent.parent

_BG = "#050a1a"
_PATH_COLOR = "#f0c060"
_SUN_COLOR = "#ffdd33"
_GRID_COLOR = "#334466"


def render_static_chart(sun_data: SunData, chart_size: int = 8) -> Figure:
    """Render SunData as a polar sun-path diagram.

    Azimuth runs clockwise from north at the top; radius is the zenith angle,
    so the zenith is the centre and the outer circle (90°) is the horizon.

    Args:
        sun_data: Fully computed sun data.
        chart_size: Output image size in inches.

    Returns:
        matplotlib Figure object.
    """
    fig = plt.figure(figsize=(chart_size, chart_size))
    ax = fig.add_subplot(projection="polar")
    fig.patch.set_facecolor(_BG)
    ax.set_facecolor(_BG)
    ax.set_theta_zero_location("N")
    ax.set_theta_direction(-1)

    visible = [p for p in sun_data.path if p.elevation >= 0]
    if visible:
        theta = np.radians([p.azimuth for p in visible])
        r = np.array([p.zenith_angle for p in visible])
        ax.scatter(theta, r, s=6, color=_PATH_COLOR, linewidths=0, zorder=2)

    pos = sun_data.position
    if pos.elevation >= 0:
        ax.scatter(
            [np.radians(pos.azimuth)],
            [pos.zenith_angle],
            s=220,
            color=_SUN_COLOR,
            edgecolors="white",
            zorder=3,
        )

    ax.set_rlim(0, 90)
    ax.set_rticks([15, 30, 45, 60, 75, 90])
    ax.set_xticks(np.radians([0, 90, 180, 270]))
    ax.set_xticklabels(["N", "E", "S", "W"], color="white")
    ax.tick_params(axis="y", colors=_GRID_COLOR)
    ax.grid(color=_GRID_COLOR, linewidth=0.5)

    ctx = sun_data.context
    ax.set_title(
        f"{ctx.address_display}\n{ctx.utc_dt:%Y-%m-%d %H:%M} UTC  "
        f"az {pos.azimuth:.1f}°  zenith {pos.zenith_angle:.1f}°",
        color="white",
        fontsize=10,
    )

    return fig


def save_static_chart(sun_data: SunData, output_path: Path | None = None) -> Path:
    """Save SunData as a PNG file.

    Args:
        sun_data: Fully computed sun data.
        output_path: Destination path. Auto-generated under results/ if None.

    Returns:
        Path to the saved file.
    """
    if output_path is None:
        ctx = sun_data.context
        when_str = ctx.utc_dt.strftime("%Y_%m_%d_%H_%M")
        filename = f"{ctx.address_display}__{when_str}.png".replace(" ", "_")
        output_path = _ROOT / "results" / filename

    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig = render_static_chart(sun_data)
    fig.savefig(output_path, facecolor=_BG)
    plt.close(fig)
    return output_path
