"""Plotly interactive sun-path renderer.

Polar layout: angular axis is azimuth (clockwise, north up), radial axis is
zenith angle, so the horizon is the outer ring at 90°.
"""

import plotly.graph_objects as go

from sunpos.models import SunData

_BG = "#050a1a"
_PATH_COLOR = "#f0c060"
_SUN_COLOR = "#ffdd33"
_GRID_COLOR = "#334466"


def render_plotly_chart(sun_data: SunData) -> go.Figure:
    """Render SunData as a Plotly polar sun-path chart.

    Only path samples above the horizon (elevation >= 0) are shown. The
    current position is drawn only when the sun is up.

    Args:
        sun_data: Fully computed sun data.

    Returns:
        Plotly Figure object.
    """
    visible = [p for p in sun_data.path if p.elevation >= 0]

    path_trace = go.Scatterpolar(
        r=[p.zenith_angle for p in visible],
        theta=[p.azimuth for p in visible],
        mode="markers",
        marker=dict(size=4, color=_PATH_COLOR, line=dict(width=0)),
        text=[f"{p.utc_dt:%H:%M} UTC" for p in visible],
        hovertemplate="%{text}<br>az %{theta:.1f}°<br>zenith %{r:.1f}°<extra></extra>",
        name="path",
    )
    traces = [path_trace]

    pos = sun_data.position
    if pos.elevation >= 0:
        traces.append(
            go.Scatterpolar(
                r=[pos.zenith_angle],
                theta=[pos.azimuth],
                mode="markers",
                marker=dict(size=18, color=_SUN_COLOR, line=dict(color="white", width=1)),
                hovertemplate="az %{theta:.1f}°<br>zenith %{r:.1f}°<extra></extra>",
                name="sun",
            )
        )

    fig = go.Figure(data=traces)
    fig.update_layout(
        paper_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=30, r=30, t=30, b=30),
        polar=dict(
            bgcolor=_BG,
            angularaxis=dict(
                rotation=90,
                direction="clockwise",
                tickvals=[0, 90, 180, 270],
                ticktext=["N", "E", "S", "W"],
                color="white",
                gridcolor=_GRID_COLOR,
            ),
            radialaxis=dict(
                range=[0, 90],
                tickvals=[30, 60, 90],
                color=_GRID_COLOR,
                gridcolor=_GRID_COLOR,
            ),
        ),
    )
    return fig
