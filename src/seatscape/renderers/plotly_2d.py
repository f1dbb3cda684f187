"""Plotly interactive renderers — route map and sun-altitude profile.

The map draws the sampled great circle on a mercator projection, split at
the antimeridian so the line never streaks across the whole map.
"""

from collections.abc import Sequence

import numpy as np
import plotly.graph_objects as go

from seatscape.geo import split_at_antimeridian
from seatscape.models import PassBy, Recommendation
from seatscape.sun import ALTITUDE_THRESHOLD_DEG
from seatscape.timeutils import format_local

_BG = "#0d1b35"
_ROUTE_COLOR = "#7ec8e3"
_SUN_COLOR = "#fbbf24"
_SUNRISE_COLOR = "#22c55e"
_SUNSET_COLOR = "#ef4444"
_SIDE_COLORS = {"A": "#60a5fa", "F": "#f472b6", "none": "#64748b"}


def render_route_map(
    rec: Recommendation,
    pass_bys: Sequence[PassBy] = (),
    plane_index: int | None = None,
) -> go.Figure:
    """Render the sampled route with sunrise/sunset markers and pass-bys.

    Args:
        rec: Simulation result.
        pass_bys: Detected pass-bys to label on the map.
        plane_index: Sample index to mark with the aircraft, if any.

    Returns:
        Plotly Figure object.
    """
    segments = split_at_antimeridian([(s.lon, s.lat) for s in rec.samples])

    # Route: single trace using None separators between antimeridian segments
    lx: list[float | None] = []
    ly: list[float | None] = []
    for seg in segments:
        lx += [lon for lon, _ in seg] + [None]
        ly += [lat for _, lat in seg] + [None]

    traces = [
        go.Scattergeo(
            lon=lx,
            lat=ly,
            mode="lines",
            line=dict(color=_ROUTE_COLOR, width=2),
            hoverinfo="skip",
            name="route",
        )
    ]

    for event, color, label in (
        (rec.sunrise, _SUNRISE_COLOR, "Sunrise"),
        (rec.sunset, _SUNSET_COLOR, "Sunset"),
    ):
        if event is None:
            continue
        s = rec.samples[event.sample_index]
        text = f"{label} ({event.side})" + (f" near {event.place}" if event.place else "")
        traces.append(
            go.Scattergeo(
                lon=[s.lon],
                lat=[s.lat],
                mode="markers",
                marker=dict(size=11, color=color, line=dict(width=1, color="white")),
                hovertext=[text],
                hoverinfo="text",
                name=label.lower(),
            )
        )

    if pass_bys:
        traces.append(
            go.Scattergeo(
                lon=[p.lon for p in pass_bys],
                lat=[p.lat for p in pass_bys],
                mode="markers+text",
                marker=dict(
                    size=[4 + 6 * p.relevance for p in pass_bys],
                    color=[_SIDE_COLORS[p.side] for p in pass_bys],
                ),
                text=[p.name for p in pass_bys],
                textposition="top center",
                textfont=dict(color="#e8d5a3", size=10),
                hovertext=[f"{p.name}: {p.side}, ~{p.distance_km} km" for p in pass_bys],
                hoverinfo="text",
                name="pass-bys",
            )
        )

    if plane_index is not None and rec.samples:
        s = rec.samples[max(0, min(plane_index, len(rec.samples) - 1))]
        traces.append(
            go.Scattergeo(
                lon=[s.lon],
                lat=[s.lat],
                mode="markers",
                marker=dict(
                    size=14,
                    symbol="triangle-up",
                    color="white",
                ),
                hoverinfo="skip",
                name="aircraft",
            )
        )

    fig = go.Figure(data=traces)
    fig.update_geos(
        projection_type="mercator",
        fitbounds="locations",
        showland=True,
        landcolor="#1a2f55",
        showocean=True,
        oceancolor=_BG,
        showcountries=True,
        countrycolor="#334466",
        coastlinecolor="#334466",
        bgcolor=_BG,
    )
    fig.update_layout(
        paper_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=0, t=0, b=0),
        height=420,
    )
    return fig


def render_sun_profile(rec: Recommendation, tz: str | None = None) -> go.Figure:
    """Sun altitude over the flight, coloured by the lit cabin side.

    Args:
        rec: Simulation result.
        tz: Zone for the x-axis clock labels. Elapsed minutes if None.

    Returns:
        Plotly Figure object.
    """
    elapsed = np.arange(len(rec.samples)) * rec.sample_minutes
    alts = np.array([s.altitude_deg for s in rec.samples])
    sides = [s.side for s in rec.samples]

    if tz is not None:
        x_labels = [format_local(s.utc, tz, "%H:%M") for s in rec.samples]
    else:
        x_labels = [f"T+{int(m)}" for m in elapsed]

    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=elapsed,
            y=alts,
            mode="lines",
            line=dict(color=_SUN_COLOR, width=2),
            customdata=x_labels,
            hovertemplate="%{customdata}: %{y:.1f}°<extra></extra>",
            name="altitude",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=elapsed,
            y=alts,
            mode="markers",
            marker=dict(size=5, color=[_SIDE_COLORS[side] for side in sides]),
            hoverinfo="skip",
            name="side",
        )
    )
    fig.add_hline(y=0, line=dict(color="#334466", width=1))
    fig.add_hline(
        y=ALTITUDE_THRESHOLD_DEG, line=dict(color="#64748b", width=1, dash="dot")
    )

    tick_step = max(1, len(rec.samples) // 6)
    fig.update_layout(
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=30, r=10, t=10, b=30),
        height=180,
        xaxis=dict(
            tickmode="array",
            tickvals=list(elapsed[::tick_step]),
            ticktext=x_labels[::tick_step],
            color="#cccccc",
            showgrid=False,
        ),
        yaxis=dict(
            range=[
                min(-10.0, float(alts.min(initial=0.0))) - 1,
                max(50.0, float(alts.max(initial=0.0))) + 1,
            ],
            color="#cccccc",
            showgrid=False,
            ticksuffix="°",
        ),
    )
    return fig
