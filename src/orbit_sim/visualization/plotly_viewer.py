from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

import plotly.graph_objects as go

from orbit_sim.core.frames import Vector3
from orbit_sim.objects.central_body import CentralBody
from orbit_sim.simulation.engine import SimulationLog


def build_static_figure(
    log: SimulationLog,
    body: CentralBody,
    curves: Optional[Dict[str, List[Vector3]]] = None,
) -> go.Figure:
    """
    Static 3D figure:
      - Central body marker at the origin
      - Recorded track + last position for each satellite
      - Optional extra curves (e.g. one-period or numeric lookahead samples)
      - Override events as markers
    """
    fig = go.Figure()

    fig.add_trace(go.Scatter3d(
        x=[0.0], y=[0.0], z=[0.0],
        mode="markers",
        name=body.name,
        marker=dict(size=8, color="black"),
    ))

    for sat_id, samples in log.sat_positions_m.items():
        if not samples:
            continue
        xs = [r[0] for (_t, r) in samples]
        ys = [r[1] for (_t, r) in samples]
        zs = [r[2] for (_t, r) in samples]

        fig.add_trace(go.Scatter3d(
            x=xs, y=ys, z=zs,
            mode="lines",
            name=f"{sat_id} track",
        ))

        # last point
        fig.add_trace(go.Scatter3d(
            x=[xs[-1]], y=[ys[-1]], z=[zs[-1]],
            mode="markers",
            name=f"{sat_id} now",
            marker=dict(size=5),
        ))

    for label, points in (curves or {}).items():
        fig.add_trace(go.Scatter3d(
            x=[p[0] for p in points],
            y=[p[1] for p in points],
            z=[p[2] for p in points],
            mode="lines",
            name=label,
            line=dict(dash="dot"),
        ))

    jumps = [ev for ev in log.events if ev.get("kind") == "override"]
    if jumps:
        fig.add_trace(go.Scatter3d(
            x=[ev["r_m"][0] for ev in jumps],
            y=[ev["r_m"][1] for ev in jumps],
            z=[ev["r_m"][2] for ev in jumps],
            mode="markers",
            name="overrides",
            marker=dict(size=4, symbol="x"),
        ))

    fig.update_layout(
        title=f"Orbits around {body.name}",
        scene=dict(
            xaxis_title="X (m)",
            yaxis_title="Y (m)",
            zaxis_title="Z (m)",
            aspectmode="data",
        ),
        margin=dict(l=0, r=0, t=40, b=0),
        legend=dict(orientation="h"),
    )
    return fig


def render_static_scene(
    log: SimulationLog,
    body: CentralBody,
    out_html: str = "out/orbit_scene.html",
    curves: Optional[Dict[str, List[Vector3]]] = None,
) -> str:
    """Write the static figure to an HTML file and return its path."""
    fig = build_static_figure(log, body, curves)
    Path(out_html).parent.mkdir(parents=True, exist_ok=True)
    fig.write_html(out_html, auto_open=False)
    return out_html
