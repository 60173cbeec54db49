"""
Visualization module for the Marine Contaminant Diffusion Engine.

Provides Plotly-based interactive plots for the Streamlit interface.
"""

import numpy as np
import plotly.graph_objects as go
from typing import List, Optional, Sequence, Tuple

from config import RISK_BANDS
from models.diffusion import DistancePrediction, FactorBreakdown
from models.sources import AreaSource, FieldPrediction, PointSource


RISK_COLORS = {
    "Critical": "rgba(220, 38, 38, 0.15)",
    "High": "rgba(249, 115, 22, 0.15)",
    "Medium": "rgba(245, 158, 11, 0.12)",
    "Low-Medium": "rgba(132, 204, 22, 0.10)",
}

LEVEL_COLORS = {
    "low": "#10b981",
    "medium": "#f59e0b",
    "high": "#dc2626",
    "natural": "#06b6d4",
}


def _add_risk_bands(fig: go.Figure, toxic_threshold: float, y_max: float) -> None:
    """Shade the concentration ranges of each risk category."""
    upper = max(y_max, toxic_threshold * 1.2)
    for lower_ratio, _, category in RISK_BANDS:
        lower = lower_ratio * toxic_threshold
        if lower >= upper:
            continue
        fig.add_hrect(
            y0=lower,
            y1=upper,
            fillcolor=RISK_COLORS[category],
            line_width=0,
            layer="below",
            annotation_text=category,
            annotation_position="top left",
            annotation_font_size=9,
        )
        upper = lower


def create_distance_profile_figure(
    distances: np.ndarray,
    concentrations: np.ndarray,
    toxic_threshold: Optional[float] = None,
    predictions: Optional[List[DistancePrediction]] = None,
) -> go.Figure:
    """Create a concentration-vs-distance curve with optional risk bands."""
    fig = go.Figure()

    fig.add_trace(
        go.Scatter(
            x=distances,
            y=concentrations,
            mode="lines",
            line=dict(color="deepskyblue", width=2),
            name="Predicted concentration",
            hovertemplate="%{x:.1f} km<br>%{y:.4f}<extra></extra>",
        )
    )

    if predictions:
        fig.add_trace(
            go.Scatter(
                x=[p.distance for p in predictions],
                y=[p.predicted_concentration for p in predictions],
                mode="markers",
                marker=dict(size=9, color="gold", line=dict(width=1, color="black")),
                name="Evaluated distances",
                hovertemplate="%{x:.1f} km<br>%{y:.4f}<extra></extra>",
            )
        )

    if toxic_threshold is not None:
        y_max = float(np.max(concentrations)) if len(concentrations) else toxic_threshold
        _add_risk_bands(fig, toxic_threshold, y_max)
        fig.add_hline(
            y=toxic_threshold,
            line=dict(color="red", dash="dash"),
            annotation_text="Toxic threshold",
            annotation_position="bottom right",
        )

    fig.update_layout(
        title="Concentration vs. Distance",
        xaxis_title="Distance from source (km)",
        yaxis_title="Concentration",
        template="plotly_dark",
        height=400,
    )
    return fig


def create_factor_figure(factors: FactorBreakdown) -> go.Figure:
    """Create a bar chart of the diagnostic factor breakdown."""
    names = ["Distance", "Temperature", "Hydrodynamics", "Chemical"]
    values = [factors.distance, factors.temperature, factors.hydrodynamics, factors.chemical]

    fig = go.Figure(
        go.Bar(
            x=names,
            y=values,
            marker_color=["steelblue", "tomato", "mediumseagreen", "orchid"],
            hovertemplate="%{x}: %{y:.3f}<extra></extra>",
        )
    )
    fig.update_layout(
        title="Factor Breakdown",
        yaxis_title="Factor",
        template="plotly_dark",
        height=300,
    )
    return fig


def create_influence_figure(prediction: FieldPrediction) -> go.Figure:
    """Create a horizontal bar chart of per-source influences at a point."""
    if not prediction.influences:
        fig = go.Figure()
        fig.add_annotation(text="No influences available", showarrow=False)
        return fig

    # Plotly draws horizontal bars bottom-up; reverse so the largest is on top
    influences = list(reversed(prediction.influences))

    fig = go.Figure(
        go.Bar(
            x=[i.influence for i in influences],
            y=[i.source for i in influences],
            orientation="h",
            marker_color=[LEVEL_COLORS.get(i.level, "gray") for i in influences],
            customdata=[(i.distance, i.contribution) for i in influences],
            hovertemplate=(
                "%{y}<br>Influence: %{x:.6f}<br>"
                "Distance: %{customdata[0]} m<br>"
                "Contribution: %{customdata[1]:.1f}%<extra></extra>"
            ),
        )
    )
    fig.update_layout(
        title=f"Source Influences (total {prediction.total_concentration:.6f})",
        xaxis_title="Influence",
        template="plotly_dark",
        height=120 + 40 * len(influences),
    )
    return fig


def create_field_figure(
    lats: np.ndarray,
    lngs: np.ndarray,
    concentration: np.ndarray,
    sources: Sequence[PointSource],
    zones: Sequence[AreaSource] = (),
    query_point: Optional[Tuple[float, float]] = None,
) -> go.Figure:
    """Create a concentration heatmap over a lat/lng mesh."""
    fig = go.Figure()

    conc_display = np.log10(np.maximum(concentration, 1e-4))

    fig.add_trace(
        go.Heatmap(
            x=lngs,
            y=lats,
            z=conc_display,
            colorscale="YlOrRd",
            colorbar=dict(title="log10(conc)"),
            name="Concentration",
            hovertemplate="lat: %{y:.4f}<br>lng: %{x:.4f}<br>log10: %{z:.2f}<extra></extra>",
        )
    )

    fig.add_trace(
        go.Scatter(
            x=[s.emission_location[1] for s in sources],
            y=[s.emission_location[0] for s in sources],
            mode="markers+text",
            marker=dict(
                size=12,
                color=[LEVEL_COLORS.get(s.level, "gray") for s in sources],
                symbol="diamond",
                line=dict(width=1, color="black"),
            ),
            text=[s.name for s in sources],
            textposition="top center",
            textfont=dict(size=9, color="white"),
            name="Outfalls",
        )
    )

    if zones:
        fig.add_trace(
            go.Scatter(
                x=[z.center[1] for z in zones],
                y=[z.center[0] for z in zones],
                mode="markers+text",
                marker=dict(size=14, color="purple", symbol="circle-open", line=dict(width=2)),
                text=[z.name for z in zones],
                textposition="bottom center",
                textfont=dict(size=9, color="white"),
                name="Pollution zones",
            )
        )

    if query_point is not None:
        fig.add_trace(
            go.Scatter(
                x=[query_point[1]],
                y=[query_point[0]],
                mode="markers",
                marker=dict(size=14, color="cyan", symbol="x"),
                name="Query point",
            )
        )

    fig.update_layout(
        height=650,
        template="plotly_dark",
        legend=dict(orientation="h", yanchor="bottom", y=-0.15, xanchor="center", x=0.5),
        margin=dict(l=60, r=60, t=40, b=80),
    )
    fig.update_xaxes(title_text="Longitude")
    fig.update_yaxes(title_text="Latitude", scaleanchor="x")
    return fig
