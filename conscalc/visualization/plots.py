"""Visualization utilities for ConsCalc

Plotly figures for the dashboard, a Matplotlib heatmap for static reports and
CSV/Parquet/JSON exports of sweep results.

Functions:
- gauge_figure(result)
- save_matplotlib_heatmap(df, out_path, title)
- heatmap_figure(df, title)
- save_plotly_heatmap(df, out_path, title)
- export_sweep(df, out_prefix)
"""
from __future__ import annotations

import os

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
import plotly.graph_objects as go  # noqa: E402

from ..consensus.engine import ConsensusResult  # noqa: E402
from ..consensus.sweep import pivot_index  # noqa: E402
from ..presentation import gauge_position  # noqa: E402


def _ensure_dir(path: str):
    os.makedirs(path or '.', exist_ok=True)


def gauge_figure(result: ConsensusResult | None, height: int = 260) -> go.Figure:
    """Consensus gauge: red for high disagreement, green for high consensus."""
    position = gauge_position(result)
    fig = go.Figure(go.Indicator(
        mode="gauge",
        value=position,
        gauge={
            'axis': {'range': [0, 1], 'tickvals': [0, 0.5, 1],
                     'ticktext': ['High Disagreement', '', 'High Consensus']},
            'bar': {'color': 'rgba(255,255,255,0.9)', 'thickness': 0.25},
            'steps': [
                {'range': [0, 0.33], 'color': '#ef4444'},
                {'range': [0.33, 0.66], 'color': '#facc15'},
                {'range': [0.66, 1], 'color': '#4ade80'},
            ],
        },
    ))
    fig.update_layout(height=height, margin={'l': 30, 'r': 30, 't': 20, 'b': 10},
                      template='plotly_white')
    return fig


def save_matplotlib_heatmap(df: pd.DataFrame, out_path: str, title: str = None, value: str = "L"):
    """Save a static heatmap of one result column over (mean, variance) to PNG."""
    _ensure_dir(os.path.dirname(out_path))
    wide = pivot_index(df, value)
    fig, ax = plt.subplots(figsize=(10, 6))
    try:
        mesh = ax.pcolormesh(wide.columns.values, wide.index.values, wide.values,
                             shading='nearest', cmap='RdYlGn_r', vmin=0.0, vmax=1.0)
        fig.colorbar(mesh, ax=ax, label=value)
        ax.set_xlabel('Mean (C)', fontsize=12)
        ax.set_ylabel('Variance (D)', fontsize=12)
        if title:
            ax.set_title(title, fontsize=14)
        fig.tight_layout()
        fig.savefig(out_path, dpi=150)
    finally:
        plt.close(fig)


def save_plotly_heatmap(df: pd.DataFrame, out_path: str, title: str = None, value: str = "L"):
    """Save an interactive heatmap as standalone HTML."""
    _ensure_dir(os.path.dirname(out_path))
    fig = heatmap_figure(df, title=title, value=value)
    fig.write_html(out_path, include_plotlyjs='cdn')


def heatmap_figure(df: pd.DataFrame, title: str = None, value: str = "L") -> go.Figure:
    wide = pivot_index(df, value)
    fig = go.Figure(go.Heatmap(
        x=wide.columns.values, y=wide.index.values, z=wide.values,
        colorscale='RdYlGn', reversescale=True, zmin=0.0, zmax=1.0,
        colorbar={'title': value},
        hovertemplate='C=%{x:.3f}<br>D=%{y:.3f}<br>' + value + '=%{z:.4f}<extra></extra>',
    ))
    fig.update_layout(
        title={'text': title or '', 'x': 0.01, 'xanchor': 'left'},
        xaxis_title='Mean (C)',
        yaxis_title='Variance (D)',
        template='plotly_white',
    )
    return fig


def export_sweep(df: pd.DataFrame, out_prefix: str):
    """Export CSV, Parquet and JSON artifacts of a sweep frame."""
    _ensure_dir(os.path.dirname(out_prefix))
    csv_path = f"{out_prefix}.csv"
    parquet_path = f"{out_prefix}.parquet"
    json_path = f"{out_prefix}.json"

    df.to_csv(csv_path, index=False)
    try:
        df.to_parquet(parquet_path, index=False)
    except ImportError:
        # Parquet needs pyarrow or fastparquet; CSV/JSON are always written
        parquet_path = None
    df.to_json(json_path, orient='records')
    return {'csv': csv_path, 'parquet': parquet_path, 'json': json_path}
