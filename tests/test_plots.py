import os

import pandas as pd
import plotly.graph_objects as go

from conscalc.consensus import evaluate
from conscalc.consensus.sweep import disagreement_grid
from conscalc.visualization import plots


def test_gauge_figure_tracks_consensus():
    fig = plots.gauge_figure(evaluate(3, 1))
    assert isinstance(fig, go.Figure)
    assert fig.data[0].value == 0.875
    assert plots.gauge_figure(None).data[0].value == 0.0


def test_heatmap_figure_axes():
    df = disagreement_grid([2.0, 3.0, 4.0], [0.0, 1.0, 2.0])
    fig = plots.heatmap_figure(df, title="L")
    assert list(fig.data[0].x) == [2.0, 3.0, 4.0]
    assert list(fig.data[0].y) == [0.0, 1.0, 2.0]


def test_heatmaps_and_exports_written(tmp_path):
    df = disagreement_grid([1.0, 2.0, 3.0, 4.0, 5.0], [0.0, 1.0, 2.0, 3.0, 4.0])
    png = tmp_path / "viz" / "grid.png"
    html = tmp_path / "viz" / "grid.html"
    plots.save_matplotlib_heatmap(df, str(png), title="Index of Disagreement")
    plots.save_plotly_heatmap(df, str(html))
    assert png.exists() and png.stat().st_size > 0
    assert html.exists()

    exports = plots.export_sweep(df, str(tmp_path / "exp" / "grid"))
    assert os.path.exists(exports["csv"])
    assert os.path.exists(exports["json"])
    back = pd.read_csv(exports["csv"])
    assert len(back) == len(df)
    assert "L" in back.columns
    records = pd.read_json(exports["json"], orient="records")
    assert len(records) == len(df)
