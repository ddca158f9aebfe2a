import matplotlib

matplotlib.use("Agg")

import numpy as np

from formant_sweep.models.formant.stability import select_sweep
from formant_sweep.models.types import CeilingSeries, ResultTable, SweepResult
from formant_sweep.ui.visualization import figure_to_png, plot_sweep, plot_tracks


def test_sweep_plot_marks_chosen_values(tmp_path):
    ceilings = CeilingSeries(3500, 3600, 50)
    values = np.array([[[4800.0, 4800.0, 5100.0]], [[900.0, 905.0, 905.0]]])
    sweep = SweepResult(times=np.array([0.02]), ceilings=ceilings, values=values)

    fig = plot_sweep(sweep, select_sweep(sweep), frame=0)

    assert len(fig.axes[0].lines) == 4
    path = figure_to_png(fig, tmp_path / "sweep.png")
    assert (tmp_path / "sweep.png").stat().st_size > 0
    assert path.endswith("sweep.png")


def test_tracks_plot_handles_empty_table(tmp_path):
    fig = plot_tracks(ResultTable())
    figure_to_png(fig, tmp_path / "empty.png")
    assert (tmp_path / "empty.png").exists()
