import pytest
import tgt

from formant_sweep.errors import ConfigurationError
from formant_sweep.services.annotation import read_intervals


@pytest.fixture
def textgrid_path(tmp_path):
    grid = tgt.core.TextGrid()

    words = tgt.core.IntervalTier(start_time=0.0, end_time=2.0, name="words")
    words.add_interval(tgt.core.Interval(0.2, 0.4, "ba"))
    words.add_interval(tgt.core.Interval(0.4, 0.6, "   "))
    words.add_interval(tgt.core.Interval(0.6, 0.9, "da"))
    grid.add_tier(words)

    marks = tgt.core.PointTier(start_time=0.0, end_time=2.0, name="marks")
    marks.add_point(tgt.core.Point(0.5, "x"))
    grid.add_tier(marks)

    path = tmp_path / "sample.TextGrid"
    tgt.io.write_to_file(grid, str(path), format="long")
    return path


def test_reads_labeled_intervals(textgrid_path):
    intervals = read_intervals(textgrid_path, tier_index=1)

    assert [it.label for it in intervals] == ["ba", "da"]
    assert intervals[0].start == pytest.approx(0.2)
    assert intervals[1].end == pytest.approx(0.9)


def test_missing_tier(textgrid_path):
    with pytest.raises(ConfigurationError):
        read_intervals(textgrid_path, tier_index=3)
    with pytest.raises(ConfigurationError):
        read_intervals(textgrid_path, tier_index=0)


def test_point_tier_rejected(textgrid_path):
    with pytest.raises(ConfigurationError):
        read_intervals(textgrid_path, tier_index=2)
