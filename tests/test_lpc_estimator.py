import numpy as np

from formant_sweep.models.formant.lpc import LpcFormantEstimator, frame_times
from formant_sweep.models.formant.stability import select_sweep
from formant_sweep.models.formant.sweep import sample_sweep
from formant_sweep.models.types import CeilingSeries, Segment


def _segment(recording):
    return Segment(samples=recording.samples, sample_rate=recording.sample_rate,
                   start=0.0, end=recording.duration, label="vowel")


def test_frame_times_are_centered():
    times = frame_times(0.1, 0.01, 0.025)
    assert len(times) == 8
    np.testing.assert_allclose(times[0] + times[-1], 0.1)


def test_frame_times_for_short_segment():
    assert frame_times(0.01, 0.005, 0.025).size == 0


def test_frame_grid_does_not_depend_on_ceiling(vowel_recording):
    estimator = LpcFormantEstimator()
    segment = _segment(vowel_recording)

    low = estimator.estimate(segment, 3500.0, frame_step=0.01)
    high = estimator.estimate(segment, 6000.0, frame_step=0.01)

    assert len(low) == len(high) > 0
    assert [f.time for f in low] == [f.time for f in high]


def test_candidates_are_sorted_and_below_ceiling(vowel_recording):
    frames = LpcFormantEstimator().estimate(_segment(vowel_recording), 5000.0, frame_step=0.01)

    for frame in frames:
        assert len(frame.candidates) <= 5
        assert list(frame.candidates) == sorted(frame.candidates)
        assert all(50.0 <= f < 5000.0 for f in frame.candidates)


def test_first_formant_of_synthetic_vowel(vowel_recording):
    sweep = sample_sweep(
        _segment(vowel_recording), LpcFormantEstimator(), CeilingSeries(4500, 5500, 250), frame_step=0.01,
    )
    chosen = select_sweep(sweep)

    assert abs(np.nanmedian(chosen[0]) - 700.0) < 150.0


def test_silence_has_no_candidates():
    segment = Segment(samples=np.zeros(8000), sample_rate=16000, end=0.5)
    frames = LpcFormantEstimator().estimate(segment, 5000.0, frame_step=0.01)

    assert frames
    assert all(frame.candidates == () for frame in frames)
