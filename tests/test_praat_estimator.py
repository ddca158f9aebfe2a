import numpy as np

from formant_sweep.models.formant.praat import PraatFormantEstimator
from formant_sweep.models.types import Interval, SweepParameters
from formant_sweep.services.audio import extract_segment
from formant_sweep.services.batch import analyze_segment


def test_frame_grid_does_not_depend_on_ceiling(vowel_recording):
    estimator = PraatFormantEstimator()
    segment = extract_segment(vowel_recording, Interval("a", 0.1, 0.4))

    low = estimator.estimate(segment, 3500.0, frame_step=0.005)
    high = estimator.estimate(segment, 6000.0, frame_step=0.005)

    assert len(low) == len(high) > 0
    np.testing.assert_allclose([f.time for f in low], [f.time for f in high])


def test_stable_first_formant(vowel_recording):
    params = SweepParameters(ceiling_low=4500.0, ceiling_high=5500.0, ceiling_step=250.0, frame_step=0.01)
    segment = extract_segment(vowel_recording, Interval("a", 0.1, 0.4))

    rows = analyze_segment(segment, PraatFormantEstimator(), params)

    f1 = np.array([row.formants[0] for row in rows])
    assert abs(np.nanmedian(f1) - 700.0) < 150.0
