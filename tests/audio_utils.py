import numpy as np
import scipy.signal

from formant_sweep.models.types import EstimatedFrame


class FakeEstimator:
    """Детерминированный оценщик: кандидаты задаются функцией от (потолок, фрейм)."""

    def __init__(self, candidates, frame_count=4, frame_step=0.01, frame_counts=None):
        self.candidates = candidates
        self.frame_count = frame_count
        self.frame_step = frame_step
        self.frame_counts = frame_counts or {}
        self.calls = []

    def estimate(self, segment, ceiling, *, frame_step, order=5, window=0.025, preemphasis=50.0):
        self.calls.append((segment.label, ceiling))
        count = self.frame_counts.get(ceiling, self.frame_count)
        return [
            EstimatedFrame(
                time=window / 2 + i * self.frame_step,
                candidates=tuple(self.candidates(ceiling, i))[:order],
            )
            for i in range(count)
        ]


def ladder(ceiling, frame):
    """Пять кандидатов, линейно зависящих от потолка и номера фрейма."""
    return [1000.0 * k + ceiling / 100.0 + frame for k in range(1, 6)]


def synth_vowel(sr=16000, duration=0.5, f0=120.0,
                formants=(700.0, 1220.0, 2600.0, 3500.0, 4500.0),
                bandwidths=(80.0, 90.0, 120.0, 150.0, 200.0)):
    """Импульсная последовательность через каскад резонаторов второго порядка."""
    n = int(sr * duration)
    x = np.zeros(n)
    x[::int(round(sr / f0))] = 1.0
    for freq, bw in zip(formants, bandwidths):
        r = np.exp(-np.pi * bw / sr)
        theta = 2 * np.pi * freq / sr
        x = scipy.signal.lfilter([1.0 - r], [1.0, -2 * r * np.cos(theta), r * r], x)
    return 0.5 * x / np.max(np.abs(x))
