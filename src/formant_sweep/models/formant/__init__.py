"""Развёртка потолка и выбор устойчивых формант."""

from formant_sweep.models.formant.aggregate import aggregate_frames
from formant_sweep.models.formant.estimator import FormantEstimator, get_estimator
from formant_sweep.models.formant.stability import select_stable_estimate, select_sweep
from formant_sweep.models.formant.sweep import sample_sweep

__all__ = [
    'FormantEstimator',
    'aggregate_frames',
    'get_estimator',
    'sample_sweep',
    'select_stable_estimate',
    'select_sweep',
]
