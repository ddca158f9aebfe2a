import math

import numpy as np
import pytest

from formant_sweep.models.formant.stability import select_stable_estimate, select_sweep
from formant_sweep.models.types import CeilingSeries, SweepResult


def test_returns_post_jump_plateau():
    assert select_stable_estimate([100, 100, 100, 250, 251, 249, 250]) == 250


def test_flat_sequence():
    assert select_stable_estimate([300, 300, 300, 300]) == 300


def test_single_value_is_returned():
    assert select_stable_estimate([4321.0]) == 4321.0


def test_two_values_return_first():
    assert select_stable_estimate([1500.0, 1800.0]) == 1500.0
    assert select_stable_estimate([1800.0, 1500.0]) == 1800.0


def test_three_point_sweep_keeps_value_before_late_jump():
    # 3500 -> 4800, 3550 -> 4800, 3600 -> 5100
    assert select_stable_estimate([4800.0, 4800.0, 5100.0]) == 4800.0


def test_jump_at_last_pair():
    assert select_stable_estimate([1000, 1000, 1000, 2000]) == 1000


def test_earliest_maximum_wins():
    # Три равных скачка: остаётся вся последовательность
    assert select_stable_estimate([100, 200, 100, 200, 200]) == 200


def test_earliest_minimum_wins():
    # После скачка 500 -> 100 все разности равны 10, берётся первая пара
    assert select_stable_estimate([500, 100, 110, 120, 130]) == 100


def test_result_is_always_an_element():
    rng = np.random.default_rng(7)
    for _ in range(200):
        n = int(rng.integers(1, 30))
        seq = rng.uniform(200, 5000, size=n).round(1)
        assert select_stable_estimate(seq) in seq


def test_accepts_numpy_and_tuples():
    assert select_stable_estimate(np.array([3000.0, 3000.0])) == 3000.0
    assert select_stable_estimate((900, 1400, 1410, 1405)) == 1410


def test_missing_candidates_are_ignored():
    seq = [math.nan, math.nan, 3000.0, 3010.0, 3010.0]
    assert select_stable_estimate(seq) == 3010.0


def test_no_finite_difference_returns_first_finite():
    assert select_stable_estimate([math.nan, 4000.0]) == 4000.0
    assert select_stable_estimate([4000.0, math.nan, math.nan]) == 4000.0


def test_all_missing_is_nan():
    assert math.isnan(select_stable_estimate([math.nan, math.nan, math.nan]))


def test_empty_sequence_rejected():
    with pytest.raises(ValueError):
        select_stable_estimate([])


def test_select_sweep_shape_and_values():
    ceilings = CeilingSeries(3500, 3600, 50)
    values = np.empty((2, 3, 3))
    values[0] = [[4800, 4800, 5100], [500, 500, 500], [100, 400, 401]]
    values[1] = [[1, 2, 3], [7, 7, 7], [9, 9, 9]]
    sweep = SweepResult(times=np.array([0.01, 0.02, 0.03]), ceilings=ceilings, values=values)

    chosen = select_sweep(sweep)

    assert chosen.shape == (2, 3)
    np.testing.assert_array_equal(chosen[0], [4800, 500, 400])
    np.testing.assert_array_equal(chosen[1], [1, 7, 9])
