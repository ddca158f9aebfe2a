"""
Модуль: sweep.py
Описание: Развёртка оценщика формант по диапазону потолков.
Для каждой форманты и каждого фрейма строит последовательность
кандидатов, упорядоченную по возрастанию потолка.
"""

import numpy as np

from formant_sweep.constants import FORMANT_COUNT, PRE_EMPHASIS_HZ, WINDOW_LENGTH_S
from formant_sweep.errors import EstimatorInconsistency
from formant_sweep.log import setup_logger
from formant_sweep.models.formant.estimator import FormantEstimator
from formant_sweep.models.types import CeilingSeries, EstimatedFrame, Segment, SweepResult

log = setup_logger("formant_sweep")


def _fill_column(values: np.ndarray, column: int, frames: list[EstimatedFrame]) -> None:
    """Записывает кандидатов одного вызова в столбец ``column`` массива развёртки."""
    formant_count = values.shape[0]
    for frame_idx, frame in enumerate(frames):
        for formant_idx, freq in enumerate(frame.candidates[:formant_count]):
            values[formant_idx, frame_idx, column] = freq


def sample_sweep(segment: Segment, estimator: FormantEstimator, ceilings: CeilingSeries, *,
                 frame_step: float, formant_count: int = FORMANT_COUNT,
                 window: float = WINDOW_LENGTH_S, preemphasis: float = PRE_EMPHASIS_HZ) -> SweepResult:
    """
    Запускает оценщик для каждого потолка и собирает последовательности кандидатов.

    Базовый вызов с нижним потолком задаёт число фреймов и их время;
    все последующие вызовы обязаны вернуть столько же фреймов.
    Вызовы выполняются строго последовательно.

    Args:
        segment: Сегмент аудио
        estimator: Оценщик кандидатов
        ceilings: Значения потолка (нижний - базовый)
        frame_step: Шаг фреймов в секундах
        formant_count: Число формант
        window: Длина окна анализа в секундах
        preemphasis: Частота начала предыскажения в Гц

    Returns:
        SweepResult с массивом (formant_count, frame_count, len(ceilings))

    Raises:
        EstimatorInconsistency: Число фреймов отличается от базового вызова
    """
    ceiling_values = ceilings.values
    baseline = estimator.estimate(
        segment, float(ceiling_values[0]),
        frame_step=frame_step, order=formant_count, window=window, preemphasis=preemphasis,
    )
    frame_count = len(baseline)
    times = np.array([frame.time for frame in baseline], dtype=float)

    values = np.full((formant_count, frame_count, len(ceiling_values)), np.nan)
    _fill_column(values, 0, baseline)

    for column, ceiling in enumerate(ceiling_values[1:], start=1):
        frames = estimator.estimate(
            segment, float(ceiling),
            frame_step=frame_step, order=formant_count, window=window, preemphasis=preemphasis,
        )
        if len(frames) != frame_count:
            raise EstimatorInconsistency(float(ceiling), frame_count, len(frames))
        _fill_column(values, column, frames)

    log.debug(
        "Развёртка: %s потолков (%.0f..%.0f Гц), %s фреймов",
        len(ceiling_values), ceilings.low, ceilings.high, frame_count,
    )
    return SweepResult(times=times, ceilings=ceilings, values=values)
