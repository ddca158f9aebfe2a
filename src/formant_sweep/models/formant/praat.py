"""
Модуль: praat.py
Описание: Оценщик формант на основе алгоритма Бурга из Praat (через parselmouth).
"""

import math

import numpy as np
import parselmouth

from formant_sweep.constants import FORMANT_COUNT, PRE_EMPHASIS_HZ, WINDOW_LENGTH_S
from formant_sweep.log import setup_logger
from formant_sweep.models.types import EstimatedFrame, Segment

log = setup_logger("formant_praat")


class PraatFormantEstimator:
    """
    Обёртка над ``Sound.to_formant_burg``.

    Praat сам передискретизирует сигнал до удвоенного потолка, поэтому
    сетка фреймов зависит только от длительности, шага и окна.
    """

    def to_sound(self, segment: Segment) -> parselmouth.Sound:
        samples = np.asarray(segment.samples, dtype=np.float64)
        return parselmouth.Sound(samples, sampling_frequency=float(segment.sample_rate))

    def estimate(self, segment: Segment, ceiling: float, *, frame_step: float,
                 order: int = FORMANT_COUNT, window: float = WINDOW_LENGTH_S,
                 preemphasis: float = PRE_EMPHASIS_HZ) -> list[EstimatedFrame]:
        """
        Вычисляет кандидатов в форманты для каждого фрейма.

        Args:
            segment: Сегмент аудио
            ceiling: Потолок формант (maximum_formant) в Гц
            frame_step: Шаг фреймов в секундах
            order: Максимальное число формант
            window: Длина окна анализа в секундах
            preemphasis: Частота начала предыскажения в Гц

        Returns:
            Фреймы с кандидатами; неопределённые значения отброшены
        """
        formant = self.to_sound(segment).to_formant_burg(
            time_step=frame_step,
            max_number_of_formants=float(order),
            maximum_formant=ceiling,
            window_length=window,
            pre_emphasis_from=preemphasis,
        )

        frames = []
        for t in formant.xs():
            candidates = []
            for n in range(1, order + 1):
                value = formant.get_value_at_time(n, float(t))
                if value is None or math.isnan(value) or value <= 0:
                    break
                candidates.append(float(value))
            frames.append(EstimatedFrame(time=float(t), candidates=tuple(candidates)))

        log.debug("Burg: потолок %.0f Гц, фреймов %s", ceiling, len(frames))
        return frames
