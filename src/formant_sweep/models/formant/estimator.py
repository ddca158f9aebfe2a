"""Интерфейс спектрального оценщика формант и выбор реализации по имени."""

from typing import Protocol, runtime_checkable

from formant_sweep.constants import ESTIMATORS, FORMANT_COUNT, PRE_EMPHASIS_HZ, WINDOW_LENGTH_S
from formant_sweep.errors import ConfigurationError
from formant_sweep.models.types import EstimatedFrame, Segment


@runtime_checkable
class FormantEstimator(Protocol):
    """
    Оценщик кандидатов в форманты для сегмента при заданном потолке.

    Реализация обязана быть детерминированной и давать одну и ту же сетку
    фреймов для одного сегмента, шага и окна при любом потолке.
    """

    def estimate(self, segment: Segment, ceiling: float, *, frame_step: float,
                 order: int = FORMANT_COUNT, window: float = WINDOW_LENGTH_S,
                 preemphasis: float = PRE_EMPHASIS_HZ) -> list[EstimatedFrame]:
        ...


def get_estimator(name: str) -> FormantEstimator:
    """
    Создаёт оценщик по имени.

    Args:
        name: 'praat' (Burg через parselmouth) или 'lpc' (librosa)

    Returns:
        Экземпляр оценщика
    """
    key = (name or "").strip().lower()
    if key == "praat":
        from formant_sweep.models.formant.praat import PraatFormantEstimator
        return PraatFormantEstimator()
    if key == "lpc":
        from formant_sweep.models.formant.lpc import LpcFormantEstimator
        return LpcFormantEstimator()
    raise ConfigurationError(f"Неизвестный оценщик: {name!r}. Доступны: {', '.join(ESTIMATORS)}")
