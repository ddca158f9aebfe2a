"""
Модуль: stability.py
Описание: Выбор устойчивой оценки форманты по развёртке потолка.

При росте потолка от слишком низкого к слишком высокому оценка неверно
назначенной форманты один раз перескакивает между плато. Алгоритм находит
этот главный скачок, отбрасывает всё, что до него, и в оставшейся части
выбирает самую спокойную пару соседних значений.
"""

from collections.abc import Sequence

import numpy as np

from formant_sweep.log import setup_logger
from formant_sweep.models.types import SweepResult

log = setup_logger("formant_stability")


def _first_index(values: np.ndarray, largest: bool) -> int | None:
    """Индекс первого максимума/минимума среди конечных значений или None."""
    finite = np.isfinite(values)
    if not finite.any():
        return None
    masked = np.where(finite, values, -np.inf if largest else np.inf)
    # argmax/argmin возвращают первое вхождение, что и задаёт правило ничьей
    return int(np.argmax(masked) if largest else np.argmin(masked))


def select_stable_estimate(sequence: Sequence[float] | np.ndarray) -> float:
    """
    Выбирает устойчивое значение форманты из последовательности оценок,
    упорядоченной по возрастанию потолка.

    Шаги:
    1. Модули первых разностей соседних оценок.
    2. Индекс наибольшей разности (при равенстве - самый ранний) отмечает
       главный скачок; всё строго до него отбрасывается.
    3. В оставшейся части (включая значение на индексе скачка) ищется
       наименьшая разность соседей (при равенстве - самая ранняя).
    4. Возвращается первое значение этой пары.

    Результат всегда является элементом входной последовательности.

    Граничные случаи:
    - одна оценка: возвращается она сама;
    - две оценки: скачок и пара вынужденно совпадают, возвращается первая;
    - NaN (форманта не найдена при данном потолке): разности с NaN
      не участвуют в поиске; если конечных разностей нет, возвращается
      первое конечное значение или NaN.

    Args:
        sequence: Оценки частоты (Гц) по возрастанию потолка

    Returns:
        Выбранная частота в Гц
    """
    values = np.asarray(sequence, dtype=float)
    if values.ndim != 1:
        raise ValueError(f"Ожидается одномерная последовательность, получено измерений: {values.ndim}")
    if values.size == 0:
        raise ValueError("Пустая последовательность оценок")
    if values.size == 1:
        return float(values[0])

    diffs = np.abs(np.diff(values))
    max_idx = _first_index(diffs, largest=True)
    if max_idx is None:
        finite = values[np.isfinite(values)]
        return float(finite[0]) if finite.size else float("nan")

    trimmed = values[max_idx:]
    min_idx = _first_index(np.abs(np.diff(trimmed)), largest=False)
    # Первая разность trimmed совпадает с конечной разностью скачка, поэтому min_idx определён
    return float(trimmed[min_idx])


def select_sweep(sweep: SweepResult) -> np.ndarray:
    """
    Применяет выбор устойчивой оценки к каждой паре (форманта, фрейм).

    Args:
        sweep: Результат развёртки сегмента

    Returns:
        Массив формы (formant_count, frame_count) с выбранными частотами
    """
    chosen = np.full((sweep.formant_count, sweep.frame_count), np.nan)
    for formant in range(sweep.formant_count):
        for frame in range(sweep.frame_count):
            chosen[formant, frame] = select_stable_estimate(sweep.sequence(formant, frame))

    log.debug("Выбраны устойчивые оценки: %s формант x %s фреймов", sweep.formant_count, sweep.frame_count)
    return chosen
