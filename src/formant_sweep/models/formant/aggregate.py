"""Сборка выбранных значений формант в строки результата."""

from collections.abc import Sequence
from typing import Optional

import numpy as np

from formant_sweep.models.types import ResultRow


def aggregate_frames(label: Optional[str], frame_times: Sequence[float] | np.ndarray,
                     chosen: np.ndarray) -> list[ResultRow]:
    """
    Упаковывает выбранные значения в строки, по одной на фрейм, в порядке фреймов.

    Args:
        label: Метка сегмента или None (анализ всей записи)
        frame_times: Время каждого фрейма в секундах
        chosen: Массив (formant_count, frame_count) выбранных частот

    Returns:
        Список ResultRow
    """
    chosen = np.asarray(chosen, dtype=float)
    if chosen.ndim != 2:
        raise ValueError(f"Ожидается массив (форманты, фреймы), получено измерений: {chosen.ndim}")
    if chosen.shape[1] != len(frame_times):
        raise ValueError(
            f"Число фреймов не совпадает: времён {len(frame_times)}, значений {chosen.shape[1]}"
        )

    return [
        ResultRow(time=float(t), formants=tuple(float(v) for v in chosen[:, i]), label=label)
        for i, t in enumerate(frame_times)
    ]
