"""Структуры данных развёртки потолка и таблицы результатов."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterator, Optional

import numpy as np

from formant_sweep.constants import (
    CEILING_HIGH_HZ,
    CEILING_LOW_HZ,
    CEILING_STEP_HZ,
    FORMANT_COUNT,
    FRAME_STEP_S,
    INTERVAL_MARGIN_S,
    PRE_EMPHASIS_HZ,
    WINDOW_LENGTH_S,
)
from formant_sweep.errors import ConfigurationError

# Допуск при проверке кратности шага развёртки
_STEP_TOLERANCE = 1e-6


@dataclass(frozen=True)
class Interval:
    """Размеченный интервал аннотации (секунды исходной записи)."""

    label: str
    start: float
    end: float

    @property
    def duration(self) -> float:
        return self.end - self.start


@dataclass
class Recording:
    """Загруженная запись: моно-сигнал и частота дискретизации."""

    samples: np.ndarray
    sample_rate: int
    path: Optional[str] = None

    @property
    def duration(self) -> float:
        return len(self.samples) / float(self.sample_rate)


@dataclass
class Segment:
    """Фрагмент аудио, анализируемый независимо от остальных.

    ``start``/``end`` задают положение фрагмента (уже с полями)
    в исходной записи. ``label`` равен None в режиме анализа всей записи.
    """

    samples: np.ndarray
    sample_rate: int
    start: float = 0.0
    end: float = 0.0
    label: Optional[str] = None

    @property
    def duration(self) -> float:
        return len(self.samples) / float(self.sample_rate)


@dataclass(frozen=True)
class CeilingSeries:
    """Набор значений потолка: от ``low`` до ``high`` включительно с шагом ``step``."""

    low: float
    high: float
    step: float

    @property
    def count(self) -> int:
        if self.high == self.low:
            return 1
        return int(round((self.high - self.low) / self.step)) + 1

    @property
    def values(self) -> np.ndarray:
        # Умножение вместо накопления, чтобы последний элемент точно равнялся high
        return self.low + self.step * np.arange(self.count, dtype=float)

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[float]:
        return iter(float(v) for v in self.values)


@dataclass(frozen=True)
class EstimatedFrame:
    """Один фрейм оценщика: время центра и кандидаты в форманты по возрастанию."""

    time: float
    candidates: tuple[float, ...]


@dataclass
class SweepResult:
    """Результат развёртки для одного сегмента.

    ``values`` имеет форму (formant_count, frame_count, ceiling_count);
    последняя ось упорядочена по возрастанию потолка, базовый вызов первым.
    Отсутствующие кандидаты хранятся как NaN.
    """

    times: np.ndarray
    ceilings: CeilingSeries
    values: np.ndarray

    @property
    def formant_count(self) -> int:
        return self.values.shape[0]

    @property
    def frame_count(self) -> int:
        return self.values.shape[1]

    def sequence(self, formant: int, frame: int) -> np.ndarray:
        """Возвращает последовательность оценок для форманты (0 = F1) и фрейма.

        Массив доступен только для чтения.
        """
        seq = self.values[formant, frame]
        seq.flags.writeable = False
        return seq


@dataclass(frozen=True)
class ResultRow:
    """Строка результата: время фрейма и выбранные значения F1..Fn."""

    time: float
    formants: tuple[float, ...]
    label: Optional[str] = None

    def as_record(self, labeled: bool = True) -> dict:
        record = {}
        if labeled:
            record['label'] = self.label
        record['time'] = self.time
        for i, value in enumerate(self.formants, start=1):
            record[f'f{i}'] = value
        return record


def formant_columns(count: int = FORMANT_COUNT) -> tuple[str, ...]:
    return tuple(f'f{i}' for i in range(1, count + 1))


@dataclass
class ResultTable:
    """Упорядоченные строки результата по всем сегментам прогона."""

    labeled: bool = True
    formant_count: int = FORMANT_COUNT
    rows: list[ResultRow] = field(default_factory=list)

    @property
    def columns(self) -> tuple[str, ...]:
        head = ('label', 'time') if self.labeled else ('time',)
        return head + formant_columns(self.formant_count)

    def extend(self, rows: list[ResultRow]) -> None:
        self.rows.extend(rows)

    def to_records(self) -> list[dict]:
        return [row.as_record(self.labeled) for row in self.rows]

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[ResultRow]:
        return iter(self.rows)


@dataclass(frozen=True)
class SweepParameters:
    """Параметры одного прогона. Проверяются ``validate()`` до первого вызова оценщика."""

    ceiling_low: float = CEILING_LOW_HZ
    ceiling_high: float = CEILING_HIGH_HZ
    ceiling_step: float = CEILING_STEP_HZ
    formant_count: int = FORMANT_COUNT
    frame_step: float = FRAME_STEP_S
    window_length: float = WINDOW_LENGTH_S
    pre_emphasis: float = PRE_EMPHASIS_HZ
    interval_margin: float = INTERVAL_MARGIN_S

    def validate(self) -> 'SweepParameters':
        if self.ceiling_low <= 0:
            raise ConfigurationError(f'Нижний потолок должен быть положительным: {self.ceiling_low}')
        if self.ceiling_high < self.ceiling_low:
            raise ConfigurationError(
                f'Верхний потолок {self.ceiling_high} меньше нижнего {self.ceiling_low}'
            )
        if self.ceiling_step <= 0:
            raise ConfigurationError(f'Шаг потолка должен быть положительным: {self.ceiling_step}')
        if self.frame_step <= 0:
            raise ConfigurationError(f'Шаг фреймов должен быть положительным: {self.frame_step}')
        if self.window_length <= 0:
            raise ConfigurationError(f'Длина окна должна быть положительной: {self.window_length}')
        if self.formant_count < 1:
            raise ConfigurationError(f'Число формант должно быть не меньше 1: {self.formant_count}')
        if self.interval_margin < 0:
            raise ConfigurationError(f'Поле интервала не может быть отрицательным: {self.interval_margin}')

        steps = (self.ceiling_high - self.ceiling_low) / self.ceiling_step
        if not math.isclose(steps, round(steps), abs_tol=_STEP_TOLERANCE):
            raise ConfigurationError(
                f'Диапазон {self.ceiling_low}..{self.ceiling_high} Гц '
                f'не кратен шагу {self.ceiling_step} Гц'
            )
        return self

    def ceilings(self) -> CeilingSeries:
        return CeilingSeries(self.ceiling_low, self.ceiling_high, self.ceiling_step)


@dataclass(frozen=True)
class SegmentFailure:
    """Сегмент, исключённый из таблицы, и причина исключения."""

    index: int
    label: Optional[str]
    start: float
    end: float
    reason: str


@dataclass
class BatchResult:
    table: ResultTable
    failures: list[SegmentFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures
