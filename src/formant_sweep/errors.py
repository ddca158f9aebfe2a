"""Исключения formant_sweep."""


class FormantSweepError(Exception):
    """Базовое исключение пакета."""


class ConfigurationError(FormantSweepError, ValueError):
    """Некорректные параметры запуска. Прерывает весь прогон до начала работы."""


class EstimatorInconsistency(FormantSweepError):
    """Оценщик вернул разную сетку фреймов для разных потолков одного сегмента."""

    def __init__(self, ceiling: float, expected: int, actual: int):
        self.ceiling = ceiling
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'Потолок {ceiling:g} Гц: получено {actual} фреймов, '
            f'ожидалось {expected} (по базовому вызову)'
        )


class EmptySegment(FormantSweepError):
    """Сегмент пуст после добавления полей или не удалось извлечь аудио."""
