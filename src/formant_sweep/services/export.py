"""Запись таблицы результатов в текстовый файл с разделителями."""

import csv
import io
import math
from pathlib import Path
from typing import Optional, TextIO

from formant_sweep.constants import FREQUENCY_PRECISION, TIME_PRECISION, UNDEFINED_VALUE
from formant_sweep.log import setup_logger
from formant_sweep.models.types import ResultTable

log = setup_logger("export")


def _format_number(value: float, precision: int) -> str:
    if value is None or math.isnan(value):
        return UNDEFINED_VALUE
    return f"{value:.{precision}f}"


def format_record(record: dict) -> dict:
    """Форматирует числа записи; NaN заменяется на ``--undefined--``."""
    formatted = {}
    for key, value in record.items():
        if key == 'label':
            formatted[key] = value if value is not None else ''
        elif key == 'time':
            formatted[key] = _format_number(value, TIME_PRECISION)
        else:
            formatted[key] = _format_number(value, FREQUENCY_PRECISION)
    return formatted


def write_rows(table: ResultTable, stream: TextIO, delimiter: str = '\t') -> None:
    writer = csv.DictWriter(stream, fieldnames=list(table.columns), delimiter=delimiter, lineterminator='\n')
    writer.writeheader()
    for record in table.to_records():
        writer.writerow(format_record(record))


def table_to_text(table: ResultTable, delimiter: str = '\t') -> str:
    buf = io.StringIO()
    write_rows(table, buf, delimiter)
    return buf.getvalue()


def write_table(table: ResultTable, path: str | Path, delimiter: Optional[str] = None) -> Path:
    """
    Сохраняет таблицу. Разделитель по умолчанию определяется расширением:
    ``.csv`` - запятая, иначе табуляция.

    Args:
        table: Таблица результатов
        path: Путь к файлу
        delimiter: Явный разделитель

    Returns:
        Путь к записанному файлу
    """
    path = Path(path)
    if delimiter is None:
        delimiter = ',' if path.suffix.lower() == '.csv' else '\t'

    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open('w', encoding='utf-8', newline='') as f:
        write_rows(table, f, delimiter)

    log.info("Таблица сохранена: %s (строк %s)", path, len(table))
    return path
