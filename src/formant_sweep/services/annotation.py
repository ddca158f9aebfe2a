"""
Чтение размеченных интервалов из TextGrid (Praat).
"""

from pathlib import Path

import tgt

from formant_sweep.constants import TIER_INDEX
from formant_sweep.errors import ConfigurationError
from formant_sweep.log import setup_logger
from formant_sweep.models.types import Interval

log = setup_logger("annotation")


def read_intervals(path: str | Path, tier_index: int = TIER_INDEX) -> list[Interval]:
    """
    Возвращает непустые интервалы указанного слоя в порядке времени.

    Args:
        path: Путь к файлу TextGrid
        tier_index: Номер слоя, начиная с 1 (как в Praat)

    Returns:
        Список Interval с непустыми метками
    """
    textgrid = tgt.io.read_textgrid(str(path), include_empty_intervals=False)
    tiers = textgrid.tiers

    if not 1 <= tier_index <= len(tiers):
        raise ConfigurationError(
            f"Слой {tier_index} отсутствует в {path}: всего слоёв {len(tiers)}"
        )

    tier = tiers[tier_index - 1]
    if not isinstance(tier, tgt.core.IntervalTier):
        raise ConfigurationError(f"Слой {tier_index} ({tier.name!r}) не является интервальным")

    intervals = []
    for item in tier.intervals:
        label = (item.text or "").strip()
        if not label:
            continue
        intervals.append(Interval(label=label, start=float(item.start_time), end=float(item.end_time)))

    intervals.sort(key=lambda it: it.start)
    log.info("Слой %s (%r): размеченных интервалов %s", tier_index, tier.name, len(intervals))
    return intervals
