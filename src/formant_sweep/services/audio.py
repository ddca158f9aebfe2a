import os

import librosa
import numpy as np

from formant_sweep.constants import INTERVAL_MARGIN_S, SUPPORTED_EXTENSIONS
from formant_sweep.errors import EmptySegment
from formant_sweep.log import setup_logger
from formant_sweep.models.types import Interval, Recording, Segment

# ──────────────── Логгер ────────────────
log = setup_logger("audio")


def load_recording(file_path: str, sample_rate: int | None = None) -> Recording:
    """
    Загружает запись как моно-сигнал.

    Args:
        file_path: Путь к аудиофайлу
        sample_rate: Частота дискретизации; None сохраняет исходную

    Returns:
        Recording
    """
    ext = os.path.splitext(file_path)[-1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValueError(f"Неподдерживаемый формат файла: {ext}. Поддерживаются: {sorted(SUPPORTED_EXTENSIONS)}")

    y, sr = librosa.load(file_path, sr=sample_rate, mono=True)
    recording = Recording(samples=y.astype(np.float64), sample_rate=int(sr), path=file_path)
    log.info("Загружен %s: %.2f с, %s Гц", file_path, recording.duration, recording.sample_rate)
    return recording


def whole_segment(recording: Recording) -> Segment:
    """Сегмент на всю запись, без метки."""
    return Segment(
        samples=recording.samples,
        sample_rate=recording.sample_rate,
        start=0.0,
        end=recording.duration,
        label=None,
    )


def extract_segment(recording: Recording, interval: Interval, margin: float = INTERVAL_MARGIN_S) -> Segment:
    """
    Вырезает интервал с полями ``margin`` с каждой стороны, в пределах записи.

    Args:
        recording: Исходная запись
        interval: Размеченный интервал
        margin: Поле в секундах

    Returns:
        Segment с абсолютными ``start``/``end`` (уже с полями)

    Raises:
        EmptySegment: После обрезки по границам записи сегмент пуст
    """
    start = max(0.0, interval.start - margin)
    end = min(recording.duration, interval.end + margin)

    first = int(round(start * recording.sample_rate))
    last = int(round(end * recording.sample_rate))
    if last <= first:
        raise EmptySegment(
            f"Интервал {interval.label!r} ({interval.start:.3f}-{interval.end:.3f} с) пуст после добавления полей"
        )

    return Segment(
        samples=recording.samples[first:last],
        sample_rate=recording.sample_rate,
        start=first / float(recording.sample_rate),
        end=last / float(recording.sample_rate),
        label=interval.label,
    )
