"""
Модуль: lpc.py
Описание: LPC-оценщик кандидатов в форманты на основе librosa.
Сигнал передискретизируется до удвоенного потолка, поэтому модель
не ищет резонансы выше потолка. Частоты и полосы берутся из корней
характеристического полинома.
"""

import librosa
import numpy as np
import scipy.signal

from formant_sweep.constants import (
    FORMANT_COUNT,
    LPC_EDGE_MARGIN_HZ,
    LPC_MAX_BANDWIDTH_HZ,
    LPC_MIN_FORMANT_HZ,
    LPC_SILENCE_RMS,
    PRE_EMPHASIS_HZ,
    WINDOW_LENGTH_S,
)
from formant_sweep.log import setup_logger
from formant_sweep.models.types import EstimatedFrame, Segment

log = setup_logger("formant_lpc")


def frame_times(duration: float, frame_step: float, window: float) -> np.ndarray:
    """
    Центры фреймов, симметрично размещённые внутри сегмента.

    Сетка зависит только от длительности, шага и окна, но не от потолка.

    Args:
        duration: Длительность сегмента в секундах
        frame_step: Шаг фреймов в секундах
        window: Длина окна в секундах

    Returns:
        Массив времён центров фреймов (может быть пустым)
    """
    if duration < window:
        return np.array([], dtype=float)
    count = int(np.floor((duration - window) / frame_step + 1e-9)) + 1
    first = duration / 2.0 - (count - 1) * frame_step / 2.0
    return first + frame_step * np.arange(count, dtype=float)


class LpcFormantEstimator:
    """
    Оценщик формант методом линейного предсказания.
    """

    def __init__(self, max_bandwidth: float = LPC_MAX_BANDWIDTH_HZ):
        """
        Args:
            max_bandwidth: Максимальная полоса резонанса, Гц (более широкие отбрасываются)
        """
        self.max_bandwidth = max_bandwidth

    def _prepare_signal(self, segment: Segment, ceiling: float, preemphasis: float) -> tuple[np.ndarray, float]:
        y = np.asarray(segment.samples, dtype=float)
        sr = float(segment.sample_rate)

        # Понижаем частоту до 2 * потолок; повышать частоту смысла нет
        target_sr = min(sr, 2.0 * ceiling)
        if target_sr < sr:
            y = librosa.resample(y, orig_sr=sr, target_sr=target_sr)
            sr = target_sr

        # Предыскажение первого порядка, начиная с частоты preemphasis
        alpha = np.exp(-2.0 * np.pi * preemphasis / sr)
        y = scipy.signal.lfilter([1.0, -alpha], [1.0], y)
        return y, sr

    def extract_formants_from_lpc(self, lpc_coeffs: np.ndarray, sample_rate: float, order: int) -> tuple[float, ...]:
        """
        Извлекает частоты формант из LPC-коэффициентов.

        Args:
            lpc_coeffs: LPC-коэффициенты
            sample_rate: Частота дискретизации сигнала, по которому они получены
            order: Максимальное число формант

        Returns:
            Частоты по возрастанию, не более ``order``
        """
        roots = np.roots(lpc_coeffs)

        # Только корни с положительной мнимой частью (комплексно-сопряженные пары)
        roots = roots[np.imag(roots) > 0]
        if len(roots) == 0:
            return ()

        freqs = np.arctan2(np.imag(roots), np.real(roots)) * sample_rate / (2 * np.pi)
        bandwidths = -np.log(np.abs(roots)) * sample_rate / np.pi

        nyquist = sample_rate / 2.0
        keep = (
            (freqs >= LPC_MIN_FORMANT_HZ)
            & (freqs <= nyquist - LPC_EDGE_MARGIN_HZ)
            & (bandwidths < self.max_bandwidth)
        )
        freqs = np.sort(freqs[keep])
        return tuple(float(f) for f in freqs[:order])

    def estimate(self, segment: Segment, ceiling: float, *, frame_step: float,
                 order: int = FORMANT_COUNT, window: float = WINDOW_LENGTH_S,
                 preemphasis: float = PRE_EMPHASIS_HZ) -> list[EstimatedFrame]:
        """
        Вычисляет кандидатов в форманты для каждого фрейма сегмента.

        Args:
            segment: Сегмент аудио
            ceiling: Потолок формант в Гц
            frame_step: Шаг фреймов в секундах
            order: Максимальное число формант
            window: Длина окна анализа в секундах
            preemphasis: Частота начала предыскажения в Гц

        Returns:
            Фреймы с кандидатами; для тихих фреймов кандидатов нет
        """
        times = frame_times(segment.duration, frame_step, window)
        if times.size == 0:
            return []

        y, sr = self._prepare_signal(segment, ceiling, preemphasis)
        n_window = max(int(round(window * sr)), 2 * order + 2)
        taper = np.hamming(n_window)
        # Запас нулей по краям, чтобы крайние окна имели полную длину
        padded = np.pad(y, (n_window, n_window))

        frames = []
        for t in times:
            begin = int(round(t * sr)) - n_window // 2 + n_window
            frame = padded[begin:begin + n_window] * taper

            candidates: tuple[float, ...] = ()
            if np.sqrt(np.mean(frame ** 2)) > LPC_SILENCE_RMS:
                try:
                    coeffs = librosa.lpc(frame, order=2 * order)
                except FloatingPointError:
                    log.debug("LPC не сошёлся на %.3f с, потолок %.0f Гц", t, ceiling)
                else:
                    if np.all(np.isfinite(coeffs)):
                        candidates = self.extract_formants_from_lpc(coeffs, sr, order)
            frames.append(EstimatedFrame(time=float(t), candidates=candidates))

        log.debug("LPC: потолок %.0f Гц, фреймов %s", ceiling, len(frames))
        return frames
