"""Все константы проекта formant_sweep.

Единственный источник правды для значений по умолчанию
параметров развёртки потолка, анализа и экспорта.
"""

from pathlib import Path

# ── Пути ─────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = BASE_DIR / 'logs'

# ── Аудио ────────────────────────────────────────
SUPPORTED_EXTENSIONS = frozenset(
    {'.wav', '.mp3', '.m4a', '.flac', '.ogg', '.aiff'},
)
INTERVAL_MARGIN_S = 0.025

# ── Разметка (TextGrid) ──────────────────────────
TIER_INDEX = 1

# ── Развёртка потолка ────────────────────────────
CEILING_LOW_HZ = 3500.0
CEILING_HIGH_HZ = 6000.0
CEILING_STEP_HZ = 50.0

# ── Спектральный анализ ──────────────────────────
FORMANT_COUNT = 5
FRAME_STEP_S = 0.005
WINDOW_LENGTH_S = 0.025
PRE_EMPHASIS_HZ = 50.0

# Границы для LPC-оценщика
LPC_MIN_FORMANT_HZ = 50.0
LPC_EDGE_MARGIN_HZ = 50.0
LPC_MAX_BANDWIDTH_HZ = 1000.0
LPC_SILENCE_RMS = 1e-6

# ── Оценщики ─────────────────────────────────────
ESTIMATORS = ('praat', 'lpc')
DEFAULT_ESTIMATOR = 'praat'

# ── Экспорт ──────────────────────────────────────
UNDEFINED_VALUE = '--undefined--'
TIME_PRECISION = 6
FREQUENCY_PRECISION = 3

# ── Gradio UI ────────────────────────────────────
GRADIO_SERVER_NAME = '0.0.0.0'
GRADIO_SERVER_PORT = 7860
