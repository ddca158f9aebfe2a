"""Конфигурация formant_sweep через переменные окружения.

Значения по умолчанию для параметров развёртки берутся
из constants.py и могут быть переопределены через .env
или переменные окружения с префиксом ``FS_``.

Использование::

    from formant_sweep.config import settings

    settings.ceiling_high            # 6000.0
    settings.sweep_parameters()      # SweepParameters(...)
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from formant_sweep.constants import (
    CEILING_HIGH_HZ,
    CEILING_LOW_HZ,
    CEILING_STEP_HZ,
    DEFAULT_ESTIMATOR,
    FORMANT_COUNT,
    FRAME_STEP_S,
    GRADIO_SERVER_NAME,
    GRADIO_SERVER_PORT,
    INTERVAL_MARGIN_S,
    LOGS_DIR,
    PRE_EMPHASIS_HZ,
    TIER_INDEX,
    WINDOW_LENGTH_S,
)


class Settings(BaseSettings):
    """Настройки приложения formant_sweep."""

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        env_prefix='FS_',
        extra='ignore',
    )

    # ── Пути ─────────────────────────────────────
    logs_dir: Path = LOGS_DIR

    # ── Логирование ──────────────────────────────
    log_level: str = 'INFO'
    log_to_file: bool = True

    # ── Развёртка потолка ────────────────────────
    ceiling_low: float = CEILING_LOW_HZ
    ceiling_high: float = CEILING_HIGH_HZ
    ceiling_step: float = CEILING_STEP_HZ

    # ── Анализ ───────────────────────────────────
    formant_count: int = FORMANT_COUNT
    frame_step: float = FRAME_STEP_S
    window_length: float = WINDOW_LENGTH_S
    pre_emphasis: float = PRE_EMPHASIS_HZ
    estimator: str = DEFAULT_ESTIMATOR

    # ── Разметка ─────────────────────────────────
    tier_index: int = TIER_INDEX
    interval_margin: float = INTERVAL_MARGIN_S

    # ── Производительность ───────────────────────
    workers: int = 1
    segment_timeout: float | None = None

    # ── Gradio UI ────────────────────────────────
    gradio_host: str = GRADIO_SERVER_NAME
    gradio_port: int = GRADIO_SERVER_PORT

    def sweep_parameters(self, **overrides):
        """Собирает SweepParameters из настроек с необязательными переопределениями.

        Параметры не проверяются здесь: вызовите ``validate()`` перед прогоном.
        """
        from formant_sweep.models.types import SweepParameters

        values = {
            'ceiling_low': self.ceiling_low,
            'ceiling_high': self.ceiling_high,
            'ceiling_step': self.ceiling_step,
            'formant_count': self.formant_count,
            'frame_step': self.frame_step,
            'window_length': self.window_length,
            'pre_emphasis': self.pre_emphasis,
            'interval_margin': self.interval_margin,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return SweepParameters(**values)


settings = Settings()
