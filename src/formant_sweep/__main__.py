"""Точка входа formant_sweep как модуля."""

import argparse
import importlib.util
import sys

from formant_sweep.config import settings
from formant_sweep.constants import ESTIMATORS
from formant_sweep.errors import ConfigurationError
from formant_sweep.log import setup_logger

log = setup_logger('main')

REQUIRED_PACKAGES = {
    'praat': ['numpy', 'parselmouth', 'tgt', 'librosa'],
    'lpc': ['numpy', 'scipy', 'librosa', 'tgt'],
}


def check_environment(estimator: str, ui: bool = False) -> bool:
    """Проверяет наличие необходимых зависимостей."""
    required = list(REQUIRED_PACKAGES.get(estimator, REQUIRED_PACKAGES['praat']))
    if ui:
        required += ['gradio', 'matplotlib']

    missing = [
        pkg for pkg in required
        if importlib.util.find_spec(pkg) is None
    ]
    if missing:
        log.error(
            'Не установлены необходимые пакеты: %s',
            missing,
        )
        return False
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='formant_sweep',
        description='Устойчивая оценка формант развёрткой потолка.',
    )
    parser.add_argument('audio', nargs='?', help='аудиофайл')
    parser.add_argument('-t', '--textgrid', help='TextGrid с размеченными интервалами')
    parser.add_argument('--tier', type=int, default=settings.tier_index, help='номер слоя (с 1)')
    parser.add_argument('--ceiling-low', type=float, default=settings.ceiling_low)
    parser.add_argument('--ceiling-high', type=float, default=settings.ceiling_high)
    parser.add_argument('--step', type=float, default=settings.ceiling_step, help='шаг потолка, Гц')
    parser.add_argument('--frame-step', type=float, default=settings.frame_step, help='шаг фреймов, с')
    parser.add_argument('--estimator', choices=ESTIMATORS, default=settings.estimator)
    parser.add_argument('--workers', type=int, default=settings.workers)
    parser.add_argument('--timeout', type=float, default=settings.segment_timeout,
                        help='таймаут на сегмент, с')
    parser.add_argument('-o', '--output', help='файл результата (.tsv / .csv); по умолчанию stdout')
    parser.add_argument('--plot', help='сохранить график формант в PNG')
    parser.add_argument('--ui', action='store_true', help='запустить веб-интерфейс')
    return parser


def main(argv: list[str] | None = None) -> int:
    """Главная функция запуска."""
    args = build_parser().parse_args(argv)

    if not check_environment(args.estimator, ui=args.ui or bool(args.plot)):
        log.critical(
            'Приложение не запущено из-за ошибок окружения.',
        )
        return 1

    if args.ui:
        from formant_sweep.ui.interface import launch_ui
        launch_ui()
        return 0

    if not args.audio:
        log.error('Не указан аудиофайл')
        return 2

    from formant_sweep.services.batch import analyze_files
    from formant_sweep.services.export import table_to_text, write_table

    try:
        params = settings.sweep_parameters(
            ceiling_low=args.ceiling_low,
            ceiling_high=args.ceiling_high,
            ceiling_step=args.step,
            frame_step=args.frame_step,
        ).validate()
        result = analyze_files(
            args.audio, params,
            textgrid_path=args.textgrid,
            tier_index=args.tier,
            estimator=args.estimator,
            workers=args.workers,
            timeout=args.timeout,
        )
    except ConfigurationError as exc:
        log.error('Ошибка параметров: %s', exc)
        return 2

    for failure in result.failures:
        log.warning(
            'Пропущен сегмент %s (%r, %.3f-%.3f с): %s',
            failure.index, failure.label, failure.start, failure.end, failure.reason,
        )

    if args.output:
        write_table(result.table, args.output)
    else:
        sys.stdout.write(table_to_text(result.table))

    if args.plot:
        from formant_sweep.ui.visualization import figure_to_png, plot_tracks
        figure_to_png(plot_tracks(result.table), args.plot)

    return 0


if __name__ == '__main__':
    sys.exit(main())
