"""
Модуль: batch.py
Описание: Пакетный прогон по размеченным интервалам записи.
Каждый сегмент обрабатывается независимо: развёртка потолка, выбор
устойчивых оценок, сборка строк. Ошибка сегмента исключает только его.
"""

import math
import queue
import threading
import time
from collections import deque
from typing import Optional

from formant_sweep.errors import EmptySegment, FormantSweepError
from formant_sweep.log import setup_logger
from formant_sweep.models.formant import aggregate_frames, sample_sweep, select_sweep
from formant_sweep.models.formant.estimator import FormantEstimator, get_estimator
from formant_sweep.models.types import (
    BatchResult,
    Interval,
    Recording,
    ResultRow,
    ResultTable,
    Segment,
    SegmentFailure,
    SweepParameters,
)
from formant_sweep.services.annotation import read_intervals
from formant_sweep.services.audio import extract_segment, load_recording, whole_segment

log = setup_logger("batch")


def analyze_segment(segment: Segment, estimator: FormantEstimator, params: SweepParameters) -> list[ResultRow]:
    """
    Полный конвейер для одного сегмента.

    Args:
        segment: Сегмент аудио
        estimator: Оценщик кандидатов
        params: Проверенные параметры прогона

    Returns:
        Строки сегмента; время фреймов в секундах исходной записи
    """
    sweep = sample_sweep(
        segment, estimator, params.ceilings(),
        frame_step=params.frame_step,
        formant_count=params.formant_count,
        window=params.window_length,
        preemphasis=params.pre_emphasis,
    )
    chosen = select_sweep(sweep)
    return aggregate_frames(segment.label, segment.start + sweep.times, chosen)


def _failure(index: int, segment_or_interval, reason: str) -> SegmentFailure:
    return SegmentFailure(
        index=index,
        label=segment_or_interval.label,
        start=segment_or_interval.start,
        end=segment_or_interval.end,
        reason=reason,
    )


def _run_one(index: int, segment: Segment, estimator: FormantEstimator,
             params: SweepParameters) -> list[ResultRow] | SegmentFailure:
    try:
        return analyze_segment(segment, estimator, params)
    except FormantSweepError as exc:
        log.warning("Сегмент %s (%r) пропущен: %s", index, segment.label, exc)
        return _failure(index, segment, str(exc))
    except Exception as exc:
        log.exception("Ошибка оценщика в сегменте %s (%r)", index, segment.label)
        return _failure(index, segment, f"{type(exc).__name__}: {exc}")


def _start(index: int, segment: Segment, estimator: FormantEstimator, params: SweepParameters,
           done: queue.Queue) -> None:
    # Поток-демон: зависший оценщик не держит процесс после завершения прогона
    thread = threading.Thread(
        target=lambda: done.put((index, _run_one(index, segment, estimator, params))),
        name=f"segment-{index}",
        daemon=True,
    )
    thread.start()


def _process(jobs: list[tuple[int, Segment]], estimator: FormantEstimator, params: SweepParameters,
             workers: int, timeout: Optional[float]) -> dict[int, list[ResultRow] | SegmentFailure]:
    """
    Выполняет сегменты не более чем в ``workers`` потоках одновременно.

    Таймаут отсчитывается от момента запуска сегмента, а не от постановки
    в очередь. Прерванный сегмент освобождает место для следующего; его
    поток не останавливается, поздний результат отбрасывается.
    """
    if workers <= 1 and timeout is None:
        return {index: _run_one(index, segment, estimator, params) for index, segment in jobs}

    outcomes = {}
    pending = deque(jobs)
    running: dict[int, tuple[Segment, float]] = {}
    done: queue.Queue = queue.Queue()

    while pending or running:
        while pending and len(running) < max(1, workers):
            index, segment = pending.popleft()
            deadline = time.monotonic() + timeout if timeout is not None else math.inf
            running[index] = (segment, deadline)
            _start(index, segment, estimator, params, done)

        wait = None
        if timeout is not None:
            wait = max(0.0, min(deadline for _, deadline in running.values()) - time.monotonic())
        try:
            index, outcome = done.get(timeout=wait)
        except queue.Empty:
            now = time.monotonic()
            for index, (segment, deadline) in list(running.items()):
                if deadline <= now:
                    del running[index]
                    log.warning("Сегмент %s (%r) прерван по таймауту %.1f с", index, segment.label, timeout)
                    outcomes[index] = _failure(index, segment, f"таймаут {timeout:g} с")
            continue

        # Результат уже прерванного сегмента не учитывается
        if running.pop(index, None) is not None:
            outcomes[index] = outcome
    return outcomes


def run_batch(recording: Recording, intervals: list[Interval], estimator: FormantEstimator,
              params: SweepParameters, workers: int = 1, timeout: Optional[float] = None) -> BatchResult:
    """
    Анализирует каждый размеченный интервал и склеивает строки в порядке интервалов.

    Интервалы с пустой меткой пропускаются. Сегменты, пустые после
    добавления полей или упавшие при анализе, попадают в ``failures``
    и не дают ни одной строки.

    Args:
        recording: Исходная запись
        intervals: Интервалы разметки
        estimator: Оценщик кандидатов
        params: Параметры прогона (проверяются до начала работы)
        workers: Число параллельных потоков
        timeout: Таймаут на сегмент в секундах или None

    Returns:
        BatchResult с таблицей и списком отказов
    """
    params.validate()
    result = BatchResult(table=ResultTable(labeled=True, formant_count=params.formant_count))

    jobs = []
    for index, interval in enumerate(intervals):
        if not interval.label.strip():
            continue
        try:
            jobs.append((index, extract_segment(recording, interval, params.interval_margin)))
        except EmptySegment as exc:
            log.warning("Интервал %s пропущен: %s", index, exc)
            result.failures.append(_failure(index, interval, str(exc)))

    log.info("Пакетный прогон: сегментов %s, потоков %s", len(jobs), workers)
    outcomes = _process(jobs, estimator, params, workers, timeout)

    for index, _ in jobs:
        outcome = outcomes[index]
        if isinstance(outcome, SegmentFailure):
            result.failures.append(outcome)
        else:
            result.table.extend(outcome)

    result.failures.sort(key=lambda f: f.index)
    log.info("Готово: строк %s, пропущено сегментов %s", len(result.table), len(result.failures))
    return result


def run_recording(recording: Recording, estimator: FormantEstimator, params: SweepParameters) -> BatchResult:
    """
    Анализ всей записи как одного сегмента без метки.

    Returns:
        BatchResult; таблица без столбца label
    """
    params.validate()
    result = BatchResult(table=ResultTable(labeled=False, formant_count=params.formant_count))
    outcome = _run_one(0, whole_segment(recording), estimator, params)
    if isinstance(outcome, SegmentFailure):
        result.failures.append(outcome)
    else:
        result.table.extend(outcome)
    return result


def analyze_files(audio_path: str, params: SweepParameters, textgrid_path: Optional[str] = None,
                  tier_index: int = 1, estimator: str | FormantEstimator = "praat",
                  workers: int = 1, timeout: Optional[float] = None) -> BatchResult:
    """
    Загружает запись (и разметку, если задана) и выполняет прогон.

    Без TextGrid анализируется вся запись.
    """
    params.validate()
    if isinstance(estimator, str):
        estimator = get_estimator(estimator)

    intervals = read_intervals(textgrid_path, tier_index) if textgrid_path else None
    recording = load_recording(audio_path)
    if intervals is None:
        return run_recording(recording, estimator, params)
    return run_batch(recording, intervals, estimator, params, workers=workers, timeout=timeout)
