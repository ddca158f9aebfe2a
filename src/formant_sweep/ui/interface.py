import os
import tempfile

import gradio as gr

from formant_sweep.config import settings
from formant_sweep.constants import ESTIMATORS
from formant_sweep.errors import ConfigurationError
from formant_sweep.log import setup_logger
from formant_sweep.services.batch import analyze_files
from formant_sweep.services.export import table_to_text, write_table
from formant_sweep.ui.visualization import figure_to_png, plot_tracks

# ──────────────── Логгер ────────────────
log = setup_logger("interface")


def process_files(audio_path, textgrid_path, ceiling_low, ceiling_high, ceiling_step,
                  frame_step, tier_index, estimator):
    if not audio_path:
        return "⚠️ Загрузите аудиофайл.", "", None, None

    try:
        params = settings.sweep_parameters(
            ceiling_low=float(ceiling_low),
            ceiling_high=float(ceiling_high),
            ceiling_step=float(ceiling_step),
            frame_step=float(frame_step),
        ).validate()
        result = analyze_files(
            audio_path, params,
            textgrid_path=textgrid_path or None,
            tier_index=int(tier_index),
            estimator=estimator,
            workers=settings.workers,
            timeout=settings.segment_timeout,
        )
    except ConfigurationError as exc:
        return f"⚠️ Ошибка параметров: {exc}", "", None, None
    except Exception as exc:
        log.exception("Неожиданная ошибка при анализе %s", audio_path)
        return "⚠️ Произошла ошибка при обработке файлов.", str(exc), None, None

    fd, table_path = tempfile.mkstemp(suffix=".tsv")
    os.close(fd)
    write_table(result.table, table_path)

    fd, plot_path = tempfile.mkstemp(suffix=".png")
    os.close(fd)
    figure_to_png(plot_tracks(result.table), plot_path)

    details = "\n".join(
        f"⏭️ {f.label!r} {f.start:.3f}-{f.end:.3f} с: {f.reason}" for f in result.failures
    )
    summary = f"✅ Строк: {len(result.table)}, пропущено сегментов: {len(result.failures)}"
    return summary, details + "\n\n" + table_to_text(result.table), table_path, plot_path


def launch_ui():
    description_text = (
        "🎧 <b>Аудио:</b> .wav, .flac, .mp3, .ogg<br>"
        "🏷️ <b>Разметка:</b> TextGrid (необязательно; без неё анализируется вся запись)<br>"
        "📈 <b>Метод:</b> развёртка потолка формант и выбор устойчивой оценки в каждом фрейме"
    )

    with gr.Blocks(title="Устойчивые форманты") as demo:
        gr.Markdown(f"### 🎙️ Устойчивые форманты (formant_sweep)\n{description_text}", elem_id="intro")

        with gr.Row():
            audio = gr.Audio(label="🔈 Запись", type="filepath")
            textgrid = gr.File(label="🏷️ TextGrid", type="filepath")

        with gr.Row():
            ceiling_low = gr.Number(label="Нижний потолок, Гц", value=settings.ceiling_low)
            ceiling_high = gr.Number(label="Верхний потолок, Гц", value=settings.ceiling_high)
            ceiling_step = gr.Number(label="Шаг потолка, Гц", value=settings.ceiling_step)
            frame_step = gr.Number(label="Шаг фреймов, с", value=settings.frame_step)
            tier_index = gr.Number(label="Слой", value=settings.tier_index, precision=0)
            estimator = gr.Dropdown(label="Оценщик", choices=list(ESTIMATORS), value=settings.estimator)

        with gr.Row():
            run_button = gr.Button("🔍 Анализ", interactive=True)
            clear_button = gr.Button("🧹 Очистить", interactive=True)

        with gr.Row():
            result = gr.Textbox(label="Результат")
        with gr.Row():
            log_output = gr.Textbox(label="Таблица и пропуски", lines=12)
        with gr.Row():
            table_file = gr.File(label="Таблица (TSV)")
            visualization = gr.Image(label="Форманты", type="filepath")

        run_button.click(
            fn=process_files,
            inputs=[audio, textgrid, ceiling_low, ceiling_high, ceiling_step, frame_step, tier_index, estimator],
            outputs=[result, log_output, table_file, visualization]
        )

        clear_button.click(
            fn=lambda: ("", "", None, None),
            inputs=[],
            outputs=[result, log_output, table_file, visualization]
        )

    demo.launch(server_name=settings.gradio_host, server_port=settings.gradio_port, share=False, max_threads=1)
