import matplotlib.pyplot as plt
import numpy as np

from formant_sweep.models.types import ResultTable, SweepResult


def plot_sweep(sweep: SweepResult, chosen: np.ndarray, frame: int):
    """
    Показывает кандидатов каждой форманты в зависимости от потолка для одного фрейма.

    Args:
        sweep: Результат развёртки сегмента
        chosen: Выбранные значения (formant_count, frame_count)
        frame: Номер фрейма (с 0)

    Returns:
        Фигура matplotlib
    """
    ceilings = sweep.ceilings.values
    fig, ax = plt.subplots(figsize=(10, 6))

    for formant in range(sweep.formant_count):
        seq = sweep.sequence(formant, frame)
        line, = ax.plot(ceilings, seq, marker='.', label=f'F{formant + 1}')

        value = chosen[formant, frame]
        if np.isfinite(value):
            # Отмечаем первую точку развёртки с выбранным значением
            hits = np.flatnonzero(seq == value)
            if hits.size:
                ax.plot(ceilings[hits[0]], value, marker='o', markersize=10,
                        markerfacecolor='none', color=line.get_color())

    ax.set_xlabel('Потолок (Гц)')
    ax.set_ylabel('Частота (Гц)')
    ax.set_title(f'Развёртка потолка, фрейм {frame} ({sweep.times[frame]:.3f} с)')
    ax.legend()
    fig.tight_layout()
    return fig


def plot_tracks(table: ResultTable):
    """
    Динамика выбранных формант во времени.

    Returns:
        Фигура matplotlib
    """
    fig, ax = plt.subplots(figsize=(12, 6))

    if len(table) == 0:
        ax.text(0.5, 0.5, 'Нет данных о формантах', ha='center', va='center', transform=ax.transAxes)
        return fig

    times = np.array([row.time for row in table])
    values = np.array([row.formants for row in table], dtype=float)
    for formant in range(values.shape[1]):
        ax.plot(times, values[:, formant], '.', markersize=3, label=f'F{formant + 1}')

    ax.set_xlabel('Время (с)')
    ax.set_ylabel('Частота (Гц)')
    ax.set_title('Устойчивые оценки формант')
    ax.legend()
    fig.tight_layout()
    return fig


def figure_to_png(fig, path) -> str:
    fig.savefig(path, format='png')
    plt.close(fig)
    return str(path)
