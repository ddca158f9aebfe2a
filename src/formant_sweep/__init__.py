"""formant_sweep: устойчивая оценка формант развёрткой потолка."""

__version__ = '0.1.0'
