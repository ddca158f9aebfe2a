import os
import sys
from pathlib import Path

# Тесты не пишут лог-файлы в рабочую директорию
os.environ.setdefault("FS_LOG_TO_FILE", "false")

TESTS_DIR = Path(__file__).resolve().parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

import numpy as np
import pytest

from audio_utils import FakeEstimator, ladder, synth_vowel
from formant_sweep.models.types import Recording


@pytest.fixture
def fake_estimator():
    return FakeEstimator(ladder)


@pytest.fixture
def silent_recording():
    sr = 8000
    return Recording(samples=np.zeros(sr * 2), sample_rate=sr)


@pytest.fixture
def vowel_recording():
    sr = 16000
    return Recording(samples=synth_vowel(sr=sr), sample_rate=sr)
