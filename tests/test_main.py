import pytest
import soundfile as sf
import tgt

from audio_utils import synth_vowel
from formant_sweep.__main__ import main


@pytest.fixture
def recording_files(tmp_path):
    sr = 16000
    wav_path = tmp_path / "vowel.wav"
    sf.write(str(wav_path), synth_vowel(sr=sr, duration=1.0), sr)

    grid = tgt.core.TextGrid()
    tier = tgt.core.IntervalTier(start_time=0.0, end_time=1.0, name="vowels")
    tier.add_interval(tgt.core.Interval(0.1, 0.3, "a"))
    tier.add_interval(tgt.core.Interval(0.5, 0.7, "a2"))
    grid.add_tier(tier)
    tg_path = tmp_path / "vowel.TextGrid"
    tgt.io.write_to_file(grid, str(tg_path), format="long")
    return wav_path, tg_path


def test_writes_table_for_intervals(recording_files, tmp_path):
    wav_path, tg_path = recording_files
    out = tmp_path / "formants.tsv"

    code = main([
        str(wav_path), "-t", str(tg_path), "--estimator", "lpc",
        "--ceiling-low", "4500", "--ceiling-high", "5000", "--step", "250",
        "--frame-step", "0.01", "-o", str(out),
    ])

    assert code == 0
    lines = out.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "label\ttime\tf1\tf2\tf3\tf4\tf5"
    labels = [line.split("\t")[0] for line in lines[1:]]
    assert labels and labels == sorted(labels, key=["a", "a2"].index)


def test_whole_recording_to_stdout(recording_files, capsys):
    wav_path, _ = recording_files

    code = main([str(wav_path), "--estimator", "lpc", "--ceiling-low", "5000", "--ceiling-high", "5000",
                 "--frame-step", "0.02"])

    assert code == 0
    assert capsys.readouterr().out.startswith("time\tf1")


def test_invalid_ceilings_exit_code(recording_files):
    wav_path, _ = recording_files
    code = main([str(wav_path), "--estimator", "lpc", "--ceiling-low", "5000", "--ceiling-high", "4000"])
    assert code == 2
