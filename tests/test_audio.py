from pathlib import Path

import numpy as np
import pytest
import soundfile as sf

from stftgram import IOFailureError, load_wav


def test_load_wav_returns_samples_by_channels(tmp_path: Path) -> None:
    data = np.random.default_rng(0).uniform(-0.5, 0.5, size=(400, 2))
    path = tmp_path / "stereo.wav"
    sf.write(path, data, 8000, subtype="FLOAT")

    audio, sample_rate = load_wav(path)

    assert sample_rate == 8000
    assert audio.shape == (400, 2)
    np.testing.assert_allclose(audio, data, atol=1e-6)


def test_load_wav_keeps_mono_two_dimensional(tmp_path: Path) -> None:
    path = tmp_path / "mono.wav"
    sf.write(path, np.zeros(100), 16000)

    audio, _ = load_wav(path)

    assert audio.shape == (100, 1)


def test_load_wav_missing_file(tmp_path: Path) -> None:
    with pytest.raises(IOFailureError):
        load_wav(tmp_path / "missing.wav")


def test_load_wav_rejects_non_audio(tmp_path: Path) -> None:
    path = tmp_path / "notes.wav"
    path.write_text("this is not audio", encoding="utf-8")
    with pytest.raises(IOFailureError):
        load_wav(path)
