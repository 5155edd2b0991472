"""Audio file input."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import soundfile as sf

from .errors import IOFailureError


def load_wav(path: str | Path) -> tuple[np.ndarray, int]:
    """Load an audio file as ``(n_samples, n_channel)`` float samples and its rate."""
    wav_path = Path(path)
    try:
        audio, sample_rate = sf.read(wav_path, always_2d=True, dtype="float64")
    except (RuntimeError, OSError) as exc:
        raise IOFailureError(f"Failed to read audio file {wav_path}: {exc}") from exc
    return np.asarray(audio), int(sample_rate)
