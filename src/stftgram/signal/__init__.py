"""Signal processing utilities."""

from .stft import (
    STFTOptions,
    STFTResult,
    WindowType,
    as_signal,
    calc_stft,
    compute_axes,
    discard_over_nyquist,
    frame_signal,
    get_analysis_window,
    resolve_stft_options,
    windowed_dft,
)

__all__ = [
    "STFTOptions",
    "STFTResult",
    "WindowType",
    "as_signal",
    "calc_stft",
    "compute_axes",
    "discard_over_nyquist",
    "frame_signal",
    "get_analysis_window",
    "resolve_stft_options",
    "windowed_dft",
]
