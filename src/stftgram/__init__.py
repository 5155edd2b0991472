"""stftgram public API."""

from .audio import load_wav
from .configs import load_config
from .config_schema import SpectrogramJobConfig, load_job_config, parse_job_config
from .errors import InvalidArgumentError, IOFailureError, StftgramError
from .export import resolve_desktop_dir, save_figure_pdf
from .logging_utils import JsonlLogger, configure_logging
from .pipeline import SpectrogramJobResult, run_spectrogram_job
from .signal import (
    STFTOptions,
    STFTResult,
    WindowType,
    calc_stft,
    frame_signal,
    get_analysis_window,
)
from .visualization import plot_spectrogram

__all__ = [
    "calc_stft",
    "frame_signal",
    "get_analysis_window",
    "STFTOptions",
    "STFTResult",
    "WindowType",
    "plot_spectrogram",
    "save_figure_pdf",
    "resolve_desktop_dir",
    "load_wav",
    "run_spectrogram_job",
    "SpectrogramJobConfig",
    "SpectrogramJobResult",
    "load_job_config",
    "parse_job_config",
    "StftgramError",
    "InvalidArgumentError",
    "IOFailureError",
    "load_config",
    "JsonlLogger",
    "configure_logging",
]
