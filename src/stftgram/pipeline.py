"""Run a spectrogram job: read audio, compute the STFT, plot and export."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import matplotlib.pyplot as plt

from .audio import load_wav
from .config_schema import SpectrogramJobConfig, build_stft_options
from .errors import InvalidArgumentError
from .export import save_figure_pdf
from .logging_utils import JsonlLogger
from .signal import STFTOptions, STFTResult, calc_stft


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SpectrogramJobResult:
    """Outputs of :func:`run_spectrogram_job`."""

    input_path: Path
    sample_rate: int
    options: STFTOptions
    result: STFTResult
    pdf_path: Path | None = None


def run_spectrogram_job(
    config: SpectrogramJobConfig,
    *,
    input_path: str | Path | None = None,
) -> SpectrogramJobResult:
    """Execute one job.

    ``input_path`` takes precedence over ``config.input.path``. The figure is
    closed after export, so ``result.result.figure`` is only useful for
    inspection.
    """
    source = input_path if input_path is not None else config.input.path
    if not source:
        raise InvalidArgumentError("No input audio file given.")
    wav_path = Path(source)

    signal, sample_rate = load_wav(wav_path)
    LOGGER.info(
        "Loaded %s | samples=%d channels=%d fs=%d",
        wav_path,
        signal.shape[0],
        signal.shape[1],
        sample_rate,
    )
    options = build_stft_options(config, float(sample_rate))
    result = calc_stft(signal, options)
    LOGGER.info(
        "Spectrogram | bins=%d frames=%d channels=%d",
        *result.spectrogram.shape,
    )

    pdf_path: Path | None = None
    if result.has_figure:
        try:
            if config.export.enabled:
                pdf_path = save_figure_pdf(
                    result.figure,
                    config.export.file_name,
                    output_dir=config.export.output_dir,
                )
        finally:
            plt.close(result.figure)

    if config.runtime.summary_path:
        JsonlLogger(config.runtime.summary_path).write(
            {
                "input": str(wav_path),
                "sample_rate": sample_rate,
                "window_length": options.window_length,
                "shift_length": options.shift_length,
                "window_type": options.window_type.value,
                "emit_full_spectrum": options.emit_full_spectrum,
                "spectrogram_shape": list(result.spectrogram.shape),
                "pdf": str(pdf_path) if pdf_path is not None else None,
            }
        )

    return SpectrogramJobResult(
        input_path=wav_path,
        sample_rate=sample_rate,
        options=options,
        result=result,
        pdf_path=pdf_path,
    )
