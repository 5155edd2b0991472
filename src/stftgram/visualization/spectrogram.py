"""Plotting utilities for STFT power spectrograms."""

from __future__ import annotations

from typing import Sequence

import matplotlib.pyplot as plt
import numpy as np

from ..errors import InvalidArgumentError


FIGURE_SIZE = (7.5, 5.0)
FONT_SIZE = 12


def power_db(spec: np.ndarray) -> np.ndarray:
    """Return ``20 * log10(|spec|)``; zero bins map to ``-inf``."""
    with np.errstate(divide="ignore"):
        return 20.0 * np.log10(np.abs(spec))


def _pixel_extent(axis: np.ndarray) -> tuple[float, float]:
    # Pixels are centred on the axis samples.
    if axis.size > 1:
        half = 0.5 * (axis[-1] - axis[0]) / (axis.size - 1)
    else:
        half = 0.5
    return float(axis[0] - half), float(axis[-1] + half)


def plot_spectrogram(
    spec: np.ndarray,
    freq_axis: np.ndarray,
    time_axis: np.ndarray,
    *,
    min_color_db: float = -30.0,
    frequency_range: Sequence[float] | None = None,
) -> plt.Figure:
    """Plot a log-power spectrogram, one image per channel.

    Parameters
    ----------
    spec:
        Spectrogram shaped ``(n_freq, n_frame)`` or ``(n_freq, n_frame, n_channel)``.
        Complex values are converted with ``20 * log10(|spec|)``.
    freq_axis, time_axis:
        Bin centre frequencies [Hz] and frame times [s].
    min_color_db:
        Lower colour limit. The upper limit is the maximum power over all channels.
    frequency_range:
        Optional ``(low, high)`` y-axis limits in Hz.

    Returns
    -------
    matplotlib.figure.Figure
        A single axes for mono input, or ``1 x n_channel`` tiles sharing one
        colour bar.
    """
    spec = np.asarray(spec)
    if spec.ndim == 2:
        spec = spec[:, :, np.newaxis]
    elif spec.ndim != 3:
        raise InvalidArgumentError(
            "spec must be 2-D or 3-D shaped (n_freq, n_frame[, n_channel])"
        )
    freq_axis = np.asarray(freq_axis, dtype=float).ravel()
    time_axis = np.asarray(time_axis, dtype=float).ravel()
    n_freq, n_frame, n_channel = spec.shape
    if freq_axis.size != n_freq or time_axis.size != n_frame:
        raise InvalidArgumentError(
            "axes do not match spectrogram shape: "
            f"got ({freq_axis.size}, {time_axis.size}), expected ({n_freq}, {n_frame})"
        )
    if frequency_range is not None and len(frequency_range) != 2:
        raise InvalidArgumentError("frequency_range must contain exactly 2 values")

    log_spec = power_db(spec)
    vmax = float(np.max(log_spec))
    if not vmax > min_color_db:
        # matplotlib widens an empty colour range around its centre.
        vmax = float(min_color_db) + 1.0
    extent = (*_pixel_extent(time_axis), *_pixel_extent(freq_axis))

    fig, axes = plt.subplots(
        nrows=1,
        ncols=n_channel,
        figsize=FIGURE_SIZE,
        sharex=True,
        sharey=True,
        squeeze=False,
        layout="compressed",
    )
    tiles = list(axes[0])
    for ch, ax in enumerate(tiles):
        image = ax.imshow(
            log_spec[:, :, ch],
            origin="lower",
            aspect="auto",
            extent=extent,
            interpolation="nearest",
            vmin=min_color_db,
            vmax=vmax,
        )
        ax.tick_params(labelsize=FONT_SIZE)
        ax.set_xlabel("Time [s]", fontsize=FONT_SIZE)
        if ch == 0:
            ax.set_ylabel("Frequency [Hz]", fontsize=FONT_SIZE)
        if frequency_range is not None:
            ax.set_ylim(float(frequency_range[0]), float(frequency_range[1]))

    colorbar = fig.colorbar(image, ax=tiles)
    colorbar.set_label("Power [dB]", fontsize=FONT_SIZE + 1)
    colorbar.ax.tick_params(labelsize=FONT_SIZE)
    return fig
