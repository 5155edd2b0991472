"""Short-time Fourier transform of multichannel signals.

The transform runs in three stateless stages:

1. :func:`frame_signal` slices the zero-padded signal into overlapping frames.
2. :func:`windowed_dft` tapers every frame with an analysis window from
   :func:`get_analysis_window` and applies a length-``window_length`` DFT.
3. :func:`compute_axes` and :func:`discard_over_nyquist` build the frequency
   and time axes and drop the redundant upper half of the spectrum.

:func:`calc_stft` validates an :class:`STFTOptions` record and chains the
stages together.
"""

from __future__ import annotations

import dataclasses
import logging
import numbers
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterator

import numpy as np
from scipy.signal import get_window

from ..errors import InvalidArgumentError


LOGGER = logging.getLogger(__name__)


class WindowType(str, Enum):
    """Analysis window shapes supported by :func:`get_analysis_window`."""

    HANN = "hann"
    BLACKMAN = "blackman"
    FLATTOP = "flattop"
    RECTANGULAR = "rectangular"

    @classmethod
    def parse(cls, value: WindowType | str) -> WindowType:
        """Resolve a window name, accepting the one-letter tags ``h/b/f/r``."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidArgumentError(
                f"window_type must be a string, got {type(value).__name__}"
            )
        key = value.strip().lower()
        resolved = _WINDOW_ALIASES.get(key)
        if resolved is None:
            choices = ", ".join(sorted(_WINDOW_ALIASES))
            raise InvalidArgumentError(
                f"Unknown window_type '{value}'. Available: {choices}"
            )
        return resolved


_WINDOW_ALIASES: dict[str, WindowType] = {
    "hann": WindowType.HANN,
    "h": WindowType.HANN,
    "blackman": WindowType.BLACKMAN,
    "b": WindowType.BLACKMAN,
    "flattop": WindowType.FLATTOP,
    "flat-top": WindowType.FLATTOP,
    "f": WindowType.FLATTOP,
    "rectangular": WindowType.RECTANGULAR,
    "boxcar": WindowType.RECTANGULAR,
    "r": WindowType.RECTANGULAR,
}

_SCIPY_WINDOW_NAMES: dict[WindowType, str] = {
    WindowType.HANN: "hann",
    WindowType.BLACKMAN: "blackman",
    WindowType.FLATTOP: "flattop",
    WindowType.RECTANGULAR: "boxcar",
}


def _as_positive_int(name: str, value: Any) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        result = int(value)
    elif isinstance(value, numbers.Real) and float(value).is_integer():
        result = int(value)
    else:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {value!r}")
    if result < 1:
        raise InvalidArgumentError(f"{name} must be a positive integer, got {result}")
    return result


def _as_real(name: str, value: Any) -> float:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise InvalidArgumentError(f"{name} must be a real number, got {value!r}")
    result = float(value)
    if not np.isfinite(result):
        raise InvalidArgumentError(f"{name} must be finite, got {result}")
    return result


def _as_flag(name: str, value: Any) -> bool:
    if not isinstance(value, (bool, np.bool_)):
        raise InvalidArgumentError(f"{name} must be a boolean, got {value!r}")
    return bool(value)


def _as_frequency_range(value: Any) -> tuple[float, float] | None:
    if value is None:
        return None
    if isinstance(value, (str, bytes)) or not isinstance(value, (Sequence, np.ndarray)):
        raise InvalidArgumentError(
            f"frequency_range must be a pair of frequencies or empty, got {value!r}"
        )
    if len(value) == 0:
        return None
    if len(value) != 2:
        raise InvalidArgumentError(
            f"frequency_range must contain exactly 2 values, got {len(value)}"
        )
    low = _as_real("frequency_range[0]", value[0])
    high = _as_real("frequency_range[1]", value[1])
    if low < 0.0 or high < 0.0:
        raise InvalidArgumentError(
            f"frequency_range must be non-negative, got ({low}, {high})"
        )
    return (low, high)


@dataclass(frozen=True)
class STFTOptions:
    """Validated options for :func:`calc_stft`.

    Parameters
    ----------
    window_length:
        Frame length ``W`` in samples.
    shift_length:
        Hop size ``S`` in samples.
    window_type:
        Analysis window, a :class:`WindowType` or one of its names/tags.
    sampling_frequency:
        Sampling rate in Hz. Only scales the axes. Must be positive: zero is
        rejected because the time axis spans ``n_samples / sampling_frequency``.
    plot:
        Render the spectrogram with the plotting collaborator.
    min_color_db:
        Lower limit of the colour scale in dB.
    frequency_range:
        Optional non-negative ``(low, high)`` frequency zoom in Hz for the
        plot. ``low < high`` is required only when ``plot`` is set.
    emit_full_spectrum:
        Keep all ``W`` bins instead of the one-sided ``W // 2 + 1``.
    """

    window_length: int = 1024
    shift_length: int = 512
    window_type: WindowType | str = WindowType.HANN
    sampling_frequency: float = 44100.0
    plot: bool = False
    min_color_db: float = -30.0
    frequency_range: tuple[float, float] | None = None
    emit_full_spectrum: bool = False

    def __post_init__(self) -> None:
        sampling_frequency = _as_real("sampling_frequency", self.sampling_frequency)
        if sampling_frequency <= 0.0:
            raise InvalidArgumentError(
                f"sampling_frequency must be positive, got {sampling_frequency}"
            )
        normalized = {
            "window_length": _as_positive_int("window_length", self.window_length),
            "shift_length": _as_positive_int("shift_length", self.shift_length),
            "window_type": WindowType.parse(self.window_type),
            "sampling_frequency": sampling_frequency,
            "plot": _as_flag("plot", self.plot),
            "min_color_db": _as_real("min_color_db", self.min_color_db),
            "frequency_range": _as_frequency_range(self.frequency_range),
            "emit_full_spectrum": _as_flag(
                "emit_full_spectrum", self.emit_full_spectrum
            ),
        }
        for name, value in normalized.items():
            object.__setattr__(self, name, value)
        if self.plot and self.frequency_range is not None:
            low, high = self.frequency_range
            if low >= high:
                raise InvalidArgumentError(
                    f"frequency_range must be increasing to plot, got ({low}, {high})"
                )

    @property
    def n_bins(self) -> int:
        """Number of frequency bins in the returned spectrogram."""
        if self.emit_full_spectrum:
            return self.window_length
        return self.window_length // 2 + 1


def resolve_stft_options(
    options: STFTOptions | None = None, **overrides: Any
) -> STFTOptions:
    """Return ``options`` (or the defaults) with keyword ``overrides`` applied."""
    base = options if options is not None else STFTOptions()
    if not isinstance(base, STFTOptions):
        raise InvalidArgumentError(
            f"options must be an STFTOptions instance, got {type(base).__name__}"
        )
    if not overrides:
        return base
    known = {item.name for item in dataclasses.fields(STFTOptions)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise InvalidArgumentError(
            f"Unknown STFT options: {', '.join(unknown)}. "
            f"Available: {', '.join(sorted(known))}"
        )
    return dataclasses.replace(base, **overrides)


@dataclass(frozen=True, eq=False)
class STFTResult:
    """Outputs of :func:`calc_stft`.

    Unpacks as ``spectrogram, freq_axis, time_axis, figure``.
    """

    spectrogram: np.ndarray
    freq_axis: np.ndarray
    time_axis: np.ndarray
    figure: Any = None

    def __iter__(self) -> Iterator[Any]:
        return iter((self.spectrogram, self.freq_axis, self.time_axis, self.figure))

    @property
    def has_figure(self) -> bool:
        return self.figure is not None

    @property
    def n_channel(self) -> int:
        return int(self.spectrogram.shape[2])


def as_signal(signal: Any) -> np.ndarray:
    """Validate ``signal`` and return it as a float ``(n_samples, n_channel)`` array.

    One-dimensional input is treated as a single channel.
    """
    array = np.asarray(signal)
    if np.iscomplexobj(array):
        raise InvalidArgumentError("signal must be real-valued")
    if array.dtype.kind not in "iuf":
        raise InvalidArgumentError(
            f"signal must be a numeric array, got dtype {array.dtype}"
        )
    if array.ndim == 1:
        array = array[:, np.newaxis]
    elif array.ndim != 2:
        raise InvalidArgumentError(
            "signal must be 1-D or 2-D shaped (n_samples, n_channel), "
            f"got {array.ndim}-D"
        )
    if array.shape[0] < 1 or array.shape[1] < 1:
        raise InvalidArgumentError(
            f"signal must hold at least one sample and one channel, got {array.shape}"
        )
    return array.astype(np.float64, copy=False)


def frame_signal(signal: Any, window_length: int, shift_length: int) -> np.ndarray:
    """Slice ``signal`` into overlapping frames.

    The signal is padded with ``window_length - 1`` trailing zeros so every
    frame starting at ``f * shift_length`` for ``f < ceil(n_samples / shift_length)``
    is complete.

    Returns
    -------
    np.ndarray
        Frame buffer shaped ``(window_length, n_frame, n_channel)``.
    """
    window_length = _as_positive_int("window_length", window_length)
    shift_length = _as_positive_int("shift_length", shift_length)
    sig = as_signal(signal)

    n_samples, n_channel = sig.shape
    n_frame = -(-n_samples // shift_length)  # ceil
    padded = np.concatenate(
        [sig, np.zeros((window_length - 1, n_channel), dtype=sig.dtype)], axis=0
    )
    index = (
        np.arange(window_length)[:, np.newaxis]
        + shift_length * np.arange(n_frame)[np.newaxis, :]
    )
    return padded[index]


def get_analysis_window(
    window_type: WindowType | str, window_length: int
) -> np.ndarray:
    """Return the periodic analysis window of length ``window_length``."""
    kind = WindowType.parse(window_type)
    window_length = _as_positive_int("window_length", window_length)
    if kind is WindowType.RECTANGULAR:
        return np.ones(window_length)
    return get_window(_SCIPY_WINDOW_NAMES[kind], window_length, fftbins=True)


def windowed_dft(frames: np.ndarray, window: np.ndarray) -> np.ndarray:
    """Multiply every frame by ``window`` and take an unnormalised DFT along axis 0."""
    frames = np.asarray(frames)
    window = np.asarray(window)
    if frames.ndim != 3:
        raise InvalidArgumentError(
            "frames must be 3-D shaped (window_length, n_frame, n_channel)"
        )
    if window.shape != (frames.shape[0],):
        raise InvalidArgumentError(
            f"window shape {window.shape} does not match frame length {frames.shape[0]}"
        )
    tapered = frames * window[:, np.newaxis, np.newaxis]
    return np.fft.fft(tapered, n=frames.shape[0], axis=0)


def compute_axes(
    n_freq: int, n_frame: int, n_samples: int, sampling_frequency: float
) -> tuple[np.ndarray, np.ndarray]:
    """Return ``(freq_axis, time_axis)``.

    Both axes include their end point: the last frequency bin maps to
    ``sampling_frequency`` and the last frame to ``n_samples / sampling_frequency``.
    """
    freq_axis = np.linspace(0.0, sampling_frequency, n_freq)
    time_axis = np.linspace(0.0, n_samples / sampling_frequency, n_frame)
    return freq_axis, time_axis


def discard_over_nyquist(
    spectrogram: np.ndarray, freq_axis: np.ndarray, window_length: int
) -> tuple[np.ndarray, np.ndarray]:
    """Keep the one-sided part of ``spectrogram`` and ``freq_axis``.

    The spectrogram keeps ``window_length // 2 + 1`` bins, the axis keeps
    ``len(freq_axis) // 2 + 1`` entries.
    """
    n_bins = _as_positive_int("window_length", window_length) // 2 + 1
    n_axis = freq_axis.shape[0] // 2 + 1
    return spectrogram[:n_bins], freq_axis[:n_axis]


def calc_stft(
    signal: Any,
    options: STFTOptions | None = None,
    *,
    plotter: Callable[..., Any] | None = None,
    **overrides: Any,
) -> STFTResult:
    """Compute the complex STFT spectrogram of ``signal``.

    Parameters
    ----------
    signal:
        Real signal shaped ``(n_samples, n_channel)``, or 1-D for mono.
    options:
        STFT options. Defaults to :class:`STFTOptions()`.
    plotter:
        Plotting collaborator used when ``options.plot`` is set. Defaults to
        :func:`stftgram.visualization.plot_spectrogram`.
    **overrides:
        Individual :class:`STFTOptions` fields, e.g. ``window_length=4096``.

    Returns
    -------
    STFTResult
        Spectrogram shaped ``(n_bins, n_frame, n_channel)``, frequency axis,
        time axis, and the figure (``None`` when plotting is off).
    """
    opts = resolve_stft_options(options, **overrides)
    sig = as_signal(signal)

    frames = frame_signal(sig, opts.window_length, opts.shift_length)
    window = get_analysis_window(opts.window_type, opts.window_length)
    spectrogram = windowed_dft(frames, window)

    n_freq, n_frame = spectrogram.shape[:2]
    freq_axis, time_axis = compute_axes(
        n_freq, n_frame, sig.shape[0], opts.sampling_frequency
    )
    if not opts.emit_full_spectrum:
        spectrogram, freq_axis = discard_over_nyquist(
            spectrogram, freq_axis, opts.window_length
        )
    LOGGER.debug(
        "STFT | window=%s W=%d S=%d -> spectrogram %s",
        opts.window_type.value,
        opts.window_length,
        opts.shift_length,
        spectrogram.shape,
    )

    figure = None
    if opts.plot:
        if plotter is None:
            from ..visualization import plot_spectrogram

            plotter = plot_spectrogram
        figure = plotter(
            spectrogram,
            freq_axis,
            time_axis,
            min_color_db=opts.min_color_db,
            frequency_range=opts.frequency_range,
        )
    return STFTResult(spectrogram, freq_axis, time_axis, figure)
