"""Typed OmegaConf schemas for spectrogram jobs."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Iterable, Mapping, TypeVar, cast

from omegaconf.errors import OmegaConfBaseException

from .configs import OmegaConf, load_config
from .errors import InvalidArgumentError
from .signal import STFTOptions


@dataclass
class InputConfig:
    """Audio input."""

    path: str | None = None


@dataclass
class STFTConfig:
    """STFT configuration schema. The sampling rate comes from the input file."""

    window_length: int = 1024
    shift_length: int = 512
    window_type: str = "hann"
    emit_full_spectrum: bool = False


@dataclass
class PlotConfig:
    """Spectrogram plot options."""

    enabled: bool = True
    min_color_db: float = -30.0
    frequency_range: list[float] | None = None


@dataclass
class ExportConfig:
    """PDF export options. ``output_dir=None`` means the user's desktop."""

    enabled: bool = True
    file_name: str = "power_spectrogram"
    output_dir: str | None = None


@dataclass
class RuntimeConfig:
    """Runtime execution configuration schema."""

    log_level: str = "INFO"
    summary_path: str | None = None


@dataclass
class SpectrogramJobConfig:
    """Top-level job configuration schema."""

    input: InputConfig = field(default_factory=InputConfig)
    stft: STFTConfig = field(default_factory=STFTConfig)
    plot: PlotConfig = field(default_factory=PlotConfig)
    export: ExportConfig = field(default_factory=ExportConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)


TSchema = TypeVar("TSchema")


def _decode_schema(
    data: Mapping[str, object],
    schema: type[TSchema],
) -> TSchema:
    try:
        base = OmegaConf.structured(schema)
        loaded = OmegaConf.create(dict(data))
        merged = OmegaConf.merge(base, loaded)
        decoded = OmegaConf.to_object(merged)
    except OmegaConfBaseException as exc:
        raise InvalidArgumentError(
            f"Invalid {schema.__name__} configuration: {exc}"
        ) from exc
    if not isinstance(decoded, schema):
        raise TypeError(f"Failed to decode config as {schema.__name__}")
    return cast(TSchema, decoded)


def parse_job_config(data: Mapping[str, object]) -> SpectrogramJobConfig:
    """Decode a mapping into :class:`SpectrogramJobConfig`."""
    return _decode_schema(data, SpectrogramJobConfig)


def load_job_config(
    path: str | Path | None = None,
    *,
    overrides: Iterable[str] | None = None,
) -> SpectrogramJobConfig:
    """Load a job YAML (or start from defaults) and apply dotlist overrides."""
    return parse_job_config(load_config(path, overrides=overrides))


def job_config_to_dict(config: SpectrogramJobConfig) -> dict[str, Any]:
    """Convert :class:`SpectrogramJobConfig` to plain dictionary."""
    return asdict(config)


def build_stft_options(
    config: SpectrogramJobConfig, sampling_frequency: float
) -> STFTOptions:
    """Combine the STFT and plot sections into validated :class:`STFTOptions`."""
    return STFTOptions(
        window_length=config.stft.window_length,
        shift_length=config.stft.shift_length,
        window_type=config.stft.window_type,
        sampling_frequency=sampling_frequency,
        plot=config.plot.enabled,
        min_color_db=config.plot.min_color_db,
        frequency_range=config.plot.frequency_range,
        emit_full_spectrum=config.stft.emit_full_spectrum,
    )
