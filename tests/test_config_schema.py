from __future__ import annotations

from pathlib import Path

import pytest

from stftgram import (
    InvalidArgumentError,
    WindowType,
    load_config,
    load_job_config,
    parse_job_config,
)
from stftgram.config_schema import build_stft_options, job_config_to_dict


EXAMPLE_CONFIG = (
    Path(__file__).resolve().parents[1]
    / "examples"
    / "config"
    / "power_spectrogram.yaml"
)


def test_parse_job_config_applies_defaults() -> None:
    cfg = parse_job_config({"stft": {"window_length": 2048}})
    assert cfg.stft.window_length == 2048
    assert cfg.stft.shift_length == 512
    assert cfg.stft.window_type == "hann"
    assert cfg.plot.enabled is True
    assert cfg.plot.frequency_range is None
    assert cfg.export.file_name == "power_spectrogram"
    assert cfg.export.output_dir is None
    assert cfg.runtime.log_level == "INFO"


def test_parse_job_config_rejects_unknown_key() -> None:
    with pytest.raises(InvalidArgumentError):
        parse_job_config({"stft": {"unknown_field": 1}})


def test_load_job_config_rejects_wrong_type_override() -> None:
    with pytest.raises(InvalidArgumentError):
        load_job_config(overrides=["stft.window_length=abc"])


def test_load_job_config_reads_example_with_overrides() -> None:
    cfg = load_job_config(EXAMPLE_CONFIG, overrides=["stft.window_type=b"])

    assert cfg.stft.window_length == 4096
    assert cfg.stft.window_type == "b"
    assert cfg.plot.min_color_db == -10.0
    assert cfg.plot.frequency_range == [0.0, 6000.0]


def test_build_stft_options_merges_sections() -> None:
    cfg = load_job_config(EXAMPLE_CONFIG)
    options = build_stft_options(cfg, 48000.0)

    assert options.window_length == 4096
    assert options.shift_length == 512
    assert options.window_type is WindowType.HANN
    assert options.sampling_frequency == 48000.0
    assert options.plot is True
    assert options.min_color_db == -10.0
    assert options.frequency_range == (0.0, 6000.0)
    assert options.emit_full_spectrum is False


def test_build_stft_options_validates_values() -> None:
    cfg = load_job_config(overrides=["stft.window_length=0"])
    with pytest.raises(InvalidArgumentError):
        build_stft_options(cfg, 44100.0)


def test_job_config_to_dict_round_trips() -> None:
    cfg = parse_job_config({"export": {"output_dir": "/tmp/out"}})
    data = job_config_to_dict(cfg)
    assert data["export"]["output_dir"] == "/tmp/out"
    assert parse_job_config(data) == cfg


def test_load_config_without_file_holds_overrides() -> None:
    data = load_config(overrides=["stft.window_length=4096", "", "plot.enabled=false"])
    assert data == {"stft": {"window_length": 4096}, "plot": {"enabled": False}}


def test_load_config_merges_overrides_into_file() -> None:
    data = load_config(EXAMPLE_CONFIG, overrides=["export.file_name=demo"])
    assert data["export"]["file_name"] == "demo"
    assert data["stft"]["window_length"] == 4096
