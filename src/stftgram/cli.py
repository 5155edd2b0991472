"""Command line entry point: ``stftgram input.wav [options]``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config_schema import load_job_config
from .errors import InvalidArgumentError, IOFailureError
from .logging_utils import configure_logging
from .pipeline import run_spectrogram_job


def _parse_args(
    argv: Sequence[str] | None = None,
) -> tuple[argparse.ArgumentParser, argparse.Namespace]:
    parser = argparse.ArgumentParser(
        prog="stftgram",
        description="Compute an STFT power spectrogram of a WAV file and save it as PDF.",
    )
    parser.add_argument(
        "input_wav",
        type=Path,
        nargs="?",
        default=None,
        help="Input WAV file (default: input.path from the config).",
    )
    parser.add_argument(
        "--config", type=Path, default=None, help="Job configuration YAML."
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        help="Config override in dotlist form, e.g. stft.window_length=4096.",
    )
    parser.add_argument(
        "--plot",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Plot (and export) the spectrogram.",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for the PDF (default: your desktop).",
    )
    parser.add_argument(
        "--output-name",
        type=str,
        default=None,
        help="PDF file name without the .pdf suffix.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: runtime.log_level from the config).",
    )
    return parser, parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    parser, args = _parse_args(argv)

    overrides = list(args.set)
    if args.plot is not None:
        overrides.append(f"plot.enabled={str(args.plot).lower()}")

    try:
        config = load_job_config(args.config, overrides=overrides)
    except InvalidArgumentError as exc:
        parser.error(str(exc))
    except OSError as exc:
        print(f"Failed to load config: {exc}", file=sys.stderr)
        return 1
    if args.output_dir is not None:
        config.export.output_dir = str(args.output_dir)
    if args.output_name is not None:
        config.export.file_name = args.output_name
    configure_logging(args.log_level or config.runtime.log_level)

    try:
        job = run_spectrogram_job(config, input_path=args.input_wav)
    except InvalidArgumentError as exc:
        parser.error(str(exc))
    except IOFailureError as exc:
        logging.error("%s", exc)
        return 1

    if job.pdf_path is not None:
        print(f"Saved spectrogram: {job.pdf_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
