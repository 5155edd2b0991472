"""Save figures as vector PDF documents."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import matplotlib.pyplot as plt

from .errors import InvalidArgumentError, IOFailureError


LOGGER = logging.getLogger(__name__)


def resolve_desktop_dir() -> Path:
    """Return the current user's desktop directory.

    ``$XDG_DESKTOP_DIR`` wins when set; otherwise ``~/Desktop``.
    """
    override = os.environ.get("XDG_DESKTOP_DIR")
    if override:
        return Path(override).expanduser()
    return Path.home() / "Desktop"


def save_figure_pdf(
    figure: plt.Figure,
    file_name: str = "out",
    *,
    output_dir: str | Path | None = None,
) -> Path:
    """Write ``figure`` to ``<output_dir>/<file_name>.pdf`` and return the path.

    ``file_name`` is given without the ``.pdf`` suffix. The page matches the
    figure's current size. When ``output_dir`` is ``None`` the desktop from
    :func:`resolve_desktop_dir` is used.
    """
    if figure is None:
        raise InvalidArgumentError("figure must not be None")
    if not isinstance(file_name, str) or not file_name:
        raise InvalidArgumentError("file_name must be a non-empty string")

    directory = Path(output_dir) if output_dir is not None else resolve_desktop_dir()
    path = directory / f"{file_name}.pdf"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        figure.savefig(path, format="pdf")
    except OSError as exc:
        raise IOFailureError(f"Failed to write figure to {path}: {exc}") from exc
    LOGGER.info("Saved figure: %s", path)
    return path
