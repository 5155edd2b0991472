import re
from pathlib import Path

import matplotlib
import matplotlib.pyplot as plt
import numpy as np
import pytest

from stftgram import (
    IOFailureError,
    InvalidArgumentError,
    plot_spectrogram,
    resolve_desktop_dir,
    save_figure_pdf,
)


matplotlib.use("Agg")


@pytest.fixture
def figure():
    fig, ax = plt.subplots()
    ax.plot([0, 1], [0, 1])
    yield fig
    plt.close(fig)


def test_save_figure_pdf_writes_vector_pdf(figure, tmp_path: Path) -> None:
    path = save_figure_pdf(figure, "demo", output_dir=tmp_path)

    assert path == tmp_path / "demo.pdf"
    assert path.read_bytes().startswith(b"%PDF")


def test_save_figure_pdf_defaults_to_desktop(
    figure, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    desktop = tmp_path / "Desktop"
    monkeypatch.setenv("XDG_DESKTOP_DIR", str(desktop))

    path = save_figure_pdf(figure)

    assert path == desktop / "out.pdf"
    assert path.exists()


def test_resolve_desktop_dir_falls_back_to_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.delenv("XDG_DESKTOP_DIR", raising=False)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert resolve_desktop_dir() == tmp_path / "Desktop"


def test_save_figure_pdf_rejects_empty_name(figure, tmp_path: Path) -> None:
    with pytest.raises(InvalidArgumentError):
        save_figure_pdf(figure, "", output_dir=tmp_path)


def test_save_figure_pdf_reports_unwritable_directory(
    figure, tmp_path: Path
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(IOFailureError):
        save_figure_pdf(figure, "demo", output_dir=blocker / "sub")


def test_save_figure_pdf_page_matches_figure_size(tmp_path: Path) -> None:
    spec = np.ones((9, 4, 2))
    fig = plot_spectrogram(spec, np.arange(9.0), np.arange(4.0))
    try:
        path = save_figure_pdf(fig, "page", output_dir=tmp_path)
    finally:
        plt.close(fig)

    media_box = re.search(rb"/MediaBox\s*\[([^\]]*)\]", path.read_bytes())
    assert media_box is not None
    corners = [float(value) for value in media_box.group(1).split()]
    assert corners == [0.0, 0.0, 540.0, 360.0]
