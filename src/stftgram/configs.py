"""Read job configuration from YAML and command line dotlists."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Iterable

try:
    OmegaConf = importlib.import_module("omegaconf").OmegaConf
except ModuleNotFoundError as exc:
    raise RuntimeError(
        "stftgram requires 'omegaconf'. Install it with `pip install omegaconf`."
    ) from exc


def load_config(
    path: str | Path | None = None,
    *,
    overrides: Iterable[str] | None = None,
) -> dict[str, Any]:
    """Return the mapping stored in ``path`` with dotlist ``overrides`` merged in.

    Without ``path`` the result holds only the overrides, e.g.
    ``["stft.window_length=4096"]`` gives ``{"stft": {"window_length": 4096}}``.
    """
    cfg = OmegaConf.load(Path(path)) if path is not None else OmegaConf.create({})
    dotlist = [item for item in (overrides or []) if item]
    if dotlist:
        cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(dotlist))
    data = OmegaConf.to_container(cfg, resolve=True)
    if not isinstance(data, dict):
        source = path if path is not None else "overrides"
        raise TypeError(f"Expected a mapping in {source}, got {type(data).__name__}")
    return {str(key): value for key, value in data.items()}
