"""Locating and reading ``licwatch.toml``.

A license watch installation is a directory holding ``licwatch.toml``
next to its ``.licwatch/`` content store. Commands run anywhere below that
directory find it by walking up, the way git finds ``.git/``.
``LICWATCH_CONFIG`` points at a file elsewhere and turns the walk off.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from licwatch.config.models import LicwatchConfig

CONFIG_FILENAME = "licwatch.toml"
CONFIG_ENV_VAR = "LICWATCH_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """The config file that applies to *start* (default: the working directory).

    ``LICWATCH_CONFIG`` wins when set; if it names a missing file there is
    no config at all. Otherwise the nearest ``licwatch.toml`` in *start* or
    one of its parents, or None.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> LicwatchConfig:
    """Read the sections of *path* (or of the config found from *cwd*).

    Sections missing from the file keep their built-in defaults, so an
    empty or absent file yields the default configuration.
    """
    path = path or find_config(cwd)
    if path is None:
        return LicwatchConfig()
    with path.open("rb") as fh:
        return LicwatchConfig.model_validate(tomllib.load(fh))
