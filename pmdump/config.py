"""Reading of the YAML settings file."""

from __future__ import annotations

from dataclasses import dataclass, fields
from os import PathLike

import yaml


@dataclass
class Config:
    """Settings for an export or import run."""

    database_url: str = ""
    media_root: str = ""
    target_file: str = ""  # full path to the target tar.gz archive
    app_version: str = ""  # version of the document management system


_KEYS = {f.name for f in fields(Config)}


def read_config(file_name: str | PathLike) -> Config:
    """Read settings from a YAML file.

    Scalars are kept as written, so ``app_version: 3.10`` reads as ``"3.10"``.
    Unknown keys are ignored. Raises OSError if the file cannot be read and
    ValueError (or yaml.YAMLError) if it does not hold a mapping of scalars.
    """
    with open(file_name, encoding="utf-8") as fh:
        data = yaml.load(fh, Loader=yaml.BaseLoader)

    if data is None:
        return Config()
    if not isinstance(data, dict):
        raise ValueError(f"{file_name}: configuration must be a mapping")

    values = {}
    for key, value in data.items():
        if key not in _KEYS:
            continue
        if not isinstance(value, str):
            raise ValueError(f"{file_name}: value of {key!r} must be a string")
        values[key] = value
    return Config(**values)