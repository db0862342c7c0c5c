"""Helpers for loading ``NormalizeConfig`` from TOML/JSON sources.

``load_normalize_config`` accepts:

* None -> default NormalizeConfig
* dict -> validated as-is
* Path / path-like string -> load .toml/.json from filesystem
* Inline JSON/TOML strings

Settings may sit at the top level or under a ``[normalize]`` table.
"""

from __future__ import annotations

import json
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Tuple, Union

from dagnorm.config.schema import NormalizeConfig

logger = logging.getLogger("dagnorm.config.loader")

ConfigSource = Union[str, Path, Dict[str, Any], NormalizeConfig, None]

_SUFFIX_FORMATS = {".toml": "toml", ".tml": "toml", ".json": "json"}


def _from_mapping(data: Dict[str, Any]) -> NormalizeConfig:
    section = data.get("normalize", data)
    if not isinstance(section, dict):
        raise ValueError("[normalize] configuration section must be a mapping")
    return NormalizeConfig.model_validate(section)


def _sniff_format(text: str) -> str:
    """Only a leading ``{`` means JSON; ``[`` opens a TOML table header."""
    return "json" if text.lstrip().startswith("{") else "toml"


def _read_source(source: Union[str, Path]) -> Tuple[str, str]:
    """Return ``(text, fmt)`` for a config file path or an inline string."""
    path = Path(source)
    if not path.is_file():
        text = str(source)
        fmt = _sniff_format(text)
        logger.info("Loading configuration from inline %s string", fmt)
        return text, fmt

    text = path.read_text(encoding="utf-8")
    fmt = _SUFFIX_FORMATS.get(path.suffix.lower()) or _sniff_format(text)
    logger.info("Loading configuration from file: %s (fmt=%s)", path, fmt)
    return text, fmt


def load_normalize_config(source: ConfigSource) -> NormalizeConfig:
    """Load NormalizeConfig from a mapping, a file or an inline string.

    Strings are tried as a file path first. Files with a ``.toml``/``.json``
    suffix are parsed as such; anything else is JSON if it opens with ``{``
    and TOML otherwise.

    Raises:
        pydantic.ValidationError: When a value is out of range.
        ValueError: When the source is not a mapping or cannot be parsed.
        TypeError: For source types other than those in ``ConfigSource``.
    """
    if source is None:
        logger.debug("No config source provided; using default NormalizeConfig")
        return NormalizeConfig.default()

    if isinstance(source, NormalizeConfig):
        return source

    if isinstance(source, dict):
        return _from_mapping(source)

    if not isinstance(source, (str, Path)):
        raise TypeError(f"Unsupported config source type: {type(source)!r}")

    text, fmt = _read_source(source)
    try:
        data = json.loads(text) if fmt == "json" else tomllib.loads(text)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ValueError(f"Invalid {fmt} configuration: {exc}") from exc

    if not isinstance(data, dict):
        raise ValueError("Top-level configuration must be a mapping")
    return _from_mapping(data)


__all__ = ["ConfigSource", "load_normalize_config"]
