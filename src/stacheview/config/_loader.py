# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Reading configuration tables from TOML files and the environment."""

import os
import tomllib
from pathlib import Path
from typing import Any

from stacheview.exceptions import ConfigLoadError

ENV_PREFIX = "STACHEVIEW_"
ENV_SECTION_SEPARATOR = "__"


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Read a TOML configuration file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file is not valid TOML. The error carries
            the line and column reported by the parser.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(msg, path=path, line=e.lineno, column=e.colno) from e


def deep_merge(
    base: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    override: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Merge `override` over `base` into a new dictionary.

    Tables present on both sides are merged key by key; any other value in
    `override` replaces the one in `base`. Neither input is modified.
    """
    result: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
        key: deep_merge(value, {}) if isinstance(value, dict) else value
        for key, value in base.items()
    }
    for key, value in override.items():
        if isinstance(value, dict):
            current = result.get(key)
            result[key] = deep_merge(current if isinstance(current, dict) else {}, value)
        else:
            result[key] = value
    return result


def parse_env_value(value: str) -> bool | str:
    """Return True or False for ``true``/``false`` in any case, else `value`."""
    lower_value = value.lower()
    if lower_value in ("true", "false"):
        return lower_value == "true"
    return value


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: dict[str, str] | None = None,
) -> dict[str, dict[str, bool | str]]:
    """Collect ``<prefix><SECTION>__<KEY>`` variables as configuration tables.

    ``STACHEVIEW_VIEWS__PREFIX=views/`` becomes ``{"views": {"prefix":
    "views/"}}``. Variables without a section separator, such as
    ``STACHEVIEW_DEBUG``, are logging switches and are skipped.

    Args:
        prefix: Environment variable prefix.
        environ: Mapping to read instead of `os.environ`.
    """
    source = os.environ if environ is None else environ
    result: dict[str, dict[str, bool | str]] = {}

    for name, value in source.items():
        if not name.startswith(prefix):
            continue
        section, separator, key = name[len(prefix) :].partition(ENV_SECTION_SEPARATOR)
        if not separator:
            continue
        result.setdefault(section.lower(), {})[key.lower()] = parse_env_value(value)

    return result
