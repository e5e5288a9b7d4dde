# pyright: reportExplicitAny=false, reportAny=false
"""Configuration container.

Configuration is read from (lowest to highest precedence) built-in
defaults, an optional TOML file and ``STACHEVIEW_*`` environment variables:

    # stacheview.toml
    [views]
    root = "/srv/app"
    prefix = "views/"
    suffix = ".mustache"

    [logging]
    level = "debug"
"""

from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, ValidationError

from stacheview.exceptions import ConfigValidationError

from ._loader import deep_merge, parse_env_vars, read_toml_file
from ._models import LoggingConfig, ViewsConfig

DEFAULT_CONFIG: dict[str, Any] = {
    "views": {
        "root": ".",
        "prefix": "",
        "suffix": "",
        "cache": False,
        "encoding": "utf-8",
    },
    "logging": {
        "level": "warning",
        "format": "text",
        "file": "",
    },
}


def _raise_validation_error(error: ValidationError, source: str | None) -> None:
    details = error.errors()[0]
    key = ".".join(str(part) for part in details.get("loc", ()))
    msg = f"Invalid configuration value for '{key}'"
    raise ConfigValidationError(
        msg,
        key=key,
        value=details.get("input"),
        expected=details.get("msg", ""),
        source=source,
    ) from error


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods rather than the constructor so that defaults
    are merged and validation errors are reported uniformly.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="forbid")

    views: ViewsConfig = ViewsConfig()
    logging: LoggingConfig = LoggingConfig()

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        *,
        source: str | None = None,
    ) -> Self:
        """Create configuration from a dictionary.

        Args:
            data: Dictionary of configuration values.
            source: Name of the source, reported in validation errors.

        Returns:
            Configuration object with defaults filled in.

        Raises:
            ConfigValidationError: If a value is invalid or a key is unknown.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            _raise_validation_error(e, source)
            raise

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Load configuration from a TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails.
        """
        return cls.from_dict(read_toml_file(path), source=str(path))

    @classmethod
    def load(
        cls,
        path: Path | None = None,
        *,
        include_env: bool = True,
    ) -> Self:
        """Load merged configuration from all sources.

        Args:
            path: Optional TOML file. A missing file is skipped.
            include_env: Include ``STACHEVIEW_*`` environment variables.

        Returns:
            Merged configuration object.

        Raises:
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If the merged config fails validation.
        """
        data: dict[str, Any] = {}
        sources: list[str] = []

        if path is not None and path.is_file():
            data = deep_merge(data, read_toml_file(path))
            sources.append(str(path))

        if include_env:
            env_values = parse_env_vars()
            if env_values:
                data = deep_merge(data, env_values)
                sources.append("env")

        return cls.from_dict(data, source=", ".join(sources) or None)
