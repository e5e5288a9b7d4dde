"""stacheview configuration.

Example:
    >>> from stacheview.config import Config
    >>> config = Config.from_dict({"views": {"prefix": "views/"}})
    >>> config.views.prefix
    'views/'
"""

from stacheview.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._config import DEFAULT_CONFIG, Config
from ._loader import (
    deep_merge,
    parse_env_value,
    parse_env_vars,
    read_toml_file,
)
from ._models import LogFormat, LoggingConfig, LogLevel, ViewsConfig

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ViewsConfig",
    "deep_merge",
    "parse_env_value",
    "parse_env_vars",
    "read_toml_file",
]
