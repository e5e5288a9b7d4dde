"""stacheview exceptions."""

from pathlib import Path
from typing import Any


class StacheviewError(Exception):
    """Base exception for stacheview errors."""


# =============================================================================
# Template Exceptions
# =============================================================================


class TemplateCompilationError(StacheviewError):
    """Raised when a template cannot be compiled.

    This is the single public error kind of `MustacheFactory.compile`. The
    subclasses below narrow the failure down when the caller cares.

    Attributes:
        name: The logical template name being compiled, if known.
        cause: The underlying exception that caused this error.
    """

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize with error message and template context.

        Args:
            message: Human-readable error message.
            name: The logical template name being compiled.
            cause: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.name: str | None = name
        self.cause: BaseException | None = cause


class TemplateNotFoundError(TemplateCompilationError, LookupError):
    """Raised when no resource exists at the resolved template path.

    Attributes:
        path: The full (prefixed) path that was looked up.
    """

    def __init__(self, message: str, *, name: str, path: str) -> None:
        """Initialize with error message and lookup context.

        Args:
            message: Human-readable error message.
            name: The logical template name.
            path: The full path handed to the resource loader.
        """
        super().__init__(message, name=name)
        self.path: str = path


class TemplateLoadError(TemplateCompilationError):
    """Raised when a template exists but cannot be read or parsed.

    Attributes:
        path: The full path of the template, if known.
    """

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        path: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        """Initialize with error message and load context.

        Args:
            message: Human-readable error message.
            name: The logical template name.
            path: The full path handed to the resource loader.
            cause: The underlying exception (usually an OSError).
        """
        super().__init__(message, name=name, cause=cause)
        self.path: str | None = path


class TemplateSyntaxError(TemplateLoadError):
    """Raised when template source is malformed."""


class TemplateCycleError(TemplateLoadError):
    """Raised when template inheritance refers back to itself.

    Attributes:
        chain: Template names from the outermost template to the repeat.
    """

    def __init__(self, message: str, *, chain: tuple[str, ...]) -> None:
        """Initialize with error message and inheritance chain.

        Args:
            message: Human-readable error message.
            chain: Names visited, ending with the name seen twice.
        """
        super().__init__(message, name=chain[0] if chain else None)
        self.chain: tuple[str, ...] = chain


class CachedComputationError(StacheviewError):
    """Wrapper raised by the memoizing template cache for failed computations.

    Each waiter receives a fresh wrapper chained to the original failure, so
    the shared exception instance is never re-raised from several threads.
    """

    def __init__(self, message: str, *, key: str) -> None:
        super().__init__(message)
        self.key: str = key


def unwrap_one_layer(
    error: BaseException,
    wrappers: tuple[type[BaseException], ...],
) -> BaseException:
    """Strip a single wrapper exception layer.

    Args:
        error: The exception that was caught.
        wrappers: Exception types considered to be wrappers.

    Returns:
        The direct cause when `error` is one of `wrappers` and has a cause,
        otherwise `error` itself.
    """
    if isinstance(error, wrappers) and error.__cause__ is not None:
        return error.__cause__
    return error


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(StacheviewError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
