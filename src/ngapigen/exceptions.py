"""Exception hierarchy for ngapigen.

All exceptions inherit from :class:`NgApiGenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`ngapigen.exit_codes`.
The top-level error handler in :func:`ngapigen.app.main` catches
``NgApiGenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    NgApiGenError (exit 1)
    +-- InvalidUsageError             (exit 2)
    +-- SpecParseError                (exit 7)
    +-- StructuralInconsistencyError  (exit 8)
    +-- RenderError                   (exit 9)
    +-- ConfigError                   (exit 1)
"""

from ngapigen.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_RENDER_ERROR,
    EXIT_SPEC_PARSE_ERROR,
    EXIT_STRUCTURAL_INCONSISTENCY,
)


class NgApiGenError(Exception):
    """Base exception for all ngapigen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`ngapigen.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(NgApiGenError):
    """Raised for invalid CLI arguments such as a malformed ``-D key=value``."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(NgApiGenError):
    """Raised when the OpenAPI spec cannot be loaded, parsed, or version-checked."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class StructuralInconsistencyError(NgApiGenError):
    """Raised when a path placeholder has no matching parameter.

    Only raised when strict paths are enabled; otherwise the placeholder is
    copied through by name and a warning is logged.

    Args:
        message: Human-readable error description.
        path: The raw path containing the placeholder.
        placeholder: The unresolved placeholder name.
    """

    exit_code = EXIT_STRUCTURAL_INCONSISTENCY

    def __init__(self, message: str, path: str = "", placeholder: str = ""):
        super().__init__(message)
        self.path = path
        self.placeholder = placeholder


class RenderError(NgApiGenError):
    """Raised when a template is missing or fails to render."""

    exit_code = EXIT_RENDER_ERROR


class ConfigError(NgApiGenError):
    """Raised for configuration problems (unreadable config file, invalid option values)."""

    exit_code = EXIT_GENERIC_FAILURE
