"""Exception hierarchy for specdoc.

All exceptions inherit from :class:`SpecdocError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`specdoc.exit_codes`.
The top-level error handler in :func:`specdoc.app.main` catches
``SpecdocError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    SpecdocError (exit 1)
    +-- InvalidUsageError         (exit 2)
    +-- SpecParseError            (exit 7)
    +-- ConfigError               (exit 1)
    +-- DocumentationDefectError  (exit 8)

The synthesis core itself never raises for malformed references or
unsupported schema shapes; those degrade gracefully and are logged.
"""

from specdoc.exit_codes import (
    EXIT_DOCUMENTATION_DEFECTS,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_SPEC_PARSE_ERROR,
)


class SpecdocError(Exception):
    """Base exception for all specdoc errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`specdoc.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SpecdocError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class SpecParseError(SpecdocError):
    """Raised when an input cannot be loaded: a specification or a generated record file."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class ConfigError(SpecdocError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE


class DocumentationDefectError(SpecdocError):
    """Raised by ``specdoc analyze --strict`` when the analysis reports issues.

    Args:
        message: Summary line printed to stderr.
        issues: The individual issue strings from the analysis.
    """

    exit_code = EXIT_DOCUMENTATION_DEFECTS

    def __init__(self, message: str, issues: list[str] | None = None):
        super().__init__(message)
        self.issues = list(issues or [])
