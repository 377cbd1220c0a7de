"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~specdoc.exceptions.SpecdocError` subclass.
External tooling (CI scripts, shell wrappers) can inspect the exit code to
determine the failure class without parsing stderr.

Example::

    $ specdoc analyze openapi.yaml --strict
    $ echo $?
    8   # EXIT_DOCUMENTATION_DEFECTS -- the analysis reported issues
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI specification could not be loaded or parsed."""

EXIT_DOCUMENTATION_DEFECTS = 8
"""The synthesized documentation failed a strict analysis run."""
