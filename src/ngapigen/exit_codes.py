"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~ngapigen.exceptions.NgApiGenError` subclass.
Build scripts can inspect the exit code to tell a broken spec apart from a
broken template directory without parsing stderr.

Example::

    $ ngapigen generate openapi.yaml -t templates -o src/app/api
    $ echo $?
    7   # EXIT_SPEC_PARSE_ERROR -- the document could not be read
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments."""

EXIT_SPEC_PARSE_ERROR = 7
"""The OpenAPI specification could not be parsed or validated."""

EXIT_STRUCTURAL_INCONSISTENCY = 8
"""A path placeholder had no matching parameter and strict paths were requested."""

EXIT_RENDER_ERROR = 9
"""A template was missing or failed to render."""
