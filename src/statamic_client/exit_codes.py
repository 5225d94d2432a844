"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~statamic_client.exceptions.StatamicError` subclass.
Shell wrappers can inspect the exit code to tell a configuration problem
from a failed API call without parsing stderr.

Example::

    $ statamic-client entries pages
    $ echo $?
    5   # EXIT_REQUEST_FAILURE -- the API call failed
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred (also used for configuration errors)."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or without a configured client."""

EXIT_REQUEST_FAILURE = 5
"""The API call failed (network error, non-2xx status, or malformed body)."""
