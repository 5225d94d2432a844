"""Exception hierarchy for statamic_client.

All exceptions inherit from :class:`StatamicError`, which carries an
``exit_code`` attribute mapped to a constant from
:mod:`statamic_client.exit_codes`. The CLI catches ``StatamicError`` and
exits with the appropriate code.

Subclass hierarchy::

    StatamicError (exit 1)
    +-- ConfigError        (exit 1)
    +-- InvalidUsageError  (exit 2)
    +-- RequestError       (exit 5)
"""

from __future__ import annotations

import json
from typing import Any, Optional

from statamic_client.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_REQUEST_FAILURE,
)


class StatamicError(Exception):
    """Base exception for all statamic_client errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(StatamicError):
    """Raised for configuration problems (bad API URL, invalid profile files, unencodable params)."""

    exit_code = EXIT_GENERIC_FAILURE


class InvalidUsageError(StatamicError):
    """Raised when the client is used outside its setup context or the CLI is misused."""

    exit_code = EXIT_INVALID_USAGE


class RequestError(StatamicError):
    """Raised when a call to the API fails for any reason.

    Network errors, non-2xx responses, undecodable JSON bodies and bodies
    that do not match the expected envelope all end up here. The original
    exception is kept on :attr:`cause` (and chained via ``raise ... from``)
    together with the resolved URL and the request options so the failure
    can be diagnosed from the message alone.

    Args:
        cause: The exception that made the request fail.
        url: The fully resolved request URL.
        request_options: The options (headers, timeout, ...) the request
            was sent with.
        status_code: HTTP status code, when the server answered.
    """

    exit_code = EXIT_REQUEST_FAILURE

    def __init__(
        self,
        cause: BaseException,
        url: str,
        request_options: Optional[dict[str, Any]] = None,
        status_code: Optional[int] = None,
    ) -> None:
        self.cause = cause
        self.url = url
        self.request_options = dict(request_options or {})
        self.status_code = status_code
        message = (
            f"{cause}\n"
            f"URL: {url}\n"
            f"{json.dumps(self.request_options, indent=2, default=str)}"
        )
        super().__init__(message)
