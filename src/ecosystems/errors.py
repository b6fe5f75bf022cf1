# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module contains error classes for the ecosyste.ms client."""


class EcosystemsError(Exception):
    """The base class for ecosyste.ms client errors."""


class ConfigurationError(EcosystemsError):
    """Happens when the client is constructed without the required settings or the .ini file is invalid."""


class MalformedPURLError(EcosystemsError):
    """Happens when the input PURL string is rejected by the PURL parser."""


class UnsupportedEcosystemError(EcosystemsError):
    """Happens when a PURL type has no ecosyste.ms registry mapped to it."""


class MissingVersionError(EcosystemsError):
    """Happens when a version-scoped operation is called with a PURL that has no version."""


class TransportError(EcosystemsError):
    """Happens when a request cannot be completed.

    Reasons can include:
        * connection errors
        * timeouts
        * invalid URLs
    """


class BackendError(EcosystemsError):
    """Happens when a backend API returns a status code other than 200 or 404."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        """Initialize the error.

        Parameters
        ----------
        message: str
            The error message. This is the backend's own message when it provides one.
        status_code: int | None
            The HTTP status code of the response, if there was one.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class BulkLookupFailedError(BackendError):
    """Happens when the bulk lookup endpoint rejects a batch with an error message."""


class InvalidHTTPResponseError(BackendError):
    """Happens when a successful HTTP response does not contain the expected JSON data."""
