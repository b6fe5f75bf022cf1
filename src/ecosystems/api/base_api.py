# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module defines the base class of the ecosyste.ms API wrappers."""

import logging
import urllib.parse

import requests
from requests.models import Response

from ecosystems.errors import ConfigurationError
from ecosystems.util import send_get_http_raw, send_post_http_raw

logger: logging.Logger = logging.getLogger(__name__)

# Characters left unescaped in a path segment. The forward slash is escaped so that names
# such as ``github.com/go-git/go-git`` stay in a single segment.
PATH_SEGMENT_SAFE_CHARS = "$&+=:@"


class BaseAPI:
    """Base class of the ecosyste.ms API wrappers.

    A wrapper sends requests to one API server. Every request carries the same headers.
    The responses are returned as they are: status codes are interpreted by the caller.
    """

    def __init__(
        self,
        server: str,
        session: requests.Session,
        headers: dict[str, str] | None = None,
        timeout: int | None = None,
    ) -> None:
        """Initialize the API wrapper.

        Parameters
        ----------
        server: str
            The base address of the API, e.g. ``https://packages.ecosyste.ms/api/v1``.
        session: requests.Session
            The session used to send the requests.
        headers: dict[str, str] | None
            The headers added to every request.
        timeout: int | None
            The timeout in seconds of every request.

        Raises
        ------
        ConfigurationError
            If the server address is not an absolute http(s) URL.
        """
        parsed_server = urllib.parse.urlsplit(server)
        if parsed_server.scheme not in ("http", "https") or not parsed_server.netloc:
            raise ConfigurationError(f"The API server address {server} is not a valid http(s) URL.")

        self.server = server.rstrip("/")
        self.session = session
        self.headers = headers or {}
        self.timeout = timeout

    def get_url(self, *segments: str) -> str:
        """Return the URL of an endpoint made of the given path segments.

        Each segment is percent-encoded on its own.

        Parameters
        ----------
        segments: str
            The path segments, relative to the base address of the API.

        Returns
        -------
        str
            The endpoint URL.

        Examples
        --------
        >>> api.get_url("registries", "proxy.golang.org", "packages", "github.com/go-git/go-git")
        'https://packages.ecosyste.ms/api/v1/registries/proxy.golang.org/packages/github.com%2Fgo-git%2Fgo-git'
        """
        path = "/".join(urllib.parse.quote(segment, safe=PATH_SEGMENT_SAFE_CHARS) for segment in segments)
        return f"{self.server}/{path}"

    def get(self, *segments: str, params: dict | None = None) -> Response:
        """Send a GET request to an endpoint of the API.

        Raises
        ------
        TransportError
            If the request could not be completed.
        """
        return send_get_http_raw(
            self.session, self.get_url(*segments), headers=self.headers, params=params, timeout=self.timeout
        )

    def post(self, *segments: str, json_data: dict | None = None) -> Response:
        """Send a POST request with a JSON body to an endpoint of the API.

        Raises
        ------
        TransportError
            If the request could not be completed.
        """
        return send_post_http_raw(
            self.session, self.get_url(*segments), json_data=json_data, headers=self.headers, timeout=self.timeout
        )
