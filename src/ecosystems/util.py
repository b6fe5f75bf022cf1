# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module includes the HTTP utility functions shared by the ecosyste.ms API wrappers."""

import logging

import requests
from requests.adapters import HTTPAdapter
from requests.models import Response

from ecosystems.config.defaults import defaults
from ecosystems.errors import ConfigurationError, TransportError

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def get_request_timeout() -> int:
    """Return the request timeout in seconds from the ``[requests]`` section of the .ini configuration.

    Returns
    -------
    int
        The timeout in seconds.

    Raises
    ------
    ConfigurationError
        If the configured timeout is not a positive integer.
    """
    try:
        timeout = defaults.getint("requests", "timeout", fallback=DEFAULT_TIMEOUT)
    except ValueError as error:
        raise ConfigurationError(
            f'The "timeout" value in section [requests] of the .ini configuration file is invalid: {error}'
        ) from error
    if timeout <= 0:
        raise ConfigurationError('The "timeout" value in section [requests] must be greater than zero.')
    return timeout


def build_session() -> requests.Session:
    """Create a session tuned for connection reuse against the ecosyste.ms APIs.

    The pool sizes are read from the ``[requests]`` section of the .ini configuration.
    Retries are disabled: every request is attempted once.

    Returns
    -------
    requests.Session
        The new session.

    Raises
    ------
    ConfigurationError
        If a pool size in the .ini configuration is invalid.
    """
    try:
        pool_connections = defaults.getint("requests", "pool_connections", fallback=10)
        pool_maxsize = defaults.getint("requests", "pool_maxsize", fallback=100)
    except ValueError as error:
        raise ConfigurationError(
            f"The connection pool sizes in section [requests] of the .ini configuration file are invalid: {error}"
        ) from error

    adapter = HTTPAdapter(pool_connections=pool_connections, pool_maxsize=pool_maxsize, max_retries=0)
    session = requests.Session()
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def send_get_http_raw(
    session: requests.Session,
    url: str,
    headers: dict | None = None,
    params: dict | None = None,
    timeout: int | None = None,
) -> Response:
    """Send the GET HTTP request with the given url, headers and query parameters.

    The response is returned whatever its status code is. Interpreting the status is left to the caller.

    Parameters
    ----------
    session : requests.Session
        The session used to send the request.
    url : str
        The url of the request.
    headers : dict | None
        The dict that describes the headers of the request.
    params : dict | None
        The query parameters of the request.
    timeout: int | None
        The request timeout in seconds (optional).

    Returns
    -------
    Response
        The response of the server.

    Raises
    ------
    TransportError
        If the request could not be completed.
    """
    logger.debug("GET - %s", url)
    try:
        response = session.get(url=url, headers=headers, params=params, timeout=timeout or get_request_timeout())
    except requests.exceptions.RequestException as error:
        raise TransportError(f"GET {url} failed: {error}") from error

    if response.status_code != 200:
        logger.debug("Receiving error code %s from server.", response.status_code)
    return response


def send_post_http_raw(
    session: requests.Session,
    url: str,
    json_data: dict | None = None,
    headers: dict | None = None,
    timeout: int | None = None,
) -> Response:
    """Send a POST HTTP request with the given url, JSON payload and headers.

    The response is returned whatever its status code is. Interpreting the status is left to the caller.

    Parameters
    ----------
    session : requests.Session
        The session used to send the request.
    url : str
        The url of the request.
    json_data: dict | None
        The request payload.
    headers : dict | None
        The dict that describes the headers of the request.
    timeout: int | None
        The request timeout in seconds (optional).

    Returns
    -------
    Response
        The response of the server.

    Raises
    ------
    TransportError
        If the request could not be completed.
    """
    logger.debug("POST - %s", url)
    try:
        response = session.post(url=url, json=json_data, headers=headers, timeout=timeout or get_request_timeout())
    except requests.exceptions.RequestException as error:
        raise TransportError(f"POST {url} failed: {error}") from error

    if response.status_code != 200:
        logger.debug("Receiving error code %s from server.", response.status_code)
    return response
