# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module provides utility functions for JSON data."""
import logging
from collections.abc import Sequence
from typing import TypeVar

import requests

from ecosystems.errors import InvalidHTTPResponseError

JsonType = int | float | str | None | bool | list["JsonType"] | dict[str, "JsonType"]
T = TypeVar("T", bound=JsonType)

logger: logging.Logger = logging.getLogger(__name__)


def json_extract(entry: dict | list, keys: Sequence[str | int], type_: type[T]) -> T | None:
    """Return the value found by following the list of depth-sequential keys inside the passed JSON dictionary.

    The value must be of the passed type.

    Parameters
    ----------
    entry: dict | list
        An entry point into a JSON structure.
    keys: Sequence[str | int]
        The sequence of depth-sequential keys within the JSON. Can be dict keys or list indices.
    type_: type[T]
        The type to check the value against and return it as.

    Returns
    -------
    T | None:
        The found value as the type of the type parameter.
    """
    for key in keys:
        if isinstance(entry, dict) and isinstance(key, str):
            if key not in entry:
                logger.debug("JSON key '%s' not found in dict entry.", key)
                return None
            entry = entry[key]
        elif isinstance(entry, list) and isinstance(key, int):
            if key < 0 or key >= len(entry):
                logger.debug("JSON list index '%s' is outside of list bounds %s.", key, len(entry))
                return None
            entry = entry[key]
        else:
            logger.debug("Cannot index '%s' (type: %s) in entry (type: %s).", key, type(key), type(entry))
            return None

    if isinstance(entry, type_):
        return entry

    logger.debug("Found value of incorrect type: %s instead of %s.", type(entry), type_)
    return None


def response_json(response: requests.Response, type_: type[T]) -> T | None:
    """Decode the body of a successful response and check its top-level type.

    An empty body or a JSON ``null`` is returned as ``None`` when a ``list`` is expected, since the
    collection endpoints answer that way when there is nothing to list. A ``dict`` must always be present.

    Parameters
    ----------
    response: requests.Response
        The response to decode.
    type_: type[T]
        The expected type of the decoded document, e.g. ``dict`` or ``list``.

    Returns
    -------
    T | None
        The decoded document.

    Raises
    ------
    InvalidHTTPResponseError
        If the body is not valid JSON, the document is not of the expected type, or an expected ``dict``
        is missing.
    """
    if not response.content:
        if type_ is list:
            return None
        raise InvalidHTTPResponseError(
            f"Expected a JSON {type_.__name__} from {response.url} but the body is empty.", response.status_code
        )

    try:
        data = response.json()
    except requests.exceptions.JSONDecodeError as error:
        raise InvalidHTTPResponseError(
            f"Unable to get a valid response from {response.url}: {error}", response.status_code
        ) from error

    if isinstance(data, type_) or (data is None and type_ is list):
        return data

    raise InvalidHTTPResponseError(
        f"Expected a JSON {type_.__name__} from {response.url} but found {type(data).__name__}.",
        response.status_code,
    )
