# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Fixtures for tests."""

from collections.abc import Iterator

import pytest
from pytest_httpserver import HTTPServer

from ecosystems.client import Client
from ecosystems.config.defaults import defaults, load_defaults

# We need to pass fixture names as arguments to maintain an order.
# pylint: disable=redefined-outer-name

PACKAGES_API_PATH = "/packages-api"
REPOS_API_PATH = "/repos-api"


@pytest.fixture(autouse=True)
def setup_test() -> Iterator[None]:
    """Load the default values shipped with the package before each test and clear them afterwards."""
    load_defaults("")
    yield
    defaults.clear()


@pytest.fixture()
def client(httpserver: HTTPServer) -> Iterator[Client]:
    """Create a client that sends its requests to the test HTTP server.

    Parameters
    ----------
    httpserver: HTTPServer
        The test HTTP server.

    Returns
    -------
    Client
        The client.
    """
    with Client(
        "test-agent/1.0",
        packages_server=httpserver.url_for(PACKAGES_API_PATH),
        repos_server=httpserver.url_for(REPOS_API_PATH),
        timeout=5,
    ) as test_client:
        yield test_client
