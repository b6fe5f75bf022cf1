# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module tests the HTTP utility functions."""

import os
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests
from pytest_httpserver import HTTPServer

from ecosystems.config.defaults import load_defaults
from ecosystems.errors import ConfigurationError, TransportError
from ecosystems.util import build_session, get_request_timeout, send_get_http_raw, send_post_http_raw


def _write_config(tmp_path: Path, config: str) -> str:
    config_path = os.path.join(tmp_path, "test_config.ini")
    with open(config_path, mode="w", encoding="utf-8") as config_file:
        config_file.write(config)
    return config_path


def test_get_request_timeout() -> None:
    """Test reading the default request timeout."""
    assert get_request_timeout() == 30


@pytest.mark.parametrize(
    "config",
    [
        """
        [requests]
        timeout = foo
        """,
        """
        [requests]
        timeout = 0
        """,
    ],
)
def test_get_request_timeout_invalid(tmp_path: Path, config: str) -> None:
    """Test reading an invalid request timeout."""
    load_defaults(_write_config(tmp_path, config))
    with pytest.raises(ConfigurationError):
        get_request_timeout()


def test_build_session(tmp_path: Path) -> None:
    """Test that the session pools connections and does not retry."""
    config = """
    [requests]
    pool_connections = 4
    pool_maxsize = 20
    """
    load_defaults(_write_config(tmp_path, config))

    session = build_session()
    adapter = session.get_adapter("https://packages.ecosyste.ms/api/v1")

    # pylint: disable=protected-access
    assert adapter._pool_connections == 4
    assert adapter._pool_maxsize == 20
    assert adapter.max_retries.total == 0
    assert session.get_adapter("http://localhost") is adapter


def test_build_session_invalid(tmp_path: Path) -> None:
    """Test building a session with invalid pool sizes."""
    config = """
    [requests]
    pool_maxsize = many
    """
    load_defaults(_write_config(tmp_path, config))
    with pytest.raises(ConfigurationError):
        build_session()


def test_send_get_http_raw(httpserver: HTTPServer) -> None:
    """Test that the response is returned whatever its status code is."""
    httpserver.expect_request("/ok", query_string={"page": "2"}, headers={"User-Agent": "agent"}).respond_with_data(
        "body"
    )
    httpserver.expect_request("/missing").respond_with_data("", status=404)

    with requests.Session() as session:
        response = send_get_http_raw(
            session, httpserver.url_for("/ok"), headers={"User-Agent": "agent"}, params={"page": 2}
        )
        assert response.status_code == 200
        assert response.text == "body"

        assert send_get_http_raw(session, httpserver.url_for("/missing")).status_code == 404


def test_send_post_http_raw(httpserver: HTTPServer) -> None:
    """Test sending a JSON payload."""
    httpserver.expect_request("/post", method="POST", json={"purls": ["pkg:npm/lodash"]}).respond_with_json([])

    with requests.Session() as session:
        response = send_post_http_raw(session, httpserver.url_for("/post"), json_data={"purls": ["pkg:npm/lodash"]})
        assert response.status_code == 200
        assert response.json() == []


def test_send_http_raw_transport_error() -> None:
    """Test that request exceptions are raised as transport errors."""
    session = MagicMock(spec=requests.Session)
    session.get.side_effect = requests.exceptions.ConnectionError("connection refused")
    session.post.side_effect = requests.exceptions.ReadTimeout("read timed out")

    with pytest.raises(TransportError, match="connection refused"):
        send_get_http_raw(session, "https://packages.ecosyste.ms/api/v1/registries")
    with pytest.raises(TransportError, match="read timed out"):
        send_post_http_raw(session, "https://packages.ecosyste.ms/api/v1/packages/bulk_lookup", json_data={})

    session.get.assert_called_once_with(
        url="https://packages.ecosyste.ms/api/v1/registries", headers=None, params=None, timeout=30
    )
