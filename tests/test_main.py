# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""Tests for the command-line entrypoint."""

import json
import os
from pathlib import Path

import pytest
from pytest_httpserver import HTTPServer

from ecosystems.__main__ import main
from ecosystems.purl import supported_types

# We need to pass fixture names as arguments to maintain an order.
# pylint: disable=redefined-outer-name


@pytest.fixture()
def defaults_path(httpserver: HTTPServer, tmp_path: Path) -> str:
    """Create a configuration file pointing the client at the test HTTP server."""
    config_path = os.path.join(tmp_path, "defaults.ini")
    with open(config_path, "w", encoding="utf-8") as config_file:
        config_file.write(
            "[ecosystems]\n"
            f"packages_server = {httpserver.url_for('/packages-api')}\n"
            f"repos_server = {httpserver.url_for('/repos-api')}\n"
        )
    return config_path


@pytest.mark.parametrize("flag", ["--version", "-V"])
def test_version(capsys: pytest.CaptureFixture, flag: str) -> None:
    """Test the ``--version/-V`` flag."""
    with pytest.raises(SystemExit) as exc_info:
        main([flag])
    out, _ = capsys.readouterr()

    assert out.startswith("ecosystems ")
    assert exc_info.value.code == 0


def test_no_action(capsys: pytest.CaptureFixture) -> None:
    """Test that the help is printed when no action is given."""
    with pytest.raises(SystemExit) as exc_info:
        main([])
    out, _ = capsys.readouterr()

    assert "usage: ecosystems" in out
    assert exc_info.value.code == os.EX_USAGE


def test_types(capsys: pytest.CaptureFixture) -> None:
    """Test listing the supported PURL types."""
    main(["types"])
    out, _ = capsys.readouterr()

    assert out.splitlines() == sorted(supported_types())


def test_dump_defaults(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test writing the default configuration to the current directory."""
    monkeypatch.chdir(tmp_path)
    main(["dump-defaults"])

    assert tmp_path.joinpath("defaults.ini").is_file()


def test_lookup(httpserver: HTTPServer, defaults_path: str, capsys: pytest.CaptureFixture) -> None:
    """Test looking up packages and the headers sent."""
    httpserver.expect_request(
        "/packages-api/packages/bulk_lookup",
        method="POST",
        json={"purls": ["pkg:npm/lodash", "pkg:gem/rails"]},
        headers={"User-Agent": "cli-test/1.0", "From": "me@example.com", "Authorization": "Bearer secret"},
    ).respond_with_json([{"purl": "pkg:npm/lodash", "name": "lodash"}])

    main(
        [
            "-dp",
            defaults_path,
            "-ua",
            "cli-test/1.0",
            "--from",
            "me@example.com",
            "--api-key",
            "secret",
            "lookup",
            "pkg:npm/lodash",
            "pkg:gem/rails",
        ]
    )
    out, _ = capsys.readouterr()

    assert json.loads(out) == {"pkg:npm/lodash": {"purl": "pkg:npm/lodash", "name": "lodash"}}


def test_versions(httpserver: HTTPServer, defaults_path: str, capsys: pytest.CaptureFixture) -> None:
    """Test listing the versions of a package."""
    httpserver.expect_request("/packages-api/registries/pypi.org/packages/requests/versions").respond_with_json(
        [{"number": "2.31.0"}]
    )

    main(["-dp", defaults_path, "versions", "pypi/requests"])
    out, _ = capsys.readouterr()

    assert json.loads(out) == [{"number": "2.31.0"}]


def test_repository_not_found(httpserver: HTTPServer, defaults_path: str, capsys: pytest.CaptureFixture) -> None:
    """Test that an absent result prints null and exits with an error code."""
    httpserver.expect_request("/repos-api/repositories/lookup").respond_with_data("", status=404)

    with pytest.raises(SystemExit) as exc_info:
        main(["-dp", defaults_path, "repository", "https://github.com/example/missing"])
    out, _ = capsys.readouterr()

    assert out.strip() == "null"
    assert exc_info.value.code == os.EX_NOINPUT


@pytest.mark.parametrize(
    "args",
    [
        ["package", "pkg:generic/foo"],
        ["version", "pkg:gem/rails"],
        ["versions", "gem"],
        ["-ua", "", "registries"],
    ],
)
def test_usage_errors(httpserver: HTTPServer, defaults_path: str, args: list[str]) -> None:
    """Test that invalid input exits with a usage error before any request is sent."""
    with pytest.raises(SystemExit) as exc_info:
        main(["-dp", defaults_path, *args])

    assert exc_info.value.code == os.EX_USAGE
    assert not httpserver.log


def test_backend_error(httpserver: HTTPServer, defaults_path: str) -> None:
    """Test that a failed request exits with an unavailable error."""
    httpserver.expect_request("/packages-api/registries").respond_with_data("", status=503)

    with pytest.raises(SystemExit) as exc_info:
        main(["-dp", defaults_path, "registries"])

    assert exc_info.value.code == os.EX_UNAVAILABLE
