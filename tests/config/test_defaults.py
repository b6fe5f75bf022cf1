# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module tests the defaults module."""

import os
from pathlib import Path

from ecosystems.config.defaults import create_defaults, defaults, load_defaults


def test_load_defaults() -> None:
    """Test loading the defaults shipped with the package."""
    assert defaults.get("ecosystems", "packages_server") == "https://packages.ecosyste.ms/api/v1"
    assert defaults.get("ecosystems", "repos_server") == "https://repos.ecosyste.ms/api/v1"
    assert defaults.getint("requests", "timeout") == 30


def test_load_user_defaults(tmp_path: Path) -> None:
    """Test that the values in user configuration are prioritized."""
    config_path = os.path.join(tmp_path, "config.ini")
    with open(config_path, "w", encoding="utf-8") as config_file:
        config_file.write("[ecosystems]\npackages_server = http://localhost:8080/api/v1\n")

    assert load_defaults(config_path) is True
    assert defaults.get("ecosystems", "packages_server") == "http://localhost:8080/api/v1"
    assert defaults.get("ecosystems", "repos_server") == "https://repos.ecosyste.ms/api/v1"

    # A missing user configuration file is ignored.
    assert load_defaults(os.path.join(tmp_path, "missing.ini")) is True


def test_load_defaults_invalid(tmp_path: Path) -> None:
    """Test loading a user configuration file that cannot be parsed."""
    config_path = os.path.join(tmp_path, "config.ini")
    with open(config_path, "w", encoding="utf-8") as config_file:
        config_file.write("no section header\n")

    assert load_defaults(config_path) is False


def test_create_defaults(tmp_path: Path) -> None:
    """Test dumping the default values."""
    assert create_defaults(str(tmp_path), str(tmp_path)) is True
    assert tmp_path.joinpath("defaults.ini").is_file()

