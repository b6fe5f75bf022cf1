# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This package defines the endpoints of the ecosyste.ms APIs."""

from ecosystems.api.base_api import BaseAPI
from ecosystems.api.packages_api import PackagesAPI
from ecosystems.api.repos_api import ReposAPI

__all__ = ["BaseAPI", "PackagesAPI", "ReposAPI"]
