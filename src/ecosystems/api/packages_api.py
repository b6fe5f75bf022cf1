# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module contains the endpoints of the packages.ecosyste.ms API."""

from requests.models import Response

from ecosystems.api.base_api import BaseAPI


class PackagesAPI(BaseAPI):
    """The packages.ecosyste.ms API.

    See https://packages.ecosyste.ms/docs for the schema of the responses.
    """

    def bulk_lookup(self, purls: list[str]) -> Response:
        """Look up several packages by PURL in one request.

        The API accepts at most 100 PURLs per request.
        """
        return self.post("packages", "bulk_lookup", json_data={"purls": purls})

    def get_registry_package(self, registry: str, name: str) -> Response:
        """Get a package of a registry."""
        return self.get("registries", registry, "packages", name)

    def get_registry_package_version(self, registry: str, name: str, version: str) -> Response:
        """Get a version of a package of a registry, with its dependencies."""
        return self.get("registries", registry, "packages", name, "versions", version)

    def get_registry_package_versions(self, registry: str, name: str, page: int, per_page: int) -> Response:
        """Get one page of the versions of a package of a registry."""
        return self.get(
            "registries", registry, "packages", name, "versions", params={"page": page, "per_page": per_page}
        )

    def get_registries(self) -> Response:
        """Get the registries known to the API."""
        return self.get("registries")
