# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module contains the endpoints of the repos.ecosyste.ms API."""

from requests.models import Response

from ecosystems.api.base_api import BaseAPI


class ReposAPI(BaseAPI):
    """The repos.ecosyste.ms API.

    See https://repos.ecosyste.ms/docs for the schema of the responses.
    """

    def repositories_lookup(self, url: str) -> Response:
        """Look up a repository by its URL."""
        return self.get("repositories", "lookup", params={"url": url})
