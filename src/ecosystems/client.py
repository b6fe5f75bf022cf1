# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module contains the client of the packages.ecosyste.ms and repos.ecosyste.ms APIs.

Every call is a live request: nothing is cached and nothing is retried. Lookups of a single
entity return ``None`` when the API answers 404 and raise an error for any other failure.
"""

import logging

import requests
from packageurl import PackageURL
from requests.models import Response

from ecosystems.api.packages_api import PackagesAPI
from ecosystems.api.repos_api import ReposAPI
from ecosystems.config.defaults import defaults
from ecosystems.errors import (
    BackendError,
    BulkLookupFailedError,
    ConfigurationError,
    MissingVersionError,
    UnsupportedEcosystemError,
)
from ecosystems.json_tools import json_extract, response_json
from ecosystems.purl import name_for, package_identity, parse_purl, registry_for
from ecosystems.util import build_session, get_request_timeout

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_PACKAGES_SERVER = "https://packages.ecosyste.ms/api/v1"
DEFAULT_REPOS_SERVER = "https://repos.ecosyste.ms/api/v1"

# The maximum number of PURLs accepted by one bulk lookup request.
MAX_BULK_LOOKUP_SIZE = 100

# The number of versions requested per page.
VERSIONS_PAGE_SIZE = 100


class Client:
    """The ecosyste.ms API client.

    Examples
    --------
    >>> client = Client("my-app/1.0", from_email="me@example.com")
    >>> client.lookup("pkg:npm/lodash")["name"]
    'lodash'
    """

    def __init__(
        self,
        user_agent: str,
        packages_server: str | None = None,
        repos_server: str | None = None,
        session: requests.Session | None = None,
        from_email: str | None = None,
        api_key: str | None = None,
        timeout: int | None = None,
    ) -> None:
        """Initialize the client.

        The options that are not set are read from the ``[ecosystems]`` and ``[requests]`` sections
        of the .ini configuration.

        Parameters
        ----------
        user_agent: str
            The ``User-Agent`` header identifying the application. Required.
        packages_server: str | None
            The base address of the packages API.
        repos_server: str | None
            The base address of the repos API.
        session: requests.Session | None
            The session used to send requests. By default, a session with pooled connections is created.
        from_email: str | None
            The contact address sent in the ``From`` header.
        api_key: str | None
            The API key sent as a bearer token in the ``Authorization`` header.
        timeout: int | None
            The timeout in seconds of every request.

        Raises
        ------
        ConfigurationError
            If the user agent is empty or the configuration is invalid.
        """
        if not user_agent:
            raise ConfigurationError("A user agent identifying the application is required.")

        self.user_agent = user_agent
        self.headers = {"User-Agent": user_agent}
        if from_email:
            self.headers["From"] = from_email
        if api_key:
            self.headers["Authorization"] = f"Bearer {api_key}"

        packages_server = packages_server or _get_server("packages_server", DEFAULT_PACKAGES_SERVER)
        repos_server = repos_server or _get_server("repos_server", DEFAULT_REPOS_SERVER)
        timeout = timeout or get_request_timeout()

        self._owns_session = session is None
        self.session = session or build_session()

        self.packages_api = PackagesAPI(packages_server, self.session, headers=self.headers, timeout=timeout)
        self.repos_api = ReposAPI(repos_server, self.session, headers=self.headers, timeout=timeout)

    def close(self) -> None:
        """Close the session if it was created by the client."""
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def bulk_lookup(self, purls: list[str]) -> dict[str, dict]:
        """Look up packages by PURL.

        The PURLs are sent in batches of ``MAX_BULK_LOOKUP_SIZE``, one request per batch, in the input order.
        A PURL the API knows nothing about is missing from the result.

        Parameters
        ----------
        purls: list[str]
            The PURL strings.

        Returns
        -------
        dict[str, dict]
            The package records keyed by the PURL strings as they were passed.

        Raises
        ------
        BulkLookupFailedError
            If the API rejects a batch with an error message.
        BackendError
            If the API answers a batch with any other unexpected status.
        TransportError
            If a request could not be completed.
        """
        results: dict[str, dict] = {}

        for start in range(0, len(purls), MAX_BULK_LOOKUP_SIZE):
            batch = purls[start : start + MAX_BULK_LOOKUP_SIZE]
            logger.debug("Bulk lookup of PURLs %s to %s of %s.", start + 1, start + len(batch), len(purls))

            response = self.packages_api.bulk_lookup(batch)
            if response.status_code != 200:
                message = _get_error_message(response)
                if response.status_code == 400 and message:
                    raise BulkLookupFailedError(message, response.status_code)
                raise BackendError(f"Bulk lookup failed with status {response.status_code}.", response.status_code)

            records = response_json(response, list) or []
            results.update(_match_records(batch, records))

        return results

    def lookup(self, purl: str) -> dict | None:
        """Look up a package by PURL.

        Parameters
        ----------
        purl: str
            The PURL string.

        Returns
        -------
        dict | None
            The package record, or None if the package is not found.
        """
        return self.bulk_lookup([purl]).get(purl)

    def lookup_by_registry_and_name(self, registry: str, name: str) -> dict | None:
        """Look up a package by registry and name.

        Parameters
        ----------
        registry: str
            The registry name, e.g. ``npmjs.org``.
        name: str
            The package name in the registry's format.

        Returns
        -------
        dict | None
            The package record, or None if the package is not found.

        Raises
        ------
        BackendError
            If the API answers with a status other than 200 or 404.
        TransportError
            If the request could not be completed.
        """
        response = self.packages_api.get_registry_package(registry, name)
        return _get_optional_record(response, "Lookup")

    def get_version(self, registry: str, name: str, version: str) -> dict | None:
        """Get a version of a package, with its dependencies.

        Parameters
        ----------
        registry: str
            The registry name.
        name: str
            The package name in the registry's format.
        version: str
            The version number.

        Returns
        -------
        dict | None
            The version record, or None if the package or the version is not found.

        Raises
        ------
        BackendError
            If the API answers with a status other than 200 or 404.
        TransportError
            If the request could not be completed.
        """
        response = self.packages_api.get_registry_package_version(registry, name, version)
        return _get_optional_record(response, "Get version")

    def get_all_versions(self, registry: str, name: str) -> list[dict]:
        """Get all the versions of a package.

        The versions are requested page by page, ``VERSIONS_PAGE_SIZE`` at a time, until a page is
        empty or shorter than the page size. The pages are concatenated in the order they are requested.

        A package that is not found and a package without versions both yield an empty list.
        A 404 on any page yields an empty list, dropping the pages already received.

        Parameters
        ----------
        registry: str
            The registry name.
        name: str
            The package name in the registry's format.

        Returns
        -------
        list[dict]
            The version records.

        Raises
        ------
        BackendError
            If the API answers any page with a status other than 200 or 404.
        TransportError
            If a request could not be completed.
        """
        versions: list[dict] = []
        page = 1

        while True:
            response = self.packages_api.get_registry_package_versions(registry, name, page, VERSIONS_PAGE_SIZE)
            if response.status_code == 404:
                logger.debug("Page %s of the versions of %s/%s is not found.", page, registry, name)
                return []
            if response.status_code != 200:
                raise _backend_error(response, "Get versions")

            records = response_json(response, list)
            if not records:
                break

            versions.extend(records)
            logger.debug("Received %s versions of %s/%s in page %s.", len(records), registry, name, page)

            if len(records) < VERSIONS_PAGE_SIZE:
                break
            page += 1

        return versions

    def get_repository(self, url: str) -> dict | None:
        """Look up a repository by URL.

        Parameters
        ----------
        url: str
            The repository URL, e.g. ``https://github.com/rails/rails``.

        Returns
        -------
        dict | None
            The repository record, or None if the repository is not found.

        Raises
        ------
        BackendError
            If the API answers with a status other than 200 or 404.
        TransportError
            If the request could not be completed.
        """
        response = self.repos_api.repositories_lookup(url)
        return _get_optional_record(response, "Lookup repository")

    def list_registries(self) -> list[dict]:
        """Return the registries known to the packages API.

        Raises
        ------
        BackendError
            If the API answers with a status other than 200.
        TransportError
            If the request could not be completed.
        """
        response = self.packages_api.get_registries()
        if response.status_code != 200:
            raise _backend_error(response, "List registries")
        return response_json(response, list) or []

    def lookup_purl(self, purl: PackageURL | str) -> dict | None:
        """Look up a package by PURL using its registry and name.

        Unlike :meth:`lookup`, this returns the full package record of the registry endpoint.

        Raises
        ------
        MalformedPURLError
            If the PURL string is invalid.
        UnsupportedEcosystemError
            If the PURL type has no registry.
        """
        registry, name = _resolve(purl)
        return self.lookup_by_registry_and_name(registry, name)

    def get_version_purl(self, purl: PackageURL | str) -> dict | None:
        """Get the version of a package a PURL refers to.

        Raises
        ------
        MalformedPURLError
            If the PURL string is invalid.
        MissingVersionError
            If the PURL has no version.
        UnsupportedEcosystemError
            If the PURL type has no registry.
        """
        if isinstance(purl, str):
            purl = parse_purl(purl)
        if not purl.version:
            raise MissingVersionError(f"The PURL {purl.to_string()} has no version.")
        registry, name = _resolve(purl)
        return self.get_version(registry, name, purl.version)

    def get_all_versions_purl(self, purl: PackageURL | str) -> list[dict]:
        """Get all the versions of the package a PURL refers to.

        Raises
        ------
        MalformedPURLError
            If the PURL string is invalid.
        UnsupportedEcosystemError
            If the PURL type has no registry.
        """
        registry, name = _resolve(purl)
        return self.get_all_versions(registry, name)


def _get_server(key: str, fallback: str) -> str:
    """Return a server address from the ``[ecosystems]`` section of the .ini configuration."""
    server = defaults.get("ecosystems", key, fallback=fallback)
    if not server:
        raise ConfigurationError(
            f'The "{key}" key is empty in section [ecosystems] of the .ini configuration file.'
        )
    return server


def _resolve(purl: PackageURL | str) -> tuple[str, str]:
    """Return the registry and the package name of a PURL."""
    if isinstance(purl, str):
        purl = parse_purl(purl)
    registry = registry_for(purl)
    if not registry:
        raise UnsupportedEcosystemError(f"Unsupported PURL type: {purl.type}")
    return registry, name_for(purl)


def _get_error_message(response: Response) -> str | None:
    """Return the ``error`` message embedded in the JSON body of an error response, if any."""
    try:
        body = response.json()
    except requests.exceptions.JSONDecodeError:
        return None
    if not isinstance(body, dict):
        return None
    return json_extract(body, ["error"], str) or None


def _backend_error(response: Response, action: str) -> BackendError:
    """Return the error describing an unexpected response."""
    message = _get_error_message(response)
    if message:
        return BackendError(f"{action} failed with status {response.status_code}: {message}", response.status_code)
    return BackendError(f"{action} failed with status {response.status_code}.", response.status_code)


def _get_optional_record(response: Response, action: str) -> dict | None:
    """Return the record of a single entity response, or None if the entity is not found."""
    if response.status_code == 404:
        return None
    if response.status_code != 200:
        raise _backend_error(response, action)
    return response_json(response, dict)


def _match_records(batch: list[str], records: list) -> dict[str, dict]:
    """Key the records returned for a batch by the PURL strings of the batch.

    A record is matched on its ``purl`` field: first to the identical PURL string, then to the PURL
    strings referring to the same package. Records that match no PURL of the batch are dropped.
    """
    by_purl: dict[str, dict] = {}
    for record in records:
        record_purl = json_extract(record, ["purl"], str) if isinstance(record, dict) else None
        if record_purl is None:
            logger.debug("Ignoring a bulk lookup record without a PURL.")
            continue
        by_purl[record_purl] = record

    matched: dict[str, dict] = {}
    unmatched: list[str] = []
    for purl in batch:
        if purl in by_purl:
            matched[purl] = by_purl[purl]
        else:
            unmatched.append(purl)

    if unmatched and by_purl:
        by_identity: dict[str, dict] = {}
        for record_purl, record in by_purl.items():
            identity = package_identity(record_purl)
            if identity:
                by_identity.setdefault(identity, record)
        for purl in unmatched:
            identity = package_identity(purl)
            if identity and identity in by_identity:
                matched[purl] = by_identity[identity]

    return matched
