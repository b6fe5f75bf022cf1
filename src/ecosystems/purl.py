# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This module maps Package URLs (PURLs) to ecosyste.ms registries and package names.

The PURL syntax itself is handled by ``packageurl-python``.
"""

import logging

from packageurl import PackageURL

from ecosystems.errors import MalformedPURLError

logger: logging.Logger = logging.getLogger(__name__)

PURL_SCHEME = "pkg:"

# PURL types mapped to ecosyste.ms registry names. An empty string marks a type that has no
# single backing registry and therefore cannot be looked up by registry and name.
PURL_TYPE_TO_REGISTRY: dict[str, str] = {
    "alpm": "archlinux.org",
    "apk": "alpine-edge",
    "bitbucket": "",
    "bitnami": "",
    "bower": "bower.io",
    "cargo": "crates.io",
    "carthage": "carthage",
    "chef": "supermarket.chef.io",
    "chocolatey": "chocolatey.org",
    "clojars": "clojars.org",
    "cocoapods": "cocoapods.org",
    "composer": "packagist.org",
    "conan": "conan.io",
    "conda": "anaconda.org",
    "cpan": "metacpan.org",
    "cran": "cran.r-project.org",
    "docker": "hub.docker.com",
    "elm": "package.elm-lang.org",
    "gem": "rubygems.org",
    "generic": "",
    "github": "",
    "golang": "proxy.golang.org",
    "hackage": "hackage.haskell.org",
    "hex": "hex.pm",
    "huggingface": "",
    "maven": "repo1.maven.org",
    "npm": "npmjs.org",
    "nuget": "nuget.org",
    "oci": "",
    "pub": "pub.dev",
    "pypi": "pypi.org",
    "rpm": "",
    "swift": "swiftpackageindex.com",
    "brew": "formulae.brew.sh",
    "deb": "debian",
    "julia": "juliahub.com",
    "puppet": "forge.puppet.com",
}

# Separators used to join the PURL namespace and name into the registry's package name.
# ``None`` means the namespace is not part of the registry's package name.
NAMESPACE_SEPARATORS: dict[str, str | None] = {
    "maven": ":",
    "apk": None,
}
DEFAULT_NAMESPACE_SEPARATOR = "/"


def registry_for(purl: PackageURL) -> str:
    """Return the ecosyste.ms registry name for the type of the PURL.

    Parameters
    ----------
    purl: PackageURL
        The PURL.

    Returns
    -------
    str
        The registry name, or an empty string if the PURL type is not supported.
    """
    return PURL_TYPE_TO_REGISTRY.get(purl.type, "")


def name_for(purl: PackageURL) -> str:
    """Return the package name in the format used by the ecosyste.ms registry of the PURL.

    Parameters
    ----------
    purl: PackageURL
        The PURL.

    Returns
    -------
    str
        The package name.

    Examples
    --------
    >>> name_for(PackageURL(type="maven", namespace="org.apache.commons", name="commons-lang3"))
    'org.apache.commons:commons-lang3'
    >>> name_for(PackageURL(type="apk", namespace="alpine", name="curl"))
    'curl'
    >>> name_for(PackageURL(type="golang", namespace="github.com/go-git", name="go-git"))
    'github.com/go-git/go-git'
    """
    if not purl.namespace:
        return purl.name

    separator = NAMESPACE_SEPARATORS.get(purl.type, DEFAULT_NAMESPACE_SEPARATOR)
    if separator is None:
        return purl.name
    return f"{purl.namespace}{separator}{purl.name}"


def supported_types() -> list[str]:
    """Return the PURL types that have an ecosyste.ms registry.

    The order of the returned list is not significant.

    Returns
    -------
    list[str]
        The supported PURL types.
    """
    return [purl_type for purl_type, registry in PURL_TYPE_TO_REGISTRY.items() if registry]


def parse_purl(text: str) -> PackageURL:
    """Parse a PURL string, with or without the ``pkg:`` scheme.

    The leading ``@`` of an npm scope is dropped from the namespace, e.g. ``pkg:npm/@babel/core``
    has the namespace ``babel``.

    Parameters
    ----------
    text: str
        The PURL string.

    Returns
    -------
    PackageURL
        The parsed PURL.

    Raises
    ------
    MalformedPURLError
        If the PURL string is invalid.
    """
    if not text.startswith(PURL_SCHEME):
        text = PURL_SCHEME + text

    try:
        purl = PackageURL.from_string(text)
    except ValueError as error:
        raise MalformedPURLError(f"Invalid PURL {text}: {error}") from error

    if purl.type == "npm" and purl.namespace and purl.namespace.startswith("@"):
        purl = PackageURL(
            type=purl.type,
            namespace=purl.namespace[1:] or None,
            name=purl.name,
            version=purl.version,
            qualifiers=purl.qualifiers,
            subpath=purl.subpath,
        )

    return purl


def package_identity(text: str) -> str | None:
    """Return the canonical PURL string of the package a PURL string refers to.

    The version, qualifiers and subpath are left out, so all the versions of a package share one identity.

    Parameters
    ----------
    text: str
        The PURL string.

    Returns
    -------
    str | None
        The canonical PURL string of the package, or None if the PURL string cannot be parsed.

    Examples
    --------
    >>> package_identity("npm/lodash@4.17.21")
    'pkg:npm/lodash'
    """
    try:
        purl = parse_purl(text)
    except MalformedPURLError as error:
        logger.debug(error)
        return None
    return PackageURL(type=purl.type, namespace=purl.namespace, name=purl.name).to_string()
