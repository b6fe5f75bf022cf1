# Copyright (c) 2026 - 2026, Oracle and/or its affiliates. All rights reserved.
# Licensed under the Universal Permissive License v 1.0 as shown at https://oss.oracle.com/licenses/upl/.

"""This is the command-line entrypoint of the ecosyste.ms client."""

import argparse
import json
import logging
import os
import sys
from importlib import metadata as importlib_metadata

import ecosystems
from ecosystems.client import Client
from ecosystems.config.defaults import create_defaults, load_defaults
from ecosystems.errors import (
    BackendError,
    ConfigurationError,
    EcosystemsError,
    MalformedPURLError,
    MissingVersionError,
    TransportError,
    UnsupportedEcosystemError,
)
from ecosystems.purl import supported_types

logger: logging.Logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = f"ecosystems-python/{ecosystems.__version__}"


def _print_json(data: object) -> None:
    """Print the data as indented JSON on stdout."""
    print(json.dumps(data, indent=2))


def _print_optional(data: dict | None) -> None:
    """Print a record, or ``null`` and exit if the entity is not found."""
    _print_json(data)
    if data is None:
        logger.error("Not found.")
        sys.exit(os.EX_NOINPUT)


def perform_action(action_args: argparse.Namespace) -> None:
    """Perform the indicated action of the ecosyste.ms client."""
    match action_args.action:
        case "types":
            for purl_type in sorted(supported_types()):
                print(purl_type)
            return
        case "dump-defaults":
            if not create_defaults(os.getcwd(), os.getcwd()):
                sys.exit(os.EX_OSFILE)
            return

    client = Client(
        action_args.user_agent,
        from_email=action_args.from_email,
        api_key=action_args.api_key,
    )
    with client:
        match action_args.action:
            case "lookup":
                _print_json(client.bulk_lookup(action_args.purls))
            case "package":
                _print_optional(client.lookup_purl(action_args.purl))
            case "version":
                _print_optional(client.get_version_purl(action_args.purl))
            case "versions":
                _print_json(client.get_all_versions_purl(action_args.purl))
            case "repository":
                _print_optional(client.get_repository(action_args.url))
            case "registries":
                _print_json(client.list_registries())
            case _:
                logger.error("The ecosyste.ms client does not support command option %s.", action_args.action)
                sys.exit(os.EX_USAGE)


def main(argv: list[str] | None = None) -> None:
    """Execute the ecosyste.ms client as a standalone command-line tool.

    Parameters
    ----------
    argv: list[str] | None
        Command-line arguments.
        If ``argv`` is ``None``, argparse automatically looks at ``sys.argv``.
        Hence, we set ``argv = None`` by default.
    """
    main_parser = argparse.ArgumentParser(prog="ecosystems")

    main_parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
        help="Show the version number and exit",
    )

    main_parser.add_argument(
        "-v",
        "--verbose",
        help="Run with more debug logs",
        action="store_true",
    )

    main_parser.add_argument(
        "-dp",
        "--defaults-path",
        default="",
        help="The path to the defaults configuration file.",
    )

    main_parser.add_argument(
        "-ua",
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="The User-Agent header identifying the application.",
    )

    main_parser.add_argument(
        "--from",
        dest="from_email",
        default=os.environ.get("ECOSYSTEMS_FROM", ""),
        help="The contact email address sent in the From header. Defaults to $ECOSYSTEMS_FROM.",
    )

    main_parser.add_argument(
        "--api-key",
        default=os.environ.get("ECOSYSTEMS_API_KEY", ""),
        help="The ecosyste.ms API key. Defaults to $ECOSYSTEMS_API_KEY.",
    )

    sub_parser = main_parser.add_subparsers(dest="action", help="Run ecosystems <action> --help for help")

    lookup_parser = sub_parser.add_parser(name="lookup", help="Look up packages by PURL.")
    lookup_parser.add_argument("purls", nargs="+", help="The PURLs of the packages.")

    package_parser = sub_parser.add_parser(name="package", help="Get a package by PURL from its registry.")
    package_parser.add_argument("purl", help="The PURL of the package.")

    version_parser = sub_parser.add_parser(name="version", help="Get a package version by PURL.")
    version_parser.add_argument("purl", help="The PURL of the package, including the version.")

    versions_parser = sub_parser.add_parser(name="versions", help="List all the versions of a package.")
    versions_parser.add_argument("purl", help="The PURL of the package.")

    repository_parser = sub_parser.add_parser(name="repository", help="Look up a repository by URL.")
    repository_parser.add_argument("url", help="The URL of the repository.")

    sub_parser.add_parser(name="registries", help="List the registries.")
    sub_parser.add_parser(name="types", help="List the supported PURL types.")
    sub_parser.add_parser(name="dump-defaults", help="Write the default configuration to the current directory.")

    args = main_parser.parse_args(argv)

    if not args.action:
        main_parser.print_help()
        sys.exit(os.EX_USAGE)

    if args.verbose:
        log_level = logging.DEBUG
        log_format = "%(asctime)s [%(name)s:%(funcName)s:%(lineno)d] [%(levelname)s] %(message)s"
    else:
        log_level = logging.INFO
        log_format = "%(asctime)s [%(levelname)s] %(message)s"

    # Logs go to stderr so that stdout only holds the JSON output.
    logging.basicConfig(format=log_format, handlers=[logging.StreamHandler(sys.stderr)], force=True, level=log_level)

    if not load_defaults(args.defaults_path):
        logger.error("Exiting because the defaults configuration could not be loaded.")
        sys.exit(os.EX_NOINPUT)

    try:
        perform_action(args)
    except (ConfigurationError, MalformedPURLError, UnsupportedEcosystemError, MissingVersionError) as error:
        logger.error(error)
        sys.exit(os.EX_USAGE)
    except (BackendError, TransportError) as error:
        logger.error(error)
        sys.exit(os.EX_UNAVAILABLE)
    except EcosystemsError as error:
        logger.error(error)
        sys.exit(os.EX_SOFTWARE)


def _get_version() -> str:
    """Return the installed version of the package."""
    try:
        return importlib_metadata.version("ecosystems")
    except importlib_metadata.PackageNotFoundError:
        return ecosystems.__version__


if __name__ == "__main__":
    main()
