"""
Console entry point.

Starts the admin web console for a project directory.

Usage:
    citrus-admin --project-home /work/my-citrus-tests
    citrus-admin --project-home . --port 8080 -D citrus.admin.base.package=com.acme
    citrus-admin --properties-file citrus-admin.yaml --verbose
"""

from __future__ import annotations

import argparse
import sys
from typing import Dict, List, Optional

from loguru import logger

from citrus_admin.config.provider import PROJECT_HOME, SERVER_PORT, ConfigurationProvider
from citrus_admin.exceptions import ApplicationRuntimeError
from citrus_admin.services.project_service import ProjectService
from citrus_admin.web.app import create_app


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments for the console."""
    parser = argparse.ArgumentParser(description="Citrus Admin Console")
    parser.add_argument(
        "--project-home",
        type=str,
        default=None,
        help=f"Project directory to open (default: {PROJECT_HOME} property)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Interface to bind (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help=f"Port to listen on (default: {SERVER_PORT} property or 8080)",
    )
    parser.add_argument(
        "--properties-file",
        type=str,
        default=None,
        help="YAML, JSON or .properties file with system property overrides",
    )
    parser.add_argument(
        "-D",
        dest="properties",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Set a system property (repeatable)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def parse_properties(values: List[str]) -> Dict[str, str]:
    """Parse ``NAME=VALUE`` pairs; a bare ``NAME`` sets an empty value."""
    properties: Dict[str, str] = {}
    for value in values:
        name, _, prop_value = value.partition("=")
        if not name:
            raise ValueError(f"Invalid system property: '{value}'")
        properties[name.strip()] = prop_value.strip()
    return properties


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the console."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.properties_file:
            ConfigurationProvider.set_properties(
                ConfigurationProvider.load_properties_file(args.properties_file)
            )
        ConfigurationProvider.set_properties(parse_properties(args.properties))
    except (ApplicationRuntimeError, ValueError) as e:
        logger.error(f"[Console] Invalid configuration: {e}")
        return 2

    project_home = args.project_home or ConfigurationProvider.get_property(PROJECT_HOME)
    port = args.port or int(ConfigurationProvider.get_property(SERVER_PORT, "8080") or 8080)

    project_service = ProjectService()
    if project_home:
        try:
            project_service.open(project_home)
        except ApplicationRuntimeError as e:
            logger.error(f"[Console] Failed to open project {project_home}: {e}")
            return 1
    else:
        logger.warning("[Console] No project home given - requests will fail until a project is opened")

    app = create_app(project_service)
    logger.info(f"[Console] Listening on http://{args.host}:{port}")
    app.run(host=args.host, port=port)
    return 0


if __name__ == "__main__":
    sys.exit(main())
