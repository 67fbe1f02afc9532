"""
Places - command line client for the places (geo) API endpoints.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from internal.config.manager import ConfigManager
from lib import utils
from lib.logging_utils import initLogging
from lib.places import (
    Accuracy,
    GeocodeBuilder,
    Place,
    PlacesError,
    PlaceType,
    SearchBuilder,
    SearchResult,
    Token,
    replaySearch,
    reverseGeocode,
    searchIp,
    searchPoint,
    searchQuery,
    show,
)

# Configure basic logging first
logging.basicConfig(format="%(asctime)s - %(name)s - %(levelname)s - %(message)s", level=logging.WARNING)
logger = logging.getLogger(__name__)


def parseAttribute(value: str) -> tuple[str, str]:
    """Parse ``KEY=VALUE`` attribute argument."""
    key, sep, attrValue = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Attribute must be in KEY=VALUE form, got '{value}'")
    return key, attrValue


def parseAccuracy(value: str) -> Accuracy:
    """Parse ``10`` (meters) or ``10ft`` (feet) accuracy argument."""
    try:
        return Accuracy.fromString(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Accuracy must be a number optionally suffixed with 'ft', got '{value}'")


def addFilterArguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--accuracy", type=parseAccuracy, help="Search radius: meters, or feet with 'ft' suffix")
    parser.add_argument(
        "--granularity",
        type=PlaceType,
        choices=list(PlaceType),
        help="Minimal place type to return",
    )
    parser.add_argument("--max-results", type=int, help="Hint for number of results to return")


def createParser() -> argparse.ArgumentParser:
    """Create command line arguments parser."""
    parser = argparse.ArgumentParser(description="Places - reverse geocoding and place search client, dood!")
    parser.add_argument(
        "-c",
        "--config",
        default="config.toml",
        help="Path to configuration file (default: config.toml)",
    )
    parser.add_argument(
        "--config-dir",
        action="append",
        help="Directory to search for .toml config files recursively (can be specified multiple times)",
    )
    parser.add_argument(
        "--url-only",
        action="store_true",
        help="Print request URL instead of sending request",
    )
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Pretty-print loaded configuration and exit",
    )

    subparsers = parser.add_subparsers(dest="command")

    geocodeParser = subparsers.add_parser("reverse-geocode", help="Find places at the given coordinate")
    geocodeParser.add_argument("latitude", type=float)
    geocodeParser.add_argument("longitude", type=float)
    addFilterArguments(geocodeParser)

    searchParser = subparsers.add_parser("search", help="Search places by coordinate, text or IP address")
    queryGroup = searchParser.add_mutually_exclusive_group(required=True)
    queryGroup.add_argument("--point", nargs=2, type=float, metavar=("LAT", "LON"))
    queryGroup.add_argument("--query", metavar="TEXT")
    queryGroup.add_argument("--ip", metavar="ADDRESS")
    addFilterArguments(searchParser)
    searchParser.add_argument("--contained-within", metavar="PLACE_ID", help="Only places inside the given place")
    searchParser.add_argument(
        "--attribute",
        action="append",
        type=parseAttribute,
        default=[],
        metavar="KEY=VALUE",
        help="Place attribute to match (can be specified multiple times)",
    )

    showParser = subparsers.add_parser("show", help="Show place by ID")
    showParser.add_argument("place_id")

    replayParser = subparsers.add_parser("replay", help="Repeat search using URL from previous result")
    replayParser.add_argument("url")

    return parser


def parseArguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = createParser()
    args = parser.parse_args(argv)
    if not args.command and not args.print_config:
        parser.error("command is required")

    args.config = os.path.abspath(args.config)
    if args.config_dir:
        args.config_dir = [os.path.abspath(dirPath) for dirPath in args.config_dir]

    return args


def buildGeocode(args: argparse.Namespace) -> GeocodeBuilder:
    builder = reverseGeocode(args.latitude, args.longitude)
    if args.accuracy is not None:
        builder = builder.accuracy(args.accuracy)
    if args.granularity is not None:
        builder = builder.granularity(args.granularity)
    if args.max_results is not None:
        builder = builder.maxResults(args.max_results)
    return builder


def buildSearch(args: argparse.Namespace) -> SearchBuilder:
    if args.point is not None:
        builder = searchPoint(args.point[0], args.point[1])
    elif args.query is not None:
        builder = searchQuery(args.query)
    else:
        builder = searchIp(args.ip)

    if args.accuracy is not None:
        builder = builder.accuracy(args.accuracy)
    if args.granularity is not None:
        builder = builder.granularity(args.granularity)
    if args.max_results is not None:
        builder = builder.maxResults(args.max_results)
    if args.contained_within is not None:
        builder = builder.containedWithin(args.contained_within)
    for key, value in args.attribute:
        builder = builder.attribute(key, value)
    return builder


def searchResultToDict(result: SearchResult) -> Dict[str, Any]:
    return {
        "url": result.url,
        "results": [place.to_dict() for place in result.results],
    }


async def runCommand(args: argparse.Namespace, token: Token, timeout: float) -> Dict[str, Any]:
    """Execute parsed command and return JSON-serializable result."""
    match args.command:
        case "reverse-geocode":
            geocodeResponse = await buildGeocode(args).call(token, timeout=timeout)
            return searchResultToDict(geocodeResponse.response)
        case "search":
            searchResponse = await buildSearch(args).call(token, timeout=timeout)
            return searchResultToDict(searchResponse.response)
        case "replay":
            replayResponse = await replaySearch(args.url, token, timeout=timeout)
            return searchResultToDict(replayResponse.response)
        case "show":
            placeResponse = await show(args.place_id, token, timeout=timeout)
            place: Place = placeResponse.response
            return place.to_dict()
        case _:
            raise ValueError(f"Unknown command: {args.command}")


def requestUrl(args: argparse.Namespace) -> Optional[str]:
    """Get request URL for builder-based commands, None for others."""
    match args.command:
        case "reverse-geocode":
            return buildGeocode(args).url()
        case "search":
            return buildSearch(args).url()
    return None


def prettyPrintConfig(configManager: ConfigManager):
    """Pretty-print the loaded configuration, token is masked."""
    config = dict(configManager.config)
    if "token" in config.get("places", {}):
        config["places"] = dict(config["places"], token="***")
    print(utils.jsonDumps(config, indent=2))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parseArguments(argv)

    if args.url_only and not args.print_config:
        url = requestUrl(args)
        if url is None:
            print(f"--url-only isn't supported for '{args.command}' command", file=sys.stderr)
            return 2
        print(url)
        return 0

    configManager = ConfigManager(args.config, args.config_dir)
    if args.print_config:
        prettyPrintConfig(configManager)
        return 0

    initLogging(configManager.getLoggingConfig())

    token = Token(bearer=configManager.getToken())
    try:
        result = asyncio.run(runCommand(args, token, configManager.getRequestTimeout()))
    except PlacesError as e:
        logger.error(f"Request failed: {e}")
        return 1

    print(utils.jsonDumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
