"""Query GitHub for repositories, commits or merged pull requests and print JSON"""

import argparse
import json
import logging
import os
import sys

from dotenv import load_dotenv

from github_query.config import TOKEN_ENV_VAR, build_config
from github_query.dispatcher import run_query
from github_query.github.client import GitHubAPIError, GraphQLClient
from github_query.options import ListKind, UsageError, validate_options

logger = logging.getLogger(__name__)


class UsageArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad input as UsageError instead of exiting"""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = UsageArgumentParser(
        prog="github-query",
        description="List an organization's repositories, or a repository's commits or merged pull requests, as JSON",
    )
    kinds = "|".join(kind.value for kind in ListKind)
    parser.add_argument("-list", "--list", default="", help=f"<{kinds}> (Required)")
    parser.add_argument("-org", "--org", default="", help="Organization name (Required)")
    parser.add_argument("-repo", "--repo", default="", help="Repository name (Required except to list repos)")
    parser.add_argument("-since", "--since", default="", help="Start of date range (YYYY-MM-DD)")
    parser.add_argument("-until", "--until", default="", help="End of date range (YYYY-MM-DD)")
    parser.add_argument("--details", action="store_true",
                        help="With repos, print full repository records instead of names")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")
    return parser


def print_usage(parser: argparse.ArgumentParser, stream=None) -> None:
    """Print usage and the token note to stderr"""
    stream = stream or sys.stderr
    parser.print_help(stream)
    print(f"\nNote: {TOKEN_ENV_VAR} environment variable is required.", file=stream)


def print_json(value, stream=None) -> None:
    """Print value as 2-space indented JSON"""
    stream = stream or sys.stdout
    json.dump(value, stream, indent=2)
    stream.write("\n")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def main(argv=None) -> int:
    load_dotenv()
    parser = build_parser()

    try:
        args = parser.parse_args(argv)
        configure_logging(args.verbose)
        validate_options(args.list, args.org, args.repo)
        config = build_config(args, os.environ)
    except UsageError as e:
        print(e, file=sys.stderr)
        print_usage(parser)
        return 1

    if config.list_kind is ListKind.REPOS and (args.since or args.until):
        logger.warning("--since and --until are ignored when listing repos")
    if config.details and config.list_kind is not ListKind.REPOS:
        logger.warning("--details only applies when listing repos")

    client = GraphQLClient(config.token, config.graphql_url)
    try:
        result = run_query(config, client)
    except GitHubAPIError as e:
        print(e, file=sys.stderr)
        return 1

    print_json(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
