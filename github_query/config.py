"""Centralized configuration for the GitHub query tool"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Mapping

from github_query.options import ListKind, UsageError, parse_date


# =============================================================================
# GitHub Configuration
# =============================================================================

# API
GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"
GRAPHQL_URL_ENV_VAR = "GITHUB_GRAPHQL_URL"
TOKEN_ENV_VAR = "GITHUB_TOKEN"

# Nodes requested per page (GitHub's maximum for a connection)
PAGE_SIZE = 100

# Approving reviews kept per pull request
REVIEWS_PER_PULL_REQUEST = 2


# =============================================================================
# Date Range Configuration
# =============================================================================

# Default start of the date range
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class QueryConfig:
    """Everything one invocation needs, read once at startup"""

    list_kind: ListKind
    org: str
    repo: str
    since: datetime
    until: datetime
    token: str
    graphql_url: str = GITHUB_GRAPHQL_URL
    details: bool = False


def get_token(environ: Mapping[str, str]) -> str:
    """Get the GitHub token from the environment, raising if it is unset or empty"""
    token = environ.get(TOKEN_ENV_VAR)
    if not token:
        raise UsageError(f"Missing environment variable: {TOKEN_ENV_VAR}")
    return token


def build_config(args, environ: Mapping[str, str], now: datetime = None) -> QueryConfig:
    """
    Build the immutable query configuration from parsed arguments

    Assumes the list/org/repo combination has already been validated.

    Args:
        args: argparse namespace with list, org, repo, since, until and details
        environ: Environment mapping to read the token and endpoint from
        now: Default end of the date range (current time when omitted)

    Returns:
        QueryConfig instance
    """
    if now is None:
        now = datetime.now(timezone.utc)

    since = parse_date(args.since, EPOCH)
    until = parse_date(args.until, now)
    token = get_token(environ)

    return QueryConfig(
        list_kind=ListKind(args.list),
        org=args.org,
        repo=args.repo or "",
        since=since,
        until=until,
        token=token,
        graphql_url=environ.get(GRAPHQL_URL_ENV_VAR) or GITHUB_GRAPHQL_URL,
        details=bool(getattr(args, "details", False)),
    )
