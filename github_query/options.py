"""Command-line option validation and date parsing"""

import re
from datetime import datetime, timezone
from enum import Enum


DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class UsageError(Exception):
    """Raised for missing, incompatible or malformed command-line input"""


class ListKind(Enum):
    """What to list: one case per query shape"""

    REPOS = "repos"
    COMMITS = "commits"
    PULL_REQUESTS = "pull-requests"

    @property
    def needs_repo(self) -> bool:
        return self is not ListKind.REPOS


def validate_options(list_opt: str, org_opt: str, repo_opt: str) -> None:
    """
    Check that the list, org and repo options are consistent

    Raises:
        UsageError: If an option is missing, incompatible or unknown
    """
    if not list_opt:
        raise UsageError("Missing option: list")
    if not org_opt:
        raise UsageError("Missing option: org")

    try:
        kind = ListKind(list_opt)
    except ValueError:
        raise UsageError(f"Invalid list option: {list_opt}") from None

    if kind.needs_repo:
        if not repo_opt:
            raise UsageError("Missing option: repo")
    elif repo_opt:
        raise UsageError("Incompatible option: repo")


def parse_date(text: str, default: datetime) -> datetime:
    """
    Parse a YYYY-MM-DD date as UTC midnight

    Args:
        text: Date string, or empty to use the default
        default: Value returned unchanged when text is empty

    Returns:
        Timezone-aware datetime

    Raises:
        UsageError: If text is not a valid YYYY-MM-DD date
    """
    if not text:
        return default

    if not DATE_PATTERN.match(text):
        raise UsageError(f"Invalid date {text!r}: expected YYYY-MM-DD")
    try:
        parsed = datetime.strptime(text, DATE_FORMAT)
    except ValueError as e:
        raise UsageError(f"Invalid date {text!r}: {e}") from None

    return parsed.replace(tzinfo=timezone.utc)


def format_date(value: datetime) -> str:
    """Format a datetime back to YYYY-MM-DD"""
    return value.strftime(DATE_FORMAT)
