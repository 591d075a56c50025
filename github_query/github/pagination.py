"""Cursor-following loop shared by every GraphQL fetcher"""

import logging
from typing import Callable, Optional

from github_query.github.client import GitHubAPIError

logger = logging.getLogger(__name__)

# Selection added to every query; read for logging only
RATE_LIMIT_FIELDS = """
  rateLimit {
    cost
    limit
    remaining
    resetAt
  }
"""


def fetch_all_pages(
    client,
    query: str,
    variables: dict,
    connection: Callable[[dict], Optional[dict]],
    project: Callable[[dict], object],
    keep: Callable[[list], list] = None,
) -> list:
    """
    Fetch every page of a connection and collect the projected nodes

    The query must declare a `$cursor: String` variable used as the
    connection's `after` argument.

    Args:
        client: Object with an execute(query, variables) -> data method
        query: GraphQL query document
        variables: Query variables other than the cursor
        connection: Returns the paginated connection (nodes + pageInfo) from
            the response data, or None when the connection is absent
        project: Converts one node into an output record
        keep: Optional filter applied to each page's records

    Returns:
        Records from all pages, in page order
    """
    results = []
    cursor = None
    page = 0

    while True:
        data = client.execute(query, {**variables, "cursor": cursor})
        page += 1

        _log_rate_limit(data, page)

        conn = connection(data)
        if not conn:
            break

        records = [project(node) for node in conn.get("nodes") or [] if node]
        if keep is not None:
            records = keep(records)
        results.extend(records)

        page_info = conn.get("pageInfo") or {}
        if not page_info.get("hasNextPage"):
            break
        next_cursor = page_info.get("endCursor")
        if not next_cursor or next_cursor == cursor:
            raise GitHubAPIError("pagination cursor did not advance")
        cursor = next_cursor

    return results


def _log_rate_limit(data: dict, page: int) -> None:
    rate_limit = data.get("rateLimit")
    if rate_limit:
        logger.debug(
            "Page %d: cost %s, %s/%s remaining, resets at %s",
            page,
            rate_limit.get("cost"),
            rate_limit.get("remaining"),
            rate_limit.get("limit"),
            rate_limit.get("resetAt"),
        )
    else:
        logger.debug("Page %d fetched", page)
