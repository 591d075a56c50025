"""Fetch merged Pull Requests from GitHub GraphQL API"""

import logging
from datetime import datetime, timezone
from typing import Optional

from github_query.config import PAGE_SIZE, REVIEWS_PER_PULL_REQUEST
from github_query.github.pagination import RATE_LIMIT_FIELDS, fetch_all_pages

logger = logging.getLogger(__name__)


# GraphQL query to fetch merged PRs with their merge commit and approvals
PRS_QUERY = """
query($owner: String!, $name: String!, $first: Int!, $cursor: String, $reviews: Int!) {
  repository(owner: $owner, name: $name) {
    name
    pullRequests(first: $first, after: $cursor, states: MERGED) {
      totalCount
      nodes {
        number
        mergedAt
        headRefName
        title
        author {
          login
        }
        mergeCommit {
          messageHeadline
          abbreviatedOid
        }
        reviews(first: $reviews, states: APPROVED) {
          nodes {
            submittedAt
            author {
              login
            }
          }
        }
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
""" + RATE_LIMIT_FIELDS + "}\n"


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO 8601 timestamp such as 2018-07-01T12:00:00Z"""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _login(actor) -> Optional[str]:
    # Deleted accounts come back as null
    if actor and actor.get("login"):
        return actor["login"]
    return None


def pull_request_record(node: dict) -> dict:
    """Convert a pull request node into an output record"""
    merge_commit = node.get("mergeCommit")
    reviews = (node.get("reviews") or {}).get("nodes") or []

    return {
        "number": node["number"],
        "merged_at": node.get("mergedAt"),
        "head_branch": node.get("headRefName"),
        "title": node.get("title", ""),
        "author": _login(node.get("author")),
        "merge_commit": {
            "message_headline": merge_commit.get("messageHeadline"),
            "abbreviated_hash": merge_commit.get("abbreviatedOid"),
        } if merge_commit else None,
        "approving_reviews": [
            {
                "submitted_at": review.get("submittedAt"),
                "reviewer": _login(review.get("author")),
            }
            for review in reviews
            if review
        ],
    }


def in_range(pull_requests: list, since: datetime, until: datetime) -> list:
    """
    Keep pull requests merged within [since, until)

    Pull requests without a merge timestamp are never in range.

    Args:
        pull_requests: Pull request records
        since: Start of the range, inclusive
        until: End of the range, exclusive

    Returns:
        Matching records, in their original order
    """
    if since.tzinfo is None:
        since = since.replace(tzinfo=timezone.utc)
    if until.tzinfo is None:
        until = until.replace(tzinfo=timezone.utc)

    kept = []
    for pr in pull_requests:
        merged_at = pr.get("merged_at")
        if not merged_at:
            continue
        if since <= parse_timestamp(merged_at) < until:
            kept.append(pr)
    return kept


def _pull_requests_connection(data: dict) -> dict:
    repo_data = data.get("repository") or {}
    return repo_data.get("pullRequests")


def repository_pull_requests(client, owner: str, repo_name: str, since: datetime, until: datetime) -> list:
    """
    Fetch pull requests merged into a repository within [since, until)

    GitHub cannot filter pull requests by merge date, so every merged pull
    request is fetched and each page is filtered as it arrives.

    Args:
        client: GraphQLClient instance
        owner: Organization login
        repo_name: Repository name
        since: Start of the date range
        until: End of the date range

    Returns:
        List of pull request dictionaries
    """
    variables = {
        "owner": owner,
        "name": repo_name,
        "first": PAGE_SIZE,
        "reviews": REVIEWS_PER_PULL_REQUEST,
    }

    pull_requests = fetch_all_pages(
        client,
        PRS_QUERY,
        variables,
        _pull_requests_connection,
        pull_request_record,
        keep=lambda page: in_range(page, since, until),
    )
    logger.info("Found %d merged pull requests in %s/%s", len(pull_requests), owner, repo_name)
    return pull_requests
