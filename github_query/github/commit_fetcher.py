"""Fetch default-branch commit history from GitHub GraphQL API"""

import logging
from datetime import datetime, timezone

from github_query.config import PAGE_SIZE
from github_query.github.pagination import RATE_LIMIT_FIELDS, fetch_all_pages

logger = logging.getLogger(__name__)

GIT_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


# GraphQL query to walk the default branch between two timestamps
COMMITS_QUERY = """
query($owner: String!, $name: String!, $first: Int!, $cursor: String,
      $since: GitTimestamp!, $until: GitTimestamp!) {
  repository(owner: $owner, name: $name) {
    name
    defaultBranchRef {
      target {
        ... on Commit {
          history(first: $first, after: $cursor, since: $since, until: $until) {
            totalCount
            nodes {
              abbreviatedOid
              committedDate
              messageHeadline
              author {
                email
              }
            }
            pageInfo {
              hasNextPage
              endCursor
            }
          }
        }
      }
    }
  }
""" + RATE_LIMIT_FIELDS + "}\n"


def git_timestamp(value: datetime) -> str:
    """Render a datetime as a GitTimestamp in UTC"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(GIT_TIMESTAMP_FORMAT)


def _history_connection(data: dict) -> dict:
    repo_data = data.get("repository") or {}
    # Empty repositories have no default branch
    default_branch = repo_data.get("defaultBranchRef") or {}
    target = default_branch.get("target") or {}
    return target.get("history")


def commit_record(node: dict) -> dict:
    """Convert a commit history node into an output record"""
    author = node.get("author") or {}
    return {
        "abbreviated_hash": node["abbreviatedOid"],
        "committed_at": node.get("committedDate"),
        "message_headline": node.get("messageHeadline", ""),
        "author_email": author.get("email"),
    }


def repository_commits(client, owner: str, repo_name: str, since: datetime, until: datetime) -> list:
    """
    Fetch commits to the default branch of a repository within [since, until)

    The date range is applied by GitHub while walking the history.

    Args:
        client: GraphQLClient instance
        owner: Organization login
        repo_name: Repository name
        since: Start of the date range
        until: End of the date range

    Returns:
        List of commit dictionaries, newest first
    """
    variables = {
        "owner": owner,
        "name": repo_name,
        "first": PAGE_SIZE,
        "since": git_timestamp(since),
        "until": git_timestamp(until),
    }

    commits = fetch_all_pages(
        client,
        COMMITS_QUERY,
        variables,
        _history_connection,
        commit_record,
    )
    logger.info("Found %d commits in %s/%s", len(commits), owner, repo_name)
    return commits
