"""Fetch organization repositories from GitHub GraphQL API"""

import logging

from github_query.config import PAGE_SIZE
from github_query.github.pagination import RATE_LIMIT_FIELDS, fetch_all_pages

logger = logging.getLogger(__name__)


# GraphQL query to list repos in an organization, sorted by name
ORG_REPOS_QUERY = """
query($login: String!, $first: Int!, $cursor: String) {
  organization(login: $login) {
    repositories(first: $first, after: $cursor, orderBy: {field: NAME, direction: ASC}) {
      totalCount
      nodes {
        name
        description
        isArchived
        isPrivate
        createdAt
        pushedAt
      }
      pageInfo {
        hasNextPage
        endCursor
      }
    }
  }
""" + RATE_LIMIT_FIELDS + "}\n"


def _repositories_connection(data: dict) -> dict:
    org_data = data.get("organization") or {}
    return org_data.get("repositories")


def repository_record(node: dict) -> dict:
    """Convert a repository node into an output record"""
    return {
        "name": node["name"],
        "description": node.get("description"),
        "is_archived": node.get("isArchived", False),
        "is_private": node.get("isPrivate", False),
        "created_at": node.get("createdAt"),
        "pushed_at": node.get("pushedAt"),
    }


def organization_repositories(client, org_name: str) -> list:
    """
    Get all repositories in an organization, sorted by name

    Args:
        client: GraphQLClient instance
        org_name: Organization login

    Returns:
        List of repository dictionaries
    """
    repos = fetch_all_pages(
        client,
        ORG_REPOS_QUERY,
        {"login": org_name, "first": PAGE_SIZE},
        _repositories_connection,
        repository_record,
    )
    logger.info("Found %d repositories in %s", len(repos), org_name)
    return repos


def organization_repository_names(client, org_name: str) -> list:
    """Get the names of all repositories in an organization, sorted by name"""
    return [repo["name"] for repo in organization_repositories(client, org_name)]
