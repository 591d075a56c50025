"""GitHub GraphQL client and fetchers"""

from .client import GitHubAPIError, GraphQLClient
from .commit_fetcher import repository_commits
from .pagination import fetch_all_pages
from .pr_fetcher import in_range, repository_pull_requests
from .repo_fetcher import organization_repositories, organization_repository_names
