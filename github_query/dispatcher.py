"""Run the fetch operation selected by the list option"""

from github_query.config import QueryConfig
from github_query.github.commit_fetcher import repository_commits
from github_query.github.pr_fetcher import repository_pull_requests
from github_query.github.repo_fetcher import organization_repositories, organization_repository_names
from github_query.options import ListKind


def _list_repos(client, config: QueryConfig) -> list:
    if config.details:
        return organization_repositories(client, config.org)
    return organization_repository_names(client, config.org)


def _list_commits(client, config: QueryConfig) -> list:
    return repository_commits(client, config.org, config.repo, config.since, config.until)


def _list_pull_requests(client, config: QueryConfig) -> list:
    return repository_pull_requests(client, config.org, config.repo, config.since, config.until)


HANDLERS = {
    ListKind.REPOS: _list_repos,
    ListKind.COMMITS: _list_commits,
    ListKind.PULL_REQUESTS: _list_pull_requests,
}


def run_query(config: QueryConfig, client) -> list:
    """
    Fetch the records requested by the configuration

    Args:
        config: Validated query configuration
        client: GraphQLClient instance

    Returns:
        Repository names (or records), commit records or pull request records
    """
    handler = HANDLERS.get(config.list_kind)
    if handler is None:
        raise AssertionError(f"no handler for list kind {config.list_kind!r}")
    return handler(client, config)
