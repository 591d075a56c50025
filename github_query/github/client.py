"""GitHub GraphQL API client using requests"""

import logging

import requests

from github_query.config import GITHUB_GRAPHQL_URL

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Exception raised when a GraphQL request fails"""

    def __init__(self, message: str, status_code: int = 0, response_body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.response_body = response_body


class GraphQLClient:
    """Simple GitHub GraphQL client"""

    def __init__(self, token: str, url: str = GITHUB_GRAPHQL_URL, session: requests.Session = None):
        self.url = url
        self.session = session or requests.Session()
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json"
        }

    def execute(self, query: str, variables: dict) -> dict:
        """
        Execute a GraphQL query

        Args:
            query: GraphQL query document
            variables: Query variables

        Returns:
            The "data" member of the response

        Raises:
            GitHubAPIError: On network failure, HTTP error status or GraphQL errors
        """
        try:
            response = self.session.post(
                self.url,
                headers=self.headers,
                json={"query": query, "variables": variables}
            )
        except requests.RequestException as e:
            raise GitHubAPIError(f"GitHub request failed: {e}") from e

        if not response.ok:
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} {response.reason}",
                response.status_code,
                response.text,
            )

        try:
            result = response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"Invalid JSON from GitHub: {e}", response.status_code, response.text
            ) from e

        if not isinstance(result, dict):
            raise GitHubAPIError("Unexpected response from GitHub", response.status_code, response.text)

        if result.get("errors"):
            messages = "; ".join(err.get("message", str(err)) for err in result["errors"])
            raise GitHubAPIError(f"GraphQL errors: {messages}", response.status_code, response.text)

        logger.debug("GraphQL request to %s succeeded", self.url)
        return result.get("data") or {}
