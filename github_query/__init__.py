"""Query the GitHub GraphQL API for repositories, commits and merged pull requests"""

__version__ = "0.1.0"
