"""Clients for the GitHub and chat completion APIs."""

from .assistant import AssistantClient
from .base import RepositoryClient
from .github import GitHubClient, parse_reference

__all__ = ["AssistantClient", "GitHubClient", "RepositoryClient", "parse_reference"]
