"""Environment configuration interface for repo-chat.

All environment variable reads go through this module so the rest of the
code never touches ``os.environ`` directly.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class Environment:
    """Interface for accessing environment configuration."""

    @staticmethod
    def github_api_url() -> str:
        """Get the base URL of the GitHub REST API.

        Returns:
            API base URL without trailing slash, defaults to https://api.github.com
        """
        return os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip("/")

    @staticmethod
    def chat_api_base_url() -> str:
        """Get the base URL of the OpenAI-compatible chat completion API.

        Returns:
            API base URL without trailing slash, defaults to the Groq endpoint
        """
        return os.getenv("CHAT_API_BASE_URL", "https://api.groq.com/openai/v1").rstrip("/")

    @staticmethod
    def credential_path() -> Path:
        """Get the file the chat API credential is persisted to.

        Returns:
            Path to the credentials JSON file, defaults to ~/.repo_chat/credentials.json
        """
        raw = os.getenv("REPO_CHAT_CREDENTIALS", "~/.repo_chat/credentials.json")
        return Path(raw).expanduser()

    @staticmethod
    def request_timeout() -> float:
        """Get the HTTP request timeout in seconds.

        Returns:
            Timeout, defaults to 30.0
        """
        return float(os.getenv("REQUEST_TIMEOUT", "30"))

    @staticmethod
    def max_traversal_depth() -> int | None:
        """Get the optional directory depth limit for repository traversal.

        Returns:
            Depth limit, or None when unset (no limit)
        """
        raw = os.getenv("MAX_TRAVERSAL_DEPTH", "").strip()
        if not raw:
            return None
        return int(raw)


# Singleton instance for convenient access
env = Environment()
