"""Client for an OpenAI-compatible chat completion endpoint."""

from collections.abc import Sequence
from typing import Any

import requests

from common.constants import (
    ASSISTANT_NAME,
    CHAT_MAX_TOKENS,
    CHAT_MODEL,
    CHAT_TEMPERATURE,
    FALLBACK_REPLY,
    USER_AGENT,
)
from common.env import env
from common.logger import get_logger

from ..credentials import CredentialStore
from ..errors import CredentialMissing, RequestFailed
from ..models import ConversationTurn

logger = get_logger(__name__)

SYSTEM_PROMPT_TEMPLATE = """You are {assistant_name}, an expert assistant that helps developers understand GitHub repositories. You have been provided with context about a specific repository including its structure, key files, and metadata.

Repository Context:
{context}

Your role is to:
1. Answer questions about the repository's architecture, functionality, and purpose
2. Explain code snippets and their functionality
3. Help beginners understand how to get started with the project
4. Provide insights about best practices used in the code
5. Suggest improvements or point out interesting patterns

Be conversational, helpful, and provide code examples when relevant. If you're not sure about something, say so rather than guessing."""


def build_system_prompt(context: str) -> str:
    """Embed the repository context verbatim in the fixed system instruction."""
    return SYSTEM_PROMPT_TEMPLATE.format(assistant_name=ASSISTANT_NAME, context=context)


def build_messages(
    message: str, context: str, history: Sequence[ConversationTurn]
) -> list[dict[str, str]]:
    """Assemble system prompt, prior turns and the new user message."""
    messages = [{"role": "system", "content": build_system_prompt(context)}]
    messages.extend(turn.as_message() for turn in history)
    messages.append({"role": "user", "content": message})
    return messages


class AssistantClient:
    """Sends repository questions to a hosted chat model.

    Model and sampling parameters are fixed (see common.constants). The
    credential is read from the injected CredentialStore on every request.
    """

    def __init__(
        self,
        credentials: CredentialStore,
        base_url: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize the assistant client.

        Args:
            credentials: Store holding the API key
            base_url: API root, defaults to env.chat_api_base_url()
            timeout: Per-request timeout in seconds, defaults to env.request_timeout()
        """
        self.credentials = credentials
        self.base_url = (base_url or env.chat_api_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else env.request_timeout()
        self.session = requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    @staticmethod
    def _auth_headers(key: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {key.strip()}", "Content-Type": "application/json"}

    def test_credential(self, key: str) -> bool:
        """Check a key against the models listing endpoint.

        Returns:
            True if the endpoint accepted the key. Transport failures are
            logged and reported as False.
        """
        # HTTP headers are latin-1; pasted keys can carry invisible unicode
        if not key.strip().isascii():
            logger.warning("API key contains non-ASCII characters")
            return False
        try:
            response = self.session.get(
                f"{self.base_url}/models", headers=self._auth_headers(key), timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            logger.error(f"Error testing API key: {e}")
            return False
        return response.ok

    def generate_reply(
        self, message: str, context: str, history: Sequence[ConversationTurn] = ()
    ) -> str:
        """Ask the model about the repository described by ``context``.

        Args:
            message: The new user message
            context: Rendered repository context
            history: Prior turns, oldest first

        Returns:
            The first completion's text, or FALLBACK_REPLY when the response
            carries none

        Raises:
            CredentialMissing: If no API key is configured
            RequestFailed: If the request fails or the endpoint answers with
                a non-success status
        """
        key = self.credentials.get()
        if not key:
            raise CredentialMissing("API key not set")

        payload = {
            "model": CHAT_MODEL,
            "messages": build_messages(message, context, history),
            "temperature": CHAT_TEMPERATURE,
            "max_tokens": CHAT_MAX_TOKENS,
        }
        logger.debug(f"Sending chat request with {len(history)} prior turns")

        try:
            response = self.session.post(
                f"{self.base_url}/chat/completions",
                json=payload,
                headers=self._auth_headers(key),
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise RequestFailed("Chat API request timed out") from e
        except requests.exceptions.RequestException as e:
            raise RequestFailed(f"Chat API request failed: {e}") from e

        if not response.ok:
            raise RequestFailed(
                f"API request failed: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RequestFailed("Chat API returned invalid JSON", response.status_code) from e

        content = extract_reply(data)
        if not content:
            logger.warning("Chat API returned no completion text; using fallback reply")
            return FALLBACK_REPLY
        return content


def extract_reply(payload: Any) -> str:
    """Return ``choices[0].message.content`` from a response, or "" if absent."""
    if not isinstance(payload, dict):
        return ""
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    return content if isinstance(content, str) else ""
