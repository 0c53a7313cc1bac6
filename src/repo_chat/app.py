"""User-facing facade that ties together analysis and chat."""

from __future__ import annotations

from pathlib import Path

from common.env import env
from common.logger import get_logger

from .clients.assistant import AssistantClient
from .clients.base import RepositoryClient
from .clients.github import GitHubClient, parse_reference
from .context_builder import ContextBuilder, render_context
from .credentials import CredentialStore, JsonFileBackend
from .errors import InvalidCredential, RepoChatError
from .models import RepositoryDigest
from .overview import summarize_digest
from .session import ConversationSession

logger = get_logger(__name__)


class RepositoryChatApp:
    """Analyzes one GitHub repository at a time and answers questions about it.

    The digest, its rendered context and the conversation are replaced
    together; a failed analysis leaves no digest loaded.
    """

    def __init__(
        self,
        repository_client: RepositoryClient | None = None,
        assistant: AssistantClient | None = None,
        credentials: CredentialStore | None = None,
        *,
        max_depth: int | None = None,
    ) -> None:
        if credentials is None:
            credentials = CredentialStore(JsonFileBackend(env.credential_path()))
        self.credentials = credentials
        self.repository_client = repository_client or GitHubClient()
        self.assistant = assistant or AssistantClient(credentials)
        self.max_depth = max_depth
        self.session = ConversationSession()
        self._digest: RepositoryDigest | None = None
        self._context: str | None = None

    @classmethod
    def from_env(cls, credential_path: Path | str | None = None) -> RepositoryChatApp:
        """Build an app wired to the real GitHub and chat APIs."""
        path = credential_path or env.credential_path()
        credentials = CredentialStore(JsonFileBackend(path))
        return cls(credentials=credentials, max_depth=env.max_traversal_depth())

    @property
    def digest(self) -> RepositoryDigest:
        if self._digest is None:
            raise RepoChatError("No repository analyzed")
        return self._digest

    @property
    def context(self) -> str:
        if self._context is None:
            raise RepoChatError("No repository analyzed")
        return self._context

    @property
    def has_repository(self) -> bool:
        return self._digest is not None

    def has_credential(self) -> bool:
        return self.credentials.has_credential()

    def configure_credential(self, key: str) -> None:
        """Validate ``key`` against the chat API and store it.

        Raises:
            InvalidCredential: If the key is blank or rejected
        """
        key = key.strip()
        if not key:
            raise InvalidCredential("Please enter your API key")
        if not self.assistant.test_credential(key):
            raise InvalidCredential(
                "The API key you entered is not valid. Please check and try again."
            )
        self.credentials.set(key)
        logger.info("API key validated and saved")

    def analyze(self, url: str) -> RepositoryDigest:
        """Fetch and digest the repository at ``url``.

        Raises:
            InvalidUrl: If ``url`` is not a GitHub repository URL
            RepositoryFetchError: If metadata or the root listing cannot be fetched
        """
        ref = parse_reference(url)
        builder = ContextBuilder(self.repository_client, max_depth=self.max_depth)
        try:
            digest = builder.build(ref)
            context = render_context(digest)
        except RepoChatError:
            self.start_over()
            raise

        self._digest = digest
        self._context = context
        self.session.reset()
        logger.info(f"Analyzed {ref.full_name}: {digest.files_count} files")
        return digest

    def ask(self, message: str) -> str:
        """Send ``message`` with the repository context and conversation so far.

        The exchange is recorded only when a reply comes back.

        Raises:
            RepoChatError: If no repository is loaded
            CredentialMissing: If no API key is stored
            RequestFailed: If the chat request fails
        """
        context = self.context
        reply = self.assistant.generate_reply(message, context, self.session.turns)
        self.session.add_exchange(message, reply)
        return reply

    def start_over(self) -> None:
        """Drop the current repository and conversation."""
        self._digest = None
        self._context = None
        self.session.reset()

    def summarize(self) -> str:
        """Return a simple textual summary of the loaded repository."""
        return "\n".join(summarize_digest(self.digest))
