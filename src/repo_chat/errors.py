"""Exceptions raised across repo-chat."""


class RepoChatError(Exception):
    """Base exception for repo-chat errors."""

    pass


class InvalidUrl(RepoChatError, ValueError):
    """Input is not a https://github.com/<owner>/<repo> URL."""

    pass


class RepositoryFetchError(RepoChatError):
    """Repository metadata or root listing could not be fetched."""

    pass


class RepositoryNotFound(RepositoryFetchError):
    """The host has no public repository at the given reference."""

    pass


class NetworkError(RepositoryFetchError):
    """Transport failure or non-success response from the host API."""

    pass


class ContentFetchError(RepoChatError):
    """A single file's content could not be fetched or decoded."""

    pass


class CredentialError(RepoChatError):
    """Base exception for chat API credential problems."""

    pass


class CredentialMissing(CredentialError):
    """No chat API credential is configured."""

    pass


class InvalidCredential(CredentialError):
    """The chat API rejected the supplied credential."""

    pass


class RequestFailed(RepoChatError):
    """The chat completion request did not succeed."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code
