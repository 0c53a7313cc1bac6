"""Abstract base class for repository hosting clients."""

from abc import ABC, abstractmethod

from ..models import RepositoryMetadata, RepositoryReference, TreeEntry


class RepositoryClient(ABC):
    """Interface the context builder needs from a hosting API.

    Implementations normalize host responses into the models in
    ``repo_chat.models`` so callers never inspect raw payloads.
    """

    @abstractmethod
    def fetch_metadata(self, ref: RepositoryReference) -> RepositoryMetadata:
        """Fetch repository metadata.

        Args:
            ref: Repository to look up

        Returns:
            Normalized metadata

        Raises:
            RepositoryNotFound: If the repository does not exist or is private
            NetworkError: If the request fails for any other reason
        """
        pass

    @abstractmethod
    def list_directory(self, ref: RepositoryReference, path: str = "") -> list[TreeEntry]:
        """List the file and directory entries at ``path``.

        Args:
            ref: Repository to list
            path: Directory path relative to the root ("" for the root)

        Returns:
            Entries in host order; node kinds other than file and directory
            (symlinks, submodules) are left out

        Raises:
            NetworkError: If the listing cannot be fetched
        """
        pass

    @abstractmethod
    def fetch_file_content(self, ref: RepositoryReference, path: str) -> str:
        """Fetch and decode the content of one file.

        Args:
            ref: Repository containing the file
            path: File path relative to the root

        Returns:
            The file's full text

        Raises:
            ContentFetchError: If the content cannot be fetched or decoded
        """
        pass
