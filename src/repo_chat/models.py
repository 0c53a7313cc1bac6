"""Data models for repository digests and conversations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class EntryKind(str, Enum):
    """Kind of filesystem node reported by the host."""

    FILE = "file"
    DIRECTORY = "directory"


class Role(str, Enum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class RepositoryReference:
    """Owner and name of a GitHub repository."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass(frozen=True)
class RepositoryMetadata:
    """Repository facts reported by the host, with optional fields normalized."""

    name: str
    owner: str
    description: str = ""
    language: str = "Unknown"
    stars: int = 0
    forks: int = 0
    size_kb: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None
    topics: tuple[str, ...] = ()
    license: str = ""


@dataclass(frozen=True)
class TreeEntry:
    """One node of a directory listing."""

    name: str
    path: str
    kind: EntryKind
    size: int | None = None

    @property
    def is_file(self) -> bool:
        return self.kind is EntryKind.FILE

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


@dataclass(frozen=True)
class FileRecord:
    """A file visited during traversal.

    ``content`` is set only when the file passed the selection policy, was
    under the size cap, and was fetched and decoded successfully.
    """

    name: str
    path: str
    size: int | None = None
    content: str | None = None

    @property
    def has_content(self) -> bool:
        return self.content is not None


@dataclass(frozen=True)
class RepositoryDigest:
    """Metadata plus the files collected for one repository."""

    reference: RepositoryReference
    metadata: RepositoryMetadata
    files: tuple[FileRecord, ...] = ()
    directories: tuple[str, ...] = ()

    @property
    def files_count(self) -> int:
        """Number of file entries visited, with or without content."""
        return len(self.files)

    def files_with_content(self) -> list[FileRecord]:
        return [record for record in self.files if record.has_content]


@dataclass(frozen=True)
class ConversationTurn:
    """A single chat message."""

    role: Role
    content: str

    def as_message(self) -> dict[str, str]:
        """Return the turn in chat completion ``messages`` shape."""
        return {"role": self.role.value, "content": self.content}


@dataclass
class TraversalStats:
    """Counters collected while walking a repository."""

    directories_listed: int = 0
    directories_skipped: int = 0
    directories_failed: int = 0
    files_fetched: int = 0
    files_failed: int = 0
    failed_paths: list[str] = field(default_factory=list)
