"""Chat with an AI assistant about a public GitHub repository."""

from .app import RepositoryChatApp
from .context_builder import ContextBuilder, render_context
from .models import (
    ConversationTurn,
    EntryKind,
    FileRecord,
    RepositoryDigest,
    RepositoryMetadata,
    RepositoryReference,
    Role,
    TreeEntry,
)
from .session import ConversationSession

__all__ = [
    "ContextBuilder",
    "ConversationSession",
    "ConversationTurn",
    "EntryKind",
    "FileRecord",
    "RepositoryChatApp",
    "RepositoryDigest",
    "RepositoryMetadata",
    "RepositoryReference",
    "Role",
    "TreeEntry",
    "render_context",
]
