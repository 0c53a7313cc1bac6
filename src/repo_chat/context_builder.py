"""Collect a repository digest and render it into prompt context."""

from __future__ import annotations

from dataclasses import dataclass

from common.logger import get_logger

from .clients.base import RepositoryClient
from .errors import ContentFetchError, RepositoryFetchError
from .models import (
    FileRecord,
    RepositoryDigest,
    RepositoryReference,
    TraversalStats,
    TreeEntry,
)
from .selection import should_fetch_file, should_recurse, within_size_cap

logger = get_logger(__name__)

# Rendering limits for the "Key Files" section
MAX_CONTEXT_FILES = 10
MAX_RENDERED_FILE_CHARS = 5_000
FILE_EXCERPT_CHARS = 1_000
TRUNCATION_MARKER = "..."
FILE_SEPARATOR = "\n\n---\n\n"


@dataclass
class _PendingEntry:
    entry: TreeEntry
    depth: int


class ContextBuilder:
    """Walks a repository depth-first and collects the files worth reading.

    The walk is driven by an explicit stack rather than recursion. Entries
    are pushed in reverse listing order so files come out in the same order
    a recursive pre-order walk would produce: each directory's files appear
    at the position of the directory in its parent's listing.

    Only the metadata fetch and the root listing are fatal. A file whose
    content cannot be fetched is kept without content, and a subdirectory
    whose listing fails contributes nothing.
    """

    def __init__(self, client: RepositoryClient, *, max_depth: int | None = None):
        """Initialize the builder.

        Args:
            client: Repository hosting client
            max_depth: Deepest directory level to descend into below the root.
                None (default) leaves the walk bounded only by the directory
                selection rules; 0 reads the root listing only.
        """
        self.client = client
        self.max_depth = max_depth
        self.stats = TraversalStats()

    def build(self, ref: RepositoryReference) -> RepositoryDigest:
        """Fetch metadata and walk the tree of ``ref``.

        Raises:
            RepositoryFetchError: If metadata or the root listing cannot be fetched
        """
        self.stats = TraversalStats()
        logger.info(f"Analyzing {ref.full_name}")

        metadata = self.client.fetch_metadata(ref)
        files, directories = self._walk(ref)

        logger.info(
            f"Collected {len(files)} files from {ref.full_name} "
            f"({self.stats.files_fetched} read, {self.stats.files_failed} failed, "
            f"{self.stats.directories_failed} directories unreadable)"
        )
        return RepositoryDigest(
            reference=ref,
            metadata=metadata,
            files=tuple(files),
            directories=tuple(directories),
        )

    def _walk(self, ref: RepositoryReference) -> tuple[list[FileRecord], list[str]]:
        files: list[FileRecord] = []
        directories: list[str] = []

        # Root listing failures propagate
        root_entries = self.client.list_directory(ref, "")
        self.stats.directories_listed += 1
        stack = [_PendingEntry(entry, 0) for entry in reversed(root_entries)]

        while stack:
            pending = stack.pop()
            entry = pending.entry
            if entry.is_file:
                files.append(self._collect_file(ref, entry))
                continue

            if not self._should_descend(entry, pending.depth):
                self.stats.directories_skipped += 1
                continue

            try:
                children = self.client.list_directory(ref, entry.path)
            except RepositoryFetchError as e:
                logger.warning(f"Skipping directory {entry.path}: {e}")
                self.stats.directories_failed += 1
                self.stats.failed_paths.append(entry.path)
                continue

            self.stats.directories_listed += 1
            directories.append(entry.path)
            stack.extend(_PendingEntry(child, pending.depth + 1) for child in reversed(children))

        return files, directories

    def _should_descend(self, entry: TreeEntry, depth: int) -> bool:
        if not should_recurse(entry.name):
            return False
        return self.max_depth is None or depth < self.max_depth

    def _collect_file(self, ref: RepositoryReference, entry: TreeEntry) -> FileRecord:
        content = None
        if should_fetch_file(entry.name) and within_size_cap(entry.size):
            try:
                content = self.client.fetch_file_content(ref, entry.path)
                self.stats.files_fetched += 1
            except ContentFetchError as e:
                logger.warning(f"Failed to get content for {entry.path}: {e}")
                self.stats.files_failed += 1
                self.stats.failed_paths.append(entry.path)
        return FileRecord(name=entry.name, path=entry.path, size=entry.size, content=content)


def render_context(digest: RepositoryDigest) -> str:
    """Render a digest as the context block embedded in the system prompt.

    The "Key Files" section takes, in traversal order, up to
    MAX_CONTEXT_FILES files that have non-empty content shorter than
    MAX_RENDERED_FILE_CHARS, each cut to FILE_EXCERPT_CHARS characters.
    """
    meta = digest.metadata
    header = "\n".join(
        [
            f"Repository: {meta.owner}/{meta.name}",
            f"Description: {meta.description}",
            f"Language: {meta.language}",
            f"Stars: {meta.stars}, Forks: {meta.forks}",
            f"Topics: {', '.join(meta.topics)}",
        ]
    )
    key_files = FILE_SEPARATOR.join(_render_file(record) for record in select_key_files(digest))
    return f"{header}\n\nKey Files:\n{key_files}"


def select_key_files(digest: RepositoryDigest) -> list[FileRecord]:
    """Return the files that make it into the rendered context."""
    eligible = [
        record
        for record in digest.files
        if record.content and len(record.content) < MAX_RENDERED_FILE_CHARS
    ]
    return eligible[:MAX_CONTEXT_FILES]


def _render_file(record: FileRecord) -> str:
    content = record.content or ""
    excerpt = content[:FILE_EXCERPT_CHARS]
    if len(content) > FILE_EXCERPT_CHARS:
        excerpt += TRUNCATION_MARKER
    return f"{record.path}:\n{excerpt}"
