"""Shared fixtures for repo_chat tests."""

import pytest

from repo_chat.clients.base import RepositoryClient
from repo_chat.errors import ContentFetchError, NetworkError, RepositoryNotFound
from repo_chat.models import EntryKind, RepositoryMetadata, RepositoryReference, TreeEntry


class FakeRepositoryClient(RepositoryClient):
    """In-memory repository built from a nested dict.

    Directories are dicts, files are strings (their content). Paths listed in
    ``broken_files`` / ``broken_dirs`` fail when fetched or listed.
    """

    def __init__(self, tree, *, metadata=None, broken_files=(), broken_dirs=(), sizes=None):
        self.tree = tree
        self.metadata = metadata
        self.broken_files = set(broken_files)
        self.broken_dirs = set(broken_dirs)
        self.sizes = dict(sizes or {})
        self.listed: list[str] = []
        self.fetched: list[str] = []

    def fetch_metadata(self, ref: RepositoryReference) -> RepositoryMetadata:
        if self.metadata is None:
            raise RepositoryNotFound(f"Repository {ref.full_name} not found")
        return self.metadata

    def _node(self, path: str):
        node = self.tree
        for part in [p for p in path.split("/") if p]:
            node = node[part]
        return node

    def list_directory(self, ref: RepositoryReference, path: str = "") -> list[TreeEntry]:
        self.listed.append(path)
        if path in self.broken_dirs:
            raise NetworkError(f"listing {path or '/'} failed")
        entries = []
        for name, child in self._node(path).items():
            child_path = f"{path}/{name}" if path else name
            if isinstance(child, dict):
                entries.append(TreeEntry(name, child_path, EntryKind.DIRECTORY))
            else:
                size = self.sizes.get(child_path, len(child.encode("utf-8")))
                entries.append(TreeEntry(name, child_path, EntryKind.FILE, size))
        return entries

    def fetch_file_content(self, ref: RepositoryReference, path: str) -> str:
        self.fetched.append(path)
        if path in self.broken_files:
            raise ContentFetchError(f"Failed to fetch {path}")
        return self._node(path)


@pytest.fixture
def ref():
    return RepositoryReference(owner="octo", repo="hello")


@pytest.fixture
def metadata():
    return RepositoryMetadata(
        name="hello",
        owner="octo",
        description="A friendly greeting library",
        language="TypeScript",
        stars=1234,
        forks=56,
        size_kb=42,
        topics=("greeting", "example"),
        license="MIT License",
    )


@pytest.fixture
def make_client(metadata):
    """Factory building a FakeRepositoryClient with the default metadata."""

    def _make(tree, **kwargs):
        kwargs.setdefault("metadata", metadata)
        return FakeRepositoryClient(tree, **kwargs)

    return _make


@pytest.fixture
def hello_tree():
    """README at the root, one source file, and a dependency directory."""
    return {
        "README.md": "# hello\n" + "x" * 192,
        "src": {"index.ts": "export const hello = () => 'hi';\n" + "y" * 267},
        "node_modules": {"pkg": {"file.js": "module.exports = {};"}},
    }
