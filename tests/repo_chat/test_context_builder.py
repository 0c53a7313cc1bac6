"""Tests for repository traversal and digest building."""

import logging

import pytest

from repo_chat.context_builder import ContextBuilder, render_context
from repo_chat.errors import NetworkError, RepositoryFetchError, RepositoryNotFound
from repo_chat.selection import MAX_FILE_BYTES


class TestHelloScenario:
    """A small repository with a source dir and a dependency dir."""

    def test_collects_readme_and_source_only(self, make_client, hello_tree, ref):
        """Test node_modules is excluded and both files are read."""
        client = make_client(hello_tree)

        digest = ContextBuilder(client).build(ref)

        assert [f.path for f in digest.files] == ["README.md", "src/index.ts"]
        assert digest.files_count == 2
        assert all(f.has_content for f in digest.files)
        assert digest.files[0].size == 200
        assert digest.files[1].size == 300
        assert "node_modules" not in client.listed
        assert digest.directories == ("src",)

    def test_context_renders_files_in_traversal_order(self, make_client, hello_tree, ref):
        """Test the rendered context lists README before src/index.ts."""
        digest = ContextBuilder(make_client(hello_tree)).build(ref)

        context = render_context(digest)

        assert context.index("README.md:\n# hello") < context.index("src/index.ts:\nexport")
        assert "node_modules" not in context

    def test_digest_keeps_metadata_and_reference(self, make_client, hello_tree, ref, metadata):
        """Test the digest carries what the client reported."""
        digest = ContextBuilder(make_client(hello_tree)).build(ref)

        assert digest.reference == ref
        assert digest.metadata == metadata


class TestTraversalOrder:
    """Files appear in depth-first listing order."""

    def test_subdirectory_files_inline_at_directory_position(self, make_client, ref):
        """Test a directory's files come where the directory was listed."""
        tree = {
            "a.py": "a",
            "lib": {"b.py": "b", "deep": {"c.py": "c"}, "d.py": "d"},
            "e.py": "e",
        }

        digest = ContextBuilder(make_client(tree)).build(ref)

        assert [f.path for f in digest.files] == [
            "a.py",
            "lib/b.py",
            "lib/deep/c.py",
            "lib/d.py",
            "e.py",
        ]
        assert digest.directories == ("lib", "lib/deep")

    def test_files_count_includes_unread_files(self, make_client, ref):
        """Test files without content still count."""
        tree = {"logo.png": "binary", "main.go": "package main", "docs": {"diagram.svg": "<svg/>"}}

        digest = ContextBuilder(make_client(tree)).build(ref)

        assert digest.files_count == 3
        assert [f.path for f in digest.files_with_content()] == ["main.go"]


class TestFileSelection:
    """Content is fetched only for selected, small files."""

    def test_unselected_file_is_listed_but_not_fetched(self, make_client, ref):
        """Test a .png is recorded without content."""
        client = make_client({"logo.png": "binary"})

        digest = ContextBuilder(client).build(ref)

        assert digest.files[0].content is None
        assert client.fetched == []

    def test_file_at_size_cap_is_not_fetched(self, make_client, ref):
        """Test a selected file of exactly the cap is skipped."""
        client = make_client({"big.py": "x"}, sizes={"big.py": MAX_FILE_BYTES})

        digest = ContextBuilder(client).build(ref)

        assert digest.files[0].content is None
        assert client.fetched == []

    def test_file_just_under_size_cap_is_fetched(self, make_client, ref):
        """Test a selected file one byte under the cap is read."""
        client = make_client({"ok.py": "x"}, sizes={"ok.py": MAX_FILE_BYTES - 1})

        digest = ContextBuilder(client).build(ref)

        assert digest.files[0].content == "x"

    def test_unknown_size_is_not_fetched(self, make_client, ref):
        """Test a file whose size the host did not report is skipped."""
        client = make_client({"main.py": "print()"}, sizes={"main.py": None})

        digest = ContextBuilder(client).build(ref)

        assert digest.files[0].content is None


class TestDirectorySelection:
    """Directories are walked according to the name rules."""

    def test_skip_substring_wins_over_important_substring(self, make_client, ref):
        """Test 'src-build' is skipped even though it contains 'src'."""
        tree = {"src-build": {"a.py": "a"}, "dist": {"b.js": "b"}, "lib": {"c.py": "c"}}
        client = make_client(tree)

        digest = ContextBuilder(client).build(ref)

        assert [f.path for f in digest.files] == ["lib/c.py"]
        assert "src-build" not in client.listed
        assert "dist" not in client.listed

    def test_long_unimportant_directory_is_skipped(self, make_client, ref):
        """Test a long name without an important substring is not walked."""
        tree = {"a_rather_long_folder_name": {"x.py": "x"}}

        digest = ContextBuilder(make_client(tree)).build(ref)

        assert digest.files == ()

    def test_long_important_directory_is_walked(self, make_client, ref):
        """Test a long name containing an important substring is walked."""
        tree = {"shared_components_library": {"x.py": "x"}}

        digest = ContextBuilder(make_client(tree)).build(ref)

        assert [f.path for f in digest.files] == ["shared_components_library/x.py"]


class TestPartialFailures:
    """Per-file and per-directory failures never abort the walk."""

    def test_file_fetch_failure_keeps_siblings(self, make_client, ref, caplog):
        """Test a failed file is recorded without content and siblings are read."""
        tree = {"a.py": "a", "b.py": "b", "c.py": "c"}
        client = make_client(tree, broken_files={"b.py"})
        builder = ContextBuilder(client)

        with caplog.at_level(logging.WARNING):
            digest = builder.build(ref)

        assert [(f.path, f.content) for f in digest.files] == [
            ("a.py", "a"),
            ("b.py", None),
            ("c.py", "c"),
        ]
        assert builder.stats.files_failed == 1
        assert "b.py" in caplog.text

    def test_subdirectory_listing_failure_contributes_nothing(self, make_client, ref):
        """Test an unreadable subdirectory is dropped and the walk continues."""
        tree = {"src": {"a.py": "a"}, "lib": {"b.py": "b"}, "z.md": "z"}
        client = make_client(tree, broken_dirs={"src"})
        builder = ContextBuilder(client)

        digest = builder.build(ref)

        assert [f.path for f in digest.files] == ["lib/b.py", "z.md"]
        assert builder.stats.directories_failed == 1
        assert builder.stats.failed_paths == ["src"]
        assert digest.directories == ("lib",)

    def test_root_listing_failure_propagates(self, make_client, ref):
        """Test the root listing is fatal."""
        client = make_client({"a.py": "a"}, broken_dirs={""})

        with pytest.raises(NetworkError):
            ContextBuilder(client).build(ref)

    def test_metadata_failure_is_fatal(self, make_client, ref):
        """Test a missing repository raises a RepositoryFetchError."""
        client = make_client({"a.py": "a"}, metadata=None)

        with pytest.raises(RepositoryFetchError) as exc_info:
            ContextBuilder(client).build(ref)

        assert isinstance(exc_info.value, RepositoryNotFound)
        assert client.listed == []


class TestDepthLimit:
    """The optional depth limit."""

    @pytest.fixture
    def deep_tree(self):
        return {"a.py": "a", "src": {"b.py": "b", "lib": {"c.py": "c"}}}

    def test_no_limit_by_default(self, make_client, deep_tree, ref):
        """Test the whole tree is walked without a limit."""
        digest = ContextBuilder(make_client(deep_tree)).build(ref)

        assert [f.path for f in digest.files] == ["a.py", "src/b.py", "src/lib/c.py"]

    def test_zero_reads_root_only(self, make_client, deep_tree, ref):
        """Test max_depth=0 never descends."""
        digest = ContextBuilder(make_client(deep_tree), max_depth=0).build(ref)

        assert [f.path for f in digest.files] == ["a.py"]

    def test_one_level(self, make_client, deep_tree, ref):
        """Test max_depth=1 descends one level."""
        builder = ContextBuilder(make_client(deep_tree), max_depth=1)

        digest = builder.build(ref)

        assert [f.path for f in digest.files] == ["a.py", "src/b.py"]
        assert builder.stats.directories_skipped == 1
