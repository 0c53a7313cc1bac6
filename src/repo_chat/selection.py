"""Name-based rules deciding which files are read and which directories are walked."""

# Substrings of lowercase file names that mark project-level documents and manifests
IMPORTANT_FILE_NAMES: tuple[str, ...] = (
    "readme",
    "license",
    "changelog",
    "contributing",
    "package.json",
    "requirements.txt",
    "cargo.toml",
    "pom.xml",
    "build.gradle",
    "makefile",
    "dockerfile",
)

# Documentation, configuration and source extensions
IMPORTANT_EXTENSIONS: tuple[str, ...] = (
    ".md",
    ".txt",
    ".json",
    ".yml",
    ".yaml",
    ".js",
    ".ts",
    ".jsx",
    ".tsx",
    ".py",
    ".go",
    ".java",
    ".cpp",
    ".c",
    ".h",
    ".php",
    ".rb",
    ".rs",
    ".swift",
    ".kt",
    ".scala",
    ".sh",
    ".dockerfile",
    ".toml",
    ".ini",
    ".cfg",
)

IMPORTANT_DIRECTORIES: tuple[str, ...] = (
    "src",
    "lib",
    "components",
    "pages",
    "utils",
    "services",
    "api",
    "tests",
    "docs",
)

# Build output and dependency directories; a match always wins
SKIP_DIRECTORIES: tuple[str, ...] = (
    "node_modules",
    ".git",
    "dist",
    "build",
    ".next",
    "target",
    "vendor",
)

# Directory names shorter than this are walked even without an important match
SHORT_DIRECTORY_NAME = 20

# Files at or above this many bytes never have content fetched
MAX_FILE_BYTES = 100_000


def should_fetch_file(name: str) -> bool:
    """Return True if a file's name makes it worth reading.

    Example:
        >>> should_fetch_file("README")
        True
        >>> should_fetch_file("logo.png")
        False
    """
    lower = name.lower()
    return any(important in lower for important in IMPORTANT_FILE_NAMES) or lower.endswith(
        IMPORTANT_EXTENSIONS
    )


def should_recurse(name: str) -> bool:
    """Return True if a directory should be descended into.

    Example:
        >>> should_recurse("node_modules")
        False
        >>> should_recurse("a_rather_long_directory_name")
        False
        >>> should_recurse("a_rather_long_services_directory")
        True
    """
    lower = name.lower()
    if any(skip in lower for skip in SKIP_DIRECTORIES):
        return False
    return any(important in lower for important in IMPORTANT_DIRECTORIES) or (
        len(lower) < SHORT_DIRECTORY_NAME
    )


def within_size_cap(size: int | None) -> bool:
    """Return True if a reported size allows fetching the content.

    Unknown and zero sizes are not fetched.
    """
    return bool(size) and size < MAX_FILE_BYTES
