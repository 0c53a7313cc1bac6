"""Display helpers for an analyzed repository."""

from __future__ import annotations

from datetime import datetime

from common.constants import GREETING_TEMPLATE

from .models import RepositoryDigest


def format_count(value: int) -> str:
    """Abbreviate counts of a thousand or more.

    Example:
        >>> format_count(1234)
        '1.2k'
        >>> format_count(999)
        '999'
    """
    if value >= 1000:
        return f"{value / 1000:.1f}k"
    return str(value)


def format_date(value: datetime | None) -> str:
    """Format a timestamp as e.g. 'Jan 5, 2024'; empty for None."""
    if value is None:
        return ""
    return f"{value:%b} {value.day}, {value.year}"


def greeting(digest: RepositoryDigest) -> str:
    """Opening assistant message shown when a repository is loaded."""
    meta = digest.metadata
    return GREETING_TEMPLATE.format(repo_name=f"{meta.owner}/{meta.name}")


def summarize_digest(digest: RepositoryDigest) -> list[str]:
    """Return human-readable overview lines for a digest."""
    meta = digest.metadata
    lines = [f"Repository: {meta.owner}/{meta.name}", f"Language: {meta.language}"]
    if meta.description:
        lines.append(f"Description: {meta.description}")
    lines.append(f"Stars: {format_count(meta.stars)}  Forks: {format_count(meta.forks)}")
    lines.append(f"Size: {format_count(meta.size_kb)} KB")
    lines.append(
        f"Files: {digest.files_count} ({len(digest.files_with_content())} read)"
    )
    if meta.topics:
        lines.append(f"Topics: {', '.join(meta.topics)}")
    if meta.created_at is not None:
        lines.append(f"Created: {format_date(meta.created_at)}")
    if meta.updated_at is not None:
        lines.append(f"Updated: {format_date(meta.updated_at)}")
    if meta.license:
        lines.append(f"License: {meta.license}")
    return lines
