"""Repositories: parsing, the URL fallback repository, and per-fetch selection."""

from scalafetch.core.repository.models import (
    FallbackEntry,
    FallbackRepository,
    RepositoryKind,
    RepositorySpec,
)
from scalafetch.core.repository.parser import parse_repositories, parse_repository
from scalafetch.core.repository.selector import (
    has_snapshot,
    select_repositories,
    snapshots_repository,
)

__all__ = [
    "FallbackEntry",
    "FallbackRepository",
    "RepositoryKind",
    "RepositorySpec",
    "has_snapshot",
    "parse_repositories",
    "parse_repository",
    "select_repositories",
    "snapshots_repository",
]
