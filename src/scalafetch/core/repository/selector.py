"""Repository selection for a single sub-fetch.

The snapshot repository is only worth querying when the sub-fetch actually
asks for a snapshot. Each sub-fetch passes the versions of the internal
dependencies it requests, and only those.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from scalafetch.constants import SNAPSHOT_MARKER, SNAPSHOTS_REPOSITORY
from scalafetch.core.repository.models import RepositorySpec
from scalafetch.core.repository.parser import parse_repository


def snapshots_repository() -> RepositorySpec:
    return parse_repository(SNAPSHOTS_REPOSITORY)


def has_snapshot(versions: Iterable[str]) -> bool:
    return any(version.endswith(SNAPSHOT_MARKER) for version in versions)


def select_repositories(
    extra_repositories: Sequence[RepositorySpec],
    internal_versions: Iterable[str] = (),
) -> list[RepositorySpec]:
    """Return the repositories for one sub-fetch.

    Args:
        extra_repositories: User-supplied repositories, in precedence order.
        internal_versions: Versions of the internal dependencies this
            sub-fetch requests.

    Returns:
        *extra_repositories*, followed by the snapshot repository iff any
        of *internal_versions* ends with ``SNAPSHOT`` and it is not listed
        already.
    """
    repositories = list(extra_repositories)
    if has_snapshot(internal_versions):
        snapshots = snapshots_repository()
        if all(r.root != snapshots.root for r in repositories):
            repositories.append(snapshots)
    return repositories
