"""Repository data models: remote repositories and the URL fallback repository."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterator, Mapping

from scalafetch.core.dependency.models import Module


class RepositoryKind(enum.Enum):
    MAVEN = "maven"
    IVY = "ivy"


@dataclass(frozen=True)
class RepositorySpec:
    """A repository to query, in precedence order.

    Attributes:
        ident: Identifier as understood by Coursier (``central``,
            ``sonatype:snapshots``, a URL, or ``ivy:<pattern>``).
        root: Root URL or Ivy pattern.
        kind: Layout of the repository.
        snapshots_only: True for repositories that only serve snapshots.
    """

    ident: str
    root: str
    kind: RepositoryKind = RepositoryKind.MAVEN
    snapshots_only: bool = False

    def __str__(self) -> str:
        return self.ident


@dataclass(frozen=True)
class FallbackEntry:
    module: Module
    version: str
    url: str
    changing: bool = True


class FallbackRepository:
    """Synthetic in-memory repository for dependencies with a URL override.

    Keyed by (module, version); each key maps to the download URL and its
    ``changing`` flag. The mapping is fixed at construction and never
    mutated. Orchestration always places it last in repository precedence.
    """

    ident = "fallback"

    def __init__(self, entries: Mapping[tuple[Module, str], tuple[str, bool]] | None = None) -> None:
        self._entries: dict[tuple[Module, str], tuple[str, bool]] = dict(entries or {})

    @classmethod
    def from_entries(cls, entries: list[FallbackEntry]) -> FallbackRepository:
        return cls({(e.module, e.version): (e.url, e.changing) for e in entries})

    def lookup(self, module: Module, version: str) -> tuple[str, bool] | None:
        """Return ``(url, changing)`` for a module version, or None."""
        return self._entries.get((module, version))

    def entries(self) -> Iterator[FallbackEntry]:
        for (module, version), (url, changing) in self._entries.items():
            yield FallbackEntry(module, version, url, changing)

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FallbackRepository):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def __repr__(self) -> str:
        return f"FallbackRepository({len(self._entries)} entries)"

    def __str__(self) -> str:
        return self.ident
