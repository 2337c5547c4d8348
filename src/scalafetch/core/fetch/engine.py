"""Resolution engine contract and the data it returns.

scalafetch does not resolve dependency graphs itself. It hands a
``FetchRequest`` to a ``ResolutionEngine`` and consumes the ``FetchResult``:
one ``DetailedArtifact`` per downloaded file, plus the resolution graph the
engine computed along the way.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING

from scalafetch.core.dependency.models import ConcreteDependency

if TYPE_CHECKING:
    from scalafetch.core.fetch.request import FetchRequest


# ---------------------------------------------------------------------------
# Result data
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Publication:
    """Publication metadata of one artifact of a module.

    Attributes:
        name: Artifact name (usually the module name).
        type: Artifact type (``jar``, ``src``, ``bundle``...).
        extension: File extension.
        classifier: Classifier, empty for the main artifact.
    """

    name: str
    type: str = "jar"
    extension: str = "jar"
    classifier: str = ""


@dataclass(frozen=True)
class ArtifactDescriptor:
    """Where an artifact is downloaded from."""

    url: str
    changing: bool = False
    optional: bool = False


@dataclass(frozen=True)
class DetailedArtifact:
    """One fetched artifact, with everything needed to classify it.

    ``file`` is None when the engine reported the artifact but did not
    download it (for example an optional artifact that does not exist).
    """

    dependency: ConcreteDependency
    publication: Publication
    artifact: ArtifactDescriptor
    file: Path | None


@dataclass(frozen=True)
class ResolutionGraph:
    """Resolved dependency graph, kept for introspection only.

    Attributes:
        roots: The dependencies that were requested.
        dependencies: Each resolved dependency mapped to its direct
            dependencies.
    """

    roots: tuple[ConcreteDependency, ...] = ()
    dependencies: dict[ConcreteDependency, tuple[ConcreteDependency, ...]] = field(
        default_factory=dict, hash=False
    )

    def direct_dependencies(self, dependency: ConcreteDependency) -> tuple[ConcreteDependency, ...]:
        return self.dependencies.get(dependency, ())

    @property
    def resolved(self) -> list[ConcreteDependency]:
        return list(self.dependencies)


@dataclass(frozen=True)
class FetchResult:
    """What an engine returns for one request."""

    detailed_artifacts: tuple[DetailedArtifact, ...] = ()
    resolution: ResolutionGraph = field(default_factory=ResolutionGraph)

    @property
    def artifacts(self) -> list[tuple[ArtifactDescriptor, Path]]:
        """``(artifact, file)`` pairs for artifacts that were downloaded."""
        return [
            (d.artifact, d.file) for d in self.detailed_artifacts if d.file is not None
        ]

    @property
    def files(self) -> list[Path]:
        return [path for _, path in self.artifacts]

    def downloaded_only(self) -> FetchResult:
        """Return a copy without artifacts that have no local file."""
        kept = tuple(d for d in self.detailed_artifacts if d.file is not None)
        return replace(self, detailed_artifacts=kept)


# ---------------------------------------------------------------------------
# Engine contract
# ---------------------------------------------------------------------------


class ResolutionEngine(ABC):
    """Abstract resolution and download engine.

    Implementations must be safe to call from several threads at once:
    the orchestration runs independent sub-fetches concurrently against one
    engine and its shared cache.
    """

    @abstractmethod
    def resolve(self, request: FetchRequest) -> FetchResult:
        """Resolve and download everything *request* asks for.

        Args:
            request: Dependencies, repositories (fallback included),
                forced versions, and classifier selection.

        Returns:
            The detailed artifacts and the resolution graph.

        Raises:
            ResolutionEngineError: If resolution or download fails.
        """
