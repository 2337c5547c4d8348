"""Shared fixtures for scalafetch tests.

Provides an in-memory resolution engine that serves a small, fixed module
graph. Artifacts come from the first listed Maven repository, unless the URL
fallback repository has an override for the module. It honors version pins
and classifier selection, and records every request it receives so tests can
assert on what the orchestration asked for.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Iterable, Mapping, Sequence

import pytest

from scalafetch.core.dependency.models import ConcreteDependency, Module
from scalafetch.core.fetch.engine import (
    ArtifactDescriptor,
    DetailedArtifact,
    FetchResult,
    Publication,
    ResolutionEngine,
    ResolutionGraph,
)
from scalafetch.core.fetch.request import FetchRequest
from scalafetch.core.repository.models import RepositoryKind
from scalafetch.exceptions import ResolutionEngineError

REPO_ROOT = "https://repo.example.com/maven2"
CACHE_ROOT = Path("/cache/v1")

DEFAULT_GRAPH: dict[str, list[str]] = {
    "org.typelevel:cats-core_3:2.10.0": ["org.typelevel:cats-kernel_3:2.10.0"],
    "org.typelevel:cats-core_2.13:2.10.0": [
        "org.typelevel:cats-kernel_2.13:2.10.0",
        "org.scala-lang:scala-library:2.13.10",
    ],
    "org.scala-lang:scala3-compiler_3:3.3.0": [
        "org.scala-lang:scala3-library_3:3.3.0",
        "org.scala-lang:scala3-interfaces:3.3.0",
    ],
    "org.scala-lang:scala-compiler:2.13.12": [
        "org.scala-lang:scala-library:2.13.12",
        "org.scala-lang:scala-reflect:2.13.12",
    ],
}


def _parse(coord: str) -> ConcreteDependency:
    org, name, version = coord.split(":")
    return ConcreteDependency(Module(org, name), version)


def cache_path(url: str) -> Path:
    """Where a Coursier-like cache would keep *url*."""
    scheme, _, rest = url.partition("://")
    return CACHE_ROOT / scheme / rest


def repo_url(dep: ConcreteDependency, classifier: str = "", root: str = REPO_ROOT) -> str:
    org_path = dep.module.organization.replace(".", "/")
    suffix = f"-{classifier}" if classifier else ""
    name = dep.module.name
    return f"{root}/{org_path}/{name}/{dep.version}/{name}-{dep.version}{suffix}.jar"


class FakeEngine(ResolutionEngine):
    """In-memory engine over a fixed ``coord -> [coord]`` graph.

    Args:
        graph: Direct dependencies per ``org:name:version``.
        failing: ``org:name`` modules whose resolution raises.
        missing: ``org:name`` modules reported without a local file.
    """

    def __init__(
        self,
        graph: Mapping[str, Sequence[str]] | None = None,
        failing: Iterable[str] = (),
        missing: Iterable[str] = (),
    ) -> None:
        self.graph = dict(DEFAULT_GRAPH if graph is None else graph)
        self.failing = set(failing)
        self.missing = set(missing)
        self.requests: list[FetchRequest] = []
        self._lock = threading.Lock()

    def requested_modules(self) -> list[list[str]]:
        """Root modules of every recorded request, as ``org:name`` strings."""
        return [[d.module.render() for d in r.dependencies] for r in self.requests]

    def request_for(self, module: str) -> FetchRequest:
        """The first recorded request that has *module* among its roots."""
        for request in self.requests:
            if any(d.module.render() == module for d in request.dependencies):
                return request
        raise AssertionError(f"No request for {module}")

    def _artifacts(
        self, dep: ConcreteDependency, request: FetchRequest, classifier: str = ""
    ) -> list[DetailedArtifact]:
        fallback = request.fallback.lookup(dep.module, dep.version) if request.fallback else None
        root = next(
            (r.root for r in request.repositories
             if r.kind is RepositoryKind.MAVEN and not r.snapshots_only),
            REPO_ROOT,
        )
        out: list[DetailedArtifact] = []
        if request.fetches_main_artifacts:
            url = fallback[0] if fallback else repo_url(dep, classifier, root)
            file = None if dep.module.render() in self.missing else cache_path(url)
            out.append(DetailedArtifact(
                dep,
                Publication(dep.module.name, classifier=classifier),
                ArtifactDescriptor(url),
                file,
            ))
        if fallback is None:
            for extra in sorted(request.classifiers):
                url = repo_url(dep, extra, root)
                out.append(DetailedArtifact(
                    dep,
                    Publication(dep.module.name, type="src", classifier=extra),
                    ArtifactDescriptor(url),
                    cache_path(url),
                ))
        return out

    def resolve(self, request: FetchRequest) -> FetchResult:
        with self._lock:
            self.requests.append(request)
        pins = dict(request.forced_versions)
        detailed: list[DetailedArtifact] = []
        graph: dict[ConcreteDependency, tuple[ConcreteDependency, ...]] = {}
        seen: set[tuple[Module, str]] = set()
        queue = list(request.dependencies)
        while queue:
            requested = queue.pop(0)
            dep = ConcreteDependency(
                requested.module, pins.get(requested.module, requested.version)
            )
            if (dep.module, dep.version) in seen:
                continue
            seen.add((dep.module, dep.version))
            if dep.module.render() in self.failing:
                raise ResolutionEngineError(f"not found: {dep.render()}")
            children: tuple[ConcreteDependency, ...] = ()
            if requested.transitive:
                children = tuple(_parse(c) for c in self.graph.get(dep.render(), []))
            graph[dep] = children
            detailed.extend(self._artifacts(dep, request, requested.attribute("classifier") or ""))
            queue.extend(children)
        return FetchResult(tuple(detailed), ResolutionGraph(request.dependencies, graph))


@pytest.fixture
def engine() -> FakeEngine:
    """Fresh in-memory engine with the default module graph."""
    return FakeEngine()


@pytest.fixture
def make_engine():
    """Factory for engines with a custom graph, failing or missing modules."""
    return FakeEngine
