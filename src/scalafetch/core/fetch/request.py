"""Immutable fetch requests, built by folding transformation steps.

Each step is a plain function from request to request, so the way a request
is put together for a given sub-fetch can be tested one step at a time::

    request = build_request(
        add_dependencies(deps),
        add_repositories(repos),
        with_classifiers({"_", "sources"}),
    )
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from functools import reduce
from typing import AbstractSet, Callable, Iterable, Sequence

from scalafetch.constants import MAIN_ARTIFACTS_MARKER
from scalafetch.core.dependency.models import ConcreteDependency
from scalafetch.core.forcing import ForcedVersion
from scalafetch.core.repository.models import FallbackRepository, RepositorySpec


@dataclass(frozen=True)
class FetchRequest:
    """Everything a resolution engine needs for one fetch.

    Attributes:
        dependencies: Root dependencies, in request order.
        repositories: Repositories to query, in precedence order.
        fallback: URL fallback repository, queried after all others.
        forced_versions: Module pins, later entries win.
        classifiers: Extra classifiers to fetch (``sources``...).
        main_artifacts: Whether to fetch main artifacts. None leaves the
            engine default (main artifacts only).
    """

    dependencies: tuple[ConcreteDependency, ...] = ()
    repositories: tuple[RepositorySpec, ...] = ()
    fallback: FallbackRepository | None = None
    forced_versions: tuple[ForcedVersion, ...] = ()
    classifiers: frozenset[str] = frozenset()
    main_artifacts: bool | None = None

    @property
    def all_repositories(self) -> list[RepositorySpec | FallbackRepository]:
        """Repositories in precedence order, the fallback repository last."""
        repos: list[RepositorySpec | FallbackRepository] = list(self.repositories)
        if self.fallback is not None:
            repos.append(self.fallback)
        return repos

    @property
    def fetches_main_artifacts(self) -> bool:
        return self.main_artifacts is None or self.main_artifacts


RequestStep = Callable[[FetchRequest], FetchRequest]


def build_request(*steps: RequestStep) -> FetchRequest:
    """Fold *steps* over an empty request."""
    return reduce(lambda request, step: step(request), steps, FetchRequest())


def add_dependencies(dependencies: Iterable[ConcreteDependency]) -> RequestStep:
    deps = tuple(dependencies)

    def step(request: FetchRequest) -> FetchRequest:
        return replace(request, dependencies=request.dependencies + deps)

    return step


def add_repositories(repositories: Sequence[RepositorySpec]) -> RequestStep:
    repos = tuple(repositories)

    def step(request: FetchRequest) -> FetchRequest:
        return replace(request, repositories=request.repositories + repos)

    return step


def with_fallback(fallback: FallbackRepository) -> RequestStep:
    def step(request: FetchRequest) -> FetchRequest:
        return replace(request, fallback=fallback)

    return step


def add_forced_versions(forced: Sequence[ForcedVersion]) -> RequestStep:
    pins = tuple(forced)

    def step(request: FetchRequest) -> FetchRequest:
        return replace(request, forced_versions=request.forced_versions + pins)

    return step


def with_classifiers(selection: AbstractSet[str] | None) -> RequestStep:
    """Apply a classifier selection.

    None keeps the engine default. Otherwise ``"_"`` in *selection* turns on
    main artifacts and every other entry is fetched as a classifier.
    """

    def step(request: FetchRequest) -> FetchRequest:
        if selection is None:
            return request
        return replace(
            request,
            main_artifacts=MAIN_ARTIFACTS_MARKER in selection,
            classifiers=request.classifiers
            | frozenset(c for c in selection if c != MAIN_ARTIFACTS_MARKER),
        )

    return step
