"""Fetching: template conversion, fallback URLs, version pins, engine invocation.

``fetch`` is the entry point for dependency templates. It converts every
template (collecting per-dependency failures), builds the URL fallback
repository, and delegates to ``fetch_concrete``, which pins versions, builds
the engine request and wraps engine failures with source positions.

All functions return an ``Outcome`` instead of raising: the orchestration
decides at each sub-fetch boundary whether a failure is tolerated.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import AbstractSet, Sequence

from scalafetch.core.dependency.conversion import to_concrete
from scalafetch.core.dependency.models import (
    ConcreteDependency,
    DependencyTemplate,
    ScalaParameters,
)
from scalafetch.core.fetch.engine import FetchResult, ResolutionEngine
from scalafetch.core.fetch.request import (
    add_dependencies,
    add_forced_versions,
    add_repositories,
    build_request,
    with_classifiers,
    with_fallback,
)
from scalafetch.core.forcing import ForcedVersion, forced_versions
from scalafetch.core.positions import Position, Positioned, positions_of
from scalafetch.core.recovery import (
    Outcome,
    RecoveryCallback,
    recover_with_default,
    surface_all,
)
from scalafetch.core.repository.models import FallbackEntry, FallbackRepository, RepositorySpec
from scalafetch.exceptions import (
    BuildError,
    CompositeBuildError,
    FetchingDependenciesError,
    ResolutionEngineError,
)

logger = logging.getLogger(__name__)


def _convert_all(
    dependencies: Sequence[Positioned[DependencyTemplate]],
    params: ScalaParameters | None,
    maybe_recover_on_error: RecoveryCallback,
    log: logging.Logger,
) -> Outcome[list[tuple[DependencyTemplate, ConcreteDependency]]]:
    """Convert templates one by one; recovered failures drop their dependency."""
    converted: list[tuple[DependencyTemplate, ConcreteDependency]] = []
    errors: list[BuildError] = []
    for dep in dependencies:
        try:
            concrete = to_concrete(dep.value, params, dep.positions)
        except BuildError as exc:
            surfaced = maybe_recover_on_error(exc)
            if surfaced is None:
                log.debug("Dropping %s: %s", dep.value.render(), exc.message)
            else:
                errors.append(surfaced)
            continue
        converted.append((dep.value, concrete))
    if errors:
        return Outcome.failure(CompositeBuildError(errors))
    return Outcome.success(converted)


def _fallbacks(
    converted: Sequence[tuple[DependencyTemplate, ConcreteDependency]],
) -> FallbackRepository:
    return FallbackRepository.from_entries([
        FallbackEntry(concrete.module, concrete.version, template.url, template.changing)
        for template, concrete in converted
        if template.url is not None
    ])


def fetch(
    dependencies: Sequence[Positioned[DependencyTemplate]],
    extra_repositories: Sequence[RepositorySpec],
    params: ScalaParameters | None,
    engine: ResolutionEngine,
    classifiers: AbstractSet[str] | None = None,
    maybe_recover_on_error: RecoveryCallback = surface_all,
    message: str | None = None,
    log: logging.Logger | None = None,
) -> Outcome[FetchResult]:
    """Fetch dependency templates.

    Args:
        dependencies: Templates with the positions that declared them.
        extra_repositories: Repositories in precedence order.
        params: Scala parameters for suffixing and version pins, or None.
        engine: The resolution engine.
        classifiers: None for the engine default, else a set where ``"_"``
            selects main artifacts and other entries name classifiers.
        maybe_recover_on_error: Recovery policy, applied to each conversion
            failure and to an engine failure.
        message: Progress message logged before the engine call.
        log: Logger handle; defaults to this module's logger.

    Returns:
        The fetch result, an empty result if an engine failure was
        recovered, or the surfaced error.
    """
    log = log or logger
    converted = _convert_all(dependencies, params, maybe_recover_on_error, log)
    if converted.error is not None:
        return Outcome.failure(converted.error)
    pairs = converted.value or []

    outcome = fetch_concrete(
        [concrete for _, concrete in pairs],
        extra_repositories,
        engine,
        force_scala_version=params.scala_version if params else None,
        classifiers=classifiers,
        fallback=_fallbacks(pairs),
        positions=positions_of(dependencies),
        message=message,
        log=log,
    )
    return recover_with_default(outcome, FetchResult(), maybe_recover_on_error)


def fetch_concrete(
    dependencies: Sequence[ConcreteDependency],
    extra_repositories: Sequence[RepositorySpec],
    engine: ResolutionEngine,
    force_scala_version: str | None = None,
    extra_forced_versions: Sequence[ForcedVersion] = (),
    classifiers: AbstractSet[str] | None = None,
    fallback: FallbackRepository | None = None,
    positions: Sequence[Position] = (),
    message: str | None = None,
    log: logging.Logger | None = None,
) -> Outcome[FetchResult]:
    """Fetch already concrete dependencies with a single engine call.

    Artifacts the engine did not download are dropped from the result.
    Engine failures come back as ``FetchingDependenciesError`` carrying
    *positions*.
    """
    log = log or logger
    if extra_repositories:
        log.debug(
            "Fetching %s, adding %s",
            [d.render() for d in dependencies],
            [r.ident for r in extra_repositories],
        )
    else:
        log.debug("Fetching %s", [d.render() for d in dependencies])
    if message:
        log.info("%s", message)

    request = build_request(
        add_repositories(extra_repositories),
        with_fallback(fallback or FallbackRepository()),
        add_dependencies(dependencies),
        add_forced_versions(forced_versions(force_scala_version, extra_forced_versions)),
        with_classifiers(classifiers),
    )
    try:
        result = engine.resolve(request)
    except (ResolutionEngineError, OSError) as exc:
        return Outcome.failure(FetchingDependenciesError(exc, positions))
    return Outcome.success(result.downloaded_only())


def artifacts(
    dependencies: Sequence[Positioned[DependencyTemplate]],
    extra_repositories: Sequence[RepositorySpec],
    params: ScalaParameters | None,
    engine: ResolutionEngine,
    classifiers: AbstractSet[str] | None = None,
    message: str | None = None,
    log: logging.Logger | None = None,
) -> Outcome[list[tuple[str, Path]]]:
    """Fetch templates and reduce the result to ``(url, path)`` pairs.

    No recovery is applied here; callers decide at their own boundary.
    """
    log = log or logger
    outcome = fetch(
        dependencies,
        extra_repositories,
        params,
        engine,
        classifiers=classifiers,
        message=message,
        log=log,
    )

    def to_pairs(result: FetchResult) -> list[tuple[str, Path]]:
        pairs = [(a.url, path) for a, path in result.artifacts]
        if log.isEnabledFor(logging.DEBUG):
            lines = [f"Found {len(pairs)} artifacts:"] + [f"  {p}" for _, p in pairs]
            log.debug("%s", os.linesep.join(lines))
        return pairs

    return outcome.map(to_pairs)
