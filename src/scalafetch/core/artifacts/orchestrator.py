"""Orchestration: from dependency declarations to one ``Artifacts`` bundle.

``fetch_artifacts`` runs every sub-fetch an orchestration call needs on a
bounded thread pool, in two phases:

1. the Scala toolchain (compiler, each compiler plugin, Scala.js CLI,
   Scala Native CLI);
2. once the toolchain is known, the main dependency set (which folds in the
   toolchain's extra and internal dependencies), the stub jar, the runner
   jar, and each javac plugin.

Each sub-fetch ends in an ``Outcome``. Recoverable boundaries offer failures
to the caller's recovery callback; the first failure that is not recovered
cancels queued sub-fetches and is returned as the result of the whole call.
Merge order is fixed by the builder, never by completion order.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from pathlib import Path
from typing import AbstractSet, Any, Callable, Sequence

from scalafetch.constants import (
    DEFAULT_MAX_WORKERS,
    MAIN_ARTIFACTS_MARKER,
    RUNNER_VERSION,
    SCALA_JS_LINKER_MODULE,
    SOURCES_CLASSIFIER,
    STUBS_VERSION,
)
from scalafetch.core.artifacts import toolchain
from scalafetch.core.artifacts.builder import (
    DependencySetBuilder,
    jmh_dependency,
    jvm_test_runner_dependency,
    runner_dependency,
    stubs_dependency,
)
from scalafetch.core.artifacts.models import Artifacts, ScalaArtifacts, ScalaArtifactsParams
from scalafetch.core.dependency.models import INTRANSITIVE_PARAM, DependencyTemplate, Module
from scalafetch.core.fetch.engine import FetchResult, ResolutionEngine
from scalafetch.core.fetch.fetcher import artifacts, fetch, fetch_concrete
from scalafetch.core.positions import Positioned
from scalafetch.core.recovery import (
    Outcome,
    RecoveryCallback,
    recover_with_default,
    sequence,
    surface_all,
)
from scalafetch.core.repository.models import RepositorySpec
from scalafetch.core.repository.selector import select_repositories

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Sub-fetch scheduling
# ---------------------------------------------------------------------------


@dataclass
class _SubFetch:
    """One logical sub-fetch: one or more engine calls, combined into one outcome."""

    futures: list[Future]
    combine: Callable[[list[Outcome[Any]]], Outcome[Any]]


def _gather(sub_fetches: Sequence[_SubFetch]) -> Outcome[list[Any]]:
    """Wait for sub-fetches, failing fast on the first unrecovered error.

    Returns the combined values in the order of *sub_fetches*.
    """
    values: dict[int, Any] = {}
    remaining: dict[int, int] = {}
    owner: dict[Future, int] = {}
    for index, sub in enumerate(sub_fetches):
        remaining[index] = len(sub.futures)
        for future in sub.futures:
            owner[future] = index

    def finish(index: int) -> Outcome[Any]:
        sub = sub_fetches[index]
        return sub.combine([f.result() for f in sub.futures])

    def cancel_all() -> None:
        for future in owner:
            future.cancel()

    for index, sub in enumerate(sub_fetches):
        if not sub.futures:
            outcome = finish(index)
            if outcome.error is not None:
                cancel_all()
                return Outcome.failure(outcome.error)
            values[index] = outcome.value

    for future in as_completed(owner):
        index = owner[future]
        remaining[index] -= 1
        if remaining[index]:
            continue
        outcome = finish(index)
        if outcome.error is not None:
            cancel_all()
            return Outcome.failure(outcome.error)
        values[index] = outcome.value

    return Outcome.success([values[i] for i in range(len(sub_fetches))])


def _single(future: Future, combine: Callable[[Outcome[Any]], Outcome[Any]] | None = None) -> _SubFetch:
    return _SubFetch([future], lambda outcomes: combine(outcomes[0]) if combine else outcomes[0])


def _flatten(outcome: Outcome[list[list[Any]]]) -> Outcome[list[Any]]:
    return outcome.map(lambda groups: [item for group in groups for item in group])


def _with_origin(dep: DependencyTemplate) -> Callable[[list[tuple[str, Path]]], list[tuple[DependencyTemplate, str, Path]]]:
    return lambda pairs: [(dep, url, path) for url, path in pairs]


# ---------------------------------------------------------------------------
# Scala toolchain
# ---------------------------------------------------------------------------


def _fetch_scala(
    pool: ThreadPoolExecutor,
    scala_artifacts_params: ScalaArtifactsParams,
    extra_repositories: Sequence[RepositorySpec],
    engine: ResolutionEngine,
    log: logging.Logger,
    maybe_recover_on_error: RecoveryCallback,
) -> Outcome[ScalaArtifacts]:
    params = scala_artifacts_params.params
    sv = params.scala_version
    compiler_deps = toolchain.compiler_dependencies(sv)

    compiler = _single(
        pool.submit(
            artifacts,
            [Positioned.none(d) for d in compiler_deps],
            select_repositories(extra_repositories, [sv]),
            params,
            engine,
            message=f"Downloading Scala {sv} compiler",
            log=log,
        ),
        lambda o: recover_with_default(o, [], maybe_recover_on_error),
    )

    plugin_futures = []
    for pos_dep in scala_artifacts_params.compiler_plugins:
        dep0 = pos_dep.value.with_param(INTRANSITIVE_PARAM)
        future = pool.submit(
            artifacts,
            [Positioned(dep0, pos_dep.positions)],
            select_repositories(extra_repositories),
            params,
            engine,
            message=f"Downloading compiler plugin {pos_dep.value.render()}",
            log=log,
        )
        plugin_futures.append((dep0, future))
    plugins = _SubFetch(
        [f for _, f in plugin_futures],
        lambda outcomes: _flatten(
            recover_with_default(
                sequence([
                    o.map(_with_origin(dep0))
                    for (dep0, _), o in zip(plugin_futures, outcomes)
                ]),
                [],
                maybe_recover_on_error,
            )
        ),
    )

    cli_fetches: list[_SubFetch] = []
    js_cli = toolchain.scala_js_cli_dependency(scala_artifacts_params)
    if js_cli is not None:
        sjs_version = toolchain.effective_scala_js_version(scala_artifacts_params)
        cli_fetches.append(_single(
            pool.submit(
                fetch_concrete,
                [js_cli],
                select_repositories(extra_repositories, [js_cli.version, sjs_version]),
                engine,
                extra_forced_versions=[(Module.parse(SCALA_JS_LINKER_MODULE), sjs_version)],
                message="Downloading Scala.js CLI",
                log=log,
            ),
            lambda o: o.map(lambda r: r.files),
        ))
    else:
        cli_fetches.append(_SubFetch([], lambda _: Outcome.success([])))

    native_cli = toolchain.scala_native_cli_dependency(scala_artifacts_params)
    if native_cli is not None:
        cli_fetches.append(_single(
            pool.submit(
                fetch_concrete,
                [native_cli],
                select_repositories(extra_repositories, [native_cli.version]),
                engine,
                message="Downloading Scala Native CLI",
                log=log,
            ),
            lambda o: o.map(lambda r: r.files),
        ))
    else:
        cli_fetches.append(_SubFetch([], lambda _: Outcome.success([])))

    gathered = _gather([compiler, plugins, *cli_fetches])
    if gathered.error is not None:
        return Outcome.failure(gathered.error)
    compiler_artifacts, compiler_plugins, scala_js_cli, scala_native_cli = gathered.value

    return Outcome.success(ScalaArtifacts(
        compiler_dependencies=tuple(compiler_deps),
        compiler_artifacts=tuple(compiler_artifacts),
        compiler_plugins=tuple(compiler_plugins),
        scala_js_cli=tuple(scala_js_cli),
        scala_native_cli=tuple(scala_native_cli),
        internal_dependencies=tuple(toolchain.internal_dependencies(scala_artifacts_params)),
        extra_dependencies=tuple(toolchain.scalapy_dependencies(scala_artifacts_params.add_scalapy)),
        params=params,
    ))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def fetch_artifacts(
    *,
    engine: ResolutionEngine,
    scala_artifacts_params: ScalaArtifactsParams | None = None,
    javac_plugin_dependencies: Sequence[Positioned[DependencyTemplate]] = (),
    extra_javac_plugins: Sequence[Path] = (),
    dependencies: Sequence[Positioned[DependencyTemplate]] = (),
    extra_class_path: Sequence[Path] = (),
    extra_compile_only_jars: Sequence[Path] = (),
    extra_source_jars: Sequence[Path] = (),
    fetch_sources: bool = False,
    add_stubs: bool = False,
    add_jvm_runner: bool | None = None,
    add_jvm_test_runner: bool = False,
    add_jmh_dependencies: str | None = None,
    extra_repositories: Sequence[RepositorySpec] = (),
    keep_resolution: bool = False,
    log: logging.Logger | None = None,
    maybe_recover_on_error: RecoveryCallback = surface_all,
    max_workers: int = DEFAULT_MAX_WORKERS,
) -> Outcome[Artifacts]:
    """Fetch everything a build needs and bundle it.

    Args:
        engine: Resolution engine shared by every sub-fetch.
        scala_artifacts_params: Scala toolchain request, None for Java-only.
        javac_plugin_dependencies: Javac plugins to fetch, with positions.
        extra_javac_plugins: Javac plugin jars supplied directly.
        dependencies: User dependencies, with positions.
        extra_class_path: Jars added to both classpaths.
        extra_compile_only_jars: Jars added to the compile classpath only.
        extra_source_jars: Source jars added to the source path.
        fetch_sources: Also fetch sources of the main dependency set.
        add_stubs: Add the stub library (Scala builds only).
        add_jvm_runner: Add the JVM runner (Scala builds only).
        add_jvm_test_runner: Add the JVM test runner.
        add_jmh_dependencies: JMH version whose generator to add, or None.
        extra_repositories: Repositories, in precedence order.
        keep_resolution: Keep the main fetch's resolution graph.
        log: Logger handle for progress messages; defaults to this module's logger.
        maybe_recover_on_error: Recovery policy for recoverable boundaries.
        max_workers: Size of the sub-fetch thread pool.

    Returns:
        The bundle, or the first unrecovered error.
    """
    log = log or logger
    params = scala_artifacts_params.params if scala_artifacts_params else None
    builder = DependencySetBuilder(dependencies)
    if add_jvm_test_runner:
        builder.add_internal([jvm_test_runner_dependency()])

    classifiers: AbstractSet[str] = {MAIN_ARTIFACTS_MARKER}
    if fetch_sources:
        classifiers = classifiers | {SOURCES_CLASSIFIER}

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="scalafetch") as pool:
        scala: ScalaArtifacts | None = None
        if scala_artifacts_params is not None:
            scala_outcome = _fetch_scala(
                pool, scala_artifacts_params, extra_repositories, engine, log,
                maybe_recover_on_error,
            )
            if scala_outcome.error is not None:
                return Outcome.failure(scala_outcome.error)
            scala = scala_outcome.value
            builder.add_extra(scala.extra_dependencies)
            builder.add_internal(scala.internal_dependencies)
        if add_jmh_dependencies is not None:
            builder.add_internal([jmh_dependency(add_jmh_dependencies)])

        main = _single(pool.submit(
            fetch,
            builder.merged(),
            select_repositories(extra_repositories, builder.internal_versions),
            params,
            engine,
            classifiers=classifiers,
            maybe_recover_on_error=maybe_recover_on_error,
            message=builder.progress_label(),
            log=log,
        ))

        def jars_of(dep: DependencyTemplate, version: str, message: str) -> _SubFetch:
            return _single(
                pool.submit(
                    artifacts,
                    [Positioned.none(dep)],
                    select_repositories(extra_repositories, [version]),
                    params,
                    engine,
                    message=message,
                    log=log,
                ),
                lambda o: recover_with_default(o, [], maybe_recover_on_error).map(
                    lambda pairs: [path for _, path in pairs]
                ),
            )

        no_jars = _SubFetch([], lambda _: Outcome.success([]))
        # Stubs back ``import $dep`` in Scala sources; pure Java builds skip them.
        stubs = (
            jars_of(stubs_dependency(), STUBS_VERSION, "Downloading internal stub dependency")
            if scala is not None and add_stubs
            else no_jars
        )
        runner_requested = scala is not None and bool(add_jvm_runner)
        runner = (
            jars_of(runner_dependency(), RUNNER_VERSION, "Downloading runner dependency")
            if runner_requested
            else no_jars
        )

        javac_futures = []
        for pos_dep in javac_plugin_dependencies:
            javac_futures.append((pos_dep.value, pool.submit(
                artifacts,
                [pos_dep],
                select_repositories(extra_repositories),
                params,
                engine,
                message=f"Downloading javac plugin {pos_dep.value.render()}",
                log=log,
            )))
        javac = _SubFetch(
            [f for _, f in javac_futures],
            lambda outcomes: _flatten(sequence([
                o.map(_with_origin(dep)) for (dep, _), o in zip(javac_futures, outcomes)
            ])),
        )

        gathered = _gather([main, stubs, runner, javac])
        if gathered.error is not None:
            return Outcome.failure(gathered.error)
        fetch_result, stub_jars, runner_jars, javac_plugins = gathered.value

    fetch_result = fetch_result or FetchResult()
    return Outcome.success(Artifacts(
        javac_plugin_dependencies=tuple(javac_plugins),
        extra_javac_plugins=tuple(extra_javac_plugins),
        user_dependencies=tuple(builder.user_dependencies),
        internal_dependencies=tuple(builder.internal_dependencies),
        detailed_artifacts=fetch_result.detailed_artifacts,
        extra_class_path=tuple(extra_class_path),
        extra_compile_only_jars=tuple(extra_compile_only_jars) + tuple(stub_jars),
        extra_runtime_class_path=tuple(runner_jars),
        extra_source_jars=tuple(extra_source_jars),
        scala=scala,
        has_jvm_runner=runner_requested and bool(runner_jars),
        resolution=fetch_result.resolution if keep_resolution else None,
    ))
