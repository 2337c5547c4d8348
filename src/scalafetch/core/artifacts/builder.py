"""Merging user dependencies with internally required ones.

The merged request list has a fixed order, independent of how and when its
parts were computed:

1. user dependencies, with their positions;
2. extra dependencies contributed by the Scala toolchain (interop libraries);
3. internal dependencies: test runner, toolchain test bridges, JMH generator.

Extra and internal dependencies carry no position. The merged list is not
deduplicated (the resolution engine takes care of that), but adding the same
extra or internal dependency twice to one builder keeps a single copy.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from scalafetch.constants import (
    JMH_GENERATOR_MODULE,
    RUNNER_MODULE_NAME,
    RUNNER_ORGANIZATION,
    RUNNER_VERSION,
    STUBS_MODULE_NAME,
    STUBS_ORGANIZATION,
    STUBS_VERSION,
    TEST_RUNNER_MODULE_NAME,
    TEST_RUNNER_ORGANIZATION,
    TEST_RUNNER_VERSION,
)
from scalafetch.core.dependency.models import (
    INTRANSITIVE_PARAM,
    CrossVersion,
    DependencyTemplate,
    Module,
)
from scalafetch.core.positions import Positioned


# ---------------------------------------------------------------------------
# Internal dependencies
# ---------------------------------------------------------------------------


def jvm_test_runner_dependency(version: str = TEST_RUNNER_VERSION) -> DependencyTemplate:
    return DependencyTemplate(
        TEST_RUNNER_ORGANIZATION, TEST_RUNNER_MODULE_NAME, version, CrossVersion.SCALA
    )


def runner_dependency(version: str = RUNNER_VERSION) -> DependencyTemplate:
    return DependencyTemplate(
        RUNNER_ORGANIZATION,
        RUNNER_MODULE_NAME,
        version,
        CrossVersion.SCALA,
        params=((INTRANSITIVE_PARAM, None),),
    )


def stubs_dependency(version: str = STUBS_VERSION) -> DependencyTemplate:
    return DependencyTemplate(STUBS_ORGANIZATION, STUBS_MODULE_NAME, version)


def jmh_dependency(version: str) -> DependencyTemplate:
    module = Module.parse(JMH_GENERATOR_MODULE)
    return DependencyTemplate(module.organization, module.name, version)


# ---------------------------------------------------------------------------
# Progress label
# ---------------------------------------------------------------------------


def progress_label(user_count: int, internal_count: int) -> str:
    """Describe a main fetch, e.g. "Downloading 2 dependencies and one internal dependency"."""
    clauses: list[str] = []
    if user_count == 1:
        clauses.append("one dependency")
    elif user_count > 1:
        clauses.append(f"{user_count} dependencies")
    if internal_count == 1:
        clauses.append("one internal dependency")
    elif internal_count > 1:
        clauses.append(f"{internal_count} internal dependencies")
    if not clauses:
        return "Downloading dependencies"
    return "Downloading " + " and ".join(clauses)


# ---------------------------------------------------------------------------
# DependencySetBuilder
# ---------------------------------------------------------------------------


class DependencySetBuilder:
    """Accumulates the dependency set of one orchestration call.

    Args:
        user_dependencies: Dependencies the user declared, with positions.
    """

    def __init__(self, user_dependencies: Sequence[Positioned[DependencyTemplate]] = ()) -> None:
        self._user: list[Positioned[DependencyTemplate]] = list(user_dependencies)
        self._extra: list[DependencyTemplate] = []
        self._internal: list[DependencyTemplate] = []

    @staticmethod
    def _add_once(target: list[DependencyTemplate], deps: Iterable[DependencyTemplate]) -> None:
        for dep in deps:
            if dep not in target:
                target.append(dep)

    def add_extra(self, deps: Iterable[DependencyTemplate]) -> DependencySetBuilder:
        """Add toolchain-contributed, user-visible dependencies."""
        self._add_once(self._extra, deps)
        return self

    def add_internal(self, deps: Iterable[DependencyTemplate]) -> DependencySetBuilder:
        """Add dependencies injected on the user's behalf."""
        self._add_once(self._internal, deps)
        return self

    @property
    def user_dependencies(self) -> list[DependencyTemplate]:
        """User dependencies followed by toolchain extra dependencies."""
        return [d.value for d in self._user] + list(self._extra)

    @property
    def internal_dependencies(self) -> list[DependencyTemplate]:
        return list(self._internal)

    @property
    def internal_versions(self) -> list[str]:
        return [d.version for d in self._internal]

    def merged(self) -> list[Positioned[DependencyTemplate]]:
        """The full request list, in merge order."""
        return (
            list(self._user)
            + [Positioned.none(d) for d in self._extra]
            + [Positioned.none(d) for d in self._internal]
        )

    def progress_label(self) -> str:
        user_count = len(self._user)
        # Toolchain extras (ScalaPy) count as internal here, though
        # Artifacts.user_dependencies lists them with the user's.
        return progress_label(user_count, len(self.merged()) - user_count)
