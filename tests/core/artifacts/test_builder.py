"""Tests for dependency-set merging and the progress label."""

from __future__ import annotations

import pytest

from scalafetch.core.artifacts import DependencySetBuilder, progress_label
from scalafetch.core.artifacts.builder import (
    jmh_dependency,
    jvm_test_runner_dependency,
    runner_dependency,
    stubs_dependency,
)
from scalafetch.core.dependency import CrossVersion, parse_dependency
from scalafetch.core.positions import Position, Positioned

USER = Positioned(parse_dependency("org.typelevel::cats-core:2.10.0"), (Position("build.yaml", 2, 5),))
SCALAPY = parse_dependency("dev.scalapy::scalapy-core::0.5.3")
BRIDGE = parse_dependency("org.scala-js:scalajs-test-bridge_2.13:1.16.0")


class TestProgressLabel:
    @pytest.mark.parametrize("user,internal,expected", [
        (0, 0, "Downloading dependencies"),
        (1, 0, "Downloading one dependency"),
        (3, 0, "Downloading 3 dependencies"),
        (0, 1, "Downloading one internal dependency"),
        (0, 2, "Downloading 2 internal dependencies"),
        (1, 1, "Downloading one dependency and one internal dependency"),
        (2, 3, "Downloading 2 dependencies and 3 internal dependencies"),
    ])
    def test_wording(self, user: int, internal: int, expected: str) -> None:
        assert progress_label(user, internal) == expected


class TestInternalDependencies:
    def test_test_runner(self) -> None:
        dep = jvm_test_runner_dependency()
        assert dep.render() == "org.virtuslab.scala-cli::test-runner:1.5.0"

    def test_runner_is_intransitive(self) -> None:
        dep = runner_dependency()
        assert dep.intransitive
        assert dep.cross is CrossVersion.SCALA

    def test_stubs_is_java(self) -> None:
        assert stubs_dependency().render() == "org.virtuslab.scala-cli:stubs:1.5.0"

    def test_jmh(self) -> None:
        assert jmh_dependency("1.37").render() == "org.openjdk.jmh:jmh-generator-bytecode:1.37"


class TestDependencySetBuilder:
    """Tests for merge order and deduplication."""

    def test_merge_order(self) -> None:
        builder = DependencySetBuilder([USER])
        builder.add_internal([BRIDGE])
        builder.add_extra([SCALAPY])
        merged = builder.merged()
        assert [p.value for p in merged] == [USER.value, SCALAPY, BRIDGE]
        assert merged[0].positions == USER.positions
        assert merged[1].positions == ()
        assert merged[2].positions == ()

    def test_user_dependencies_include_extra(self) -> None:
        builder = DependencySetBuilder([USER]).add_extra([SCALAPY]).add_internal([BRIDGE])
        assert builder.user_dependencies == [USER.value, SCALAPY]
        assert builder.internal_dependencies == [BRIDGE]

    def test_adding_twice_keeps_one(self) -> None:
        builder = DependencySetBuilder().add_internal([BRIDGE]).add_internal([BRIDGE])
        assert builder.internal_dependencies == [BRIDGE]

    def test_internal_versions(self) -> None:
        builder = DependencySetBuilder().add_internal([jvm_test_runner_dependency("1.6.0-SNAPSHOT")])
        assert builder.internal_versions == ["1.6.0-SNAPSHOT"]

    def test_label_counts_extra_as_internal(self) -> None:
        builder = DependencySetBuilder([USER]).add_extra([SCALAPY]).add_internal([BRIDGE])
        assert builder.progress_label() == "Downloading one dependency and 2 internal dependencies"

    def test_empty(self) -> None:
        builder = DependencySetBuilder()
        assert builder.merged() == []
        assert builder.progress_label() == "Downloading dependencies"
