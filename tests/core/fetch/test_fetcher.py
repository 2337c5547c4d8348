"""Tests for template fetching: conversion, fallbacks, pins and error wrapping."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from scalafetch.core.dependency import Module, ScalaParameters, parse_dependency, to_concrete
from scalafetch.core.fetch import artifacts, fetch, fetch_concrete
from scalafetch.core.fetch.engine import FetchResult
from scalafetch.core.positions import Position, Positioned
from scalafetch.core.recovery import recover_all, recovering
from scalafetch.core.repository import parse_repositories
from scalafetch.exceptions import (
    CompositeBuildError,
    FetchingDependenciesError,
    NoScalaVersionProvidedError,
    UnsupportedDependencyParameterError,
)


def positioned(text: str, line: int) -> Positioned:
    return Positioned(parse_dependency(text), (Position("build.yaml", line, 5),))


@pytest.fixture
def scala213() -> ScalaParameters:
    return ScalaParameters("2.13.12")


class TestFetch:
    """Tests for ``fetch()``."""

    def test_fetches_transitively(self, engine, scala213: ScalaParameters) -> None:
        outcome = fetch([positioned("org.typelevel::cats-core:2.10.0", 1)], [], scala213, engine)
        names = [d.dependency.module.name for d in outcome.unwrap().detailed_artifacts]
        assert names == ["cats-core_2.13", "cats-kernel_2.13", "scala-library"]

    def test_scala_library_pinned_to_requested_version(
        self, engine, scala213: ScalaParameters
    ) -> None:
        outcome = fetch([positioned("org.typelevel::cats-core:2.10.0", 1)], [], scala213, engine)
        versions = {
            d.dependency.module.name: d.dependency.version
            for d in outcome.unwrap().detailed_artifacts
        }
        assert versions["scala-library"] == "2.13.12"

    def test_repositories_passed_in_order(self, engine) -> None:
        repos = parse_repositories(["jitpack", "central"])
        fetch([positioned("org:lib:1.0", 1)], repos, None, engine)
        assert list(engine.requests[0].repositories) == repos

    def test_url_dependency_uses_fallback(self, engine) -> None:
        url = "https://downloads.example.com/lib-1.0.jar"
        outcome = fetch([positioned(f"org:lib:1.0,url={url}", 1)], [], None, engine)
        request = engine.requests[0]
        assert request.fallback.lookup(Module("org", "lib"), "1.0") == (url, True)
        assert request.all_repositories[-1] is request.fallback
        assert [a.url for a, _ in outcome.unwrap().artifacts] == [url]

    def test_listed_repository_ahead_of_fallback(self, engine) -> None:
        repos = parse_repositories(["central"])
        fetch([positioned("org:lib:1.0,url=https://x/lib.jar", 1)], repos, None, engine)
        assert engine.requests[0].all_repositories[0] == repos[0]

    def test_url_override_wins_over_listed_repository(self, engine) -> None:
        url = "https://downloads.example.com/lib-1.0-patched.jar"
        outcome = fetch(
            [positioned("org:plain:1.0", 1), positioned(f"org:lib:1.0,url={url}", 2)],
            parse_repositories(["central"]), None, engine,
        )
        assert [(a.url, path) for a, path in outcome.unwrap().artifacts] == [
            (
                "https://repo1.maven.org/maven2/org/plain/1.0/plain-1.0.jar",
                Path("/cache/v1/https/repo1.maven.org/maven2/org/plain/1.0/plain-1.0.jar"),
            ),
            (url, Path("/cache/v1/https/downloads.example.com/lib-1.0-patched.jar")),
        ]

    def test_classifier_attribute_reaches_engine(self, engine) -> None:
        outcome = fetch([positioned("org:lib:1.0,classifier=tests", 1)], [], None, engine)
        [dependency] = engine.requests[0].dependencies
        assert dependency.attributes == (("classifier", "tests"),)
        [artifact] = outcome.unwrap().detailed_artifacts
        assert artifact.publication.classifier == "tests"
        assert artifact.artifact.url.endswith("/lib-1.0-tests.jar")

    def test_unsupported_parameter_surfaces_with_position(self, engine) -> None:
        outcome = fetch([positioned("org:lib:1.0,flavour=spicy", 4)], [], None, engine)
        assert isinstance(outcome.error, CompositeBuildError)
        [error] = outcome.error.errors
        assert isinstance(error, UnsupportedDependencyParameterError)
        assert error.positions == (Position("build.yaml", 4, 5),)
        assert engine.requests == []

    def test_classifiers(self, engine) -> None:
        outcome = fetch([positioned("org:lib:1.0", 1)], [], None, engine, classifiers={"_", "sources"})
        classifiers = [d.publication.classifier for d in outcome.unwrap().detailed_artifacts]
        assert classifiers == ["", "sources"]

    def test_missing_scala_version_surfaces_composite(self, engine) -> None:
        outcome = fetch([positioned("org::lib:1.0", 3)], [], None, engine)
        assert isinstance(outcome.error, CompositeBuildError)
        assert len(outcome.error.errors) == 1
        assert isinstance(outcome.error.errors[0], NoScalaVersionProvidedError)
        assert outcome.error.positions == (Position("build.yaml", 3, 5),)
        assert engine.requests == []

    def test_every_conversion_failure_reported(self, engine) -> None:
        outcome = fetch(
            [positioned("org::a:1.0", 1), positioned("org:ok:1.0", 2), positioned("org::b:1.0", 3)],
            [], None, engine,
        )
        assert len(outcome.error.errors) == 2

    def test_recovered_conversion_drops_dependency(self, engine) -> None:
        outcome = fetch(
            [positioned("org::scala-only:1.0", 1), positioned("org:java:1.0", 2)],
            [], None, engine,
            maybe_recover_on_error=recovering(NoScalaVersionProvidedError),
        )
        assert outcome.ok
        assert engine.requested_modules() == [["org:java"]]

    def test_engine_failure_wrapped_with_positions(self, make_engine) -> None:
        engine = make_engine(failing={"org:broken"})
        outcome = fetch([positioned("org:broken:1.0", 7)], [], None, engine)
        assert isinstance(outcome.error, FetchingDependenciesError)
        assert outcome.error.positions == (Position("build.yaml", 7, 5),)
        assert "not found: org:broken:1.0" in outcome.error.message

    def test_engine_failure_recovered_to_empty_result(self, make_engine) -> None:
        engine = make_engine(failing={"org:broken"})
        outcome = fetch(
            [positioned("org:broken:1.0", 7)], [], None, engine,
            maybe_recover_on_error=recover_all,
        )
        assert outcome.value == FetchResult()

    def test_logs_progress_message(self, engine, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="scalafetch"):
            fetch([positioned("org:lib:1.0", 1)], [], None, engine, message="Downloading one dependency")
        assert "Downloading one dependency" in caplog.text


class TestFetchConcrete:
    """Tests for ``fetch_concrete()``."""

    def test_extra_forced_versions(self, engine) -> None:
        linker = Module("org.scala-js", "scalajs-linker_2.13")
        dep = parse_dependency("org:lib:1.0")
        fetch_concrete([to_concrete(dep, None)], [], engine, extra_forced_versions=[(linker, "1.16.0")])
        assert engine.requests[0].forced_versions == ((linker, "1.16.0"),)

    def test_drops_artifacts_without_file(self, make_engine) -> None:
        engine = make_engine(missing={"org:lib"})
        outcome = fetch_concrete([to_concrete(parse_dependency("org:lib:1.0"), None)], [], engine)
        assert outcome.unwrap().detailed_artifacts == ()


class TestArtifacts:
    """Tests for ``artifacts()``."""

    def test_url_path_pairs(self, engine) -> None:
        outcome = artifacts([positioned("org:lib:1.0", 1)], [], None, engine)
        [(url, path)] = outcome.unwrap()
        assert url.endswith("/org/lib/1.0/lib-1.0.jar")
        assert path.name == "lib-1.0.jar"

    def test_debug_listing(self, engine, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="scalafetch"):
            artifacts([positioned("org:lib:1.0", 1)], [], None, engine)
        assert "Found 1 artifacts:" in caplog.text
