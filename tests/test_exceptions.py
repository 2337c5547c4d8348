"""Tests for the scalafetch exception hierarchy."""

from __future__ import annotations

import pytest

from scalafetch.core.dependency import parse_dependency
from scalafetch.core.positions import Position
from scalafetch.exceptions import (
    BuildError,
    CompositeBuildError,
    FetchingDependenciesError,
    ManifestError,
    NoScalaVersionProvidedError,
    RepositoryFormatError,
    ResolutionEngineError,
    ScalaFetchError,
    UnsupportedDependencyParameterError,
)


class TestHierarchy:
    """Every public exception derives from ScalaFetchError."""

    @pytest.mark.parametrize("cls", [
        BuildError, CompositeBuildError, FetchingDependenciesError,
        ManifestError, NoScalaVersionProvidedError, RepositoryFormatError,
        ResolutionEngineError,
    ])
    def test_subclass_of_base(self, cls: type) -> None:
        assert issubclass(cls, ScalaFetchError)

    def test_build_errors(self) -> None:
        assert issubclass(NoScalaVersionProvidedError, BuildError)
        assert issubclass(FetchingDependenciesError, BuildError)
        assert issubclass(UnsupportedDependencyParameterError, BuildError)
        assert not issubclass(ResolutionEngineError, BuildError)


class TestBuildError:
    """Tests for message rendering with positions."""

    def test_render_without_positions(self) -> None:
        assert BuildError("boom").render() == ["boom"]

    def test_render_with_positions(self) -> None:
        err = BuildError("boom", [Position("a.yaml", 2, 3), Position("b.yaml", 4)])
        assert err.render() == ["a.yaml:2:3, b.yaml:4: boom"]

    def test_no_scala_version_message(self) -> None:
        dep = parse_dependency("org.typelevel::cats-core:2.10.0")
        err = NoScalaVersionProvidedError(dep)
        assert err.message == (
            "Got Scala dependency org.typelevel::cats-core:2.10.0, "
            "but no Scala version is provided"
        )
        assert err.dependency == dep

    def test_unsupported_parameter_message(self) -> None:
        dep = parse_dependency("org:lib:1.0,flavour=spicy")
        err = UnsupportedDependencyParameterError(dep, "flavour", [Position("b.yaml", 3, 5)])
        assert err.render() == [
            "b.yaml:3:5: Unsupported parameter 'flavour' in dependency org:lib:1.0,flavour=spicy"
        ]

    def test_fetching_error_chains_cause(self) -> None:
        cause = ResolutionEngineError("not found")
        err = FetchingDependenciesError(cause)
        assert err.__cause__ is cause
        assert "not found" in err.message

    def test_repository_format_single_and_many(self) -> None:
        assert RepositoryFormatError(["bad"]).message == "Error parsing repository: bad"
        assert "bad, worse" in RepositoryFormatError(["bad", "worse"]).message


class TestCompositeBuildError:
    """Tests for aggregation of independent failures."""

    def test_keeps_all_errors(self) -> None:
        a, b = BuildError("a"), BuildError("b")
        composite = CompositeBuildError([a, b])
        assert composite.errors == (a, b)
        assert composite.render() == ["a", "b"]

    def test_flattens_nested_composites(self) -> None:
        a, b, c = BuildError("a"), BuildError("b"), BuildError("c")
        composite = CompositeBuildError([CompositeBuildError([a, b]), c])
        assert composite.errors == (a, b, c)

    def test_single_member_is_still_composite(self) -> None:
        composite = CompositeBuildError([BuildError("only")])
        assert len(composite.errors) == 1

    def test_empty_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            CompositeBuildError([])

    def test_collects_positions(self) -> None:
        p1, p2 = Position("a.yaml", 1), Position("a.yaml", 2)
        composite = CompositeBuildError([BuildError("a", [p1]), BuildError("b", [p2])])
        assert composite.positions == (p1, p2)
