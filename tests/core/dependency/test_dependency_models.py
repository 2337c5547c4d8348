"""Tests for dependency templates, Scala parameters and modules."""

from __future__ import annotations

import pytest

from scalafetch.core.dependency import (
    ConcreteDependency,
    CrossVersion,
    DependencyTemplate,
    Module,
    ScalaParameters,
    scala_binary_version,
)


class TestScalaBinaryVersion:
    """Tests for binary-version derivation."""

    @pytest.mark.parametrize("version,expected", [
        ("3.3.0", "3"),
        ("3.4.0-RC1", "3"),
        ("2.13.12", "2.13"),
        ("2.12.18", "2.12"),
        ("2.13.0-M5", "2.13.0-M5"),
    ])
    def test_derivation(self, version: str, expected: str) -> None:
        assert scala_binary_version(version) == expected

    def test_parameters_derive_when_omitted(self) -> None:
        assert ScalaParameters("2.13.12").scala_binary_version == "2.13"

    def test_parameters_keep_explicit_value(self) -> None:
        params = ScalaParameters("3.3.0", scala_binary_version="3.3")
        assert params.scala_binary_version == "3.3"


class TestDependencyTemplate:
    """Tests for equality, params and rendering."""

    def test_equality_ignores_url_and_changing(self) -> None:
        a = DependencyTemplate("org", "lib", "1.0", url="https://a/lib.jar")
        b = DependencyTemplate("org", "lib", "1.0", changing=False)
        assert a == b
        assert hash(a) == hash(b)

    def test_equality_includes_cross(self) -> None:
        java = DependencyTemplate("org", "lib", "1.0")
        scala = DependencyTemplate("org", "lib", "1.0", CrossVersion.SCALA)
        assert java != scala

    def test_params_are_order_insensitive(self) -> None:
        a = DependencyTemplate("org", "lib", "1.0", params=(("b", "2"), ("a", None)))
        b = DependencyTemplate("org", "lib", "1.0", params=(("a", None), ("b", "2")))
        assert a == b

    def test_with_param_intransitive(self) -> None:
        dep = DependencyTemplate("org", "lib", "1.0")
        assert not dep.intransitive
        assert dep.with_param("intransitive").intransitive

    def test_with_param_replaces_previous_value(self) -> None:
        dep = DependencyTemplate("org", "lib", "1.0").with_param("type", "jar")
        assert dep.with_param("type", "pom").params == (("type", "pom"),)

    def test_with_param_url_sets_field(self) -> None:
        dep = DependencyTemplate("org", "lib", "1.0").with_param("url", "https://x/y.jar")
        assert dep.url == "https://x/y.jar"
        assert dep.params == ()

    @pytest.mark.parametrize("dep,expected", [
        (DependencyTemplate("org", "lib", "1.0"), "org:lib:1.0"),
        (DependencyTemplate("org", "lib", "1.0", CrossVersion.SCALA), "org::lib:1.0"),
        (DependencyTemplate("org", "lib", "1.0", CrossVersion.PLATFORM), "org::lib::1.0"),
        (
            DependencyTemplate("org", "lib", "1.0", params=(("intransitive", None),)),
            "org:lib:1.0,intransitive",
        ),
    ])
    def test_render(self, dep: DependencyTemplate, expected: str) -> None:
        assert dep.render() == expected
        assert str(dep) == expected


class TestModule:
    """Tests for module parsing."""

    def test_parse(self) -> None:
        assert Module.parse("org.scala-js:scalajs-linker_2.13") == Module(
            "org.scala-js", "scalajs-linker_2.13"
        )

    @pytest.mark.parametrize("text", ["noseparator", ":name", "org:", "a:b:c"])
    def test_parse_rejects_malformed(self, text: str) -> None:
        with pytest.raises(ValueError):
            Module.parse(text)

    def test_concrete_render(self) -> None:
        dep = ConcreteDependency(Module("org", "lib"), "1.0", transitive=False)
        assert dep.render() == "org:lib:1.0,intransitive"
