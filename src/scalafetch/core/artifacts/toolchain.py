"""Dependencies of the Scala toolchain: compiler, test bridges, CLIs, interop.

Each function returns dependency templates or concrete dependencies for one
toolchain piece; nothing here fetches anything.
"""

from __future__ import annotations

import re

from scalafetch.constants import (
    SCALA_JS_CLI_MODULE,
    SCALA_JS_CUSTOM_CLI_MARKER,
    SCALA_JS_CUSTOM_CLI_ORGANIZATION,
    SCALA_JS_VERSION,
    SCALA_NATIVE_CLI_MODULE,
    SCALA_ORGANIZATION,
    SCALAPY_LEGACY_ORGANIZATION,
    SCALAPY_ORGANIZATION,
    SCALAPY_ORGANIZATION_SWITCH_VERSION,
)
from scalafetch.core.artifacts.models import ScalaArtifactsParams
from scalafetch.core.dependency.models import (
    ConcreteDependency,
    CrossVersion,
    DependencyTemplate,
    Module,
)

_VERSION_TOKEN_RE = re.compile(r"\d+|[A-Za-z]+")


def compiler_dependencies(scala_version: str) -> list[DependencyTemplate]:
    if scala_version.startswith("3."):
        return [
            DependencyTemplate(
                SCALA_ORGANIZATION, "scala3-compiler", scala_version, CrossVersion.SCALA
            )
        ]
    return [DependencyTemplate(SCALA_ORGANIZATION, "scala-compiler", scala_version)]


def js_test_bridge_dependencies(
    scala_version: str, scala_js_version: str | None
) -> list[DependencyTemplate]:
    # Scala 3 uses the 2.13 build of the test bridge.
    if scala_js_version is None:
        return []
    if scala_version.startswith("2."):
        return [
            DependencyTemplate(
                "org.scala-js", "scalajs-test-bridge", scala_js_version, CrossVersion.SCALA
            )
        ]
    return [DependencyTemplate("org.scala-js", "scalajs-test-bridge_2.13", scala_js_version)]


def native_test_interface_dependencies(scala_native_version: str | None) -> list[DependencyTemplate]:
    if scala_native_version is None:
        return []
    return [
        DependencyTemplate(
            "org.scala-native", "test-interface", scala_native_version, CrossVersion.PLATFORM
        )
    ]


def version_key(version: str) -> tuple[tuple[int, int, str], ...]:
    """Sort key giving a total order over arbitrary version strings.

    Numeric tokens compare numerically and rank above the end of the
    version, which ranks above alphabetic qualifiers. So ``1.0-RC1`` sorts
    before ``1.0``, which sorts before ``1.0+3``. Strings with no version
    shape at all (``latest``) still get a key, and sort low.
    """
    key = [
        (2, int(token), "") if token.isdigit() else (0, 0, token.lower())
        for token in _VERSION_TOKEN_RE.findall(version)
    ]
    key.append((1, 0, ""))
    return tuple(key)


def scalapy_organization(version: str) -> str:
    """Organization ScalaPy was published under at *version*."""
    if version_key(version) < version_key(SCALAPY_ORGANIZATION_SWITCH_VERSION):
        return SCALAPY_LEGACY_ORGANIZATION
    return SCALAPY_ORGANIZATION


def scalapy_dependencies(scalapy_version: str | None) -> list[DependencyTemplate]:
    if scalapy_version is None:
        return []
    return [
        DependencyTemplate(
            scalapy_organization(scalapy_version),
            "scalapy-core",
            scalapy_version,
            CrossVersion.PLATFORM,
        )
    ]


def scala_js_cli_dependency(scala_artifacts_params: ScalaArtifactsParams) -> ConcreteDependency | None:
    """The Scala.js CLI to fetch, or None if not requested.

    Custom CLI builds (version containing ``-sc``) are published once per
    Scala.js version, under a dedicated module name.
    """
    version = scala_artifacts_params.scala_js_cli_version
    if version is None:
        return None
    if SCALA_JS_CUSTOM_CLI_MARKER in version:
        module = Module(
            SCALA_JS_CUSTOM_CLI_ORGANIZATION,
            f"scalajscli-{effective_scala_js_version(scala_artifacts_params)}_2.13",
        )
    else:
        module = Module.parse(SCALA_JS_CLI_MODULE)
    return ConcreteDependency(module, version)


def scala_native_cli_dependency(scala_artifacts_params: ScalaArtifactsParams) -> ConcreteDependency | None:
    version = scala_artifacts_params.scala_native_cli_version
    if version is None:
        return None
    return ConcreteDependency(Module.parse(SCALA_NATIVE_CLI_MODULE), version)


def effective_scala_js_version(scala_artifacts_params: ScalaArtifactsParams) -> str:
    return scala_artifacts_params.scala_js_version or SCALA_JS_VERSION


def internal_dependencies(scala_artifacts_params: ScalaArtifactsParams) -> list[DependencyTemplate]:
    """Test bridges and test interfaces the main fetch needs."""
    sv = scala_artifacts_params.params.scala_version
    return js_test_bridge_dependencies(
        sv, scala_artifacts_params.add_js_test_bridge
    ) + native_test_interface_dependencies(scala_artifacts_params.add_native_test_interface)
