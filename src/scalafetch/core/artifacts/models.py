"""Artifact bundles: the immutable results of one orchestration call.

``Artifacts`` stores only what was fetched or supplied; every classpath view
is recomputed from those lists on access by the pure functions in
``scalafetch.core.artifacts.classifier``, so views cannot drift from the
underlying data.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from scalafetch.core.artifacts import classifier
from scalafetch.core.dependency.models import DependencyTemplate, ScalaParameters
from scalafetch.core.fetch.engine import DetailedArtifact, ResolutionGraph
from scalafetch.core.positions import Positioned


# ---------------------------------------------------------------------------
# Scala toolchain
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScalaArtifactsParams:
    """What to fetch for the Scala toolchain.

    Attributes:
        params: Scala version parameters.
        compiler_plugins: Compiler plugin dependencies, with positions.
        add_js_test_bridge: Scala.js version whose test bridge to add.
        add_native_test_interface: Scala Native version whose test
            interface to add.
        scala_js_version: Scala.js version the JS CLI links with.
        scala_js_cli_version: Scala.js CLI version to fetch.
        scala_native_cli_version: Scala Native CLI version to fetch.
        add_scalapy: ScalaPy version to add as a user-visible dependency.
    """

    params: ScalaParameters
    compiler_plugins: tuple[Positioned[DependencyTemplate], ...] = ()
    add_js_test_bridge: str | None = None
    add_native_test_interface: str | None = None
    scala_js_version: str | None = None
    scala_js_cli_version: str | None = None
    scala_native_cli_version: str | None = None
    add_scalapy: str | None = None


@dataclass(frozen=True)
class ScalaArtifacts:
    """Fetched Scala toolchain.

    Attributes:
        compiler_dependencies: The compiler dependency templates.
        compiler_artifacts: ``(url, path)`` of the compiler classpath.
        compiler_plugins: ``(dependency, url, path)`` per plugin artifact.
        scala_js_cli: Scala.js CLI classpath, empty if not requested.
        scala_native_cli: Scala Native CLI classpath, empty if not requested.
        internal_dependencies: Test bridges and test interfaces to add to
            the main fetch as internal dependencies.
        extra_dependencies: Interop libraries (ScalaPy) to add to the main
            fetch as user-visible dependencies.
        params: The Scala parameters everything was resolved with.
    """

    compiler_dependencies: tuple[DependencyTemplate, ...]
    compiler_artifacts: tuple[tuple[str, Path], ...]
    compiler_plugins: tuple[tuple[DependencyTemplate, str, Path], ...]
    scala_js_cli: tuple[Path, ...]
    scala_native_cli: tuple[Path, ...]
    internal_dependencies: tuple[DependencyTemplate, ...]
    extra_dependencies: tuple[DependencyTemplate, ...]
    params: ScalaParameters

    @property
    def compiler_class_path(self) -> list[Path]:
        return [path for _, path in self.compiler_artifacts]


# ---------------------------------------------------------------------------
# Artifacts
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Artifacts:
    """Everything needed to compile and run a build, as one immutable bundle.

    Attributes:
        javac_plugin_dependencies: ``(dependency, url, path)`` per javac
            plugin artifact.
        extra_javac_plugins: Javac plugin jars supplied directly.
        user_dependencies: Dependencies the user asked for, including
            toolchain interop libraries.
        internal_dependencies: Dependencies added on the user's behalf.
        detailed_artifacts: Every artifact of the main fetch.
        extra_class_path: Jars supplied directly for compile and runtime.
        extra_compile_only_jars: Compile-only jars (stubs included).
        extra_runtime_class_path: Runtime-only jars (runner included).
        extra_source_jars: Source jars supplied directly.
        scala: The Scala toolchain, None for pure Java builds.
        has_jvm_runner: True when runner jars were fetched.
        resolution: The main fetch's resolution graph, when kept.
    """

    javac_plugin_dependencies: tuple[tuple[DependencyTemplate, str, Path], ...] = ()
    extra_javac_plugins: tuple[Path, ...] = ()
    user_dependencies: tuple[DependencyTemplate, ...] = ()
    internal_dependencies: tuple[DependencyTemplate, ...] = ()
    detailed_artifacts: tuple[DetailedArtifact, ...] = ()
    extra_class_path: tuple[Path, ...] = ()
    extra_compile_only_jars: tuple[Path, ...] = ()
    extra_runtime_class_path: tuple[Path, ...] = ()
    extra_source_jars: tuple[Path, ...] = ()
    scala: ScalaArtifacts | None = None
    has_jvm_runner: bool = False
    resolution: ResolutionGraph | None = None

    @property
    def artifacts(self) -> list[tuple[str, Path]]:
        return classifier.main_artifacts(self.detailed_artifacts)

    @property
    def source_artifacts(self) -> list[tuple[str, Path]]:
        return classifier.source_artifacts(self.detailed_artifacts)

    @property
    def class_path(self) -> list[Path]:
        return classifier.class_path(
            self.detailed_artifacts, self.extra_class_path, self.extra_runtime_class_path
        )

    @property
    def compile_class_path(self) -> list[Path]:
        return classifier.compile_class_path(
            self.detailed_artifacts, self.extra_class_path, self.extra_compile_only_jars
        )

    @property
    def source_path(self) -> list[Path]:
        return classifier.source_path(self.detailed_artifacts, self.extra_source_jars)
