"""Fetch manifests: YAML files describing what to fetch.

A manifest lists dependencies, repositories and options for one
orchestration call. It is composed into a YAML node tree rather than loaded
into plain Python values, so that every dependency keeps the line and column
it was declared at, and so that versions such as ``1.37`` stay strings.

Example::

    scala:
      version: 3.3.0
      compiler-plugins:
        - com.olegpy::better-monadic-for:0.3.1
    dependencies:
      - org.typelevel::cats-core:2.10.0
      - com.example:lib:1.0,url=https://example.com/lib-1.0.jar
    repositories:
      - central
      - https://maven.example.com/releases
    options:
      fetch-sources: true
      add-jvm-test-runner: true
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from scalafetch.core.artifacts.models import ScalaArtifactsParams
from scalafetch.core.dependency.models import DependencyTemplate, ScalaParameters
from scalafetch.core.dependency.notation import parse_dependency
from scalafetch.core.positions import Position, Positioned
from scalafetch.core.repository.models import RepositorySpec
from scalafetch.core.repository.parser import parse_repositories
from scalafetch.exceptions import ManifestError

_TRUE = {"true", "yes", "on"}
_FALSE = {"false", "no", "off"}

_TOP_LEVEL_KEYS = {
    "scala",
    "dependencies",
    "javac-plugins",
    "javac-plugin-jars",
    "repositories",
    "extra-class-path",
    "compile-only-jars",
    "source-jars",
    "options",
}
_SCALA_KEYS = {
    "version",
    "platform",
    "compiler-plugins",
    "js-test-bridge",
    "native-test-interface",
    "scala-js",
    "scala-js-cli",
    "scala-native-cli",
    "scalapy",
}
_OPTION_KEYS = {
    "fetch-sources",
    "add-stubs",
    "add-jvm-runner",
    "add-jvm-test-runner",
    "jmh",
}


@dataclass
class FetchManifest:
    """Everything a manifest declares, ready for ``fetch_artifacts``."""

    scala: ScalaArtifactsParams | None = None
    dependencies: list[Positioned[DependencyTemplate]] = field(default_factory=list)
    javac_plugins: list[Positioned[DependencyTemplate]] = field(default_factory=list)
    javac_plugin_jars: list[Path] = field(default_factory=list)
    repositories: list[RepositorySpec] = field(default_factory=list)
    extra_class_path: list[Path] = field(default_factory=list)
    compile_only_jars: list[Path] = field(default_factory=list)
    source_jars: list[Path] = field(default_factory=list)
    fetch_sources: bool = False
    add_stubs: bool = False
    add_jvm_runner: bool = False
    add_jvm_test_runner: bool = False
    jmh_version: str | None = None

    def fetch_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for ``fetch_artifacts`` (engine excluded)."""
        return dict(
            scala_artifacts_params=self.scala,
            javac_plugin_dependencies=self.javac_plugins,
            extra_javac_plugins=self.javac_plugin_jars,
            dependencies=self.dependencies,
            extra_class_path=self.extra_class_path,
            extra_compile_only_jars=self.compile_only_jars,
            extra_source_jars=self.source_jars,
            fetch_sources=self.fetch_sources,
            add_stubs=self.add_stubs,
            add_jvm_runner=self.add_jvm_runner,
            add_jvm_test_runner=self.add_jvm_test_runner,
            add_jmh_dependencies=self.jmh_version,
            extra_repositories=self.repositories,
        )


class _Reader:
    """Walks a composed YAML tree, turning nodes into typed values."""

    def __init__(self, source: str, base_dir: Path) -> None:
        self._source = source
        self._base_dir = base_dir

    def position(self, node: yaml.Node) -> Position:
        mark = node.start_mark
        return Position(self._source, mark.line + 1, mark.column + 1)

    def error(self, node: yaml.Node, message: str) -> ManifestError:
        return ManifestError(f"{self.position(node).render()}: {message}")

    def mapping(self, node: yaml.Node, allowed: set[str], what: str) -> dict[str, yaml.Node]:
        if not isinstance(node, yaml.MappingNode):
            raise self.error(node, f"{what} must be a mapping")
        out: dict[str, yaml.Node] = {}
        for key_node, value_node in node.value:
            key = self.scalar(key_node)
            if key not in allowed:
                raise self.error(key_node, f"unknown key {key!r} in {what}")
            out[key] = value_node
        return out

    def scalar(self, node: yaml.Node) -> str:
        if not isinstance(node, yaml.ScalarNode):
            raise self.error(node, "expected a single value")
        return str(node.value)

    def boolean(self, node: yaml.Node) -> bool:
        value = self.scalar(node).lower()
        if value in _TRUE:
            return True
        if value in _FALSE:
            return False
        raise self.error(node, f"expected true or false, got {value!r}")

    def sequence(self, node: yaml.Node) -> list[yaml.Node]:
        if not isinstance(node, yaml.SequenceNode):
            raise self.error(node, "expected a list")
        return list(node.value)

    def dependencies(self, node: yaml.Node) -> list[Positioned[DependencyTemplate]]:
        deps: list[Positioned[DependencyTemplate]] = []
        for item in self.sequence(node):
            try:
                dep = parse_dependency(self.scalar(item))
            except ValueError as exc:
                raise self.error(item, str(exc)) from exc
            deps.append(Positioned(dep, (self.position(item),)))
        return deps

    def paths(self, node: yaml.Node) -> list[Path]:
        return [self._base_dir / self.scalar(item) for item in self.sequence(node)]

    def scala(self, node: yaml.Node) -> ScalaArtifactsParams:
        keys = self.mapping(node, _SCALA_KEYS, "scala")
        if "version" not in keys:
            raise self.error(node, "scala.version is required")

        def opt(key: str) -> str | None:
            return self.scalar(keys[key]) if key in keys else None

        params = ScalaParameters(self.scalar(keys["version"]), platform=opt("platform"))
        plugins = self.dependencies(keys["compiler-plugins"]) if "compiler-plugins" in keys else []
        return ScalaArtifactsParams(
            params=params,
            compiler_plugins=tuple(plugins),
            add_js_test_bridge=opt("js-test-bridge"),
            add_native_test_interface=opt("native-test-interface"),
            scala_js_version=opt("scala-js"),
            scala_js_cli_version=opt("scala-js-cli"),
            scala_native_cli_version=opt("scala-native-cli"),
            add_scalapy=opt("scalapy"),
        )


def parse_manifest(text: str, source: str = "<manifest>", base_dir: Path | None = None) -> FetchManifest:
    """Parse manifest text.

    Args:
        text: YAML content.
        source: Name used in positions (usually the file path).
        base_dir: Directory relative jar paths are resolved against.

    Returns:
        The parsed manifest.

    Raises:
        ManifestError: If the YAML is invalid or does not follow the schema.
        RepositoryFormatError: If a repository string cannot be parsed.
    """
    try:
        root = yaml.compose(text, Loader=yaml.SafeLoader)
    except yaml.YAMLError as exc:
        raise ManifestError(f"{source}: invalid YAML: {exc}") from exc

    manifest = FetchManifest()
    if root is None:
        return manifest

    reader = _Reader(source, base_dir or Path.cwd())
    keys = reader.mapping(root, _TOP_LEVEL_KEYS, "manifest")

    if "scala" in keys:
        manifest.scala = reader.scala(keys["scala"])
    if "dependencies" in keys:
        manifest.dependencies = reader.dependencies(keys["dependencies"])
    if "javac-plugins" in keys:
        manifest.javac_plugins = reader.dependencies(keys["javac-plugins"])
    if "repositories" in keys:
        node = keys["repositories"]
        manifest.repositories = parse_repositories(
            [reader.scalar(item) for item in reader.sequence(node)],
            (reader.position(node),),
        )
    if "javac-plugin-jars" in keys:
        manifest.javac_plugin_jars = reader.paths(keys["javac-plugin-jars"])
    if "extra-class-path" in keys:
        manifest.extra_class_path = reader.paths(keys["extra-class-path"])
    if "compile-only-jars" in keys:
        manifest.compile_only_jars = reader.paths(keys["compile-only-jars"])
    if "source-jars" in keys:
        manifest.source_jars = reader.paths(keys["source-jars"])

    if "options" in keys:
        options = reader.mapping(keys["options"], _OPTION_KEYS, "options")
        if "fetch-sources" in options:
            manifest.fetch_sources = reader.boolean(options["fetch-sources"])
        if "add-stubs" in options:
            manifest.add_stubs = reader.boolean(options["add-stubs"])
        if "add-jvm-runner" in options:
            manifest.add_jvm_runner = reader.boolean(options["add-jvm-runner"])
        if "add-jvm-test-runner" in options:
            manifest.add_jvm_test_runner = reader.boolean(options["add-jvm-test-runner"])
        if "jmh" in options:
            manifest.jmh_version = reader.scalar(options["jmh"])

    return manifest


def load_manifest(path: Path) -> FetchManifest:
    """Read and parse a manifest file; relative paths resolve against its directory."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestError(f"Cannot read manifest {path}: {exc}") from exc
    return parse_manifest(text, str(path), path.parent)
