"""Coordinates and defaults for internally injected dependencies.

These values describe the artifacts scalafetch adds on its own behalf: the
JVM test runner, the runner used to launch applications, the stub library
that backs ``import $dep`` in scripts, and toolchain CLIs. Callers that need
different versions pass them explicitly; nothing here is read from the
environment.
"""

from __future__ import annotations

# -- Internal artifacts -------------------------------------------------------

TEST_RUNNER_ORGANIZATION: str = "org.virtuslab.scala-cli"
TEST_RUNNER_MODULE_NAME: str = "test-runner"
TEST_RUNNER_VERSION: str = "1.5.0"

RUNNER_ORGANIZATION: str = "org.virtuslab.scala-cli"
RUNNER_MODULE_NAME: str = "runner"
RUNNER_VERSION: str = "1.5.0"

STUBS_ORGANIZATION: str = "org.virtuslab.scala-cli"
STUBS_MODULE_NAME: str = "stubs"
STUBS_VERSION: str = "1.5.0"

JMH_GENERATOR_MODULE: str = "org.openjdk.jmh:jmh-generator-bytecode"

# -- Toolchains ---------------------------------------------------------------

SCALA_ORGANIZATION: str = "org.scala-lang"

SCALA_JS_VERSION: str = "1.16.0"
SCALA_JS_CLI_MODULE: str = "org.scala-js:scalajs-cli_2.13"
SCALA_JS_LINKER_MODULE: str = "org.scala-js:scalajs-linker_2.13"
# CLI builds whose version contains this marker are published under a
# per-Scala.js-version module name.
SCALA_JS_CUSTOM_CLI_MARKER: str = "-sc"
SCALA_JS_CUSTOM_CLI_ORGANIZATION: str = "io.github.alexarchambault.tmp"

SCALA_NATIVE_CLI_MODULE: str = "org.scala-native:scala-native-cli_2.12"

# ScalaPy moved organization after this build.
SCALAPY_ORGANIZATION_SWITCH_VERSION: str = "0.5.2+9-623f0807"
SCALAPY_LEGACY_ORGANIZATION: str = "me.shadaj"
SCALAPY_ORGANIZATION: str = "dev.scalapy"

# -- Repositories -------------------------------------------------------------

SNAPSHOT_MARKER: str = "SNAPSHOT"
SNAPSHOTS_REPOSITORY: str = "sonatype:snapshots"

# -- Orchestration --------------------------------------------------------------

SOURCES_CLASSIFIER: str = "sources"
MAIN_ARTIFACTS_MARKER: str = "_"
DEFAULT_MAX_WORKERS: int = 4
