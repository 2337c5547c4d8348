"""Artifact bundles and the orchestration that produces them.

The package is split into focused submodules:

- ``classifier``: main/sources partition and classpath views.
- ``models``: ``Artifacts``, ``ScalaArtifacts``, ``ScalaArtifactsParams``.
- ``toolchain``: Scala toolchain dependencies.
- ``builder``: ``DependencySetBuilder`` and the progress label.
- ``orchestrator``: ``fetch_artifacts``, the single entry point.
"""

from scalafetch.core.artifacts import classifier
from scalafetch.core.artifacts.models import Artifacts, ScalaArtifacts, ScalaArtifactsParams
from scalafetch.core.artifacts.builder import DependencySetBuilder, progress_label
from scalafetch.core.artifacts.orchestrator import fetch_artifacts

__all__ = [
    "Artifacts",
    "DependencySetBuilder",
    "ScalaArtifacts",
    "ScalaArtifactsParams",
    "classifier",
    "fetch_artifacts",
    "progress_label",
]
