"""Artifact classification: main jars vs. source jars, and classpath views.

Pure functions over the detailed artifact list. Duplicates are detected by
download URL; the first occurrence wins and keeps its local path.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from scalafetch.constants import SOURCES_CLASSIFIER
from scalafetch.core.fetch.engine import DetailedArtifact


def _distinct_by_url(entries: Iterable[DetailedArtifact]) -> list[tuple[str, Path]]:
    seen: set[str] = set()
    out: list[tuple[str, Path]] = []
    for entry in entries:
        if entry.file is None or entry.artifact.url in seen:
            continue
        seen.add(entry.artifact.url)
        out.append((entry.artifact.url, entry.file))
    return out


def main_artifacts(detailed: Sequence[DetailedArtifact]) -> list[tuple[str, Path]]:
    """``(url, path)`` of every non-sources artifact, first-seen order."""
    return _distinct_by_url(
        d for d in detailed if d.publication.classifier != SOURCES_CLASSIFIER
    )


def source_artifacts(detailed: Sequence[DetailedArtifact]) -> list[tuple[str, Path]]:
    """``(url, path)`` of every sources artifact, first-seen order."""
    return _distinct_by_url(
        d for d in detailed if d.publication.classifier == SOURCES_CLASSIFIER
    )


def class_path(
    detailed: Sequence[DetailedArtifact],
    extra_class_path: Sequence[Path] = (),
    extra_runtime_class_path: Sequence[Path] = (),
) -> list[Path]:
    """Runtime classpath: main artifacts, extra classpath, runtime-only jars."""
    return (
        [path for _, path in main_artifacts(detailed)]
        + list(extra_class_path)
        + list(extra_runtime_class_path)
    )


def compile_class_path(
    detailed: Sequence[DetailedArtifact],
    extra_class_path: Sequence[Path] = (),
    extra_compile_only_jars: Sequence[Path] = (),
) -> list[Path]:
    """Compile classpath: main artifacts, extra classpath, compile-only jars."""
    return (
        [path for _, path in main_artifacts(detailed)]
        + list(extra_class_path)
        + list(extra_compile_only_jars)
    )


def source_path(
    detailed: Sequence[DetailedArtifact],
    extra_source_jars: Sequence[Path] = (),
) -> list[Path]:
    """Source path: sources artifacts, then extra source jars."""
    return [path for _, path in source_artifacts(detailed)] + list(extra_source_jars)
