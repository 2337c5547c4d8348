"""Shared fixtures for CLI tests.

Provides small fetch manifests written to temporary directories.
"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture
def scala_manifest(tmp_path: Path) -> Path:
    """A Scala 3 manifest with one user dependency on line 4."""
    manifest = tmp_path / "build.yaml"
    manifest.write_text(
        "scala:\n"
        "  version: 3.3.0\n"
        "dependencies:\n"
        "  - org.typelevel::cats-core:2.10.0\n"
    )
    return manifest


@pytest.fixture
def java_manifest(tmp_path: Path) -> Path:
    """A manifest without a Scala section that still lists a Scala dependency."""
    manifest = tmp_path / "build.yaml"
    manifest.write_text(
        "dependencies:\n"
        "  - org.typelevel::cats-core:2.10.0\n"
        "  - com.google.guava:guava:32.1.2-jre\n"
    )
    return manifest
