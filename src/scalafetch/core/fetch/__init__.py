"""Fetching through a resolution engine.

- ``engine``: the ``ResolutionEngine`` contract and result types.
- ``request``: immutable ``FetchRequest`` and its build steps.
- ``fetcher``: template conversion, fallbacks, pins, error wrapping.
- ``coursier``: an engine backed by the Coursier command-line launcher.
"""

from scalafetch.core.fetch.engine import (
    ArtifactDescriptor,
    DetailedArtifact,
    FetchResult,
    Publication,
    ResolutionEngine,
    ResolutionGraph,
)
from scalafetch.core.fetch.fetcher import artifacts, fetch, fetch_concrete
from scalafetch.core.fetch.request import FetchRequest, build_request

__all__ = [
    "ArtifactDescriptor",
    "DetailedArtifact",
    "FetchRequest",
    "FetchResult",
    "Publication",
    "ResolutionEngine",
    "ResolutionGraph",
    "artifacts",
    "build_request",
    "fetch",
    "fetch_concrete",
]
