"""Version forcing: module pins applied on top of the engine's conflict resolution.

Pins keep the Scala library, compiler and related modules at exactly the
requested Scala version, whatever transitive dependencies ask for.
"""

from __future__ import annotations

from typing import Sequence

from scalafetch.constants import SCALA_ORGANIZATION
from scalafetch.core.dependency.models import Module

SCALA2_FORCED_MODULES: tuple[str, ...] = (
    "scala-library",
    "scala-compiler",
    "scala-reflect",
)

# scala-library itself stays unforced for Scala 3. It is unclear whether it
# should be pinned to the matching 2.13.x release; left as is until confirmed.
SCALA3_FORCED_MODULES: tuple[str, ...] = (
    "scala3-library_3",
    "scala3-compiler_3",
    "scala3-interfaces_3",
    "scala3-tasty-inspector_3",
    "tasty-core_3",
)

ForcedVersion = tuple[Module, str]


def scala_forced_versions(scala_version: str | None) -> list[ForcedVersion]:
    """Return the pins implied by a Scala version (empty for None)."""
    if scala_version is None:
        return []
    names = SCALA2_FORCED_MODULES if scala_version.startswith("2.") else SCALA3_FORCED_MODULES
    return [(Module(SCALA_ORGANIZATION, name), scala_version) for name in names]


def forced_versions(
    scala_version: str | None,
    extra: Sequence[ForcedVersion] = (),
) -> list[ForcedVersion]:
    """Combine Scala pins with explicit pins.

    Explicit pins come after the Scala ones and take precedence for their
    module: an earlier pin for the same module is dropped.

    Args:
        scala_version: Requested Scala version, or None.
        extra: Additional ``(module, version)`` pins for this fetch.

    Returns:
        Ordered pins with at most one entry per module.
    """
    combined = scala_forced_versions(scala_version) + list(extra)
    last_index = {module: i for i, (module, _) in enumerate(combined)}
    return [pin for i, pin in enumerate(combined) if last_index[pin[0]] == i]
