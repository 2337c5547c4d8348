"""Dependency data types: templates, Scala parameters, concrete modules.

A ``DependencyTemplate`` is what users write (``org::name:version``). It may
need a Scala binary-version suffix, and sometimes a platform suffix, before it
names an actual module. ``ScalaParameters`` supply those suffixes;
``ConcreteDependency`` is the result, ready to hand to a resolution engine.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field, replace

# ``url`` has a dedicated field on DependencyTemplate and takes no part in
# equality. ``intransitive`` is a valueless flag kept in ``params``.
URL_PARAM = "url"
INTRANSITIVE_PARAM = "intransitive"

# Parameters carried through to the resolution engine as dependency attributes.
ENGINE_PARAMS: frozenset[str] = frozenset({"classifier", "exclude", "ext", "type"})

_SCALA2_RELEASE_RE = re.compile(r"^2\.(\d+)\.\d+$")


class CrossVersion(enum.Enum):
    """How a template's module name is suffixed before resolution."""

    JAVA = "java"          # org:name:version, no suffix
    SCALA = "scala"        # org::name:version, _<binary>
    PLATFORM = "platform"  # org::name::version, _<platform>_<binary>


# ---------------------------------------------------------------------------
# DependencyTemplate
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DependencyTemplate:
    """A user-level dependency declaration, possibly needing Scala suffixes.

    Attributes:
        organization: Group / organization (e.g. ``org.typelevel``).
        name: Module name without any Scala suffix.
        version: Requested version string.
        cross: Suffixing rule applied on conversion.
        params: Extra attributes as sorted ``(key, value)`` pairs; a flag
            such as ``intransitive`` has value None.
        url: Direct download URL override, if any.
        changing: Whether the URL content may change and be re-fetched.
    """

    organization: str
    name: str
    version: str
    cross: CrossVersion = CrossVersion.JAVA
    params: tuple[tuple[str, str | None], ...] = ()
    url: str | None = field(default=None, compare=False)
    changing: bool = field(default=True, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(sorted(self.params)))

    @property
    def intransitive(self) -> bool:
        return any(key == INTRANSITIVE_PARAM for key, _ in self.params)

    def with_param(self, key: str, value: str | None = None) -> DependencyTemplate:
        """Return a copy with ``key`` set, replacing any previous value."""
        if key == URL_PARAM:
            return replace(self, url=value)
        kept = tuple((k, v) for k, v in self.params if k != key)
        return replace(self, params=kept + ((key, value),))

    def render(self) -> str:
        """Render back to ``org:name:version`` notation, params included."""
        if self.cross is CrossVersion.JAVA:
            text = f"{self.organization}:{self.name}:{self.version}"
        elif self.cross is CrossVersion.SCALA:
            text = f"{self.organization}::{self.name}:{self.version}"
        else:
            text = f"{self.organization}::{self.name}::{self.version}"
        for key, value in self.params:
            text += f",{key}" if value is None else f",{key}={value}"
        if self.url is not None:
            text += f",{URL_PARAM}={self.url}"
        return text

    def __str__(self) -> str:
        return self.render()


# ---------------------------------------------------------------------------
# ScalaParameters
# ---------------------------------------------------------------------------


def scala_binary_version(scala_version: str) -> str:
    """Compute the binary version used in artifact suffixes.

    ``3.x`` maps to ``3``; a final ``2.x.y`` release maps to ``2.x``; any
    other 2.x version (milestones, release candidates) is its own binary
    version.
    """
    if scala_version.startswith("3."):
        return "3"
    m = _SCALA2_RELEASE_RE.match(scala_version)
    if m:
        return f"2.{m.group(1)}"
    return scala_version


@dataclass(frozen=True)
class ScalaParameters:
    """Scala version parameters used to turn templates into modules.

    Attributes:
        scala_version: Full Scala version (e.g. ``3.3.0``).
        scala_binary_version: Suffix version; derived when omitted.
        platform: Platform suffix (``sjs1``, ``native0.4``) or None for JVM.
    """

    scala_version: str
    scala_binary_version: str = ""
    platform: str | None = None

    def __post_init__(self) -> None:
        if not self.scala_binary_version:
            object.__setattr__(
                self, "scala_binary_version", scala_binary_version(self.scala_version)
            )


# ---------------------------------------------------------------------------
# Module & ConcreteDependency
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Module:
    """An organization / name pair, fully suffixed."""

    organization: str
    name: str

    @classmethod
    def parse(cls, text: str) -> Module:
        """Parse ``org:name``."""
        org, sep, name = text.partition(":")
        if not sep or not org or not name or ":" in name:
            raise ValueError(f"Invalid module: {text!r}")
        return cls(org, name)

    def render(self) -> str:
        return f"{self.organization}:{self.name}"

    def __str__(self) -> str:
        return self.render()


@dataclass(frozen=True)
class ConcreteDependency:
    """A fully specified dependency, as understood by resolution engines.

    Attributes:
        module: Suffixed organization and name.
        version: Requested version.
        transitive: Whether dependencies of this module are resolved too.
        attributes: Sorted ``(key, value)`` pairs, keys from ``ENGINE_PARAMS``.
    """

    module: Module
    version: str
    transitive: bool = True
    attributes: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "attributes", tuple(sorted(self.attributes)))

    def attribute(self, key: str) -> str | None:
        return dict(self.attributes).get(key)

    def render(self) -> str:
        text = f"{self.module.render()}:{self.version}"
        if not self.transitive:
            text += f",{INTRANSITIVE_PARAM}"
        for key, value in self.attributes:
            text += f",{key}={value}"
        return text

    def __str__(self) -> str:
        return self.render()
