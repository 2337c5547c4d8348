"""Parsing of the ``org::name:version,param=value`` dependency notation.

Supported forms::

    org:name:version              Java dependency, no suffix
    org::name:version             Scala dependency, _<binary> suffix
    org::name::version            Scala + platform, _<platform>_<binary>
    org:name:version,intransitive do not fetch transitive dependencies
    org:name:version,url=<url>    download the artifact from <url>
"""

from __future__ import annotations

import re

from scalafetch.core.dependency.models import (
    URL_PARAM,
    CrossVersion,
    DependencyTemplate,
)

_DEP_RE = re.compile(
    r"^(?P<org>[^:,\s]+)(?P<sep1>::?)(?P<name>[^:,\s]+)"
    r"(?P<sep2>::?)(?P<version>[^:,\s]+)$"
)


def parse_dependency(text: str) -> DependencyTemplate:
    """Parse a dependency string into a ``DependencyTemplate``.

    Args:
        text: Dependency in ``org::name:version[,params]`` notation.

    Returns:
        The parsed template.

    Raises:
        ValueError: If *text* is not valid dependency notation.
    """
    head, *raw_params = text.strip().split(",")
    m = _DEP_RE.match(head)
    if not m:
        raise ValueError(f"Malformed dependency: {text!r}")

    sep1, sep2 = m.group("sep1"), m.group("sep2")
    if sep1 == ":" and sep2 == ":":
        cross = CrossVersion.JAVA
    elif sep1 == "::" and sep2 == ":":
        cross = CrossVersion.SCALA
    elif sep1 == "::" and sep2 == "::":
        cross = CrossVersion.PLATFORM
    else:
        raise ValueError(f"Malformed dependency: {text!r}")

    params: list[tuple[str, str | None]] = []
    url: str | None = None
    for raw in raw_params:
        key, sep, value = raw.strip().partition("=")
        if not key:
            raise ValueError(f"Empty parameter in dependency: {text!r}")
        if key == URL_PARAM:
            if not value:
                raise ValueError(f"Empty url in dependency: {text!r}")
            url = value
        else:
            params.append((key, value if sep else None))

    return DependencyTemplate(
        organization=m.group("org"),
        name=m.group("name"),
        version=m.group("version"),
        cross=cross,
        params=tuple(params),
        url=url,
    )
