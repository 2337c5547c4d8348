"""Parsing of repository strings into ``RepositorySpec`` values.

Accepted forms mirror what the Coursier command line understands:
``central``, ``sonatype:<name>``, ``jitpack``, ``ivy2local``, ``m2local``,
``ivy:<pattern>`` and plain ``http://``, ``https://`` or ``file://`` URLs.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence
from urllib.parse import urlparse

from scalafetch.core.positions import Position
from scalafetch.core.repository.models import RepositoryKind, RepositorySpec
from scalafetch.exceptions import RepositoryFormatError

logger = logging.getLogger(__name__)

MAVEN_CENTRAL_ROOT: str = "https://repo1.maven.org/maven2"
SONATYPE_ROOT: str = "https://oss.sonatype.org/content/repositories"
JITPACK_ROOT: str = "https://jitpack.io"

_IVY_LOCAL_PATTERN = (
    "[organisation]/[module]/(scala_[scalaVersion]/)(sbt_[sbtVersion]/)"
    "[revision]/[type]s/[artifact](-[classifier]).[ext]"
)
_URL_SCHEMES = ("http", "https", "file")


def _parse_one(text: str) -> RepositorySpec:
    raw = text.strip()
    lowered = raw.lower()

    if lowered == "central":
        return RepositorySpec("central", MAVEN_CENTRAL_ROOT)
    if lowered.startswith("sonatype:"):
        name = raw.split(":", 1)[1]
        if not name:
            raise ValueError(f"missing Sonatype repository name in {text!r}")
        return RepositorySpec(
            f"sonatype:{name}",
            f"{SONATYPE_ROOT}/{name}",
            snapshots_only=(name == "snapshots"),
        )
    if lowered == "jitpack":
        return RepositorySpec("jitpack", JITPACK_ROOT)
    if lowered == "ivy2local":
        root = (Path.home() / ".ivy2" / "local").as_uri() + "/" + _IVY_LOCAL_PATTERN
        return RepositorySpec("ivy2Local", root, kind=RepositoryKind.IVY)
    if lowered == "m2local":
        root = (Path.home() / ".m2" / "repository").as_uri()
        return RepositorySpec("m2Local", root)
    if lowered.startswith("ivy:"):
        pattern = raw[len("ivy:"):]
        if urlparse(pattern).scheme not in _URL_SCHEMES:
            raise ValueError(f"invalid Ivy pattern in {text!r}")
        return RepositorySpec(raw, pattern, kind=RepositoryKind.IVY)

    parsed = urlparse(raw)
    if parsed.scheme in _URL_SCHEMES and (parsed.netloc or parsed.scheme == "file"):
        return RepositorySpec(raw, raw.rstrip("/"))
    raise ValueError(f"unrecognized repository {text!r}")


def parse_repository(text: str, positions: Sequence[Position] = ()) -> RepositorySpec:
    """Parse a single repository string.

    Raises:
        RepositoryFormatError: If *text* is not a known repository form.
    """
    return parse_repositories([text], positions)[0]


def parse_repositories(
    texts: Iterable[str], positions: Sequence[Position] = ()
) -> list[RepositorySpec]:
    """Parse repository strings, reporting every malformed one at once.

    Args:
        texts: Repository strings, in precedence order.
        positions: Where the repository list was declared.

    Returns:
        Parsed repositories, order preserved.

    Raises:
        RepositoryFormatError: Listing all strings that could not be parsed.
    """
    parsed: list[RepositorySpec] = []
    errors: list[str] = []
    for text in texts:
        try:
            parsed.append(_parse_one(text))
        except ValueError as exc:
            errors.append(str(exc))
    if errors:
        raise RepositoryFormatError(errors, positions)
    logger.debug("Parsed repositories: %s", ", ".join(r.ident for r in parsed))
    return parsed
