"""Resolution engine backed by the Coursier command-line launcher.

Runs ``cs fetch --json-output-file <report>`` for each request and turns the
JSON report into ``DetailedArtifact`` entries. A report entry looks like::

    {
      "coord": "com.chuusai:shapeless_2.13:2.3.3",
      "file": "/home/USER/.cache/coursier/v1/https/repo1.maven.org/maven2/com/chuusai/shapeless_2.13/2.3.3/shapeless_2.13-2.3.3.jar",
      "directDependencies": ["org.scala-lang:scala-library:2.13.0"],
      "dependencies": ["org.scala-lang:scala-library:2.13.0"]
    }

Coursier keeps its cache laid out by URL, so the download URL of an artifact
is recovered from its cache path when the report does not carry one.
"""

from __future__ import annotations

import json
import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Any, Sequence

from scalafetch.core.dependency.models import ConcreteDependency, Module
from scalafetch.core.fetch.engine import (
    ArtifactDescriptor,
    DetailedArtifact,
    FetchResult,
    Publication,
    ResolutionEngine,
    ResolutionGraph,
)
from scalafetch.core.fetch.request import FetchRequest
from scalafetch.exceptions import ResolutionEngineError

logger = logging.getLogger(__name__)

DEFAULT_LAUNCHER: str = "cs"
_URL_SCHEMES = ("https", "http")


def parse_coord(coord: str) -> tuple[ConcreteDependency, str, str]:
    """Parse a Coursier coordinate.

    Accepts ``group:artifact:version``, ``group:artifact:type:version`` and
    ``group:artifact:type:classifier:version``.

    Returns:
        ``(dependency, type, classifier)``.

    Raises:
        ValueError: If *coord* has an unexpected shape.
    """
    parts = coord.split(":")
    if len(parts) == 3:
        group, artifact, version = parts
        packaging, classifier = "jar", ""
    elif len(parts) == 4:
        group, artifact, packaging, version = parts
        classifier = ""
    elif len(parts) == 5:
        group, artifact, packaging, classifier, version = parts
    else:
        raise ValueError(f"Invalid coordinate: {coord!r}")
    return ConcreteDependency(Module(group, artifact), version), packaging, classifier


def url_from_cache_path(file: Path) -> str:
    """Rebuild a download URL from a Coursier cache path.

    Falls back to the file URI when the path is not in a Coursier cache.
    """
    parts = file.parts
    for i, part in enumerate(parts):
        if part in _URL_SCHEMES and i + 1 < len(parts):
            return f"{part}://" + "/".join(parts[i + 1:])
    return file.as_uri()


class CoursierEngine(ResolutionEngine):
    """Resolve requests by running the Coursier launcher.

    Args:
        launcher: Path or name of the ``cs`` / ``coursier`` executable.
        cache_dir: Coursier cache directory, or None for Coursier's default.
        timeout: Seconds before a fetch process is killed, or None.
    """

    def __init__(
        self,
        launcher: str = DEFAULT_LAUNCHER,
        cache_dir: Path | None = None,
        timeout: float | None = None,
    ) -> None:
        self._launcher = launcher
        self._cache_dir = cache_dir
        self._timeout = timeout

    def command(self, request: FetchRequest, report: Path) -> list[str]:
        """Build the launcher command line for *request*."""
        args = [self._launcher, "fetch", "--quiet", "--json-output-file", str(report)]
        if self._cache_dir is not None:
            args += ["--cache", str(self._cache_dir)]
        for repo in request.repositories:
            args += ["-r", repo.ident]
        for module, version in request.forced_versions:
            args += ["--force-version", f"{module.render()}:{version}"]
        for classifier in sorted(request.classifiers):
            args += ["--classifier", classifier]
        if request.main_artifacts is not None:
            args.append(f"--default={'true' if request.main_artifacts else 'false'}")

        for dep in request.dependencies:
            text = f"{dep.module.render()}:{dep.version}"
            for key, value in dep.attributes:
                text += f",{key}={value}"
            fallback = request.fallback.lookup(dep.module, dep.version) if request.fallback else None
            if fallback is not None:
                text += f",url={fallback[0]}"
            if dep.transitive:
                args.append(text)
            else:
                args += ["--intransitive", text]
        return args

    def resolve(self, request: FetchRequest) -> FetchResult:
        if not request.dependencies:
            return FetchResult(resolution=ResolutionGraph())
        with tempfile.TemporaryDirectory(prefix="scalafetch-") as tmp:
            report = Path(tmp) / "report.json"
            cmd = self.command(request, report)
            logger.debug("Running %s", " ".join(cmd))
            try:
                subprocess.run(
                    cmd,
                    check=True,
                    capture_output=True,
                    text=True,
                    timeout=self._timeout,
                )
            except FileNotFoundError as exc:
                raise ResolutionEngineError(
                    f"Coursier launcher not found: {self._launcher}"
                ) from exc
            except subprocess.TimeoutExpired as exc:
                raise ResolutionEngineError(
                    f"Coursier timed out after {exc.timeout}s"
                ) from exc
            except subprocess.CalledProcessError as exc:
                detail = (exc.stderr or exc.stdout or "").strip()
                raise ResolutionEngineError(
                    detail or f"Coursier exited with code {exc.returncode}"
                ) from exc
            try:
                data = json.loads(report.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                raise ResolutionEngineError(f"Unreadable Coursier report: {exc}") from exc
        return self.parse_report(data, request.dependencies)

    @staticmethod
    def parse_report(
        data: dict[str, Any], roots: Sequence[ConcreteDependency] = ()
    ) -> FetchResult:
        """Turn a Coursier JSON report into a ``FetchResult``."""
        detailed: list[DetailedArtifact] = []
        graph: dict[ConcreteDependency, tuple[ConcreteDependency, ...]] = {}
        try:
            for entry in data.get("dependencies", []):
                dependency, packaging, classifier = parse_coord(entry["coord"])
                direct = tuple(
                    parse_coord(d)[0] for d in entry.get("directDependencies", [])
                )
                graph.setdefault(dependency, direct)

                file = Path(entry["file"]) if entry.get("file") else None
                url = entry.get("url") or (url_from_cache_path(file) if file else "")
                publication = Publication(
                    name=dependency.module.name,
                    type=packaging,
                    extension=file.suffix.lstrip(".") if file else "jar",
                    classifier=classifier,
                )
                detailed.append(
                    DetailedArtifact(dependency, publication, ArtifactDescriptor(url), file)
                )
        except (KeyError, TypeError, ValueError) as exc:
            raise ResolutionEngineError(f"Malformed Coursier report: {exc}") from exc
        return FetchResult(
            detailed_artifacts=tuple(detailed),
            resolution=ResolutionGraph(roots=tuple(roots), dependencies=graph),
        )
