"""``scalafetch fetch <manifest>``: fetch everything a manifest declares.

Reads a YAML fetch manifest, runs the orchestration through the Coursier
launcher, and prints the resulting artifacts.

Exit Codes:
    0: Every required sub-fetch succeeded.
    1: A dependency could not be converted or downloaded.
    2: The manifest could not be read or is malformed.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler

from scalafetch.cli.output import (
    artifacts_to_json,
    errors_to_json,
    print_artifacts,
    print_class_path,
    print_error,
    print_json,
)
from scalafetch.constants import DEFAULT_MAX_WORKERS
from scalafetch.core.artifacts import fetch_artifacts
from scalafetch.core.fetch.coursier import DEFAULT_LAUNCHER, CoursierEngine
from scalafetch.core.recovery import recovering, surface_all
from scalafetch.exceptions import ManifestError, NoScalaVersionProvidedError, RepositoryFormatError
from scalafetch.manifest import load_manifest


def _configure_logging(verbosity: int) -> None:
    """Route scalafetch log records to stderr through Rich.

    Verbosity 1 shows progress messages, 2 and above adds debug output.
    """
    if verbosity <= 0:
        return
    pkg_logger = logging.getLogger("scalafetch")
    pkg_logger.setLevel(logging.DEBUG if verbosity > 1 else logging.INFO)
    if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
        pkg_logger.addHandler(
            RichHandler(console=Console(stderr=True), show_path=False, show_time=False)
        )


@click.command("fetch")
@click.argument(
    "manifest_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option("--sources", is_flag=True, help="Also fetch source jars.")
@click.option(
    "--keep-resolution", is_flag=True,
    help="Include the resolved dependency graph in JSON output.",
)
@click.option(
    "--lenient", is_flag=True,
    help="Skip Scala dependencies instead of failing when no Scala version is set.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json", "classpath"]),
    default="text",
    help="Output format (default: text).",
)
@click.option(
    "--cs", "launcher",
    default=DEFAULT_LAUNCHER,
    envvar="SCALAFETCH_CS",
    show_default=True,
    help="Coursier launcher to run.",
)
@click.option(
    "--cache", "cache_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Coursier cache directory.",
)
@click.option("--timeout", type=float, default=None, help="Seconds allowed per engine call.")
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_WORKERS,
    show_default=True,
    help="Concurrent sub-fetches.",
)
@click.option("-v", "--verbose", count=True, help="Log progress (-vv for debug output).")
def fetch_command(
    manifest_path: Path,
    sources: bool,
    keep_resolution: bool,
    lenient: bool,
    output_format: str,
    launcher: str,
    cache_dir: Path | None,
    timeout: float | None,
    workers: int,
    verbose: int,
) -> None:
    """Fetch the dependencies declared in MANIFEST_PATH.

    Resolves the Scala toolchain, compiler plugins, user dependencies and
    internal dependencies, then prints the artifacts and classpaths.

    Exit code 0 on success, 1 on fetch failure, 2 on manifest errors.
    """
    _configure_logging(verbose)

    try:
        manifest = load_manifest(manifest_path)
    except (ManifestError, RepositoryFormatError) as exc:
        if output_format == "json":
            print_json(errors_to_json(exc))
        else:
            print_error(exc)
        sys.exit(2)

    kwargs = manifest.fetch_kwargs()
    kwargs["fetch_sources"] = kwargs["fetch_sources"] or sources

    engine = CoursierEngine(launcher=launcher, cache_dir=cache_dir, timeout=timeout)
    outcome = fetch_artifacts(
        engine=engine,
        keep_resolution=keep_resolution,
        maybe_recover_on_error=recovering(NoScalaVersionProvidedError) if lenient else surface_all,
        max_workers=workers,
        **kwargs,
    )

    if outcome.error is not None:
        if output_format == "json":
            print_json(errors_to_json(outcome.error))
        else:
            print_error(outcome.error)
        sys.exit(1)

    artifacts = outcome.value
    if output_format == "json":
        print_json(artifacts_to_json(artifacts))
    elif output_format == "classpath":
        print_class_path(artifacts)
    else:
        print_artifacts(artifacts)
