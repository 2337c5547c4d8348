"""Rich output formatting helpers for the scalafetch CLI.

Text output goes through Rich tables; JSON and classpath output are plain
``click.echo`` so they can be piped into other tools unchanged.
"""

from __future__ import annotations

import json
import os
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from scalafetch.core.artifacts import Artifacts
from scalafetch.exceptions import BuildError, ScalaFetchError

console = Console()
err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# JSON
# ---------------------------------------------------------------------------


def artifacts_to_json(artifacts: Artifacts) -> dict[str, Any]:
    """Convert an artifact bundle to a JSON-serializable dict."""
    data: dict[str, Any] = {
        "class_path": [str(p) for p in artifacts.class_path],
        "compile_class_path": [str(p) for p in artifacts.compile_class_path],
        "source_path": [str(p) for p in artifacts.source_path],
        "artifacts": [{"url": url, "path": str(path)} for url, path in artifacts.artifacts],
        "source_artifacts": [
            {"url": url, "path": str(path)} for url, path in artifacts.source_artifacts
        ],
        "user_dependencies": [d.render() for d in artifacts.user_dependencies],
        "internal_dependencies": [d.render() for d in artifacts.internal_dependencies],
        "javac_plugins": [
            {"dependency": dep.render(), "url": url, "path": str(path)}
            for dep, url, path in artifacts.javac_plugin_dependencies
        ] + [{"path": str(p)} for p in artifacts.extra_javac_plugins],
        "has_jvm_runner": artifacts.has_jvm_runner,
        "scala": None,
    }
    scala = artifacts.scala
    if scala is not None:
        data["scala"] = {
            "version": scala.params.scala_version,
            "binary_version": scala.params.scala_binary_version,
            "platform": scala.params.platform,
            "compiler_class_path": [str(p) for p in scala.compiler_class_path],
            "compiler_plugins": [
                {"dependency": dep.render(), "url": url, "path": str(path)}
                for dep, url, path in scala.compiler_plugins
            ],
            "scala_js_cli": [str(p) for p in scala.scala_js_cli],
            "scala_native_cli": [str(p) for p in scala.scala_native_cli],
        }
    if artifacts.resolution is not None:
        data["resolution"] = {
            dep.render(): [d.render() for d in direct]
            for dep, direct in artifacts.resolution.dependencies.items()
        }
    return data


def errors_to_json(error: ScalaFetchError) -> dict[str, Any]:
    lines = error.render() if isinstance(error, BuildError) else [str(error)]
    return {"errors": lines}


def print_json(data: Any) -> None:
    """Print data as indented JSON to stdout."""
    click.echo(json.dumps(data, indent=2, default=str))


# ---------------------------------------------------------------------------
# Classpath
# ---------------------------------------------------------------------------


def print_class_path(artifacts: Artifacts) -> None:
    click.echo(os.pathsep.join(str(p) for p in artifacts.class_path))


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


def print_artifacts(artifacts: Artifacts) -> None:
    """Print fetched artifacts as Rich tables, followed by a summary line.

    Args:
        artifacts: The bundle returned by ``fetch_artifacts``.
    """
    scala = artifacts.scala
    if scala is not None:
        header = Text.assemble(
            ("Scala: ", "bold"), (scala.params.scala_version, ""),
            ("  Binary: ", "bold"), (scala.params.scala_binary_version, "dim"),
        )
        if scala.params.platform:
            header.append_text(Text.assemble(("  Platform: ", "bold"), (scala.params.platform, "dim")))
        console.print(Panel(header, title="Toolchain"))
        console.print(f"  Compiler jars:  [bold]{len(scala.compiler_artifacts)}[/bold]")
        if scala.compiler_plugins:
            console.print(f"  Plugin jars:    [bold]{len(scala.compiler_plugins)}[/bold]")
        if scala.scala_js_cli:
            console.print(f"  Scala.js CLI:   [bold]{len(scala.scala_js_cli)}[/bold] jars")
        if scala.scala_native_cli:
            console.print(f"  Native CLI:     [bold]{len(scala.scala_native_cli)}[/bold] jars")

    main = artifacts.artifacts
    if main:
        table = Table(title="Artifacts", show_header=True, header_style="bold")
        table.add_column("File", style="bold")
        table.add_column("URL", style="dim")
        for url, path in main:
            table.add_row(path.name, url)
        console.print(table)
    else:
        console.print("[dim]No artifacts fetched.[/dim]")

    sources = artifacts.source_artifacts
    if sources:
        src_table = Table(title="Sources", show_header=True, header_style="bold")
        src_table.add_column("File", style="bold")
        src_table.add_column("URL", style="dim")
        for url, path in sources:
            src_table.add_row(path.name, url)
        console.print(src_table)

    _print_summary(artifacts)


def _print_summary(artifacts: Artifacts) -> None:
    parts = [
        f"[bold]{len(artifacts.artifacts)}[/bold] artifacts",
        f"{len(artifacts.source_artifacts)} sources",
        f"{len(artifacts.class_path)} classpath entries",
    ]
    if artifacts.internal_dependencies:
        parts.append(f"{len(artifacts.internal_dependencies)} internal dependencies")
    if artifacts.has_jvm_runner:
        parts.append("[green]runner[/green]")
    console.print(" | ".join(parts))


def print_error(error: ScalaFetchError) -> None:
    """Print an error to stderr, one line per reported problem."""
    lines = error.render() if isinstance(error, BuildError) else [str(error)]
    for line in lines:
        err_console.print(f"[bold red]Error:[/bold red] {escape(line)}", highlight=False, soft_wrap=True)
