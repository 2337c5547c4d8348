"""scalafetch CLI: dependency fetching for Scala and Java builds.

Entry point for the ``scalafetch`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    fetch  Fetch the toolchain and dependencies a manifest declares.

Usage::

    scalafetch fetch build.yaml
    scalafetch fetch build.yaml --sources --format json
    scalafetch fetch build.yaml --format classpath
"""

from __future__ import annotations

import click

from scalafetch import __version__
from scalafetch.cli.fetch_cmd import fetch_command


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """scalafetch: fetch Scala toolchains, plugins and dependencies.

    Resolves everything a build needs through Coursier and reports
    compile, runtime and source classpaths.
    """


cli.add_command(fetch_command)
