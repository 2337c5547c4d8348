"""Dependency templates, Scala parameters, and their conversion to modules.

All public names are re-exported here so that callers can write
``from scalafetch.core.dependency import DependencyTemplate``.
"""

from scalafetch.core.dependency.conversion import module_name, to_concrete
from scalafetch.core.dependency.models import (
    ConcreteDependency,
    CrossVersion,
    DependencyTemplate,
    Module,
    ScalaParameters,
    scala_binary_version,
)
from scalafetch.core.dependency.notation import parse_dependency

__all__ = [
    "ConcreteDependency",
    "CrossVersion",
    "DependencyTemplate",
    "Module",
    "ScalaParameters",
    "module_name",
    "parse_dependency",
    "scala_binary_version",
    "to_concrete",
]
