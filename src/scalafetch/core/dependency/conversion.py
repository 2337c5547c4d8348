"""Conversion of dependency templates into concrete, resolvable dependencies."""

from __future__ import annotations

from typing import Sequence

from scalafetch.core.dependency.models import (
    ConcreteDependency,
    CrossVersion,
    ENGINE_PARAMS,
    INTRANSITIVE_PARAM,
    DependencyTemplate,
    Module,
    ScalaParameters,
)
from scalafetch.core.positions import Position
from scalafetch.exceptions import NoScalaVersionProvidedError, UnsupportedDependencyParameterError


def module_name(template: DependencyTemplate, params: ScalaParameters | None) -> str | None:
    """Return the suffixed module name, or None if Scala parameters are needed but absent."""
    if template.cross is CrossVersion.JAVA:
        return template.name
    if params is None:
        return None
    if template.cross is CrossVersion.PLATFORM and params.platform:
        return f"{template.name}_{params.platform}_{params.scala_binary_version}"
    return f"{template.name}_{params.scala_binary_version}"


def to_concrete(
    template: DependencyTemplate,
    params: ScalaParameters | None,
    positions: Sequence[Position] = (),
) -> ConcreteDependency:
    """Apply Scala suffixes to a template.

    Args:
        template: The dependency template to convert.
        params: Scala parameters, or None in pure Java contexts.
        positions: Where the template was declared, for error reporting.

    Returns:
        The concrete dependency.

    Raises:
        NoScalaVersionProvidedError: If the template needs a Scala suffix
            and *params* is None.
        UnsupportedDependencyParameterError: If a parameter is not in
            ``ENGINE_PARAMS`` or lacks a value.
    """
    name = module_name(template, params)
    if name is None:
        raise NoScalaVersionProvidedError(template, positions)
    attributes: list[tuple[str, str]] = []
    for key, value in template.params:
        if key == INTRANSITIVE_PARAM:
            continue
        if key not in ENGINE_PARAMS or value is None:
            raise UnsupportedDependencyParameterError(template, key, positions)
        attributes.append((key, value))
    return ConcreteDependency(
        module=Module(template.organization, name),
        version=template.version,
        transitive=not template.intransitive,
        attributes=tuple(attributes),
    )
