"""scalafetch exception hierarchy.

All public exceptions inherit from ScalaFetchError, giving callers a single
base class to catch when they want to handle any scalafetch-specific failure
without swallowing unrelated errors.

Errors raised while assembling a classpath derive from ``BuildError``: they
carry the source positions of the declarations that caused them, so that a
report can point the user at the exact line of a manifest rather than at an
internal list index.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Sequence

if TYPE_CHECKING:
    from scalafetch.core.dependency.models import DependencyTemplate
    from scalafetch.core.positions import Position


class ScalaFetchError(Exception):
    """Base exception for all scalafetch errors."""


class BuildError(ScalaFetchError):
    """An error reported against zero or more source positions.

    Attributes:
        message: Human-readable description, without position prefix.
        positions: Where the offending declarations came from.
    """

    def __init__(self, message: str, positions: Sequence[Position] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.positions: tuple[Position, ...] = tuple(positions)

    def render(self) -> list[str]:
        """Return one line per reported problem, prefixed by its positions."""
        if not self.positions:
            return [self.message]
        where = ", ".join(p.render() for p in self.positions)
        return [f"{where}: {self.message}"]


class NoScalaVersionProvidedError(BuildError):
    """Raised when a dependency template needs a Scala suffix but no Scala version was given.

    Distinguished from other failures so that callers can selectively
    recover from it (for example in pure Java builds).
    """

    def __init__(
        self, dependency: DependencyTemplate, positions: Sequence[Position] = ()
    ) -> None:
        super().__init__(
            f"Got Scala dependency {dependency.render()}, "
            "but no Scala version is provided",
            positions,
        )
        self.dependency = dependency


class UnsupportedDependencyParameterError(BuildError):
    """Raised when a dependency carries a parameter no resolution engine understands."""

    def __init__(
        self, dependency: DependencyTemplate, key: str, positions: Sequence[Position] = ()
    ) -> None:
        super().__init__(
            f"Unsupported parameter '{key}' in dependency {dependency.render()}",
            positions,
        )
        self.dependency = dependency
        self.key = key


class RepositoryFormatError(BuildError):
    """Raised when one or more repository strings cannot be parsed."""

    def __init__(self, errors: Sequence[str], positions: Sequence[Position] = ()) -> None:
        if len(errors) == 1:
            message = f"Error parsing repository: {errors[0]}"
        else:
            message = "Error parsing repositories: " + ", ".join(errors)
        super().__init__(message, positions)
        self.errors: tuple[str, ...] = tuple(errors)


class FetchingDependenciesError(BuildError):
    """Raised when the resolution engine fails for a fully specified request.

    Wraps the underlying engine error together with the positions of the
    dependencies that were being fetched.
    """

    def __init__(self, cause: BaseException, positions: Sequence[Position] = ()) -> None:
        super().__init__(f"Error downloading dependencies: {cause}", positions)
        self.cause = cause
        self.__cause__ = cause


class CompositeBuildError(BuildError):
    """Aggregate of independently surfaced failures, reported as one unit.

    Nested composites are flattened so that ``errors`` always lists leaf
    errors only.
    """

    def __init__(self, errors: Iterable[BuildError]) -> None:
        flat: list[BuildError] = []
        for error in errors:
            if isinstance(error, CompositeBuildError):
                flat.extend(error.errors)
            else:
                flat.append(error)
        if not flat:
            raise ValueError("CompositeBuildError requires at least one error")
        positions = [p for e in flat for p in e.positions]
        super().__init__(
            f"{len(flat)} error(s) found: " + "; ".join(e.message for e in flat),
            positions,
        )
        self.errors: tuple[BuildError, ...] = tuple(flat)

    def render(self) -> list[str]:
        return [line for error in self.errors for line in error.render()]


class ResolutionEngineError(ScalaFetchError):
    """Raised by a resolution engine when it cannot satisfy a request.

    Never escapes the orchestration layer unwrapped: the fetcher turns it
    into a ``FetchingDependenciesError``.
    """


class ManifestError(ScalaFetchError):
    """Raised when a fetch manifest cannot be read or is malformed."""
