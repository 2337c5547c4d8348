"""Partial-failure recovery and explicit sub-fetch outcomes.

Every sub-fetch of an orchestration ends in an ``Outcome``: either a value or
a ``BuildError``. A caller-supplied recovery callback decides, error by error,
whether a failure is tolerated (the callback returns None and a default value
is substituted) or surfaced (the callback returns the error to report, which
may differ from the one it was given).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Generic, Sequence, TypeVar

from scalafetch.exceptions import BuildError, CompositeBuildError

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")

RecoveryCallback = Callable[[BuildError], "BuildError | None"]


# ---------------------------------------------------------------------------
# Outcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a sub-fetch: a value, or the error that prevented it.

    Attributes:
        value: The produced value. None on failure.
        error: The surfaced error. None on success.
    """

    value: T | None = None
    error: BuildError | None = None

    @classmethod
    def success(cls, value: T) -> Outcome[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: BuildError) -> Outcome[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the error if this outcome failed."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    def map(self, fn: Callable[[T], U]) -> Outcome[U]:
        if self.error is not None:
            return Outcome.failure(self.error)
        return Outcome.success(fn(self.value))  # type: ignore[arg-type]


def attempt(fn: Callable[[], T]) -> Outcome[T]:
    """Run *fn*, capturing a raised ``BuildError`` as a failed outcome."""
    try:
        return Outcome.success(fn())
    except BuildError as exc:
        return Outcome.failure(exc)


def sequence(outcomes: Sequence[Outcome[T]]) -> Outcome[list[T]]:
    """Collect values, or aggregate every failure into one composite error."""
    errors = [o.error for o in outcomes if o.error is not None]
    if errors:
        return Outcome.failure(CompositeBuildError(errors))
    return Outcome.success([o.value for o in outcomes])  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Recovery
# ---------------------------------------------------------------------------


def recover_with_default(
    outcome: Outcome[T], default: T, callback: RecoveryCallback
) -> Outcome[T]:
    """Offer a failed outcome to *callback*, substituting *default* on recovery."""
    if outcome.error is None:
        return outcome
    surfaced = callback(outcome.error)
    if surfaced is None:
        logger.warning("Ignoring error: %s", outcome.error.message)
        return Outcome.success(default)
    return Outcome.failure(surfaced)


def surface_all(error: BuildError) -> BuildError | None:
    """Recovery policy that never recovers."""
    return error


def recover_all(error: BuildError) -> BuildError | None:
    """Recovery policy that tolerates every error."""
    return None


def recovering(*kinds: type[BuildError]) -> RecoveryCallback:
    """Build a policy that recovers from the given error kinds only.

    Example::

        policy = recovering(NoScalaVersionProvidedError)
    """

    def callback(error: BuildError) -> BuildError | None:
        if isinstance(error, kinds):
            return None
        return error

    return callback
