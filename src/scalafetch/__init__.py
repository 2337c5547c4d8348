"""scalafetch: Dependency resolution and artifact fetching orchestration for Scala builds."""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"
