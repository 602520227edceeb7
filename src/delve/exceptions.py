from __future__ import annotations

from typing import Any, Optional, Sequence


class DelveError(Exception):
    """Base exception for the delve package."""


class ConfigError(DelveError):
    """Raised when generation settings fail validation."""

    def __init__(self, message: str, errors: Optional[Sequence[Any]] = None):
        super().__init__(message)
        self.errors = list(errors or [])

    def to_human(self) -> str:
        parts = [str(self)]
        for e in self.errors:
            loc = "/".join(str(p) for p in e.get("loc", ())) or "<root>"
            parts.append(f" - at {loc}: {e.get('msg', e)}")
        return "\n".join(parts)


class GenerationError(DelveError):
    """Raised by a generation step that could not produce a new state."""


class PlacementCollision(GenerationError):
    """A candidate room or corridor overlaps existing geometry."""


class PrerequisiteMissing(GenerationError):
    """A step ran before the rooms or corridors it depends on exist."""


class RetryBudgetExceeded(GenerationError):
    """A retryable step never succeeded within its attempt bound."""

    def __init__(self, last_error: GenerationError, attempts: int):
        super().__init__(f"{last_error} and exceeded maximum retries")
        self.last_error = last_error
        self.attempts = attempts
