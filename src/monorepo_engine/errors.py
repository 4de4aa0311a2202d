"""Engine exceptions.

Every error raised by the resolution and caching core derives from
EngineError and carries a stable ``code`` plus the structured data the
CLI needs to render a useful diagnostic.
"""

from __future__ import annotations


class EngineError(Exception):
    """Base class for all engine errors."""

    code = "ENGINE_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def details(self) -> list[str]:
        """Extra lines worth showing below the message."""
        return []


class ItemCollisionsError(EngineError):
    code = "ITEM_COLLISIONS"

    def __init__(self, message: str, collisions: list[str]):
        super().__init__(message)
        self.collisions = collisions

    def __str__(self) -> str:
        return "\n".join([self.message, *self.collisions])

    def details(self) -> list[str]:
        return list(self.collisions)


class UnknownReferenceError(EngineError):
    code = "UNKNOWN_REF"

    def __init__(self, ref: str):
        super().__init__(f'Unknown reference "{ref}"')
        self.ref = ref


class AmbiguousReferenceError(EngineError):
    code = "AMBIGUOUS_REF"

    def __init__(self, ref: str, matches: list[str]):
        super().__init__(
            f'Ambiguous reference "{ref}" matches multiple items: '
            f"{', '.join(matches)}"
        )
        self.ref = ref
        self.matches = matches

    def details(self) -> list[str]:
        return [f"Did you mean: {m}" for m in self.matches]


class CircularDependencyError(EngineError):
    code = "CIRCULAR_DEPS"

    def __init__(self, cycles: list[list[str]]):
        rendered = "; ".join(" -> ".join(c) for c in cycles)
        super().__init__(f"Circular dependencies detected: {rendered}")
        self.cycles = cycles

    def details(self) -> list[str]:
        return [f"Cycle: {' -> '.join(c)}" for c in self.cycles]


class EmptySelectionError(EngineError):
    code = "EMPTY_SELECTION"

    def __init__(self, message: str = "Selection resolved to no items"):
        super().__init__(message)


class InvalidModeError(EngineError):
    code = "INVALID_MODE"

    def __init__(self, mode: object, valid: tuple[str, ...] = ()):
        message = f"Invalid mode passed to meta(): {mode!r}"
        if valid:
            message += f" (valid: {', '.join(valid)})"
        super().__init__(message)
        self.mode = mode
