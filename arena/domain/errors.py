"""Error taxonomy for the availability engine.

None of these escape the public services: they are raised at the edges
(interval construction, date parsing, strict window lookup) and normalized
by the callers into skipped slots, empty results or default windows.
"""

from __future__ import annotations


class ArenaError(Exception):
    """Base class for engine errors."""


class InvalidInterval(ArenaError):
    """Raised when a time interval is empty, inverted or out of day bounds."""

    def __init__(self, start: int, end: int, reason: str) -> None:
        self.start = start
        self.end = end
        super().__init__(f"invalid interval [{start}, {end}): {reason}")


class MalformedDateInput(ArenaError):
    """Raised when a booking date is not an ISO ``YYYY-MM-DD`` value."""

    def __init__(self, raw: object) -> None:
        self.raw = raw
        super().__init__(f"malformed date input: {raw!r}")


class MissingConfiguration(ArenaError):
    """Raised by strict lookups when a resource has no operating window."""

    def __init__(self, resource_id: str, weekday: int) -> None:
        self.resource_id = resource_id
        self.weekday = weekday
        super().__init__(
            f"no operating window for resource {resource_id} on weekday {weekday}"
        )
