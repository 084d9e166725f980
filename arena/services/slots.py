"""Slot grid generation for a single resource on a single date."""

from __future__ import annotations

import logging

from arena.core.config import settings
from arena.domain.errors import InvalidInterval
from arena.domain.models import OperatingWindow, TimeInterval

logger = logging.getLogger(__name__)

DEFAULT_OPERATING_WINDOW = OperatingWindow.from_strings(
    settings.default_opening_time, settings.default_closing_time
)
DEFAULT_DURATION_MINUTES = settings.default_duration_minutes
SLOT_STEP_MINUTES = settings.slot_step_minutes


def normalize_duration(
    duration_minutes: int | None, default: int = DEFAULT_DURATION_MINUTES
) -> int:
    """Non-positive or missing durations fall back to the default duration."""
    if duration_minutes is None or duration_minutes <= 0:
        return default
    return duration_minutes


class SlotGenerator:
    """Builds the fixed-length candidate grid inside an operating window.

    Slots start at the opening time and every ``step_minutes`` after it; a
    slot is emitted only while it ends at or before closing time.
    """

    def __init__(
        self,
        default_window: OperatingWindow = DEFAULT_OPERATING_WINDOW,
        step_minutes: int = SLOT_STEP_MINUTES,
        default_duration_minutes: int = DEFAULT_DURATION_MINUTES,
    ) -> None:
        if step_minutes <= 0:
            raise ValueError("step_minutes must be positive")
        if default_duration_minutes <= 0:
            raise ValueError("default_duration_minutes must be positive")
        self.default_window = default_window
        self.step_minutes = step_minutes
        self.default_duration_minutes = default_duration_minutes

    def generate(
        self, window: OperatingWindow | None, duration_minutes: int | None
    ) -> list[TimeInterval]:
        window = window or self.default_window
        if not window.is_open:
            return []
        duration = normalize_duration(duration_minutes, self.default_duration_minutes)

        slots: list[TimeInterval] = []
        start = window.opening_time
        while start + duration <= window.closing_time:
            try:
                slots.append(TimeInterval(start=start, end=start + duration))
            except InvalidInterval as exc:
                logger.debug("Skipping slot: %s", exc)
            start += self.step_minutes
        return slots
