"""
Viewport Module.

Provides the Viewport class that owns the visible time range of the
timeline, maps between timestamps and pixels, and animates zoom/pan
transitions.

The animation is modelled as explicit state (previous range, target range,
transition start) sampled with the current time, so every query takes a
``now`` argument instead of reading the clock itself.
"""

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

from src.core.marking_levels import DAY_MS, Marking, MarkingLevel, MarkingScheme

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimeRange:
    """
    A half-open time range [start, end) in ms since epoch.

    Attributes:
        start: Left edge timestamp.
        end: Right edge timestamp.
    """

    start: float
    end: float

    @property
    def length(self) -> float:
        return self.end - self.start


class Viewport:
    """
    Visible time range of the timeline.

    States:
        settled: the displayed range is the target range.
        animating: the displayed range is interpolated between the previous
            range and the target range with an ease-out cubic curve.

    A new zoom/pan while animating restarts the animation from the range
    displayed at that moment. There is no queue and no explicit cancel.
    """

    ZOOM_SPEED = 0.5
    MIN_RANGE = 60_000  # 1 minute
    MAX_RANGE = 100 * 365 * DAY_MS  # 100 years
    MIN_PIXELS_BETWEEN_MARKINGS = 150
    ZOOM_ANIMATION_DURATION = 200  # ms
    DEFAULT_RANGE = DAY_MS

    # Span that datetime can label in any timezone, with a year of slack
    MIN_TIME = datetime(2, 1, 1, tzinfo=timezone.utc).timestamp() * 1000
    MAX_TIME = datetime(9998, 1, 1, tzinfo=timezone.utc).timestamp() * 1000

    # exp() overflows past ~709; anything beyond this already hits a clamp
    _MAX_ZOOM_EXPONENT = 50.0

    def __init__(
        self,
        now: float,
        width: int = 1,
        scheme: Optional[MarkingScheme] = None,
        zoom_speed: float = ZOOM_SPEED,
        animation_duration: float = ZOOM_ANIMATION_DURATION,
        min_label_spacing: int = MIN_PIXELS_BETWEEN_MARKINGS,
    ) -> None:
        """
        Initializes the Viewport centered on ``now`` showing one day.

        Args:
            now: Current time in ms.
            width: Pixel width of the drawing area.
            scheme: Marking ladder, defaults to a local-time MarkingScheme.
            zoom_speed: Multiplier applied to wheel deltas.
            animation_duration: Length of a zoom/pan transition in ms.
            min_label_spacing: Minimum average pixels between labelled ticks.
        """
        self.scheme = scheme or MarkingScheme()
        self.zoom_speed = zoom_speed
        self.animation_duration = max(1.0, float(animation_duration))
        self.min_label_spacing = min_label_spacing
        self.width = max(1, int(width))

        half = self.DEFAULT_RANGE / 2
        self._target = TimeRange(now - half, now + half)
        self._previous = self._target
        self._transition_start = float(now)
        self._animating = False

        self.pointer_time = float(now)

    # ------------------------------------------------------------------
    # Animation state
    # ------------------------------------------------------------------

    @staticmethod
    def _zoom_ease(fraction: float) -> float:
        return 1 - (1 - fraction) ** 3

    def sample(self, now: float) -> TimeRange:
        """
        Returns the range displayed at ``now``.

        Settles the animation once the eased fraction reaches 1.

        Args:
            now: Current time in ms.

        Returns:
            TimeRange: Interpolated range while animating, else the target.
        """
        if not self._animating:
            return self._target

        elapsed = max(0.0, now - self._transition_start)
        f = self._zoom_ease(elapsed / self.animation_duration)
        if f >= 1:
            self._animating = False
            return self._target

        return TimeRange(
            (1 - f) * self._previous.start + f * self._target.start,
            (1 - f) * self._previous.end + f * self._target.end,
        )

    def is_animating(self, now: float) -> bool:
        """Checks whether a transition is still running at ``now``."""
        self.sample(now)
        return self._animating

    @property
    def target_range(self) -> TimeRange:
        """The range the viewport settles on."""
        return self._target

    def _start_transition(self, target: TimeRange, now: float) -> None:
        self._previous = self.sample(now)
        self._target = target
        self._transition_start = float(now)
        self._animating = True

    # ------------------------------------------------------------------
    # Coordinate mapping
    # ------------------------------------------------------------------

    def set_width(self, width: int) -> None:
        """
        Sets the pixel width of the drawing area.

        Args:
            width: New width; values below 1 are clamped to 1.
        """
        self.width = max(1, int(width))

    def map_time_to_pixel(self, timestamp: float, now: float) -> float:
        """
        Maps a timestamp to a horizontal pixel offset.

        Args:
            timestamp: Time in ms.
            now: Current time in ms (selects the animation frame).

        Returns:
            float: Pixel offset from the left edge (may be outside the width).
        """
        current = self.sample(now)
        return self.width * (timestamp - current.start) / current.length

    def map_pixel_to_time(self, x: float, now: float) -> float:
        """
        Maps a horizontal pixel offset to a timestamp.

        Args:
            x: Pixel offset from the left edge.
            now: Current time in ms (selects the animation frame).

        Returns:
            float: Time in ms.
        """
        current = self.sample(now)
        return current.start + (x / self.width) * current.length

    # ------------------------------------------------------------------
    # Zoom / pan
    # ------------------------------------------------------------------

    def _clamp_length(self, length: float) -> float:
        if math.isnan(length):
            return self.MAX_RANGE
        return min(self.MAX_RANGE, max(self.MIN_RANGE, length))

    def _place(self, start: float, length: float) -> TimeRange:
        """Builds a range of valid length, slid back inside [MIN_TIME, MAX_TIME]."""
        if start < self.MIN_TIME:
            start = self.MIN_TIME
        elif start + length > self.MAX_TIME:
            start = self.MAX_TIME - length
        return TimeRange(start, start + length)

    def zoom_by_factor(self, anchor_pixel: float, factor: float, now: float) -> None:
        """
        Scales the visible range around a fixed pixel.

        The timestamp under ``anchor_pixel`` stays under it once the
        transition settles.

        Args:
            anchor_pixel: Pixel offset of the zoom anchor.
            factor: Multiplier for the range length (>1 zooms out).
            now: Current time in ms.
        """
        current = self.sample(now)
        fraction = anchor_pixel / self.width
        anchor_time = current.start + fraction * current.length

        if math.isnan(factor):
            factor = 1.0
        new_length = self._clamp_length(current.length * factor)

        new_start = anchor_time - new_length * fraction
        new_end = anchor_time + new_length * (1 - fraction)
        logger.debug(
            f"Zoom x{factor:.3f} at px={anchor_pixel:.0f}: "
            f"{current.length:.0f}ms -> {new_length:.0f}ms"
        )
        self._start_transition(self._place(new_start, new_length), now)

    def zoom(self, anchor_pixel: float, wheel_delta: float, now: float) -> None:
        """
        Zooms by a mouse wheel delta.

        Args:
            anchor_pixel: Pixel offset of the pointer.
            wheel_delta: Wheel rotation in notches (positive zooms out).
            now: Current time in ms.
        """
        exponent = wheel_delta * self.zoom_speed
        exponent = max(-self._MAX_ZOOM_EXPONENT, min(self._MAX_ZOOM_EXPONENT, exponent))
        self.zoom_by_factor(anchor_pixel, math.exp(exponent), now)

    def set_range(self, start: float, end: float, now: float) -> None:
        """
        Animates to an absolute range.

        Reversed bounds are swapped and the length is clamped around the
        range center. The range is then slid inside [MIN_TIME, MAX_TIME]
        without changing its length. Infinite bounds stand for the matching
        edge of that span; a NaN bound leaves the viewport unchanged.

        Args:
            start: New left edge in ms.
            end: New right edge in ms.
            now: Current time in ms.
        """
        if math.isnan(start) or math.isnan(end):
            logger.warning(f"Ignoring range with NaN bound: {start}..{end}")
            return

        if math.isinf(start):
            start = self.MIN_TIME if start < 0 else self.MAX_TIME
        if math.isinf(end):
            end = self.MIN_TIME if end < 0 else self.MAX_TIME
        if end < start:
            start, end = end, start
        length = self._clamp_length(end - start)
        center = (start + end) / 2
        self._start_transition(self._place(center - length / 2, length), now)

    def pan(self, delta_pixels: float, now: float) -> None:
        """
        Moves the content horizontally.

        Args:
            delta_pixels: Pixels to move the content by (positive moves it
                right, revealing earlier times).
            now: Current time in ms.
        """
        shift = delta_pixels * self.sample(now).length / self.width
        self.set_range(self._target.start - shift, self._target.end - shift, now)

    def center_on(self, timestamp: float, now: float) -> None:
        """Animates so that ``timestamp`` is in the middle, keeping the length."""
        half = self._target.length / 2
        self.set_range(timestamp - half, timestamp + half, now)

    # ------------------------------------------------------------------
    # Markings
    # ------------------------------------------------------------------

    def current_marking_level(self, now: float) -> MarkingLevel:
        """
        Picks the finest marking level whose labels are spaced widely enough.

        A level that fits no marking at all into the range is accepted
        immediately. When no level reaches the spacing threshold, the
        coarsest level is used.

        Args:
            now: Current time in ms.

        Returns:
            MarkingLevel: The selected level.
        """
        range_length = int(self.sample(now).length)
        for level in self.scheme.levels:
            expected = range_length // self.scheme.average_periodicity(level)
            if expected == 0:
                return level
            if self.width // expected > self.min_label_spacing:
                return level
        return self.scheme.coarsest

    def list_markings(self, now: float) -> List[Marking]:
        """Labelled ticks of the current marking level."""
        current = self.sample(now)
        return self.scheme.list_markings(
            self.current_marking_level(now), current.start, current.end
        )

    def list_minor_markings(self, now: float) -> List[Marking]:
        """
        Unlabelled ticks one level finer than the current level.

        Args:
            now: Current time in ms.

        Returns:
            List[Marking]: Empty at the finest level.
        """
        level = self.current_marking_level(now)
        if level == MarkingLevel.SECONDS:
            return []
        current = self.sample(now)
        return self.scheme.list_markings(
            MarkingLevel(level - 1), current.start, current.end
        )

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def on_pointer_move(self, x: float, now: float) -> float:
        """
        Records the timestamp under the pointer.

        Args:
            x: Pointer pixel offset.
            now: Current time in ms.

        Returns:
            float: The timestamp under the pointer.
        """
        self.pointer_time = self.map_pixel_to_time(x, now)
        return self.pointer_time

    def on_scroll(self, x: float, wheel_delta: float, now: float) -> None:
        """
        Handles a wheel event: records the pointer and zooms around it.

        Args:
            x: Pointer pixel offset.
            wheel_delta: Wheel rotation in notches.
            now: Current time in ms.
        """
        self.on_pointer_move(x, now)
        self.zoom(x, wheel_delta, now)
