"""
Marking Levels Module.

Provides the fixed ladder of time-axis granularities, ordered from finest
(seconds) to coarsest (decades), and the tick generator for each of them.

Sub-day levels step in fixed increments. Weeks, months, years and decades
follow the calendar, so their step length varies (month lengths, leap years,
daylight saving changes).
"""

import logging
import math
from dataclasses import dataclass
from datetime import MAXYEAR, datetime, timedelta, tzinfo
from enum import IntEnum
from typing import Callable, Dict, List, Optional

logger = logging.getLogger(__name__)


class MarkingLevel(IntEnum):
    """
    Time-axis granularity levels.

    Ordered from finest (SECONDS) to coarsest (DECADES); the integer value is
    the level index used by the viewport.
    """

    SECONDS = 0
    MINUTES = 1
    QUARTER_HOURS = 2
    HOURS = 3
    SIX_HOURS = 4
    DAYS = 5
    WEEKS = 6
    MONTHS = 7
    YEARS = 8
    DECADES = 9


@dataclass(frozen=True)
class Marking:
    """
    A single tick on the time axis.

    Attributes:
        timestamp: Start of the bucket in ms since epoch.
        label: Human-readable text for the tick.
    """

    timestamp: int
    label: str


SECOND_MS = 1000
MINUTE_MS = 60 * SECOND_MS
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS
WEEK_MS = 7 * DAY_MS


class MarkingScheme:
    """
    Generates aligned tick timestamps and labels for every marking level.

    The scheme works in a single timezone. When none is given, the local
    timezone of the machine is used.
    """

    # Typical spacing between ticks, only used for density estimates
    AVERAGE_PERIODICITY: Dict[MarkingLevel, int] = {
        MarkingLevel.SECONDS: SECOND_MS,
        MarkingLevel.MINUTES: MINUTE_MS,
        MarkingLevel.QUARTER_HOURS: 15 * MINUTE_MS,
        MarkingLevel.HOURS: HOUR_MS,
        MarkingLevel.SIX_HOURS: 6 * HOUR_MS,
        MarkingLevel.DAYS: DAY_MS,
        MarkingLevel.WEEKS: WEEK_MS,
        MarkingLevel.MONTHS: 2_629_756_800,
        MarkingLevel.YEARS: 31_556_956_320,
        MarkingLevel.DECADES: 315_569_563_200,
    }

    LABEL_FORMATS: Dict[MarkingLevel, str] = {
        MarkingLevel.SECONDS: "%H:%M:%S",
        MarkingLevel.MINUTES: "%H:%M",
        MarkingLevel.QUARTER_HOURS: "%H:%M",
        MarkingLevel.HOURS: "%H:%M",
        MarkingLevel.SIX_HOURS: "%a %H:%M",
        MarkingLevel.DAYS: "%b %d",
        MarkingLevel.WEEKS: "%b %d",
        MarkingLevel.MONTHS: "%b",
        MarkingLevel.YEARS: "%Y",
        MarkingLevel.DECADES: "%Y",
    }

    # Safety limit for a single listing
    MAX_MARKINGS = 10_000

    def __init__(self, tz: Optional[tzinfo] = None) -> None:
        """
        Initializes the MarkingScheme.

        Args:
            tz: Timezone for alignment and labels. None means local time.
        """
        self._tz = tz
        self._generators: Dict[MarkingLevel, Callable[[int, int], List[int]]] = {
            MarkingLevel.SECONDS: self._epoch_aligned(SECOND_MS),
            MarkingLevel.MINUTES: self._epoch_aligned(MINUTE_MS),
            MarkingLevel.QUARTER_HOURS: self._epoch_aligned(15 * MINUTE_MS),
            MarkingLevel.HOURS: self._epoch_aligned(HOUR_MS),
            MarkingLevel.SIX_HOURS: self._offset_aligned(6 * HOUR_MS),
            MarkingLevel.DAYS: self._offset_aligned(DAY_MS),
            MarkingLevel.WEEKS: self._weeks,
            MarkingLevel.MONTHS: self._months,
            MarkingLevel.YEARS: self._years(1),
            MarkingLevel.DECADES: self._years(10),
        }

    @property
    def levels(self) -> List[MarkingLevel]:
        """All levels, finest first."""
        return list(MarkingLevel)

    @property
    def coarsest(self) -> MarkingLevel:
        return MarkingLevel.DECADES

    def average_periodicity(self, level: MarkingLevel) -> int:
        """
        Returns the typical distance between two ticks of a level.

        Args:
            level: The marking level.

        Returns:
            int: Spacing in ms (approximate for calendar levels).
        """
        return self.AVERAGE_PERIODICITY[MarkingLevel(level)]

    def list_markings(
        self, level: MarkingLevel, start: float, end: float
    ) -> List[Marking]:
        """
        Lists every tick of a level in the range.

        The first tick is the start of the bucket containing ``start`` and may
        therefore lie slightly before it. The last tick is the last bucket
        start that is not after ``end``.

        Args:
            level: The marking level.
            start: Range start in ms since epoch.
            end: Range end in ms since epoch.

        Returns:
            List[Marking]: Ticks in ascending order.
        """
        level = MarkingLevel(level)
        if end < start:
            return []

        timestamps = self._generators[level](
            int(math.floor(start)), int(math.floor(end))
        )
        fmt = self.LABEL_FORMATS[level]
        return [Marking(t, self._to_datetime(t).strftime(fmt)) for t in timestamps]

    # ------------------------------------------------------------------
    # Conversion helpers
    # ------------------------------------------------------------------

    def _to_datetime(self, timestamp: int) -> datetime:
        return datetime.fromtimestamp(timestamp / 1000, self._tz)

    @staticmethod
    def _to_timestamp(moment: datetime) -> int:
        return int(round(moment.timestamp() * 1000))

    def _utc_offset_ms(self, timestamp: int) -> int:
        moment = self._to_datetime(timestamp)
        if moment.tzinfo is None:
            moment = moment.astimezone()
        offset = moment.utcoffset() or timedelta(0)
        return int(offset.total_seconds() * 1000)

    # ------------------------------------------------------------------
    # Generators
    # ------------------------------------------------------------------

    def _fixed_steps(self, first: int, end: int, step: int) -> List[int]:
        result = []
        t = first
        while t <= end and len(result) < self.MAX_MARKINGS:
            result.append(t)
            t += step
        if t <= end:
            logger.warning(
                f"Marking listing truncated at {self.MAX_MARKINGS} ticks "
                f"(step={step}ms)"
            )
        return result

    def _epoch_aligned(self, step: int) -> Callable[[int, int], List[int]]:
        def generate(start: int, end: int) -> List[int]:
            return self._fixed_steps(start - start % step, end, step)

        return generate

    def _offset_aligned(self, step: int) -> Callable[[int, int], List[int]]:
        """Fixed steps aligned to local midnight rather than the epoch."""

        def generate(start: int, end: int) -> List[int]:
            offset = self._utc_offset_ms(start)
            return self._fixed_steps(start - (start + offset) % step, end, step)

        return generate

    def _calendar_steps(
        self, first: datetime, end: int, advance: Callable[[datetime], datetime]
    ) -> List[int]:
        result = []
        moment = first
        while len(result) < self.MAX_MARKINGS:
            t = self._to_timestamp(moment)
            if t > end:
                break
            result.append(t)
            try:
                moment = advance(moment)
            except (OverflowError, ValueError):
                break
        return result

    def _local_midnight(self, start: int) -> datetime:
        return self._to_datetime(start).replace(
            hour=0, minute=0, second=0, microsecond=0
        )

    def _weeks(self, start: int, end: int) -> List[int]:
        midnight = self._local_midnight(start)
        monday = midnight - timedelta(days=midnight.weekday())
        return self._calendar_steps(monday, end, lambda m: m + timedelta(days=7))

    def _months(self, start: int, end: int) -> List[int]:
        first = self._local_midnight(start).replace(day=1)

        def advance(moment: datetime) -> datetime:
            if moment.month == 12:
                return moment.replace(year=moment.year + 1, month=1)
            return moment.replace(month=moment.month + 1)

        return self._calendar_steps(first, end, advance)

    def _years(self, span: int) -> Callable[[int, int], List[int]]:
        def generate(start: int, end: int) -> List[int]:
            first = self._local_midnight(start).replace(month=1, day=1)
            first = first.replace(year=max(2, first.year // span * span))

            def advance(moment: datetime) -> datetime:
                if moment.year + span > MAXYEAR:
                    raise OverflowError("year out of range")
                return moment.replace(year=moment.year + span)

            return self._calendar_steps(first, end, advance)

        return generate
