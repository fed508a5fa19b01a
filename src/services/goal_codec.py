"""
Goal Codec Module.

Serializes the goal list to the versioned binary goals file and back.

Layout (big-endian, no padding)::

    int32  format version
    int32  goal count
    per goal:
        int32  name length in bytes
        bytes  name (UTF-8)
        int64  initiated at (ms)
        byte   completed flag (0 or 1)
        int64  completed at (ms), only when the flag is 1

There is no migration between versions; a different version tag is rejected.
"""

import logging
import struct
from typing import Iterable, List

from src.core.errors import CorruptDataError, VersionMismatchError
from src.core.goals import Goal

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

_INT32 = struct.Struct(">i")
_INT64 = struct.Struct(">q")
_FLAG = struct.Struct(">B")


class _Reader:
    """Sequential big-endian reader that reports truncation as corruption."""

    def __init__(self, data: bytes):
        self._data = memoryview(data)
        self.position = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self.position

    def _take(self, size: int, what: str) -> memoryview:
        if size > self.remaining:
            raise CorruptDataError(
                f"Unexpected end of data reading {what} at byte {self.position} "
                f"(needed {size}, {self.remaining} left)"
            )
        chunk = self._data[self.position : self.position + size]
        self.position += size
        return chunk

    def int32(self, what: str) -> int:
        return _INT32.unpack(self._take(_INT32.size, what))[0]

    def int64(self, what: str) -> int:
        return _INT64.unpack(self._take(_INT64.size, what))[0]

    def flag(self, what: str) -> int:
        return _FLAG.unpack(self._take(_FLAG.size, what))[0]

    def raw(self, size: int, what: str) -> bytes:
        return bytes(self._take(size, what))


class GoalCodec:
    """
    Binary encoder/decoder for the goal list.

    Attributes:
        version: The single format version this codec reads and writes.
    """

    def __init__(self, version: int = FORMAT_VERSION):
        self.version = version

    def encode(self, goals: Iterable[Goal]) -> bytes:
        """
        Encodes goals in list order.

        Args:
            goals: Goals to write. Display levels are not stored.

        Returns:
            bytes: The encoded blob.
        """
        goals = list(goals)
        parts = [_INT32.pack(self.version), _INT32.pack(len(goals))]

        for goal in goals:
            name = goal.name.encode("utf-8")
            parts.append(_INT32.pack(len(name)))
            parts.append(name)
            parts.append(_INT64.pack(goal.initiated_at))
            if goal.completed_at is None:
                parts.append(_FLAG.pack(0))
            else:
                parts.append(_FLAG.pack(1))
                parts.append(_INT64.pack(goal.completed_at))

        data = b"".join(parts)
        logger.debug(f"Encoded {len(goals)} goals into {len(data)} bytes")
        return data

    def decode(self, data: bytes) -> List[Goal]:
        """
        Decodes a blob written by :meth:`encode`.

        Args:
            data: The encoded blob.

        Returns:
            List[Goal]: Goals in stored order, all on display level 0.

        Raises:
            VersionMismatchError: If the version tag differs.
            CorruptDataError: If the blob is truncated, has trailing bytes,
                a completed flag other than 0/1, invalid lengths/text, or a
                completion before the start.
        """
        reader = _Reader(data)

        version = reader.int32("format version")
        if version != self.version:
            raise VersionMismatchError(self.version, version)

        count = reader.int32("goal count")
        if count < 0:
            raise CorruptDataError(f"Negative goal count: {count}")

        goals: List[Goal] = []
        for index in range(count):
            name_length = reader.int32(f"name length of goal {index}")
            if name_length < 0:
                raise CorruptDataError(
                    f"Negative name length ({name_length}) for goal {index}"
                )
            name_bytes = reader.raw(name_length, f"name of goal {index}")
            try:
                name = name_bytes.decode("utf-8")
            except UnicodeDecodeError as e:
                raise CorruptDataError(f"Goal {index} name is not UTF-8: {e}") from e

            initiated_at = reader.int64(f"start of goal {index}")

            flag_position = reader.position
            flag = reader.flag(f"completed flag of goal {index}")
            if flag not in (0, 1):
                raise CorruptDataError(
                    f"Completed flag byte is neither 0 nor 1 ({flag}) "
                    f"at byte {flag_position}"
                )

            completed_at = None
            if flag == 1:
                completed_at = reader.int64(f"completion of goal {index}")
                if completed_at < initiated_at:
                    raise CorruptDataError(
                        f"Goal {index} completes ({completed_at}) before it "
                        f"starts ({initiated_at})"
                    )

            goals.append(Goal(name, initiated_at, completed_at))

        if reader.remaining:
            raise CorruptDataError(
                f"Leftover bytes after reading the whole file. "
                f"Read {reader.position}, total {len(data)}"
            )

        logger.debug(f"Decoded {len(goals)} goals from {len(data)} bytes")
        return goals
