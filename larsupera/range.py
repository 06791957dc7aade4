"""An ordered closed interval."""

from __future__ import annotations

from typing import Any

_INVALID = "Inserted invalid range: end before start."


class Range:
    """A closed interval [start, end] with start never above end.

    Two ranges order only when they do not overlap: ``a < b`` means ``a``
    ends before ``b`` starts.  A range built without bounds is invalid
    until :meth:`set` is called.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, start: Any = None, end: Any = None) -> None:
        self._start: Any = None
        self._end: Any = None
        self._valid = False
        if start is not None or end is not None:
            self.set(start, end)

    @property
    def valid(self) -> bool:
        return self._valid

    @property
    def start(self) -> Any:
        return self._start

    @property
    def end(self) -> Any:
        return self._end

    def set(self, start: Any, end: Any) -> None:
        """Replace both bounds; raise ValueError if start exceeds end."""
        if start > end:
            raise ValueError(_INVALID)
        self._start = start
        self._end = end
        self._valid = True

    def inside(self, value: Any) -> bool:
        return self._start <= value <= self._end

    def outside(self, value: Any) -> bool:
        return not self.inside(value)

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, Range):
            return self._end < other.start
        return self._end < other

    def __gt__(self, other: Any) -> bool:
        if isinstance(other, Range):
            return self._start > other.end
        return self._start > other

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self._start == other.start and self._end == other.end

    def __add__(self, other: Range) -> Range:
        if not isinstance(other, Range):
            return NotImplemented
        merged = Range()
        if self._valid:
            merged.set(self._start, self._end)
        merged += other
        return merged

    def __iadd__(self, other: Any) -> Range:
        if isinstance(other, Range):
            low, high = other.start, other.end
        else:
            low = high = other
        if not self._valid:
            self.set(low, high)
        else:
            self._start = min(self._start, low)
            self._end = max(self._end, high)
        return self

    def __repr__(self) -> str:
        if not self._valid:
            return "Range()"
        return f"Range({self._start!r}, {self._end!r})"