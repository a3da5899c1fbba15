# -*- coding: utf-8 -*-
"""
Span Statistic - Image-wide total-power range, computed once per run.

Normalised power decompositions scale every component by the minimum and
maximum span (matrix trace) over the whole image. ``SpanStatisticCell``
computes that range on first request, under a lock, and serves the same
value to every later request. A failed computation is not stored, so the
error reaches every caller that asks.

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-27

Modified
--------
2026-03-06
"""

# Standard library
import logging
import threading
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SpanStatistic:
    """Minimum and maximum total power over an image."""

    min: float
    max: float

    def merge(self, other: Optional['SpanStatistic']) -> 'SpanStatistic':
        if other is None:
            return self
        return SpanStatistic(min(self.min, other.min), max(self.max, other.max))

    @classmethod
    def from_extents(
        cls, extents: Iterable[Optional[Tuple[float, float]]]
    ) -> Optional['SpanStatistic']:
        """Combine per-tile ``(min, max)`` extents; ``None`` entries are skipped."""
        result = None
        for extent in extents:
            if extent is None:
                continue
            stat = cls(float(extent[0]), float(extent[1]))
            result = stat if result is None else result.merge(stat)
        return result


class SpanStatisticCell:
    """Compute-once holder of a ``SpanStatistic``.

    Examples
    --------
    >>> cell = SpanStatisticCell('Freeman')
    >>> stat = cell.get(lambda: SpanStatistic(0.0, 10.0))
    >>> cell.get(lambda: SpanStatistic(5.0, 5.0)) is stat
    True
    """

    def __init__(self, name: str = '') -> None:
        self.name = name
        self._lock = threading.Lock()
        self._value: Optional[SpanStatistic] = None
        # Set only after _value is stored.
        self._done = threading.Event()

    @property
    def is_computed(self) -> bool:
        return self._done.is_set()

    def get(self, compute: Callable[[], SpanStatistic]) -> SpanStatistic:
        """Return the statistic, computing it on the first call.

        Concurrent callers block until the first computation finishes.
        Exceptions raised by *compute* propagate and leave the cell empty.
        """
        if self._done.is_set():
            return self._value
        with self._lock:
            if not self._done.is_set():
                value = compute()
                self._value = value
                self._done.set()
                logger.info(
                    "Span statistic %s: min=%g max=%g",
                    self.name, value.min, value.max,
                )
        return self._value
