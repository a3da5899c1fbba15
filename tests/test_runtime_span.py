# -*- coding: utf-8 -*-
"""
Tests for the image-wide span statistic and its compute-once cell.

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
import threading
from concurrent.futures import ThreadPoolExecutor

# Third-party
import pytest

# GRPOL
from grpol.runtime.span import SpanStatistic, SpanStatisticCell


class TestSpanStatistic:

    def test_merge(self):
        merged = SpanStatistic(1.0, 5.0).merge(SpanStatistic(0.5, 3.0))
        assert merged == SpanStatistic(0.5, 5.0)

    def test_merge_none(self):
        stat = SpanStatistic(1.0, 2.0)
        assert stat.merge(None) is stat

    def test_from_extents(self):
        stat = SpanStatistic.from_extents([(2.0, 4.0), None, (1.0, 3.0)])
        assert stat == SpanStatistic(1.0, 4.0)

    def test_from_extents_all_empty(self):
        assert SpanStatistic.from_extents([None, None]) is None
        assert SpanStatistic.from_extents([]) is None


class TestSpanStatisticCell:

    def test_computed_once(self):
        cell = SpanStatisticCell('test')
        assert not cell.is_computed
        first = cell.get(lambda: SpanStatistic(0.0, 1.0))
        second = cell.get(lambda: SpanStatistic(5.0, 6.0))
        assert first is second
        assert cell.is_computed

    def test_concurrent_callers_share_one_computation(self):
        cell = SpanStatisticCell()
        calls = []
        gate = threading.Event()

        def compute():
            calls.append(1)
            gate.wait(timeout=5.0)
            return SpanStatistic(0.0, 10.0)

        with ThreadPoolExecutor(max_workers=8) as pool:
            futures = [pool.submit(cell.get, compute) for _ in range(16)]
            gate.set()
            results = [f.result() for f in futures]

        assert len(calls) == 1
        assert all(r == SpanStatistic(0.0, 10.0) for r in results)

    def test_failure_not_cached(self):
        cell = SpanStatisticCell()

        def broken():
            raise RuntimeError('read error')

        with pytest.raises(RuntimeError, match='read error'):
            cell.get(broken)
        assert not cell.is_computed
        assert cell.get(lambda: SpanStatistic(1.0, 2.0)) == SpanStatistic(1.0, 2.0)

    def test_not_computed_while_computation_runs(self):
        cell = SpanStatisticCell()
        seen = []

        def compute():
            seen.append(cell.is_computed)
            return SpanStatistic(2.0, 3.0)

        stat = cell.get(compute)
        assert seen == [False]
        assert cell.is_computed

        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(lambda _: cell.get(compute), range(8)))
        assert all(r is stat for r in results)
        assert seen == [False]
