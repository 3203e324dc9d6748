#!/usr/bin/env python3
"""
Collection micro-benchmarks for casebench.

Run with:
    casebench run examples/collections_bench.py -m
or directly:
    python examples/collections_bench.py
"""

from collections import deque

from casebench.benchmarks import Benchmark, case, case_prepare, execute, register_suite


@register_suite
class ListBenchmark(Benchmark):
    """Appending to and scanning Python lists."""

    def __init__(self, size: int = 100):
        self.size = size
        self.items: list[int] = []
        super().__init__()

    @case_prepare("Append")
    def reset_items(self):
        self.items = []

    @case("Append")
    def append(self):
        for i in range(self.size):
            self.items.append(i)

    @case_prepare("Scan")
    def fill_items(self):
        self.items = list(range(self.size))

    @case("Scan")
    def scan(self):
        total = 0
        for value in self.items:
            total += value


@register_suite
class QueueBenchmark(Benchmark):
    """Front insertion: list.insert(0) against deque.appendleft."""

    _PARAM_FIELDS = ("iteration_count", "size")

    def __init__(self):
        self.size = 1000
        self.list_queue: list[int] = []
        self.deque_queue: deque[int] = deque()
        super().__init__()

    def prepare(self):
        self.list_queue = []
        self.deque_queue = deque()

    def free(self):
        self.list_queue.clear()
        self.deque_queue.clear()

    def register_cases(self, registry):
        registry.add_case("ListInsertFront", self._list_insert_front)
        registry.add_case("DequeAppendLeft", self._deque_append_left)

    def _list_insert_front(self):
        for i in range(self.size):
            self.list_queue.insert(0, i)

    def _deque_append_left(self):
        for i in range(self.size):
            self.deque_queue.appendleft(i)


if __name__ == "__main__":
    execute(ListBenchmark(), QueueBenchmark())
