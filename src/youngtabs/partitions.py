# Copyright [2024] [Dashiell Stander]
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import logging
import math
import numbers
from threading import RLock
from typing import Iterable, Iterator

import numpy as np

from youngtabs.errors import IndexOutOfRange, InvalidPartitionError, NumericOverflowError


logger = logging.getLogger(__name__)

# Past this n the intermediate sums of the pentagonal recurrence no longer fit in an int64.
BIG_THRESHOLD = 395


def is_positive_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool) and value >= 1


def check_partition_shape(partition_shape: Iterable[int]) -> bool:
    """
    Checks that a given shape defines a correct partition, in particular that it is in non-increasing order
    and that every part is a positive integer.
    Args:
        partition_shape (Iterable[int]): the candidate partition of n
    Returns:
        bool True if valid, False otherwise
    """
    parts = list(partition_shape)
    if not all(is_positive_integer(p) for p in parts):
        return False
    for i in range(len(parts) - 1):
        if parts[i + 1] > parts[i]:
            return False
    return True


class Partition:
    """
    An integer partition: a non-increasing sequence of positive integers.

    Positions are 0-based like any other Python sequence. The only mutation allowed is replacing a single
    part with a value that keeps the sequence a partition, see `__setitem__`. Instances are not safe to
    mutate from several threads, callers sharing one must lock around writes themselves.
    """

    def __init__(self, parts: Iterable[int], check: bool = True):
        self._parts = list(parts)
        if check and not check_partition_shape(self._parts):
            raise InvalidPartitionError(
                f'{self._parts} is not a partition: parts must be positive and non-increasing.'
            )

    def __repr__(self) -> str:
        return f'Partition({self._parts})'

    def __len__(self) -> int:
        return len(self._parts)

    def __iter__(self) -> Iterator[int]:
        return iter(self._parts)

    def _check_index(self, i: int):
        if not 0 <= i < len(self._parts):
            raise IndexOutOfRange(f'Index {i} is out of range for {self!r} of length {len(self)}.')

    def __getitem__(self, i: int) -> int:
        self._check_index(i)
        return self._parts[i]

    def __setitem__(self, i: int, value: int):
        """Replace part i, provided parts[i + 1] <= value <= parts[i - 1] (1 bounds the last part from below)."""
        self._check_index(i)
        if not is_positive_integer(value):
            raise InvalidPartitionError(f'Cannot set part {i} of {self!r} to {value}: parts must be positive integers.')
        upper = self._parts[i - 1] if i > 0 else math.inf
        lower = self._parts[i + 1] if i + 1 < len(self._parts) else 1
        if not lower <= value <= upper:
            raise InvalidPartitionError(
                f'Cannot set part {i} of {self!r} to {value}: it must lie between {lower} and {upper}.'
            )
        self._parts[i] = value

    def __eq__(self, other) -> bool:
        if isinstance(other, Partition):
            return self._parts == other._parts
        if isinstance(other, (list, tuple)):
            return self._parts == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self._parts))

    def __truediv__(self, other):
        from youngtabs.skew import SkewDiagram
        return SkewDiagram(self, other)

    @property
    def n(self) -> int:
        return sum(self._parts)

    def to_tuple(self) -> tuple[int, ...]:
        return tuple(self._parts)

    def conj(self) -> 'Partition':
        """
        The conjugate partition, i.e. the partition whose Young diagram is the diagram of `self` reflected
        through the main diagonal. Part i of the conjugate is the number of parts of `self` that are > i.
        """
        parts = self._parts
        k = len(parts)
        conj_parts = []
        for i in range(1, (parts[0] if parts else 0) + 1):
            while parts[k - 1] < i:
                k -= 1
            conj_parts.append(k)
        return Partition(conj_parts, check=False)


def conjugate_partition(partition: Iterable[int]) -> tuple[int, ...]:
    return Partition(partition).conj().to_tuple()


class PartitionCounter:
    """
    Counts the partitions of n with Euler's pentagonal number theorem:

        p(n) = sum_{j >= 1} (-1)^(j - 1) * (p(n - j(3j - 1)/2) + p(n - j(3j + 1)/2))

    with p(0) = 1 and p(n) = 0 for n < 0. See OEIS A000041.

    Values for n below `big_threshold` are accumulated in int64 and kept in one table, larger n are accumulated
    as Python integers and kept in a second table. Both tables only ever grow. Every table is filled bottom up so
    that large n do not recurse.
    """

    def __init__(self, big_threshold: int = BIG_THRESHOLD):
        self.big_threshold = big_threshold
        self._lock = RLock()
        self.reset()

    def reset(self):
        """Drop everything computed so far and reseed the base cases."""
        with self._lock:
            self._table: dict[int, int] = {}
            self._big_table: dict[int, int] = {}
            for m, value in ((0, 1), (1, 1), (2, 2)):
                self._table_for(m)[m] = value
            self._filled = 2
        logger.debug('Partition counter reset with big_threshold=%d', self.big_threshold)

    def __call__(self, n: int) -> int:
        return self.count(n)

    def _table_for(self, n: int) -> dict[int, int]:
        return self._table if n < self.big_threshold else self._big_table

    def _lookup(self, n: int) -> int:
        if n < 0:
            return 0
        return self._table_for(n)[n]

    def _recurrence(self, n: int, acc):
        s = acc(0)
        for j in range(1, math.floor((1 + math.sqrt(1 + 24 * n)) / 6) + 1):
            p1 = self._lookup(n - j * (3 * j - 1) // 2)
            p2 = self._lookup(n - j * (3 * j + 1) // 2)
            term = acc(p1) + acc(p2)
            s = s + term if j % 2 == 1 else s - term
        return int(s)

    def _compute(self, n: int) -> int:
        if n < self.big_threshold:
            try:
                with np.errstate(over='raise'):
                    return self._recurrence(n, np.int64)
            except FloatingPointError as e:
                raise NumericOverflowError(
                    f'p({n}) overflows int64, lower big_threshold (currently {self.big_threshold}).'
                ) from e
        if n == self.big_threshold:
            logger.debug('Switching to arbitrary precision partition counts at n=%d', n)
        return self._recurrence(n, int)

    def count(self, n: int) -> int:
        """
        Returns the number of partitions of `n`. Note that `count(0) == 1` by convention.
        """
        if n < 0:
            return 0
        with self._lock:
            while self._filled < n:
                m = self._filled + 1
                self._table_for(m)[m] = self._compute(m)
                self._filled = m
            return self._lookup(n)


_default_counter = PartitionCounter()


def no_partitions(n: int) -> int:
    """
    Returns the number of all distinct integer partitions of `n`, memoized in a process-wide counter.
    """
    return _default_counter.count(n)


def _rule_asc(n: int) -> Iterator[Partition]:
    # RuleAsc (Algorithm 3.1) of Kelleher & O'Sullivan, "Generating All Partitions: A Comparison Of Two Encodings",
    # arXiv:0909.2331. a[:k + 1] is the current ascending composition, the partition is its reverse.
    if n < 1:
        return
    a = [0] * (n + 1)
    a[1] = n
    k = 1
    while k != 0:
        x = a[k - 1] + 1
        y = a[k] - 1
        k -= 1
        while x <= y:
            a[k] = x
            y -= x
            k += 1
        a[k] = x + y
        yield Partition(a[k::-1], check=False)


class IntPartitions:
    """
    All integer partitions of `n`, generated lazily in the order of RuleAsc: ascending compositions in
    lexicographic order, each reversed into a `Partition`. The first is (1, ..., 1) and the last is (n,).

    Every call to `iter` starts a fresh traversal. `len` is `no_partitions(n)`, which is 1 for n = 0 even though
    iterating over `IntPartitions(0)` yields nothing.
    """

    def __init__(self, n: int, counter: PartitionCounter | None = None):
        self.n = n
        self.counter = counter if counter is not None else _default_counter

    def __repr__(self) -> str:
        return f'IntPartitions({self.n})'

    def __iter__(self) -> Iterator[Partition]:
        return _rule_asc(self.n)

    def __len__(self) -> int:
        return self.counter.count(self.n)


def generate_partitions(n: int) -> IntPartitions:
    return IntPartitions(n)
