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

from collections import deque
from functools import reduce
from itertools import chain
from math import factorial
from operator import mul
from typing import Iterable, Iterator

import numpy as np

from youngtabs.errors import SizeMismatchError
from youngtabs.partitions import Partition, is_positive_integer


class YoungTableau:
    """
    A Young diagram of shape `part` filled row by row with the values of `fill` (by default 1, ..., n).

    The filling is stored in `values`, a `len(part) x max(part)` integer array in which the cells outside of the
    diagram are 0. Indexing is 0-based: `tableau[i, j]` is the value in row i and column j, or 0 when (i, j) is not a
    cell of the diagram.

    `values` is read-only and `shape` returns a copy, so a tableau does not change after construction.
    """

    def __init__(self, part: Partition | Iterable[int], fill: Iterable[int] | None = None):
        if not isinstance(part, Partition):
            part = Partition(part)
        n = sum(part)
        fill = list(range(1, n + 1)) if fill is None else list(fill)
        if len(fill) != n:
            raise SizeMismatchError(
                f"Can't fill Young diagram of {part} with {fill}: {n} cells but {len(fill)} values."
            )
        if not all(is_positive_integer(v) for v in fill):
            raise ValueError(f'Tableau values must be positive integers, got {fill}.')
        tab = np.zeros((len(part), max(part, default=0)), dtype=np.int64)
        k = 0
        for i, p in enumerate(part):
            tab[i, :p] = fill[k:k + p]
            k += p
        tab.flags.writeable = False
        self.n = n
        self._shape = Partition(part, check=False)
        self.values = tab

    @property
    def shape(self) -> Partition:
        return Partition(self._shape, check=False)

    @classmethod
    def from_shape(cls, partition_shape: Iterable[int]):
        return cls(Partition(partition_shape))

    def __repr__(self) -> str:
        strrep = []
        for i, p in enumerate(self._shape):
            strrep.append('|' + '|'.join([str(v) for v in self.values[i, :p]]) + '|')
        return '\n'.join(strrep)

    def __len__(self) -> int:
        return self.n

    @property
    def size(self) -> tuple[int, int]:
        return self.values.shape

    def __getitem__(self, key) -> int:
        i, j = key
        if self.in_grid(i, j):
            return int(self.values[i, j])
        return 0

    def in_grid(self, i: int, j: int) -> bool:
        rows, cols = self.values.shape
        return 0 <= i < rows and 0 <= j < cols

    def rows(self) -> list[list[int]]:
        return [self.values[i, :p].tolist() for i, p in enumerate(self._shape)]

    def __eq__(self, other) -> bool:
        if not isinstance(other, YoungTableau):
            return NotImplemented
        if (self.n != other.n) or (self._shape != other._shape):
            return False
        return np.array_equal(self.values, other.values)

    def __hash__(self) -> int:
        return hash((self.n, self._shape, self.values.tobytes()))

    def conj(self) -> 'YoungTableau':
        """The tableau reflected through the main diagonal: cell (i, j) of the result is cell (j, i) of `self`."""
        conj_part = self._shape.conj()
        transposed = self.values.T
        fill = chain.from_iterable(transposed[i, :p].tolist() for i, p in enumerate(conj_part))
        return YoungTableau(conj_part, fill)


def rowlen(tableau: YoungTableau, i: int, j: int) -> int:
    """Number of cells of row i from column j to the end of the row."""
    if not tableau.in_grid(i, j):
        return 0
    return int(np.count_nonzero(tableau.values[i, j:]))


def collen(tableau: YoungTableau, i: int, j: int) -> int:
    """Number of cells of column j from row i to the bottom of the column."""
    if not tableau.in_grid(i, j):
        return 0
    return int(np.count_nonzero(tableau.values[i:, j]))


def hook_length(tableau: YoungTableau, i: int, j: int) -> int:
    """
    The hook length of the cell (i, j): the cell itself, the cells to its right and the cells below it.
    Returns 0 for (i, j) outside of the diagram.
    """
    if tableau[i, j] == 0:
        return 0
    return rowlen(tableau, i, j) + collen(tableau, i, j) - 1


def hook_lengths(tableau: YoungTableau) -> np.ndarray:
    """All hook lengths of `tableau` as an array of the same size as `tableau.values`, 0 outside of the diagram."""
    diagram = np.zeros_like(tableau.values)
    for i, p in enumerate(tableau.shape):
        for j in range(p):
            diagram[i, j] = hook_length(tableau, i, j)
    return diagram


def dimension(tableau: YoungTableau) -> int:
    """
    The dimension of the irreducible representation of S_n indexed by the shape of `tableau`, computed with the
    hook length formula n! / (product of all hook lengths). This is also the number of standard Young tableaux
    of that shape.
    """
    diagram = hook_lengths(tableau)
    hooks = [int(h) for i, p in enumerate(tableau.shape) for h in diagram[i, :p]]
    if 0 in hooks:
        raise ArithmeticError(f'Found a cell with hook length 0 in\n{tableau!r}')
    hook_product = reduce(mul, hooks, 1)
    dim, remainder = divmod(factorial(tableau.n), hook_product)
    if remainder != 0:
        raise ArithmeticError(f'{tableau.n}! is not divisible by the hook product {hook_product}.')
    return dim


def youngs_lattice_covering_relation(partition: tuple[int, ...]) -> list[tuple[int, ...]]:
    """
    Takes a partition and returns a list of the partitions directly below it in Young's lattice, i.e. the shapes
    left after removing one corner cell.

    Args:
        partititon (tuple[int, ...]): an integer partition of n

    Returns:
        list[tuple[int, ...]] all of the partitions directly beneath partition
    """
    children = []
    for i in range(len(partition)):
        if partition[i] > (partition[i+1] if i+1 < len(partition) else 0):
            child = list(partition)
            child[i] -= 1
            if child[-1] == 0:
                child.pop()
            children.append(tuple(child))
    return children


def youngs_lattice_down(top_partition: tuple[int, ...]) -> dict[tuple[int, ...], list[tuple[int, ...]]]:
    """
    Generate the sub-lattice of Young's lattice from top_partition down to the empty partition.
    """
    lattice = {}
    queue = deque([tuple(top_partition)])
    while queue:
        partition = queue.popleft()
        if partition in lattice:
            continue
        children = youngs_lattice_covering_relation(partition)
        lattice[partition] = children
        for child in children:
            if child not in lattice:
                queue.append(child)
    return lattice


def standard_tableaux(partition_shape: Partition | Iterable[int]) -> list[YoungTableau]:
    """
    A standard Young tableau is a filling of a shape with the values 1...n that increases from left to right in
    each row and from top to bottom in each column. This function generates all of them for a given shape.

    Standard tableaux of shape lambda are one-to-one with the chains of Young's lattice from the empty partition up
    to lambda, so we build the sub-lattice below lambda and place n, n - 1, ... in the corner removed at each step.
    """
    shape = partition_shape if isinstance(partition_shape, Partition) else Partition(partition_shape)
    lattice = youngs_lattice_down(shape.to_tuple())

    def backtrack(partition: tuple[int, ...], value: int) -> Iterator[list[list[int]]]:
        if not partition:
            yield []
            return
        for child in lattice[partition]:
            row = next(
                i for i, count in enumerate(partition) if count > (child[i] if i < len(child) else 0)
            )
            for rows in backtrack(child, value - 1):
                new_rows = [r[:] for r in rows]
                if row == len(new_rows):
                    new_rows.append([])
                new_rows[row].append(value)
                yield new_rows

    return [
        YoungTableau(shape, chain.from_iterable(rows))
        for rows in backtrack(shape.to_tuple(), shape.n)
    ]
