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

from typing import Iterable

import numpy as np

from youngtabs.errors import RowContainmentError, SkewLengthError, SkewSizeError
from youngtabs.partitions import Partition


class SkewDiagram:
    """
    The skew diagram lam / mu: the cells of the Young diagram of `lam` that are not cells of the diagram of `mu`.
    Requires `mu` to be contained in `lam`. Both partitions are copied, so the diagram does not change afterwards.
    """

    def __init__(self, lam: Partition | Iterable[int], mu: Partition | Iterable[int]):
        lam = Partition(lam)
        mu = Partition(mu)
        if sum(lam) < sum(mu):
            raise SkewSizeError(f"Can't create SkewDiagram: {mu} is a partition of {sum(mu)} > {sum(lam)}.")
        if len(lam) < len(mu):
            raise SkewLengthError(f"Can't create SkewDiagram: {mu} is longer than {lam}.")
        for i, (l, m) in enumerate(zip(lam, mu)):
            if m > l:
                raise RowContainmentError(f'Row {i} of {mu} is longer than row {i} of {lam}.')
        self.lam = lam
        self.mu = mu

    def __repr__(self) -> str:
        strrep = []
        for row in matrix_repr(self):
            strrep.append('|' + '|'.join(['#' if v else ' ' for v in row]) + '|')
        return '\n'.join(strrep)

    def __len__(self) -> int:
        return sum(self.lam) - sum(self.mu)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SkewDiagram):
            return NotImplemented
        return self.lam == other.lam and self.mu == other.mu

    def __hash__(self) -> int:
        return hash((self.lam, self.mu))


def matrix_repr(diagram: SkewDiagram) -> np.ndarray:
    """
    A binary array `A` of size `len(lam) x max(lam)` where `A[i, j] == 1` if and only if (i, j) is a cell of `lam`
    but not of `mu`.
    """
    lam, mu = diagram.lam, diagram.mu
    ydiag = np.zeros((len(lam), max(lam, default=0)), dtype=np.int64)
    for i, l in enumerate(lam):
        m = mu[i] if i < len(mu) else 0
        ydiag[i, m:l] = 1
    return ydiag
