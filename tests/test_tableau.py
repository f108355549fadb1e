from collections import Counter
from hypothesis import given, strategies as st
from math import factorial
import numpy as np
import pytest

from youngtabs.errors import InvalidPartitionError, SizeMismatchError
from youngtabs.partitions import Partition, generate_partitions
from youngtabs.tableau import (
    YoungTableau, collen, dimension, hook_length, hook_lengths, rowlen, standard_tableaux,
    youngs_lattice_covering_relation, youngs_lattice_down
)


@st.composite
def partition_strategy(draw, max_n=10):
    n = draw(st.integers(min_value=1, max_value=max_n))
    k = draw(st.integers(min_value=1, max_value=n))

    # Assign each element to a random bin
    bin_assignments = draw(st.lists(st.integers(min_value=0, max_value=k-1), min_size=n, max_size=n))

    # Count occurrences in each bin
    counts = Counter(bin_assignments)

    # Convert to partition and sort in decreasing order
    partition = sorted(counts.values(), reverse=True)

    return tuple(partition)


@st.composite
def young_tableau_strategy(draw):
    partition = draw(partition_strategy())
    n = sum(partition)
    values = draw(st.permutations(range(1, n + 1)))
    return YoungTableau(Partition(partition), values)


def test_young_tableau_init():
    yt = YoungTableau(Partition([2, 1]))
    assert yt.shape == (2, 1)
    assert yt.n == 3
    assert yt.size == (2, 2)
    assert yt.values.tolist() == [[1, 2], [3, 0]]


def test_young_tableau_fill():
    yt = YoungTableau([3, 1], [4, 2, 1, 3])
    assert yt.rows() == [[4, 2, 1], [3]]
    assert yt.values.tolist() == [[4, 2, 1], [3, 0, 0]]


def test_young_tableau_from_shape():
    assert YoungTableau.from_shape((2, 2)) == YoungTableau(Partition([2, 2]), [1, 2, 3, 4])
    with pytest.raises(InvalidPartitionError):
        YoungTableau.from_shape((1, 2))


def test_young_tableau_size_mismatch():
    with pytest.raises(SizeMismatchError):
        YoungTableau([2, 1], [1, 2])
    with pytest.raises(SizeMismatchError):
        YoungTableau([2, 1], [1, 2, 3, 4])


def test_young_tableau_non_positive_fill():
    with pytest.raises(ValueError):
        YoungTableau([2, 1], [0, 1, 2])


@pytest.mark.parametrize("fill", [[1.7, 2.9], [1, 2.0], [True, 2]])
def test_young_tableau_non_integer_fill(fill):
    with pytest.raises(ValueError):
        YoungTableau([2], fill)


def test_young_tableau_non_integer_shape():
    with pytest.raises(InvalidPartitionError):
        YoungTableau([2.5, 1])


def test_young_tableau_is_frozen():
    yt = YoungTableau([2, 1])
    before = hash(yt)
    with pytest.raises(ValueError):
        yt.values[0, 0] = 7
    yt.shape[0] = 5
    assert yt.shape == (2, 1)
    assert hash(yt) == before


def test_young_tableau_indexing():
    yt = YoungTableau([2, 1])
    assert yt[0, 1] == 2
    assert yt[1, 0] == 3
    assert yt[1, 1] == 0
    assert yt[5, 5] == 0
    assert yt[-1, 0] == 0


def test_young_tableau_equality():
    yt1 = YoungTableau([2, 1])
    yt2 = YoungTableau([2, 1], [1, 2, 3])
    yt3 = YoungTableau([2, 1], [1, 3, 2])
    assert yt1 == yt2
    assert yt1 != yt3
    assert hash(yt1) == hash(yt2)
    assert YoungTableau([2, 1]) != YoungTableau([1, 1, 1])


def test_young_tableau_repr():
    assert repr(YoungTableau([2, 1])) == '|1|2|\n|3|'


def test_young_tableau_empty():
    yt = YoungTableau([])
    assert yt.n == 0
    assert yt.size == (0, 0)
    assert yt.conj() == yt
    assert dimension(yt) == 1


def test_young_tableau_conj():
    yt = YoungTableau([3, 1])
    conj = yt.conj()
    assert conj.shape == (2, 1, 1)
    assert conj.values.tolist() == [[1, 4], [2, 0], [3, 0]]
    for i in range(2):
        for j in range(3):
            assert conj[j, i] == yt[i, j]


@given(tableau=young_tableau_strategy())
def test_tableau_conj_involution(tableau):
    assert tableau.conj().conj() == tableau


@given(tableau=young_tableau_strategy())
def test_tableau_conj_transposes(tableau):
    assert np.array_equal(tableau.conj().values, tableau.values.T)


@given(tableau=young_tableau_strategy())
def test_tableau_contains_all_numbers(tableau):
    assert set(tableau.values[tableau.values > 0].tolist()) == set(range(1, tableau.n + 1))
    assert np.count_nonzero(tableau.values) == tableau.n


def test_row_and_column_lengths():
    yt = YoungTableau([3, 2])
    assert rowlen(yt, 0, 0) == 3
    assert rowlen(yt, 0, 2) == 1
    assert rowlen(yt, 1, 2) == 0
    assert rowlen(yt, 0, -1) == 0
    assert rowlen(yt, -1, 0) == 0
    assert rowlen(yt, 5, 0) == 0
    assert collen(yt, 0, 0) == 2
    assert collen(yt, 0, 2) == 1
    assert collen(yt, 1, 1) == 1
    assert collen(yt, -1, 0) == 0
    assert collen(yt, 0, -1) == 0
    assert collen(yt, 0, 5) == 0


def test_hook_length():
    yt = YoungTableau([3, 2])
    assert [hook_length(yt, 0, j) for j in range(3)] == [4, 3, 1]
    assert [hook_length(yt, 1, j) for j in range(2)] == [2, 1]
    assert hook_length(yt, 1, 2) == 0
    assert hook_length(yt, 7, 7) == 0
    assert hook_lengths(yt).tolist() == [[4, 3, 1], [2, 1, 0]]


def test_dimension_known_values():
    assert dimension(YoungTableau([1])) == 1
    assert dimension(YoungTableau([2])) == 1
    assert dimension(YoungTableau([1, 1])) == 1
    assert dimension(YoungTableau([2, 1])) == 2
    assert dimension(YoungTableau([3, 1])) == 3
    assert dimension(YoungTableau([2, 2])) == 2
    assert dimension(YoungTableau([2, 1, 1])) == 3
    assert dimension(YoungTableau([1, 1, 1, 1])) == 1
    assert dimension(YoungTableau([4, 1])) == 4
    assert dimension(YoungTableau([3, 2])) == 5
    assert dimension(YoungTableau([3, 1, 1])) == 6
    assert dimension(YoungTableau([5, 4, 1])) == 288
    assert dimension(YoungTableau([4, 3, 2, 1])) == 768


def test_dimension_ignores_fill():
    assert dimension(YoungTableau([3, 1], [4, 3, 2, 1])) == 3


def test_dimensions_of_four():
    dims = [dimension(YoungTableau(p)) for p in generate_partitions(4)]
    assert sorted(dims) == [1, 1, 2, 3, 3]


@given(partition=partition_strategy())
def test_dimension_positive(partition):
    assert dimension(YoungTableau(partition)) > 0


@given(partition=partition_strategy())
def test_dimension_of_conjugate(partition):
    yt = YoungTableau(partition)
    assert dimension(yt) == dimension(yt.conj())


@given(n=st.integers(1, 9))
def test_dimension_sum_factorial(n):
    total = sum(dimension(YoungTableau(p))**2 for p in generate_partitions(n))
    expected = factorial(n)
    assert total == expected, f"Sum of squared dimensions ({total}) does not equal {n}! ({expected}) for n={n}"


def test_youngs_lattice_covering_relation():
    assert youngs_lattice_covering_relation((3, 2, 2)) == [(2, 2, 2), (3, 2, 1)]
    assert youngs_lattice_covering_relation((1,)) == [()]


def test_youngs_lattice_down():
    lattice = youngs_lattice_down((2, 1))
    assert lattice[(2, 1)] == [(1, 1), (2,)]
    assert lattice[(1,)] == [()]
    assert lattice[()] == []


def test_standard_tableaux():
    tableaux = standard_tableaux((2, 1))
    assert len(tableaux) == 2
    assert YoungTableau([2, 1], [1, 2, 3]) in tableaux
    assert YoungTableau([2, 1], [1, 3, 2]) in tableaux


@given(partition=partition_strategy(max_n=8))
def test_standard_tableau_count(partition):
    tableaux = standard_tableaux(partition)
    assert len(tableaux) == dimension(YoungTableau(partition))
    assert len(set(tableaux)) == len(tableaux)


@given(partition=partition_strategy(max_n=8))
def test_standard_tableaux_increase(partition):
    for tableau in standard_tableaux(partition):
        rows = tableau.rows()
        assert all(row == sorted(row) for row in rows)
        assert all(col == sorted(col) for col in tableau.conj().rows())


if __name__ == '__main__':
    pytest.main()
