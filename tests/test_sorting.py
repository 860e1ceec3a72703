import itertools
import random

import pytest

from parlab.sorting import insertion_sort, median, quick_sort


@pytest.mark.parametrize("size", [0, 1, 2, 10, 24, 25, 26, 100, 500])
def test_quick_sort_matches_sorted(size):
    rng = random.Random(size)
    data = [rng.randint(-1000, 1000) for _ in range(size)]
    expected = sorted(data)
    quick_sort(data)
    assert data == expected


@pytest.mark.parametrize("size", [30, 200, 1000])
def test_quick_sort_many_duplicates(size):
    rng = random.Random(7 + size)
    data = [rng.randint(0, 3) for _ in range(size)]
    expected = sorted(data)
    quick_sort(data)
    assert data == expected


def test_quick_sort_already_sorted_and_reversed():
    ascending = list(range(300))
    descending = list(reversed(ascending))
    quick_sort(ascending)
    quick_sort(descending)
    assert ascending == list(range(300))
    assert descending == list(range(300))


def test_quick_sort_custom_order():
    rng = random.Random(3)
    data = [rng.random() for _ in range(150)]
    expected = sorted(data, reverse=True)
    quick_sort(data, lambda a, b: a > b)
    assert data == expected


def test_quick_sort_preserves_multiset():
    rng = random.Random(11)
    data = [rng.randint(0, 50) for _ in range(400)]
    before = sorted(data)
    quick_sort(data)
    assert sorted(data) == before
    assert all(a <= b for a, b in zip(data, data[1:]))


def test_insertion_sort_matches_sorted():
    rng = random.Random(5)
    data = [rng.randint(-50, 50) for _ in range(60)]
    expected = sorted(data)
    insertion_sort(data)
    assert data == expected


def test_insertion_sort_is_stable():
    data = [(2, "a"), (1, "b"), (2, "c"), (1, "d"), (0, "e")]
    expected = sorted(data, key=lambda item: item[0])
    insertion_sort(data, lambda x, y: x[0] < y[0])
    assert data == expected


@pytest.mark.parametrize("triple", list(itertools.permutations([1, 2, 3])))
def test_median_of_permutations(triple):
    assert median(*triple) == sorted(triple)[1]


def test_median_with_equal_values():
    assert median(4, 4, 9) == 4
    assert median(9, 4, 9) == 9