"""In-place insertion sort and median-of-three quicksort."""

from __future__ import annotations

import operator
from typing import Callable, MutableSequence, TypeVar

T = TypeVar("T")
Less = Callable[[T, T], bool]

_INSERTION_THRESHOLD = 25


def insertion_sort(items: MutableSequence[T], less: Less = operator.lt) -> None:
    """Sort ``items`` in place; stable."""
    _insertion_sort(items, 0, len(items), less)


def _insertion_sort(items, lo: int, hi: int, less) -> None:
    for i in range(lo, hi):
        value = items[i]
        j = i - 1
        while j >= lo and less(value, items[j]):
            items[j + 1] = items[j]
            j -= 1
        items[j + 1] = value


def median(a: T, b: T, c: T, less: Less = operator.lt) -> T:
    """Return the median of three values under ``less``."""
    if less(a, b):
        if less(b, c):
            return b
        return c if less(a, c) else a
    if less(a, c):
        return a
    return c if less(b, c) else b


def quick_sort(items: MutableSequence[T], less: Less = operator.lt) -> None:
    """Sort ``items`` in place with a three-way median-of-three quicksort."""
    _quick_sort(items, 0, len(items), less)


def _quick_sort(a, lo: int, hi: int, less) -> None:
    while hi - lo >= _INSERTION_THRESHOLD:
        n = hi - lo
        pivot = median(a[lo + n // 4], a[lo + n // 2], a[lo + (3 * n) // 4], less)
        left = mid = lo  # [lo, left) < pivot, [left, mid) == pivot
        right = hi - 1  # (right, hi) > pivot
        while True:
            while not less(pivot, a[mid]):
                if less(a[mid], pivot):
                    a[mid], a[left] = a[left], a[mid]
                    left += 1
                if mid >= right:
                    break
                mid += 1
            while less(pivot, a[right]):
                right -= 1
            if mid >= right:
                break
            a[mid], a[right] = a[right], a[mid]
            right -= 1
            if less(a[mid], pivot):
                a[mid], a[left] = a[left], a[mid]
                left += 1
            mid += 1
        # Recurse into the smaller side, loop on the larger one.
        if left - lo < hi - mid:
            _quick_sort(a, lo, left, less)
            lo = mid
        else:
            _quick_sort(a, mid, hi, less)
            hi = left
    _insertion_sort(a, lo, hi, less)