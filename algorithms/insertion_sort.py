"""
insertion_sort.py — Insertion Sort
===================================
For each i, capture key = a[i] and shift every larger element one slot
right (one snapshot per shift), then place the key.  The finalized
prefix grows by one element per outer iteration.  Stable: shifting stops
at the first element that is not strictly greater than the key.
"""

from typing import Generator, Iterable, List

from algorithms.arrays import SortRecorder, as_values
from algorithms.step import SortStep


def insertion_sort(values: Iterable) -> Generator[SortStep, None, List]:
    arr = as_values(values)
    n   = len(arr)
    rec = SortRecorder(arr)
    if n:
        rec.mark_sorted(0)

    for i in range(1, n):
        key = arr[i]
        j = i - 1
        while j >= 0 and arr[j] > key:
            arr[j + 1] = arr[j]
            yield rec.step(
                f"a[{j}]={arr[j]} > key {key}: shift it right to index {j + 1}.",
                comparing=(j, j + 1),
                key_index=j,
            )
            j -= 1
        arr[j + 1] = key
        rec.mark_sorted(*range(i + 1))
        yield rec.step(f"Place key {key} at index {j + 1}.", key_index=j + 1)

    if n:
        yield rec.done()
    return arr
