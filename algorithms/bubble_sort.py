"""
bubble_sort.py — Bubble Sort
=============================
Adjacent-pair comparison left → right per pass.  Snapshot per comparison
(`comparing = (j, j+1)`) and, when the pair is out of order, a second
snapshot for the swap (`swapping = (j, j+1)`).  After each pass the
rightmost unsorted slot is finalized.  A pass without a swap ends the
sort early.  Swaps happen only on strict `>`.
"""

from typing import Generator, Iterable, List

from algorithms.arrays import SortRecorder, as_values
from algorithms.step import SortStep


def bubble_sort(values: Iterable) -> Generator[SortStep, None, List]:
    arr = as_values(values)
    n   = len(arr)
    rec = SortRecorder(arr)

    for i in range(n - 1):
        swapped = False
        for j in range(n - i - 1):
            yield rec.step(f"Compare a[{j}]={arr[j]} with a[{j + 1}]={arr[j + 1]}.", comparing=(j, j + 1))
            if arr[j] > arr[j + 1]:
                arr[j], arr[j + 1] = arr[j + 1], arr[j]
                swapped = True
                yield rec.step(f"Swap a[{j}] and a[{j + 1}].", comparing=(j, j + 1), swapping=(j, j + 1))

        rec.mark_sorted(n - i - 1)
        if not swapped:
            break

    if n:
        yield rec.done()
    return arr
