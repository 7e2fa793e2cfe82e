"""
selection_sort.py — Selection Sort
===================================
For each i, scan a[i+1 …] for the minimum (one snapshot per comparison,
carrying the current minimum candidate), then swap it into place at the
end of the scan.  Not stable: the long-distance swap can reorder equal
elements, and that is left as-is.
"""

from typing import Generator, Iterable, List

from algorithms.arrays import SortRecorder, as_values
from algorithms.step import SortStep


def selection_sort(values: Iterable) -> Generator[SortStep, None, List]:
    arr = as_values(values)
    n   = len(arr)
    rec = SortRecorder(arr)

    for i in range(n - 1):
        min_idx = i
        for j in range(i + 1, n):
            if arr[j] < arr[min_idx]:
                min_idx = j
            yield rec.step(
                f"Compare a[{j}]={arr[j]}; current minimum a[{min_idx}]={arr[min_idx]}.",
                comparing=(j, min_idx),
                min_index=min_idx,
            )

        if min_idx != i:
            arr[i], arr[min_idx] = arr[min_idx], arr[i]
            rec.mark_sorted(i)
            yield rec.step(f"Swap minimum into index {i}.", swapping=(i, min_idx), min_index=i)
        else:
            rec.mark_sorted(i)

    if n:
        yield rec.done()
    return arr
