"""
merge_sort.py — Merge Sort
===========================
Top-down recursive merge sort.  Recursion is expressed with `yield from`
so each nested merge streams its snapshots straight through.

Each written output position produces one snapshot: `written_index` is
the slot written, and while both halves still have elements `comparing`
holds the two source positions (start + i, mid + 1 + j).  Once a merge
range completes its indices join `sorted_indices`.  Stable: ties take
from the left half (`<=`).
"""

from typing import Generator, Iterable, List

from algorithms.arrays import SortRecorder, as_values
from algorithms.step import SortStep


def merge_sort(values: Iterable) -> Generator[SortStep, None, List]:
    arr = as_values(values)
    rec = SortRecorder(arr)
    if arr:
        yield from _sort(arr, 0, len(arr) - 1, rec)
        yield rec.done()
    return arr


def _sort(arr: List, start: int, end: int, rec: SortRecorder):
    if start >= end:
        return
    mid = (start + end) // 2
    yield from _sort(arr, start, mid, rec)
    yield from _sort(arr, mid + 1, end, rec)
    yield from _merge(arr, start, mid, end, rec)


def _merge(arr: List, start: int, mid: int, end: int, rec: SortRecorder):
    left  = arr[start:mid + 1]
    right = arr[mid + 1:end + 1]
    i = j = 0
    k = start

    while i < len(left) and j < len(right):
        sources = (start + i, mid + 1 + j)
        if left[i] <= right[j]:
            arr[k] = left[i]
            i += 1
        else:
            arr[k] = right[j]
            j += 1
        yield rec.step(f"Write {arr[k]} to index {k}.", comparing=sources, written_index=k)
        k += 1

    while i < len(left):
        arr[k] = left[i]
        yield rec.step(f"Copy remaining left value {arr[k]} to index {k}.", written_index=k)
        i += 1
        k += 1

    while j < len(right):
        arr[k] = right[j]
        yield rec.step(f"Copy remaining right value {arr[k]} to index {k}.", written_index=k)
        j += 1
        k += 1

    rec.mark_sorted(*range(start, end + 1))
