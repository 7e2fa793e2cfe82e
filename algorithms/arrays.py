"""
arrays.py — Input arrays for the sorting algorithms
====================================================
Pseudo-random array generation in a bounded range, plus the shared
SortStep helper the four sorting generators use.
"""

import random
from typing import Iterable, List, Optional, Sequence

from errors import PreconditionError
from model.graph import is_number
from algorithms.step import SortStep


DEFAULT_LOW  = 10
DEFAULT_HIGH = 309


def generate_array(
    size: int,
    low: int = DEFAULT_LOW,
    high: int = DEFAULT_HIGH,
    seed: Optional[int] = None,
) -> List[int]:
    """`size` integers drawn uniformly from [low, high]."""
    if not isinstance(size, int) or isinstance(size, bool) or size < 0:
        raise PreconditionError(f"Array size must be a non-negative integer, got {size!r}")
    if low > high:
        raise PreconditionError(f"Empty value range [{low}, {high}]")
    rng = random.Random(seed)
    return [rng.randint(low, high) for _ in range(size)]


def as_values(values: Iterable) -> List:
    if values is None:
        raise PreconditionError("Nothing to sort: values is None")
    arr = list(values)
    for i, v in enumerate(arr):
        if not is_number(v):
            raise PreconditionError(f"Only numbers can be sorted; a[{i}] is {v!r}")
    return arr


class SortRecorder:
    """Numbers SortSteps and copies the working array into each one."""

    def __init__(self, arr: List):
        self.arr = arr
        self.sorted_indices: List[int] = []
        self._counter = 0

    def mark_sorted(self, *indices: int) -> None:
        for i in indices:
            if i not in self.sorted_indices:
                self.sorted_indices.append(i)

    def step(
        self,
        explanation: str = "",
        comparing: Sequence[int] = (),
        swapping: Sequence[int] = (),
        key_index: Optional[int] = None,
        min_index: Optional[int] = None,
        written_index: Optional[int] = None,
        is_final: bool = False,
    ) -> SortStep:
        step = SortStep(
            step_number=self._counter,
            array=tuple(self.arr),
            comparing=tuple(comparing),
            swapping=tuple(swapping),
            sorted_indices=tuple(sorted(self.sorted_indices)),
            key_index=key_index,
            min_index=min_index,
            written_index=written_index,
            explanation=explanation,
            is_final=is_final,
        )
        self._counter += 1
        return step

    def done(self) -> SortStep:
        self.mark_sorted(*range(len(self.arr)))
        return self.step("Array sorted.", is_final=True)
