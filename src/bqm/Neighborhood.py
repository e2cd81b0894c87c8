"""
The sparse interaction row of a single variable. Neighbors are kept in two
parallel lists (neighbor indices and quadratic biases) sorted by neighbor
index, without duplicates.

Bulk building is a two call protocol: any number of emplace_unchecked calls,
followed by exactly one sort_and_sum call. Between the two, the row is not
sorted and must not be queried.
"""
from bisect import bisect_left
from typing import Iterator, List, Tuple

from src.utils import is_sorted, zip_sort

from .exceptions import InteractionNotFound


class Neighborhood:
    _neighbors: List[int]
    _biases: List

    def __init__(self):
        self._neighbors = []
        self._biases = []

    def _find(self, v: int) -> int:
        """Returns the position of v, or -1 if v is not a neighbor."""
        i: int = bisect_left(self._neighbors, v)
        if i < len(self._neighbors) and self._neighbors[i] == v:
            return i
        return -1

    def get(self, v: int, default=0):
        """
        Returns the bias of v if v is in the neighborhood, otherwise default.
        v is never inserted.
        """
        i: int = self._find(v)
        if i < 0:
            return default
        return self._biases[i]

    def at(self, v: int):
        i: int = self._find(v)
        if i < 0:
            raise InteractionNotFound(f"variable {v} is not in the neighborhood")
        return self._biases[i]

    def __getitem__(self, v: int):
        """
        Get-or-create access. If v is not a neighbor, (v, 0) is inserted at its
        sorted position.
        """
        return self._biases[self._slot(v)]

    def __setitem__(self, v: int, bias):
        self._biases[self._slot(v)] = bias

    def add(self, v: int, bias):
        i: int = self._slot(v)
        self._biases[i] += bias

    def _slot(self, v: int) -> int:
        i: int = bisect_left(self._neighbors, v)
        if i == len(self._neighbors) or self._neighbors[i] != v:
            self._neighbors.insert(i, v)
            self._biases.insert(i, 0)
        return i

    def emplace_unchecked(self, v: int, bias):
        """
        Appends (v, bias) to the end of the neighborhood without keeping it
        sorted or unique. sort_and_sum must be called before the neighborhood
        is used again.
        """
        self._neighbors.append(v)
        self._biases.append(bias)

    def sort_and_sum(self):
        """
        Sorts the neighborhood and sums the biases of duplicate neighbors.
        Linear if the neighborhood is already sorted.
        """
        if not is_sorted(self._neighbors):
            self._neighbors, self._biases = zip_sort(self._neighbors, self._biases)

        neighbors: List[int] = self._neighbors
        biases: List = self._biases
        size: int = len(neighbors)

        # walk until the first duplicate
        i: int = 0
        j: int = 1
        while j < size and neighbors[i] != neighbors[j]:
            i += 1
            j += 1
        if j >= size:
            return

        while j < size:
            if neighbors[i] == neighbors[j]:
                biases[i] += biases[j]
            else:
                i += 1
                neighbors[i] = neighbors[j]
                biases[i] = biases[j]
            j += 1
        del neighbors[i + 1:]
        del biases[i + 1:]

    def erase(self, v: int) -> int:
        """
        Removes v from the neighborhood.
        :return: the number of removed entries, 0 or 1
        """
        i: int = self._find(v)
        if i < 0:
            return 0
        del self._neighbors[i]
        del self._biases[i]
        return 1

    def erase_range(self, first: int, last: int):
        """Removes the entries at positions [first, last)."""
        del self._neighbors[first:last]
        del self._biases[first:last]

    def lower_bound(self, v: int) -> int:
        """Returns the first position whose neighbor is not less than v."""
        return bisect_left(self._neighbors, v)

    def get_term(self, index: int) -> Tuple[int, float]:
        return self._neighbors[index], self._biases[index]

    def get_neighbor(self, index: int) -> int:
        return self._neighbors[index]

    def get_bias(self, index: int):
        return self._biases[index]

    def set_bias_at(self, index: int, bias):
        self._biases[index] = bias

    def copy(self) -> "Neighborhood":
        copy = Neighborhood()
        copy._neighbors = list(self._neighbors)
        copy._biases = list(self._biases)
        return copy

    def __iter__(self) -> Iterator[Tuple[int, float]]:
        return zip(self._neighbors, self._biases)

    def __contains__(self, v: int) -> bool:
        return self._find(v) >= 0

    def __len__(self) -> int:
        return len(self._neighbors)

    @property
    def size(self) -> int:
        return len(self._neighbors)

    def __repr__(self) -> str:
        return f'Neighborhood({list(self)})'
