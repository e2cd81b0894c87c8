"""
Storage shared by quadratic models: a dense vector of linear biases, one
Neighborhood per variable and a scalar offset. Only domain independent queries
live here, all the vartype aware mutation is in BinaryQuadraticModel.

Each quadratic bias is stored twice, once in the neighborhood of each of its
variables. Quadratic biases are therefore only ever returned by value.
"""
import logging

import numpy as np
import torch

from .Neighborhood import Neighborhood
from .exceptions import InconsistentModelError, InvalidArgument

from typing import Iterator, List, Sequence, Tuple


class QuadraticModelBase:
    _linear_biases: np.ndarray
    _adj: List[Neighborhood]
    _offset: float
    _dtype: type
    _logger: logging.Logger

    def __init__(self, dtype=np.float64):
        self._dtype = np.dtype(dtype).type
        self._linear_biases = np.zeros(0, dtype=dtype)
        self._adj = []
        self._offset = self._dtype(0)
        self._logger = logging.getLogger(__package__)

    @property
    def dtype(self) -> type:
        return self._dtype

    @property
    def num_variables(self) -> int:
        return len(self._linear_biases)

    @property
    def num_interactions(self) -> int:
        count: int = 0
        for neighborhood in self._adj:
            count += neighborhood.size
        return count // 2

    def degree(self, v: int) -> int:
        """The number of other variables v interacts with, num_interactions(v)."""
        return self._adj[v].size

    @property
    def offset(self):
        return self._offset

    @offset.setter
    def offset(self, new_value):
        self._offset = self._dtype(new_value)

    def linear(self, v: int):
        return self._linear_biases[v]

    def set_linear(self, v: int, bias):
        self._linear_biases[v] = bias

    def add_linear(self, v: int, bias):
        self._linear_biases[v] += bias

    @property
    def linear_biases(self) -> np.ndarray:
        return self._linear_biases.copy()

    def neighborhood(self, v: int) -> Iterator[Tuple[int, float]]:
        """
        Iterates over the (neighbor, bias) pairs of v in increasing neighbor
        order. The iterator must not be used after the model is modified.
        """
        return iter(self._adj[v])

    def quadratic(self, u: int, v: int):
        """Returns the quadratic bias of (u, v), or 0 if they do not interact."""
        return self._adj[u].get(v, self._dtype(0))

    def quadratic_at(self, u: int, v: int):
        """
        Returns the quadratic bias of (u, v). Raises InteractionNotFound if u and
        v do not interact.
        """
        return self._adj[u].at(v)

    def remove_interaction(self, u: int, v: int) -> bool:
        """
        Removes the interaction between u and v from both neighborhoods.
        :return: whether the interaction existed
        """
        if not self._adj[u].erase(v):
            return False
        if not self._adj[v].erase(u):
            raise InconsistentModelError(
                f"interaction ({u}, {v}) was only stored in the neighborhood of {u}")
        return True

    def is_linear(self) -> bool:
        for neighborhood in self._adj:
            if neighborhood.size:
                return False
        return True

    def iter_interactions(self) -> Iterator[Tuple[int, int, float]]:
        """
        Yields every interaction once as (u, v, bias) with v < u, u in increasing
        order.
        """
        for u, neighborhood in enumerate(self._adj):
            for v, bias in neighborhood:
                if v >= u:
                    break
                yield u, v, bias

    def energy(self, sample: Sequence):
        """
        Returns the energy of sample. The sample must hold num_variables values
        in variable order, other lengths are not checked.
        """
        en = self._offset
        linear_biases: np.ndarray = self._linear_biases
        for u, neighborhood in enumerate(self._adj):
            u_val = sample[u]
            en += u_val * linear_biases[u]
            # only count the neighbors before u, the others are seen from their side
            for v, bias in neighborhood:
                if v >= u:
                    break
                en += u_val * sample[v] * bias
        return en

    def energies(self, samples) -> torch.Tensor:
        """
        Vectorised energies of a batch of samples.
        :param samples: array-like of shape (num_samples, num_variables)
        :return: a float64 tensor of shape (num_samples,)
        """
        x: torch.Tensor = torch.as_tensor(np.asarray(samples, dtype=np.float64))
        if x.dim() == 1:
            x = x.unsqueeze(0)
        if x.dim() != 2 or x.shape[1] != self.num_variables:
            raise InvalidArgument(
                f"samples must have shape (num_samples, {self.num_variables}), got {tuple(x.shape)}")

        linear: torch.Tensor = torch.as_tensor(self._linear_biases.astype(np.float64))
        en: torch.Tensor = x @ linear + float(self._offset)

        interactions = list(self.iter_interactions())
        if interactions:
            rows = torch.tensor([u for u, _, _ in interactions], dtype=torch.long)
            cols = torch.tensor([v for _, v, _ in interactions], dtype=torch.long)
            biases = torch.tensor([float(b) for _, _, b in interactions], dtype=torch.float64)
            en += (x[:, rows] * x[:, cols] * biases).sum(dim=1)
        return en

    def _resize_storage(self, n: int):
        """Grows or truncates the linear vector and the adjacency to n variables."""
        current: int = self.num_variables
        if n > current:
            self._linear_biases = np.concatenate(
                (self._linear_biases, np.zeros(n - current, dtype=self._linear_biases.dtype)))
            self._adj.extend(Neighborhood() for _ in range(n - current))
        elif n < current:
            self._linear_biases = self._linear_biases[:n].copy()
            del self._adj[n:]
