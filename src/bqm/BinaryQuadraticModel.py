"""
Binary quadratic models over BINARY or SPIN variables, stored as a dense vector
of linear biases and a vector of sorted neighborhoods.

The bulk operations (COO ingestion, dense ingestion, merging) append to the
neighborhoods without keeping them sorted, then call sort_and_sum once per
touched neighborhood.
"""
import numpy as np
from scipy import sparse

from .QuadraticModelBase import QuadraticModelBase
from .Neighborhood import Neighborhood
from .Vartype import Vartype
from .exceptions import InvalidArgument, LogicError

from typing import List, Optional, Sequence

SUPPORTED_VARTYPES = (Vartype.BINARY, Vartype.SPIN)


class BinaryQuadraticModel(QuadraticModelBase):
    _vartype: Vartype

    def __init__(self,
                 vartype: Vartype = Vartype.BINARY,
                 num_variables: int = 0,
                 dtype=np.float64):
        super().__init__(dtype)
        self._vartype = vartype
        if num_variables:
            self.resize(num_variables)

    @staticmethod
    def from_dense(dense,
                   num_variables: int,
                   vartype: Vartype = Vartype.BINARY,
                   dtype=np.float64) -> "BinaryQuadraticModel":
        """
        Creates a model from a row-major dense array with num_variables**2
        entries. Values on the diagonal are added to the linear biases for
        BINARY models and to the offset for SPIN models.
        """
        bqm = BinaryQuadraticModel(vartype, num_variables, dtype)
        bqm.add_quadratic_dense(dense, num_variables)
        return bqm

    @staticmethod
    def from_coo(rows: Sequence[int],
                 cols: Sequence[int],
                 biases: Sequence[float],
                 vartype: Vartype = Vartype.BINARY,
                 dtype=np.float64) -> "BinaryQuadraticModel":
        bqm = BinaryQuadraticModel(vartype, 0, dtype)
        bqm.add_quadratic_coo(rows, cols, biases)
        return bqm

    def copy(self) -> "BinaryQuadraticModel":
        copy = BinaryQuadraticModel(self._vartype, 0, self._linear_biases.dtype)
        copy._linear_biases = self._linear_biases.copy()
        copy._adj = [neighborhood.copy() for neighborhood in self._adj]
        copy._offset = self._offset
        return copy

    @property
    def vartype(self) -> Vartype:
        return self._vartype

    def get_vartype(self, v: int) -> Vartype:
        """The vartype of v. Every variable shares the vartype of the model."""
        return self._vartype

    def _check_vartype(self, vartype: Vartype):
        if vartype not in SUPPORTED_VARTYPES:
            raise LogicError(f"unsupported vartype {vartype.name}")

    def _add_self_loop(self, v: int, bias):
        # x * x == x for binary variables, s * s == 1 for spins
        if self._vartype == Vartype.BINARY:
            self._linear_biases[v] += bias
        elif self._vartype == Vartype.SPIN:
            self._offset += self._dtype(bias)
        else:
            raise LogicError(f"unsupported vartype {self._vartype.name}")

    def add_quadratic(self, u: int, v: int, bias):
        """
        Adds bias to the interaction (u, v). If u == v, the bias is added to the
        linear bias of u (BINARY) or to the offset (SPIN).
        """
        if u == v:
            self._add_self_loop(u, bias)
            return
        u_neighborhood: Neighborhood = self._adj[u]
        v_neighborhood: Neighborhood = self._adj[v]
        bias = self._dtype(bias)
        u_neighborhood.add(v, bias)
        v_neighborhood.add(u, bias)

    def set_quadratic(self, u: int, v: int, bias):
        if u == v:
            # a self-loop is folded into the linear biases or the offset, so
            # there is nothing to overwrite
            raise InvalidArgument(f"cannot set the quadratic bias of variable {u} with itself")
        u_neighborhood: Neighborhood = self._adj[u]
        v_neighborhood: Neighborhood = self._adj[v]
        bias = self._dtype(bias)
        u_neighborhood[v] = bias
        v_neighborhood[u] = bias

    def add_quadratic_dense(self, dense, num_variables: int):
        """
        Adds the biases of a row-major dense array with num_variables**2
        entries. dense[i, j] + dense[j, i] is added to the interaction (i, j),
        zero sums are skipped. The diagonal is handled according to the vartype.
        """
        values: np.ndarray = np.asarray(dense, dtype=self._linear_biases.dtype)
        if num_variables < 0 or values.size != num_variables * num_variables:
            raise InvalidArgument(
                f"dense must have {num_variables}**2 entries, got {values.size}")
        self._check_vartype(self._vartype)
        values = values.reshape(num_variables, num_variables)

        if num_variables > self.num_variables:
            self.resize(num_variables)
        sort_needed: bool = not self.is_linear()

        quadratic: np.ndarray = np.triu(values + values.T, k=1)
        touched: set = set()
        for u, v in zip(*np.nonzero(quadratic)):
            u = int(u)
            v = int(v)
            qbias = quadratic[u, v]
            self._adj[u].emplace_unchecked(v, qbias)
            self._adj[v].emplace_unchecked(u, qbias)
            touched.add(u)
            touched.add(v)
        # appending row by row keeps fresh neighborhoods sorted
        if sort_needed:
            for v in touched:
                self._adj[v].sort_and_sum()

        diagonal: np.ndarray = np.diagonal(values)
        if self._vartype == Vartype.SPIN:
            self._offset += self._dtype(diagonal.sum())
        else:
            self._linear_biases[:num_variables] += diagonal
        self._logger.debug("ADD_QUADRATIC_DENSE num_variables=%d num_interactions=%d sorted=%d",
                           num_variables,
                           self.num_interactions,
                           sort_needed)

    def add_quadratic_coo(self,
                          rows: Sequence[int],
                          cols: Sequence[int],
                          biases: Sequence[float],
                          length: Optional[int] = None,
                          num_variables: int = 0):
        """
        Adds the biases of a model in COOrdinate format. Each (row, col, bias)
        triple is added independently: duplicates are summed and entries with
        row == col are handled like self-loops in add_quadratic. The model is
        grown to fit the largest index.
        :param rows:
        :param cols:
        :param biases:
        :param length: the number of entries to read, defaults to len(rows)
        :param num_variables: the model is grown to at least this many variables
        """
        if length is None:
            length = len(rows)
        if length < 0:
            raise InvalidArgument("length must be non-negative")
        if num_variables < 0:
            raise InvalidArgument("the number of variables must be non-negative")
        if len(rows) < length or len(cols) < length or len(biases) < length:
            raise InvalidArgument(f"rows, cols and biases must have at least {length} entries")

        row_list: List[int] = [int(r) for r in rows[:length]]
        col_list: List[int] = [int(c) for c in cols[:length]]
        bias_list: List = [self._dtype(b) for b in biases[:length]]
        if self._vartype not in SUPPORTED_VARTYPES and any(r == c for r, c in zip(row_list, col_list)):
            self._check_vartype(self._vartype)

        size: int = num_variables
        if length > 0:
            size = max(size, max(row_list) + 1, max(col_list) + 1)
        if size > self.num_variables:
            self.resize(size)

        counts: List[int] = [0] * self.num_variables
        for r, c in zip(row_list, col_list):
            if r != c:
                counts[r] += 1
                counts[c] += 1

        for r, c, bias in zip(row_list, col_list, bias_list):
            if r == c:
                self._add_self_loop(r, bias)
            else:
                self._adj[r].emplace_unchecked(c, bias)
                self._adj[c].emplace_unchecked(r, bias)

        for v, count in enumerate(counts):
            if count > 0:
                self._adj[v].sort_and_sum()
        self._logger.debug("ADD_QUADRATIC_COO length=%d num_variables=%d num_interactions=%d",
                           length,
                           self.num_variables,
                           self.num_interactions)

    def add_quadratic_from_sparse(self, matrix):
        """
        Adds the biases of a square scipy sparse matrix (or anything scipy can
        turn into one). Entry (i, j) is treated as a COO triple.
        """
        coo = sparse.coo_matrix(matrix)
        if coo.shape[0] != coo.shape[1]:
            raise InvalidArgument(f"matrix must be square, got shape {coo.shape}")
        self.add_quadratic_coo(coo.row, coo.col, coo.data, num_variables=coo.shape[0])

    def resize(self, n: int):
        """
        Resizes the model to n variables. New variables have no biases. When
        shrinking, interactions with the removed variables are deleted first.
        """
        if n < 0:
            raise InvalidArgument("the number of variables must be non-negative")
        previous: int = self.num_variables
        if n < previous:
            for neighborhood in self._adj[:n]:
                neighborhood.erase_range(neighborhood.lower_bound(n), neighborhood.size)
        self._resize_storage(n)
        self._logger.debug("RESIZE prev_num_variables=%d num_variables=%d", previous, n)

    def change_vartype(self, vartype: Vartype):
        """
        Changes the vartype of the model, adjusting the biases so that
        the energy of every sample is unchanged under x = (s + 1) / 2.
        """
        if vartype == self._vartype:
            return
        self._check_vartype(self._vartype)
        if vartype == Vartype.BINARY:
            lin_mp, lin_offset_mp, quad_mp, lin_quad_mp, quad_offset_mp = 2., -1., 4., -2., .5
        elif vartype == Vartype.SPIN:
            lin_mp, lin_offset_mp, quad_mp, lin_quad_mp, quad_offset_mp = .5, .5, .25, .25, .125
        else:
            raise LogicError(f"unsupported vartype {vartype.name}")

        linear_biases: np.ndarray = self._linear_biases
        offset = self._offset
        for u, neighborhood in enumerate(self._adj):
            lbias = linear_biases[u]
            new_lbias = lin_mp * lbias
            offset += lin_offset_mp * lbias
            # every interaction is seen twice, once from each side
            for i in range(neighborhood.size):
                qbias = neighborhood.get_bias(i)
                neighborhood.set_bias_at(i, self._dtype(quad_mp * qbias))
                new_lbias += lin_quad_mp * qbias
                offset += quad_offset_mp * qbias
            linear_biases[u] = new_lbias
        self._offset = self._dtype(offset)
        self._logger.debug("CHANGE_VARTYPE prev=%s new=%s num_variables=%d",
                           self._vartype,
                           vartype,
                           self.num_variables)
        self._vartype = vartype

    def add_bqm(self,
                bqm: "BinaryQuadraticModel",
                mapping: Optional[Sequence[int]] = None):
        """
        Adds the offset, linear and quadratic biases of bqm, growing this model
        if needed. If mapping is given, variable i of bqm is added as variable
        mapping[i]. A bqm with a different vartype is converted on a copy, bqm
        itself is never modified.
        """
        if mapping is not None and len(mapping) != bqm.num_variables:
            raise LogicError("bqm and mapping must have the same length")
        self._check_vartype(self._vartype)
        if bqm is self:
            bqm = bqm.copy()
        if bqm.vartype != self._vartype:
            bqm = bqm.copy()
            bqm.change_vartype(self._vartype)

        if mapping is None:
            self._add_bqm(bqm)
        else:
            self._add_bqm_mapped(bqm, [int(v) for v in mapping])
        self._logger.debug("ADD_BQM num_added=%d mapped=%d num_variables=%d num_interactions=%d",
                           bqm.num_variables,
                           mapping is not None,
                           self.num_variables,
                           self.num_interactions)

    def _add_bqm(self, bqm: "BinaryQuadraticModel"):
        if bqm.num_variables > self.num_variables:
            self.resize(bqm.num_variables)
        self._offset += self._dtype(bqm.offset)
        self._linear_biases[:bqm.num_variables] += bqm._linear_biases

        for v, neighborhood in enumerate(bqm._adj):
            if neighborhood.size == 0:
                continue
            target: Neighborhood = self._adj[v]
            for u, bias in neighborhood:
                target.emplace_unchecked(u, self._dtype(bias))
            target.sort_and_sum()

    def _add_bqm_mapped(self, bqm: "BinaryQuadraticModel", mapping: List[int]):
        size: int = max(mapping) + 1 if mapping else 0
        if size > self.num_variables:
            self.resize(size)
        self._offset += self._dtype(bqm.offset)

        touched: set = set()
        for old_u, neighborhood in enumerate(bqm._adj):
            new_u: int = mapping[old_u]
            self._linear_biases[new_u] += bqm._linear_biases[old_u]
            for old_v, bias in neighborhood:
                new_v: int = mapping[old_v]
                if new_u == new_v:
                    # both variables were mapped together, count the interaction once
                    if old_v < old_u:
                        self._add_self_loop(new_u, bias)
                    continue
                self._adj[new_u].emplace_unchecked(new_v, self._dtype(bias))
                touched.add(new_u)

        for v in touched:
            self._adj[v].sort_and_sum()

    def __str__(self) -> str:
        lines: List[str] = ["BinaryQuadraticModel",
                            "  vartype: %s" % str(self._vartype),
                            "  offset: %g" % self._offset,
                            f"  linear ({self.num_variables} variables):"]
        for v, bias in enumerate(self._linear_biases):
            if bias:
                lines.append("    %d %g" % (v, bias))
        lines.append(f"  quadratic ({self.num_interactions} interactions):")
        for u, v, bias in self.iter_interactions():
            lines.append("    %d %d %g" % (u, v, bias))
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f'BinaryQuadraticModel(vartype={self._vartype.name}, ' \
               f'num_variables={self.num_variables}, num_interactions={self.num_interactions})'
