"""
Twisted Chern basis of the invariants of a half-idempotent ring.

Let R = Q[x_1, ..., x_n, y_1, ..., y_n] / (y_i^2 = y_i) with |x_i| = 1 and
|y_i| = 0, and let S_n permute the pairs (x_i, y_i). The invariant subring
R^{S_n} is generated by

    a        = y_1 + ... + y_n                               |a| = 0
    c_i      = e_i(x_1, ..., x_n),  1 <= i <= n              |c_i| = i
    c_{s,j}  = sum over s-subsets S of {1..n} and j-subsets T of the
               complement of prod_{k in S} x_k prod_{l in T} y_l
               for s, j >= 1 and s + j <= n                  |c_{s,j}| = s

in that order, the twisted classes c_{s,j} ordered lexicographically on
(s, j). There are 1 + (n^2 + n) / 2 generators. The leading monomial of
c_{s,j} is x_1···x_s y_{s+1}···y_{s+j}.

The generators satisfy relations whose left-hand sides are

    a^{n+1},   a^s c_{s,i},   c_{s,i} c_{t,j}  for s <= t <= s + i

(the pairs with s == t and j < i are the same products as j, i and are
skipped). HalfIdempotentBasis builds them eagerly; see symmpoly.relations
for evaluating and verifying them.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from .basis import PolynomialBasis
from .combinatorics import combinations
from .core import HALF_IDEMPOTENT, DecompositionError, Exponent, UsageError, as_exponent
from .polynomial import Polynomial, polynomial_class
from .symmetric import first_difference


_logger = logging.getLogger(__name__)


def _ones(n: int, x_indices=(), y_indices=()) -> List[int]:
    exponent = [0] * (2 * n)
    for k in x_indices:
        exponent[k] = 1
    for k in y_indices:
        exponent[n + k] = 1
    return exponent


def _from_exponents(n: int, exponents: List[List[int]], ordered: bool) -> Polynomial:
    poly = polynomial_class(ordered)(2 * n, HALF_IDEMPOTENT)
    for exponent in reversed(exponents):
        poly.insert(exponent, 1)
    return poly


def idempotent_sum(n: int, ordered: bool = True) -> Polynomial:
    """a = y_1 + ... + y_n"""
    return _from_exponents(n, [_ones(n, y_indices=(k,)) for k in range(n)], ordered)


def chern_class(n: int, i: int, ordered: bool = True) -> Polynomial:
    """c_i = e_i(x_1, ..., x_n) as a half-idempotent polynomial."""
    return _from_exponents(n, [_ones(n, x_indices=combo) for combo in combinations(n, i)], ordered)


def twisted_chern_class(n: int, s: int, j: int, ordered: bool = True) -> Polynomial:
    """c_{s,j}: s of the x's times j of the y's on the remaining letters."""
    exponents = []
    for x_combo in combinations(n, s):
        remaining = [k for k in range(n) if k not in x_combo]
        for y_combo in combinations(n - s, j):
            exponents.append(_ones(n, x_combo, [remaining[k] for k in y_combo]))
    return _from_exponents(n, exponents, ordered)


class HalfIdempotentBasis(PolynomialBasis):
    """
    Basis change to the generators a, c_i, c_{s,j} of the S_n-invariants
    of Q[x_1..x_n, y_1..y_n] / (y_i^2 = y_i).

    Args:
        n: Number of letters (the ring has 2n variables).
        ordered: Container used for generator-space results.
    """
    name = "half-idempotent"

    def __init__(self, n: int, ordered: bool = True):
        if n < 1:
            raise UsageError(f"Half-idempotent basis needs at least one letter, got {n}")
        self.n = n
        generators = [idempotent_sum(n, ordered)]
        names = ["a"]
        dimensions = [0]
        for i in range(1, n + 1):
            generators.append(chern_class(n, i, ordered))
            names.append(f"c_{i}")
            dimensions.append(i)
        self._twisted_index: Dict[Tuple[int, int], int] = {}
        for s in range(1, n + 1):
            for j in range(1, n - s + 1):
                self._twisted_index[(s, j)] = len(generators)
                generators.append(twisted_chern_class(n, s, j, ordered))
                names.append(f"c_{{{s},{j}}}")
                dimensions.append(s)
        super().__init__(
            num_variables=2 * n,
            policy=HALF_IDEMPOTENT,
            generators=generators,
            dimensions=dimensions,
            names=names,
            ordered=ordered,
        )
        self._relations: Tuple[Exponent, ...] = tuple(self._relation_exponents())
        _logger.info("built %d generators and %d relations for n=%d",
                     self.number_of_generators, len(self._relations), n)

    # -------------------------------------------------------------------------
    # Generator lookup
    # -------------------------------------------------------------------------

    def index(self, s: int, j: int) -> int:
        """Position of c_{s,j} among the generators."""
        try:
            return self._twisted_index[(s, j)]
        except KeyError:
            raise UsageError(
                f"No twisted Chern class c_{{{s},{j}}} for n={self.n}; "
                "need s, j >= 1 and s + j <= n"
            ) from None

    def generator(self, s: int, j: int) -> Polynomial:
        """The twisted Chern class c_{s,j}."""
        return self._generators[self.index(s, j)].copy()

    # -------------------------------------------------------------------------
    # Decomposition
    # -------------------------------------------------------------------------

    def find_exponent(self, exponent: Exponent) -> Exponent:
        n = self.n
        exponent = as_exponent(exponent)
        ys = exponent[n:]
        if not any(ys):
            result = [0] * self.number_of_generators
            result[1:n + 1] = first_difference(exponent[:n])
            return tuple(result)

        if ys[0]:
            # a^run accounts for the y's at the start
            run = 0
            while run < n and ys[run]:
                run += 1
            cleared = self.policy.subtract(exponent, _ones(n, y_indices=range(run)))
            result = list(self.find_exponent(cleared))
            result[0] += run
            return tuple(result)

        # last maximal run of y's, starting at y-position s
        end = max(k for k in range(n) if ys[k])
        s = end
        while s > 0 and ys[s - 1]:
            s -= 1
        index = self.index(s, end - s + 1)
        reduced = self.policy.subtract(exponent, self._generators[index].highest_term().exponent)
        if any(e < 0 for e in reduced):
            raise DecompositionError(
                f"Exponent {exponent} is not divisible by the leading term of {self._names[index]}"
            )
        result = list(self.find_exponent(reduced))
        result[index] += 1
        return tuple(result)

    # -------------------------------------------------------------------------
    # Relations
    # -------------------------------------------------------------------------

    def _relation_exponents(self):
        n = self.n
        m = self.number_of_generators

        power = [0] * m
        power[0] = n + 1
        yield tuple(power)

        for (s, i), index in self._twisted_index.items():
            exponent = [0] * m
            exponent[0] = s
            exponent[index] = 1
            yield tuple(exponent)

        for s in range(1, n + 1):
            for t in range(s, n + 1):
                for i in range(max(t - s, 1), n - s + 1):
                    for j in range(1, n - t + 1):
                        if s == t and j < i:
                            continue
                        exponent = [0] * m
                        exponent[self.index(s, i)] += 1
                        exponent[self.index(t, j)] += 1
                        yield tuple(exponent)

    def relation_exponents(self) -> List[Exponent]:
        """Generator exponents of the relation left-hand sides, in order."""
        return list(self._relations)

    def relations(self) -> List[Polynomial]:
        """Relation left-hand sides as generator-space monomials."""
        return [self.target_monomial(exponent) for exponent in self._relations]


__all__ = [
    'idempotent_sum',
    'chern_class',
    'twisted_chern_class',
    'HalfIdempotentBasis',
]
