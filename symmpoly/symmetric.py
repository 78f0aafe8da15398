"""
Elementary symmetric basis of the symmetric polynomials in x_1, ..., x_n.

    e_i = sum over i-subsets S of {1..n} of prod_{k in S} x_k,   |e_i| = i

Every symmetric polynomial is uniquely a polynomial in e_1, ..., e_n. The
leading monomial of e_1^{b_1}···e_n^{b_n} is x^a with
a_k = b_k + b_{k+1} + ... + b_n, so the generator exponent of a leading
(necessarily non-increasing) exponent is its first difference:

    find_exponent([a_1, ..., a_n]) = [a_1 - a_2, ..., a_{n-1} - a_n, a_n]
"""
from __future__ import annotations

import logging
from typing import List

import numpy as np

from .basis import PolynomialBasis
from .combinatorics import combinations
from .core import NO_RELATIONS, Exponent, UsageError, as_exponent
from .polynomial import Polynomial, polynomial_class


_logger = logging.getLogger(__name__)


def first_difference(block) -> Exponent:
    """[a_1 - a_2, ..., a_{n-1} - a_n, a_n]"""
    values = np.asarray(block, dtype=object)
    return as_exponent(np.append(values[:-1] - values[1:], values[-1:]))


def elementary_symmetric(n: int, i: int, ordered: bool = True) -> Polynomial:
    """e_i in the variables x_1, ..., x_n."""
    poly = polynomial_class(ordered)(n, NO_RELATIONS)
    for combo in combinations(n, i):
        exponent = [0] * n
        for k in combo:
            exponent[k] = 1
        poly.insert(exponent, 1)
    return poly


class SymmetricBasis(PolynomialBasis):
    """
    Basis change to the elementary symmetric polynomials e_1, ..., e_n.

    Example:
        >>> basis = SymmetricBasis(3)
        >>> p = basis.origin_polynomial()
        >>> for e in ([1, 1, 0], [1, 0, 1], [0, 1, 1]):
        ...     p.insert(e, 1)
        >>> str(basis.decompose(p))
        'e_2'
    """
    name = "symmetric"

    def __init__(self, n: int, ordered: bool = True):
        if n < 1:
            raise UsageError(f"Symmetric basis needs at least one variable, got {n}")
        self.n = n
        generators: List[Polynomial] = [elementary_symmetric(n, i, ordered) for i in range(1, n + 1)]
        super().__init__(
            num_variables=n,
            policy=NO_RELATIONS,
            generators=generators,
            dimensions=range(1, n + 1),
            names=[f"e_{i}" for i in range(1, n + 1)],
            ordered=ordered,
        )
        _logger.info("built %d elementary symmetric generators for n=%d", n, n)

    def find_exponent(self, exponent: Exponent) -> Exponent:
        return first_difference(exponent)


__all__ = [
    'first_difference',
    'elementary_symmetric',
    'SymmetricBasis',
]
