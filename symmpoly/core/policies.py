"""
Relations policies: how exponent vectors behave in a graded polynomial ring.

A monomial c·x_1^{a_1}···x_m^{a_m} is stored through its exponent vector
[a_1, ..., a_m]. The policy attached to a polynomial fixes everything that
depends on the relations the variables satisfy:

- degree: the grading of a monomial
- canonicalize: rewriting an exponent modulo the relations
- add / subtract: exponent arithmetic for products and quotients
- permute: the symmetric group action on exponents
- max_exponent: the largest exponent vector of a given degree

Two policies are provided:

- NoRelations: x_1, ..., x_n with |x_i| = 1 and no relations
- HalfIdempotent: x_1, ..., x_n, y_1, ..., y_n with |x_i| = 1, |y_i| = 0
  and y_i^2 = y_i, so exponents on the y half are capped at 1

Policies are stateless; the module-level instances NO_RELATIONS and
HALF_IDEMPOTENT are the ones used throughout the package.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable, Sequence, Tuple

import numpy as np

from .errors import UsageError


Exponent = Tuple[int, ...]


# =============================================================================
# Exponent helpers
# =============================================================================

def as_exponent(values: Iterable[int]) -> Exponent:
    """Convert any integer sequence (list, tuple, numpy array) to an exponent."""
    return tuple(int(v) for v in values)


def weighted_degree(exponent: Sequence[int], dimensions: Sequence[int]) -> int:
    """
    Degree of a monomial given the dimensions (weights) of its variables.

    Returns sum_i a_i d_i for exponent [a_1, ..., a_m] and dimensions
    [d_1, ..., d_m]. Object arrays keep the arithmetic in exact Python ints.
    """
    if len(exponent) != len(dimensions):
        raise UsageError(
            f"Exponent has {len(exponent)} variables but "
            f"{len(dimensions)} dimensions were supplied"
        )
    return int(np.dot(np.asarray(exponent, dtype=object),
                      np.asarray(dimensions, dtype=object)))


def _check_permutation(perm: Sequence[int], size: int) -> None:
    if sorted(perm) != list(range(size)):
        raise UsageError(f"{list(perm)} is not a permutation of {size} letters")


def apply_permutation(exponent: Sequence[int], perm: Sequence[int]) -> Exponent:
    """
    Permute the entries of an exponent vector.

    The result w satisfies w[i] = exponent[perm[i]].
    """
    _check_permutation(perm, len(exponent))
    permuted = np.asarray(exponent, dtype=object)[np.asarray(perm, dtype=np.intp)]
    return as_exponent(permuted)


def apply_permutation_pieces(exponent: Sequence[int], pieces: int,
                             perm: Sequence[int]) -> Exponent:
    """
    Permute each of `pieces` equal consecutive blocks of an exponent alike.

    For the half-idempotent variables this moves the pair (x_i, y_i)
    together: the same permutation is applied to the x block and the y block.
    """
    if pieces <= 0 or len(exponent) % pieces != 0:
        raise UsageError(
            f"Cannot split an exponent of length {len(exponent)} into {pieces} pieces"
        )
    blocks = np.asarray(exponent, dtype=object).reshape(pieces, -1)
    _check_permutation(perm, blocks.shape[1])
    return as_exponent(blocks[:, np.asarray(perm, dtype=np.intp)].reshape(-1))


# =============================================================================
# Policies
# =============================================================================

class RelationsPolicy(ABC):
    """
    Strategy describing the relations satisfied by a family of variables.

    Subclasses implement degree, permute, max_exponent and variable_name.
    The defaults for canonicalize/add/subtract are those of a free
    commutative monoid: componentwise integer arithmetic.
    """
    name = "base"

    @abstractmethod
    def degree(self, exponent: Sequence[int]) -> int:
        """Grading of the monomial with the given exponent."""

    @abstractmethod
    def permute(self, exponent: Sequence[int], perm: Sequence[int]) -> Exponent:
        """Action of a permutation on an exponent vector."""

    @abstractmethod
    def max_exponent(self, num_variables: int, degree: int) -> Exponent:
        """Componentwise maximal exponent vector among monomials of `degree`."""

    @abstractmethod
    def variable_name(self, index: int, num_variables: int) -> str:
        """Display name of variable `index` in a ring with `num_variables`."""

    def canonicalize(self, exponent: Iterable[int]) -> Exponent:
        """Rewrite an exponent modulo the relations."""
        return as_exponent(exponent)

    def add(self, a: Sequence[int], b: Sequence[int]) -> Exponent:
        """Exponent of the product of two monomials."""
        return self.canonicalize(x + y for x, y in zip(a, b))

    def subtract(self, a: Sequence[int], b: Sequence[int]) -> Exponent:
        """
        Exponent of the quotient of two monomials.

        No check is made that the result is non-negative.
        """
        return tuple(x - y for x, y in zip(a, b))

    def true_variables(self, num_variables: int) -> int:
        """Number of letters the symmetric group permutes."""
        return num_variables

    def check_length(self, num_variables: int) -> None:
        """Reject exponent lengths that the policy cannot interpret."""

    def __eq__(self, other) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self).__name__)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NoRelations(RelationsPolicy):
    """
    Standard variables x_1, ..., x_n with |x_i| = 1 and no relations.

    Degree is the total degree sum_i a_i and permutations act on all
    variables at once.
    """
    name = "standard"

    def degree(self, exponent: Sequence[int]) -> int:
        return sum(exponent)

    def permute(self, exponent: Sequence[int], perm: Sequence[int]) -> Exponent:
        return apply_permutation(exponent, perm)

    def max_exponent(self, num_variables: int, degree: int) -> Exponent:
        return as_exponent(np.full(num_variables, degree, dtype=np.int64))

    def variable_name(self, index: int, num_variables: int) -> str:
        return f"x_{index + 1}"


class HalfIdempotent(RelationsPolicy):
    """
    Variables x_1, ..., x_n, y_1, ..., y_n with y_i^2 = y_i.

    A monomial x_1^{a_1}···x_n^{a_n} y_1^{a_{n+1}}···y_n^{a_{2n}} is stored
    as [a_1, ..., a_{2n}]. The degrees are |x_i| = 1 and |y_i| = 0, and every
    exponent on the y half is capped at 1 whenever it is canonicalized:

        add:      [a_i + b_i (x half), max(a_i, b_i) (y half)]
        subtract: [a_i - b_i (x half), |a_i - b_i| (y half)]

    The symmetric group on n letters permutes the pairs (x_i, y_i).
    """
    name = "half-idempotent"

    def check_length(self, num_variables: int) -> None:
        if num_variables % 2 != 0:
            raise UsageError(
                f"Half-idempotent exponents need an even length, got {num_variables}"
            )

    def canonicalize(self, exponent: Iterable[int]) -> Exponent:
        values = as_exponent(exponent)
        half = len(values) // 2
        return values[:half] + tuple(min(v, 1) for v in values[half:])

    def degree(self, exponent: Sequence[int]) -> int:
        return sum(exponent[:len(exponent) // 2])

    def add(self, a: Sequence[int], b: Sequence[int]) -> Exponent:
        half = len(a) // 2
        return (tuple(x + y for x, y in zip(a[:half], b[:half]))
                + tuple(max(x, y) for x, y in zip(a[half:], b[half:])))

    def subtract(self, a: Sequence[int], b: Sequence[int]) -> Exponent:
        half = len(a) // 2
        return (tuple(x - y for x, y in zip(a[:half], b[:half]))
                + tuple(abs(x - y) for x, y in zip(a[half:], b[half:])))

    def permute(self, exponent: Sequence[int], perm: Sequence[int]) -> Exponent:
        return apply_permutation_pieces(exponent, 2, perm)

    def max_exponent(self, num_variables: int, degree: int) -> Exponent:
        self.check_length(num_variables)
        maximum = np.full(num_variables, degree, dtype=np.int64)
        maximum[num_variables // 2:] = 1
        return as_exponent(maximum)

    def true_variables(self, num_variables: int) -> int:
        return num_variables // 2

    def variable_name(self, index: int, num_variables: int) -> str:
        half = num_variables // 2
        if index < half:
            return f"x_{index + 1}"
        return f"y_{index - half + 1}"


# =============================================================================
# Shared instances
# =============================================================================

NO_RELATIONS = NoRelations()
HALF_IDEMPOTENT = HalfIdempotent()


__all__ = [
    'Exponent',
    'as_exponent',
    'weighted_degree',
    'apply_permutation',
    'apply_permutation_pieces',
    'RelationsPolicy',
    'NoRelations',
    'HalfIdempotent',
    'NO_RELATIONS',
    'HALF_IDEMPOTENT',
]
