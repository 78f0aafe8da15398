"""
Combinatorial generators and symmetric group orbits.

The enumerations are thin wrappers over itertools: they are lazy, finite,
deterministic (lexicographic) and restartable by calling again.

- permutations(n): all orderings of range(n)
- combinations(n, k): increasing k-subsets of range(n)
- interpolate(minimum, maximum): every integer vector between two bounds

On top of them sit the orbit utilities used to build symmetric
polynomials from a single monomial shape, and the monomial bases of a
given degree, both for the original variables (through a relations policy)
and for generator variables (through a dimension table and a list of
relations to avoid).
"""
from __future__ import annotations

import itertools
import math
from typing import Iterable, Iterator, List, Optional, Sequence

from .core import Exponent, RelationsPolicy, UsageError, as_exponent, weighted_degree
from .polynomial import Polynomial, Scalar, polynomial_class


# =============================================================================
# Counting
# =============================================================================

def factorial(n: int) -> int:
    if n < 0:
        raise UsageError(f"factorial of negative number {n}")
    return math.factorial(n)


def binomial(n: int, k: int) -> int:
    """n choose k; zero when k is out of range."""
    if n < 0:
        raise UsageError(f"binomial with negative n = {n}")
    if k < 0 or k > n:
        return 0
    return math.comb(n, k)


# =============================================================================
# Enumerations
# =============================================================================

def permutations(n: int) -> Iterator[Exponent]:
    """All permutations of range(n) in lexicographic order."""
    if n < 0:
        raise UsageError(f"Cannot permute a negative number of letters ({n})")
    return itertools.permutations(range(n))


def combinations(n: int, k: int) -> Iterator[Exponent]:
    """
    All increasing k-element subsets of range(n), lexicographically.

    Choosing more elements than are available is a UsageError.
    """
    if n < 0 or k < 0:
        raise UsageError(f"Invalid combination sizes n={n}, k={k}")
    if k > n:
        raise UsageError(f"Cannot choose {k} elements out of {n}")
    return itertools.combinations(range(n), k)


def interpolate(minimum: Sequence[int], maximum: Sequence[int]) -> Iterator[Exponent]:
    """
    Every integer vector v with minimum <= v <= maximum componentwise.

    Produced in lexicographic order; empty when some minimum exceeds the
    matching maximum.
    """
    if len(minimum) != len(maximum):
        raise UsageError(
            f"Bounds have different lengths {len(minimum)} and {len(maximum)}"
        )
    ranges = [range(int(lo), int(hi) + 1) for lo, hi in zip(minimum, maximum)]
    return itertools.product(*ranges)


# =============================================================================
# Orbits under the symmetric group
# =============================================================================

def _default_perms(policy: RelationsPolicy, num_variables: int):
    return permutations(policy.true_variables(num_variables))


def orbit(exponent: Sequence[int], policy: RelationsPolicy,
          perms: Optional[Iterable[Sequence[int]]] = None) -> List[Exponent]:
    """
    Distinct images of an exponent under a set of permutations.

    Args:
        exponent: Exponent vector in the policy's variables.
        policy: Supplies the permutation action and canonical form.
        perms: Permutations to apply; all of S_n by default.

    Returns:
        Exponents in the order they are first reached.
    """
    exponent = policy.canonicalize(exponent)
    if perms is None:
        perms = _default_perms(policy, len(exponent))
    seen = {}
    for perm in perms:
        seen.setdefault(policy.permute(exponent, perm), None)
    return list(seen)


def max_in_orbit(exponent: Sequence[int], policy: RelationsPolicy,
                 perms: Optional[Iterable[Sequence[int]]] = None) -> Exponent:
    """Greatest exponent in the orbit (degree is constant on an orbit)."""
    exponent = policy.canonicalize(exponent)
    if perms is None:
        perms = _default_perms(policy, len(exponent))
    best = exponent
    for perm in perms:
        permuted = policy.permute(exponent, perm)
        if permuted > best:
            best = permuted
    return best


def symmetrize(exponent: Sequence[int], policy: RelationsPolicy,
               coeff: Scalar = 1, ordered: bool = True) -> Polynomial:
    """
    Orbit sum: the symmetric polynomial with the shape of one monomial.

    For example [1, 1, 0] under NoRelations gives x_1x_2 + x_1x_3 + x_2x_3.
    """
    exponent = policy.canonicalize(exponent)
    poly = polynomial_class(ordered)(len(exponent), policy)
    for image in orbit(exponent, policy):
        poly.insert(image, coeff)
    return poly


# =============================================================================
# Monomial bases
# =============================================================================

def monomial_basis(policy: RelationsPolicy, num_variables: int,
                   degree: int) -> List[Exponent]:
    """
    All canonical exponents of the given degree, lexicographically.

    Searches the box between zero and policy.max_exponent(num_variables,
    degree).
    """
    if degree < 0:
        raise UsageError(f"Degree must be non-negative, got {degree}")
    policy.check_length(num_variables)
    maximum = policy.max_exponent(num_variables, degree)
    return [
        as_exponent(e) for e in interpolate((0,) * num_variables, maximum)
        if policy.degree(e) == degree
    ]


def all_monomial_orbits(policy: RelationsPolicy, num_variables: int,
                        degree: int) -> List[List[Exponent]]:
    """The monomial basis of a degree partitioned into S_n orbits."""
    perms = list(_default_perms(policy, num_variables))
    done = set()
    orbits = []
    for exponent in monomial_basis(policy, num_variables, degree):
        if exponent in done:
            continue
        images = orbit(exponent, policy, perms)
        done.update(images)
        orbits.append(images)
    return orbits


def _contains_relation(exponent: Sequence[int], relations: Sequence[Sequence[int]]) -> bool:
    return any(all(r <= e for r, e in zip(rel, exponent)) for rel in relations)


def reduced_monomial_basis(dimensions: Sequence[int], degree: int,
                           relations: Sequence[Sequence[int]] = (),
                           maximum: Optional[Sequence[int]] = None) -> List[Exponent]:
    """
    Generator-space exponents of a degree not divisible by any relation.

    An exponent is rejected when some relation exponent is componentwise
    <= it. The search box is `maximum` when given; otherwise positive
    dimensions are bounded by degree // dimension and a zero-dimensional
    generator must be bounded by a pure power among the relations.
    """
    if degree < 0:
        raise UsageError(f"Degree must be non-negative, got {degree}")
    if maximum is None:
        bounds = []
        for i, dim in enumerate(dimensions):
            if dim > 0:
                bounds.append(degree // dim)
                continue
            powers = [rel[i] for rel in relations
                      if rel[i] > 0 and not any(rel[j] for j in range(len(rel)) if j != i)]
            if not powers:
                raise UsageError(
                    f"Generator {i} has dimension 0 and no bounding relation; "
                    "pass an explicit maximum"
                )
            bounds.append(min(powers) - 1)
        maximum = bounds
    return [
        as_exponent(e) for e in interpolate((0,) * len(dimensions), maximum)
        if weighted_degree(e, dimensions) == degree and not _contains_relation(e, relations)
    ]


__all__ = [
    'factorial',
    'binomial',
    'permutations',
    'combinations',
    'interpolate',
    'orbit',
    'max_in_orbit',
    'symmetrize',
    'monomial_basis',
    'all_monomial_orbits',
    'reduced_monomial_basis',
]
