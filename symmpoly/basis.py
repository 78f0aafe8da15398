"""
Generic basis change between a polynomial ring and a generating subring.

A PolynomialBasis holds an ordered list of generator polynomials g_1..g_m
written in the original variables, together with their degrees
("dimensions") and display names. The index of a generator is its position
in generator-space exponents: the generator-space monomial [b_1, ..., b_m]
stands for g_1^{b_1}···g_m^{b_m}.

Two inverse operations are provided:

    decompose:  polynomial in original variables -> generator space
    substitute: generator space -> polynomial in original variables

Decomposition is leading-term division. While the remainder is non-zero,
take its highest term c·x^a, ask the concrete basis for the generator
exponent b = find_exponent(a) whose product has leading monomial x^a,
record (b, c / lead(g^b)) and subtract that multiple of g^b. Every step
removes the current leading term without introducing a greater one, so
the loop terminates. A step that fails to do so means the generators do
not span the input; it raises DecompositionError instead of looping.

Subclasses only supply find_exponent (and build their generators).
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Tuple

from .core import (
    DecompositionError,
    Exponent,
    RelationsPolicy,
    UsageError,
    as_exponent,
)
from .polynomial import Polynomial, Scalar, exact_divide, polynomial_class


_logger = logging.getLogger(__name__)


class PolynomialBasis(ABC):
    """
    Abstract basis of a graded subring.

    Args:
        num_variables: Number of original variables (exponent length).
        policy: Relations policy of the original variables.
        generators: Generator polynomials in the original variables.
        dimensions: Degree of each generator.
        names: Display name of each generator.
        ordered: Container used for generator-space results
            (OrderedPolynomial when True, HashedPolynomial otherwise).
    """
    name = "basis"

    def __init__(self,
                 num_variables: int,
                 policy: RelationsPolicy,
                 generators: Sequence[Polynomial],
                 dimensions: Sequence[int],
                 names: Sequence[str],
                 ordered: bool = True):
        if not (len(generators) == len(dimensions) == len(names)):
            raise UsageError(
                f"Got {len(generators)} generators, {len(dimensions)} dimensions "
                f"and {len(names)} names"
            )
        policy.check_length(num_variables)
        for i, generator in enumerate(generators):
            if generator.policy != policy or generator.number_of_variables != num_variables:
                raise UsageError(
                    f"Generator {names[i]} is not a polynomial in the "
                    f"{num_variables} {policy.name} variables"
                )
        self.num_variables = num_variables
        self.policy = policy
        self.ordered = ordered
        self._generators: Tuple[Polynomial, ...] = tuple(generators)
        self._dimensions: Tuple[int, ...] = tuple(int(d) for d in dimensions)
        self._names: Tuple[str, ...] = tuple(names)
        self._powers: Dict[Tuple[int, int], Polynomial] = {}

    # -------------------------------------------------------------------------
    # Basis-specific contract
    # -------------------------------------------------------------------------

    @abstractmethod
    def find_exponent(self, exponent: Exponent) -> Exponent:
        """
        Generator exponent whose product has leading monomial x^exponent.

        Called with the leading exponent of the current remainder.
        """
        raise NotImplementedError

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    def generators(self) -> List[Polynomial]:
        return [g.copy() for g in self._generators]

    def dimensions(self) -> List[int]:
        return list(self._dimensions)

    def names(self) -> List[str]:
        return list(self._names)

    @property
    def number_of_generators(self) -> int:
        return len(self._generators)

    def origin_polynomial(self) -> Polynomial:
        """Empty polynomial in the original variables."""
        return polynomial_class(self.ordered)(self.num_variables, self.policy)

    def target_polynomial(self) -> Polynomial:
        """Empty polynomial in the generator variables."""
        return polynomial_class(self.ordered)(
            self.number_of_generators,
            dimensions=self._dimensions,
            names=self._names,
        )

    def origin_monomial(self, exponent: Sequence[int], coeff: Scalar = 1) -> Polynomial:
        poly = self.origin_polynomial()
        poly.insert(exponent, coeff)
        return poly

    def target_monomial(self, exponent: Sequence[int], coeff: Scalar = 1) -> Polynomial:
        poly = self.target_polynomial()
        poly.insert(exponent, coeff)
        return poly

    # -------------------------------------------------------------------------
    # Products of generators
    # -------------------------------------------------------------------------

    def _power(self, index: int, power: int) -> Polynomial:
        key = (index, power)
        if key not in self._powers:
            self._powers[key] = self._generators[index] ** power
        return self._powers[key]

    def compute_product(self, exponent: Sequence[int]) -> Polynomial:
        """
        g_1^{b_1}···g_m^{b_m} in the original variables.

        Zero exponents are skipped; the empty product is the constant 1.
        """
        exponent = as_exponent(exponent)
        if len(exponent) != self.number_of_generators:
            raise UsageError(
                f"Generator exponent {exponent} has {len(exponent)} entries, "
                f"expected {self.number_of_generators}"
            )
        product = self.origin_monomial((0,) * self.num_variables)
        for i, power in enumerate(exponent):
            if power < 0:
                raise UsageError(f"Negative power {power} of generator {self._names[i]}")
            if power:
                product = product * self._power(i, power)
        return product

    # -------------------------------------------------------------------------
    # Basis change
    # -------------------------------------------------------------------------

    def _check_origin(self, polynomial: Polynomial) -> None:
        if polynomial.policy != self.policy:
            raise UsageError(
                f"{type(self).__name__} decomposes {self.policy.name} polynomials, "
                f"got policy {polynomial.policy!r}"
            )
        if polynomial and polynomial.number_of_variables != self.num_variables:
            raise UsageError(
                f"Expected a polynomial in {self.num_variables} variables, "
                f"got {polynomial.number_of_variables}"
            )

    def decompose(self, polynomial: Polynomial) -> Polynomial:
        """
        Rewrite a polynomial in the original variables over the generators.

        The zero polynomial decomposes to zero.

        Raises:
            DecompositionError: find_exponent produced an invalid exponent,
                or the matching generator product does not cancel the
                leading term (the generators do not span the input).
        """
        self._check_origin(polynomial)
        result = self.target_polynomial()
        remainder = polynomial.as_container(ordered=True)
        steps = 0
        while remainder:
            leading = remainder.highest_term()
            exponent = as_exponent(self.find_exponent(leading.exponent))
            if len(exponent) != self.number_of_generators or any(e < 0 for e in exponent):
                raise DecompositionError(
                    f"{type(self).__name__}.find_exponent({leading.exponent}) "
                    f"returned invalid generator exponent {exponent}"
                )
            product = self.compute_product(exponent)
            top = product.highest_term()
            if top.key != leading.key:
                raise DecompositionError(
                    f"Generator product {exponent} has leading exponent {top.exponent}, "
                    f"cannot cancel {leading.exponent}"
                )
            coeff = exact_divide(leading.coeff, top.coeff)
            _logger.debug("step %d: leading %s -> generators %s, coeff %s",
                          steps, leading.exponent, exponent, coeff)
            result.insert(exponent, coeff)
            remainder -= product * coeff
            steps += 1
        _logger.debug("decomposed %d terms into %d generator terms in %d steps",
                      len(polynomial), len(result), steps)
        return result

    def substitute(self, polynomial: Polynomial) -> Polynomial:
        """Expand a generator-space polynomial in the original variables."""
        if polynomial and polynomial.number_of_variables != self.number_of_generators:
            raise UsageError(
                f"Expected a polynomial in {self.number_of_generators} generators, "
                f"got {polynomial.number_of_variables} variables"
            )
        result = self.origin_polynomial()
        for term in polynomial:
            result += self.compute_product(term.exponent) * term.coeff
        return result

    def verify(self, polynomial: Polynomial,
               decomposition: Optional[Polynomial] = None) -> bool:
        """True when substituting the decomposition gives back the polynomial."""
        if decomposition is None:
            decomposition = self.decompose(polynomial)
        return self.substitute(decomposition) == polynomial

    def relation_exponents(self) -> List[Exponent]:
        """Generator exponents of the relation left-hand sides, in order."""
        raise UsageError(f"{type(self).__name__} defines no relations among its generators")

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(num_variables={self.num_variables}, "
                f"generators={list(self._names)})")


__all__ = [
    'PolynomialBasis',
]
