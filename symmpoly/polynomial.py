"""
Graded polynomials in several variables with relations.

A polynomial is a sparse map from monomial keys (degree, exponent) to exact
coefficients (int or fractions.Fraction). Storing the degree alongside the
exponent makes the key itself the monomial order:

    a < b  iff  deg(a) < deg(b), or deg(a) = deg(b) and exp(a) <lex exp(b)

so the leading ("highest") term is simply the maximal key.

Two containers share one interface:
- OrderedPolynomial: keys kept sorted (bisect), O(1) highest_term,
  iteration in increasing monomial order. Needed for reproducible
  leading-term selection during decomposition.
- HashedPolynomial: plain dict, O(terms) highest_term, iteration in
  insertion order. Enough when only accumulation/equality matter.

Degrees and variable names come from the RelationsPolicy when one is
attached; generator-space polynomials instead carry explicit dimension and
name tables. Asking for a degree or a name when neither is available is a
UsageError.

Invariants maintained by every operation:
- exponents are unique and canonical under the policy
- all coefficients are non-zero ("condensation")
- all exponents have the same length (number of variables)
"""
from __future__ import annotations

import bisect
import numbers
from abc import ABC, abstractmethod
from dataclasses import dataclass
from fractions import Fraction
from typing import (
    Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union,
)

from .core import (
    Exponent,
    RelationsPolicy,
    UsageError,
    apply_permutation,
    as_exponent,
    weighted_degree,
)


Scalar = Union[int, Fraction]
Key = Tuple[int, Exponent]


# =============================================================================
# Scalars and monomials
# =============================================================================

def as_scalar(value) -> Scalar:
    """
    Coerce a coefficient to an exact scalar.

    Integers (including numpy integers) become int, rationals become
    Fraction. Floating point coefficients are rejected.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, Fraction):
        return value
    if isinstance(value, numbers.Rational):
        return Fraction(value.numerator, value.denominator)
    raise UsageError(
        f"Coefficients must be exact integers or rationals, got {type(value).__name__}"
    )


def exact_divide(a: Scalar, b: Scalar) -> Scalar:
    """
    Exact quotient a / b.

    Stays an int when both operands are ints and b divides a, otherwise
    returns a Fraction. Never loses precision.
    """
    if b == 0:
        raise ZeroDivisionError("division of a coefficient by zero")
    if isinstance(a, int) and isinstance(b, int) and a % b == 0:
        return a // b
    return Fraction(a) / Fraction(b)


def _is_scalar(value) -> bool:
    return isinstance(value, numbers.Rational)


@dataclass(frozen=True, order=True)
class Monomial:
    """
    A single term c·x^a together with its cached degree.

    Field order makes the generated comparisons follow the monomial order
    (degree first, then lexicographic exponent); the coefficient only
    breaks ties between equal shapes.
    """
    degree: int
    exponent: Exponent
    coeff: Scalar = 1

    @property
    def key(self) -> Key:
        return (self.degree, self.exponent)


# =============================================================================
# Shared polynomial interface
# =============================================================================

class Polynomial(ABC):
    """
    Abstract graded polynomial.

    Subclasses decide how keys are stored (_store/_discard), in which order
    they are visited (_iter_keys) and how the highest key is found.

    Args:
        num_variables: Length of every exponent. Inferred from the first
            inserted term (or from `dimensions`) when omitted.
        policy: RelationsPolicy supplying degrees, canonical forms,
            exponent arithmetic and default names.
        dimensions: Per-variable degrees, used when there is no policy.
        names: Per-variable display names, overriding the policy's.
    """
    ordered = True

    def __init__(self,
                 num_variables: Optional[int] = None,
                 policy: Optional[RelationsPolicy] = None,
                 dimensions: Optional[Sequence[int]] = None,
                 names: Optional[Sequence[str]] = None):
        self.policy = policy
        self.dimensions = tuple(int(d) for d in dimensions) if dimensions is not None else None
        self.names = tuple(names) if names is not None else None
        if num_variables is None and self.dimensions is not None:
            num_variables = len(self.dimensions)
        if num_variables is None and self.names is not None:
            num_variables = len(self.names)
        if num_variables is not None:
            self._check_num_variables(num_variables)
        self._num_variables = num_variables
        self._terms: Dict[Key, Scalar] = {}

    # -------------------------------------------------------------------------
    # Construction helpers
    # -------------------------------------------------------------------------

    @classmethod
    def from_terms(cls,
                   terms: Union[Mapping[Sequence[int], Scalar],
                                Iterable[Tuple[Sequence[int], Scalar]]],
                   **kwargs) -> 'Polynomial':
        """
        Build a polynomial from (exponent, coefficient) pairs.

        Unlike insert, repeated exponents are summed (after canonicalization
        by the policy) and cancelling terms are dropped.
        """
        poly = cls(**kwargs)
        items = terms.items() if isinstance(terms, Mapping) else terms
        for exponent, coeff in items:
            poly._accumulate(poly._key(exponent), as_scalar(coeff))
        return poly

    @classmethod
    def constant(cls, num_variables: int, coeff: Scalar = 1, **kwargs) -> 'Polynomial':
        """Constant polynomial `coeff` in `num_variables` variables."""
        poly = cls(num_variables=num_variables, **kwargs)
        poly.insert((0,) * num_variables, coeff)
        return poly

    @classmethod
    def monomial(cls, exponent: Sequence[int], coeff: Scalar = 1, **kwargs) -> 'Polynomial':
        """Polynomial with the single term coeff·x^exponent."""
        poly = cls(num_variables=len(exponent), **kwargs)
        poly.insert(exponent, coeff)
        return poly

    def zero(self) -> 'Polynomial':
        """Empty polynomial sharing this polynomial's configuration."""
        return type(self)(self._num_variables, self.policy, self.dimensions, self.names)

    def one(self) -> 'Polynomial':
        """Multiplicative identity with this polynomial's configuration."""
        one = self.zero()
        one.insert((0,) * self.number_of_variables, 1)
        return one

    def copy(self) -> 'Polynomial':
        poly = self.zero()
        for key, coeff in self._terms.items():
            poly._store(key, coeff)
        return poly

    def as_container(self, ordered: bool) -> 'Polynomial':
        """Copy of this polynomial in the ordered or the hashed container."""
        cls = OrderedPolynomial if ordered else HashedPolynomial
        poly = cls(self._num_variables, self.policy, self.dimensions, self.names)
        for key, coeff in self._terms.items():
            poly._store(key, coeff)
        return poly

    # -------------------------------------------------------------------------
    # Storage hooks
    # -------------------------------------------------------------------------

    @abstractmethod
    def _store(self, key: Key, coeff: Scalar) -> None:
        """Add a key that is not yet present."""

    @abstractmethod
    def _discard(self, key: Key) -> None:
        """Remove a key that is present."""

    @abstractmethod
    def _iter_keys(self) -> Iterable[Key]:
        """Keys in container order."""

    @abstractmethod
    def _highest_key(self) -> Key:
        """Maximal key of a non-empty polynomial."""

    def _clear(self) -> None:
        for key in list(self._terms):
            self._discard(key)

    def _accumulate(self, key: Key, coeff: Scalar) -> None:
        current = self._terms.get(key)
        if current is None:
            if coeff != 0:
                self._store(key, coeff)
            return
        total = current + coeff
        if total == 0:
            self._discard(key)
        else:
            self._terms[key] = total

    # -------------------------------------------------------------------------
    # Degrees, exponents and names
    # -------------------------------------------------------------------------

    def _check_num_variables(self, num_variables: int) -> None:
        if num_variables < 0:
            raise UsageError(f"Number of variables must be non-negative, got {num_variables}")
        if self.policy is not None:
            self.policy.check_length(num_variables)
        if self.dimensions is not None and len(self.dimensions) != num_variables:
            raise UsageError(
                f"{len(self.dimensions)} dimensions supplied for {num_variables} variables"
            )
        if self.names is not None and len(self.names) != num_variables:
            raise UsageError(
                f"{len(self.names)} names supplied for {num_variables} variables"
            )

    @property
    def number_of_variables(self) -> int:
        if self._num_variables is None:
            raise UsageError("Number of variables is unknown for an empty polynomial")
        return self._num_variables

    def compute_degree(self, exponent: Sequence[int]) -> int:
        """
        Degree of an exponent: from the policy, else from the dimensions.

        Raises UsageError when neither is available.
        """
        if self.policy is not None:
            return self.policy.degree(exponent)
        if self.dimensions is not None:
            return weighted_degree(exponent, self.dimensions)
        raise UsageError(
            "Cannot compute degrees: polynomial has neither a relations policy "
            "nor variable dimensions"
        )

    def _canonical(self, exponent: Iterable[int]) -> Exponent:
        if self.policy is not None:
            return self.policy.canonicalize(exponent)
        return as_exponent(exponent)

    def _key(self, exponent: Iterable[int]) -> Key:
        exponent = self._canonical(exponent)
        if self._num_variables is None:
            self._check_num_variables(len(exponent))
            self._num_variables = len(exponent)
        elif len(exponent) != self._num_variables:
            raise UsageError(
                f"Exponent {exponent} has {len(exponent)} entries, "
                f"expected {self._num_variables}"
            )
        return (self.compute_degree(exponent), exponent)

    def _multiply_exponents(self, a: Exponent, b: Exponent) -> Exponent:
        if self.policy is not None:
            return self.policy.add(a, b)
        return tuple(x + y for x, y in zip(a, b))

    def variable_name(self, index: int) -> str:
        """
        Display name of a variable: explicit names first, then the policy.

        Raises UsageError when neither is available.
        """
        if self.names is not None:
            return self.names[index]
        if self.policy is not None:
            return self.policy.variable_name(index, self.number_of_variables)
        raise UsageError(
            "Cannot print: polynomial has neither a relations policy nor variable names"
        )

    # -------------------------------------------------------------------------
    # Term access
    # -------------------------------------------------------------------------

    def insert(self, exponent: Sequence[int], coeff: Scalar) -> None:
        """
        Insert one term.

        The caller guarantees coeff != 0 and that the exponent is not already
        present; a zero coefficient or a repeated exponent is ignored.
        """
        coeff = as_scalar(coeff)
        key = self._key(exponent)
        if coeff == 0 or key in self._terms:
            return
        self._store(key, coeff)

    def highest_term(self) -> Monomial:
        """
        The leading term under (degree, lexicographic exponent) order.

        Precondition: the polynomial is non-empty.
        """
        if not self._terms:
            raise UsageError("The zero polynomial has no highest term")
        key = self._highest_key()
        return Monomial(degree=key[0], exponent=key[1], coeff=self._terms[key])

    def coefficient(self, exponent: Sequence[int]) -> Scalar:
        """Coefficient of x^exponent (0 when absent)."""
        exponent = self._canonical(exponent)
        return self._terms.get((self.compute_degree(exponent), exponent), 0)

    def degree(self) -> int:
        """Largest degree of a term (precondition: non-empty)."""
        return self.highest_term().degree

    def terms(self) -> List[Monomial]:
        return list(self)

    def __iter__(self) -> Iterator[Monomial]:
        for key in self._iter_keys():
            yield Monomial(degree=key[0], exponent=key[1], coeff=self._terms[key])

    def __len__(self) -> int:
        return len(self._terms)

    def __bool__(self) -> bool:
        return bool(self._terms)

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def _check_compatible(self, other: 'Polynomial') -> None:
        if self.policy != other.policy:
            raise UsageError(
                f"Cannot combine polynomials with policies {self.policy!r} and {other.policy!r}"
            )
        if (self._num_variables is not None and other._num_variables is not None
                and self._num_variables != other._num_variables):
            raise UsageError(
                f"Cannot combine polynomials in {self._num_variables} and "
                f"{other._num_variables} variables"
            )

    def _adopt_length(self, other: 'Polynomial') -> None:
        if self._num_variables is None:
            self._num_variables = other._num_variables

    def __iadd__(self, other: 'Polynomial') -> 'Polynomial':
        if not isinstance(other, Polynomial):
            return NotImplemented
        self._check_compatible(other)
        self._adopt_length(other)
        for key, coeff in list(other._terms.items()):
            self._accumulate(key, coeff)
        return self

    def __isub__(self, other: 'Polynomial') -> 'Polynomial':
        if not isinstance(other, Polynomial):
            return NotImplemented
        self._check_compatible(other)
        self._adopt_length(other)
        for key, coeff in list(other._terms.items()):
            self._accumulate(key, -coeff)
        return self

    def __add__(self, other: 'Polynomial') -> 'Polynomial':
        if not isinstance(other, Polynomial):
            return NotImplemented
        result = self.copy()
        result += other
        return result

    def __sub__(self, other: 'Polynomial') -> 'Polynomial':
        if not isinstance(other, Polynomial):
            return NotImplemented
        result = self.copy()
        result -= other
        return result

    def __neg__(self) -> 'Polynomial':
        return self * -1

    def _scaled(self, scalar: Scalar) -> 'Polynomial':
        scalar = as_scalar(scalar)
        result = self.zero()
        if scalar == 0:
            return result
        for key in self._iter_keys():
            result._store(key, self._terms[key] * scalar)
        return result

    def _product(self, other: 'Polynomial') -> 'Polynomial':
        self._check_compatible(other)
        result = self.zero()
        if result._num_variables is None:
            result._num_variables = other._num_variables
        if not self._terms or not other._terms:
            return result
        merged: Dict[Exponent, Scalar] = {}
        for (_, a), ca in self._terms.items():
            for (_, b), cb in other._terms.items():
                exponent = self._multiply_exponents(a, b)
                merged[exponent] = merged.get(exponent, 0) + ca * cb
        for exponent, coeff in merged.items():
            if coeff != 0:
                result._store((self.compute_degree(exponent), exponent), coeff)
        return result

    def __mul__(self, other) -> 'Polynomial':
        if isinstance(other, Polynomial):
            return self._product(other)
        if _is_scalar(other):
            return self._scaled(other)
        return NotImplemented

    def __rmul__(self, other) -> 'Polynomial':
        if _is_scalar(other):
            return self._scaled(other)
        return NotImplemented

    def __imul__(self, other) -> 'Polynomial':
        if isinstance(other, Polynomial):
            product = self._product(other)
        elif _is_scalar(other):
            product = self._scaled(other)
        else:
            return NotImplemented
        self._clear()
        self._num_variables = product._num_variables
        for key in product._iter_keys():
            self._store(key, product._terms[key])
        return self

    def __pow__(self, exponent: int) -> 'Polynomial':
        """
        Raise to a non-negative integer power by repeated multiplication.

        p**0 is the constant 1, which needs a known number of variables:
        an empty polynomial built without num_variables, dimensions or
        names raises UsageError. Negative powers are a UsageError.
        """
        if not isinstance(exponent, numbers.Integral):
            raise UsageError(f"Polynomial powers must be integers, got {exponent!r}")
        if exponent < 0:
            raise UsageError(f"Negative power {exponent} of a polynomial")
        if exponent == 0:
            return self.one()
        power = self.copy()
        for _ in range(int(exponent) - 1):
            power = power * self
        return power

    def __eq__(self, other) -> bool:
        if isinstance(other, Polynomial):
            return self._terms == other._terms
        if _is_scalar(other):
            if other == 0:
                return not self._terms
            if len(self._terms) != 1:
                return False
            ((_, exponent), coeff), = self._terms.items()
            return coeff == other and not any(exponent)
        return NotImplemented

    def __ne__(self, other) -> bool:
        equal = self.__eq__(other)
        if equal is NotImplemented:
            return equal
        return not equal

    __hash__ = None

    # -------------------------------------------------------------------------
    # Symmetric group action
    # -------------------------------------------------------------------------

    def permute(self, perm: Sequence[int]) -> 'Polynomial':
        """
        Apply a permutation of the letters to every monomial.

        Uses the policy's action (pairs (x_i, y_i) move together for the
        half-idempotent variables); without a policy all variables are
        permuted directly.
        """
        result = self.zero()
        for (_, exponent), coeff in self._terms.items():
            if self.policy is not None:
                permuted = self.policy.permute(exponent, perm)
            else:
                permuted = apply_permutation(exponent, perm)
            result._accumulate(result._key(permuted), coeff)
        return result

    def is_invariant(self, perms: Iterable[Sequence[int]]) -> bool:
        """True when every permutation in `perms` fixes the polynomial."""
        return all(self.permute(perm) == self for perm in perms)

    # -------------------------------------------------------------------------
    # Printing
    # -------------------------------------------------------------------------

    def _format_term(self, exponent: Exponent, coeff: Scalar, names) -> str:
        factors = []
        for i, power in enumerate(exponent):
            if power == 0:
                continue
            name = names(i)
            factors.append(name if power == 1 else f"{name}^{power}")
        if not factors:
            return str(coeff)
        if coeff != 1:
            factors.insert(0, str(coeff))
        return "*".join(factors)

    def to_string(self, names: Optional[Sequence[str]] = None) -> str:
        """
        Render as `coeff*var^exp*... + ...` in container order.

        Args:
            names: Variable names to use instead of the stored/policy ones.
        """
        if not self._terms:
            return "0"
        if names is not None:
            if len(names) != self.number_of_variables:
                raise UsageError(
                    f"{len(names)} names supplied for {self.number_of_variables} variables"
                )
            lookup = names.__getitem__
        else:
            lookup = self.variable_name
        return " + ".join(
            self._format_term(key[1], self._terms[key], lookup)
            for key in self._iter_keys()
        )

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        terms = ", ".join(f"{key[1]}: {self._terms[key]}" for key in self._iter_keys())
        return f"{type(self).__name__}({{{terms}}})"


# =============================================================================
# Containers
# =============================================================================

class OrderedPolynomial(Polynomial):
    """
    Polynomial whose keys are kept sorted in increasing monomial order.

    highest_term is O(1); insertion and removal are O(log n) searches plus
    a list shift.
    """
    ordered = True

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._keys: List[Key] = []

    def _store(self, key: Key, coeff: Scalar) -> None:
        self._terms[key] = coeff
        bisect.insort(self._keys, key)

    def _discard(self, key: Key) -> None:
        del self._terms[key]
        del self._keys[bisect.bisect_left(self._keys, key)]

    def _clear(self) -> None:
        self._terms.clear()
        self._keys.clear()

    def _iter_keys(self) -> Iterable[Key]:
        return list(self._keys)

    def _highest_key(self) -> Key:
        return self._keys[-1]


class HashedPolynomial(Polynomial):
    """
    Polynomial stored in an unordered dict.

    highest_term scans every key (O(n)); iteration follows insertion order.
    """
    ordered = False

    def _store(self, key: Key, coeff: Scalar) -> None:
        self._terms[key] = coeff

    def _discard(self, key: Key) -> None:
        del self._terms[key]

    def _clear(self) -> None:
        self._terms.clear()

    def _iter_keys(self) -> Iterable[Key]:
        return list(self._terms)

    def _highest_key(self) -> Key:
        return max(self._terms)


def polynomial_class(ordered: bool = True):
    """OrderedPolynomial or HashedPolynomial."""
    return OrderedPolynomial if ordered else HashedPolynomial


__all__ = [
    'Scalar',
    'Key',
    'as_scalar',
    'exact_divide',
    'Monomial',
    'Polynomial',
    'OrderedPolynomial',
    'HashedPolynomial',
    'polynomial_class',
]
