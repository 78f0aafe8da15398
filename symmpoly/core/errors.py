"""
Error taxonomy for symmpoly.

Every failure in this library means the algebra is wrong, so none of these
are meant to be caught and recovered from inside the library:

- UsageError: a precondition was violated by the caller (missing variable
  names or dimensions, negative powers, too many combination choices, ...)
- DecompositionError: the division algorithm could not make progress,
  i.e. the generating set does not span the input
- RelationVerificationError: a relation failed its round-trip check
"""


class SymmetricPolynomialError(Exception):
    """Base class for all symmpoly errors."""


class UsageError(SymmetricPolynomialError, ValueError):
    """Raised when a caller violates a documented precondition."""


class DecompositionError(SymmetricPolynomialError, ArithmeticError):
    """Raised when leading-term elimination stops making progress."""


class RelationVerificationError(SymmetricPolynomialError, AssertionError):
    """Raised when a relation among generators fails re-substitution."""


__all__ = [
    'SymmetricPolynomialError',
    'UsageError',
    'DecompositionError',
    'RelationVerificationError',
]
