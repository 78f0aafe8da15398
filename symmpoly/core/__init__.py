"""
Core building blocks shared by every polynomial and basis.

This module provides:
- RelationsPolicy: How exponent vectors are graded, reduced and permuted
- NoRelations / HalfIdempotent: The two concrete policies
- Error types: UsageError, DecompositionError, RelationVerificationError
"""
from .errors import (
    SymmetricPolynomialError,
    UsageError,
    DecompositionError,
    RelationVerificationError,
)
from .policies import (
    Exponent,
    as_exponent,
    weighted_degree,
    apply_permutation,
    apply_permutation_pieces,
    RelationsPolicy,
    NoRelations,
    HalfIdempotent,
    NO_RELATIONS,
    HALF_IDEMPOTENT,
)

__all__ = [
    'SymmetricPolynomialError',
    'UsageError',
    'DecompositionError',
    'RelationVerificationError',
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
