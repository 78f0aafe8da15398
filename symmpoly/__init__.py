"""
Basis Changes for Graded Polynomial Rings

This package rewrites invariant polynomials in terms of a minimal set of
invariant generators, expands generator polynomials back into the original
variables, and enumerates the relations among the generators. It provides:

Core Types (symmpoly.core):
    - RelationsPolicy: Grading, reduction and S_n action on exponents
    - NoRelations: x_1..x_n with |x_i| = 1
    - HalfIdempotent: x_1..x_n, y_1..y_n with y_i^2 = y_i
    - UsageError, DecompositionError, RelationVerificationError

Polynomials (symmpoly.polynomial):
    - Polynomial: Sparse graded polynomial with exact coefficients
    - OrderedPolynomial: Sorted container, O(1) leading term
    - HashedPolynomial: Dict container, O(terms) leading term

Bases (symmpoly.basis, symmpoly.symmetric, symmpoly.half_idempotent):
    - PolynomialBasis: Leading-term decomposition and substitution
    - SymmetricBasis: Elementary symmetric polynomials e_1..e_n
    - HalfIdempotentBasis: a, Chern classes c_i, twisted classes c_{s,j}

Relations (symmpoly.relations):
    - enumerate_relations: Evaluate and verify all generator relations

Usage:
    from symmpoly import SymmetricBasis, HalfIdempotentBasis
    basis = SymmetricBasis(3)
    p = basis.origin_polynomial()
    p.insert([1, 0, 0], 1); p.insert([0, 1, 0], 1); p.insert([0, 0, 1], 1)
    print(basis.decompose(p))   # e_1
"""

# =============================================================================
# Core Types (symmpoly.core)
# =============================================================================
from .core import (
    SymmetricPolynomialError,
    UsageError,
    DecompositionError,
    RelationVerificationError,
    Exponent,
    RelationsPolicy,
    NoRelations,
    HalfIdempotent,
    NO_RELATIONS,
    HALF_IDEMPOTENT,
)

# =============================================================================
# Polynomials (symmpoly.polynomial)
# =============================================================================
from .polynomial import (
    Monomial,
    Polynomial,
    OrderedPolynomial,
    HashedPolynomial,
    polynomial_class,
    exact_divide,
)

# =============================================================================
# Combinatorics (symmpoly.combinatorics)
# =============================================================================
from .combinatorics import (
    permutations,
    combinations,
    binomial,
    factorial,
    orbit,
    max_in_orbit,
    symmetrize,
    monomial_basis,
    all_monomial_orbits,
    reduced_monomial_basis,
)

# =============================================================================
# Bases
# =============================================================================
from .basis import PolynomialBasis
from .symmetric import SymmetricBasis, elementary_symmetric
from .half_idempotent import HalfIdempotentBasis

# =============================================================================
# Relations and configuration
# =============================================================================
from .config import EngineConfig
from .relations import (
    Relation,
    enumerate_relations,
    format_relations,
)


__version__ = "0.1.0"

__all__ = [
    # Core
    'SymmetricPolynomialError',
    'UsageError',
    'DecompositionError',
    'RelationVerificationError',
    'Exponent',
    'RelationsPolicy',
    'NoRelations',
    'HalfIdempotent',
    'NO_RELATIONS',
    'HALF_IDEMPOTENT',
    # Polynomials
    'Monomial',
    'Polynomial',
    'OrderedPolynomial',
    'HashedPolynomial',
    'polynomial_class',
    'exact_divide',
    # Combinatorics
    'permutations',
    'combinations',
    'binomial',
    'factorial',
    'orbit',
    'max_in_orbit',
    'symmetrize',
    'monomial_basis',
    'all_monomial_orbits',
    'reduced_monomial_basis',
    # Bases
    'PolynomialBasis',
    'SymmetricBasis',
    'elementary_symmetric',
    'HalfIdempotentBasis',
    # Relations
    'EngineConfig',
    'Relation',
    'enumerate_relations',
    'format_relations',
]
