"""
Phase 4 Tests: Elementary Symmetric Basis

These tests verify the fundamental theorem of symmetric polynomials as
implemented by SymmetricBasis:
- e_i is the sum of squarefree monomials of degree i
- find_exponent is the first difference of the leading exponent
- Every symmetric polynomial round-trips through e_1..e_n
- Classical identities (Newton) come out exactly
"""
import pytest

from symmpoly import (
    NO_RELATIONS,
    DecompositionError,
    SymmetricBasis,
    UsageError,
    binomial,
    elementary_symmetric,
    symmetrize,
)
from symmpoly.symmetric import first_difference

from tests.algebra.generators import (
    generator_polynomial,
    random_generator_exponents,
    random_invariant_polynomial,
)
from tests.algebra.invariants import (
    assert_homogeneous_decomposition,
    assert_invariant_under,
    assert_reduced_round_trip,
    assert_round_trip,
)


@pytest.mark.phase4
class TestGenerators:
    """e_1..e_n and their metadata."""

    def test_names_and_dimensions(self, symmetric_basis, n):
        assert symmetric_basis.names() == [f"e_{i}" for i in range(1, n + 1)]
        assert symmetric_basis.dimensions() == list(range(1, n + 1))

    def test_elementary_term_counts(self, symmetric_basis, n):
        """e_i has C(n, i) terms, all with coefficient 1."""
        for i, generator in enumerate(symmetric_basis.generators(), start=1):
            assert len(generator) == binomial(n, i)
            assert all(t.coeff == 1 and t.degree == i for t in generator)

    def test_generators_are_symmetric(self, symmetric_basis):
        for generator in symmetric_basis.generators():
            assert_invariant_under(generator)

    def test_e2_in_three_variables(self):
        assert str(elementary_symmetric(3, 2)) == "x_2*x_3 + x_1*x_3 + x_1*x_2"

    def test_zero_variables_rejected(self):
        with pytest.raises(UsageError):
            SymmetricBasis(0)


@pytest.mark.phase4
class TestFindExponent:
    """First-difference transform."""

    def test_first_difference(self):
        assert first_difference((4, 2, 2, 1)) == (2, 0, 1, 1)
        assert first_difference((3,)) == (3,)

    def test_leading_term_of_product_matches(self, symmetric_basis, n):
        """lead(e^{find_exponent(a)}) = x^a for non-increasing a."""
        exponent = tuple(range(n, 0, -1))
        product = symmetric_basis.compute_product(symmetric_basis.find_exponent(exponent))
        assert product.highest_term().exponent == exponent


@pytest.mark.phase4
@pytest.mark.invariant
class TestDecomposition:
    """Known decompositions and round trips."""

    def test_e1_in_three_variables(self):
        """x_1 + x_2 + x_3 = e_1."""
        basis = SymmetricBasis(3)
        p = symmetrize((1, 0, 0), NO_RELATIONS)
        assert basis.decompose(p) == basis.target_monomial((1, 0, 0))

    def test_e2_in_three_variables(self):
        """x_1x_2 + x_1x_3 + x_2x_3 = e_2."""
        basis = SymmetricBasis(3)
        p = basis.origin_polynomial()
        for exponent in ((1, 1, 0), (1, 0, 1), (0, 1, 1)):
            p.insert(exponent, 1)
        assert basis.decompose(p) == basis.target_monomial((0, 1, 0))

    def test_e2_in_four_variables(self):
        """The six degree-2 squarefree monomials sum to e_2."""
        basis = SymmetricBasis(4)
        p = symmetrize((1, 1, 0, 0), NO_RELATIONS)
        assert len(p) == 6
        assert basis.decompose(p) == basis.target_monomial((0, 1, 0, 0))

    def test_newton_identities(self):
        """p_2 = e_1^2 - 2e_2, p_3 = e_1^3 - 3e_1e_2 + 3e_3."""
        basis = SymmetricBasis(3)
        p2 = basis.decompose(symmetrize((2, 0, 0), NO_RELATIONS))
        p3 = basis.decompose(symmetrize((3, 0, 0), NO_RELATIONS))
        assert p2 == generator_polynomial(basis, [(2, 0, 0), (0, 1, 0)], [1, -2])
        assert p3 == generator_polynomial(basis, [(3, 0, 0), (1, 1, 0), (0, 0, 1)], [1, -3, 3])

    def test_printed_decomposition(self):
        basis = SymmetricBasis(3)
        p2 = basis.decompose(symmetrize((2, 0, 0), NO_RELATIONS))
        assert str(p2) == "-2*e_2 + e_1^2"

    def test_random_round_trip(self, rng, symmetric_basis, n, ordered):
        for _ in range(3):
            p = random_invariant_polynomial(rng, NO_RELATIONS, n, ordered=ordered, fractional=True)
            assert_invariant_under(p)
            assert_round_trip(symmetric_basis, p)

    def test_reduced_round_trip(self, rng, symmetric_basis):
        """e_1..e_n are algebraically independent: every q is reduced."""
        exponents = random_generator_exponents(rng, symmetric_basis.number_of_generators)
        q = generator_polynomial(symmetric_basis, exponents,
                                 [i + 1 for i in range(len(exponents))])
        assert_reduced_round_trip(symmetric_basis, q)

    def test_homogeneous_input_gives_homogeneous_output(self):
        basis = SymmetricBasis(3)
        decomposition = basis.decompose(symmetrize((2, 1, 1), NO_RELATIONS))
        assert_homogeneous_decomposition(decomposition, 4)

    def test_non_symmetric_input_raises(self):
        basis = SymmetricBasis(2)
        p = basis.origin_monomial((1, 0))
        with pytest.raises(DecompositionError):
            basis.decompose(p)

    def test_hashed_and_ordered_agree(self, rng):
        p = random_invariant_polynomial(rng, NO_RELATIONS, 3)
        assert SymmetricBasis(3, ordered=True).decompose(p) == \
            SymmetricBasis(3, ordered=False).decompose(p)
