"""
Tests for relation enumeration and engine configuration

Tests cover:
- Right-hand sides of the two-letter relations
- Verification by re-substitution and its failure mode
- Thread and process pools give the same ordered results
- Report formatting
- EngineConfig validation
"""
import pytest
from fractions import Fraction

import symmpoly.relations as relations_module
from symmpoly import (
    EngineConfig,
    HalfIdempotentBasis,
    RelationVerificationError,
    SymmetricBasis,
    UsageError,
    enumerate_relations,
    format_relations,
)
from symmpoly.relations import evaluate_relation, format_relation, verify_relation


@pytest.fixture
def basis():
    return HalfIdempotentBasis(2)


class TestEvaluation:
    """Right-hand sides of a^3, a c_{1,1}, c_{1,1}^2 for n = 2."""

    def test_cube_of_a(self, basis):
        relation = evaluate_relation(basis, 0, (3, 0, 0, 0))
        assert str(relation.rhs) == "-2*a + 3*a^2"

    def test_a_times_twisted(self, basis):
        """a c_{1,1} = 1/2 a^2 c_1 - 1/2 a c_1 + c_{1,1}."""
        relation = evaluate_relation(basis, 1, (1, 0, 0, 1))
        assert relation.rhs.coefficient((2, 1, 0, 0)) == Fraction(1, 2)
        assert relation.rhs.coefficient((1, 1, 0, 0)) == Fraction(-1, 2)
        assert relation.rhs.coefficient((0, 0, 0, 1)) == 1
        assert len(relation.rhs) == 3

    def test_relation_verifies(self, basis):
        for index, lhs in enumerate(basis.relation_exponents()):
            assert verify_relation(basis, evaluate_relation(basis, index, lhs))


class TestEnumeration:
    """enumerate_relations in its sequential and pooled forms."""

    def test_sequential(self, basis):
        results = enumerate_relations(basis)
        assert [r.lhs for r in results] == basis.relation_exponents()
        assert [r.index for r in results] == list(range(len(results)))
        assert all(r.verified for r in results)

    def test_without_verification(self, basis):
        results = enumerate_relations(basis, EngineConfig(verify=False))
        assert all(r.verified is None for r in results)

    def test_thread_pool_matches_sequential(self):
        basis = HalfIdempotentBasis(3)
        sequential = enumerate_relations(basis, EngineConfig(verify=False))
        pooled = enumerate_relations(basis, EngineConfig(workers=3, use_processes=False))
        assert [r.lhs for r in pooled] == [r.lhs for r in sequential]
        assert [r.rhs for r in pooled] == [r.rhs for r in sequential]

    @pytest.mark.slow
    def test_process_pool_matches_sequential(self):
        basis = HalfIdempotentBasis(3)
        sequential = enumerate_relations(basis, EngineConfig(verify=False))
        pooled = enumerate_relations(basis, EngineConfig(workers=2, use_processes=True))
        assert [r.rhs for r in pooled] == [r.rhs for r in sequential]
        assert all(r.verified for r in pooled)

    def test_explicit_exponents(self):
        """Any basis can evaluate explicit generator monomials."""
        basis = SymmetricBasis(2)
        results = enumerate_relations(basis, exponents=[(2, 0), (0, 1)])
        assert results[0].rhs == basis.target_monomial((2, 0))
        assert results[1].rhs == basis.target_monomial((0, 1))

    def test_basis_without_relations_rejected(self):
        with pytest.raises(UsageError, match="no relations"):
            enumerate_relations(SymmetricBasis(2))

    def test_failed_verification_raises(self, basis, monkeypatch):
        monkeypatch.setattr(relations_module, "verify_relation", lambda b, r: False)
        with pytest.raises(RelationVerificationError):
            enumerate_relations(basis)


class TestFormatting:
    """Text report of relations."""

    def test_format_relation(self, basis):
        relation = evaluate_relation(basis, 0, (3, 0, 0, 0))
        assert format_relation(basis, relation) == "a^3 = -2*a + 3*a^2"

    def test_format_relations_with_verification(self, basis):
        text = format_relations(basis, enumerate_relations(basis))
        lines = text.splitlines()
        assert lines[0] == "a^3 = -2*a + 3*a^2"
        assert lines[1] == "Verification: True"
        assert lines[2].startswith("a*c_{1,1} = ")
        assert len(lines) == 6

    def test_format_relations_without_verification(self, basis):
        text = format_relations(basis, enumerate_relations(basis, EngineConfig(verify=False)))
        assert "Verification" not in text
        assert len(text.splitlines()) == 3


class TestEngineConfig:
    """Configuration validation."""

    def test_defaults(self):
        config = EngineConfig()
        assert config.ordered and config.verify
        assert config.workers == 1
        assert not config.parallel

    def test_log_level_normalized(self):
        assert EngineConfig(log_level="info").log_level == "INFO"

    def test_invalid_log_level(self):
        with pytest.raises(UsageError):
            EngineConfig(log_level="chatty")

    def test_invalid_workers(self):
        with pytest.raises(UsageError):
            EngineConfig(workers=0)
