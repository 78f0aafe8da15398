"""
Tests for the symmpoly command-line interface

Tests cover:
- Term parsing
- decompose and relations sub-commands
- Demos and info run to completion
- Library errors become a non-zero exit status
"""
import pytest
from fractions import Fraction

from symmpoly import SymmetricBasis, UsageError
from symmpoly.cli import build_parser, main, parse_term


class TestParseTerm:
    """coeff:e1,e2,... terms."""

    def test_integer_coefficient(self):
        exponent, coeff = parse_term("3:1,2")
        assert exponent == (1, 2)
        assert coeff == 3 and isinstance(coeff, int)

    def test_rational_coefficient(self):
        assert parse_term("-1/2:0,1") == ((0, 1), Fraction(-1, 2))

    def test_missing_separator(self):
        with pytest.raises(UsageError):
            parse_term("3")

    def test_bad_exponent(self):
        with pytest.raises(UsageError):
            parse_term("1:a,b")


class TestCommands:
    """End-to-end sub-commands."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "symmpoly" in capsys.readouterr().out

    def test_decompose_symmetric(self, capsys):
        assert main(["decompose", "--basis", "symmetric", "-n", "3",
                     "1:1,0,0", "1:0,1,0", "1:0,0,1"]) == 0
        assert capsys.readouterr().out.strip() == "x_3 + x_2 + x_1 = e_1"

    def test_decompose_idempotent_with_verify(self, capsys):
        assert main(["decompose", "--basis", "idempotent", "-n", "2", "--verify",
                     "1:1,0,0,1", "1:0,1,1,0"]) == 0
        out = capsys.readouterr().out
        assert "= c_{1,1}" in out
        assert "Verification: True" in out

    def test_decompose_merges_repeated_terms(self, capsys):
        assert main(["decompose", "-n", "2", "--", "1:1,0", "1:0,1", "1:1,0", "-1:1,0"]) == 0
        assert capsys.readouterr().out.strip().endswith("= e_1")

    def test_decompose_negative_coefficients(self, capsys):
        """(x_1 - x_2)^2 = e_1^2 - 4 e_2."""
        assert main(["decompose", "-n", "2", "--", "1:2,0", "1:0,2", "-2:1,1"]) == 0
        assert capsys.readouterr().out.strip().endswith("= -4*e_2 + e_1^2")

    def test_decompose_non_invariant_fails(self, capsys):
        assert main(["decompose", "-n", "2", "1:1,0"]) == 1
        assert "error:" in capsys.readouterr().err

    def test_relations(self, capsys):
        assert main(["relations", "-n", "2", "--verify"]) == 0
        out = capsys.readouterr().out
        assert "a^3 = -2*a + 3*a^2" in out
        assert out.count("Verification: True") == 3

    def test_relations_on_threads(self, capsys):
        assert main(["relations", "-n", "2", "--workers", "2", "--threads"]) == 0
        assert capsys.readouterr().out.count(" = ") == 3

    def test_info(self, capsys):
        assert main(["info"]) == 0
        assert "SymmetricBasis" in capsys.readouterr().out

    def test_demo_symmetric(self, capsys):
        assert main(["demo", "symmetric"]) == 0
        assert "p_2 = -2*e_2 + e_1^2" in capsys.readouterr().out

    def test_demo_idempotent(self, capsys):
        assert main(["demo", "idempotent"]) == 0
        assert "-2*a + 3*a^2" in capsys.readouterr().out

    def test_failed_demo_verification_is_an_error(self, capsys, monkeypatch):
        monkeypatch.setattr(SymmetricBasis, "verify", lambda self, p, d=None: False)
        assert main(["demo", "symmetric"]) == 1
        assert "does not re-substitute" in capsys.readouterr().err

    def test_invalid_basis_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["decompose", "--basis", "other", "-n", "2", "1:1,0"])
