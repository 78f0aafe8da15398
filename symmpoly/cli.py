#!/usr/bin/env python3
"""
symmpoly CLI - Basis Changes for Graded Polynomial Rings

Command-line interface for decomposing invariant polynomials, printing the
relations among generators, running demos and testing invariants.

Usage:
    symmpoly info                               Show package info
    symmpoly demo symmetric                     Elementary symmetric demo
    symmpoly demo idempotent                    Half-idempotent demo
    symmpoly decompose --basis symmetric -n 3 1:1,0,0 1:0,1,0 1:0,0,1
    symmpoly decompose -n 2 -- 1:2,0 1:0,2 -2:1,1
    symmpoly relations -n 3 --verify            Twisted Chern relations
    symmpoly check invariants                   Run invariant checks
"""
import argparse
import logging
import subprocess
import sys
from fractions import Fraction

from .config import EngineConfig
from .core import RelationVerificationError, SymmetricPolynomialError, UsageError


_logger = logging.getLogger(__name__)


def parse_term(text: str):
    """Parse `coeff:e1,e2,...` into (exponent, coefficient)."""
    coeff_text, sep, exponent_text = text.partition(':')
    if not sep:
        raise UsageError(f"Term {text!r} is not of the form coeff:e1,e2,...")
    try:
        coeff = Fraction(coeff_text)
        exponent = tuple(int(e) for e in exponent_text.split(','))
    except ValueError:
        raise UsageError(f"Cannot parse term {text!r}") from None
    if coeff.denominator == 1:
        coeff = coeff.numerator
    return exponent, coeff


def _build_basis(name: str, n: int, config: EngineConfig):
    from symmpoly import HalfIdempotentBasis, SymmetricBasis

    if name == 'symmetric':
        return SymmetricBasis(n, ordered=config.ordered)
    return HalfIdempotentBasis(n, ordered=config.ordered)


def _check_verified(basis, poly, decomposition):
    if not basis.verify(poly, decomposition):
        raise RelationVerificationError(
            f"{decomposition} does not re-substitute to {poly}"
        )


def _config_from_args(args) -> EngineConfig:
    return EngineConfig(
        ordered=not getattr(args, 'hashed', False),
        workers=getattr(args, 'workers', 1),
        use_processes=not getattr(args, 'threads', False),
        verify=getattr(args, 'verify', False),
        log_level=args.log_level,
    )


def cmd_info(args):
    """Show package information and available components."""
    print("""
╔══════════════════════════════════════════════════════════════════════╗
║                               symmpoly                               ║
║              Basis Changes for Graded Polynomial Rings               ║
╚══════════════════════════════════════════════════════════════════════╝

Relations Policies:
  • NoRelations       - x_1..x_n, |x_i| = 1
  • HalfIdempotent    - x_1..x_n, y_1..y_n with y_i^2 = y_i, |y_i| = 0

Polynomials:
  • OrderedPolynomial - Sorted terms, O(1) leading term
  • HashedPolynomial  - Dict of terms, O(terms) leading term

Bases:
  • SymmetricBasis       - e_1..e_n (elementary symmetric)
  • HalfIdempotentBasis  - a, c_1..c_n, c_{s,j} (twisted Chern classes)

Quick Start:
    from symmpoly import SymmetricBasis

    basis = SymmetricBasis(3)
    p = basis.origin_polynomial()
    for e in ([2, 0, 0], [0, 2, 0], [0, 0, 2]):
        p.insert(e, 1)
    print(basis.decompose(p))    # -2*e_2 + e_1^2
""")


def cmd_demo_symmetric(args):
    """Decompose power sums over the elementary symmetric polynomials."""
    from symmpoly import SymmetricBasis, symmetrize, NO_RELATIONS

    print("\n=== Elementary Symmetric Demo ===\n")

    n = args.n or 3
    basis = SymmetricBasis(n)
    print(f"Generators for n={n}:")
    for name, generator in zip(basis.names(), basis.generators()):
        print(f"  {name} = {generator}")

    print("\nPower sums p_k = x_1^k + ... + x_n^k:")
    for k in range(1, n + 1):
        p = symmetrize([k] + [0] * (n - 1), NO_RELATIONS)
        decomposition = basis.decompose(p)
        print(f"  p_{k} = {decomposition}")
        _check_verified(basis, p, decomposition)

    print("\n✓ Every decomposition re-substitutes to its input")


def cmd_demo_idempotent(args):
    """Decompose half-idempotent invariants over a, c_i and c_{s,j}."""
    from symmpoly import HalfIdempotentBasis, symmetrize, HALF_IDEMPOTENT

    print("\n=== Half-Idempotent Demo ===\n")

    n = args.n or 2
    basis = HalfIdempotentBasis(n)
    print(f"Generators for n={n}:")
    for name, generator in zip(basis.names(), basis.generators()):
        print(f"  {name} = {generator}")

    a = basis.generators()[0]
    cube = a ** 3
    print(f"\na^3 expands to {cube}")
    print(f"  and decomposes to {basis.decompose(cube)}")

    shape = [1] + [0] * (n - 1) + [0] + [1] * (n - 1)
    p = symmetrize(shape, HALF_IDEMPOTENT)
    decomposition = basis.decompose(p)
    print(f"\nOrbit sum of {basis.origin_monomial(shape)}:")
    print(f"  {p}")
    print(f"  = {decomposition}")
    _check_verified(basis, p, decomposition)

    print("\n✓ Idempotent relations y_i^2 = y_i are applied on every product")


def cmd_decompose(args):
    """Decompose a polynomial given as a list of terms."""
    config = _config_from_args(args)
    basis = _build_basis(args.basis, args.n, config)
    poly = basis.origin_polynomial()
    for text in args.terms:
        exponent, coeff = parse_term(text)
        poly += basis.origin_monomial(exponent, coeff)

    decomposition = basis.decompose(poly)
    print(f"{poly} = {decomposition}")
    if args.verify:
        print(f"Verification: {basis.verify(poly, decomposition)}")
    return 0


def cmd_relations(args):
    """Print every relation among the twisted Chern generators."""
    from symmpoly import HalfIdempotentBasis, enumerate_relations, format_relations

    config = _config_from_args(args)
    basis = HalfIdempotentBasis(args.n, ordered=config.ordered)
    relations = enumerate_relations(basis, config)
    print(format_relations(basis, relations))
    return 0


def cmd_check_invariants(args):
    """Run mathematical invariant checks."""
    print("\n=== Running Mathematical Invariant Checks ===\n")

    result = subprocess.run(
        [sys.executable, "-m", "pytest", "tests/", "-m", "invariant", "-v", "--tb=short"],
        cwd=".",
        capture_output=False
    )

    return result.returncode


def build_parser():
    parser = argparse.ArgumentParser(
        prog='symmpoly',
        description='symmpoly - Basis Changes for Graded Polynomial Rings',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  symmpoly info                                         Show available components
  symmpoly demo symmetric                               Power sums over e_i
  symmpoly demo idempotent -n 3                         Twisted Chern classes
  symmpoly decompose --basis symmetric -n 2 1:2,0 1:0,2  x_1^2 + x_2^2
  symmpoly decompose -n 2 -- 1:2,0 1:0,2 -2:1,1         Negative terms after --
  symmpoly relations -n 3 --verify                      Relations with checks
  symmpoly check invariants                             Run math invariant tests
"""
    )
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging verbosity')

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # info command
    subparsers.add_parser('info', help='Show package info and components')

    # demo command
    demo_parser = subparsers.add_parser('demo', help='Run demos')
    demo_parser.add_argument('name', choices=['symmetric', 'idempotent'],
                             help='Demo to run')
    demo_parser.add_argument('-n', type=int, default=None,
                             help='Number of letters')

    # decompose command
    decompose_parser = subparsers.add_parser('decompose', help='Decompose a polynomial')
    decompose_parser.add_argument('--basis', choices=['symmetric', 'idempotent'],
                                  default='symmetric', help='Target basis')
    decompose_parser.add_argument('-n', type=int, required=True,
                                  help='Number of letters')
    decompose_parser.add_argument('--verify', action='store_true',
                                  help='Re-substitute the decomposition')
    decompose_parser.add_argument('--hashed', action='store_true',
                                  help='Use hashed containers for the result')
    decompose_parser.add_argument('terms', nargs='+', metavar='TERM',
                                  help='Term coeff:e1,e2,... (2n exponents for idempotent); '
                                       'put -- before terms with negative coefficients')

    # relations command
    relations_parser = subparsers.add_parser('relations', help='Print generator relations')
    relations_parser.add_argument('-n', type=int, required=True,
                                  help='Number of letters')
    relations_parser.add_argument('--verify', action='store_true',
                                  help='Verify every relation by re-substitution')
    relations_parser.add_argument('--workers', type=int, default=1,
                                  help='Worker pool size')
    relations_parser.add_argument('--threads', action='store_true',
                                  help='Use threads instead of processes')
    relations_parser.add_argument('--hashed', action='store_true',
                                  help='Use hashed containers for the result')

    # check command
    check_parser = subparsers.add_parser('check', help='Run verification checks')
    check_parser.add_argument('what', choices=['invariants'],
                              help='What to check')

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    EngineConfig(log_level=args.log_level).configure_logging()

    try:
        if args.command == 'info':
            cmd_info(args)
        elif args.command == 'demo':
            if args.name == 'symmetric':
                cmd_demo_symmetric(args)
            elif args.name == 'idempotent':
                cmd_demo_idempotent(args)
        elif args.command == 'decompose':
            return cmd_decompose(args)
        elif args.command == 'relations':
            return cmd_relations(args)
        elif args.command == 'check':
            if args.what == 'invariants':
                return cmd_check_invariants(args)
    except SymmetricPolynomialError as exc:
        _logger.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
