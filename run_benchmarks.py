#!/usr/bin/env python3
"""
Main Benchmark Runner for Basis Changes

Times decomposition of random invariant polynomials and relation
enumeration for increasing numbers of letters, comparing the ordered and
hashed polynomial containers.

Usage:
    python run_benchmarks.py --decompose         # Decomposition timings
    python run_benchmarks.py --relations         # Relation enumeration timings
    python run_benchmarks.py --quick             # Quick test run
    python run_benchmarks.py --relations --workers 4
"""
import argparse
import sys
import time
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))


def _timed(fn, *args, **kwargs):
    start = time.perf_counter()
    result = fn(*args, **kwargs)
    return result, time.perf_counter() - start


def run_decomposition_benchmarks(max_n: int, n_trials: int, seed: int):
    """Decompose random invariant polynomials with both containers."""
    print("\n" + "=" * 70)
    print("DECOMPOSITION BENCHMARKS")
    print("=" * 70)

    from symmpoly import HALF_IDEMPOTENT, NO_RELATIONS, HalfIdempotentBasis, SymmetricBasis
    from tests.algebra.generators import random_invariant_polynomial

    rng = np.random.default_rng(seed)
    print(f"\n{'basis':<16}{'n':>4}{'ordered (ms)':>16}{'hashed (ms)':>16}{'terms':>10}")

    for n in range(1, max_n + 1):
        for name, basis_cls, policy, num_variables in (
            ('symmetric', SymmetricBasis, NO_RELATIONS, n),
            ('half-idempotent', HalfIdempotentBasis, HALF_IDEMPOTENT, 2 * n),
        ):
            timings = {}
            terms = []
            for ordered in (True, False):
                basis = basis_cls(n, ordered=ordered)
                total = 0.0
                for _ in range(n_trials):
                    p = random_invariant_polynomial(rng, policy, num_variables, ordered=ordered)
                    decomposition, elapsed = _timed(basis.decompose, p)
                    total += elapsed
                    terms.append(len(decomposition))
                timings[ordered] = total / n_trials * 1000
            print(f"{name:<16}{n:>4}{timings[True]:>16.3f}{timings[False]:>16.3f}"
                  f"{np.mean(terms):>10.1f}")


def run_relation_benchmarks(max_n: int, workers: int, threads: bool, verify: bool):
    """Enumerate all twisted Chern relations for n = 1..max_n."""
    print("\n" + "=" * 70)
    print("RELATION ENUMERATION BENCHMARKS")
    print("=" * 70)

    from symmpoly import EngineConfig, HalfIdempotentBasis, enumerate_relations

    config = EngineConfig(workers=workers, use_processes=not threads, verify=verify)
    print(f"\nworkers={workers} ({'threads' if threads else 'processes'}), verify={verify}")
    print(f"\n{'n':>4}{'generators':>12}{'relations':>12}{'build (s)':>12}{'enumerate (s)':>16}")

    for n in range(1, max_n + 1):
        basis, build_time = _timed(HalfIdempotentBasis, n)
        results, enum_time = _timed(enumerate_relations, basis, config)
        print(f"{n:>4}{basis.number_of_generators:>12}{len(results):>12}"
              f"{build_time:>12.3f}{enum_time:>16.3f}")


def main():
    parser = argparse.ArgumentParser(
        description='Basis Change Benchmark Runner',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_benchmarks.py --decompose             Decomposition timings
  python run_benchmarks.py --relations --max-n 4   Relations up to n = 4
  python run_benchmarks.py --quick                 Quick test run
"""
    )

    parser.add_argument('--decompose', action='store_true',
                        help='Time decompositions')
    parser.add_argument('--relations', action='store_true',
                        help='Time relation enumeration')
    parser.add_argument('--quick', action='store_true',
                        help='Quick test with reduced settings')
    parser.add_argument('--max-n', type=int, default=4,
                        help='Largest number of letters')
    parser.add_argument('--trials', type=int, default=5,
                        help='Random polynomials per configuration')
    parser.add_argument('--workers', type=int, default=1,
                        help='Worker pool size for relations')
    parser.add_argument('--threads', action='store_true',
                        help='Use threads instead of processes')
    parser.add_argument('--verify', action='store_true',
                        help='Verify every relation')
    parser.add_argument('--seed', type=int, default=42)

    args = parser.parse_args()

    # Default: show help if no args
    if not any([args.decompose, args.relations, args.quick]):
        parser.print_help()
        print("\nRunning quick benchmark as default...")
        args.quick = True

    # Import numpy here (after argparse)
    global np
    import numpy as np

    if args.quick:
        args.max_n = min(args.max_n, 3)
        args.trials = min(args.trials, 2)
        args.decompose = args.relations = True

    if args.decompose:
        run_decomposition_benchmarks(args.max_n, args.trials, args.seed)

    if args.relations:
        run_relation_benchmarks(args.max_n, args.workers, args.threads, args.verify)

    print("\n" + "=" * 70)
    print("COMPLETE")
    print("=" * 70)


if __name__ == '__main__':
    main()
