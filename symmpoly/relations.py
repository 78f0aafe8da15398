"""
Enumeration and verification of generator relations.

For every relation left-hand side L (a generator-space monomial) the
right-hand side is obtained by expanding L in the original variables and
decomposing the result again:

    rhs = decompose(substitute(L))

The identity holds by construction when the basis is correct; verification
re-expands the right-hand side and compares with the expansion of L.

Each relation is independent, so evaluation is a map over the list of
left-hand sides. With EngineConfig.workers > 1 the map runs on a
concurrent.futures pool (processes by default, threads on request), each
task writing its own slot of a pre-sized result list. Verification and
reporting always happen afterwards, in relation order.
"""
from __future__ import annotations

import logging
import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from functools import partial
from typing import List, Optional, Sequence, Tuple

from .basis import PolynomialBasis
from .config import EngineConfig
from .core import Exponent, RelationVerificationError
from .polynomial import Polynomial


_logger = logging.getLogger(__name__)


@dataclass
class Relation:
    """lhs = rhs among the generators of a basis."""
    index: int
    lhs: Exponent
    rhs: Polynomial
    verified: Optional[bool] = None


# =============================================================================
# Evaluation
# =============================================================================

def evaluate_relation(basis: PolynomialBasis, index: int, lhs: Sequence[int]) -> Relation:
    """Decompose the expansion of one relation left-hand side."""
    expanded = basis.compute_product(lhs)
    return Relation(index=index, lhs=tuple(lhs), rhs=basis.decompose(expanded))


def verify_relation(basis: PolynomialBasis, relation: Relation) -> bool:
    """substitute(rhs) == substitute(lhs)"""
    return basis.substitute(relation.rhs) == basis.compute_product(relation.lhs)


_worker_basis: Optional[PolynomialBasis] = None


def _init_worker(basis: PolynomialBasis) -> None:
    global _worker_basis
    _worker_basis = basis


def _evaluate_in_worker(task: Tuple[int, Exponent]) -> Relation:
    index, lhs = task
    return evaluate_relation(_worker_basis, index, lhs)


def _evaluate_in_thread(basis: PolynomialBasis, task: Tuple[int, Exponent]) -> Relation:
    index, lhs = task
    return evaluate_relation(basis, index, lhs)


def _evaluate_parallel(basis: PolynomialBasis, tasks, config: EngineConfig) -> List[Relation]:
    results: List[Optional[Relation]] = [None] * len(tasks)
    if config.use_processes:
        executor = ProcessPoolExecutor(max_workers=config.workers,
                                       initializer=_init_worker, initargs=(basis,))
        worker = _evaluate_in_worker
    else:
        executor = ThreadPoolExecutor(max_workers=config.workers)
        worker = partial(_evaluate_in_thread, basis)
    with executor:
        futures = {executor.submit(worker, task): task[0] for task in tasks}
        for future, index in futures.items():
            results[index] = future.result()
    return results


def enumerate_relations(basis: PolynomialBasis,
                        config: Optional[EngineConfig] = None,
                        exponents: Optional[Sequence[Sequence[int]]] = None) -> List[Relation]:
    """
    Evaluate (and optionally verify) every relation of a basis.

    Args:
        basis: Basis providing relation_exponents() unless `exponents`
            is given.
        config: Worker and verification settings; defaults to a
            sequential run with verification.
        exponents: Explicit left-hand sides to evaluate instead.

    Returns:
        Relations in left-hand side order.

    Raises:
        RelationVerificationError: a relation failed re-substitution.
    """
    config = config or EngineConfig()
    if exponents is None:
        exponents = basis.relation_exponents()
    tasks = [(i, tuple(int(e) for e in lhs)) for i, lhs in enumerate(exponents)]

    start = time.perf_counter()
    if config.parallel and len(tasks) > 1:
        relations = _evaluate_parallel(basis, tasks, config)
    else:
        relations = [evaluate_relation(basis, i, lhs) for i, lhs in tasks]
    _logger.info("evaluated %d relations in %.3fs (workers=%d)",
                 len(relations), time.perf_counter() - start, config.workers)

    if config.verify:
        for relation in relations:
            relation.verified = verify_relation(basis, relation)
            if not relation.verified:
                raise RelationVerificationError(
                    f"Relation {format_relation(basis, relation)} does not re-substitute "
                    "to its left-hand side"
                )
        _logger.info("verified %d relations", len(relations))
    return relations


# =============================================================================
# Reporting
# =============================================================================

def format_relation(basis: PolynomialBasis, relation: Relation) -> str:
    lhs = basis.target_monomial(relation.lhs)
    return f"{lhs} = {relation.rhs}"


def format_relations(basis: PolynomialBasis, relations: Sequence[Relation]) -> str:
    """One `lhs = rhs` line per relation, followed by its verification."""
    lines = []
    for relation in relations:
        lines.append(format_relation(basis, relation))
        if relation.verified is not None:
            lines.append(f"Verification: {relation.verified}")
    return "\n".join(lines)


__all__ = [
    'Relation',
    'evaluate_relation',
    'verify_relation',
    'enumerate_relations',
    'format_relation',
    'format_relations',
]
