"""
Crossover operator for the squad GA.

Single-point splice of two parents followed by a refill repair. A child
that is still invalid after repair is abandoned in favour of a clone of
one of its parents, so crossover never returns an invalid squad.
"""

import logging
from typing import Dict, List, Tuple

import numpy as np

from .config import GAConfig
from .constraints import is_valid
from .data_models import CandidatePool, Squad


logger = logging.getLogger(__name__)


def splice_parents(parent_a: Squad, parent_b: Squad, split: int) -> List[int]:
    """
    Concatenate parent_a[:split] with parent_b[split:], dropping repeats.

    The first occurrence of every member is kept, so the result may be
    shorter than either parent.
    """
    child = []
    seen = set()
    for index in parent_a.members[:split] + parent_b.members[split:]:
        if index not in seen:
            seen.add(index)
            child.append(index)
    return child


def refill_from_parent(
    child: List[int],
    donor: Squad,
    config: GAConfig,
    rng: np.random.Generator
) -> Tuple[List[int], int]:
    """
    Top the child up with random members of the donor parent.

    Draws up to crossover_repair_attempts times, adding a drawn member only
    if it is not already in the child, until the child has squad_size members.

    Returns:
        Tuple of (child_members, attempts_used)
    """
    child = list(child)
    present = set(child)
    attempts = 0

    while len(child) < config.squad_size and attempts < config.crossover_repair_attempts:
        attempts += 1
        index = donor.members[int(rng.integers(0, len(donor.members)))]
        if index not in present:
            present.add(index)
            child.append(index)

    return child, attempts


def single_point_crossover(
    parent_a: Squad,
    parent_b: Squad,
    pool: CandidatePool,
    config: GAConfig,
    rng: np.random.Generator
) -> Tuple[Squad, Dict]:
    """
    Combine two parents into a child squad.

    Algorithm:
        1. Pick a split point s uniformly in [0, squad_size)
        2. Splice parent_a[:s] + parent_b[s:] and drop duplicate members
        3. Refill from parent_a's members (bounded attempts)
        4. Return the child if valid, otherwise a clone of parent_a or
           parent_b with equal probability

    Args:
        parent_a: First parent (also the refill donor)
        parent_b: Second parent
        pool: Candidate pool
        config: GA configuration
        rng: Random number generator

    Returns:
        Tuple of (child_squad, crossover_info) where crossover_info has
        'split', 'repair_attempts' and 'outcome' ("child", "parent_a"
        or "parent_b")
    """
    split = int(rng.integers(0, config.squad_size))

    spliced = splice_parents(parent_a, parent_b, split)
    members, attempts = refill_from_parent(spliced, parent_a, config, rng)

    info = {
        'split': split,
        'duplicates_removed': len(parent_a.members[:split] + parent_b.members[split:]) - len(spliced),
        'repair_attempts': attempts,
    }

    child = Squad(members=tuple(members), metadata={'origin': 'crossover'})
    if is_valid(child, pool, config):
        info['outcome'] = 'child'
        child.metadata['crossover'] = info
        return child, info

    use_parent_a = rng.random() < 0.5
    fallback = parent_a.copy() if use_parent_a else parent_b.copy()
    info['outcome'] = 'parent_a' if use_parent_a else 'parent_b'
    fallback.metadata['crossover'] = info

    logger.debug(
        "single_point_crossover: child invalid after %d repair draw(s), cloned %s",
        attempts, info['outcome']
    )

    return fallback, info


def crossover_statistics(outcomes: List[Dict]) -> Dict:
    """
    Summarise crossover outcomes for a generation.

    Args:
        outcomes: crossover_info dicts returned by single_point_crossover

    Returns:
        Dictionary with outcome counts and the fallback rate
    """
    stats = {
        'total': len(outcomes),
        'child': 0,
        'parent_a': 0,
        'parent_b': 0,
    }

    for info in outcomes:
        stats[info['outcome']] += 1

    stats['fallback_rate'] = (stats['parent_a'] + stats['parent_b']) / max(stats['total'], 1)

    return stats
