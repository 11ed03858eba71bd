"""
Mutation operator for the squad GA.

Single-slot random replacement with repair-by-regeneration: a squad that
is invalid after mutation is discarded and replaced by a fresh random one.
"""

import logging
from typing import Dict, List, Tuple

import numpy as np

from .config import GAConfig
from .constraints import is_valid
from .data_models import CandidatePool, Squad
from .initialization import generate_random_squad


logger = logging.getLogger(__name__)


def random_slot_swap(
    squad: Squad,
    pool: CandidatePool,
    rng: np.random.Generator
) -> Tuple[Squad, List[str]]:
    """
    Replace one random slot with a random candidate from the full pool.

    No constraint check is made; the result may be invalid.

    Returns:
        Tuple of (mutated_squad, operation_log)
    """
    slot = int(rng.integers(0, len(squad.members)))
    new_index = int(rng.integers(0, len(pool)))
    old_index = squad.members[slot]

    mutated = squad.with_member(slot, new_index)

    op_log = [
        f"random_slot_swap(slot={slot}): {pool[old_index].id} -> {pool[new_index].id}"
    ]
    return mutated, op_log


def mutate(
    squad: Squad,
    pool: CandidatePool,
    config: GAConfig,
    rng: np.random.Generator
) -> Tuple[Squad, List[str]]:
    """
    Apply mutation and repair.

    This is the main mutation entry point. It:
    1. Swaps one slot with probability mutation_rate
    2. Validates the whole squad (whether or not a swap happened)
    3. Replaces an invalid squad with a freshly generated one

    Args:
        squad: Squad to mutate (not modified)
        pool: Candidate pool
        config: GA configuration
        rng: Random number generator

    Returns:
        Tuple of (valid_squad, operation_log)

    Raises:
        InfeasibleConstraintsError: If regeneration cannot find a valid squad
    """
    if rng.random() < config.mutation_rate and squad.members:
        mutated, op_log = random_slot_swap(squad, pool, rng)
    else:
        mutated, op_log = squad.copy(), ["no_mutation: skipped (probability)"]

    regenerated = not is_valid(mutated, pool, config)
    if regenerated:
        mutated = generate_random_squad(pool, config, rng)
        op_log.append("regenerate: invalid after mutation, replaced with random squad")
        logger.debug("mutate: squad invalid after mutation, regenerated")

    mutated.metadata['mutation_ops'] = op_log
    mutated.metadata['regenerated'] = regenerated
    return mutated, op_log


def mutation_statistics(original: Squad, mutated: Squad) -> Dict:
    """
    Calculate statistics about a mutation.

    Args:
        original: Squad before mutation
        mutated: Squad after mutation

    Returns:
        Dictionary with the number of changed members and the change rate
    """
    changed = len(set(mutated.members) - set(original.members))

    return {
        'members_changed': changed,
        'change_rate': changed / max(len(mutated.members), 1),
        'regenerated': mutated.metadata.get('regenerated', False),
    }
