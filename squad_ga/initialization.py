"""
Population initialization.

Builds valid random squads by rejection sampling from the candidate pool.
Sampling is bounded: a squad that stalls is restarted, and too many
restarts raise InfeasibleConstraintsError instead of looping forever.
"""

import logging
import math
from typing import Dict, List

import numpy as np

from .config import GAConfig, InfeasibleConstraintsError
from .data_models import CandidatePool, Squad


logger = logging.getLogger(__name__)


def generate_random_squad(
    pool: CandidatePool,
    config: GAConfig,
    rng: np.random.Generator
) -> Squad:
    """
    Draw a valid random squad.

    Repeatedly draws a uniformly random candidate and accepts it if it is
    not already in the squad and its category count, group count and the
    running cost all stay within their caps, until squad_size members are
    collected. After max_draw_attempts consecutive rejections the partial
    squad is abandoned and sampling restarts.

    Args:
        pool: Candidate pool
        config: GA configuration
        rng: Random number generator

    Returns:
        New valid Squad

    Raises:
        InfeasibleConstraintsError: If max_restarts restarts all stalled
    """
    for restart in range(config.max_restarts):
        members = _draw_members(pool, config, rng)
        if members is not None:
            if restart:
                logger.debug("generate_random_squad: succeeded after %d restart(s)", restart)
            return Squad(members=tuple(members), metadata={'origin': 'random'})

    raise InfeasibleConstraintsError(
        f"Could not draw a valid {config.squad_size}-member squad from a pool of "
        f"{len(pool)} candidates after {config.max_restarts} restart(s) of "
        f"{config.max_draw_attempts} rejected draw(s) each. Check budget_cap "
        f"({config.budget_cap}), category_caps ({dict(config.category_caps)}) "
        f"and max_per_group ({config.max_per_group}) against the pool."
    )


def create_initial_population(
    pool: CandidatePool,
    config: GAConfig,
    rng: np.random.Generator
) -> List[Squad]:
    """
    Create population_size independent random squads.

    Raises:
        InfeasibleConstraintsError: If the pool cannot satisfy the constraints
    """
    population = [generate_random_squad(pool, config, rng) for _ in range(config.population_size)]
    logger.debug("create_initial_population: %d squads", len(population))
    return population


def _draw_members(pool: CandidatePool, config: GAConfig, rng: np.random.Generator):
    """One rejection-sampling attempt; returns None if it stalls."""
    members: List[int] = []
    chosen = set()
    category_counts: Dict[str, int] = {}
    group_counts: Dict[str, int] = {}
    costs: List[float] = []
    rejections = 0

    while len(members) < config.squad_size:
        if rejections >= config.max_draw_attempts:
            return None

        index = int(rng.integers(0, len(pool)))
        candidate = pool[index]

        if (
            index not in chosen
            and category_counts.get(candidate.category, 0) < config.category_cap(candidate.category)
            and group_counts.get(candidate.group, 0) < config.max_per_group
            and math.fsum(costs + [candidate.cost]) <= config.budget_cap
        ):
            members.append(index)
            chosen.add(index)
            category_counts[candidate.category] = category_counts.get(candidate.category, 0) + 1
            group_counts[candidate.group] = group_counts.get(candidate.group, 0) + 1
            costs.append(candidate.cost)
            rejections = 0
        else:
            rejections += 1

    return members
