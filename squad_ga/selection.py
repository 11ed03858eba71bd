"""
Selection operators.

Truncation selection of the breeding pool and uniform parent sampling.
"""

from typing import List, Sequence, Tuple

import numpy as np

from .config import GAConfig
from .data_models import Squad


def rank_population(
    population: Sequence[Squad],
    fitness_values: Sequence[float]
) -> List[Tuple[float, Squad]]:
    """
    Pair squads with their fitness and sort descending by fitness.

    The sort is stable, so squads with equal fitness keep their
    population order.

    Raises:
        ValueError: If population and fitness_values differ in length
    """
    if len(population) != len(fitness_values):
        raise ValueError(
            f"Got {len(fitness_values)} fitness values for {len(population)} squads"
        )

    ranked = [(float(value), squad) for value, squad in zip(fitness_values, population)]
    ranked.sort(key=lambda pair: pair[0], reverse=True)
    return ranked


def select_breeding_pool(
    population: Sequence[Squad],
    fitness_values: Sequence[float],
    config: GAConfig
) -> List[Tuple[float, Squad]]:
    """
    Keep the top population_size // 2 squads by fitness.

    Args:
        population: Current population
        fitness_values: Fitness of each squad, aligned with population
        config: GA configuration

    Returns:
        List of (fitness, squad) pairs, best first
    """
    return rank_population(population, fitness_values)[:config.breeding_size]


def select_two_parents(
    breeding_pool: Sequence[Tuple[float, Squad]],
    rng: np.random.Generator
) -> Tuple[Squad, Squad]:
    """
    Sample two parents uniformly at random, with replacement.

    The same squad may be drawn twice.

    Raises:
        ValueError: If the breeding pool is empty
    """
    if not breeding_pool:
        raise ValueError("Cannot select parents from an empty breeding pool")

    idx_a = int(rng.integers(0, len(breeding_pool)))
    idx_b = int(rng.integers(0, len(breeding_pool)))
    return breeding_pool[idx_a][1], breeding_pool[idx_b][1]
