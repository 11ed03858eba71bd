"""
Fitness evaluation for squads.

Fitness is the sum of predicted scores with the ``bench_size`` lowest
scorers counted at ``bench_weight``. Squads over budget score zero.
Population evaluation is vectorised with numpy and can be split across
worker threads; every squad is scored independently of the others.
"""

import math
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import numpy as np

from .config import GAConfig
from .data_models import CandidatePool, Squad


def bench_weights(config: GAConfig, size: Optional[int] = None) -> np.ndarray:
    """
    Per-rank weights for scores sorted ascending.

    Returns:
        Array of length ``size`` (default squad_size): bench_weight for
        the first bench_size ranks, 1.0 for the rest
    """
    weights = np.ones(config.squad_size if size is None else size, dtype=float)
    weights[:config.bench_size] = config.bench_weight
    return weights


def bench_flags(squad: Squad, pool: CandidatePool, config: GAConfig) -> List[bool]:
    """
    Flag the benched members of a squad, in squad order.

    A member is benched when its rank in a stably sorted (ascending by
    predicted score) copy of the squad is below bench_size. This is the
    same partition the fitness function weights.
    """
    scores = [pool[index].predicted_score for index in squad.members]
    order = sorted(range(len(scores)), key=lambda position: scores[position])
    flags = [False] * len(scores)
    for rank, position in enumerate(order):
        if rank < config.bench_size:
            flags[position] = True
    return flags


def fitness(squad: Squad, pool: CandidatePool, config: GAConfig) -> float:
    """
    Score a single squad.

    Args:
        squad: Squad to score
        pool: Candidate pool
        config: GA configuration

    Returns:
        Weighted predicted score, or 0.0 if the squad is over budget
    """
    return float(_score_members(np.array([squad.members], dtype=np.intp), pool, config)[0])


def evaluate_population(
    population: Sequence[Squad],
    pool: CandidatePool,
    config: GAConfig,
    executor: Optional[ThreadPoolExecutor] = None
) -> np.ndarray:
    """
    Score every squad in a population.

    Args:
        population: Squads to score (all of length squad_size)
        pool: Candidate pool (read-only, shared by all workers)
        config: GA configuration
        executor: Optional thread pool; when given, the population is split
            into one chunk per worker and chunks are scored concurrently

    Returns:
        Array of fitness values aligned with ``population``
    """
    if not population:
        return np.zeros(0, dtype=float)

    members = np.array([squad.members for squad in population], dtype=np.intp)

    if executor is None or config.workers <= 1 or len(population) < 2:
        return _score_members(members, pool, config)

    chunks = np.array_split(members, min(config.workers, len(population)))
    results = executor.map(lambda chunk: _score_members(chunk, pool, config), chunks)
    return np.concatenate(list(results))


def _score_members(members: np.ndarray, pool: CandidatePool, config: GAConfig) -> np.ndarray:
    """Score a 2-D array of pool indices, one squad per row."""
    scores = np.sort(pool.scores[members], axis=1)
    weights = bench_weights(config, scores.shape[1])
    weighted = (scores * weights).sum(axis=1)

    costs = pool.costs[members]
    total_costs = np.fromiter(
        (math.fsum(row) for row in costs), dtype=float, count=len(costs)
    )
    weighted[total_costs > config.budget_cap] = 0.0
    return weighted
