"""
Evolution driver for the squad GA.

Runs Initialize -> (Evaluate, Select, Breed) x generations -> Finalize.
There is no early stopping: every configured generation is run.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .config import GAConfig
from .data_models import CandidatePool, EvolutionResult, Squad
from .fitness import evaluate_population
from .initialization import create_initial_population
from .selection import select_breeding_pool, select_two_parents
from .crossover import single_point_crossover
from .mutation import mutate


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, float], None]


def breed_next_generation(
    breeding_pool: Sequence[Tuple[float, Squad]],
    pool: CandidatePool,
    config: GAConfig,
    rng: np.random.Generator
) -> List[Squad]:
    """
    Build a new population of population_size squads.

    Each child is made by sampling two parents (uniform, with replacement)
    from the breeding pool, crossing them over and mutating the result.

    Args:
        breeding_pool: (fitness, squad) pairs kept by selection
        pool: Candidate pool
        config: GA configuration
        rng: Random number generator

    Returns:
        List of newly constructed squads
    """
    new_population = []

    while len(new_population) < config.population_size:
        parent_a, parent_b = select_two_parents(breeding_pool, rng)
        child, _ = single_point_crossover(parent_a, parent_b, pool, config, rng)
        child, _ = mutate(child, pool, config, rng)
        new_population.append(child)

    return new_population


def find_best_squad(
    population: Sequence[Squad],
    pool: CandidatePool,
    config: GAConfig,
    executor: Optional[ThreadPoolExecutor] = None
) -> Tuple[Squad, float]:
    """
    Rescan a population for its highest-fitness squad.

    Fitness is recomputed rather than taken from an earlier selection.
    Ties go to the squad that comes first in the population.

    Raises:
        ValueError: If the population is empty
    """
    if not population:
        raise ValueError("Cannot pick the best squad of an empty population")

    fitness_values = evaluate_population(population, pool, config, executor)
    best_idx = int(np.argmax(fitness_values))
    return population[best_idx], float(fitness_values[best_idx])


def select_best_squad_ga(
    pool: CandidatePool,
    config: GAConfig,
    rng: Optional[np.random.Generator] = None,
    progress_callback: Optional[ProgressCallback] = None,
    log_every: int = 100
) -> EvolutionResult:
    """
    Run the genetic algorithm and return the best squad found.

    Each generation:
        1. Evaluate fitness of all squads (optionally across worker threads)
        2. Keep the top half by fitness
        3. Breed a complete replacement population

    Generation g+1 is only bred after generation g has been fully evaluated
    and selected.

    Args:
        pool: Candidate pool (read-only for the whole run)
        config: GA configuration
        rng: Random number generator; built from config.random_seed if None
        progress_callback: Called as (generation, total, best_fitness) after
            every generation; its return value is ignored
        log_every: Log a generation summary every this many generations

    Returns:
        EvolutionResult with the best squad of the final population

    Raises:
        InfeasibleConstraintsError: If the pool cannot satisfy the constraints
    """
    if rng is None:
        rng = np.random.default_rng(config.random_seed)

    logger.info(
        "Starting GA: pool=%d population=%d generations=%d mutation_rate=%.3f",
        len(pool), config.population_size, config.generations, config.mutation_rate
    )

    executor = ThreadPoolExecutor(max_workers=config.workers) if config.workers > 1 else None

    try:
        population = create_initial_population(pool, config, rng)
        history = []

        for generation in range(config.generations):
            fitness_values = evaluate_population(population, pool, config, executor)
            breeding_pool = select_breeding_pool(population, fitness_values, config)

            best_fitness = breeding_pool[0][0]
            history.append({
                'generation': generation + 1,
                'best_fitness': best_fitness,
                'mean_fitness': float(np.mean(fitness_values)),
            })

            if log_every and (generation + 1) % log_every == 0:
                logger.info(
                    "Generation %d/%d: best=%.3f mean=%.3f",
                    generation + 1, config.generations,
                    best_fitness, history[-1]['mean_fitness']
                )

            population = breed_next_generation(breeding_pool, pool, config, rng)

            if progress_callback is not None:
                progress_callback(generation + 1, config.generations, best_fitness)

        best_squad, best_fitness = find_best_squad(population, pool, config, executor)
    finally:
        if executor is not None:
            executor.shutdown()

    logger.info("GA complete: best fitness %.3f", best_fitness)

    return EvolutionResult(
        best_squad=best_squad,
        best_fitness=best_fitness,
        generations=config.generations,
        history=history,
        seed=config.random_seed,
    )
