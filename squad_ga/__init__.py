"""
Squad GA

Genetic algorithm for picking a fixed-size squad of candidates from a
larger pool, maximizing bench-weighted predicted score under budget,
per-category and per-group caps.

Key Features:
- Squads stored as pool indices, resolved only for scoring/reporting
- Single-point crossover with refill repair and parent fallback
- Mutation with repair-by-regeneration
- Bounded random sampling (infeasible pools raise instead of hanging)
- Vectorised, optionally threaded fitness evaluation

Modules:
- data_models: Core data structures (Candidate, CandidatePool, Squad, EvolutionResult)
- config: GA configuration, YAML loading, error types
- constraints: Squad validity checks
- fitness: Bench-weighted fitness and population evaluation
- initialization: Random valid squads and the initial population
- selection: Truncation selection and parent sampling
- crossover: Single-point crossover with repair
- mutation: Single-slot mutation with regeneration
- evolution: Generational driver
- report: Bench flags, aggregate score, squad report
- io_utils: Candidate CSV loading, squad/history export
- visualization_utils: Fitness history plot
- cli: Command-line interface
"""

__version__ = "0.1.0"
__author__ = "Squad GA Team"

from .data_models import Candidate, CandidatePool, Squad, EvolutionResult
from .config import (
    GAConfig,
    ConfigValidationError,
    InfeasibleConstraintsError,
    load_ga_config,
)
from .constraints import is_valid
from .fitness import fitness, evaluate_population
from .evolution import select_best_squad_ga
from .report import build_squad_report, aggregate_score

__all__ = [
    "Candidate",
    "CandidatePool",
    "Squad",
    "EvolutionResult",
    "GAConfig",
    "ConfigValidationError",
    "InfeasibleConstraintsError",
    "load_ga_config",
    "is_valid",
    "fitness",
    "evaluate_population",
    "select_best_squad_ga",
    "build_squad_report",
    "aggregate_score",
]
