"""
Data models for the squad GA.

Core data structures representing candidates, the candidate pool,
squads (individuals in the GA population) and the result of a run.
"""

from dataclasses import dataclass, field
from typing import Optional, Any, Sequence, Iterable

import numpy as np


@dataclass(frozen=True)
class Candidate:
    """
    A single draftable entity.

    Attributes:
        id: Unique identifier (``element`` in the source CSV)
        name: Display name
        cost: Price of the candidate (``value`` in the source CSV)
        category: Role the candidate fills (e.g. GK, DEF, MID, FWD)
        group: Team/club affiliation
        predicted_score: Predicted points for the upcoming round
    """
    id: int
    name: str
    cost: float
    category: str
    group: str
    predicted_score: float


class CandidatePool:
    """
    Immutable collection of candidates shared by every GA operator.

    Squads refer to candidates by their position in the pool, so the pool
    also keeps numpy arrays of costs and predicted scores for batch scoring.
    """

    def __init__(self, candidates: Iterable[Candidate]):
        self._candidates = tuple(candidates)

        if not self._candidates:
            raise ValueError("CandidatePool must contain at least one candidate")

        self._index_by_id = {}
        for index, candidate in enumerate(self._candidates):
            if candidate.id in self._index_by_id:
                raise ValueError(f"Duplicate candidate id in pool: {candidate.id}")
            self._index_by_id[candidate.id] = index

        self.costs = np.array([c.cost for c in self._candidates], dtype=float)
        self.scores = np.array([c.predicted_score for c in self._candidates], dtype=float)
        self.costs.setflags(write=False)
        self.scores.setflags(write=False)

    @property
    def candidates(self) -> tuple[Candidate, ...]:
        return self._candidates

    def __len__(self) -> int:
        return len(self._candidates)

    def __getitem__(self, index: int) -> Candidate:
        return self._candidates[index]

    def __iter__(self):
        return iter(self._candidates)

    def index_of(self, candidate_id: int) -> int:
        """
        Get the pool position of a candidate by identifier.

        Raises:
            KeyError: If no candidate has this identifier
        """
        return self._index_by_id[candidate_id]

    def categories(self) -> set[str]:
        return {c.category for c in self._candidates}

    def resolve(self, members: Sequence[int]) -> list[Candidate]:
        """Resolve pool indices to Candidate records, preserving order."""
        return [self._candidates[index] for index in members]


@dataclass
class Squad:
    """
    A selection of candidates (individual in the GA population).

    Members are stored as pool indices; full Candidate data is resolved
    through the pool only when scoring or reporting. Equality compares
    members only, so a clone of a parent compares equal to that parent.

    Attributes:
        members: Ordered tuple of pool indices
        metadata: Provenance information (crossover outcome, mutation ops, etc.)
    """
    members: tuple[int, ...]
    metadata: dict[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        """Ensure members is an immutable tuple of ints."""
        self.members = tuple(int(index) for index in self.members)

    def __len__(self) -> int:
        return len(self.members)

    def copy(self) -> "Squad":
        """
        Create a copy of this squad with independent metadata.

        Returns:
            New Squad with the same members
        """
        return Squad(members=self.members, metadata=self.metadata.copy())

    def with_member(self, slot: int, index: int) -> "Squad":
        """Return a new squad with ``slot`` replaced by pool index ``index``."""
        members = list(self.members)
        members[slot] = index
        return Squad(members=tuple(members), metadata=self.metadata.copy())

    def candidates(self, pool: CandidatePool) -> list[Candidate]:
        return pool.resolve(self.members)

    def candidate_ids(self, pool: CandidatePool) -> list[int]:
        return [pool[index].id for index in self.members]


@dataclass
class EvolutionResult:
    """
    Outcome of a complete evolution run.

    Attributes:
        best_squad: Highest-fitness squad of the final population
        best_fitness: Fitness of ``best_squad``
        generations: Number of generations that were run
        history: Per-generation fitness summary
            (dicts with 'generation', 'best_fitness', 'mean_fitness')
        seed: Random seed used for the run (None if unseeded)
    """
    best_squad: Squad
    best_fitness: float
    generations: int
    history: list[dict[str, float]] = field(default_factory=list)
    seed: Optional[int] = None

    def best_fitness_curve(self) -> list[float]:
        return [record['best_fitness'] for record in self.history]
