"""
Candidate pools shared by the squad GA tests.
"""

from squad_ga.config import GAConfig
from squad_ga.data_models import Candidate, CandidatePool, Squad


CATEGORY_LAYOUT = ["GK"] * 3 + ["DEF"] * 6 + ["MID"] * 6 + ["FWD"] * 5


def build_small_pool(cost: float = None) -> CandidatePool:
    """
    20 candidates: 3 GK, 6 DEF, 6 MID, 5 FWD in 10 groups of two.

    Costs default to 41..60 so any 15 of them fit a 1000 budget.
    """
    candidates = []
    for offset, category in enumerate(CATEGORY_LAYOUT):
        candidate_id = offset + 1
        candidates.append(Candidate(
            id=candidate_id,
            name=f"Player {candidate_id}",
            cost=float(40 + candidate_id) if cost is None else cost,
            category=category,
            group=f"T{offset // 2}",
            predicted_score=2.0 + candidate_id * 0.5,
        ))
    return CandidatePool(candidates)


def build_exact_pool(scores, costs=None) -> CandidatePool:
    """
    15 candidates filling the default caps exactly (2 GK, 5 DEF, 5 MID, 3 FWD)
    in five groups of three.
    """
    categories = ["GK"] * 2 + ["DEF"] * 5 + ["MID"] * 5 + ["FWD"] * 3
    costs = costs or [50.0] * len(categories)
    return CandidatePool(
        Candidate(
            id=100 + i,
            name=f"Exact {i}",
            cost=costs[i],
            category=categories[i],
            group=f"G{i // 3}",
            predicted_score=scores[i],
        )
        for i in range(len(categories))
    )


def first_valid_squad(pool: CandidatePool) -> Squad:
    """The first 2 GK, 5 DEF, 5 MID and 3 FWD of build_small_pool()."""
    needed = {"GK": 2, "DEF": 5, "MID": 5, "FWD": 3}
    members = []
    for index, candidate in enumerate(pool):
        if needed.get(candidate.category, 0) > 0:
            members.append(index)
            needed[candidate.category] -= 1
    return Squad(members=tuple(members))


def small_config(**overrides) -> GAConfig:
    """Reduced population/generations for fast tests."""
    values = {'population_size': 10, 'generations': 5}
    values.update(overrides)
    return GAConfig(**values)
