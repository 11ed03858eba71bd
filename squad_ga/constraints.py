"""
Constraint validation for squads.

A squad is valid when its members are distinct, no category or group
exceeds its cap, the total cost stays within budget and it has exactly
``squad_size`` members.
"""

import math
from typing import Dict, List, Sequence

from .config import GAConfig
from .data_models import CandidatePool, Squad


def squad_cost(members: Sequence[int], pool: CandidatePool) -> float:
    """
    Total cost of a squad.

    Uses an exactly rounded sum so the result does not depend on member order.
    """
    return math.fsum(pool.costs[index] for index in members)


def is_valid(squad: Squad, pool: CandidatePool, config: GAConfig) -> bool:
    """
    Check whether a squad satisfies every constraint.

    Short-circuits on the first violation. Pure, no side effects.

    Args:
        squad: Squad to check
        pool: Candidate pool the squad's indices refer to
        config: GA configuration with caps and budget

    Returns:
        True only if all constraints hold for the complete squad
    """
    members = squad.members

    if len(members) != config.squad_size:
        return False

    seen_ids = set()
    category_counts: Dict[str, int] = {}
    group_counts: Dict[str, int] = {}

    for index in members:
        if not 0 <= index < len(pool):
            return False

        candidate = pool[index]

        if candidate.id in seen_ids:
            return False
        seen_ids.add(candidate.id)

        category_counts[candidate.category] = category_counts.get(candidate.category, 0) + 1
        if category_counts[candidate.category] > config.category_cap(candidate.category):
            return False

        group_counts[candidate.group] = group_counts.get(candidate.group, 0) + 1
        if group_counts[candidate.group] > config.max_per_group:
            return False

    return squad_cost(members, pool) <= config.budget_cap


def find_violations(squad: Squad, pool: CandidatePool, config: GAConfig) -> List[str]:
    """
    Describe every constraint a squad violates.

    Unlike ``is_valid`` this does not short-circuit; it is used for
    diagnostics and logging.

    Returns:
        List of human-readable violations (empty if the squad is valid)
    """
    violations = []
    members = squad.members

    if len(members) != config.squad_size:
        violations.append(
            f"size: expected {config.squad_size} members, got {len(members)}"
        )

    out_of_range = [index for index in members if not 0 <= index < len(pool)]
    if out_of_range:
        violations.append(f"unknown pool indices: {out_of_range}")
        return violations

    candidates = pool.resolve(members)

    id_counts: Dict[int, int] = {}
    for candidate in candidates:
        id_counts[candidate.id] = id_counts.get(candidate.id, 0) + 1
    duplicates = sorted(cid for cid, count in id_counts.items() if count > 1)
    if duplicates:
        violations.append(f"duplicate members: {duplicates}")

    for category, count in sorted(count_by_category(members, pool).items()):
        cap = config.category_cap(category)
        if count > cap:
            violations.append(f"category {category}: {count} > cap {cap}")

    for group, count in sorted(count_by_group(members, pool).items()):
        if count > config.max_per_group:
            violations.append(f"group {group}: {count} > cap {config.max_per_group}")

    total_cost = squad_cost(members, pool)
    if total_cost > config.budget_cap:
        violations.append(f"cost: {total_cost:.2f} > budget {config.budget_cap:.2f}")

    return violations


def count_by_category(members: Sequence[int], pool: CandidatePool) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for index in members:
        category = pool[index].category
        counts[category] = counts.get(category, 0) + 1
    return counts


def count_by_group(members: Sequence[int], pool: CandidatePool) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for index in members:
        group = pool[index].group
        counts[group] = counts.get(group, 0) + 1
    return counts
