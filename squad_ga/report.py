"""
Reporting for the best squad of a run.

Derives the bench flags, aggregate score and total cost of a squad and
prints the selection report.
"""

from dataclasses import dataclass, field
from typing import List

from .config import GAConfig
from .constraints import squad_cost
from .data_models import Candidate, CandidatePool, Squad
from .fitness import bench_flags, fitness


@dataclass
class ReportEntry:
    """A squad member together with its bench flag."""
    candidate: Candidate
    benched: bool


@dataclass
class SquadReport:
    """
    Reporting view of a squad.

    Attributes:
        entries: Members in squad order with bench flags
        aggregate_score: Sum of predicted scores plus the highest one again
        total_cost: Sum of member costs
        fitness: Bench-weighted fitness used during evolution
    """
    entries: List[ReportEntry] = field(default_factory=list)
    aggregate_score: float = 0.0
    total_cost: float = 0.0
    fitness: float = 0.0

    @property
    def starters(self) -> List[Candidate]:
        return [entry.candidate for entry in self.entries if not entry.benched]

    @property
    def bench(self) -> List[Candidate]:
        return [entry.candidate for entry in self.entries if entry.benched]


def aggregate_score(squad: Squad, pool: CandidatePool) -> float:
    """
    Reporting-only total: every predicted score once, the best one twice.

    The bonus for the best score is floored at zero, so a squad of
    negative scorers is not penalised twice. This is not the fitness used
    during evolution.
    """
    scores = [pool[index].predicted_score for index in squad.members]
    if not scores:
        return 0.0
    return sum(scores) + max(0.0, max(scores))


def build_squad_report(squad: Squad, pool: CandidatePool, config: GAConfig) -> SquadReport:
    """
    Build the report for a squad.

    Args:
        squad: Squad to report on
        pool: Candidate pool
        config: GA configuration (bench size and budget)

    Returns:
        SquadReport with members in the squad's own order
    """
    flags = bench_flags(squad, pool, config)
    entries = [
        ReportEntry(candidate=candidate, benched=benched)
        for candidate, benched in zip(squad.candidates(pool), flags)
    ]

    return SquadReport(
        entries=entries,
        aggregate_score=aggregate_score(squad, pool),
        total_cost=squad_cost(squad.members, pool),
        fitness=fitness(squad, pool, config),
    )


def format_squad_report(report: SquadReport) -> List[str]:
    """Render a report as lines of text."""
    lines = []

    for entry in report.entries:
        candidate = entry.candidate
        line = (
            f"Selected: {candidate.name} - Position: {candidate.category} - "
            f"Team: {candidate.group} - Predicted Points: {candidate.predicted_score} - "
            f"Value: {candidate.cost}"
        )
        if entry.benched:
            line += " (Bench)"
        lines.append(line)

    lines.append(f"Total Predicted Points (with highest doubled): {report.aggregate_score}")
    lines.append(f"Total Value: {report.total_cost}")

    return lines


def print_squad_report(report: SquadReport) -> None:
    """Print the squad report."""
    for line in format_squad_report(report):
        print(line)
