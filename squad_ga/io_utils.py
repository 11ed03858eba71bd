"""
I/O utilities for the squad GA.

Handles candidate CSV parsing, squad and history serialization,
and output folder management.
"""

import csv
from pathlib import Path
from typing import Dict, List, Union

from .config import GAConfig
from .data_models import Candidate, CandidatePool, Squad
from .fitness import bench_flags


POOL_COLUMNS = ['element', 'name', 'value', 'position', 'team', 'predicted_points']

SQUAD_COLUMNS = ['element', 'name', 'position', 'team', 'value', 'predicted_points', 'bench']

HISTORY_COLUMNS = ['generation', 'best_fitness', 'mean_fitness']


def load_candidate_pool(csv_path: Union[str, Path]) -> CandidatePool:
    """
    Load a candidate CSV file into a CandidatePool.

    CSV format:
        element,name,value,position,team,predicted_points
        1,Raya,55,GK,ARS,4.2
        2,Saliba,60,DEF,ARS,5.1
        ...

    Extra columns are ignored.

    Args:
        csv_path: Path to CSV file

    Returns:
        CandidatePool with one Candidate per row

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ValueError: If CSV format is invalid or a row cannot be parsed
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    candidates = []
    with open(csv_path, 'r', newline='') as f:
        reader = csv.DictReader(f)

        # Validate header
        missing = [col for col in POOL_COLUMNS if col not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(
                f"Invalid CSV format in {csv_path}. Missing columns: {', '.join(missing)}"
            )

        for line_number, row in enumerate(reader, start=2):
            try:
                candidates.append(Candidate(
                    id=int(row['element']),
                    name=row['name'],
                    cost=float(row['value']),
                    category=row['position'].strip().upper(),
                    group=row['team'].strip(),
                    predicted_score=float(row['predicted_points']),
                ))
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid row at {csv_path}:{line_number}: {e}")

    if not candidates:
        raise ValueError(f"No candidates found in {csv_path}")

    return CandidatePool(candidates)


def save_squad_to_csv(
    squad: Squad,
    pool: CandidatePool,
    config: GAConfig,
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save a squad to CSV, one member per row in squad order.

    Args:
        squad: Squad to save
        pool: Candidate pool the squad refers to
        config: GA configuration (for bench flags)
        output_path: Path for output CSV
        overwrite: If True, overwrite existing file

    Returns:
        Path to saved CSV file

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = _prepare_output_file(output_path, overwrite)

    flags = bench_flags(squad, pool, config)

    with open(output_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(SQUAD_COLUMNS)

        for candidate, benched in zip(squad.candidates(pool), flags):
            writer.writerow([
                candidate.id,
                candidate.name,
                candidate.category,
                candidate.group,
                candidate.cost,
                candidate.predicted_score,
                int(benched),
            ])

    return output_path


def load_squad_from_csv(csv_path: Union[str, Path], pool: CandidatePool) -> Squad:
    """
    Load a squad saved by save_squad_to_csv.

    Raises:
        FileNotFoundError: If CSV file doesn't exist
        ValueError: If a member is not in the pool
    """
    csv_path = Path(csv_path)

    if not csv_path.exists():
        raise FileNotFoundError(f"CSV file not found: {csv_path}")

    members = []
    with open(csv_path, 'r', newline='') as f:
        reader = csv.DictReader(f)

        if 'element' not in (reader.fieldnames or []):
            raise ValueError(f"Invalid squad CSV {csv_path}. Expected column: element")

        for row in reader:
            try:
                members.append(pool.index_of(int(row['element'])))
            except KeyError:
                raise ValueError(f"Squad member {row['element']} is not in the candidate pool")

    return Squad(members=tuple(members), metadata={'source_file': str(csv_path)})


def save_history_to_csv(
    history: List[Dict[str, float]],
    output_path: Union[str, Path],
    overwrite: bool = False
) -> Path:
    """
    Save per-generation fitness history to CSV.

    Raises:
        FileExistsError: If file exists and overwrite=False
    """
    output_path = _prepare_output_file(output_path, overwrite)

    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=HISTORY_COLUMNS, extrasaction='ignore')
        writer.writeheader()
        for record in history:
            writer.writerow(record)

    return output_path


def create_output_folder(root: Union[str, Path], overwrite: bool = False) -> Path:
    """
    Create the output directory for a run.

    Raises:
        FileExistsError: If the directory exists and overwrite=False
    """
    output_root = Path(root)

    if output_root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {output_root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    output_root.mkdir(parents=True, exist_ok=True)
    return output_root


def _prepare_output_file(output_path: Union[str, Path], overwrite: bool) -> Path:
    output_path = Path(output_path)

    if output_path.exists() and not overwrite:
        raise FileExistsError(f"Output file already exists: {output_path}")

    # Create parent directory if needed
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path
