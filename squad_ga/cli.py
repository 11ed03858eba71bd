"""
CLI module for the squad GA.

Handles run configuration loading, validation, and running the optimizer.
"""

from typing import Dict, Any
from pathlib import Path
import yaml
from tqdm import tqdm

from .config import ConfigValidationError, GAConfig, load_ga_config
from .evolution import select_best_squad_ga
from .io_utils import (
    load_candidate_pool,
    save_squad_to_csv,
    save_history_to_csv,
    create_output_folder
)
from .report import build_squad_report, print_squad_report


DEFAULT_GA_CONFIG_PATH = Path(__file__).resolve().parent / "squad_ga_config.yaml"


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    return config


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    for field in ['input', 'output']:
        if field not in config:
            raise ConfigValidationError(f"Missing required field: '{field}'")

    # Validate input section
    if not isinstance(config['input'], dict):
        raise ConfigValidationError("'input' must be a dictionary")

    if 'pool' not in config['input']:
        raise ConfigValidationError("Missing required field: 'input.pool'")

    pool_path = Path(config['input']['pool'])
    if not pool_path.exists():
        raise ConfigValidationError(f"Candidate pool file not found: {pool_path}")

    # Validate output section
    if not isinstance(config['output'], dict):
        raise ConfigValidationError("'output' must be a dictionary")

    if 'root' not in config['output']:
        raise ConfigValidationError("Missing required field: 'output.root'")

    # GA settings come inline or from a separate file, not both
    if 'ga' in config and 'ga_config' in config:
        raise ConfigValidationError(
            "Run configuration cannot have both 'ga' and 'ga_config'. "
            "Please specify only one."
        )

    if 'ga' in config and not isinstance(config['ga'], dict):
        raise ConfigValidationError("'ga' must be a dictionary")

    if 'ga_config' in config and not Path(config['ga_config']).exists():
        raise ConfigValidationError(f"GA config not found: {config['ga_config']}")

    seed = config.get('random_seed')
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool) or seed < 0):
        raise ConfigValidationError(
            f"'random_seed' must be a non-negative integer, got: {seed}"
        )


def build_ga_config(config: Dict[str, Any]) -> GAConfig:
    """
    Build the GA configuration for a run.

    GA settings come from inline 'ga', a 'ga_config' file, or, when neither
    is given, the packaged squad_ga_config.yaml. A top-level 'random_seed'
    overrides any seed in the GA settings.

    Raises:
        ConfigValidationError: If GA settings are invalid
    """
    if 'ga' in config:
        ga_config = GAConfig.from_dict(config['ga'])
    else:
        ga_config = load_ga_config(config.get('ga_config', DEFAULT_GA_CONFIG_PATH))

    if config.get('random_seed') is not None:
        ga_config = ga_config.with_overrides(random_seed=config['random_seed'])

    return ga_config


def run_from_config(config_path: str) -> None:
    """
    Load run configuration and run the optimizer.

    This is the main entry point called by squad_cli.py. It:
    1. Loads and validates the run configuration
    2. Loads the candidate pool
    3. Runs the GA with a progress bar
    4. Prints the squad report
    5. Saves the squad, fitness history and (optionally) a plot

    Args:
        config_path: Path to run configuration YAML file

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
        InfeasibleConstraintsError: If the pool cannot satisfy the constraints
    """
    # Load and validate config
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    print(f"Validating configuration...")
    validate_run_config(config)
    ga_config = build_ga_config(config)

    pool_path = config['input']['pool']
    print(f"Loading candidate pool from: {pool_path}")
    pool = load_candidate_pool(pool_path)
    print(f"Candidates: {len(pool)}")

    overwrite = config['output'].get('overwrite', False)
    output_root = create_output_folder(config['output']['root'], overwrite)

    print("=" * 70)
    print("SQUAD GA")
    print("=" * 70)
    print(f"Population: {ga_config.population_size}")
    print(f"Generations: {ga_config.generations}")
    print(f"Mutation rate: {ga_config.mutation_rate}")
    print(f"Budget cap: {ga_config.budget_cap}")
    print(f"Random seed: {ga_config.random_seed}")
    print()

    with tqdm(total=ga_config.generations, desc="Evolving", unit="gen") as progress_bar:
        def on_generation(generation: int, total: int, best_fitness: float) -> None:
            progress_bar.set_postfix(best=f"{best_fitness:.2f}")
            progress_bar.update(1)

        result = select_best_squad_ga(pool, ga_config, progress_callback=on_generation)

    print("Genetic algorithm complete!")
    print()

    report = build_squad_report(result.best_squad, pool, ga_config)
    print_squad_report(report)

    squad_path = save_squad_to_csv(
        result.best_squad, pool, ga_config, output_root / 'best_squad.csv', overwrite=overwrite
    )
    history_path = save_history_to_csv(
        result.history, output_root / 'fitness_history.csv', overwrite=overwrite
    )

    plot_path = None
    if config['output'].get('plot', False) and result.history:
        from .visualization_utils import plot_fitness_history
        plot_path = plot_fitness_history(result.history, output_root / 'fitness_history.png')

    # Print summary
    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Best fitness: {result.best_fitness:.3f}")
    print(f"Best squad: {squad_path}")
    print(f"Fitness history: {history_path}")
    if plot_path is not None:
        print(f"Fitness plot: {plot_path}")

    print("\nRun completed successfully!")
