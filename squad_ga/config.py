"""
Configuration for the squad GA.

Holds the GA configuration structure, its YAML loading and validation,
and the error types raised for invalid or infeasible setups.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Any, Mapping, Optional, Union
import yaml


SQUAD_SIZE = 15

DEFAULT_CATEGORY_CAPS = {
    "GK": 2,
    "DEF": 5,
    "MID": 5,
    "FWD": 3,
}


class ConfigValidationError(Exception):
    """Raised when GA or run configuration is invalid."""
    pass


class InfeasibleConstraintsError(Exception):
    """Raised when no valid squad can be drawn from the candidate pool."""
    pass


@dataclass(frozen=True)
class GAConfig:
    """
    Immutable GA configuration, built once and shared by every operator.

    Attributes:
        population_size: Number of squads per generation
        generations: Number of evaluate/select/breed cycles
        mutation_rate: Probability of a single-slot swap per child
        budget_cap: Maximum total cost of a squad
        max_per_group: Maximum members from the same group
        category_caps: Maximum members per category (read-only mapping)
        squad_size: Number of members in a squad
        bench_size: Number of lowest-scoring members that are benched
        bench_weight: Weight applied to benched members' predicted score
        crossover_repair_attempts: Refill draws allowed after crossover
        max_draw_attempts: Consecutive rejected draws before the
            initializer restarts a squad
        max_restarts: Initializer restarts before giving up
        random_seed: Seed for the run's random generator (None = entropy)
        workers: Threads used for fitness evaluation (1 = in-thread)
    """
    population_size: int = 150
    generations: int = 2500
    mutation_rate: float = 0.1
    budget_cap: float = 1000.0
    max_per_group: int = 3
    category_caps: Mapping[str, int] = field(
        default_factory=lambda: dict(DEFAULT_CATEGORY_CAPS)
    )
    squad_size: int = SQUAD_SIZE
    bench_size: int = 4
    bench_weight: float = 0.25
    crossover_repair_attempts: int = 400
    max_draw_attempts: int = 1000
    max_restarts: int = 100
    random_seed: Optional[int] = None
    workers: int = 1

    def __post_init__(self):
        object.__setattr__(
            self, 'category_caps', MappingProxyType(dict(self.category_caps))
        )
        validate_ga_config(self)

    @property
    def breeding_size(self) -> int:
        """Number of squads kept by truncation selection."""
        return self.population_size // 2

    def category_cap(self, category: str) -> int:
        """Cap for a category; unknown categories may not be selected."""
        return self.category_caps.get(category, 0)

    def with_overrides(self, **overrides) -> "GAConfig":
        """Return a new validated config with some fields replaced."""
        values = self.to_dict()
        values.update(overrides)
        return GAConfig.from_dict(values)

    def to_dict(self) -> Dict[str, Any]:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values['category_caps'] = dict(self.category_caps)
        return values

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GAConfig":
        """
        Build a config from a plain dictionary (e.g. parsed YAML).

        Missing keys keep their defaults.

        Raises:
            ConfigValidationError: On unknown keys or invalid values
        """
        if data is None:
            return cls()

        if not isinstance(data, dict):
            raise ConfigValidationError("GA configuration must be a dictionary")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigValidationError(
                f"Unknown GA configuration field(s): {', '.join(unknown)}"
            )

        values = dict(data)
        if 'category_caps' in values and not isinstance(values['category_caps'], dict):
            raise ConfigValidationError("'category_caps' must be a dictionary")

        try:
            return cls(**values)
        except TypeError as e:
            raise ConfigValidationError(f"Invalid GA configuration: {e}")


def validate_ga_config(config: GAConfig) -> None:
    """
    Validate GA configuration values.

    Args:
        config: GA configuration

    Raises:
        ConfigValidationError: If any value is out of range
    """
    _require_int(config.population_size, 'population_size', minimum=2)
    _require_int(config.generations, 'generations', minimum=0)
    _require_int(config.squad_size, 'squad_size', minimum=1)
    _require_int(config.max_per_group, 'max_per_group', minimum=1)
    _require_int(config.bench_size, 'bench_size', minimum=0)
    _require_int(config.crossover_repair_attempts, 'crossover_repair_attempts', minimum=1)
    _require_int(config.max_draw_attempts, 'max_draw_attempts', minimum=1)
    _require_int(config.max_restarts, 'max_restarts', minimum=1)
    _require_int(config.workers, 'workers', minimum=1)

    if config.random_seed is not None:
        _require_int(config.random_seed, 'random_seed', minimum=0)

    if not _is_number(config.mutation_rate) or not 0.0 <= config.mutation_rate <= 1.0:
        raise ConfigValidationError(
            f"'mutation_rate' must be in [0, 1], got: {config.mutation_rate}"
        )

    if not _is_number(config.budget_cap) or config.budget_cap <= 0:
        raise ConfigValidationError(
            f"'budget_cap' must be a positive number, got: {config.budget_cap}"
        )

    if not _is_number(config.bench_weight) or not 0.0 <= config.bench_weight <= 1.0:
        raise ConfigValidationError(
            f"'bench_weight' must be in [0, 1], got: {config.bench_weight}"
        )

    if config.bench_size > config.squad_size:
        raise ConfigValidationError(
            f"'bench_size' ({config.bench_size}) cannot exceed "
            f"'squad_size' ({config.squad_size})"
        )

    if not config.category_caps:
        raise ConfigValidationError("'category_caps' must not be empty")

    for category, cap in config.category_caps.items():
        _require_int(cap, f"category_caps.{category}", minimum=0)

    total_caps = sum(config.category_caps.values())
    if total_caps != config.squad_size:
        raise ConfigValidationError(
            f"Category caps must sum to squad_size ({config.squad_size}), "
            f"got: {total_caps}"
        )


def load_ga_config(config_path: Union[str, Path]) -> GAConfig:
    """
    Load GA configuration from YAML file.

    Args:
        config_path: Path to GA configuration YAML file

    Returns:
        Validated GAConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"GA configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in GA configuration file: {e}")

    return GAConfig.from_dict(data)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require_int(value: Any, name: str, minimum: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
        raise ConfigValidationError(
            f"'{name}' must be an integer >= {minimum}, got: {value}"
        )
