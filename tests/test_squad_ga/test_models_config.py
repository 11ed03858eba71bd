"""
Tests for data models and GA configuration.
"""

import unittest
import tempfile
import shutil
from pathlib import Path

import yaml

from squad_ga.config import (
    GAConfig,
    ConfigValidationError,
    load_ga_config,
    DEFAULT_CATEGORY_CAPS,
)
from squad_ga.data_models import Candidate, CandidatePool, Squad, EvolutionResult

from tests.test_squad_ga.helpers import build_small_pool


class TestDataModels(unittest.TestCase):
    """Test core data model classes."""

    def test_candidate_is_immutable(self):
        """Test Candidate records cannot be modified."""
        candidate = Candidate(1, "A", 50.0, "GK", "ARS", 4.0)
        with self.assertRaises(AttributeError):
            candidate.cost = 10.0

    def test_pool_indexing(self):
        """Test pool lookup by position and by identifier."""
        pool = build_small_pool()

        self.assertEqual(len(pool), 20)
        self.assertEqual(pool[0].id, 1)
        self.assertEqual(pool.index_of(20), 19)
        self.assertEqual(pool.categories(), {"GK", "DEF", "MID", "FWD"})
        self.assertEqual(pool.costs.shape, (20,))
        self.assertAlmostEqual(pool.scores[3], pool[3].predicted_score)

    def test_pool_arrays_are_read_only(self):
        """Test the shared score arrays cannot be written."""
        pool = build_small_pool()
        with self.assertRaises(ValueError):
            pool.scores[0] = 100.0

    def test_pool_rejects_duplicates(self):
        """Test CandidatePool rejects duplicate identifiers."""
        with self.assertRaises(ValueError):
            CandidatePool([
                Candidate(1, "A", 50.0, "GK", "ARS", 4.0),
                Candidate(1, "B", 45.0, "DEF", "CHE", 3.0),
            ])

    def test_pool_rejects_empty(self):
        """Test CandidatePool rejects an empty candidate list."""
        with self.assertRaises(ValueError):
            CandidatePool([])

    def test_squad_equality_ignores_metadata(self):
        """Test squads compare by members only."""
        squad_a = Squad(members=(1, 2, 3), metadata={'origin': 'random'})
        squad_b = Squad(members=[1, 2, 3], metadata={'origin': 'crossover'})

        self.assertEqual(squad_a, squad_b)
        self.assertNotEqual(squad_a, Squad(members=(3, 2, 1)))

    def test_squad_copy_and_with_member(self):
        """Test copies are independent and with_member builds a new squad."""
        squad = Squad(members=(0, 1, 2), metadata={'tag': 'x'})
        clone = squad.copy()
        clone.metadata['tag'] = 'y'

        self.assertEqual(squad.metadata['tag'], 'x')
        self.assertEqual(clone, squad)

        changed = squad.with_member(1, 7)
        self.assertEqual(changed.members, (0, 7, 2))
        self.assertEqual(squad.members, (0, 1, 2))

    def test_squad_resolves_candidates(self):
        """Test squads resolve to Candidate records in order."""
        pool = build_small_pool()
        squad = Squad(members=(4, 0))

        self.assertEqual([c.id for c in squad.candidates(pool)], [5, 1])
        self.assertEqual(squad.candidate_ids(pool), [5, 1])

    def test_evolution_result_curve(self):
        """Test best fitness curve extraction."""
        result = EvolutionResult(
            best_squad=Squad(members=(0,)),
            best_fitness=3.0,
            generations=2,
            history=[
                {'generation': 1, 'best_fitness': 2.0, 'mean_fitness': 1.0},
                {'generation': 2, 'best_fitness': 3.0, 'mean_fitness': 2.0},
            ]
        )
        self.assertEqual(result.best_fitness_curve(), [2.0, 3.0])


class TestGAConfig(unittest.TestCase):
    """Test GA configuration defaults and validation."""

    def test_defaults(self):
        """Test defaults match the standard squad rules."""
        config = GAConfig()

        self.assertEqual(config.population_size, 150)
        self.assertEqual(config.generations, 2500)
        self.assertAlmostEqual(config.mutation_rate, 0.1)
        self.assertAlmostEqual(config.budget_cap, 1000.0)
        self.assertEqual(config.max_per_group, 3)
        self.assertEqual(dict(config.category_caps), DEFAULT_CATEGORY_CAPS)
        self.assertEqual(config.squad_size, 15)
        self.assertEqual(config.breeding_size, 75)
        self.assertEqual(config.crossover_repair_attempts, 400)

    def test_category_caps_read_only(self):
        """Test category caps cannot be modified after construction."""
        config = GAConfig()
        with self.assertRaises(TypeError):
            config.category_caps["GK"] = 5

    def test_unknown_category_has_zero_cap(self):
        """Test categories outside the caps cannot be selected."""
        self.assertEqual(GAConfig().category_cap("COACH"), 0)

    def test_invalid_values(self):
        """Test out-of-range values are rejected."""
        invalid = [
            {'population_size': 1},
            {'generations': -1},
            {'mutation_rate': 1.5},
            {'budget_cap': 0},
            {'max_per_group': 0},
            {'bench_size': 16},
            {'bench_weight': -0.1},
            {'workers': 0},
            {'max_restarts': 0},
            {'population_size': True},
            {'category_caps': {'GK': 2, 'DEF': 5, 'MID': 5, 'FWD': 2}},
        ]

        for values in invalid:
            with self.subTest(values=values):
                with self.assertRaises(ConfigValidationError):
                    GAConfig(**values)

    def test_from_dict(self):
        """Test building from a dictionary keeps defaults for missing keys."""
        config = GAConfig.from_dict({'population_size': 20, 'random_seed': 7})

        self.assertEqual(config.population_size, 20)
        self.assertEqual(config.random_seed, 7)
        self.assertEqual(config.generations, 2500)

    def test_from_dict_unknown_key(self):
        """Test unknown keys are reported."""
        with self.assertRaises(ConfigValidationError):
            GAConfig.from_dict({'populaton_size': 20})

    def test_with_overrides(self):
        """Test overrides produce a new validated config."""
        config = GAConfig()
        updated = config.with_overrides(generations=10)

        self.assertEqual(updated.generations, 10)
        self.assertEqual(config.generations, 2500)

        with self.assertRaises(ConfigValidationError):
            config.with_overrides(mutation_rate=2.0)


class TestLoadGAConfig(unittest.TestCase):
    """Test GA configuration YAML loading."""

    def setUp(self):
        """Create temporary directory."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Remove temporary directory."""
        shutil.rmtree(self.temp_dir)

    def test_load_yaml(self):
        """Test loading a GA config file."""
        path = self.temp_dir / "ga.yaml"
        with open(path, 'w') as f:
            yaml.safe_dump({
                'population_size': 40,
                'category_caps': {'GK': 1, 'DEF': 4, 'MID': 4, 'FWD': 2},
                'squad_size': 11,
            }, f)

        config = load_ga_config(path)

        self.assertEqual(config.population_size, 40)
        self.assertEqual(config.squad_size, 11)
        self.assertEqual(config.category_cap('FWD'), 2)

    def test_load_empty_yaml(self):
        """Test an empty file gives the default config."""
        path = self.temp_dir / "empty.yaml"
        path.write_text("")

        self.assertEqual(load_ga_config(path).population_size, 150)

    def test_load_missing_file(self):
        """Test a missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            load_ga_config(self.temp_dir / "missing.yaml")

    def test_load_invalid_yaml(self):
        """Test malformed YAML raises ConfigValidationError."""
        path = self.temp_dir / "bad.yaml"
        path.write_text("population_size: [1, 2\n")

        with self.assertRaises(ConfigValidationError):
            load_ga_config(path)

    def test_packaged_default_config(self):
        """Test the packaged config file matches the defaults."""
        path = Path(__file__).resolve().parents[2] / "squad_ga" / "squad_ga_config.yaml"
        self.assertEqual(load_ga_config(path), GAConfig())


if __name__ == '__main__':
    unittest.main()
