from pathlib import Path

import pytest

from phraseset.config import CSV_DELIMITER, Config, GeneticConfig, RANDOM_SEED, get_config


def test_random_seed_set():
    """RANDOM_SEED convenience constant should match Config defaults."""

    assert RANDOM_SEED == Config.RANDOM_SEED == 42


def test_config_singleton():
    """get_config should return the same singleton instance across calls."""

    c1 = get_config()
    c2 = get_config()
    assert c1 is c2
    assert isinstance(c1, Config)


def test_default_paths_are_paths():
    """Path defaults should be typed as `Path`."""

    assert isinstance(Config.OUTPUT_DIR, Path)


def test_genetic_defaults_follow_config():
    """GeneticConfig defaults should mirror the GA_* settings."""

    cfg = GeneticConfig()
    assert cfg.population_size == Config.GA_POPULATION_SIZE == 500
    assert cfg.elitism is True
    assert cfg.elitism_percentage == 5
    assert cfg.crossover_probability == pytest.approx(0.8)
    assert cfg.mutation_probability == pytest.approx(0.2)
    assert cfg.genes_to_change == 20
    assert cfg.max_generations == 200


def test_genetic_config_is_frozen():
    cfg = GeneticConfig()
    with pytest.raises(Exception):
        cfg.population_size = 10  # type: ignore[misc]


def test_csv_delimiter():
    assert CSV_DELIMITER == ";"
