import os

import pytest

from abc_tsp.config import ColonyConfig, GenerationMethod, load_config, parse_config
from abc_tsp.errors import ConfigError


def test_defaults_resolved():
    cfg = ColonyConfig(colony_size=10)
    assert cfg.candidate_amount == 5
    assert cfg.concurrent_count == (os.cpu_count() or 1)
    assert cfg.population_size == 5
    assert cfg.generation_method is GenerationMethod.REVERSE


def test_method_from_name():
    cfg = ColonyConfig(generation_method="PartialShuffle")
    assert cfg.generation_method is GenerationMethod.PARTIAL_SHUFFLE


def test_frozen():
    cfg = ColonyConfig()
    with pytest.raises(AttributeError):
        cfg.colony_size = 4


@pytest.mark.parametrize(
    "kwargs",
    [
        {"colony_size": 0},
        {"colony_size": 7},
        {"colony_size": -2},
        {"improvement_threshold": 150},
        {"improvement_threshold": -0.5},
        {"generation_method": "TwoOpt"},
        {"generation_method": "swap"},
        {"candidate_amount": 0},
        {"max_unimproved": 0},
        {"max_iterations": 0},
        {"concurrent_count": 0},
        {"colony_size": 4.0},
        {"random_seed": "abc"},
    ],
)
def test_rejects_invalid(kwargs):
    with pytest.raises(ConfigError):
        ColonyConfig(**kwargs)


def test_high_threshold_warns(caplog):
    with caplog.at_level("WARNING", logger="abc_tsp.config"):
        ColonyConfig(improvement_threshold=5)
    assert "exceeds 1" in caplog.text


CONFIG_TEXT = """
# colony settings
colony_size = 40
candidate_amount = Default
max_unimproved = 25
max_iterations = 300
improvement_threshold = 0.001
concurrent_count = 3
generation_method = Insert
"""


def test_parse_config():
    values = parse_config(CONFIG_TEXT)
    assert values["colony_size"] == 40
    assert values["candidate_amount"] is None
    assert values["generation_method"] is GenerationMethod.INSERT


def test_load_config(tmp_path):
    path = tmp_path / "abc.cfg"
    path.write_text(CONFIG_TEXT)
    cfg = load_config(path)
    assert cfg.colony_size == 40
    assert cfg.candidate_amount == 20
    assert cfg.max_unimproved == 25
    assert cfg.max_iterations == 300
    assert cfg.improvement_threshold == pytest.approx(0.001)
    assert cfg.concurrent_count == 3
    assert cfg.generation_method is GenerationMethod.INSERT
    assert cfg.random_seed is None


def test_load_config_overrides(tmp_path):
    path = tmp_path / "abc.cfg"
    path.write_text("colony_size = 6\nconcurrent_count = Default\n")
    cfg = load_config(path, random_seed=9, max_iterations=None)
    assert cfg.random_seed == 9
    assert cfg.max_iterations == ColonyConfig.max_iterations
    assert cfg.concurrent_count >= 1


@pytest.mark.parametrize(
    "text",
    [
        "colony_size 40",
        "colony_size = 4 = 4",
        "colony = 4",
        "colony_size = four",
        "improvement_threshold = lots",
        "generation_method = Shuffle",
        "colony_size = 5",
    ],
)
def test_load_config_errors(tmp_path, text):
    path = tmp_path / "abc.cfg"
    path.write_text(text)
    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.cfg")
