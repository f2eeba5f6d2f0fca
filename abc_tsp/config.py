import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT = "Default"


class GenerationMethod(str, Enum):
    SWAP = "Swap"
    INSERT = "Insert"
    REVERSE = "Reverse"
    PARTIAL_SHUFFLE = "PartialShuffle"

    @classmethod
    def parse(cls, value: Union[str, "GenerationMethod"]) -> "GenerationMethod":
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            names = ", ".join(m.value for m in cls)
            raise ConfigError(f"Unknown generation method {value!r} (expected one of {names}).") from None


@dataclass(frozen=True)
class ColonyConfig:
    colony_size: int = 20
    candidate_amount: Optional[int] = None
    max_unimproved: int = 10
    max_iterations: int = 1000
    improvement_threshold: float = 0.0
    concurrent_count: Optional[int] = None
    generation_method: GenerationMethod = GenerationMethod.REVERSE
    random_seed: Optional[int] = None

    def __post_init__(self):
        # Resolve the "Default" sentinels before validating.
        if self.candidate_amount is None and _is_int(self.colony_size):
            object.__setattr__(self, "candidate_amount", self.colony_size // 2)
        if self.concurrent_count is None:
            object.__setattr__(self, "concurrent_count", os.cpu_count() or 1)
        object.__setattr__(self, "generation_method", GenerationMethod.parse(self.generation_method))
        self.validate()

    @property
    def population_size(self) -> int:
        return self.colony_size // 2

    def validate(self) -> None:
        for name in ("colony_size", "candidate_amount", "max_unimproved", "max_iterations", "concurrent_count"):
            if not _is_int(getattr(self, name)):
                raise ConfigError(f"{name} must be an integer, got {getattr(self, name)!r}.")
        if self.colony_size < 2 or self.colony_size % 2 != 0:
            raise ConfigError(f"Invalid colony size {self.colony_size}: must be an even number >= 2.")
        if self.candidate_amount < 1:
            raise ConfigError(f"Invalid candidate amount {self.candidate_amount}: must be >= 1.")
        if self.max_unimproved < 1:
            raise ConfigError(f"Invalid unimproved times {self.max_unimproved}: must be >= 1.")
        if self.max_iterations < 1:
            raise ConfigError(f"Invalid iterations {self.max_iterations}: must be >= 1.")
        if self.concurrent_count < 1:
            raise ConfigError(f"Invalid concurrent count {self.concurrent_count}: must be >= 1.")
        if isinstance(self.improvement_threshold, bool) or not isinstance(self.improvement_threshold, (int, float)):
            raise ConfigError(f"improvement_threshold must be numeric, got {self.improvement_threshold!r}.")
        if not 0.0 <= self.improvement_threshold <= 100.0:
            raise ConfigError(f"Invalid improvement threshold {self.improvement_threshold}: must be in [0, 100].")
        if self.random_seed is not None and not _is_int(self.random_seed):
            raise ConfigError(f"random_seed must be an integer, got {self.random_seed!r}.")
        if self.improvement_threshold > 1.0:
            logger.warning(
                "improvement_threshold=%s exceeds 1; relative improvements are fractions, "
                "so the first improvement of the best tour will stop the run.",
                self.improvement_threshold,
            )


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _parse_int(key: str, value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"Invalid configuration: {key} = {value!r} is not an integer.") from None


def _parse_float(key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError:
        raise ConfigError(f"Invalid configuration: {key} = {value!r} is not a number.") from None


def _parse_optional_int(key: str, value: str) -> Optional[int]:
    if value == DEFAULT:
        return None
    return _parse_int(key, value)


_PARSERS = {
    "colony_size": _parse_int,
    "candidate_amount": _parse_optional_int,
    "max_unimproved": _parse_int,
    "max_iterations": _parse_int,
    "improvement_threshold": _parse_float,
    "concurrent_count": _parse_optional_int,
    "generation_method": lambda key, value: GenerationMethod.parse(value),
    "random_seed": _parse_optional_int,
}


def parse_config(text: str) -> Dict[str, object]:
    """Parse ``key = value`` lines into keyword arguments for :class:`ColonyConfig`."""
    values: Dict[str, object] = {}
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        parts = [part.strip() for part in line.split("=")]
        if len(parts) != 2:
            raise ConfigError(f"Invalid configuration line {lineno}: {raw!r}.")
        key, value = parts
        if key not in _PARSERS:
            raise ConfigError(f"Unknown configuration key {key!r} on line {lineno}.")
        values[key] = _PARSERS[key](key, value)
    return values


def load_config(path: Optional[Path] = None, **overrides) -> ColonyConfig:
    values: Dict[str, object] = {}
    if path is not None:
        path = Path(path)
        try:
            text = path.read_text()
        except OSError as exc:
            raise ConfigError(f"Fail read config file {path}: {exc}") from exc
        values = parse_config(text)
    values.update({k: v for k, v in overrides.items() if v is not None})
    return ColonyConfig(**values)
