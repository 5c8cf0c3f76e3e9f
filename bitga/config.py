"""
bitga/config.py

Load and validate a bitga.yaml file into typed configuration models.

Usage
-----
    from bitga.config import load_config

    cfg = load_config("bitga.yaml")
    print(cfg.ga.population_size)
    print(cfg.ga.crossover)

All models use pydantic v2.  Integer inputs for float fields (e.g.
mutation_probability: 0) are coerced automatically.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import yaml
from pydantic import BaseModel, field_validator, model_validator

from bitga.decoders import FITNESS_FUNCTIONS, integer_decoder, real_decoder
from bitga.operators.base import CROSSOVER


# ---------------------------------------------------------------------------
# Sub-models
# ---------------------------------------------------------------------------


class GAConfig(BaseModel):
    """
    Genetic algorithm parameters consumed by the chromosome operators.

    crossover must name one of the registered strategies.  Chromosome.crossover
    itself tolerates unknown names, but a typo in a config file is rejected
    here so it cannot silently disable recombination.
    """

    population_size: int
    chromosome_size: int
    mutation_probability: float = 0.01  # per-gene flip probability
    crossover: str = CROSSOVER.ONE_POINT
    seed: int | None = None             # None -> nondeterministic run

    @field_validator("population_size", "chromosome_size")
    @classmethod
    def _positive_int(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"GA size parameters must be >= 1, got {v}.")
        return v

    @field_validator("mutation_probability")
    @classmethod
    def _valid_probability(cls, v: float) -> float:
        if not (0.0 <= v <= 1.0):
            raise ValueError(f"mutation_probability must be in [0, 1], got {v}.")
        return v

    @field_validator("crossover")
    @classmethod
    def _known_crossover(cls, v: str) -> str:
        if not CROSSOVER.is_known(v):
            raise ValueError(
                f"crossover must be one of {sorted(CROSSOVER.all())}, got '{v}'."
            )
        return v


class DecoderConfig(BaseModel):
    """
    Phenotype decoder attached to every chromosome.

    type options
    ------------
    "integer"  – unsigned integer, most significant bit first
    "real"     – integer scaled linearly onto [lower, upper]
    """

    type: str
    lower: float = 0.0
    upper: float = 1.0

    @field_validator("type")
    @classmethod
    def _valid_type(cls, v: str) -> str:
        allowed = {"integer", "real"}
        if v not in allowed:
            raise ValueError(f"decoder type must be one of {allowed}, got '{v}'.")
        return v

    @model_validator(mode="after")
    def _lower_below_upper(self) -> "DecoderConfig":
        if self.type == "real" and self.lower >= self.upper:
            raise ValueError(
                f"decoder lower ({self.lower}) must be less than upper ({self.upper})."
            )
        return self

    def build(self) -> Callable:
        """Return the decoder callable described by this config."""
        if self.type == "integer":
            return integer_decoder
        return real_decoder(self.lower, self.upper)


# ---------------------------------------------------------------------------
# Root config model
# ---------------------------------------------------------------------------


class BitgaConfig(BaseModel):
    """
    Root configuration object loaded from bitga.yaml.

    Example
    -------
    .. code-block:: yaml

        ga:
          population_size: 20
          chromosome_size: 16
          mutation_probability: 0.05
          crossover: two-point
          seed: 42

        fitness: onemax

        decoder:
          type: real
          lower: -5.0
          upper: 5.0
    """

    ga: GAConfig
    fitness: str = "onemax"
    decoder: DecoderConfig | None = None

    @field_validator("fitness")
    @classmethod
    def _known_fitness(cls, v: str) -> str:
        if v not in FITNESS_FUNCTIONS:
            raise ValueError(
                f"fitness must be one of {sorted(FITNESS_FUNCTIONS)}, got '{v}'."
            )
        return v

    def fitness_fn(self) -> Callable:
        return FITNESS_FUNCTIONS[self.fitness]


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------


def load_config(path: str | Path) -> BitgaConfig:
    """
    Load and validate a bitga.yaml file.

    Parameters
    ----------
    path:
        Path to the YAML configuration file.

    Returns
    -------
    BitgaConfig
        Fully validated configuration object.

    Raises
    ------
    FileNotFoundError
        If the YAML file does not exist.
    ValueError
        If the file is empty or its top level is not a mapping.
    pydantic.ValidationError
        If the YAML content fails validation.  The message lists every field
        that failed and why.
    yaml.YAMLError
        If the file is not valid YAML.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    if path.stat().st_size == 0:
        raise ValueError(
            f"Configuration file is empty: {path}\n"
            "Generate a template with: bitga init > bitga.yaml"
        )

    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh)

    if raw is None:
        raise ValueError(
            f"{path} contains only comments or whitespace, no YAML keys found.\n"
            "Generate a template with: bitga init > bitga.yaml"
        )
    if not isinstance(raw, dict):
        raise ValueError(
            f"Expected a YAML mapping at the top level, got {type(raw).__name__}.  "
            "Make sure bitga.yaml starts with a key like 'ga:' at column 0."
        )

    return BitgaConfig.model_validate(raw)


CONFIG_TEMPLATE = """\
# bitga.yaml: bitga configuration file

# ---------------------------------------------------------------------------
# Genetic algorithm
# ---------------------------------------------------------------------------
ga:
  population_size: 20
  chromosome_size: 16
  mutation_probability: 0.05   # Per-gene flip probability, in [0, 1]
  crossover: two-point         # one-point | two-point | uniform | masked-uniform
  seed: 42                     # Remove for a nondeterministic run

# ---------------------------------------------------------------------------
# Fitness function
# ---------------------------------------------------------------------------
fitness: onemax                # onemax | leading-ones

# ---------------------------------------------------------------------------
# Phenotype decoder (optional)
# ---------------------------------------------------------------------------
decoder:
  type: real                   # integer | real
  lower: -5.0
  upper: 5.0
"""


def generate_example_config(path: str | Path = "bitga.yaml.example") -> Path:
    """
    Write a commented example bitga.yaml to disk and return its path.
    """
    path = Path(path)
    path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    return path
