"""
tests/conftest.py

Shared pytest fixtures for the bitga test suite.

Fixture overview
----------------
Randomness
    rng                 Seeded NumPy Generator, fresh for every test

Fitness
    onemax_fn           The one-max fitness function
    counting_fitness    One-max wrapped to count how often it is called

Parents
    parent_a            Chromosome 0 1 0 1 1 0 (length 6)
    parent_b            Chromosome 1 1 0 0 0 1 (length 6)
    zeros_and_ones      Pair of all-0 and all-1 chromosomes of length 64

Config
    config_path         tmp_path-based bitga.yaml holding a valid config
"""

from __future__ import annotations

import textwrap

import numpy as np
import pytest

from bitga.chromosome import Chromosome
from bitga.decoders import onemax


class CountingFitness:
    """One-max fitness that records every chromosome it is called with."""

    def __init__(self):
        self.calls = []

    def __call__(self, chromosome) -> float:
        self.calls.append(chromosome)
        return onemax(chromosome)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(12345)


@pytest.fixture
def onemax_fn():
    return onemax


@pytest.fixture
def counting_fitness() -> CountingFitness:
    return CountingFitness()


@pytest.fixture
def parent_a(onemax_fn) -> Chromosome:
    return Chromosome([0, 1, 0, 1, 1, 0], onemax_fn)


@pytest.fixture
def parent_b(onemax_fn) -> Chromosome:
    return Chromosome([1, 1, 0, 0, 0, 1], onemax_fn)


@pytest.fixture
def zeros_and_ones(onemax_fn) -> tuple[Chromosome, Chromosome]:
    """Parents whose genes identify their source: A is all 0, B is all 1."""
    return Chromosome(np.zeros(64, dtype=int), onemax_fn), Chromosome(np.ones(64, dtype=int), onemax_fn)


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "bitga.yaml"
    path.write_text(textwrap.dedent("""\
        ga:
          population_size: 20
          chromosome_size: 12
          mutation_probability: 0.1
          crossover: two-point
          seed: 7

        fitness: onemax

        decoder:
          type: real
          lower: -1.0
          upper: 1.0
    """))
    return path
