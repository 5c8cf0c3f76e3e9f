"""
bitga/operators/base.py

Abstract base class and registry for crossover operators.

Every crossover takes two parent genomes of equal length and returns two
child genomes.  The operator never modifies its inputs in place.  Operators
work on plain bit arrays rather than Chromosome objects so they can be reused
by anything that stores a genome as a sequence of 0/1 values.

Operator registry
-----------------
Operators are registered by strategy name in CROSSOVER_REGISTRY so a caller
can pick one from a configuration string:

    from bitga.operators.base import CROSSOVER_REGISTRY
    op = CROSSOVER_REGISTRY["two-point"]

Adding a new operator
---------------------
1. Subclass CrossoverOperator in bitga/operators/crossover.py and implement apply()
2. Add the name to the CROSSOVER namespace below
3. Add an instance to CROSSOVER_REGISTRY at the bottom of crossover.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np


# ---------------------------------------------------------------------------
# Strategy names
# ---------------------------------------------------------------------------

class CROSSOVER:
    """
    Namespace of valid crossover strategy strings.

    Plain strings so they can be compared directly against YAML values and
    command-line arguments.
    """
    ONE_POINT      = "one-point"
    TWO_POINT      = "two-point"
    UNIFORM        = "uniform"
    MASKED_UNIFORM = "masked-uniform"

    @classmethod
    def all(cls) -> set[str]:
        return {cls.ONE_POINT, cls.TWO_POINT, cls.UNIFORM, cls.MASKED_UNIFORM}

    @classmethod
    def is_known(cls, name: str) -> bool:
        return name in cls.all()


# ---------------------------------------------------------------------------
# Genome helpers
# ---------------------------------------------------------------------------

def as_genome(bits: Sequence[int] | np.ndarray) -> np.ndarray:
    """
    Convert a bit sequence into a fresh int8 array and check every gene.

    Raises
    ------
    ValueError
        If any entry is not exactly 0 or 1.
    """
    raw = np.asarray(bits).reshape(-1)
    valid = np.isin(raw, (0, 1))
    if not valid.all():
        bad = np.unique(raw[~valid]).tolist()
        raise ValueError(f"Genome entries must be 0 or 1, got {bad}.")
    return raw.astype(np.int8)


# ---------------------------------------------------------------------------
# Base class
# ---------------------------------------------------------------------------

class CrossoverOperator(ABC):
    """
    Abstract base class for two-parent, two-child crossover operators.

    Subclasses implement apply() and set strategy_name.
    """

    #: CROSSOVER constant string this operator is registered under
    strategy_name: str = ""

    @abstractmethod
    def apply(
        self,
        genome_a: np.ndarray,
        genome_b: np.ndarray,
        rng: np.random.Generator | None = None,
        **kwargs,
    ) -> tuple[np.ndarray, np.ndarray]:
        """
        Recombine two parent genomes.

        Parameters
        ----------
        genome_a:
            Bits of the invoking parent.  Not modified.
        genome_b:
            Bits of the other parent, same length as genome_a.  Not modified.
        rng:
            NumPy random generator for operators that draw random numbers.
            A new one is created internally if None.
        **kwargs:
            Operator-specific keyword arguments (e.g. mask for masked-uniform).

        Returns
        -------
        tuple[np.ndarray, np.ndarray]
            The two child genomes, each the same length as the parents.
        """
        ...

    def __call__(
        self,
        genome_a: np.ndarray,
        genome_b: np.ndarray,
        rng: np.random.Generator | None = None,
        **kwargs,
    ) -> tuple[np.ndarray, np.ndarray]:
        """Check the parents have equal length, then apply the operator."""
        if len(genome_a) != len(genome_b):
            raise ValueError(
                f"{self.__class__.__name__} needs parents of equal size, "
                f"got {len(genome_a)} and {len(genome_b)}."
            )
        return self.apply(genome_a, genome_b, rng=rng, **kwargs)


# ---------------------------------------------------------------------------
# Operator registry (populated by importing bitga.operators.crossover)
# ---------------------------------------------------------------------------

CROSSOVER_REGISTRY: dict[str, CrossoverOperator] = {}
