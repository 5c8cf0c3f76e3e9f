"""
bitga/operators/crossover.py

Crossover operators for fixed-length bit genomes.

Four strategies
---------------
one_point_crossover(a, b)
    Split both parents at len // 2 and swap the tails.

two_point_crossover(a, b)
    Split both parents into thirds at len // 3 and 2 * len // 3 and swap the
    middle thirds.

uniform_crossover(a, b, rng)
    Flip a fair coin per position.  Heads: child 1 takes a's bit and child 2
    takes b's bit.  Tails: the reverse.

masked_uniform_crossover(a, b, mask)
    Same as uniform but the per-position decision is read from a boolean
    mask (True -> child 1 takes a's bit).

All four:
  - Never modify the input arrays
  - Return two new arrays with the same length as the parents
  - At every position, the two children hold one gene from each parent

Public API
----------
    one_point_crossover(a, b)              → (child1, child2)
    two_point_crossover(a, b)              → (child1, child2)
    uniform_crossover(a, b, rng)           → (child1, child2)
    masked_uniform_crossover(a, b, mask)   → (child1, child2)
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from bitga.operators.base import CROSSOVER, CROSSOVER_REGISTRY, CrossoverOperator


# ---------------------------------------------------------------------------
# Public crossover functions
# ---------------------------------------------------------------------------

def one_point_crossover(
    a: np.ndarray,
    b: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Swap the second halves of two parents.

    For parents of length 4 the children are [a0, a1, b2, b3] and
    [b0, b1, a2, a3].  With an odd length the first "half" is the shorter one.
    """
    half = len(a) // 2
    child1 = np.concatenate([a[:half], b[half:]])
    child2 = np.concatenate([b[:half], a[half:]])
    return child1, child2


def two_point_crossover(
    a: np.ndarray,
    b: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Swap the middle thirds of two parents.

    Cut points are len // 3 and 2 * len // 3.  For length 6 the children are
    [a0, a1, b2, b3, a4, a5] and [b0, b1, a2, a3, b4, b5].
    """
    n = len(a)
    first, second = n // 3, 2 * n // 3
    child1 = np.concatenate([a[:first], b[first:second], a[second:]])
    child2 = np.concatenate([b[:first], a[first:second], b[second:]])
    return child1, child2


def uniform_crossover(
    a: np.ndarray,
    b: np.ndarray,
    rng: np.random.Generator | None = None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Pick each gene from either parent with probability 0.5.

    Parameters
    ----------
    a, b:
        Parent genomes of equal length.  Not modified.
    rng:
        NumPy random generator.

    Returns
    -------
    (child1, child2)
        child2 always carries the gene child1 did not take.
    """
    if rng is None:
        rng = np.random.default_rng()
    take_a = rng.random(len(a)) < 0.5
    return _select(a, b, take_a)


def masked_uniform_crossover(
    a: np.ndarray,
    b: np.ndarray,
    mask: Sequence[bool] | np.ndarray | None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Uniform crossover driven by a precomputed boolean mask.

    Parameters
    ----------
    a, b:
        Parent genomes of equal length.  Not modified.
    mask:
        One boolean per position.  True gives child 1 the gene of ``a`` and
        child 2 the gene of ``b``; False swaps them.

    Raises
    ------
    ValueError
        If the mask is missing or its length differs from the parents'.
    """
    if mask is None:
        raise ValueError(
            "masked-uniform crossover requires a mask; set one on the "
            "invoking chromosome first."
        )
    mask = np.asarray(mask, dtype=bool).reshape(-1)
    if len(mask) != len(a):
        raise ValueError(
            f"Mask length ({len(mask)}) must equal genome size ({len(a)})."
        )
    return _select(a, b, mask)


def _select(
    a: np.ndarray,
    b: np.ndarray,
    take_a: np.ndarray,
) -> tuple[np.ndarray, np.ndarray]:
    return np.where(take_a, a, b).astype(a.dtype), np.where(take_a, b, a).astype(a.dtype)


# ---------------------------------------------------------------------------
# CrossoverOperator subclasses (for registry)
# ---------------------------------------------------------------------------

class OnePointCrossover(CrossoverOperator):
    strategy_name = CROSSOVER.ONE_POINT

    def apply(self, genome_a, genome_b, rng=None, **kwargs):
        return one_point_crossover(genome_a, genome_b)


class TwoPointCrossover(CrossoverOperator):
    strategy_name = CROSSOVER.TWO_POINT

    def apply(self, genome_a, genome_b, rng=None, **kwargs):
        return two_point_crossover(genome_a, genome_b)


class UniformCrossover(CrossoverOperator):
    strategy_name = CROSSOVER.UNIFORM

    def apply(self, genome_a, genome_b, rng=None, **kwargs):
        return uniform_crossover(genome_a, genome_b, rng=rng)


class MaskedUniformCrossover(CrossoverOperator):
    strategy_name = CROSSOVER.MASKED_UNIFORM

    def apply(self, genome_a, genome_b, rng=None, **kwargs):
        return masked_uniform_crossover(genome_a, genome_b, kwargs.get("mask"))


CROSSOVER_REGISTRY[CROSSOVER.ONE_POINT]      = OnePointCrossover()
CROSSOVER_REGISTRY[CROSSOVER.TWO_POINT]      = TwoPointCrossover()
CROSSOVER_REGISTRY[CROSSOVER.UNIFORM]        = UniformCrossover()
CROSSOVER_REGISTRY[CROSSOVER.MASKED_UNIFORM] = MaskedUniformCrossover()
