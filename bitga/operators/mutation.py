"""
bitga/operators/mutation.py

Bit-flip mutation for fixed-length bit genomes.

Each gene is flipped (g -> 1 - g) independently with probability p.  The
input array is never modified; a new array is returned.

Public API
----------
    flip_bits(genome, p_mutation, rng) → np.ndarray
"""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


def check_probability(p_mutation: float) -> float:
    """Return p_mutation as a float, raising ValueError outside [0, 1]."""
    p = float(p_mutation)
    if not (0.0 <= p <= 1.0):
        raise ValueError(f"Mutation probability must be in [0, 1], got {p_mutation}.")
    return p


def flip_bits(
    genome: np.ndarray,
    p_mutation: float,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """
    Flip every gene independently with probability p_mutation.

    Parameters
    ----------
    genome:
        Parent bit array.  Not modified.
    p_mutation:
        Per-gene flip probability in [0, 1].  0 returns an identical copy,
        1 returns the exact complement.
    rng:
        NumPy random generator.

    Returns
    -------
    np.ndarray
        New bit array of the same length and dtype.

    Raises
    ------
    ValueError
        If p_mutation lies outside [0, 1].
    """
    p = check_probability(p_mutation)
    if rng is None:
        rng = np.random.default_rng()

    flips = rng.random(len(genome)) < p
    mutant = np.array(genome, copy=True)
    mutant[flips] = 1 - mutant[flips]
    logger.debug(f"Flipped {int(flips.sum())}/{len(genome)} genes (p={p})")
    return mutant
