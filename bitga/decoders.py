"""
bitga/decoders.py

Reference fitness functions and decoders for bit chromosomes.

A fitness function or decoder is any callable taking a Chromosome and
returning a float.  The ones here cover the textbook benchmarks and the
usual integer/real phenotype mappings; problem-specific functions are
supplied by the caller in exactly the same shape.

Fitness functions
-----------------
onemax          Number of 1 genes.
leading_ones    Length of the run of 1 genes at the start of the genome.

Decoders
--------
integer_decoder             Genome read as an unsigned big-endian integer.
real_decoder(lower, upper)  Integer value scaled linearly onto [lower, upper].

Usage
-----
    from bitga.decoders import onemax, real_decoder

    ind = Chromosome.random(16, onemax, rng=rng)
    ind.set_decoder(real_decoder(-5.0, 5.0))
    x = ind.decode()
"""

from __future__ import annotations

from typing import Callable

import numpy as np


def onemax(chromosome) -> float:
    """Count the 1 genes."""
    return float(np.count_nonzero(chromosome.genome))


def leading_ones(chromosome) -> float:
    """Count consecutive 1 genes from the start of the genome."""
    zeros = np.flatnonzero(chromosome.genome == 0)
    return float(zeros[0] if zeros.size else chromosome.size)


def integer_decoder(chromosome) -> float:
    """Read the genome as an unsigned integer, most significant bit first."""
    value = 0
    for gene in chromosome.genome:
        value = (value << 1) | int(gene)
    return float(value)


def real_decoder(lower: float, upper: float) -> Callable:
    """
    Build a decoder mapping the integer value of a genome onto [lower, upper].

    An all-zero genome decodes to ``lower`` and an all-one genome to
    ``upper``.  An empty genome decodes to ``lower``.

    Raises
    ------
    ValueError
        If lower >= upper.
    """
    if lower >= upper:
        raise ValueError(f"lower ({lower}) must be less than upper ({upper}).")

    def decode(chromosome) -> float:
        n = chromosome.size
        if n == 0:
            return float(lower)
        return lower + integer_decoder(chromosome) * (upper - lower) / (2 ** n - 1)

    return decode


#: Fitness functions selectable by name from bitga.yaml
FITNESS_FUNCTIONS: dict[str, Callable] = {
    "onemax":       onemax,
    "leading-ones": leading_ones,
}
