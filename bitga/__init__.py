"""
bitga

Binary-encoded genetic algorithm core: the Chromosome entity and its
fitness, decoding, mutation and crossover operators.

Submodules
----------
chromosome  Chromosome class, population generation, DecoderNotSetError
operators   Crossover strategies and bit-flip mutation on bit arrays
decoders    Reference fitness functions and integer/real decoders
config      bitga.yaml loading and validation (pydantic)
cli         `bitga` command-line entry point (click)
"""

from bitga.chromosome import Chromosome, DecoderNotSetError
from bitga.operators.base import CROSSOVER

__all__ = ["Chromosome", "DecoderNotSetError", "CROSSOVER"]
