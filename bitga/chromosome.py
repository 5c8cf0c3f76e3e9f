"""
bitga/chromosome.py

The Chromosome represents one candidate solution of a binary-encoded genetic
algorithm: a fixed-length sequence of 0/1 genes plus everything the outer
generational loop needs to evaluate and breed it.

  - a reference to the fitness function shared by the whole run
  - an optional decoder mapping the bits to a phenotype value
  - the cached fitness, filled in by compute_fitness()
  - the roulette value written by a selection algorithm
  - an optional boolean mask consumed by masked-uniform crossover

Lifecycle
---------
A Chromosome is created in one of three ways:

    Chromosome(genome, fitness_fn)              explicit bits
    Chromosome.random(size, fitness_fn, rng)    i.i.d. uniform bits
    Chromosome.from_fragments(fitness_fn, *fragments)
                                                concatenation, used to
                                                assemble offspring

The genome is stored as a read-only int8 array.  It only changes when
mutate() swaps in a freshly built mutant genome.  fitness, roulette_value,
mask and decoder are set after construction by the owning algorithm.

Fitness is never recomputed automatically.  mutate() clears the cached value
so callers must call compute_fitness() again before reading it.

Usage
-----
    from bitga.chromosome import Chromosome

    rng = np.random.default_rng(42)
    population = Chromosome.generate_population(20, 16, onemax, rng=rng)
    for ind in population:
        ind.compute_fitness()
    child1, child2 = population[0].crossover(population[1], "two-point", rng=rng)
    child1.mutate(0.01, rng=rng)
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import numpy as np

from bitga.operators.base import CROSSOVER, CROSSOVER_REGISTRY, as_genome
from bitga.operators.mutation import flip_bits
import bitga.operators.crossover  # noqa: F401  (registers crossover operators)

logger = logging.getLogger(__name__)

#: Signature shared by fitness functions and decoders.
ChromosomeFn = Callable[["Chromosome"], float]


class DecoderNotSetError(RuntimeError):
    """Raised by Chromosome.decode() when no decoder has been assigned."""


class Chromosome:
    """
    A fixed-length bit genome with its fitness bookkeeping.

    Parameters
    ----------
    genome:
        Sequence of 0/1 values.  Copied; the caller's sequence is not kept.
    fitness_fn:
        Callable ``(Chromosome) -> float``.  Held by reference and passed on
        unchanged to every mutant and offspring.

    Raises
    ------
    ValueError
        If any gene is not exactly 0 or 1.
    """

    def __init__(self, genome: Sequence[int] | np.ndarray, fitness_fn: ChromosomeFn) -> None:
        self._genome = as_genome(genome)
        self._genome.flags.writeable = False
        self.fitness_fn = fitness_fn
        self.decoder: ChromosomeFn | None = None
        self.fitness: float | None = None
        self.roulette_value: float | None = None
        self._mask: np.ndarray | None = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def random(
        cls,
        size: int,
        fitness_fn: ChromosomeFn,
        rng: np.random.Generator | None = None,
    ) -> "Chromosome":
        """Create a chromosome of ``size`` genes drawn uniformly from {0, 1}."""
        if size < 0:
            raise ValueError(f"Chromosome size must be >= 0, got {size}.")
        if rng is None:
            rng = np.random.default_rng()
        return cls(rng.integers(0, 2, size=size, dtype=np.int8), fitness_fn)

    @classmethod
    def from_fragments(
        cls,
        fitness_fn: ChromosomeFn,
        *fragments: Sequence[int] | np.ndarray,
    ) -> "Chromosome":
        """
        Create a chromosome whose genome is the concatenation of ``fragments``.

        The fragments are joined in order; their lengths are not checked
        against any parent size.

        Raises
        ------
        ValueError
            If no fragment is given.
        """
        if not fragments:
            raise ValueError("from_fragments needs at least one fragment.")
        return cls(np.concatenate([as_genome(f) for f in fragments]), fitness_fn)

    @classmethod
    def generate_population(
        cls,
        population_size: int,
        chromosome_size: int,
        fitness_fn: ChromosomeFn,
        rng: np.random.Generator | None = None,
    ) -> list["Chromosome"]:
        """
        Generate independent random chromosomes sharing one fitness function.

        Parameters
        ----------
        population_size:
            Number of chromosomes to create.
        chromosome_size:
            Number of genes in each chromosome.
        fitness_fn:
            Fitness function shared by reference by every member.
        rng:
            NumPy random generator for reproducibility.

        Returns
        -------
        list[Chromosome]
            Chromosomes in creation order.  No fitness is computed.
        """
        if population_size < 0:
            raise ValueError(f"population_size must be >= 0, got {population_size}.")
        if rng is None:
            rng = np.random.default_rng()

        population = [
            cls.random(chromosome_size, fitness_fn, rng=rng)
            for _ in range(population_size)
        ]
        logger.debug(
            f"Generated population of {population_size} chromosomes "
            f"x {chromosome_size} genes"
        )
        return population

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def genome(self) -> np.ndarray:
        """Read-only view of the genes."""
        return self._genome

    @property
    def size(self) -> int:
        return len(self._genome)

    def __len__(self) -> int:
        return len(self._genome)

    @property
    def mask(self) -> np.ndarray | None:
        return self._mask

    @mask.setter
    def mask(self, mask: Sequence[bool] | np.ndarray | None) -> None:
        if mask is None:
            self._mask = None
            return
        mask = np.array(mask, dtype=bool).reshape(-1)
        if len(mask) != self.size:
            raise ValueError(
                f"Mask length ({len(mask)}) must equal chromosome size ({self.size})."
            )
        self._mask = mask

    def set_mask(self, mask: Sequence[bool] | np.ndarray | None) -> None:
        self.mask = mask

    def set_roulette_value(self, value: float) -> None:
        """Store the selection weight computed by an external selection step."""
        self.roulette_value = float(value)

    def set_decoder(self, decoder: ChromosomeFn) -> None:
        self.decoder = decoder

    # ------------------------------------------------------------------
    # Fitness and decoding
    # ------------------------------------------------------------------

    def compute_fitness(self) -> float:
        """
        Evaluate the fitness function on the current genome and cache it.

        Exceptions raised by the fitness function propagate unchanged and
        leave the cached value as it was.
        """
        self.fitness = self.fitness_fn(self)
        return self.fitness

    def decode(self) -> float:
        """
        Apply the decoder to this chromosome.  The result is not cached.

        Raises
        ------
        DecoderNotSetError
            If set_decoder() was never called.
        """
        if self.decoder is None:
            raise DecoderNotSetError(
                "decoder not set: call set_decoder() before decode()."
            )
        return self.decoder(self)

    def log_fitness(self, index: int) -> None:
        """Log this chromosome's cached fitness under a population index."""
        if self.fitness is None:
            logger.info(f"Individual {index} -> fitness N/A")
        else:
            logger.info(f"Individual {index} -> fitness {self.fitness:f}")

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def create_mutant(
        self,
        p_mutation: float,
        rng: np.random.Generator | None = None,
    ) -> "Chromosome":
        """
        Return a new chromosome with each gene flipped with probability p_mutation.

        The receiver is not modified.  The mutant shares the fitness function
        and has no fitness yet.
        """
        return type(self)(flip_bits(self._genome, p_mutation, rng=rng), self.fitness_fn)

    def mutate(
        self,
        p_mutation: float,
        rng: np.random.Generator | None = None,
    ) -> None:
        """
        Replace this chromosome's genome with a mutant of itself.

        The cached fitness is cleared; call compute_fitness() to refresh it.
        The genome is only swapped once the mutant has been built, so a
        failing call leaves the chromosome unchanged.
        """
        mutant = self.create_mutant(p_mutation, rng=rng)
        self._genome = mutant._genome
        self.fitness = None

    # ------------------------------------------------------------------
    # Crossover
    # ------------------------------------------------------------------

    def crossover(
        self,
        other: "Chromosome",
        strategy: str,
        rng: np.random.Generator | None = None,
    ) -> tuple["Chromosome", "Chromosome"]:
        """
        Recombine this chromosome with ``other`` into two offspring.

        Parameters
        ----------
        other:
            Second parent.  Must have the same size as this chromosome.
        strategy:
            One of the CROSSOVER names: "one-point", "two-point", "uniform",
            "masked-uniform".  Masked-uniform reads this chromosome's mask.
        rng:
            NumPy random generator (used by uniform crossover).

        Returns
        -------
        tuple[Chromosome, Chromosome]
            Two new offspring sharing this chromosome's fitness function.
            For an unknown strategy the parents themselves are returned
            unchanged and a warning is logged.

        Raises
        ------
        ValueError
            If the parents differ in size, or for masked-uniform when the
            mask is missing or has the wrong length.
        """
        operator = CROSSOVER_REGISTRY.get(strategy)
        if operator is None:
            logger.warning(
                f"Unknown crossover strategy '{strategy}'; returning parents "
                f"unchanged. Known strategies: {sorted(CROSSOVER.all())}"
            )
            return self, other

        genome1, genome2 = operator(self._genome, other._genome, rng=rng, mask=self._mask)
        return (
            type(self).from_fragments(self.fitness_fn, genome1),
            type(self).from_fragments(self.fitness_fn, genome2),
        )

    # ------------------------------------------------------------------
    # Representation
    # ------------------------------------------------------------------

    def to_bitstring(self) -> str:
        return "".join(str(int(g)) for g in self._genome)

    def __repr__(self) -> str:
        fit = f"{self.fitness:.4f}" if self.fitness is not None else "N/A"
        return f"Chromosome(size={self.size}, genome={self.to_bitstring()}, fitness={fit})"
