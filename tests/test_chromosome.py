"""
tests/test_chromosome.py

Tests for the Chromosome entity: construction, population generation,
fitness caching, decoding, mutation and the post-hoc setters.

Crossover is covered separately in test_crossover.py.
"""

from __future__ import annotations

import numpy as np
import pytest

from bitga.chromosome import Chromosome, DecoderNotSetError


class TestConstruction:

    def test_explicit_genome_is_copied(self, onemax_fn):
        bits = [1, 0, 1]
        ind = Chromosome(bits, onemax_fn)
        bits[0] = 0
        assert ind.genome.tolist() == [1, 0, 1]
        assert ind.size == 3
        assert len(ind) == 3

    def test_rejects_non_binary_genes(self, onemax_fn):
        with pytest.raises(ValueError, match="0 or 1"):
            Chromosome([0, 2, 1], onemax_fn)

    @pytest.mark.parametrize("genome", [
        [0.5, 1],
        [1.7, 0],
        np.array([256, 1]),
        np.array([257, 0]),
    ])
    def test_rejects_values_that_would_truncate_or_wrap(self, genome, onemax_fn):
        with pytest.raises(ValueError, match="0 or 1"):
            Chromosome(genome, onemax_fn)

    def test_from_fragments_rejects_non_binary_fragment(self, onemax_fn):
        with pytest.raises(ValueError, match="0 or 1"):
            Chromosome.from_fragments(onemax_fn, [0, 1], np.array([256]))

    def test_float_zeros_and_ones_are_accepted(self, onemax_fn):
        ind = Chromosome([1.0, 0.0, 1.0], onemax_fn)
        assert ind.genome.dtype == np.int8
        assert ind.genome.tolist() == [1, 0, 1]

    def test_genome_is_read_only(self, parent_a):
        with pytest.raises(ValueError):
            parent_a.genome[0] = 1

    def test_new_chromosome_has_no_derived_state(self, parent_a):
        assert parent_a.fitness is None
        assert parent_a.roulette_value is None
        assert parent_a.mask is None
        assert parent_a.decoder is None

    def test_random_genes_are_binary(self, onemax_fn, rng):
        ind = Chromosome.random(200, onemax_fn, rng=rng)
        assert ind.size == 200
        assert set(ind.genome.tolist()) <= {0, 1}

    def test_random_uses_both_values(self, onemax_fn, rng):
        ind = Chromosome.random(200, onemax_fn, rng=rng)
        assert 0 < onemax_fn(ind) < 200

    def test_random_is_reproducible_with_seed(self, onemax_fn):
        a = Chromosome.random(32, onemax_fn, rng=np.random.default_rng(3))
        b = Chromosome.random(32, onemax_fn, rng=np.random.default_rng(3))
        assert a.genome.tolist() == b.genome.tolist()

    def test_random_negative_size_raises(self, onemax_fn):
        with pytest.raises(ValueError):
            Chromosome.random(-1, onemax_fn)

    def test_from_fragments_concatenates_in_order(self, onemax_fn):
        ind = Chromosome.from_fragments(onemax_fn, [1, 1], [0], [1, 0, 0])
        assert ind.genome.tolist() == [1, 1, 0, 1, 0, 0]
        assert ind.size == 6
        assert ind.fitness_fn is onemax_fn

    def test_from_fragments_needs_a_fragment(self, onemax_fn):
        with pytest.raises(ValueError, match="at least one fragment"):
            Chromosome.from_fragments(onemax_fn)

    def test_to_bitstring(self, parent_a):
        assert parent_a.to_bitstring() == "010110"


class TestGeneratePopulation:

    def test_population_shape(self, onemax_fn, rng):
        population = Chromosome.generate_population(15, 9, onemax_fn, rng=rng)
        assert len(population) == 15
        for ind in population:
            assert ind.size == 9
            assert len(ind.genome) == ind.size
            assert set(ind.genome.tolist()) <= {0, 1}

    def test_population_shares_fitness_function(self, counting_fitness, rng):
        population = Chromosome.generate_population(4, 5, counting_fitness, rng=rng)
        assert all(ind.fitness_fn is counting_fitness for ind in population)

    def test_fitness_not_computed(self, counting_fitness, rng):
        population = Chromosome.generate_population(4, 5, counting_fitness, rng=rng)
        assert counting_fitness.calls == []
        assert all(ind.fitness is None for ind in population)

    def test_empty_population(self, onemax_fn, rng):
        assert Chromosome.generate_population(0, 5, onemax_fn, rng=rng) == []

    def test_negative_population_raises(self, onemax_fn):
        with pytest.raises(ValueError):
            Chromosome.generate_population(-1, 5, onemax_fn)

    def test_population_reproducible_with_seed(self, onemax_fn):
        first = Chromosome.generate_population(5, 8, onemax_fn, rng=np.random.default_rng(9))
        second = Chromosome.generate_population(5, 8, onemax_fn, rng=np.random.default_rng(9))
        assert [i.to_bitstring() for i in first] == [i.to_bitstring() for i in second]


class TestFitness:

    def test_compute_fitness_stores_function_output(self, parent_a):
        result = parent_a.compute_fitness()
        assert result == pytest.approx(3.0)
        assert parent_a.fitness == pytest.approx(3.0)

    def test_fitness_function_receives_the_chromosome(self, counting_fitness):
        ind = Chromosome([1, 1, 0], counting_fitness)
        ind.compute_fitness()
        assert counting_fitness.calls == [ind]

    def test_recompute_after_mutation_reflects_new_genome(self, onemax_fn):
        ind = Chromosome([0] * 8, onemax_fn)
        ind.compute_fitness()
        assert ind.fitness == pytest.approx(0.0)

        ind.mutate(1.0)
        assert ind.fitness is None

        ind.compute_fitness()
        assert ind.fitness == pytest.approx(8.0)

    def test_fitness_error_propagates(self, parent_a):
        parent_a.compute_fitness()

        def broken(_):
            raise RuntimeError("evaluation failed")

        parent_a.fitness_fn = broken
        with pytest.raises(RuntimeError, match="evaluation failed"):
            parent_a.compute_fitness()
        assert parent_a.fitness == pytest.approx(3.0)

    def test_log_fitness(self, parent_a, caplog):
        import logging
        parent_a.compute_fitness()
        with caplog.at_level(logging.INFO, logger="bitga.chromosome"):
            parent_a.log_fitness(4)
        assert "Individual 4 -> fitness 3.000000" in caplog.text


class TestDecode:

    def test_decode_without_decoder_raises(self, parent_a):
        with pytest.raises(DecoderNotSetError, match="decoder not set"):
            parent_a.decode()

    def test_decoder_not_set_is_runtime_error(self):
        assert issubclass(DecoderNotSetError, RuntimeError)

    def test_decode_returns_decoder_output(self, parent_a):
        parent_a.set_decoder(lambda c: 42.5)
        assert parent_a.decode() == pytest.approx(42.5)

    def test_decode_is_not_cached(self, parent_a):
        values = iter([1.0, 2.0])
        parent_a.set_decoder(lambda c: next(values))
        assert parent_a.decode() == pytest.approx(1.0)
        assert parent_a.decode() == pytest.approx(2.0)
        assert parent_a.fitness is None


class TestMutation:

    def test_zero_probability_gives_identical_copy(self, parent_a, rng):
        mutant = parent_a.create_mutant(0.0, rng=rng)
        assert mutant is not parent_a
        assert mutant.genome.tolist() == parent_a.genome.tolist()
        assert not np.shares_memory(mutant.genome, parent_a.genome)

    def test_full_probability_gives_complement(self, parent_a, rng):
        mutant = parent_a.create_mutant(1.0, rng=rng)
        assert mutant.genome.tolist() == [1, 0, 1, 0, 0, 1]

    def test_create_mutant_leaves_receiver_unchanged(self, parent_a, rng):
        parent_a.compute_fitness()
        parent_a.create_mutant(1.0, rng=rng)
        assert parent_a.genome.tolist() == [0, 1, 0, 1, 1, 0]
        assert parent_a.fitness == pytest.approx(3.0)

    def test_mutant_shares_fitness_function_without_fitness(self, parent_a, rng):
        parent_a.compute_fitness()
        mutant = parent_a.create_mutant(0.5, rng=rng)
        assert mutant.fitness_fn is parent_a.fitness_fn
        assert mutant.fitness is None
        assert mutant.size == parent_a.size

    def test_flip_rate_matches_probability(self, onemax_fn, rng):
        ind = Chromosome(np.zeros(10_000, dtype=int), onemax_fn)
        mutant = ind.create_mutant(0.3, rng=rng)
        assert 0.27 < onemax_fn(mutant) / 10_000 < 0.33

    def test_mutate_in_place_replaces_genome(self, parent_a, rng):
        fn = parent_a.fitness_fn
        parent_a.compute_fitness()
        parent_a.mutate(1.0, rng=rng)
        assert parent_a.genome.tolist() == [1, 0, 1, 0, 0, 1]
        assert parent_a.size == 6
        assert parent_a.fitness_fn is fn
        assert parent_a.fitness is None

    @pytest.mark.parametrize("p", [-0.1, 1.5])
    def test_out_of_range_probability_raises(self, parent_a, p):
        with pytest.raises(ValueError, match=r"\[0, 1\]"):
            parent_a.create_mutant(p)

    def test_failed_mutate_leaves_receiver_unchanged(self, parent_a):
        parent_a.compute_fitness()
        with pytest.raises(ValueError):
            parent_a.mutate(2.0)
        assert parent_a.genome.tolist() == [0, 1, 0, 1, 1, 0]
        assert parent_a.fitness == pytest.approx(3.0)


class TestSetters:

    def test_roulette_value_is_a_pure_setter(self, parent_a):
        parent_a.set_roulette_value(0.25)
        assert parent_a.roulette_value == pytest.approx(0.25)
        assert parent_a.fitness is None

    def test_mask_is_stored_as_booleans(self, parent_a):
        parent_a.set_mask([1, 0, 1, 0, 1, 0])
        assert parent_a.mask.dtype == bool
        assert parent_a.mask.tolist() == [True, False, True, False, True, False]

    def test_mask_length_mismatch_raises(self, parent_a):
        with pytest.raises(ValueError, match="Mask length"):
            parent_a.mask = [True, False]

    def test_mask_can_be_cleared(self, parent_a):
        parent_a.mask = [True] * 6
        parent_a.mask = None
        assert parent_a.mask is None
