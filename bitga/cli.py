"""
bitga/cli.py

Command-line interface for bitga.

Commands
--------
  bitga init      Validate bitga.yaml.  Prints a template config if none exists.
  bitga populate  Generate a random population, evaluate it, show the best.
  bitga breed     Apply one crossover + mutation step to two random parents.

Usage
-----
    bitga init     [--config bitga.yaml]
    bitga populate [--config bitga.yaml] [--seed N] [--top N] [--verbose]
    bitga breed    [--config bitga.yaml] [--seed N] [--strategy NAME] [--verbose]
"""

from __future__ import annotations

import sys
import logging
from pathlib import Path

import click
import numpy as np

from bitga.chromosome import Chromosome
from bitga.config import CONFIG_TEMPLATE, BitgaConfig, load_config
from bitga.operators.base import CROSSOVER


# ---------------------------------------------------------------------------
# Logging setup, configured once at CLI entry, not at import time
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        format="%(asctime)s  %(levelname)-8s  %(message)s",
        datefmt="%H:%M:%S",
        level=level,
        stream=sys.stderr,
    )


def _load_or_exit(config: str) -> BitgaConfig:
    config_path = Path(config)
    if not config_path.exists():
        click.echo(f"Error: config file not found: {config_path}", err=True)
        raise SystemExit(1)
    try:
        return load_config(config_path)
    except Exception as exc:
        click.echo(f"Error: config validation failed:\n  {exc}", err=True)
        raise SystemExit(1)


def _make_population(cfg: BitgaConfig, seed: int | None) -> tuple[list[Chromosome], np.random.Generator]:
    rng = np.random.default_rng(seed if seed is not None else cfg.ga.seed)
    population = Chromosome.generate_population(
        cfg.ga.population_size,
        cfg.ga.chromosome_size,
        cfg.fitness_fn(),
        rng=rng,
    )
    if cfg.decoder is not None:
        decoder = cfg.decoder.build()
        for ind in population:
            ind.set_decoder(decoder)
    for ind in population:
        ind.compute_fitness()
    return population, rng


def _describe(ind: Chromosome) -> str:
    line = f"{ind.to_bitstring()}  fitness={ind.fitness:.4f}"
    if ind.decoder is not None:
        line += f"  value={ind.decode():.6g}"
    return line


# ---------------------------------------------------------------------------
# Shared options
# ---------------------------------------------------------------------------

_config_option = click.option(
    "--config", "-c",
    default="bitga.yaml",
    show_default=True,
    type=click.Path(exists=False, dir_okay=False),
    help="Path to the bitga.yaml configuration file.",
)

_seed_option = click.option(
    "--seed", type=int, default=None,
    help="Random seed; overrides ga.seed from the config.",
)

_verbose_option = click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging.",
)


# ---------------------------------------------------------------------------
# Root group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="bitga")
def cli() -> None:
    """
    bitga: binary-encoded genetic algorithm operators.

    Start with `bitga init > bitga.yaml`, edit the file, then try
    `bitga populate` and `bitga breed`.
    """


# ---------------------------------------------------------------------------
# bitga init
# ---------------------------------------------------------------------------

@cli.command("init")
@_config_option
def cmd_init(config: str) -> None:
    """
    Validate bitga.yaml.

    If no config file is found (or it is empty), prints a commented template
    to stdout and exits with code 1.  Capture it to create your config:

        bitga init > bitga.yaml
    """
    config_path = Path(config)

    # The shell creates an empty file before this process starts when the
    # output is redirected onto the config path itself.
    if not config_path.exists() or config_path.stat().st_size == 0:
        click.echo(CONFIG_TEMPLATE, nl=False)
        raise SystemExit(1)

    cfg = _load_or_exit(config)
    click.echo(f"✓ Config valid: {config_path}")
    click.echo(
        f"  population={cfg.ga.population_size}  genes={cfg.ga.chromosome_size}  "
        f"crossover={cfg.ga.crossover}  p_mut={cfg.ga.mutation_probability}"
    )


# ---------------------------------------------------------------------------
# bitga populate
# ---------------------------------------------------------------------------

@cli.command("populate")
@_config_option
@_seed_option
@_verbose_option
@click.option("--top", "-n", type=click.IntRange(min=0), default=5, show_default=True,
              help="Number of best chromosomes to print.")
def cmd_populate(config: str, seed: int | None, verbose: bool, top: int) -> None:
    """
    Generate a random population, compute every fitness and print the best.
    """
    _setup_logging(verbose)
    cfg = _load_or_exit(config)
    population, _ = _make_population(cfg, seed)

    for i, ind in enumerate(population):
        ind.log_fitness(i)

    ranked = sorted(population, key=lambda ind: ind.fitness, reverse=True)
    click.echo(f"Top {min(top, len(ranked))} of {len(ranked)} chromosomes:")
    for i, ind in enumerate(ranked[:top], 1):
        click.echo(f"  {i}. {_describe(ind)}")


# ---------------------------------------------------------------------------
# bitga breed
# ---------------------------------------------------------------------------

@cli.command("breed")
@_config_option
@_seed_option
@_verbose_option
@click.option("--strategy", "-s", default=None,
              help="Crossover strategy; defaults to ga.crossover from the config.")
def cmd_breed(config: str, seed: int | None, verbose: bool, strategy: str | None) -> None:
    """
    Pick two random parents, cross them over, mutate the offspring once.

    For masked-uniform crossover a random mask is drawn for the first parent.
    An unknown strategy leaves the parents unchanged (a warning is logged).
    """
    _setup_logging(verbose)
    cfg = _load_or_exit(config)
    strategy = strategy or cfg.ga.crossover

    population, rng = _make_population(cfg, seed)
    if len(population) < 2:
        click.echo("Error: breeding needs a population of at least 2.", err=True)
        raise SystemExit(1)

    i, j = rng.choice(len(population), size=2, replace=False)
    parent_a, parent_b = population[int(i)], population[int(j)]
    if strategy == CROSSOVER.MASKED_UNIFORM:
        parent_a.set_mask(rng.random(parent_a.size) < 0.5)

    children = parent_a.crossover(parent_b, strategy, rng=rng)
    for child in children:
        if child is parent_a or child is parent_b:
            continue
        child.mutate(cfg.ga.mutation_probability, rng=rng)
        child.set_decoder(parent_a.decoder)
        child.compute_fitness()

    click.echo(f"Strategy: {strategy}")
    click.echo(f"  parent A  {_describe(parent_a)}")
    click.echo(f"  parent B  {_describe(parent_b)}")
    for k, child in enumerate(children, 1):
        click.echo(f"  child {k}   {_describe(child)}")
