"""Genetic search over whole-circuit swap plans.

A chromosome is one ordered list of hardware edges for the entire circuit.
Replaying it consumes genes through a single cursor that is never reset
between gates: each time the walk meets a two-qubit gate whose operands are
not adjacent it takes the next gene, and once the genes run out every later
unresolved gate is emitted as-is and charged its residual distance. Short
chromosomes therefore starve the tail of the circuit; the evolution has to
discover plans long enough (and ordered well enough) to cover it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from multiprocessing import Pool
from typing import Optional, Sequence

import numpy as np

from swaproute.core.circuit import Circuit
from swaproute.core.cost_model import CostModel
from swaproute.core.layout import MappingResult
from swaproute.core.replay import Edge, route
from swaproute.core.topology import Topology
from swaproute.mappers.base import Mapper

logger = logging.getLogger(__name__)

Chromosome = tuple[Edge, ...]

# Fitness is the negated cost under these fixed weights
FITNESS_WEIGHTS = CostModel(alpha=10.0, beta=1.0, gamma=3.0)


@dataclass
class GeneticConfig:
    """Tunable parameters for the genetic swap search."""
    population_size: int = 30
    generations: int = 50
    tournament_size: int = 3
    elite_ratio: float = 0.2
    initial_mutation_rate: float = 0.3
    min_mutation_rate: float = 0.05
    mutation_decay: float = 0.95
    max_swaps_per_chromosome: int = 8
    plateau_threshold: int = 10
    seed: Optional[int] = None
    n_workers: int = 1           # >1 evaluates each generation in a process pool

    def __post_init__(self):
        for name in ("population_size", "tournament_size", "max_swaps_per_chromosome", "n_workers"):
            if getattr(self, name) < 1:
                raise ValueError(f"GeneticConfig.{name} must be >= 1, got {getattr(self, name)}.")
        for name in ("generations", "plateau_threshold"):
            if getattr(self, name) < 0:
                raise ValueError(f"GeneticConfig.{name} must be >= 0, got {getattr(self, name)}.")
        for name in ("elite_ratio", "initial_mutation_rate", "min_mutation_rate", "mutation_decay"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"GeneticConfig.{name} must be in [0, 1], got {value}.")


@dataclass
class GenerationStats:
    """Snapshot of one generation of the search."""
    generation: int
    best_fitness: float
    best_ever_fitness: float
    mutation_rate: float
    plateau: int
    cache_size: int


def chromosome_key(chromosome: Sequence[Edge]) -> str:
    """Canonical string encoding, e.g. ``"0-1,1-2"``."""
    return ",".join(f"{a}-{b}" for a, b in chromosome)


def apply_chromosome(circuit: Circuit, topology: Topology, chromosome: Sequence[Edge]) -> MappingResult:
    """Replay ``circuit`` taking swaps from ``chromosome`` in order.

    A gene touching a position no circuit qubit occupies is consumed
    without inserting a swap.
    """
    genes = iter(chromosome)

    def next_gene(replay, gate_index, gate):
        for u, v in genes:
            if not (replay.layout.is_phys_free(u) or replay.layout.is_phys_free(v)):
                return u, v
        return None

    return route(circuit, topology, next_gene)


def fitness_of(result: MappingResult) -> float:
    return -FITNESS_WEIGHTS.evaluate(result)


def _replay_fitness(args: tuple) -> float:
    """Fitness of one chromosome; module-level so Pool.map can pickle it."""
    circuit, topology, chromosome = args
    return fitness_of(apply_chromosome(circuit, topology, chromosome))


class GeneticSwapOptimizer(Mapper):
    """Evolve a swap plan with elitism, tournament selection and decaying mutation.

    After ``map()`` the search outcome is kept on the instance:
    ``best_chromosome``, ``best_fitness`` and ``history`` (one
    GenerationStats per generation that ran).
    """

    name = "Genetic Algorithm"

    def __init__(self, config: Optional[GeneticConfig] = None):
        """
        Parameters
        ----------
        config : GeneticConfig, optional
            Search parameters. Uses defaults if None.
        """
        self.config = config or GeneticConfig()
        self.circuit: Optional[Circuit] = None
        self.topology: Optional[Topology] = None
        self.fitness_cache: dict[str, float] = {}
        self.best_chromosome: Chromosome = ()
        self.best_fitness = -math.inf
        self.history: list[GenerationStats] = []

    # --- Replay ---

    def apply_chromosome(self, chromosome: Sequence[Edge]) -> MappingResult:
        return apply_chromosome(self.circuit, self.topology, chromosome)

    def evaluate_fitness(self, chromosome: Sequence[Edge]) -> float:
        """Cached fitness of ``chromosome`` for the circuit being optimized."""
        key = chromosome_key(chromosome)
        cached = self.fitness_cache.get(key)
        if cached is None:
            cached = fitness_of(self.apply_chromosome(chromosome))
            self.fitness_cache[key] = cached
        return cached

    def _evaluate_population(self, population: list[Chromosome], pool) -> list[float]:
        if pool is not None:
            pending = {}
            for chromosome in population:
                key = chromosome_key(chromosome)
                if key not in self.fitness_cache and key not in pending:
                    pending[key] = chromosome
            if pending:
                work = [(self.circuit, self.topology, c) for c in pending.values()]
                for key, fitness in zip(pending, pool.map(_replay_fitness, work)):
                    self.fitness_cache[key] = fitness
        return [self.evaluate_fitness(c) for c in population]

    # --- Search ---

    def map(self, circuit: Circuit, topology: Topology) -> MappingResult:
        if circuit.n_qubits > topology.num_qubits:
            raise ValueError(
                f"Circuit uses {circuit.n_qubits} qubits but the device only has "
                f"{topology.num_qubits}."
            )
        self.circuit = circuit
        self.topology = topology
        self.fitness_cache = {}
        self.history = []
        self.best_chromosome = ()
        self.best_fitness = -math.inf

        edges = topology.edges()
        if not edges:
            logger.debug("Device has no edges; replaying the empty swap plan")
            self.best_fitness = self.evaluate_fitness(())
            return self.apply_chromosome(())

        cfg = self.config
        rng = np.random.default_rng(cfg.seed)
        pool = Pool(cfg.n_workers) if cfg.n_workers > 1 else None
        try:
            best_ever = self._evolve(rng, edges, pool)
        finally:
            if pool is not None:
                pool.close()
                pool.join()

        if best_ever is None:
            # No generation ran
            best_ever = ()
            self.best_fitness = self.evaluate_fitness(best_ever)
        self.best_chromosome = best_ever
        return self.apply_chromosome(best_ever)

    def _evolve(self, rng: np.random.Generator, edges: tuple[Edge, ...], pool) -> Optional[Chromosome]:
        cfg = self.config
        population = self.initialize_population(rng, edges)
        best_ever: Optional[Chromosome] = None
        plateau = 0
        mutation_rate = cfg.initial_mutation_rate

        for generation in range(cfg.generations):
            fitnesses = self._evaluate_population(population, pool)
            # Stable sort keeps earlier individuals first among equals
            ranked = sorted(zip(population, fitnesses), key=lambda e: e[1], reverse=True)

            top_chromosome, top_fitness = ranked[0]
            if best_ever is None or top_fitness > self.best_fitness:
                best_ever = top_chromosome
                self.best_fitness = top_fitness
                plateau = 0
            else:
                plateau += 1

            self.history.append(GenerationStats(
                generation=generation,
                best_fitness=top_fitness,
                best_ever_fitness=self.best_fitness,
                mutation_rate=mutation_rate,
                plateau=plateau,
                cache_size=len(self.fitness_cache),
            ))
            logger.debug(
                "generation %d: best=%.1f best_ever=%.1f mutation_rate=%.3f plateau=%d",
                generation, top_fitness, self.best_fitness, mutation_rate, plateau,
            )

            if plateau >= cfg.plateau_threshold:
                logger.debug("Plateau of %d generations, stopping", plateau)
                break

            elite_count = int(cfg.population_size * cfg.elite_ratio)
            next_population = [c for c, _ in ranked[:elite_count]]
            while len(next_population) < cfg.population_size:
                parent1 = self.tournament_select(rng, ranked)
                parent2 = self.tournament_select(rng, ranked)
                child = self.crossover(rng, parent1, parent2)
                if rng.random() < mutation_rate:
                    child = self.mutate(rng, child, edges)
                next_population.append(child)

            population = next_population
            mutation_rate = max(cfg.min_mutation_rate, mutation_rate * cfg.mutation_decay)

        return best_ever

    # --- Operators ---

    def initialize_population(self, rng: np.random.Generator, edges: tuple[Edge, ...]) -> list[Chromosome]:
        population = []
        for _ in range(self.config.population_size):
            length = int(rng.integers(1, self.config.max_swaps_per_chromosome + 1))
            population.append(tuple(_random_edge(rng, edges) for _ in range(length)))
        return population

    def tournament_select(self, rng: np.random.Generator, ranked: list[tuple[Chromosome, float]]) -> Chromosome:
        entrants = [ranked[int(rng.integers(len(ranked)))] for _ in range(self.config.tournament_size)]
        return max(entrants, key=lambda e: e[1])[0]

    def crossover(self, rng: np.random.Generator, parent1: Chromosome, parent2: Chromosome) -> Chromosome:
        """Single-point crossover: head of ``parent1`` + tail of ``parent2``."""
        if not parent1 or not parent2:
            return parent1 or parent2
        point = int(rng.integers(min(len(parent1), len(parent2))))
        return parent1[:point] + parent2[point:]

    def mutate(self, rng: np.random.Generator, chromosome: Chromosome, edges: tuple[Edge, ...]) -> Chromosome:
        """Apply one of: replace a gene (40%), append (30%), delete (30%).

        When the drawn operation does not apply (append at max length) the
        draw falls through to the next one.
        """
        mutated = list(chromosome)
        roll = rng.random()
        if roll < 0.4 and mutated:
            mutated[int(rng.integers(len(mutated)))] = _random_edge(rng, edges)
        elif roll < 0.7 and len(mutated) < self.config.max_swaps_per_chromosome:
            mutated.append(_random_edge(rng, edges))
        elif len(mutated) > 1:
            del mutated[int(rng.integers(len(mutated)))]
        return tuple(mutated)


def _random_edge(rng: np.random.Generator, edges: tuple[Edge, ...]) -> Edge:
    return edges[int(rng.integers(len(edges)))]
