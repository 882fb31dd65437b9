"""Parameter sweep for the genetic swap optimizer.

Grid searches over (population_size, generations, elite_ratio,
initial_mutation_rate, max_swaps_per_chromosome) to minimize total cost
across a set of routing cases. Every configuration is run once per seed.
Uses multiprocessing for parallel evaluation.
"""

from __future__ import annotations

import dataclasses
import itertools
import math
import time
from dataclasses import dataclass
from multiprocessing import Pool, cpu_count
from typing import Optional

from swaproute.core.circuit import Circuit
from swaproute.core.cost_model import CostModel
from swaproute.core.topology import Topology
from swaproute.mappers.genetic import GeneticConfig, GeneticSwapOptimizer


@dataclass
class SweepCase:
    """A named circuit/topology pair."""
    name: str
    circuit: Circuit
    topology: Topology


@dataclass
class SweepResult:
    """Result of evaluating one genetic configuration."""
    config: GeneticConfig
    total_cost: float
    total_swaps: int
    total_time_ms: float
    per_case: dict  # case_name -> cost summed over seeds


@dataclass
class SweepConfig:
    """Configuration for the sweep grid."""
    population_size_range: list[int] = None
    generations_range: list[int] = None
    elite_ratio_range: list[float] = None
    initial_mutation_rate_range: list[float] = None
    max_swaps_range: list[int] = None
    seeds: list[int] = None

    def __post_init__(self):
        if self.population_size_range is None:
            self.population_size_range = [10, 30]
        if self.generations_range is None:
            self.generations_range = [20, 50]
        if self.elite_ratio_range is None:
            self.elite_ratio_range = [0.1, 0.2]
        if self.initial_mutation_rate_range is None:
            self.initial_mutation_rate_range = [0.2, 0.3]
        if self.max_swaps_range is None:
            self.max_swaps_range = [8, 16]
        if self.seeds is None:
            self.seeds = [0, 1, 2]

    def grid(self) -> list[GeneticConfig]:
        """Generate all parameter combinations."""
        combos = itertools.product(
            self.population_size_range,
            self.generations_range,
            self.elite_ratio_range,
            self.initial_mutation_rate_range,
            self.max_swaps_range,
        )
        return [
            GeneticConfig(
                population_size=p, generations=g, elite_ratio=e,
                initial_mutation_rate=m, max_swaps_per_chromosome=s,
            )
            for p, g, e, m, s in combos
        ]


def _evaluate_config(args: tuple) -> SweepResult:
    """Evaluate one configuration across all cases and seeds.

    This function is designed to be called via multiprocessing.Pool.map().
    """
    config, cases, seeds, cost_model = args

    total_cost = 0.0
    total_swaps = 0
    total_time = 0.0
    per_case = {}

    for case in cases:
        case_cost = 0.0
        try:
            for seed in seeds:
                # Nested pools are not allowed inside pool workers
                run_config = dataclasses.replace(config, seed=seed, n_workers=1)
                t0 = time.perf_counter()
                result = GeneticSwapOptimizer(run_config).map(case.circuit, case.topology)
                t1 = time.perf_counter()
                case_cost += cost_model.evaluate(result)
                total_swaps += result.inserted_swaps
                total_time += (t1 - t0) * 1000
        except Exception:
            case_cost = math.inf
        per_case[case.name] = case_cost
        total_cost += case_cost

    return SweepResult(
        config=config,
        total_cost=total_cost,
        total_swaps=total_swaps,
        total_time_ms=total_time,
        per_case=per_case,
    )


def run_sweep(
    cases: list[SweepCase],
    config: Optional[SweepConfig] = None,
    n_workers: Optional[int] = None,
    cost_model: Optional[CostModel] = None,
    verbose: bool = True,
) -> list[SweepResult]:
    """Run a genetic parameter sweep across routing cases.

    Parameters
    ----------
    cases : list[SweepCase]
        Circuit/topology pairs to optimize.
    config : SweepConfig, optional
        Sweep grid configuration. Uses defaults if None.
    n_workers : int, optional
        Number of parallel workers. Defaults to cpu_count() - 1.
    cost_model : CostModel, optional
        Scores each result. Uses default weights if None.
    verbose : bool
        Print progress updates.

    Returns
    -------
    list[SweepResult]
        Results sorted by total_cost (best first).
    """
    if config is None:
        config = SweepConfig()
    if n_workers is None:
        n_workers = max(1, cpu_count() - 1)
    if cost_model is None:
        cost_model = CostModel()

    param_grid = config.grid()
    if verbose:
        print(f"Sweep: {len(param_grid)} configurations x {len(cases)} cases "
              f"x {len(config.seeds)} seeds = "
              f"{len(param_grid) * len(cases) * len(config.seeds)} runs")
        print(f"Using {n_workers} workers")

    work_items = [(p, cases, config.seeds, cost_model) for p in param_grid]

    t0 = time.perf_counter()
    if n_workers <= 1:
        results = [_evaluate_config(item) for item in work_items]
    else:
        with Pool(n_workers) as pool:
            results = pool.map(_evaluate_config, work_items)
    t1 = time.perf_counter()

    results.sort(key=lambda r: r.total_cost)

    if verbose:
        print(f"\nSweep completed in {t1-t0:.1f}s")
        print("\nTop 5 configurations:")
        for i, r in enumerate(results[:5]):
            c = r.config
            print(f"  #{i+1}: cost {r.total_cost:g} - "
                  f"population={c.population_size}, generations={c.generations}, "
                  f"elite={c.elite_ratio}, mutation={c.initial_mutation_rate}, "
                  f"max_swaps={c.max_swaps_per_chromosome}")

    return results
