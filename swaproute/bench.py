"""Side-by-side comparison of routing strategies.

Runs several mappers on the same circuit and topology, scores each result
with a CostModel, and reports swap count, depth, distance penalty, cost and
mapping time.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from swaproute.core.circuit import Circuit
from swaproute.core.cost_model import CostModel
from swaproute.core.layout import MappingResult
from swaproute.core.topology import Topology
from swaproute.mappers.base import Mapper
from swaproute.mappers.genetic import GeneticConfig, GeneticSwapOptimizer
from swaproute.mappers.greedy import GreedyMapper
from swaproute.mappers.lookahead import LookAheadMapper


@dataclass
class ComparisonResult:
    """Result of one mapper on one circuit/topology."""
    mapper: str
    cost: float
    result: MappingResult
    compile_time_ms: float

    @property
    def swap_count(self) -> int:
        return self.result.inserted_swaps

    @property
    def depth(self) -> int:
        return self.result.depth

    @property
    def distance_penalty(self) -> float:
        return self.result.distance_penalty


def default_mappers(
    use_genetic: bool = False,
    genetic_config: Optional[GeneticConfig] = None,
) -> list[Mapper]:
    """Greedy and look-ahead (k=3); genetic only when asked, it is slow."""
    mappers: list[Mapper] = [GreedyMapper(), LookAheadMapper(window_size=3)]
    if use_genetic:
        mappers.append(GeneticSwapOptimizer(genetic_config))
    return mappers


def compare_mappers(
    circuit: Circuit,
    topology: Topology,
    mappers: Optional[list[Mapper]] = None,
    cost_model: Optional[CostModel] = None,
    verbose: bool = False,
) -> list[ComparisonResult]:
    """Map ``circuit`` with every mapper and score each result.

    Returns results in mapper order. Use ``best_result`` to pick the
    cheapest.
    """
    if mappers is None:
        mappers = default_mappers()
    if cost_model is None:
        cost_model = CostModel()

    if verbose:
        print(f"\n--- {circuit.n_qubits}q, {len(circuit)} gates on {topology!r} ---")
        print(f"  {cost_model.explain()}")

    results = []
    for mapper in mappers:
        t0 = time.perf_counter()
        result = mapper.map(circuit, topology)
        t1 = time.perf_counter()
        cost = cost_model.evaluate(result)
        results.append(ComparisonResult(
            mapper=mapper.name,
            cost=cost,
            result=result,
            compile_time_ms=(t1 - t0) * 1000,
        ))
        if verbose:
            print(f"  {mapper.name}: {result.inserted_swaps} SWAPs, depth {result.depth}, "
                  f"penalty {result.distance_penalty}, cost {cost:g}, {(t1-t0)*1000:.1f}ms")

    return results


def best_result(results: list[ComparisonResult]) -> ComparisonResult:
    """Lowest-cost entry; the earliest mapper wins ties."""
    return min(results, key=lambda r: r.cost)


def format_results_table(results: list[ComparisonResult]) -> str:
    """Format comparison results as a markdown table."""
    lines = [
        "| Mapper | SWAPs | Depth | Penalty | Cost | Time (ms) |",
        "|--------|-------|-------|---------|------|-----------|",
    ]
    for r in results:
        lines.append(
            f"| {r.mapper} | {r.swap_count} | {r.depth} | "
            f"{r.distance_penalty} | {r.cost:g} | {r.compile_time_ms:.1f} |"
        )
    return "\n".join(lines)
