"""Tests for the genetic parameter sweep."""

import math

from swaproute.core.circuit import Circuit
from swaproute.core.topology import Topology
from swaproute.sweep import SweepCase, SweepConfig, run_sweep


def _tiny_config() -> SweepConfig:
    return SweepConfig(
        population_size_range=[4, 8],
        generations_range=[3],
        elite_ratio_range=[0.25],
        initial_mutation_rate_range=[0.3],
        max_swaps_range=[4],
        seeds=[0, 1],
    )


def _cases() -> list[SweepCase]:
    return [
        SweepCase("cx-linear3", Circuit(3, [("cx", (0, 2))]), Topology.linear_chain(3)),
        SweepCase("cx-star4", Circuit(4, [("cx", (1, 2)), ("cx", (3, 1))]), Topology.star(4)),
    ]


class TestSweepConfig:
    def test_default_grid_size(self):
        grid = SweepConfig().grid()
        assert len(grid) == 32
        assert {c.population_size for c in grid} == {10, 30}
        assert all(c.seed is None for c in grid)

    def test_custom_grid(self):
        grid = _tiny_config().grid()
        assert [c.population_size for c in grid] == [4, 8]
        assert all(c.max_swaps_per_chromosome == 4 for c in grid)


class TestRunSweep:
    def test_results_sorted_by_cost(self):
        results = run_sweep(_cases(), _tiny_config(), n_workers=1, verbose=False)
        assert len(results) == 2
        costs = [r.total_cost for r in results]
        assert costs == sorted(costs)
        for r in results:
            assert set(r.per_case) == {"cx-linear3", "cx-star4"}
            assert r.total_cost == sum(r.per_case.values())

    def test_parallel_matches_serial(self):
        serial = run_sweep(_cases(), _tiny_config(), n_workers=1, verbose=False)
        parallel = run_sweep(_cases(), _tiny_config(), n_workers=2, verbose=False)
        assert [r.per_case for r in serial] == [r.per_case for r in parallel]

    def test_case_too_wide_costs_infinity(self):
        cases = [SweepCase("too-wide", Circuit(4, [("cx", (0, 3))]), Topology.linear_chain(3))]
        results = run_sweep(cases, _tiny_config(), n_workers=1, verbose=False)
        assert all(math.isinf(r.total_cost) for r in results)

    def test_unexpected_failure_costs_infinity(self):
        cases = _cases()[:1] + [SweepCase("no-device", Circuit(2, [("cx", (0, 1))]), None)]
        results = run_sweep(cases, _tiny_config(), n_workers=1, verbose=False)
        for r in results:
            assert math.isinf(r.per_case["no-device"])
            assert math.isfinite(r.per_case["cx-linear3"])

    def test_verbose_output(self, capsys):
        run_sweep(_cases()[:1], _tiny_config(), n_workers=1, verbose=True)
        out = capsys.readouterr().out
        assert "2 configurations x 1 cases x 2 seeds = 4 runs" in out
        assert "Top 5 configurations" in out
