#!/usr/bin/env python3
"""CLI genetic parameter sweep runner for swaproute."""

import argparse
import json
from pathlib import Path

from swaproute.core.topology import Topology
from swaproute.pipeline import load_qasm_circuit
from swaproute.sweep import SweepCase, SweepConfig, run_sweep


def main():
    parser = argparse.ArgumentParser(description="Run swaproute genetic parameter sweep")
    parser.add_argument("qasm", nargs="+", help="OpenQASM 2 circuit files")
    parser.add_argument("--topology", type=str, default="linear-chain",
                        choices=["linear-chain", "star"])
    parser.add_argument("--seeds", type=int, nargs="+", default=[0, 1, 2])
    parser.add_argument("--workers", type=int, default=None,
                        help="Number of parallel workers")
    parser.add_argument("--output", type=str, default=None,
                        help="Output file for results (JSON)")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    cases = []
    for path in args.qasm:
        circuit = load_qasm_circuit(path)
        topology = Topology(args.topology, n=circuit.n_qubits)
        cases.append(SweepCase(name=Path(path).stem, circuit=circuit, topology=topology))

    results = run_sweep(
        cases,
        config=SweepConfig(seeds=args.seeds),
        n_workers=args.workers,
        verbose=not args.quiet,
    )

    if args.output and results:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        data = [
            {
                "population_size": r.config.population_size,
                "generations": r.config.generations,
                "elite_ratio": r.config.elite_ratio,
                "initial_mutation_rate": r.config.initial_mutation_rate,
                "max_swaps_per_chromosome": r.config.max_swaps_per_chromosome,
                "total_cost": r.total_cost,
                "total_swaps": r.total_swaps,
                "total_time_ms": r.total_time_ms,
                "per_case": r.per_case,
            }
            for r in results[:20]
        ]
        out_path.write_text(json.dumps(data, indent=2))
        print(f"\nResults saved to {out_path}")

    if results:
        best = results[0]
        c = best.config
        print(f"\nBest config: population={c.population_size}, generations={c.generations}, "
              f"elite={c.elite_ratio}, mutation={c.initial_mutation_rate}, "
              f"max_swaps={c.max_swaps_per_chromosome}")
        print(f"Total cost: {best.total_cost:g}")


if __name__ == "__main__":
    main()
