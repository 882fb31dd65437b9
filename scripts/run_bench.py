#!/usr/bin/env python3
"""CLI comparison runner for swaproute mappers."""

import argparse
import json
from pathlib import Path

from swaproute.bench import compare_mappers, default_mappers, format_results_table, best_result
from swaproute.core.cost_model import CostModel
from swaproute.core.topology import Topology
from swaproute.mappers.genetic import GeneticConfig
from swaproute.pipeline import load_qasm_circuit


def main():
    parser = argparse.ArgumentParser(description="Compare swaproute mappers on one circuit")
    parser.add_argument("qasm", type=str, help="OpenQASM 2 circuit file")
    parser.add_argument("--topology", type=str, default="linear-chain",
                        choices=["linear-chain", "grid2D", "star"])
    parser.add_argument("--qubits", type=int, default=None,
                        help="Device size for linear-chain/star (default: circuit width)")
    parser.add_argument("--rows", type=int, default=3)
    parser.add_argument("--cols", type=int, default=3)
    parser.add_argument("--genetic", action="store_true", help="Include the genetic optimizer")
    parser.add_argument("--generations", type=int, default=50)
    parser.add_argument("--population", type=int, default=30)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--alpha", type=float, default=10.0)
    parser.add_argument("--beta", type=float, default=1.0)
    parser.add_argument("--gamma", type=float, default=5.0)
    parser.add_argument("--output", type=str, default=None,
                        help="Output file for results (JSON)")
    parser.add_argument("--quiet", action="store_true")
    args = parser.parse_args()

    circuit = load_qasm_circuit(args.qasm)
    if args.topology == "grid2D":
        topology = Topology.grid_2d(args.rows, args.cols)
    else:
        topology = Topology(args.topology, n=args.qubits or circuit.n_qubits)

    genetic_config = GeneticConfig(
        population_size=args.population,
        generations=args.generations,
        seed=args.seed,
    )
    cost_model = CostModel(alpha=args.alpha, beta=args.beta, gamma=args.gamma)
    results = compare_mappers(
        circuit,
        topology,
        mappers=default_mappers(use_genetic=args.genetic, genetic_config=genetic_config),
        cost_model=cost_model,
        verbose=not args.quiet,
    )

    print("\n" + format_results_table(results))
    print(f"\nBest: {best_result(results).mapper}")

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        data = [
            {
                "mapper": r.mapper,
                "cost": r.cost,
                "time_ms": r.compile_time_ms,
                **r.result.to_dict(),
            }
            for r in results
        ]
        out_path.write_text(json.dumps(data, indent=2))
        print(f"\nResults saved to {out_path}")


if __name__ == "__main__":
    main()
