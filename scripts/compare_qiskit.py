#!/usr/bin/env python3
"""Head-to-head comparison: swaproute mappers vs Qiskit SabreSwap.

All routers start from the trivial layout on the same device, so the only
variable is the swap-insertion policy.
"""

import argparse
from collections import defaultdict

from swaproute.bench import compare_mappers, default_mappers
from swaproute.core.topology import Topology
from swaproute.mappers.genetic import GeneticConfig
from swaproute.pipeline import load_qasm_circuit, run_sabre

TOPOLOGIES = ("linear-chain", "star", "grid2D")


def _device_for(shape: str, n_qubits: int) -> Topology:
    if shape == "grid2D":
        side = 1
        while side * side < n_qubits:
            side += 1
        return Topology.grid_2d(side, side)
    return Topology(shape, n=n_qubits)


def main():
    parser = argparse.ArgumentParser(description="Compare swaproute vs Qiskit SabreSwap")
    parser.add_argument("qasm", nargs="+", help="OpenQASM 2 circuit files")
    parser.add_argument("--genetic", action="store_true")
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    totals = defaultdict(int)
    for path in args.qasm:
        circuit = load_qasm_circuit(path)
        for shape in TOPOLOGIES:
            topology = _device_for(shape, circuit.n_qubits)
            print(f"\n{path} on {topology!r}")
            results = compare_mappers(
                circuit,
                topology,
                mappers=default_mappers(
                    use_genetic=args.genetic,
                    genetic_config=GeneticConfig(seed=args.seed),
                ),
            )
            for r in results:
                totals[r.mapper] += r.swap_count
                print(f"  {r.mapper:<22} {r.swap_count:>5} SWAPs  {r.depth:>6} steps  "
                      f"penalty {r.distance_penalty}")
            for heuristic in ("basic", "lookahead", "decay"):
                try:
                    sabre = run_sabre(circuit, topology, heuristic=heuristic, seed=args.seed)
                except Exception as e:
                    print(f"  sabre_{heuristic}: FAILED ({e})")
                    continue
                totals[f"sabre_{heuristic}"] += sabre.swap_count
                print(f"  {'sabre_' + heuristic:<22} {sabre.swap_count:>5} SWAPs  "
                      f"{sabre.size:>6} steps")

    print("\n=== Total SWAPs ===")
    for name, swaps in sorted(totals.items(), key=lambda kv: kv[1]):
        print(f"  {name:<22} {swaps}")


if __name__ == "__main__":
    main()
