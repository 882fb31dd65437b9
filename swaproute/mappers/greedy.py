"""Greedy shortest-path routing."""

from __future__ import annotations

from swaproute.core.circuit import Circuit
from swaproute.core.replay import SwapPolicy
from swaproute.core.topology import Topology
from swaproute.mappers.base import Mapper


class GreedyMapper(Mapper):
    """Walk the first operand along a shortest path toward the second.

    Each inserted swap exchanges the qubits on the first edge of
    ``shortest_path(p1, p2)``, reducing the distance by one. No look-ahead.
    """

    name = "Greedy Baseline"

    def swap_policy(self, circuit: Circuit, topology: Topology) -> SwapPolicy:
        def next_swap(replay, gate_index, gate):
            p1, p2 = replay.physical(gate)
            path = topology.shortest_path(p1, p2)
            if len(path) < 2:
                return None  # Unreachable
            return path[0], path[1]

        return next_swap
