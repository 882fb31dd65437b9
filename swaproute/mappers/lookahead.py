"""Windowed look-ahead routing."""

from __future__ import annotations

import math
from typing import Optional

from swaproute.core.circuit import Circuit
from swaproute.core.interaction_graph import InteractionGraph, UpcomingInteraction
from swaproute.core.layout import Layout
from swaproute.core.replay import Edge, SwapPolicy
from swaproute.core.topology import Topology
from swaproute.mappers.base import Mapper


class LookAheadMapper(Mapper):
    """Pick the swap that best serves the current gate and the next few.

    Every hardware edge is tried on a scratch layout and scored as
    ``-sum(weight * distance)`` over the two-qubit gates in the window that
    starts at the current gate. The highest score wins; on ties the edge
    that comes first in ``Topology.edges()`` order is kept.
    """

    def __init__(self, window_size: int = 3, max_swaps_per_gate: Optional[int] = None):
        """
        Parameters
        ----------
        window_size : int
            Number of gates (starting with the current one) scanned for
            upcoming two-qubit interactions.
        max_swaps_per_gate : int, optional
            Safety valve on swaps inserted for a single gate. Defaults to the
            square of the device size. When reached the gate is emitted
            unresolved and its residual distance is charged as penalty.
        """
        self.window_size = window_size
        self.max_swaps_per_gate = max_swaps_per_gate
        self.name = f"Look-Ahead (k={window_size})"

    def swap_policy(self, circuit: Circuit, topology: Topology) -> SwapPolicy:
        interactions = InteractionGraph(circuit)
        edges = topology.edges()
        cap = self.max_swaps_per_gate
        if cap is None:
            cap = topology.num_qubits ** 2

        def next_swap(replay, gate_index, gate):
            if replay.swaps_for_gate >= cap:
                return None
            upcoming = interactions.upcoming_interactions(gate_index, self.window_size)
            return find_best_swap(replay.layout, topology, edges, upcoming)

        return next_swap


def find_best_swap(
    layout: Layout,
    topology: Topology,
    edges: tuple[Edge, ...],
    upcoming: list[UpcomingInteraction],
) -> Optional[Edge]:
    """Best-scoring edge to swap, or None if no edge scores above -inf."""
    scratch = layout.copy()
    best_swap = None
    best_score = -math.inf

    for u, v in edges:
        if scratch.is_phys_free(u) and scratch.is_phys_free(v):
            continue
        scratch.swap(u, v)
        score = 0.0
        for item in upcoming:
            q1, q2 = item.qubits
            score -= item.weight * topology.distance(scratch.get_phys(q1), scratch.get_phys(q2))
        scratch.swap(u, v)

        if score > best_score:
            best_score = score
            best_swap = (u, v)

    return best_swap
