"""Two-qubit interaction structure of a circuit.

Summarizes which logical pairs interact, how often and where, and exposes a
windowed view of upcoming two-qubit gates for look-ahead routing. The same
information is available as a weighted adjacency matrix where edge weights
count the two-qubit gates between each pair, optionally weighted by gate
layer (earlier gates matter more).
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.sparse import csr_matrix, lil_matrix

from swaproute.core.circuit import Circuit


@dataclass
class InteractionStats:
    """How often a logical pair interacts and where it first/last does."""
    count: int
    first_seen: int
    last_seen: int


@dataclass(frozen=True)
class UpcomingInteraction:
    qubits: tuple[int, int]
    distance_from_now: int
    weight: float


def _pair_key(q1: int, q2: int) -> tuple[int, int]:
    return (q1, q2) if q1 <= q2 else (q2, q1)


def gate_layers(circuit: Circuit) -> list[int]:
    """ASAP layer index of every gate (one- and two-qubit gates alike)."""
    qubit_depth = [0] * circuit.n_qubits
    layers = []
    for gate in circuit.gates:
        layer = max(qubit_depth[q] for q in gate.qubits)
        layers.append(layer)
        for q in gate.qubits:
            qubit_depth[q] = layer + 1
    return layers


def build_interaction_graph(
    circuit: Circuit,
    depth_weighted: bool = False,
    exp_decay_tau: float | None = None,
) -> csr_matrix:
    """Build a weighted adjacency matrix from a circuit.

    Parameters
    ----------
    circuit : Circuit
        The circuit to analyze.
    depth_weighted : bool
        If True, weight edges by 1/(1 + layer_index) so earlier gates
        contribute more. If False, all 2Q gates have weight 1.
    exp_decay_tau : float, optional
        If set, use exponential decay weighting: exp(-layer_idx / tau).
        Overrides depth_weighted when both are set.

    Returns
    -------
    csr_matrix
        Symmetric weighted adjacency matrix (n_qubits x n_qubits).
    """
    n_qubits = circuit.n_qubits
    adj = lil_matrix((n_qubits, n_qubits), dtype=np.float64)

    layers = gate_layers(circuit) if (depth_weighted or exp_decay_tau is not None) else None

    for idx, gate in enumerate(circuit.gates):
        if not gate.is_two_qubit():
            continue
        if exp_decay_tau is not None:
            weight = np.exp(-layers[idx] / exp_decay_tau)
        elif depth_weighted:
            weight = 1.0 / (1.0 + layers[idx])
        else:
            weight = 1.0
        q0, q1 = gate.qubits
        adj[q0, q1] += weight
        adj[q1, q0] += weight

    return adj.tocsr()


class InteractionGraph:
    """Per-circuit interaction statistics, built once."""

    def __init__(self, circuit: Circuit):
        self.circuit = circuit
        self._pairs: dict[tuple[int, int], InteractionStats] = {}
        for idx, gate in enumerate(circuit.gates):
            if not gate.is_two_qubit():
                continue
            key = _pair_key(*gate.qubits)
            stats = self._pairs.get(key)
            if stats is None:
                stats = InteractionStats(count=0, first_seen=idx, last_seen=idx)
                self._pairs[key] = stats
            stats.count += 1
            stats.last_seen = idx

    def pairs(self) -> dict[tuple[int, int], InteractionStats]:
        return dict(self._pairs)

    def interaction(self, q1: int, q2: int) -> InteractionStats | None:
        return self._pairs.get(_pair_key(q1, q2))

    def interaction_weight(self, q1: int, q2: int) -> int:
        """Number of two-qubit gates acting on the pair (order-insensitive)."""
        stats = self.interaction(q1, q2)
        return stats.count if stats is not None else 0

    def upcoming_interactions(self, from_index: int, window_size: int = 5) -> list[UpcomingInteraction]:
        """Two-qubit gates in ``[from_index, from_index + window_size)``.

        Each entry is weighted ``1 / (1 + distance_from_now)`` so the gate
        at ``from_index`` counts fully and later ones progressively less.
        """
        gates = self.circuit.gates
        end = min(from_index + window_size, len(gates))
        upcoming = []
        for idx in range(max(from_index, 0), end):
            gate = gates[idx]
            if gate.is_two_qubit():
                ahead = idx - from_index
                upcoming.append(UpcomingInteraction(
                    qubits=gate.qubits,
                    distance_from_now=ahead,
                    weight=1.0 / (1.0 + ahead),
                ))
        return upcoming

    def adjacency(self, depth_weighted: bool = False, exp_decay_tau: float | None = None) -> csr_matrix:
        return build_interaction_graph(
            self.circuit, depth_weighted=depth_weighted, exp_decay_tau=exp_decay_tau,
        )
