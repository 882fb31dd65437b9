"""Streaming replay shared by every mapping strategy.

A replay walks the circuit once, in order. For each two-qubit gate whose
operands are not adjacent it keeps asking a swap policy for a hardware edge
until the operands become adjacent or the policy gives up by returning
``None``. The gate is then emitted at whatever positions its operands hold,
and any residual distance beyond one hop is charged to ``distance_penalty``.
"""

from __future__ import annotations

from typing import Callable, Optional

from swaproute.core.circuit import Circuit, Gate
from swaproute.core.layout import Layout, MappingResult, Step, StepKind
from swaproute.core.topology import Topology

Edge = tuple[int, int]
SwapPolicy = Callable[["RoutingReplay", int, Gate], Optional[Edge]]


class RoutingReplay:
    """Mutable state of one pass over a circuit.

    The Layout is a single buffer reused for the whole pass; every Step
    receives its own snapshot of it.
    """

    def __init__(self, circuit: Circuit, topology: Topology):
        if circuit.n_qubits > topology.num_qubits:
            raise ValueError(
                f"Circuit uses {circuit.n_qubits} qubits but the device only has "
                f"{topology.num_qubits}."
            )
        self.circuit = circuit
        self.topology = topology
        self.layout = Layout.identity(topology.num_qubits, num_logical=circuit.n_qubits)
        self.steps: list[Step] = []
        self.inserted_swaps = 0
        self.distance_penalty = 0
        self.swaps_for_gate = 0

    def physical(self, gate: Gate) -> tuple[int, ...]:
        return tuple(self.layout.get_phys(q) for q in gate.qubits)

    def insert_swap(self, phys1: int, phys2: int) -> bool:
        """Apply a swap on a hardware edge and record it.

        A swap between two unoccupied positions moves no circuit qubit and
        is dropped; returns False in that case.
        """
        if self.layout.is_phys_free(phys1) and self.layout.is_phys_free(phys2):
            return False
        logical = tuple(
            virt if virt < self.circuit.n_qubits else None
            for virt in self.layout.swap(phys1, phys2)
        )
        self.steps.append(Step(
            kind=StepKind.SWAP,
            tag="swap",
            physical_qubits=(phys1, phys2),
            logical_qubits=logical,
            layout=self.layout.snapshot(),
            depth=len(self.steps),
        ))
        self.inserted_swaps += 1
        self.swaps_for_gate += 1
        return True

    def emit_native(self, gate: Gate) -> None:
        self.steps.append(Step(
            kind=StepKind.NATIVE,
            tag=gate.tag,
            physical_qubits=self.physical(gate),
            logical_qubits=gate.qubits,
            layout=self.layout.snapshot(),
            depth=len(self.steps),
        ))

    def result(self) -> MappingResult:
        return MappingResult(
            steps=tuple(self.steps),
            inserted_swaps=self.inserted_swaps,
            depth=len(self.steps),
            distance_penalty=self.distance_penalty,
            final_layout=self.layout.snapshot(),
        )


def route(circuit: Circuit, topology: Topology, policy: SwapPolicy) -> MappingResult:
    """Replay ``circuit`` on ``topology`` inserting the swaps ``policy`` picks.

    Parameters
    ----------
    circuit : Circuit
        Gates to schedule, processed strictly in order.
    topology : Topology
        Device connectivity. Must have at least ``circuit.n_qubits`` qubits.
    policy : callable
        ``policy(replay, gate_index, gate)`` returns the next physical edge
        to swap, or ``None`` to stop inserting swaps for this gate.

    Returns
    -------
    MappingResult
    """
    replay = RoutingReplay(circuit, topology)

    for gate_index, gate in enumerate(circuit.gates):
        if gate.is_two_qubit():
            replay.swaps_for_gate = 0
            p1, p2 = replay.physical(gate)
            while not topology.is_connected(p1, p2):
                edge = policy(replay, gate_index, gate)
                if edge is None:
                    break
                replay.insert_swap(*edge)
                p1, p2 = replay.physical(gate)
            replay.distance_penalty += topology.distance(p1, p2) - 1
        replay.emit_native(gate)

    return replay.result()
