"""Qiskit interoperability for the routing core.

Provides:
- circuit_from_qiskit() / circuit_to_qiskit(): convert gate lists
- load_qasm_circuit(): read an OpenQASM 2 file into a Circuit
- result_to_qiskit(): render a MappingResult as a physical circuit with SWAPs
- route_qiskit(): import, route with a mapper, export
- run_sabre(): Qiskit SabreSwap on the same device, as a reference baseline
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from qiskit import QuantumCircuit
from qiskit.circuit import Gate as QiskitGate
from qiskit.circuit.library import get_standard_gate_name_mapping
from qiskit.transpiler import PassManager
from qiskit.transpiler.passes import (
    ApplyLayout,
    EnlargeWithAncilla,
    FullAncillaAllocation,
    SabreSwap,
    TrivialLayout,
    Unroll3qOrMore,
)

from swaproute.core.circuit import Circuit, Gate
from swaproute.core.layout import MappingResult
from swaproute.core.topology import Topology
from swaproute.mappers.base import Mapper
from swaproute.mappers.lookahead import LookAheadMapper

# Instructions that are not gates for routing purposes
_SKIPPED = ("measure", "barrier")


def circuit_from_qiskit(circuit: QuantumCircuit) -> Circuit:
    """Convert a Qiskit circuit into a Circuit of tagged gates.

    Measurements and barriers are dropped. Instructions on more than two
    qubits are rejected; decompose them first.
    """
    gates = []
    for instruction in circuit.data:
        if instruction.operation.name in _SKIPPED:
            continue
        qubits = tuple(circuit.find_bit(qubit).index for qubit in instruction.qubits)
        if not qubits:
            continue
        if len(qubits) > 2:
            raise ValueError(
                f"Instruction '{instruction.operation.name}' acts on {len(qubits)} qubits; "
                "only one and two-qubit gates are supported."
            )
        gates.append(Gate(instruction.operation.name, qubits))
    return Circuit(circuit.num_qubits, tuple(gates))


def load_qasm_circuit(path: str) -> Circuit:
    """Read an OpenQASM 2 file, unrolling gates on three or more qubits."""
    qc = QuantumCircuit.from_qasm_file(path)
    unroll_pm = PassManager()
    unroll_pm.append(Unroll3qOrMore())
    return circuit_from_qiskit(unroll_pm.run(qc))


def _qiskit_gate(tag: str, num_qubits: int) -> QiskitGate:
    standard = get_standard_gate_name_mapping().get(tag)
    if (
        isinstance(standard, QiskitGate)
        and standard.num_qubits == num_qubits
        and not standard.params
    ):
        return standard
    return QiskitGate(tag, num_qubits, [])


def circuit_to_qiskit(circuit: Circuit) -> QuantumCircuit:
    """Build a Qiskit circuit over logical qubits.

    Parameter-free standard gates keep their Qiskit definition; any other
    tag becomes an opaque gate of the same name.
    """
    qc = QuantumCircuit(circuit.n_qubits)
    for gate in circuit.gates:
        qc.append(_qiskit_gate(gate.tag, len(gate.qubits)), list(gate.qubits))
    return qc


def result_to_qiskit(result: MappingResult, num_physical: int) -> QuantumCircuit:
    """Render a mapping result as a circuit over physical qubits."""
    qc = QuantumCircuit(num_physical)
    for step in result.steps:
        if step.inserted:
            qc.swap(*step.physical_qubits)
        else:
            qc.append(_qiskit_gate(step.tag, len(step.physical_qubits)), list(step.physical_qubits))
    return qc


def count_swaps(circuit: QuantumCircuit) -> int:
    """Count SWAP gates in a compiled circuit."""
    return sum(1 for inst in circuit.data if inst.operation.name == "swap")


def route_qiskit(
    circuit: QuantumCircuit,
    topology: Topology,
    mapper: Optional[Mapper] = None,
) -> QuantumCircuit:
    """Route a Qiskit circuit on ``topology`` and return the physical circuit."""
    if mapper is None:
        mapper = LookAheadMapper()
    result = mapper.map(circuit_from_qiskit(circuit), topology)
    return result_to_qiskit(result, topology.num_qubits)


@dataclass
class SabreResult:
    """Outcome of routing with Qiskit's SabreSwap."""
    swap_count: int
    depth: int       # Qiskit circuit depth (parallel layers)
    size: int        # Operation count, comparable to MappingResult.depth


def run_sabre(
    circuit: Circuit,
    topology: Topology,
    heuristic: str = "lookahead",
    seed: int = 0,
) -> SabreResult:
    """Route with SabreSwap from a trivial layout on the same device.

    heuristic can be "basic", "lookahead" or "decay".
    """
    qc = QuantumCircuit(circuit.n_qubits)
    for gate in circuit.gates:
        if gate.is_two_qubit():
            qc.cx(*gate.qubits)
        else:
            qc.h(gate.qubits[0])

    device = topology.to_coupling_map()
    pm = PassManager([
        TrivialLayout(coupling_map=device),
        FullAncillaAllocation(coupling_map=device),
        EnlargeWithAncilla(),
        ApplyLayout(),
        SabreSwap(coupling_map=device, heuristic=heuristic, seed=seed, trials=1),
    ])
    routed = pm.run(qc)
    return SabreResult(
        swap_count=count_swaps(routed),
        depth=routed.depth(),
        size=len(routed.data),
    )
