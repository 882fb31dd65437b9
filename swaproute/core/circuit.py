"""Immutable gate lists over logical qubits.

A Circuit is the input to every mapper: an ordered sequence of one- and
two-qubit gates addressed by logical qubit index. Only two-qubit gates are
subject to routing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Sequence


class GateKind(Enum):
    """Operand arity of a gate."""
    SINGLE = 1
    TWO_QUBIT = 2


@dataclass(frozen=True)
class Gate:
    """A gate tag applied to one or two logical qubits."""
    tag: str
    qubits: tuple[int, ...]

    def __post_init__(self):
        object.__setattr__(self, "qubits", tuple(int(q) for q in self.qubits))
        if len(self.qubits) not in (1, 2):
            raise ValueError(
                f"Gate '{self.tag}' has {len(self.qubits)} operands; "
                "only one and two-qubit gates are supported."
            )
        if len(self.qubits) == 2 and self.qubits[0] == self.qubits[1]:
            raise ValueError(f"Gate '{self.tag}' uses qubit {self.qubits[0]} twice.")

    @property
    def kind(self) -> GateKind:
        return GateKind.TWO_QUBIT if len(self.qubits) == 2 else GateKind.SINGLE

    def is_two_qubit(self) -> bool:
        return self.kind is GateKind.TWO_QUBIT


@dataclass(frozen=True)
class Circuit:
    """Ordered, immutable gate sequence over ``n_qubits`` logical qubits.

    Parameters
    ----------
    n_qubits : int
        Number of logical qubits (must be positive).
    gates : sequence of Gate or (tag, qubits) pairs
        Gates in program order. Every operand must lie in ``[0, n_qubits)``.
    """
    n_qubits: int
    gates: tuple[Gate, ...] = field(default=())

    def __post_init__(self):
        if self.n_qubits < 1:
            raise ValueError(f"Circuit needs at least one qubit, got n_qubits={self.n_qubits}.")
        gates = tuple(_as_gate(g) for g in self.gates)
        for idx, gate in enumerate(gates):
            for q in gate.qubits:
                if not 0 <= q < self.n_qubits:
                    raise ValueError(
                        f"Gate {idx} ('{gate.tag}') operand {q} is outside [0, {self.n_qubits})."
                    )
        object.__setattr__(self, "gates", gates)

    @classmethod
    def from_gates(cls, n_qubits: int, gates: Iterable) -> Circuit:
        """Build a circuit from ``(tag, qubits)`` pairs or Gate objects."""
        return cls(n_qubits, tuple(gates))

    def add_gate(self, tag: str, qubits: Sequence[int]) -> Circuit:
        """Return a new circuit with one more gate appended."""
        return Circuit(self.n_qubits, self.gates + (Gate(tag, tuple(qubits)),))

    def two_qubit_gates(self) -> list[Gate]:
        return [g for g in self.gates if g.is_two_qubit()]

    def __len__(self) -> int:
        return len(self.gates)

    def __iter__(self):
        return iter(self.gates)


def _as_gate(gate) -> Gate:
    if isinstance(gate, Gate):
        return gate
    tag, qubits = gate
    return Gate(tag, tuple(qubits))
