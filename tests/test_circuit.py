"""Tests for the immutable circuit model."""

import dataclasses

import pytest

from swaproute.core.circuit import Circuit, Gate, GateKind


class TestGate:
    def test_kinds(self):
        assert Gate("h", (0,)).kind is GateKind.SINGLE
        assert Gate("cx", (0, 1)).kind is GateKind.TWO_QUBIT
        assert Gate("cx", [0, 1]).qubits == (0, 1)

    def test_rejects_three_operands(self):
        with pytest.raises(ValueError, match="operands"):
            Gate("ccx", (0, 1, 2))

    def test_rejects_no_operands(self):
        with pytest.raises(ValueError):
            Gate("gphase", ())

    def test_rejects_repeated_operand(self):
        with pytest.raises(ValueError, match="twice"):
            Gate("cx", (1, 1))


class TestCircuit:
    def test_from_pairs(self):
        circuit = Circuit(3, [("h", (0,)), ("cx", (0, 2))])
        assert len(circuit) == 2
        assert circuit.gates[1] == Gate("cx", (0, 2))
        assert [g.tag for g in circuit] == ["h", "cx"]

    def test_two_qubit_gates(self):
        circuit = Circuit.from_gates(3, [("h", (0,)), ("cx", (0, 1)), ("x", (2,)), ("cz", (1, 2))])
        assert [g.tag for g in circuit.two_qubit_gates()] == ["cx", "cz"]

    def test_add_gate_returns_new_circuit(self):
        base = Circuit(2)
        grown = base.add_gate("cx", [0, 1])
        assert len(base) == 0
        assert len(grown) == 1

    def test_frozen(self):
        circuit = Circuit(2, [("cx", (0, 1))])
        with pytest.raises(dataclasses.FrozenInstanceError):
            circuit.n_qubits = 3

    @pytest.mark.parametrize("n", [0, -1])
    def test_rejects_non_positive_width(self, n):
        with pytest.raises(ValueError, match="at least one qubit"):
            Circuit(n)

    def test_rejects_operand_out_of_range(self):
        with pytest.raises(ValueError, match="outside"):
            Circuit(2, [("cx", (0, 2))])

    def test_empty_circuit_is_valid(self):
        assert len(Circuit(1)) == 0
