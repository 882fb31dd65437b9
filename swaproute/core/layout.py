"""Logical-to-physical layouts and the step records a mapping emits."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

import numpy as np


class Layout:
    """Bijective logical -> physical assignment spanning the whole device.

    ``virt_to_phys[l]`` is the physical position of logical qubit ``l``.
    Logical ids ``>= num_logical`` are placeholders for unoccupied physical
    positions, so the arrays are always a permutation of ``0..n-1``.
    """

    def __init__(self, virt_to_phys, num_logical: Optional[int] = None):
        self.virt_to_phys = np.array(virt_to_phys, dtype=int)
        n = len(self.virt_to_phys)
        if not np.array_equal(np.sort(self.virt_to_phys), np.arange(n)):
            raise ValueError(f"Layout {self.virt_to_phys.tolist()} is not a permutation.")
        self.phys_to_virt = np.argsort(self.virt_to_phys)
        self.num_logical = num_logical if num_logical is not None else n

    @classmethod
    def identity(cls, num_physical: int, num_logical: Optional[int] = None) -> Layout:
        return cls(np.arange(num_physical), num_logical=num_logical)

    def swap(self, phys1: int, phys2: int) -> tuple[int, int]:
        """Exchange whatever occupies two physical positions.

        Returns the logical ids that were at ``phys1`` and ``phys2``.
        """
        virt1, virt2 = self.phys_to_virt[phys1], self.phys_to_virt[phys2]
        self.phys_to_virt[phys1], self.phys_to_virt[phys2] = virt2, virt1
        self.virt_to_phys[virt1], self.virt_to_phys[virt2] = phys2, phys1
        return int(virt1), int(virt2)

    def get_phys(self, virt: int) -> int:
        return int(self.virt_to_phys[virt])

    def get_virt(self, phys: int) -> int:
        return int(self.phys_to_virt[phys])

    def is_phys_free(self, phys: int) -> bool:
        """True if no circuit qubit sits on ``phys``."""
        return self.phys_to_virt[phys] >= self.num_logical

    def snapshot(self) -> tuple[int, ...]:
        """Independent copy of the circuit qubits' physical positions."""
        return tuple(int(p) for p in self.virt_to_phys[: self.num_logical])

    def copy(self) -> Layout:
        dup = Layout.__new__(Layout)
        dup.virt_to_phys = self.virt_to_phys.copy()
        dup.phys_to_virt = self.phys_to_virt.copy()
        dup.num_logical = self.num_logical
        return dup

    def __repr__(self):
        return f"Virt to Phys: {self.virt_to_phys}\nPhys to Virt: {self.phys_to_virt}"


class StepKind(Enum):
    NATIVE = "native"
    SWAP = "swap"


@dataclass(frozen=True)
class Step:
    """One emitted operation with the layout it leaves behind.

    For a swap, ``logical_qubits`` holds ``None`` on the side of a physical
    position that no circuit qubit occupies.
    """
    kind: StepKind
    tag: str
    physical_qubits: tuple[int, ...]
    logical_qubits: tuple[Optional[int], ...]
    layout: tuple[int, ...]
    depth: int

    @property
    def inserted(self) -> bool:
        return self.kind is StepKind.SWAP

    def to_dict(self) -> dict:
        return {
            "type": "swap" if self.inserted else self.tag,
            "physical": list(self.physical_qubits),
            "logical": list(self.logical_qubits),
            "layout": list(self.layout),
            "inserted": self.inserted,
            "depth": self.depth,
        }


@dataclass(frozen=True)
class MappingResult:
    """Schedule produced by a mapper plus its quality counters."""
    steps: tuple[Step, ...]
    inserted_swaps: int
    depth: int
    distance_penalty: float
    final_layout: tuple[int, ...] = field(default=())

    def swap_steps(self) -> list[Step]:
        return [s for s in self.steps if s.inserted]

    def native_steps(self) -> list[Step]:
        return [s for s in self.steps if not s.inserted]

    def to_dict(self) -> dict:
        return {
            "steps": [s.to_dict() for s in self.steps],
            "insertedSwaps": self.inserted_swaps,
            "depth": self.depth,
            "distancePenalty": self.distance_penalty,
            "finalLayout": list(self.final_layout),
        }
