"""Linear cost used to rank mapping results against each other."""

from __future__ import annotations

from dataclasses import dataclass

from swaproute.core.layout import MappingResult


@dataclass(frozen=True)
class CostModel:
    """``alpha * swaps + beta * depth + gamma * distance_penalty``.

    Only meaningful for comparing strategies on the same circuit and
    topology; it is not a physical quantity.
    """
    alpha: float = 10.0   # Per inserted swap
    beta: float = 1.0     # Per emitted step
    gamma: float = 5.0    # Per unresolved extra hop

    def __post_init__(self):
        for name in ("alpha", "beta", "gamma"):
            if getattr(self, name) < 0:
                raise ValueError(f"CostModel weight {name} must be nonnegative.")

    def evaluate(self, result: MappingResult) -> float:
        # 0 * inf would turn an unreachable pair into nan
        penalty = self.gamma * result.distance_penalty if self.gamma else 0.0
        return self.alpha * result.inserted_swaps + self.beta * result.depth + penalty

    def explain(self) -> str:
        return f"Cost = {self.alpha:g}·SWAPs + {self.beta:g}·Depth + {self.gamma:g}·Distance"
