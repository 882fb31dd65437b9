"""swaproute: heuristic qubit routing by swap insertion."""

from swaproute.core import Circuit, CostModel, MappingResult, Topology
from swaproute.mappers import GeneticConfig, GeneticSwapOptimizer, GreedyMapper, LookAheadMapper

__version__ = "0.1.0"
__all__ = [
    "Circuit",
    "CostModel",
    "MappingResult",
    "Topology",
    "GreedyMapper",
    "LookAheadMapper",
    "GeneticConfig",
    "GeneticSwapOptimizer",
]
