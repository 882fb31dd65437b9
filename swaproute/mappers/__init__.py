"""Swap-inserting routing strategies."""

from swaproute.mappers.base import Mapper
from swaproute.mappers.greedy import GreedyMapper
from swaproute.mappers.lookahead import LookAheadMapper
from swaproute.mappers.genetic import GeneticConfig, GeneticSwapOptimizer, GenerationStats

__all__ = [
    "Mapper",
    "GreedyMapper",
    "LookAheadMapper",
    "GeneticConfig",
    "GeneticSwapOptimizer",
    "GenerationStats",
]
