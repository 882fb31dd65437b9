"""Core routing data model: circuits, devices, layouts and costs."""

from swaproute.core.circuit import Circuit, Gate, GateKind
from swaproute.core.topology import Topology
from swaproute.core.interaction_graph import (
    InteractionGraph, InteractionStats, UpcomingInteraction, build_interaction_graph,
)
from swaproute.core.layout import Layout, MappingResult, Step, StepKind
from swaproute.core.replay import RoutingReplay, route
from swaproute.core.cost_model import CostModel

__all__ = [
    "Circuit",
    "Gate",
    "GateKind",
    "Topology",
    "InteractionGraph",
    "InteractionStats",
    "UpcomingInteraction",
    "build_interaction_graph",
    "Layout",
    "MappingResult",
    "Step",
    "StepKind",
    "RoutingReplay",
    "route",
    "CostModel",
]
