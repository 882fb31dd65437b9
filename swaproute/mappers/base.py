"""Common interface for swap-inserting mappers."""

from __future__ import annotations

from swaproute.core.circuit import Circuit
from swaproute.core.layout import MappingResult
from swaproute.core.replay import SwapPolicy, route
from swaproute.core.topology import Topology


class Mapper:
    """Base class: ``map(circuit, topology) -> MappingResult``.

    Subclasses supply a swap policy; the replay itself (identity initial
    layout, in-order gates, penalty accounting) is shared.
    """

    name = "Mapper"

    def map(self, circuit: Circuit, topology: Topology) -> MappingResult:
        return route(circuit, topology, self.swap_policy(circuit, topology))

    def swap_policy(self, circuit: Circuit, topology: Topology) -> SwapPolicy:
        """Return a fresh policy for one replay of ``circuit``."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
