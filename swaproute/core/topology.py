"""Device connectivity graphs with memoized hop distances.

A Topology is built once from a shape tag (``linear-chain``, ``grid2D`` or
``star``) and integer parameters, or imported from a Qiskit CouplingMap.
Adjacency lists never change after construction, which is what makes the
distance and path memos valid. The memos are plain dicts owned by the
instance and assume a single writer; give each thread its own Topology (or
rely on per-process copies, as the multiprocessing helpers do).
"""

from __future__ import annotations

import math
from collections import deque
from typing import Iterable, Optional

import numpy as np
from scipy.sparse import csr_matrix, lil_matrix
from scipy.sparse.csgraph import shortest_path as _csgraph_shortest_path

from qiskit.transpiler import CouplingMap

_SHAPE_ALIASES = {
    "linear-chain": "linear-chain",
    "lnn": "linear-chain",
    "grid2D": "grid2D",
    "grid2d": "grid2D",
    "star": "star",
}


def _linear_chain(n: int) -> list[list[int]]:
    graph = []
    for i in range(n):
        neighbors = []
        if i > 0:
            neighbors.append(i - 1)
        if i < n - 1:
            neighbors.append(i + 1)
        graph.append(neighbors)
    return graph


def _grid_2d(rows: int, cols: int) -> list[list[int]]:
    graph = []
    for r in range(rows):
        for c in range(cols):
            node = r * cols + c
            neighbors = []
            if c > 0:
                neighbors.append(node - 1)
            if c < cols - 1:
                neighbors.append(node + 1)
            if r > 0:
                neighbors.append(node - cols)
            if r < rows - 1:
                neighbors.append(node + cols)
            graph.append(neighbors)
    return graph


def _star(n: int) -> list[list[int]]:
    graph = [list(range(1, n))]
    for _ in range(1, n):
        graph.append([0])
    return graph


class Topology:
    """Undirected device graph over physical qubits ``0..n-1``.

    Parameters
    ----------
    shape : str
        ``"linear-chain"`` (alias ``"lnn"``), ``"grid2D"`` (alias
        ``"grid2d"``) or ``"star"``.
    **params
        ``n`` for linear-chain and star (default 5), ``rows``/``cols`` for
        grid2D (default 3 each).
    """

    def __init__(self, shape: str, **params):
        canonical = _SHAPE_ALIASES.get(shape)
        if canonical is None:
            raise ValueError(
                f"Unknown topology shape '{shape}'. "
                "Expected one of: linear-chain, grid2D, star."
            )

        if canonical == "grid2D":
            rows = int(params.get("rows", 3))
            cols = int(params.get("cols", 3))
            if rows < 1 or cols < 1:
                raise ValueError(f"grid2D needs rows, cols >= 1, got rows={rows}, cols={cols}.")
            params = {"rows": rows, "cols": cols}
            graph = _grid_2d(rows, cols)
        else:
            n = int(params.get("n", 5))
            if n < 1:
                raise ValueError(f"{canonical} needs at least one qubit, got n={n}.")
            params = {"n": n}
            graph = _linear_chain(n) if canonical == "linear-chain" else _star(n)

        self._init_graph(canonical, params, graph)

    def _init_graph(self, shape: str, params: dict, graph: list[list[int]]) -> None:
        self.shape = shape
        self.params = params
        self.graph: tuple[tuple[int, ...], ...] = tuple(tuple(nb) for nb in graph)
        self._neighbor_sets = tuple(frozenset(nb) for nb in self.graph)
        self._distance_cache: dict[tuple[int, int], float] = {}
        self._path_cache: dict[tuple[int, int], tuple[int, ...]] = {}
        self._edges: Optional[tuple[tuple[int, int], ...]] = None

    # --- Constructors ---

    @classmethod
    def linear_chain(cls, n: int) -> Topology:
        return cls("linear-chain", n=n)

    @classmethod
    def grid_2d(cls, rows: int, cols: int) -> Topology:
        return cls("grid2D", rows=rows, cols=cols)

    @classmethod
    def star(cls, n: int) -> Topology:
        return cls("star", n=n)

    @classmethod
    def from_edges(cls, n_qubits: int, edges: Iterable[tuple[int, int]]) -> Topology:
        """Build a ``custom`` topology from an explicit edge list.

        Direction and duplicates are ignored. Neighbors are kept in
        ascending order. The resulting graph may be disconnected.
        """
        if n_qubits < 1:
            raise ValueError(f"Topology needs at least one qubit, got {n_qubits}.")
        adjacency: list[set[int]] = [set() for _ in range(n_qubits)]
        for q0, q1 in edges:
            q0, q1 = int(q0), int(q1)
            if not (0 <= q0 < n_qubits and 0 <= q1 < n_qubits):
                raise ValueError(f"Edge ({q0}, {q1}) is outside [0, {n_qubits}).")
            if q0 == q1:
                continue
            adjacency[q0].add(q1)
            adjacency[q1].add(q0)
        topo = cls.__new__(cls)
        topo._init_graph("custom", {"n": n_qubits}, [sorted(nb) for nb in adjacency])
        return topo

    @classmethod
    def from_coupling_map(cls, coupling_map: CouplingMap) -> Topology:
        """Import a Qiskit CouplingMap as an undirected topology."""
        return cls.from_edges(coupling_map.size(), coupling_map.get_edges())

    def to_coupling_map(self) -> CouplingMap:
        """Export as a bidirectional Qiskit CouplingMap."""
        couplings = []
        for u, v in self.edges():
            couplings.append([u, v])
            couplings.append([v, u])
        cm = CouplingMap(couplinglist=couplings)
        # Isolated qubits never appear in the edge list
        for q in range(cm.size(), self.num_qubits):
            cm.add_physical_qubit(q)
        return cm

    # --- Graph queries ---

    @property
    def num_qubits(self) -> int:
        return len(self.graph)

    def neighbors(self, q: int) -> tuple[int, ...]:
        return self.graph[q]

    def edges(self) -> tuple[tuple[int, int], ...]:
        """Undirected edges ``(u, v)`` with ``u < v`` in canonical order.

        Nodes ascend; within a node, neighbors follow adjacency-list order.
        Every strategy that enumerates candidate swaps uses this order.
        """
        if self._edges is None:
            self._edges = tuple(
                (u, v) for u, neighbors in enumerate(self.graph) for v in neighbors if u < v
            )
        return self._edges

    def is_connected(self, q1: int, q2: int) -> bool:
        if not 0 <= q1 < self.num_qubits:
            return False
        return q2 in self._neighbor_sets[q1]

    def distance(self, q1: int, q2: int) -> float:
        """Hop count between two physical qubits (``math.inf`` if unreachable)."""
        key = (q1, q2) if q1 <= q2 else (q2, q1)
        cached = self._distance_cache.get(key)
        if cached is not None:
            return cached

        self._check_qubit(q1)
        self._check_qubit(q2)
        dist = math.inf
        visited = {q1}
        queue = deque([(q1, 0)])
        while queue:
            node, d = queue.popleft()
            if node == q2:
                dist = d
                break
            for neighbor in self.graph[node]:
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append((neighbor, d + 1))

        self._distance_cache[key] = dist
        return dist

    def shortest_path(self, q1: int, q2: int) -> tuple[int, ...]:
        """BFS vertex path from ``q1`` to ``q2`` inclusive; empty if unreachable."""
        key = (q1, q2)
        cached = self._path_cache.get(key)
        if cached is not None:
            return cached

        self._check_qubit(q1)
        self._check_qubit(q2)
        parent = {q1: None}
        queue = deque([q1])
        path: tuple[int, ...] = ()
        while queue:
            node = queue.popleft()
            if node == q2:
                trail = []
                while node is not None:
                    trail.append(node)
                    node = parent[node]
                path = tuple(reversed(trail))
                break
            for neighbor in self.graph[node]:
                if neighbor not in parent:
                    parent[neighbor] = node
                    queue.append(neighbor)

        self._path_cache[key] = path
        return path

    def _check_qubit(self, q: int) -> None:
        if not 0 <= q < self.num_qubits:
            raise ValueError(f"Physical qubit {q} is outside [0, {self.num_qubits}).")

    # --- Matrix views ---

    def adjacency(self) -> csr_matrix:
        """Symmetric adjacency matrix with uniform edge weight 1.0."""
        n = self.num_qubits
        adj = lil_matrix((n, n), dtype=np.float64)
        for u, v in self.edges():
            adj[u, v] = 1.0
            adj[v, u] = 1.0
        return adj.tocsr()

    def distance_matrix(self) -> np.ndarray:
        """All-pairs hop distances (``np.inf`` where unreachable)."""
        return _csgraph_shortest_path(self.adjacency(), directed=False, unweighted=True)

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"Topology('{self.shape}', {args})"
