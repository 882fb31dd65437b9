"""Tests for device topologies and their distance queries."""

import math

import numpy as np
import pytest

from qiskit.transpiler import CouplingMap

from swaproute.core.topology import Topology


def _all_shapes() -> list[Topology]:
    return [
        Topology.linear_chain(6),
        Topology.grid_2d(3, 3),
        Topology.grid_2d(2, 4),
        Topology.star(5),
    ]


class TestShapes:
    def test_linear_chain(self):
        topo = Topology("linear-chain", n=4)
        assert topo.num_qubits == 4
        assert topo.edges() == ((0, 1), (1, 2), (2, 3))
        assert topo.neighbors(0) == (1,)
        assert topo.neighbors(2) == (1, 3)

    def test_grid_ids_are_row_major(self):
        topo = Topology("grid2D", rows=2, cols=3)
        assert topo.num_qubits == 6
        assert set(topo.edges()) == {(0, 1), (1, 2), (3, 4), (4, 5), (0, 3), (1, 4), (2, 5)}
        # left, right, up, down
        assert topo.neighbors(4) == (3, 5, 1)

    def test_star(self):
        topo = Topology("star", n=4)
        assert topo.edges() == ((0, 1), (0, 2), (0, 3))
        assert topo.is_connected(0, 3)
        assert not topo.is_connected(1, 2)

    def test_aliases(self):
        assert Topology("lnn", n=3).shape == "linear-chain"
        assert Topology("grid2d", rows=2, cols=2).shape == "grid2D"

    def test_defaults(self):
        assert Topology("linear-chain").num_qubits == 5
        assert Topology("grid2D").num_qubits == 9

    def test_unknown_shape_rejected(self):
        with pytest.raises(ValueError, match="Unknown topology shape"):
            Topology("ring", n=4)

    @pytest.mark.parametrize("shape, params", [
        ("linear-chain", {"n": 0}),
        ("star", {"n": 0}),
        ("grid2D", {"rows": 0, "cols": 3}),
    ])
    def test_zero_qubits_rejected(self, shape, params):
        with pytest.raises(ValueError):
            Topology(shape, **params)

    def test_is_connected_symmetric(self):
        topo = Topology.grid_2d(3, 3)
        for u, v in topo.edges():
            assert topo.is_connected(u, v)
            assert topo.is_connected(v, u)


class TestDistance:
    @pytest.mark.parametrize("topo", _all_shapes(), ids=repr)
    def test_self_distance_zero(self, topo):
        for q in range(topo.num_qubits):
            assert topo.distance(q, q) == 0

    @pytest.mark.parametrize("topo", _all_shapes(), ids=repr)
    def test_symmetric(self, topo):
        n = topo.num_qubits
        for a in range(n):
            for b in range(n):
                assert topo.distance(a, b) == topo.distance(b, a)

    @pytest.mark.parametrize("topo", _all_shapes(), ids=repr)
    def test_distance_matches_path_length(self, topo):
        n = topo.num_qubits
        for a in range(n):
            for b in range(n):
                path = topo.shortest_path(a, b)
                assert path[0] == a and path[-1] == b
                assert topo.distance(a, b) == len(path) - 1
                for u, v in zip(path, path[1:]):
                    assert topo.is_connected(u, v)

    @pytest.mark.parametrize("topo", _all_shapes(), ids=repr)
    def test_matches_scipy_distance_matrix(self, topo):
        dm = topo.distance_matrix()
        n = topo.num_qubits
        assert dm.shape == (n, n)
        for a in range(n):
            for b in range(n):
                assert dm[a, b] == topo.distance(a, b)

    @pytest.mark.parametrize("topo", _all_shapes(), ids=repr)
    def test_matches_qiskit_coupling_map(self, topo):
        cm = topo.to_coupling_map()
        n = topo.num_qubits
        for a in range(n):
            for b in range(n):
                assert cm.distance(a, b) == topo.distance(a, b)

    def test_linear_chain_against_from_line(self):
        topo = Topology.linear_chain(7)
        cm = CouplingMap.from_line(7)
        assert topo.distance(0, 6) == cm.distance(0, 6) == 6

    def test_star_distances(self):
        topo = Topology.star(5)
        assert topo.distance(0, 4) == 1
        assert topo.distance(1, 2) == 2

    def test_grid_path_is_deterministic(self):
        topo = Topology.grid_2d(3, 3)
        assert topo.shortest_path(0, 8) == (0, 1, 2, 5, 8)

    def test_distance_is_memoized(self):
        topo = Topology.linear_chain(5)
        topo.distance(4, 1)
        assert topo._distance_cache[(1, 4)] == 3

    def test_out_of_range_qubit(self):
        topo = Topology.linear_chain(3)
        with pytest.raises(ValueError):
            topo.distance(0, 7)


class TestDisconnected:
    def test_infinite_distance_and_empty_path(self):
        topo = Topology.from_edges(4, [(0, 1), (2, 3)])
        assert topo.shape == "custom"
        assert topo.distance(0, 2) == math.inf
        assert topo.shortest_path(0, 3) == ()
        assert topo.distance(0, 1) == 1

    def test_distance_matrix_marks_unreachable(self):
        topo = Topology.from_edges(4, [(0, 1), (2, 3)])
        dm = topo.distance_matrix()
        assert np.isinf(dm[0, 2])
        assert dm[2, 3] == 1


class TestInterop:
    def test_from_edges_dedupes_directions(self):
        topo = Topology.from_edges(3, [(0, 1), (1, 0), (2, 1), (1, 1)])
        assert topo.edges() == ((0, 1), (1, 2))

    def test_from_edges_rejects_bad_edge(self):
        with pytest.raises(ValueError):
            Topology.from_edges(2, [(0, 5)])

    def test_coupling_map_round_trip(self):
        topo = Topology.grid_2d(2, 3)
        back = Topology.from_coupling_map(topo.to_coupling_map())
        assert back.num_qubits == topo.num_qubits
        assert set(back.edges()) == set(topo.edges())

    def test_coupling_map_keeps_isolated_qubits(self):
        topo = Topology.from_edges(5, [(0, 1)])
        assert topo.to_coupling_map().size() == 5

    def test_from_qiskit_ring(self):
        topo = Topology.from_coupling_map(CouplingMap.from_ring(6))
        assert topo.num_qubits == 6
        assert len(topo.edges()) == 6
        assert topo.distance(0, 3) == 3

    def test_adjacency_matrix(self):
        adj = Topology.star(4).adjacency()
        assert adj.shape == (4, 4)
        assert adj[0, 2] == 1.0
        assert adj[2, 0] == 1.0
        assert adj[1, 2] == 0.0
        assert adj.nnz == 6
