import unittest

import networkx as nx

from petrikit.Net.conversion import to_bipartite
from petrikit.Net.net import PetriNet


class TestToBipartite(unittest.TestCase):
    def setUp(self) -> None:
        self.net = PetriNet()
        self.p0 = self.net.add_place("in", marking=2)
        self.p1 = self.net.add_place()
        self.t0 = self.net.add_transition("fire")
        self.net.add_arc(self.p0, self.t0)
        self.net.add_arc(self.p0, self.t0, mult=2)
        self.net.add_arc(self.t0, self.p1)

    def test_nodes_and_attributes(self):
        G = to_bipartite(self.net)
        self.assertIsInstance(G, nx.DiGraph)
        self.assertEqual(set(G.nodes), {"p_0", "p_1", "t_0"})
        self.assertEqual(G.nodes["p_0"]["kind"], "place")
        self.assertEqual(G.nodes["p_0"]["label"], "in")
        self.assertEqual(G.nodes["p_0"]["marking"], 2)
        self.assertEqual(G.nodes["p_1"]["label"], "p_1")
        self.assertEqual(G.nodes["t_0"]["bipartite"], 1)
        self.assertEqual(G.nodes["t_0"]["label"], "fire")
        self.assertTrue(nx.is_bipartite(G))

    def test_parallel_arcs_collapse(self):
        G = to_bipartite(self.net)
        self.assertEqual(G.number_of_edges(), 2)
        self.assertEqual(G["p_0"]["t_0"]["weight"], 3)
        self.assertEqual(G["p_0"]["t_0"]["arcs"], [0, 1])
        self.assertEqual(G["t_0"]["p_1"]["weight"], 1)

    def test_integer_ids(self):
        G = to_bipartite(self.net, integer_ids=True)
        self.assertEqual(set(G.nodes), {0, 1, 2})
        self.assertEqual(G.nodes[2]["kind"], "transition")
        self.assertTrue(G.has_edge(0, 2))

    def test_isolated_and_zero_weight(self):
        self.net.add_transition()
        a = self.net.add_arc(self.t0, self.p0)
        self.net.set_multiplicity(a, 0)
        G = to_bipartite(self.net, include_isolated=False)
        self.assertNotIn("t_1", G)
        self.assertFalse(G.has_edge("t_0", "p_0"))
        G2 = to_bipartite(self.net, include_zero_weight=True)
        self.assertIn("t_1", G2)
        self.assertEqual(G2["t_0"]["p_0"]["weight"], 0)


if __name__ == "__main__":
    unittest.main()
