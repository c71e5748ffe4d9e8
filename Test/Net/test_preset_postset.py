import unittest

from petrikit.exceptions import PlaceNotFound, TransitionNotFound
from petrikit.Net.net import PetriNet
from petrikit.Net.refs import ArcRef, NodeRef, PlaceRef, TransitionRef


class TestPresetPostset(unittest.TestCase):
    def setUp(self) -> None:
        # p0 -> t0 -> p1 (mult 2), p1 -> t1 -> p0
        self.net = PetriNet()
        self.p0 = self.net.add_place()
        self.p1 = self.net.add_place(marking=3)
        self.t0 = self.net.add_transition()
        self.t1 = self.net.add_transition()
        self.a0 = self.net.add_arc(self.p0, self.t0)
        self.a1 = self.net.add_arc(self.t0, self.p1, mult=2)
        self.a2 = self.net.add_arc(self.p1, self.t1)
        self.a3 = self.net.add_arc(self.t1, self.p0)

    def test_transition_sets(self):
        self.assertEqual(self.net.preset(self.t0), [(PlaceRef(0), 1)])
        self.assertEqual(self.net.postset(self.t0), [(PlaceRef(1), 2)])
        self.assertEqual(self.net.preset(TransitionRef(1)), [(PlaceRef(1), 1)])
        self.assertEqual(self.net.postset(TransitionRef(1)), [(PlaceRef(0), 1)])

    def test_place_sets(self):
        self.assertEqual(self.net.preset(self.p1), [(TransitionRef(0), 2)])
        self.assertEqual(self.net.postset(self.p1), [(TransitionRef(1), 1)])
        self.assertEqual(self.net.preset(PlaceRef(0)), [(TransitionRef(1), 1)])

    def test_preset_and_postset_differ(self):
        self.assertNotEqual(self.net.preset(self.t0), self.net.postset(self.t0))

    def test_parallel_arcs_are_summed(self):
        net = PetriNet()
        p = net.add_place()
        t = net.add_transition()
        mults = [1, 4, 2]
        for m in mults:
            net.add_arc(p, t, mult=m)
        self.assertEqual(net.postset(p), [(TransitionRef(0), sum(mults))])
        self.assertEqual(net.preset(t), [(PlaceRef(0), sum(mults))])
        self.assertEqual(net.n_arcs(), 3)

    def test_set_multiplicity_is_reflected(self):
        net = PetriNet()
        p = net.add_place()
        t = net.add_transition()
        a = net.add_arc(p, t)
        net.add_arc(p, t, mult=2)
        net.set_multiplicity(a, 5)
        self.assertEqual(net.preset(t), [(PlaceRef(0), 7)])

    def test_zero_weight_neighbour_listed(self):
        self.net.set_multiplicity(self.a1, 0)
        self.assertEqual(self.net.postset(self.t0), [(PlaceRef(1), 0)])

    def test_order_is_by_neighbour_index(self):
        net = PetriNet()
        places = [net.add_place() for _ in range(4)]
        t = net.add_transition()
        for p in reversed(places):
            net.add_arc(t, p)
        self.assertEqual(
            [ref.index for ref, _ in net.postset(t)], [0, 1, 2, 3]
        )

    def test_unconnected_node_gives_empty_sets(self):
        p = self.net.add_place()
        t = self.net.add_transition()
        self.assertEqual(self.net.preset(p), [])
        self.assertEqual(self.net.postset(p), [])
        self.assertEqual(self.net.preset(t), [])
        self.assertEqual(self.net.postset(t), [])

    def test_out_of_range_raises(self):
        with self.assertRaises(PlaceNotFound):
            self.net.preset(PlaceRef(10))
        with self.assertRaises(TransitionNotFound):
            self.net.postset(NodeRef.transition(10))

    def test_incident_arcs(self):
        self.assertEqual(self.net.preset_arcs(self.p0), [ArcRef(3)])
        self.assertEqual(self.net.postset_arcs(self.p0), [ArcRef(0)])
        self.assertEqual(self.net.postset_arcs(self.t0), [ArcRef(1)])

    def test_arcs_partitioned(self):
        tp, pt = self.net.arcs_partitioned()
        self.assertEqual(
            tp,
            [(TransitionRef(0), PlaceRef(1), 2), (TransitionRef(1), PlaceRef(0), 1)],
        )
        self.assertEqual(
            pt,
            [(PlaceRef(0), TransitionRef(0), 1), (PlaceRef(1), TransitionRef(1), 1)],
        )

    def test_arcs_partitioned_empty(self):
        self.assertEqual(PetriNet().arcs_partitioned(), ([], []))

    def test_isolated_nodes(self):
        self.assertEqual(self.net.isolated_nodes(), [])
        p = self.net.add_place()
        t = self.net.add_transition()
        self.assertEqual(self.net.isolated_nodes(), [p, t])

    def test_queries_match_arc_scan(self):
        # aggregated weights equal a brute-force sum over the arc list
        for node in [self.p0, self.p1, self.t0, self.t1]:
            expected = {}
            for _, arc in self.net.iter_arcs():
                if arc.sink == node:
                    key = arc.source.ref
                    expected[key] = expected.get(key, 0) + arc.mult
            self.assertEqual(dict(self.net.preset(node)), expected)
        self.net.check_consistency()


if __name__ == "__main__":
    unittest.main()
