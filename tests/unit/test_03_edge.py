import unittest
from tests.utils.bootstrap import add_src_to_path, node
add_src_to_path()

from logicgraph.core.exceptions import IncompatiblePortsError, NodeNotFoundError, PortNotFoundError
from logicgraph.core.types import Bounds, Point
from logicgraph.nodes.base.node import Node
from logicgraph.nodes.core.edge import Edge


class TestEdge(unittest.TestCase):
    def setUp(self):
        self.n1 = Node(node("n1", 0, 0, inputs=["i0"], outputs=["o1", "o9"]))
        self.n2 = Node(node("n2", 100, 0, inputs=["i1"], outputs=["o2"]))
        self.nodes = {"n1": self.n1, "n2": self.n2}
        self.ports = {p.id: p for n in (self.n1, self.n2) for p in n.iter_ports()}

    def _edge(self, src="o1", dst="i1", nodes=None, ports=None, listeners=None):
        return Edge("e1", src, dst, self.ports if ports is None else ports,
                    self.nodes if nodes is None else nodes, listeners)

    def test_connected_fires_to_listeners_from_constructor(self):
        seen = []
        e = self._edge(listeners={"connected": lambda edge, s, t: seen.append((edge, s.id, t.id))})
        self.assertEqual(seen, [(e, "o1", "i1")])
        self.assertIs(e.source_node, self.n1)
        self.assertIs(e.target_port, self.n2.get_input("i1"))

    def test_lookup_failures(self):
        with self.assertRaises(PortNotFoundError):
            self._edge(src="nope")
        with self.assertRaises(PortNotFoundError):
            self._edge(dst="nope")
        with self.assertRaises(NodeNotFoundError):
            self._edge(nodes={"n1": self.n1})

    def test_incompatible_ports(self):
        with self.assertRaises(IncompatiblePortsError):
            self._edge(src="o1", dst="o2")
        with self.assertRaises(IncompatiblePortsError):
            self._edge(src="i1", dst="o1")

    def test_no_event_when_construction_fails(self):
        seen = []
        with self.assertRaises(IncompatiblePortsError):
            self._edge(src="i1", dst="o1", listeners={"connected": lambda *a: seen.append(a)})
        self.assertEqual(seen, [])

    def test_bounds_cached_until_invalidated(self):
        e = self._edge()
        b = e.get_bounds()
        self.assertEqual(b, Bounds(0, 0, 100, 0))
        self.assertIs(e.get_bounds(), b)
        self.n2.set_position(100, 50)
        self.assertIs(e.get_bounds(), b)  # stale until the owner invalidates
        e.invalidate()
        self.assertEqual(e.get_bounds(), Bounds(0, 0, 100, 50))
        self.assertEqual(e.get_target_position(), Point(100, 50))

    def test_backwards_edge_bounds(self):
        self.n1.set_position(300, 200)
        e = self._edge()
        self.assertEqual(e.get_bounds(), Bounds(100, 0, 200, 200))

    def test_transfer_and_validate(self):
        e = self._edge()
        self.n1.get_output("o1").set_value("payload")
        self.assertTrue(e.validate())
        self.assertTrue(e.transfer())
        self.assertEqual(self.n2.get_input("i1").value, "payload")

    def test_disconnect_only_emits(self):
        seen = []
        e = self._edge(listeners={"disconnected": lambda edge, eid: seen.append((edge, eid))})
        e.disconnect()
        self.assertEqual(seen, [(e, "e1")])
        self.assertIs(e.source_port, self.n1.get_output("o1"))

    def test_to_json(self):
        self.assertEqual(self._edge().to_json(), {"id": "e1", "sourcePortId": "o1", "targetPortId": "i1"})
        self.assertTrue(self._edge().touches_node("n2"))
        self.assertTrue(self._edge().touches_port("o1"))
        self.assertFalse(self._edge().touches_port("o9"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
