import unittest
from tests.utils.bootstrap import add_src_to_path, node
add_src_to_path()

from logicgraph.nodes.core.graph import Graph


class TestGraphBatchOperations(unittest.TestCase):
    def setUp(self):
        self.graph = Graph.from_document({
            "id": "test-graph",
            "name": "Test Graph",
            "nodes": [
                node("node1", 100, 100, inputs=["input1"], outputs=["output1"]),
                node("node2", 300, 100, inputs=["input2"], outputs=["output2"]),
            ],
            "edges": [{"id": "edge1", "sourcePortId": "output1", "targetPortId": "input2"}],
        })

    def _add_34(self):
        return self.graph.add_nodes([
            node("node3", 100, 300, inputs=["input3"], outputs=["output3"]),
            node("node4", 300, 300, inputs=["input4"], outputs=["output4"]),
        ])

    def test_add_nodes(self):
        created = self._add_34()
        self.assertEqual([n.id for n in created], ["node3", "node4"])
        self.assertEqual(len(self.graph.get_nodes()), 4)
        self.assertIsNotNone(self.graph.get_node("node3"))

    def test_add_nodes_skips_failures(self):
        created = self.graph.add_nodes([
            node("node1", 0, 0),               # duplicate id
            node("far", 50000, 0),             # outside the world
            {"name": "no id"},                 # invalid snapshot
            node("node5", 500, 500),
        ])
        self.assertEqual([n.id for n in created], ["node5"])
        self.assertEqual(len(self.graph), 3)
        self.assertEqual(self.graph.validate(), [])

    def test_remove_nodes_and_their_edges(self):
        removed = self.graph.remove_nodes(["node1", "node2", "missing"])
        self.assertEqual(removed, ["node1", "node2"])
        self.assertEqual(self.graph.get_nodes(), [])
        self.assertEqual(self.graph.get_edges(), [])

    def test_add_edges(self):
        n3, n4 = self._add_34()
        created = self.graph.add_edges([
            (n3.get_output("output3"), n4.get_input("input4")),
            (n4.get_output("output4"), n3.get_input("input3")),
        ])
        self.assertEqual(len(created), 2)
        self.assertEqual(len(self.graph.get_edges()), 3)

    def test_add_edges_filters_invalid(self):
        n3 = self.graph.add_nodes([node("node3", 100, 300, inputs=["input3"], outputs=["output3"])])[0]
        created = self.graph.add_edges([
            (n3.get_input("input3"), n3.get_output("output3")),   # input cannot be a source
            (n3.get_output("output3"), n3.get_input("input3")),
        ])
        self.assertEqual([e.id for e in created], ["edge-output3-input3"])
        self.assertEqual(len(self.graph.get_edges()), 2)

    def test_remove_edges(self):
        n3, n4 = self._add_34()
        created = self.graph.add_edges([
            (n3.get_output("output3"), n4.get_input("input4")),
            (n4.get_output("output4"), n3.get_input("input3")),
        ])
        removed = self.graph.remove_edges([e.id for e in created] + ["missing"])
        self.assertEqual(len(removed), 2)
        self.assertEqual([e.id for e in self.graph.get_edges()], ["edge1"])

    def test_clear(self):
        self.graph.clear()
        self.assertEqual(self.graph.get_nodes(), [])
        self.assertEqual(self.graph.get_edges(), [])


if __name__ == "__main__":
    unittest.main(verbosity=2)
