import json
import tempfile
import unittest
from pathlib import Path
from tests.utils.bootstrap import add_src_to_path, node, port
add_src_to_path()

from logicgraph.core.exceptions import DocumentError, IndexBoundsError
from logicgraph.nodes.core.graph import Graph
from logicgraph.utils.jsonio import read_document, write_document

DOC = {
    "id": "g1",
    "name": "Adder",
    "nodes": [
        node("a", 0, 0, outputs=[port("a.out", value=1)]),
        node("b", 0, 200, outputs=[port("b.out", zero_offset=False)]),
        node("sum", 300, 100, inputs=["sum.x", "sum.y"], outputs=["sum.out"], width=140, height=80),
    ],
    "edges": [
        {"id": "e1", "sourcePortId": "a.out", "targetPortId": "sum.x"},
        {"id": "e2", "sourcePortId": "b.out", "targetPortId": "sum.y"},
    ],
}


def _shape(g):
    nodes = {
        n.id: (tuple(n.get_position()), n.size,
               [p.id for p in n.get_inputs()], [p.id for p in n.get_outputs()])
        for n in g
    }
    edges = sorted((e.id, e.source_port.id, e.target_port.id) for e in g.get_edges())
    return nodes, edges


class TestRoundTrip(unittest.TestCase):
    def test_to_json_from_json(self):
        g = Graph.from_document(DOC)
        data = g.to_json()
        json.dumps(data)
        h = Graph("other")
        h.from_json(data)
        self.assertEqual((h.id, h.name), ("g1", "Adder"))
        self.assertEqual(_shape(h), _shape(g))
        self.assertEqual(h.get_port("a.out").value, 1)
        self.assertEqual(h.get_edge("e2").get_bounds(), g.get_edge("e2").get_bounds())
        self.assertEqual(h.validate(), [])

    def test_from_json_replaces_state(self):
        g, removed = Graph.from_document(DOC), []
        g.on("node:removed", removed.append)
        g.from_json({"id": "g2", "name": "Empty"})
        self.assertEqual(sorted(removed), ["a", "b", "sum"])
        self.assertEqual((g.id, len(g), g.get_edges()), ("g2", 0, []))

    def test_edges_with_missing_ports_are_skipped(self):
        doc = dict(DOC, edges=DOC["edges"] + [
            {"id": "bad", "sourcePortId": "ghost", "targetPortId": "sum.x"},
            {"id": "same", "sourcePortId": "a.out", "targetPortId": "b.out"},
        ])
        with self.assertLogs("logicgraph", level="WARNING") as cm:
            g = Graph.from_document(doc)
        self.assertEqual(sorted(e.id for e in g.get_edges()), ["e1", "e2"])
        self.assertEqual(len(cm.records), 2)

    def test_legacy_documents_without_size(self):
        g = Graph.from_document({"id": "g", "name": "G", "nodes": [{"id": "n", "name": "N", "type": "t", "x": 1, "y": 2}], "edges": []})
        self.assertEqual(g.get_node("n").size, (100, 60))

    def test_invalid_documents(self):
        with self.assertRaises(DocumentError):
            Graph.from_document({"name": "no id"})
        with self.assertRaises(DocumentError):
            Graph.from_document({"id": "g", "edges": [{"id": "e"}]})
        with self.assertRaises(DocumentError):
            Graph.from_document(["not", "a", "mapping"])
        with self.assertRaises(IndexBoundsError):
            Graph.from_document({"id": "g", "nodes": [node("far", 1e6, 0)]})


class TestDocumentFiles(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_json_and_yaml(self):
        g = Graph.from_document(DOC)
        for name in ("graph.json", "graph.yaml"):
            path = str(self.tmp / name)
            write_document(path, g.to_json())
            h = Graph.from_document(read_document(path))
            self.assertEqual(_shape(h), _shape(g), name)

    def test_unreadable(self):
        bad = self.tmp / "bad.json"
        bad.write_text("{nope", encoding="utf-8")
        with self.assertRaises(DocumentError):
            read_document(str(bad))
        with self.assertRaises(DocumentError):
            read_document(str(self.tmp / "missing.yaml"))


if __name__ == "__main__":
    unittest.main(verbosity=2)
