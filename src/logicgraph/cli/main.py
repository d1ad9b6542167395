from __future__ import annotations
import argparse, json, logging
from typing import List, Optional

from ..config.manager import ConfigManager
from ..core.exceptions import LogicGraphError
from ..core.types import Bounds
from ..logging_config import setup_logging
from ..nodes.core.graph import Graph
from ..utils.jsonio import read_document

logger = logging.getLogger(__name__)


def _load_graph(args) -> Graph:
    layers = [args.config] if getattr(args, "config", None) else None
    config = ConfigManager(extra_layers=layers).finalize()
    return Graph.from_document(read_document(args.document), config)


class InspectCommand:
    @staticmethod
    def configure(p):
        p.add_argument("document", help="Path to a GraphData JSON or YAML file")
        p.add_argument("--json", action="store_true", help="Print the summary as JSON")

    def run(self, args) -> int:
        try:
            g = _load_graph(args)
        except LogicGraphError as e:
            print("[inspect] error:", e)
            return 1
        summary = {
            "id": g.id,
            "name": g.name,
            "nodes": len(g),
            "edges": len(g.get_edges()),
            "world": g.config.world.to_dict(),
        }
        if args.json:
            print(json.dumps(summary, indent=2))
        else:
            print(f"[inspect] graph {g.id!r} ({g.name}): {summary['nodes']} nodes, {summary['edges']} edges")
            for node in g:
                b = node.get_bounds()
                print(f"  node {node.id} [{node.type}] at ({b.x}, {b.y}) {b.width}x{b.height}")
            for edge in g.get_edges():
                print(f"  edge {edge.id}: {edge.source_port.id} -> {edge.target_port.id}")
        return 0


class ValidateCommand:
    @staticmethod
    def configure(p):
        p.add_argument("document", help="Path to a GraphData JSON or YAML file")

    def run(self, args) -> int:
        try:
            g = _load_graph(args)
        except LogicGraphError as e:
            print("[validate] error:", e)
            return 1
        errs = g.validate()
        if errs:
            print("[validate] ERRORS:", errs)
            return 1
        print("[validate] OK")
        return 0


class QueryCommand:
    @staticmethod
    def configure(p):
        p.add_argument("document", help="Path to a GraphData JSON or YAML file")
        p.add_argument("--bounds", "-b", nargs=4, type=float, required=True,
                       metavar=("X", "Y", "W", "H"), help="Query rectangle")
        p.add_argument("--edges", action="store_true", help="Query edges instead of nodes")

    def run(self, args) -> int:
        try:
            g = _load_graph(args)
        except LogicGraphError as e:
            print("[query] error:", e)
            return 1
        region = Bounds(*args.bounds)
        hits = g.get_edges_in_bounds(region) if args.edges else g.get_nodes_in_bounds(region)
        for entity in hits:
            print(entity.id)
        logger.debug("query %s matched %d entities", region, len(hits))
        return 0


def _build_parser():
    p = argparse.ArgumentParser(prog="logicgraph", description="Logic graph document tools")
    p.add_argument("--config", "-c", help="Extra YAML/JSON config layer")
    p.add_argument("--debug", action="store_true", help="Debug logging")
    sp = p.add_subparsers(dest="cmd", required=True)

    pi = sp.add_parser("inspect", help="Summarize a graph document")
    InspectCommand.configure(pi)
    pi.set_defaults(_cmd=InspectCommand().run)

    pv = sp.add_parser("validate", help="Load a graph document and check its integrity")
    ValidateCommand.configure(pv)
    pv.set_defaults(_cmd=ValidateCommand().run)

    pq = sp.add_parser("query", help="List entities intersecting a rectangle")
    QueryCommand.configure(pq)
    pq.set_defaults(_cmd=QueryCommand().run)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(debug=args.debug)
    return args._cmd(args)


if __name__ == "__main__":
    raise SystemExit(main())
