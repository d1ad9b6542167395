"""Nodes, ports, edges and the graph aggregate."""
