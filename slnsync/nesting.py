"""Solution folder nesting as a networkx.DiGraph."""

from __future__ import annotations

import networkx as nx

from slnsync.config import NESTED_PROJECTS, Document


def _strip_braces(guid: str) -> str:
    return guid.strip().strip("{}").upper()


def build_nesting_graph(document: Document) -> nx.DiGraph:
    """Build a parent -> child graph from every NestedProjects section.

    Nodes are upper-cased GUIDs. Every project is a node, carrying its
    ``name`` and ``is_grouping`` flag; ids referenced only by the mapping
    are added with ``name=None``.
    """
    graph = nx.DiGraph()

    for project in document.projects:
        graph.add_node(
            _strip_braces(project.id),
            name=project.name,
            path=project.path,
            is_grouping=project.is_grouping,
        )

    for section in document.sections:
        if section.name != NESTED_PROJECTS:
            continue
        for child, parent in section.entries:
            child_id = _strip_braces(child)
            parent_id = _strip_braces(parent)
            for node in (child_id, parent_id):
                if node not in graph:
                    graph.add_node(node, name=None, path=None, is_grouping=False)
            graph.add_edge(parent_id, child_id)

    return graph


def nesting_roots(graph: nx.DiGraph) -> list[str]:
    """Nodes without a parent, in insertion order."""
    return [n for n in graph.nodes if graph.in_degree(n) == 0]


def display_order(graph: nx.DiGraph) -> list[str]:
    """Starting nodes for walking the whole graph.

    The parentless roots first, then one node of every cycle that no root
    reaches, so a walk from these visits every node.
    """
    starts = nesting_roots(graph)
    reached: set[str] = set()
    for root in starts:
        reached.add(root)
        reached.update(nx.descendants(graph, root))
    for node in graph.nodes:
        if node not in reached:
            starts.append(node)
            reached.add(node)
            reached.update(nx.descendants(graph, node))
    return starts
