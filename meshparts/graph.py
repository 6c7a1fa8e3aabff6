"""
Vertex adjacency graph of a mesh and connected-component extraction.

Edges join consecutive vertices of each face: face (a, b, c) contributes
{a, b} and {b, c} but not {c, a}. Every edge is recorded in both directions
and repeated edges are kept, so adjacency lists behave like multisets.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

import networkx as nx

from .mesh import Mesh

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())


class AdjacencyGraph:
    """
    Undirected graph over vertex indices 0..num_vertices-1 of a mesh.

    Components are computed on the first call to `get_connected_components`
    and cached for the lifetime of the instance. The graph is never modified
    after construction, so the cache cannot go stale; build a new graph for a
    different mesh.
    """

    def __init__(self, mesh: Mesh):
        self.num_vertices: int = mesh.num_vertices
        self.adjacency_lists: List[List[int]] = [[] for _ in range(self.num_vertices)]
        self.edges: List[Tuple[int, int]] = []
        self._components: Optional[List[List[int]]] = None

        mesh.check_face_indices()
        for face in mesh.faces:
            for v1, v2 in zip(face[:-1], face[1:]):
                self.adjacency_lists[v1].append(v2)
                self.adjacency_lists[v2].append(v1)
                self.edges.append((v1, v2))
        logger.debug(
            "Built adjacency graph: %d vertices, %d edges",
            self.num_vertices,
            len(self.edges),
        )

    def get_connected_components(self) -> List[List[int]]:
        """
        Return the connected components as lists of vertex indices.

        Components are ordered by their lowest vertex index. Within a
        component, vertices appear in depth-first visitation order, following
        each adjacency list in insertion order. Isolated vertices form
        singleton components.
        """
        if self._components is None:
            self._components = self._compute_components()
        return [list(c) for c in self._components]

    def _compute_components(self) -> List[List[int]]:
        visited = [False] * self.num_vertices
        components: List[List[int]] = []
        for start in range(self.num_vertices):
            if visited[start]:
                continue
            component = [start]
            visited[start] = True
            # One neighbour iterator per open vertex; resuming the top iterator
            # reproduces recursive DFS order without recursion.
            stack = [iter(self.adjacency_lists[start])]
            while stack:
                for w in stack[-1]:
                    if not visited[w]:
                        visited[w] = True
                        component.append(w)
                        stack.append(iter(self.adjacency_lists[w]))
                        break
                else:
                    stack.pop()
            components.append(component)
        logger.debug("Found %d connected component(s)", len(components))
        return components

    def to_networkx(self) -> nx.MultiGraph:
        """Return a MultiGraph with one node per vertex and every recorded edge."""
        G = nx.MultiGraph()
        G.add_nodes_from(range(self.num_vertices))
        G.add_edges_from(self.edges)
        return G
