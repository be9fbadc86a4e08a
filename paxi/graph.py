"""Directed graph with traversal, cycle detection and strongly connected components."""

from __future__ import annotations

from collections import deque
from enum import Enum
from typing import Any, Hashable, Iterator


class _Color(Enum):
    WHITE = 0
    GRAY = 1
    BLACK = 2


class Graph:
    """A directed graph over hashable vertices, kept in insertion order."""

    def __init__(self) -> None:
        self._out: dict[Hashable, dict[Hashable, None]] = {}
        self._in: dict[Hashable, dict[Hashable, None]] = {}

    def __len__(self) -> int:
        return len(self._out)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._out

    def add(self, vertex: Hashable) -> None:
        """Add a vertex if not already present."""
        if vertex not in self._out:
            self._out[vertex] = {}
            self._in[vertex] = {}

    def remove(self, vertex: Hashable) -> None:
        """Remove a vertex and every edge touching it."""
        if vertex not in self._out:
            return
        for target in self._out.pop(vertex):
            self._in[target].pop(vertex, None)
        for source in self._in.pop(vertex):
            self._out[source].pop(vertex, None)

    def add_edge(self, source: Hashable, target: Hashable) -> None:
        """Add an edge, adding its endpoints as needed."""
        if source == target:
            raise ValueError("graph: adding self edge")
        self.add(source)
        self.add(target)
        self._out[source][target] = None
        self._in[target][source] = None

    def remove_edge(self, source: Hashable, target: Hashable) -> None:
        """Remove an edge if both endpoints exist."""
        if source not in self._out or target not in self._out:
            return
        self._out[source].pop(target, None)
        self._in[target].pop(source, None)

    def vertices(self) -> list[Hashable]:
        """Return the vertices in insertion order."""
        return list(self._out)

    def successors(self, vertex: Hashable) -> set[Hashable]:
        """Vertices reachable from ``vertex`` by one edge."""
        return set(self._out.get(vertex, ()))

    def predecessors(self, vertex: Hashable) -> set[Hashable]:
        """Vertices with an edge into ``vertex``."""
        return set(self._in.get(vertex, ()))

    def _breadth_first(self, vertex: Hashable, edges: dict) -> list[Hashable]:
        result = []
        visited = {vertex}
        queue = deque([vertex])
        while queue:
            current = queue.popleft()
            result.append(current)
            for nxt in edges.get(current, ()):
                if nxt not in visited:
                    visited.add(nxt)
                    queue.append(nxt)
        return result

    def bfs(self, vertex: Hashable) -> list[Hashable]:
        """Breadth-first order of vertices reachable from ``vertex``."""
        return self._breadth_first(vertex, self._out)

    def bfs_reverse(self, vertex: Hashable) -> list[Hashable]:
        """Breadth-first order following edges backwards from ``vertex``."""
        return self._breadth_first(vertex, self._in)

    def dfs(self, vertex: Hashable) -> list[Hashable]:
        """Depth-first order of vertices reachable from ``vertex``."""
        result = []
        visited: set[Hashable] = set()
        stack = [vertex]
        while stack:
            current = stack.pop()
            if current not in visited:
                visited.add(current)
                result.append(current)
            stack.extend(n for n in self._out.get(current, ()) if n not in visited)
        return result

    def transpose(self) -> "Graph":
        """Return a new graph with every edge reversed."""
        t = Graph()
        for vertex in self._out:
            t._out[vertex] = dict(self._in[vertex])
            t._in[vertex] = dict(self._out[vertex])
        return t

    def _visit(self, start: Hashable, colors: dict[Hashable, _Color]) -> bool:
        """Colour vertices from ``start``; True when a back edge is met."""
        colors[start] = _Color.GRAY
        stack: list[tuple[Hashable, Iterator[Hashable]]] = [(start, iter(list(self._out[start])))]
        while stack:
            vertex, successors = stack[-1]
            for nxt in successors:
                color = colors.get(nxt, _Color.WHITE)
                if color is _Color.GRAY:
                    return True
                if color is _Color.WHITE:
                    colors[nxt] = _Color.GRAY
                    stack.append((nxt, iter(list(self._out[nxt]))))
                    break
            else:
                colors[vertex] = _Color.BLACK
                stack.pop()
        return False

    def _search_cycle(self) -> dict[Hashable, _Color] | None:
        colors = {v: _Color.WHITE for v in self._out}
        for vertex in self._out:
            if colors[vertex] is _Color.WHITE and self._visit(vertex, colors):
                return colors
        return None

    def cyclic(self) -> bool:
        """Whether the graph contains a cycle."""
        return self._search_cycle() is not None

    def cycle(self) -> list[Hashable] | None:
        """Return the vertices on the search path when a cycle is found, else None."""
        colors = self._search_cycle()
        if colors is None:
            return None
        return [v for v, color in colors.items() if color is _Color.GRAY]

    def scc(self) -> list[list[Any]]:
        """Strongly connected components, found with Tarjan's algorithm."""
        index: dict[Hashable, int] = {}
        low: dict[Hashable, int] = {}
        on_stack: set[Hashable] = set()
        stack: list[Hashable] = []
        components: list[list[Any]] = []

        def open_vertex(v: Hashable) -> None:
            index[v] = low[v] = len(index)
            stack.append(v)
            on_stack.add(v)

        for root in self._out:
            if root in index:
                continue
            open_vertex(root)
            work: list[tuple[Hashable, Iterator[Hashable]]] = [(root, iter(self._out[root]))]
            while work:
                vertex, successors = work[-1]
                descended = False
                for nxt in successors:
                    if nxt not in index:
                        open_vertex(nxt)
                        work.append((nxt, iter(self._out[nxt])))
                        descended = True
                        break
                    if nxt in on_stack:
                        low[vertex] = min(low[vertex], index[nxt])
                if descended:
                    continue
                work.pop()
                if work:
                    parent = work[-1][0]
                    low[parent] = min(low[parent], low[vertex])
                if low[vertex] == index[vertex]:
                    component = []
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        component.append(member)
                        if member == vertex:
                            break
                    components.append(component)
        return components