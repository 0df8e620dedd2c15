"""Layered layout of the relationship diagram.

Connected tables are placed with a left-to-right Sugiyama pipeline:

  1. Cycle removal (greedy feedback arc set, ranking only)
  2. Rank assignment (longest path, sources pulled towards their successors)
  3. Virtual nodes for edges spanning several ranks
  4. Per-rank ordering (barycenter sweeps, best crossing count kept)
  5. Coordinate assignment (rank columns on x, constrained least squares on y)

Tables without any relationship are packed into a grid below that drawing.
Every step iterates in input order, so equal input gives equal output.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Hashable, List, Optional, Sequence, Set, Tuple

import networkx as nx

from erdiagram.core.diagram.model import Point, Relationship, TableNode
from erdiagram.core.diagram.settings import LayoutSettings
from erdiagram.utils.logging import get_logger
from erdiagram.utils.timing import timed

logger = get_logger(__name__)

COORDINATE_SWEEPS = 8
VIRTUAL = "__virtual__"


# ─── Cycle removal ────────────────────────────────────────────────────────────


def greedy_fas_ordering(graph: nx.DiGraph, order: Sequence[Hashable]) -> List[Hashable]:
    """Node sequence with few backward edges (Eades, Lin, Smyth 1993).

    Sinks are peeled to the back and sources to the front; when only cycles
    remain, the node with the largest out-minus-in degree goes to the front.
    Ties are broken by position in ``order``.
    """
    active: Set[Hashable] = set(order)
    out_deg = {n: sum(1 for s in graph.successors(n) if s != n) for n in order}
    in_deg = {n: sum(1 for p in graph.predecessors(n) if p != n) for n in order}

    head: List[Hashable] = []
    tail: List[Hashable] = []

    def remove(node: Hashable) -> None:
        active.discard(node)
        for succ in graph.successors(node):
            if succ in active:
                in_deg[succ] -= 1
        for pred in graph.predecessors(node):
            if pred in active:
                out_deg[pred] -= 1

    while active:
        changed = True
        while changed:
            changed = False
            for node in order:
                if node in active and out_deg[node] == 0:
                    remove(node)
                    tail.append(node)
                    changed = True
            for node in order:
                if node in active and in_deg[node] == 0:
                    remove(node)
                    head.append(node)
                    changed = True

        if active:
            best = max(
                (n for n in order if n in active),
                key=lambda n: out_deg[n] - in_deg[n],
            )
            remove(best)
            head.append(best)

    tail.reverse()
    return head + tail


def remove_cycles(graph: nx.DiGraph, order: Sequence[Hashable]) -> nx.DiGraph:
    """Acyclic copy of ``graph`` used for ranking only.

    Backward edges are reversed and self-loops dropped; the caller keeps the
    original direction for drawing.
    """
    position = {node: i for i, node in enumerate(greedy_fas_ordering(graph, order))}

    dag = nx.DiGraph()
    dag.add_nodes_from(order)
    for src, tgt in graph.edges():
        if src == tgt:
            continue
        if position[src] > position[tgt]:
            dag.add_edge(tgt, src)
        else:
            dag.add_edge(src, tgt)
    return dag


# ─── Ranking ──────────────────────────────────────────────────────────────────


def assign_ranks(dag: nx.DiGraph, order: Sequence[Hashable]) -> Dict[Hashable, int]:
    """Longest-path ranks with sources pulled next to their nearest successor."""
    index = {node: i for i, node in enumerate(order)}
    topo = list(nx.lexicographical_topological_sort(dag, key=index.__getitem__))

    ranks: Dict[Hashable, int] = {}
    for node in topo:
        ranks[node] = max((ranks[p] + 1 for p in dag.predecessors(node)), default=0)

    for node in reversed(topo):
        if dag.in_degree(node) == 0 and dag.out_degree(node) > 0:
            ranks[node] = min(ranks[s] for s in dag.successors(node)) - 1

    lowest = min(ranks.values(), default=0)
    return {node: rank - lowest for node, rank in ranks.items()}


# ─── Virtual nodes ────────────────────────────────────────────────────────────


@dataclass
class RankedGraph:
    """DAG whose edges all connect adjacent ranks."""

    graph: nx.DiGraph
    ranks: Dict[Hashable, int]
    rank_count: int

    def is_virtual(self, node: Hashable) -> bool:
        return isinstance(node, tuple) and node[0] == VIRTUAL


def insert_virtual_nodes(dag: nx.DiGraph, ranks: Dict[Hashable, int]) -> RankedGraph:
    """Split every edge spanning k > 1 ranks into a chain through k - 1 virtual nodes."""
    graph = nx.DiGraph()
    graph.add_nodes_from(dag.nodes)
    ranks = dict(ranks)

    for edge_index, (src, tgt) in enumerate(list(dag.edges())):
        span = ranks[tgt] - ranks[src]
        previous = src
        for step in range(1, span):
            virtual = (VIRTUAL, edge_index, step)
            graph.add_node(virtual)
            ranks[virtual] = ranks[src] + step
            graph.add_edge(previous, virtual)
            previous = virtual
        graph.add_edge(previous, tgt)

    rank_count = max(ranks.values(), default=-1) + 1
    return RankedGraph(graph=graph, ranks=ranks, rank_count=rank_count)


# ─── Ordering ─────────────────────────────────────────────────────────────────


def initial_ordering(ranked: RankedGraph, order: Sequence[Hashable]) -> List[List[Hashable]]:
    """Depth-first placement so connected groups start out contiguous."""
    layers: List[List[Hashable]] = [[] for _ in range(ranked.rank_count)]
    visited: Set[Hashable] = set()

    def visit(start: Hashable) -> None:
        stack = [start]
        while stack:
            node = stack.pop()
            if node in visited:
                continue
            visited.add(node)
            layers[ranked.ranks[node]].append(node)
            neighbours = list(ranked.graph.successors(node)) + list(
                ranked.graph.predecessors(node)
            )
            stack.extend(reversed(neighbours))

    for node in sorted(order, key=lambda n: ranked.ranks[n]):
        visit(node)
    return layers


def _inversions(values: List[int]) -> int:
    if len(values) < 2:
        return 0
    mid = len(values) // 2
    left, right = values[:mid], values[mid:]
    count = _inversions(left) + _inversions(right)
    left.sort()
    right.sort()
    i = j = 0
    while i < len(left) and j < len(right):
        if left[i] <= right[j]:
            i += 1
        else:
            count += len(left) - i
            j += 1
    return count


def count_crossings(layers: List[List[Hashable]], graph: nx.DiGraph) -> int:
    """Edge crossings between every pair of adjacent ranks."""
    total = 0
    for rank in range(len(layers) - 1):
        next_pos = {node: i for i, node in enumerate(layers[rank + 1])}
        pairs: List[Tuple[int, int]] = []
        for pos, node in enumerate(layers[rank]):
            for succ in graph.successors(node):
                if succ in next_pos:
                    pairs.append((pos, next_pos[succ]))
        pairs.sort()
        total += _inversions([target for _, target in pairs])
    return total


def _barycenter_sort(
    layer: List[Hashable], neighbours: Dict[Hashable, List[int]]
) -> List[Hashable]:
    keyed = []
    for index, node in enumerate(layer):
        positions = neighbours.get(node)
        centre = sum(positions) / len(positions) if positions else float(index)
        keyed.append((centre, index, node))
    keyed.sort(key=lambda item: (item[0], item[1]))
    return [node for _, _, node in keyed]


def minimise_crossings(
    ranked: RankedGraph, layers: List[List[Hashable]], passes: int
) -> List[List[Hashable]]:
    """Alternate downward/upward barycenter sweeps, keeping the best ordering seen."""
    graph = ranked.graph
    best = [list(layer) for layer in layers]
    best_crossings = count_crossings(best, graph)
    current = [list(layer) for layer in layers]

    for sweep in range(passes):
        if best_crossings == 0:
            break
        if sweep % 2 == 0:
            for rank in range(1, len(current)):
                pos = {n: i for i, n in enumerate(current[rank - 1])}
                neighbours = {
                    n: [pos[p] for p in graph.predecessors(n) if p in pos]
                    for n in current[rank]
                }
                current[rank] = _barycenter_sort(current[rank], neighbours)
        else:
            for rank in range(len(current) - 2, -1, -1):
                pos = {n: i for i, n in enumerate(current[rank + 1])}
                neighbours = {
                    n: [pos[s] for s in graph.successors(n) if s in pos]
                    for n in current[rank]
                }
                current[rank] = _barycenter_sort(current[rank], neighbours)

        crossings = count_crossings(current, graph)
        if crossings < best_crossings:
            best = [list(layer) for layer in current]
            best_crossings = crossings

    logger.debug(f"Ordering settled with {best_crossings} crossings")
    return best


# ─── Coordinates ──────────────────────────────────────────────────────────────


def _non_decreasing_fit(values: List[float]) -> List[float]:
    """Least-squares non-decreasing fit (pool adjacent violators)."""
    blocks: List[List[float]] = []  # [mean, weight]
    for value in values:
        blocks.append([value, 1.0])
        while len(blocks) > 1 and blocks[-2][0] > blocks[-1][0]:
            mean_b, weight_b = blocks.pop()
            mean_a, weight_a = blocks[-1]
            total = weight_a + weight_b
            blocks[-1] = [(mean_a * weight_a + mean_b * weight_b) / total, total]
    fitted: List[float] = []
    for mean, weight in blocks:
        fitted.extend([mean] * int(weight))
    return fitted


class LayeredLayoutEngine:
    """Assign top-left positions to every table node.

    Example:
        >>> engine = LayeredLayoutEngine()
        >>> positions = engine.layout(graph.nodes, graph.edges)
        >>> positions["Orders"]
        Point(x=0.0, y=0.0)
    """

    def __init__(self, settings: Optional[LayoutSettings] = None):
        self.settings = settings or LayoutSettings.from_config()

    @timed("diagram.layout")
    def layout(
        self, nodes: Sequence[TableNode], edges: Sequence[Relationship]
    ) -> Dict[str, Point]:
        """Compute positions for ``nodes``.

        Args:
            nodes: Nodes with width and height set
            edges: Relationships; edges naming unknown nodes are ignored

        Returns:
            Mapping node id -> top-left position
        """
        by_id = {node.id: node for node in nodes}
        links = [
            (edge.source_table, edge.target_table)
            for edge in edges
            if edge.source_table in by_id and edge.target_table in by_id
        ]
        linked = {table for link in links for table in link}

        connected = [node for node in nodes if node.id in linked]
        isolated = [node for node in nodes if node.id not in linked]

        positions = self._layered_positions(connected, links)
        bottom = max(
            (positions[node.id].y + node.height for node in connected), default=0.0
        )
        positions.update(self._grid_positions(isolated, bottom + self.settings.isolated_top_gap))

        logger.debug(
            f"Laid out {len(connected)} connected and {len(isolated)} isolated nodes"
        )
        return positions

    def apply(
        self, nodes: Sequence[TableNode], edges: Sequence[Relationship]
    ) -> List[TableNode]:
        """Return copies of ``nodes`` moved to their computed positions."""
        positions = self.layout(nodes, edges)
        return [node.moved_to(positions[node.id]) for node in nodes]

    def _layered_positions(
        self, nodes: List[TableNode], links: List[Tuple[str, str]]
    ) -> Dict[str, Point]:
        if not nodes:
            return {}

        order = [node.id for node in nodes]
        graph = nx.DiGraph()
        graph.add_nodes_from(order)
        graph.add_edges_from(links)

        dag = remove_cycles(graph, order)
        ranks = assign_ranks(dag, order)
        ranked = insert_virtual_nodes(dag, ranks)
        layers = initial_ordering(ranked, order)
        layers = minimise_crossings(ranked, layers, self.settings.ordering_passes)

        sizes = {node.id: (node.width, node.height) for node in nodes}
        centre_x = self._rank_centres(layers, sizes)
        centre_y = self._cross_axis_centres(ranked, layers, sizes)

        positions = {}
        for node in nodes:
            positions[node.id] = Point(
                centre_x[ranked.ranks[node.id]] - node.width / 2,
                centre_y[node.id] - node.height / 2,
            )

        min_x = min(p.x for p in positions.values())
        min_y = min(p.y for p in positions.values())
        return {
            node_id: Point(round(p.x - min_x, 2), round(p.y - min_y, 2))
            for node_id, p in positions.items()
        }

    def _rank_centres(
        self, layers: List[List[Hashable]], sizes: Dict[str, Tuple[float, float]]
    ) -> List[float]:
        centres = []
        x = 0.0
        for layer in layers:
            width = max((sizes[n][0] for n in layer if n in sizes), default=0.0)
            centres.append(x + width / 2)
            x += width + self.settings.rank_sep
        return centres

    def _separation(self, upper: Hashable, lower: Hashable, ranked: RankedGraph) -> float:
        sep_upper = self.settings.edge_sep if ranked.is_virtual(upper) else self.settings.node_sep
        sep_lower = self.settings.edge_sep if ranked.is_virtual(lower) else self.settings.node_sep
        return (sep_upper + sep_lower) / 2

    def _cross_axis_centres(
        self,
        ranked: RankedGraph,
        layers: List[List[Hashable]],
        sizes: Dict[str, Tuple[float, float]],
    ) -> Dict[Hashable, float]:
        """Vertical centres: each rank is pulled towards its neighbours' centres
        while keeping its order and the minimum gaps."""

        def height(node: Hashable) -> float:
            return 0.0 if ranked.is_virtual(node) else sizes[node][1]

        offsets: List[List[float]] = []
        for layer in layers:
            layer_offsets = [0.0]
            for upper, lower in zip(layer, layer[1:]):
                gap = (height(upper) + height(lower)) / 2 + self._separation(upper, lower, ranked)
                layer_offsets.append(layer_offsets[-1] + gap)
            offsets.append(layer_offsets)

        y: Dict[Hashable, float] = {}
        for layer, layer_offsets in zip(layers, offsets):
            for node, offset in zip(layer, layer_offsets):
                y[node] = offset

        graph = ranked.graph
        for sweep in range(COORDINATE_SWEEPS):
            downward = sweep % 2 == 0
            sequence = range(1, len(layers)) if downward else range(len(layers) - 2, -1, -1)
            for rank in sequence:
                layer = layers[rank]
                desired = []
                for node in layer:
                    neighbours = graph.predecessors(node) if downward else graph.successors(node)
                    ys = [y[n] for n in neighbours]
                    desired.append(sum(ys) / len(ys) if ys else y[node])
                shifted = [d - o for d, o in zip(desired, offsets[rank])]
                fitted = _non_decreasing_fit(shifted)
                for node, base, offset in zip(layer, fitted, offsets[rank]):
                    y[node] = base + offset

        return y

    def _grid_positions(self, nodes: List[TableNode], top: float) -> Dict[str, Point]:
        """Row-major grid with a fixed column count."""
        if not nodes:
            return {}
        settings = self.settings
        columns = max(1, settings.isolated_columns)
        pitch_x = max(node.width for node in nodes) + settings.isolated_column_gap

        positions = {}
        row_top = top
        for start in range(0, len(nodes), columns):
            row = nodes[start:start + columns]
            for col, node in enumerate(row):
                positions[node.id] = Point(col * pitch_x, row_top)
            tallest = max(node.height for node in row)
            row_top += max(settings.isolated_row_pitch, tallest + settings.isolated_row_gap)
        return positions
