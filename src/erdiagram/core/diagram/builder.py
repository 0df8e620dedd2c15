"""Turn a schema snapshot into an unpositioned node/edge graph."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple
from urllib.parse import quote

from erdiagram.core.diagram.model import Column, Relationship, TableNode
from erdiagram.core.diagram.settings import NodeSettings
from erdiagram.core.schema import ForeignKeyRecord, SchemaSnapshot
from erdiagram.utils.logging import get_logger

logger = get_logger(__name__)

# Characters left unescaped by JavaScript's encodeURIComponent.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_column_key(column_name: str) -> str:
    """Percent-encode a column name for use inside an edge id."""
    return quote(column_name, safe=_URI_COMPONENT_SAFE)


def edge_id(
    source_table: str,
    source_column: str,
    target_table: str,
    target_column: str,
    constraint_name: str = "",
) -> str:
    """Stable identity of a foreign-key edge.

    Example:
        >>> edge_id("Orders", "customer_id", "Customers", "id", "fk_orders_customer")
        'Orders.customer_id->Customers.id::fk_orders_customer'
    """
    return (
        f"{source_table}.{encode_column_key(source_column)}"
        f"->{target_table}.{encode_column_key(target_column)}"
        f"::{constraint_name or 'fk'}"
    )


def edge_label(
    source_table: str, source_column: str, target_table: str, target_column: str
) -> str:
    return f"{source_table}.{source_column}->{target_table}.{target_column}"


def node_size(
    table_name: str, columns: Sequence[Column], settings: NodeSettings
) -> Tuple[float, float]:
    """Width and height of a table box.

    Depends only on the table name and its columns, so it is independent
    of column order.
    """
    longest = len(table_name)
    for column in columns:
        bonus = settings.primary_key_bonus if column.is_primary_key else 0
        longest = max(longest, len(column.name) + len(column.display_type) + bonus)

    width = max(settings.min_width, longest * settings.char_width + settings.width_padding)
    height = (
        settings.header_height
        + len(columns) * settings.row_height
        + settings.height_padding
    )
    return width, height


@dataclass
class DiagramGraph:
    """Nodes in snapshot table order and the edges between them."""

    nodes: List[TableNode]
    edges: List[Relationship]

    def node(self, node_id: str) -> TableNode:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(node_id)

    def node_map(self) -> Dict[str, TableNode]:
        return {node.id: node for node in self.nodes}


class SchemaGraphBuilder:
    """Build diagram nodes and edges from a schema snapshot.

    Foreign keys pointing at (or owned by) a table outside the snapshot are
    dropped silently, so partial metadata still renders.
    """

    def __init__(self, settings: Optional[NodeSettings] = None):
        self.settings = settings or NodeSettings.from_config()

    def build(self, snapshot: SchemaSnapshot) -> DiagramGraph:
        table_names = list(dict.fromkeys(snapshot.tables))
        known = set(table_names)

        columns_by_table: Dict[str, List[Column]] = {name: [] for name in table_names}
        for record in snapshot.columns:
            if record.table_name not in known:
                continue
            columns_by_table[record.table_name].append(
                Column(
                    name=record.column_name,
                    display_type=record.display_type,
                    key_type=record.column_key,
                )
            )

        nodes = []
        for name in table_names:
            columns = tuple(columns_by_table[name])
            width, height = node_size(name, columns, self.settings)
            nodes.append(TableNode(id=name, columns=columns, width=width, height=height))

        edges = []
        seen = set()
        dropped = 0
        for fk in snapshot.foreign_keys:
            if fk.table_name not in known or fk.referenced_table_name not in known:
                dropped += 1
                continue
            relationship = self._relationship(fk)
            if relationship.id in seen:
                continue
            seen.add(relationship.id)
            edges.append(relationship)

        if dropped:
            logger.debug(f"Dropped {dropped} foreign keys referencing tables outside the snapshot")
        logger.debug(f"Built diagram graph: {len(nodes)} nodes, {len(edges)} edges")

        return DiagramGraph(nodes=nodes, edges=edges)

    @staticmethod
    def _relationship(fk: ForeignKeyRecord) -> Relationship:
        return Relationship(
            id=edge_id(
                fk.table_name,
                fk.column_name,
                fk.referenced_table_name,
                fk.referenced_column_name,
                fk.constraint_name,
            ),
            source_table=fk.table_name,
            source_column=fk.column_name,
            target_table=fk.referenced_table_name,
            target_column=fk.referenced_column_name,
            constraint_name=fk.constraint_name,
            label=edge_label(
                fk.table_name,
                fk.column_name,
                fk.referenced_table_name,
                fk.referenced_column_name,
            ),
        )
