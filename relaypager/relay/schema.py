from typing import Generic, List, Optional, TypeVar

import strawberry

from . import connection

NodeType = TypeVar("NodeType")


@strawberry.type
class PageInfo:
    has_next_page: bool
    has_previous_page: bool
    start_cursor: Optional[str] = None
    end_cursor: Optional[str] = None


@strawberry.interface
class Node:
    """
    Global ids are `table_name:primary_key`, which is what the `node` root field
    resolves.
    """

    id: str


@strawberry.type
class Edge(Generic[NodeType]):
    cursor: str
    node: NodeType


@strawberry.type
class Connection(Generic[NodeType]):
    """
    Strawberry names the concrete types after the node, `Connection[Child]` is
    exposed as `ChildConnection` with `ChildEdge` edges.
    """

    page_info: PageInfo
    edges: List[Edge[NodeType]]
    nodes: List[NodeType]

    @classmethod
    def from_connection(
        cls, result: "connection.Connection[NodeType]"
    ) -> "Connection[NodeType]":
        page_info = result.page_info
        return cls(
            page_info=PageInfo(
                has_next_page=page_info.has_next_page,
                has_previous_page=page_info.has_previous_page,
                start_cursor=page_info.start_cursor,
                end_cursor=page_info.end_cursor,
            ),
            edges=[Edge(cursor=edge.cursor, node=edge.node) for edge in result.edges],
            nodes=list(result.nodes),
        )
