from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Mapping, Optional, Tuple, TypeVar

from .cursor import get_cursor_from_id
from .errors import OrdinalKeyError

NodeType = TypeVar("NodeType")

KeyFunc = Callable[[Any], Any]


@dataclass(frozen=True)
class Edge(Generic[NodeType]):
    node: NodeType
    cursor: str


@dataclass(frozen=True)
class PageInfo:
    has_previous_page: bool = False
    has_next_page: bool = False
    start_cursor: Optional[str] = None
    end_cursor: Optional[str] = None


@dataclass(frozen=True)
class Connection(Generic[NodeType]):
    edges: Tuple[Edge[NodeType], ...]
    page_info: PageInfo

    @property
    def nodes(self) -> Tuple[NodeType, ...]:
        return tuple(edge.node for edge in self.edges)


def get_ordinal_key(item: Any) -> Any:
    """
    Default ordinal key: the `id` of a mapping row or of an object.
    """
    if isinstance(item, Mapping):
        key = item.get("id")
    else:
        key = getattr(item, "id", None)
    if key is None:
        raise OrdinalKeyError(f"Record primary key not found on {item!r}")
    return key


def to_integer(value: Any) -> int:
    """
    Ids stored as strings are compared numerically. Anything that does not parse
    sorts as 0.
    """
    if isinstance(value, int):
        return value
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def from_slice(
    items: Iterable[NodeType],
    has_previous_page: bool = False,
    has_next_page: bool = False,
    key: KeyFunc = get_ordinal_key,
) -> Connection[NodeType]:
    """
    Build a connection from items that are exactly the page to return, in order.
    The paginators do the slicing and call this with the computed flags.
    """
    edges = tuple(
        Edge(node=item, cursor=get_cursor_from_id(key(item))) for item in items
    )
    page_info = PageInfo(
        has_previous_page=has_previous_page,
        has_next_page=has_next_page,
        start_cursor=edges[0].cursor if edges else None,
        end_cursor=edges[-1].cursor if edges else None,
    )
    return Connection(edges=edges, page_info=page_info)
