import copy
import operator
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from .connection import KeyFunc, get_ordinal_key, to_integer
from .query import RangeOp, SortOrder

OPERATORS: Dict[RangeOp, Callable[[Any, Any], Any]] = {
    RangeOp.LT: operator.lt,
    RangeOp.GT: operator.gt,
    RangeOp.LE: operator.le,
    RangeOp.GE: operator.ge,
}

_Source = TypeVar("_Source", bound="QuerySourceBase")


class QuerySourceBase:
    """
    Builder methods return modified copies, a source handed to the paginators is
    never changed by them.
    """

    def __init__(self, order: Union[SortOrder, str] = SortOrder.ASCENDING) -> None:
        self._order = SortOrder(order)
        self._limit: Optional[int] = None

    def _replace(self: _Source, **changes: Any) -> _Source:
        source = copy.copy(self)
        for name, value in changes.items():
            setattr(source, f"_{name}", value)
        return source

    def declare_sort_order(self) -> SortOrder:
        return self._order

    def limit(self: _Source, n: int) -> _Source:
        return self._replace(limit=n)

    def reversed(self: _Source) -> _Source:
        if self._order is SortOrder.ASCENDING:
            return self._replace(order=SortOrder.DESCENDING)
        return self._replace(order=SortOrder.ASCENDING)


class ListQuerySource(QuerySourceBase):
    """
    Serves items that are already in memory through the query source interface.
    `items` must be sorted by ordinal key in `order`.
    """

    def __init__(
        self,
        items: Iterable[Any],
        key: KeyFunc = get_ordinal_key,
        order: Union[SortOrder, str] = SortOrder.ASCENDING,
    ) -> None:
        super().__init__(order)
        self._items = tuple(items)
        self._key = key
        self._filters: Tuple[Tuple[Callable[[Any, Any], Any], int], ...] = ()

    def range_filter(self, op: RangeOp, key: int) -> "ListQuerySource":
        compare = OPERATORS[RangeOp(op)]
        return self._replace(filters=self._filters + ((compare, key),))

    def reversed(self) -> "ListQuerySource":
        source = super().reversed()
        source._items = self._items[::-1]
        return source

    def execute(self) -> List[Any]:
        rows = [
            item
            for item in self._items
            if all(
                compare(to_integer(self._key(item)), key)
                for compare, key in self._filters
            )
        ]
        if self._limit is not None:
            rows = rows[: self._limit]
        return rows
