import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Generic,
    List,
    NamedTuple,
    Optional,
    Sequence,
    TypeVar,
    Union,
)
from typing_extensions import Protocol

from .args import ArgsLike, Direction, parse
from .connection import Connection, KeyFunc, from_slice, get_ordinal_key
from .errors import ErrorKind, PaginationError, UnsupportedSortOrderError

logger = logging.getLogger(__name__)


class SortOrder(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"


class RangeOp(str, Enum):
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="


class OrderedQuerySource(Protocol):
    """
    A query sorted by ordinal key that can be narrowed down without running it. Every
    method but `execute` returns a new source and leaves this one untouched.
    """

    def declare_sort_order(self) -> Optional[Union[SortOrder, str]]:
        ...

    def range_filter(self, op: RangeOp, key: int) -> "OrderedQuerySource":
        ...

    def limit(self, n: int) -> "OrderedQuerySource":
        ...

    def reversed(self) -> "OrderedQuerySource":
        ...

    def execute(self) -> Sequence[Any]:
        ...


class AsyncOrderedQuerySource(Protocol):
    def declare_sort_order(self) -> Optional[Union[SortOrder, str]]:
        ...

    def range_filter(self, op: RangeOp, key: int) -> "AsyncOrderedQuerySource":
        ...

    def limit(self, n: int) -> "AsyncOrderedQuerySource":
        ...

    def reversed(self) -> "AsyncOrderedQuerySource":
        ...

    async def execute(self) -> Sequence[Any]:
        ...


class _Comparisons(NamedTuple):
    previous: RangeOp
    after: RangeOp
    before: RangeOp
    next: RangeOp


# asc:  previous(<=) [after] after(>) | before(<) [before] next(>=)
# desc: previous(>=) [after] after(<) | before(>) [before] next(<=)
_COMPARISONS = {
    SortOrder.ASCENDING: _Comparisons(RangeOp.LE, RangeOp.GT, RangeOp.LT, RangeOp.GE),
    SortOrder.DESCENDING: _Comparisons(RangeOp.GE, RangeOp.LT, RangeOp.GT, RangeOp.LE),
}

SourceType = TypeVar("SourceType")


@dataclass(frozen=True)
class QueryPlan(Generic[SourceType]):
    """
    The up to three queries a page needs: one row on either side of the cursors to
    tell whether more pages exist, and the page itself plus one extra row. A source
    known to be empty needs none of them.
    """

    direction: Direction
    limit: int
    previous_probe: Optional[SourceType]
    next_probe: Optional[SourceType]
    fetch: Optional[SourceType]

    @property
    def queries(self) -> List[Optional[SourceType]]:
        return [self.previous_probe, self.next_probe, self.fetch]


def get_sort_order(source: Any) -> SortOrder:
    order = source.declare_sort_order()
    if order is None:
        return SortOrder.ASCENDING
    try:
        return SortOrder(order)
    except ValueError:
        raise UnsupportedSortOrderError(
            f"Cannot paginate a source sorted by {order!r}"
        ) from None


def plan_query(
    source: Any,
    args: ArgsLike,
    max_limit: Optional[int] = None,
    count: Optional[int] = None,
) -> QueryPlan[Any]:
    """
    Nothing is executed here, so invalid arguments never reach the data source.

    `last` without `before` pages back from the end of the source, which needs the
    caller to vouch that the source is bounded by passing its `count`. The last page
    is still found by fetching in reverse rather than by offset. A `count` of 0 plans
    no queries at all, whatever the direction.
    """
    direction, limit, bounds = parse(args, max_limit)
    if direction is Direction.BACKWARD and bounds.before is None and count is None:
        raise PaginationError(ErrorKind.MISSING_STARTING_BOUND)
    comparisons = _COMPARISONS[get_sort_order(source)]
    if count == 0:
        return QueryPlan(direction, limit, None, None, None)

    previous_probe = None
    next_probe = None
    window = source
    if bounds.after is not None:
        previous_probe = source.range_filter(comparisons.previous, bounds.after)
        previous_probe = previous_probe.limit(1)
        window = window.range_filter(comparisons.after, bounds.after)
    if bounds.before is not None:
        next_probe = source.range_filter(comparisons.next, bounds.before)
        next_probe = next_probe.limit(1)
        window = window.range_filter(comparisons.before, bounds.before)

    if direction is Direction.BACKWARD:
        window = window.reversed()
    return QueryPlan(
        direction=direction,
        limit=limit,
        previous_probe=previous_probe,
        next_probe=next_probe,
        fetch=window.limit(limit + 1),
    )


def build_connection(
    plan: QueryPlan[Any],
    previous_rows: Sequence[Any],
    next_rows: Sequence[Any],
    rows: Sequence[Any],
    key: KeyFunc = get_ordinal_key,
) -> Connection[Any]:
    logger.debug(
        "Fetched %d rows for a %s page of %d, probes found previous=%s next=%s",
        len(rows),
        plan.direction.value,
        plan.limit,
        bool(previous_rows),
        bool(next_rows),
    )
    more = len(rows) > plan.limit
    page = list(rows[: plan.limit])
    if plan.direction is Direction.BACKWARD:
        page.reverse()
    return from_slice(
        page,
        has_previous_page=bool(previous_rows)
        or (plan.direction is Direction.BACKWARD and more),
        has_next_page=bool(next_rows)
        or (plan.direction is Direction.FORWARD and more),
        key=key,
    )


def from_query(
    source: OrderedQuerySource,
    args: ArgsLike,
    max_limit: Optional[int] = None,
    count: Optional[int] = None,
    key: KeyFunc = get_ordinal_key,
) -> Connection[Any]:
    """
    Paginate a source without loading all of it. Instead of partitioning the whole
    collection like `from_list`, a one row query on either side of the cursors says
    whether more pages exist, and the page is fetched with one extra row to tell
    whether it was cut short.

    The source must be sorted by the ordinal key, in the order it declares.
    """
    plan = plan_query(source, args, max_limit=max_limit, count=count)
    previous_rows, next_rows, rows = [
        [] if query is None else query.execute() for query in plan.queries
    ]
    return build_connection(plan, previous_rows, next_rows, rows, key=key)


async def from_query_async(
    source: AsyncOrderedQuerySource,
    args: ArgsLike,
    max_limit: Optional[int] = None,
    count: Optional[int] = None,
    key: KeyFunc = get_ordinal_key,
    concurrent: bool = True,
) -> Connection[Any]:
    """
    Same as from_query for sources whose `execute` is a coroutine. The queries do not
    depend on each other so by default they run concurrently.
    """
    plan = plan_query(source, args, max_limit=max_limit, count=count)

    async def run(query: Optional[AsyncOrderedQuerySource]) -> Sequence[Any]:
        if query is None:
            return []
        return await query.execute()

    if concurrent:
        results = await asyncio.gather(*(run(query) for query in plan.queries))
    else:
        results = [await run(query) for query in plan.queries]
    previous_rows, next_rows, rows = results
    return build_connection(plan, previous_rows, next_rows, rows, key=key)
