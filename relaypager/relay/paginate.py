from typing import Iterable, List, Optional, Tuple

from .args import ArgsLike, Direction, parse
from .connection import (
    Connection,
    KeyFunc,
    NodeType,
    from_slice,
    get_ordinal_key,
    to_integer,
)


def from_list(
    data: Iterable[NodeType],
    args: ArgsLike,
    max_limit: Optional[int] = None,
    key: KeyFunc = get_ordinal_key,
) -> Connection[NodeType]:
    """
    Adapted from Relay cursor spec: https://relay.dev/graphql/connections.htm#

    `data` must be every item further requests may page over, sorted ascending by
    ordinal key. Cursors are positions in that order, so the edges are selected by
    comparing keys with the decoded cursors rather than by looking the cursors up.

    EdgesToReturn(allEdges, before, after, first, last)
        Let edges be the result of calling ApplyCursorsToEdges(allEdges, before, after).
        If first is set:
            If edges has length greater than than first:
                Slice edges to length first by removing edges from the end.
        If last is set:
            If edges has length greater than than last:
                Slice edges to length last by removing edges from the start.
        Return edges.
    """
    direction, limit, bounds = parse(args, max_limit)
    previous, window, following = split_data(
        list(data), before=bounds.before, after=bounds.after, key=key
    )

    has_previous_page = len(previous) > 0 or (
        direction is Direction.BACKWARD and len(window) > limit
    )
    has_next_page = len(following) > 0 or (
        direction is Direction.FORWARD and len(window) > limit
    )

    if direction is Direction.FORWARD:
        window = window[:limit]
    else:
        window = window[max(len(window) - limit, 0) :]
    return from_slice(
        window,
        has_previous_page=has_previous_page,
        has_next_page=has_next_page,
        key=key,
    )


def split_data(
    data: List[NodeType],
    before: Optional[int] = None,
    after: Optional[int] = None,
    key: KeyFunc = get_ordinal_key,
) -> Tuple[List[NodeType], List[NodeType], List[NodeType]]:
    """
    Partition `data` into the items up to and including `after`, the items strictly
    between the cursors, and the items from `before` on.

    ApplyCursorsToEdges(allEdges, before, after)
        Initialize edges to be allEdges.
        If after is set:
            Remove all elements of edges before and including afterEdge.
        If before is set:
            Remove all elements of edges after and including beforeEdge.
        Return edges.
    """
    previous: List[NodeType] = []
    window: List[NodeType] = []
    following: List[NodeType] = []
    for item in data:
        ordinal = to_integer(key(item))
        if after is not None and ordinal <= after:
            previous.append(item)
        if before is not None and ordinal >= before:
            following.append(item)
        if (after is None or ordinal > after) and (before is None or ordinal < before):
            window.append(item)
    return previous, window, following
