from enum import Enum
from typing import Any, Mapping, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict

from .cursor import get_id_from_cursor
from .errors import ErrorKind, InvalidCursorError, PaginationError


class Direction(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class PaginationArgs(BaseModel):
    model_config = ConfigDict(frozen=True)

    first: Optional[int] = None
    last: Optional[int] = None
    before: Optional[str] = None
    after: Optional[str] = None


class Bounds(NamedTuple):
    """
    Ordinal keys decoded from the `before` and `after` cursors, None when absent.
    """

    before: Optional[int] = None
    after: Optional[int] = None


ArgsLike = Union[PaginationArgs, Mapping[str, Any]]


def to_args(args: ArgsLike) -> PaginationArgs:
    """
    Resolvers usually have the arguments as keyword arguments, accept those too.
    Unknown keys such as filters meant for the resolver itself are ignored.
    """
    if isinstance(args, PaginationArgs):
        return args
    return PaginationArgs(
        **{name: args.get(name) for name in PaginationArgs.model_fields}
    )


def limit(
    args: ArgsLike, max_limit: Optional[int] = None
) -> Tuple[Direction, int]:
    """
    The direction and desired number of records in the pagination arguments. When
    `max_limit` is given the number of records is capped by it, the direction
    never changes.
    """
    args = to_args(args)
    if args.first is not None and args.last is not None:
        raise PaginationError(ErrorKind.FIRST_AND_LAST)
    if args.first is not None:
        direction, count = Direction.FORWARD, args.first
    elif args.last is not None:
        direction, count = Direction.BACKWARD, args.last
    else:
        raise PaginationError(ErrorKind.MISSING_FIRST_OR_LAST)
    if count < 0:
        raise PaginationError(ErrorKind.NEGATIVE_LIMIT)
    if max_limit is not None:
        count = min(max_limit, count)
    return direction, count


def offset(args: ArgsLike) -> Bounds:
    """
    `after` is decoded first, so a bad `after` is reported as such even when
    `before` is valid, and the other way around.
    """
    args = to_args(args)
    after = None
    if args.after is not None:
        after = _decode(args.after, ErrorKind.INVALID_AFTER_CURSOR)
    before = None
    if args.before is not None:
        before = _decode(args.before, ErrorKind.INVALID_BEFORE_CURSOR)
    return Bounds(before=before, after=after)


def parse(
    args: ArgsLike, max_limit: Optional[int] = None
) -> Tuple[Direction, int, Bounds]:
    direction, count = limit(args, max_limit)
    return direction, count, offset(args)


def _decode(cursor: str, kind: ErrorKind) -> int:
    try:
        return get_id_from_cursor(cursor)
    except InvalidCursorError as e:
        raise InvalidCursorError(kind) from e
