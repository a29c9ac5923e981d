from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    FIRST_AND_LAST = "first_and_last"
    MISSING_FIRST_OR_LAST = "missing_first_or_last"
    NEGATIVE_LIMIT = "negative_limit"
    INVALID_CURSOR = "invalid_cursor"
    INVALID_BEFORE_CURSOR = "invalid_before_cursor"
    INVALID_AFTER_CURSOR = "invalid_after_cursor"
    MISSING_STARTING_BOUND = "missing_starting_bound"


_MESSAGES = {
    ErrorKind.FIRST_AND_LAST: (
        "Passing both `first` and `last` values to paginate the connection is not "
        "supported."
    ),
    ErrorKind.MISSING_FIRST_OR_LAST: "You must either supply `first` or `last`",
    ErrorKind.NEGATIVE_LIMIT: "`first` and `last` must not be negative",
    ErrorKind.INVALID_CURSOR: "Invalid cursor",
    ErrorKind.INVALID_BEFORE_CURSOR: "Invalid cursor provided as `before` argument",
    ErrorKind.INVALID_AFTER_CURSOR: "Invalid cursor provided as `after` argument",
    ErrorKind.MISSING_STARTING_BOUND: (
        "Paginating with `last` requires either a `before` cursor or an item count"
    ),
}


class PaginationError(ValueError):
    """
    Raised for pagination arguments a client can fix. Callers branch on `kind`,
    the message is meant to be shown to the client as is.
    """

    def __init__(self, kind: ErrorKind, message: Optional[str] = None) -> None:
        self.kind = kind
        super().__init__(message or _MESSAGES[kind])


class InvalidCursorError(PaginationError):
    def __init__(self, kind: ErrorKind = ErrorKind.INVALID_CURSOR) -> None:
        super().__init__(kind)


class OrdinalKeyError(LookupError):
    """
    An item without an ordinal key was handed to the engine. This is a bug in the
    caller, not something the client can fix.
    """


class UnsupportedSortOrderError(TypeError):
    pass
