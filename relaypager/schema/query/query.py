from operator import attrgetter
from typing import Any, Dict, List, Optional, Type

import sqlalchemy
import strawberry

from ...database import database
from ...relay.paginate import from_list
from ...relay.query import from_query_async
from ...relay.schema import Connection, Node
from ...relay.sql import DatabaseQuerySource, count_rows
from ...settings import PAGINATION_MAX_LIMIT

get_pk = attrgetter("pk")


@strawberry.type
class Child(Node):
    name: str
    pk: strawberry.Private[int]

    @classmethod
    def from_row(cls, row: Any) -> "Child":
        return cls(id=f"children:{row.id}", pk=row.id, name=row.data["name"])


@strawberry.type
class Parent(Node):
    """
    Children are a connection field, so they are resolved from the stored ids
    rather than stored on the type.
    """

    name: str
    pk: strawberry.Private[int]
    child_ids: strawberry.Private[List[int]]

    @classmethod
    def from_row(cls, row: Any) -> "Parent":
        return cls(
            id=f"parents:{row.id}",
            pk=row.id,
            name=row.data["name"],
            child_ids=row.data["child_ids"],
        )

    @strawberry.field
    async def children(
        self,
        first: Optional[int] = None,
        last: Optional[int] = None,
        before: Optional[str] = None,
        after: Optional[str] = None,
    ) -> Connection[Child]:
        """
        A parent has few children, so they are all loaded and sliced in memory.
        """
        table = database.get_table_by_name("children")
        query = (
            table.select()
            .where(table.c.id.in_(self.child_ids))
            .order_by(table.c.id)
        )
        rows = await database.database.fetch_all(query=query)
        result = from_list(
            [Child.from_row(row) for row in rows],
            {"first": first, "last": last, "before": before, "after": after},
            max_limit=PAGINATION_MAX_LIMIT,
            key=get_pk,
        )
        return Connection.from_connection(result)


_NODES: Dict[str, Type[Any]] = {"parents": Parent, "children": Child}


@strawberry.type
class Query:
    @strawberry.field
    async def node(self, id: str) -> Optional[Node]:
        """
        `node` root field required for Relay (refetching etc)
        """
        row = await database.fetch_by_guid(id)
        if row is None:
            return None
        typename, _, _ = id.partition(":")
        return _NODES[typename].from_row(row)

    @strawberry.field
    async def children(
        self,
        first: Optional[int] = None,
        last: Optional[int] = None,
        before: Optional[str] = None,
        after: Optional[str] = None,
    ) -> Connection[Child]:
        """
        Every child, paginated in the database. Paging back from the end with `last`
        alone needs the row count, which replaces the fetch when there are no rows.
        """
        table = database.get_table_by_name("children")
        select = sqlalchemy.select(table)
        count = None
        if last is not None and before is None:
            count = await database.database.fetch_val(query=count_rows(select))
        result = await from_query_async(
            DatabaseQuerySource(
                select, table.c.id, database.database, row_factory=Child.from_row
            ),
            {"first": first, "last": last, "before": before, "after": after},
            max_limit=PAGINATION_MAX_LIMIT,
            count=count,
            key=get_pk,
        )
        return Connection.from_connection(result)
