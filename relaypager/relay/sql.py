from typing import Any, Callable, List, Union

import databases
import sqlalchemy
from sqlalchemy.engine import Connection as SQLConnection
from sqlalchemy.sql import ColumnElement, Select

from .query import RangeOp, SortOrder
from .sources import OPERATORS, QuerySourceBase

RowFactory = Callable[[Any], Any]


def row_mapping(row: Any) -> Any:
    """
    Default row factory. The mapping exposes `id`, which is the default ordinal key.
    """
    return row._mapping


class SelectSourceBase(QuerySourceBase):
    """
    Paginates a SQLAlchemy Core select by one of its columns. The statement is
    ordered by that column only, any ORDER BY already on `select` is replaced.
    """

    def __init__(
        self,
        select: Select,
        column: ColumnElement,
        order: Union[SortOrder, str] = SortOrder.ASCENDING,
        row_factory: RowFactory = row_mapping,
    ) -> None:
        super().__init__(order)
        self._select = select
        self._column = column
        self._row_factory = row_factory

    def range_filter(self, op: RangeOp, key: int) -> Any:
        compare = OPERATORS[RangeOp(op)]
        return self._replace(select=self._select.where(compare(self._column, key)))

    @property
    def statement(self) -> Select:
        if self._order is SortOrder.ASCENDING:
            ordering = self._column.asc()
        else:
            ordering = self._column.desc()
        statement = self._select.order_by(None).order_by(ordering)
        if self._limit is not None:
            statement = statement.limit(self._limit)
        return statement


class SelectQuerySource(SelectSourceBase):
    def __init__(
        self,
        select: Select,
        column: ColumnElement,
        connection: SQLConnection,
        order: Union[SortOrder, str] = SortOrder.ASCENDING,
        row_factory: RowFactory = row_mapping,
    ) -> None:
        super().__init__(select, column, order=order, row_factory=row_factory)
        self._connection = connection

    def execute(self) -> List[Any]:
        result = self._connection.execute(self.statement)
        return [self._row_factory(row) for row in result]


class DatabaseQuerySource(SelectSourceBase):
    """
    Runs the statements through the async `databases` driver.
    """

    def __init__(
        self,
        select: Select,
        column: ColumnElement,
        database: databases.Database,
        order: Union[SortOrder, str] = SortOrder.ASCENDING,
        row_factory: RowFactory = row_mapping,
    ) -> None:
        super().__init__(select, column, order=order, row_factory=row_factory)
        self._database = database

    async def execute(self) -> List[Any]:
        rows = await self._database.fetch_all(query=self.statement)
        return [self._row_factory(row) for row in rows]


def count_rows(select: Select) -> Select:
    """
    Statement counting the rows of `select`, for the `count` hint of backward
    pagination.
    """
    return sqlalchemy.select(sqlalchemy.func.count()).select_from(
        select.order_by(None).subquery()
    )
