from functools import cached_property
from typing import Dict, Iterable, Optional, Union

import databases
import sqlalchemy
from databases.interfaces import Record

from .settings import DATABASE_URL


class Database:
    def __init__(self, url: Union[str, databases.DatabaseURL] = DATABASE_URL) -> None:
        self._tables: Dict[str, sqlalchemy.Table] = {}
        self.url = databases.DatabaseURL(str(url))

    def configure(self, url: Union[str, databases.DatabaseURL]) -> None:
        """
        Point at another database, e.g. a temporary one in tests. Must be called
        before connecting.
        """
        self.url = databases.DatabaseURL(str(url))
        self.__dict__.pop("database", None)

    def populate_tables(self, table_names: Iterable[str]) -> None:
        for table_name in table_names:
            if table_name not in self._tables:
                self._tables[table_name] = sqlalchemy.Table(
                    table_name,
                    self.metadata,
                    sqlalchemy.Column("id", sqlalchemy.Integer, primary_key=True),
                    sqlalchemy.Column("data", sqlalchemy.JSON),
                )

    @cached_property
    def database(self) -> databases.Database:
        return databases.Database(self.url)

    @cached_property
    def metadata(self) -> sqlalchemy.MetaData:
        return sqlalchemy.MetaData()

    def get_table_by_name(self, name: str) -> sqlalchemy.Table:
        return self._tables[name]

    async def fetch_by_guid(self, guid: str) -> Optional[Record]:
        """
        Global ids are `table_name:primary_key`.
        """
        table_name, _, pk = guid.partition(":")
        if table_name not in self._tables or not pk.isdigit():
            return None
        table = self.get_table_by_name(table_name)
        query = table.select().where(table.c.id == int(pk))
        return await self.database.fetch_one(query=query)


database = Database()
