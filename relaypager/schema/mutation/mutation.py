from typing import List, Optional

import strawberry
from pydantic import BaseModel

from ...database import database
from ...models import ChildModel, ParentModel
from ..query.query import Child, Parent


@strawberry.input
class ChildInput:
    name: str


@strawberry.input
class ParentInput:
    """
    Children can be created along with the parent, linked by global id, or both.
    """

    name: str
    children: Optional[List[ChildInput]] = None
    child_ids: Optional[List[str]] = None


async def validate_ids(ids: List[str], table_name: str) -> List[int]:
    """
    Resolve global ids of existing rows in `table_name` to their primary keys.
    """
    pks = []
    for guid in ids:
        if guid.partition(":")[0] != table_name:
            raise ValueError(f"ID {guid} does not link to {table_name}")
        row = await database.fetch_by_guid(guid)
        if row is None:
            raise ValueError(f"ID not in database: {guid}")
        pks.append(row.id)
    return pks


async def insert(table_name: str, validated: BaseModel) -> int:
    """
    For sqlite the result is the lastrowid, which is the autoincrementing primary
    key.
    """
    table = database.get_table_by_name(table_name)
    return await database.database.execute(
        query=table.insert(), values={"data": validated.model_dump()}
    )


@strawberry.type
class Mutation:
    @strawberry.mutation
    async def create_child(self, input: ChildInput) -> Child:
        pk = await insert("children", ChildModel(name=input.name))
        row = await database.fetch_by_guid(f"children:{pk}")
        return Child.from_row(row)

    @strawberry.mutation
    async def create_parent(self, input: ParentInput) -> Parent:
        """
        New children are created first so the parent can be validated with their ids.
        Everything happens in one transaction, a parent failing validation leaves no
        orphaned children behind.
        """
        if input.children is None and input.child_ids is None:
            raise ValueError("must specify either or both of child_ids and children")
        async with database.database.transaction():
            new_ids = [
                await insert("children", ChildModel(name=child.name))
                for child in input.children or []
            ]
            child_ids = await validate_ids(input.child_ids or [], "children")
            validated = ParentModel(name=input.name, child_ids=child_ids + new_ids)
            pk = await insert("parents", validated)
        row = await database.fetch_by_guid(f"parents:{pk}")
        return Parent.from_row(row)
