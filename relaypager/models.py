from typing import Annotated, List

from pydantic import BaseModel, Field

from .database import database


class ChildModel(BaseModel):
    name: str


class ParentModel(BaseModel):
    name: str
    # primary keys of rows in the children table, in insertion order
    child_ids: Annotated[List[int], Field(min_length=1)]


MODELS = {"children": ChildModel, "parents": ParentModel}
database.populate_tables(MODELS)
