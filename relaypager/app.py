import contextlib
import logging
from typing import AsyncIterator

import sqlalchemy
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.middleware.cors import CORSMiddleware
from starlette.routing import Route, WebSocketRoute
from strawberry.asgi import GraphQL

from .database import database
from .models import MODELS
from .schema.schema import schema
from .settings import DATABASE_ECHO, DEBUG, GRAPHQL_ROUTE

logger = logging.getLogger(__name__)


async def on_startup() -> None:
    # TODO: should use alembic or something
    engine = sqlalchemy.create_engine(str(database.url), echo=DATABASE_ECHO)
    tables = [database.get_table_by_name(name) for name in MODELS]
    database.metadata.create_all(engine, tables=tables)
    engine.dispose()
    logger.info("Connecting to %s", database.url.obscure_password)
    await database.database.connect()


async def on_shutdown() -> None:
    logger.info("Disconnecting from %s", database.url.obscure_password)
    await database.database.disconnect()


@contextlib.asynccontextmanager
async def lifespan(app: Starlette) -> AsyncIterator[None]:
    await on_startup()
    yield
    await on_shutdown()


graphql_app = GraphQL(schema)
app = Starlette(
    debug=DEBUG,
    routes=[
        Route(GRAPHQL_ROUTE, graphql_app),
        WebSocketRoute(GRAPHQL_ROUTE, graphql_app),
    ],
    middleware=[
        Middleware(
            CORSMiddleware,
            allow_headers=["*"],
            allow_origins=["*"],
            allow_methods=["*"],
        )
    ],
    lifespan=lifespan,
)
