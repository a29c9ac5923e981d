import strawberry
from strawberry.extensions import ParserCache, QueryDepthLimiter, ValidationCache
from strawberry.extensions.tracing.apollo import ApolloTracingExtension

from ..settings import (
    APOLLO_TRACING_ENABLED,
    PARSER_CACHE_MAX_SIZE,
    QUERY_MAX_DEPTH_LIMIT,
    VALIDATION_CACHE_MAX_SIZE,
)
from .mutation.mutation import Mutation
from .query.query import Child, Parent, Query

extensions = [
    lambda: ParserCache(maxsize=PARSER_CACHE_MAX_SIZE),
    lambda: QueryDepthLimiter(max_depth=QUERY_MAX_DEPTH_LIMIT),
    lambda: ValidationCache(maxsize=VALIDATION_CACHE_MAX_SIZE),
]

if APOLLO_TRACING_ENABLED:
    extensions.append(ApolloTracingExtension)

# Node implementations are listed explicitly since `node` only returns the interface
schema = strawberry.Schema(
    query=Query, mutation=Mutation, types=[Child, Parent], extensions=extensions
)
