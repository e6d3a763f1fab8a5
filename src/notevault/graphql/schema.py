"""
Main GraphQL schema definition using Strawberry
"""

from typing import Any

import strawberry
from graphql import GraphQLError
from graphql import validate_schema as gql_validate_schema
from strawberry.fastapi import GraphQLRouter
from strawberry.types import ExecutionContext

from ..errors import BaseError
from ..logging import get_logger
from .context import get_context
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)


class NotevaultSchema(strawberry.Schema):
    def process_errors(
        self,
        errors: list[GraphQLError],
        execution_context: ExecutionContext | None = None,
    ) -> None:
        # Taxonomy errors were already logged by the operation that raised them
        unexpected = [e for e in errors if not isinstance(e.original_error, BaseError)]
        if unexpected:
            super().process_errors(unexpected, execution_context)


# Create the GraphQL schema
schema = NotevaultSchema(query=Query, mutation=Mutation)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Resolves every lazy type reference and runs an introspection query so a
    broken schema fails the server at boot rather than on first request.

    Raises:
        Exception: If the schema is invalid or has unresolved types
    """
    try:
        graphql_schema = schema._schema

        errors = gql_validate_schema(graphql_schema)
        if errors:
            error_messages = [str(e) for e in errors]
            raise Exception(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

        from graphql import get_introspection_query, graphql_sync

        result = graphql_sync(graphql_schema, get_introspection_query())
        if result.errors:
            error_messages = [str(e) for e in result.errors]
            raise Exception(f"GraphQL introspection failed: {'; '.join(error_messages)}")

        logger.info("GraphQL schema validation successful")

    except Exception as e:
        logger.error("GraphQL schema validation failed", error=str(e))
        raise


def create_graphql_router(graphiql: bool = True) -> GraphQLRouter[dict[str, Any], None]:
    """Create a GraphQL router for FastAPI."""
    return GraphQLRouter(
        schema,
        path="/graphql",
        graphiql=graphiql,
        context_getter=get_context,
    )
