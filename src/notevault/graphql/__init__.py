"""GraphQL surface: schema, types, resolvers and request context."""
