"""Resolver package for the GraphQL schema.

Resolvers translate GraphQL inputs into service calls and service records into
GraphQL types. They hold no business rules of their own.
"""
