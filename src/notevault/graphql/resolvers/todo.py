"""
Todo resolvers
"""

from ..types.todo import Todo
from .resources import ResourceResolvers

todo_resolvers = ResourceResolvers("todos", Todo.from_record)
