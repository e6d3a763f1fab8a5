"""
Note resolvers
"""

from ..types.note import Note
from .resources import ResourceResolvers

note_resolvers = ResourceResolvers("notes", Note.from_record)
