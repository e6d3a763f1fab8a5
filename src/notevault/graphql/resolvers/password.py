"""
Password entry resolvers
"""

from ..types.password import PasswordEntry
from .resources import ResourceResolvers

password_resolvers = ResourceResolvers("passwords", PasswordEntry.from_record)
