"""Storage adapter for password entries."""

from ..dbmodels import Passwords
from ..errors import PasswordNotFoundError
from ..lifecycle.adapter import ResourceKind
from ..schemas import PasswordCreate, PasswordRecord, PasswordUpdate
from .base import SqlAlchemyRepository


class PasswordRepository(SqlAlchemyRepository[PasswordRecord]):
    model = Passwords
    record_type = PasswordRecord
    create_schema = PasswordCreate
    update_schema = PasswordUpdate
    kind = ResourceKind.PASSWORD
    not_found_error = PasswordNotFoundError
