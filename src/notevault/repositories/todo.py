"""Storage adapter for todos."""

from ..dbmodels import Todos
from ..errors import TodoNotFoundError
from ..lifecycle.adapter import ResourceKind
from ..schemas import TodoCreate, TodoRecord, TodoUpdate
from .base import SqlAlchemyRepository


class TodoRepository(SqlAlchemyRepository[TodoRecord]):
    model = Todos
    record_type = TodoRecord
    create_schema = TodoCreate
    update_schema = TodoUpdate
    kind = ResourceKind.TODO
    not_found_error = TodoNotFoundError
