"""Storage adapter for notes."""

from ..dbmodels import Notes
from ..errors import NoteNotFoundError
from ..lifecycle.adapter import ResourceKind
from ..schemas import NoteCreate, NoteRecord, NoteUpdate
from .base import SqlAlchemyRepository


class NoteRepository(SqlAlchemyRepository[NoteRecord]):
    model = Notes
    record_type = NoteRecord
    create_schema = NoteCreate
    update_schema = NoteUpdate
    kind = ResourceKind.NOTE
    not_found_error = NoteNotFoundError
