"""
CRUD LAYER (Database Logic Only)

Architecture:
    CLI Layer  → click commands (options, echo, exit codes)
    CRUD Layer → Pure DB operations (this file)
    DB Layer   → Engine, session_scope, Models

Rules:
✅ Accept SQLAlchemy Session explicitly.
❌ Never open/close the session here.
❌ Never echo or exit here, that belongs to the CLI layer.
✅ Return TodoRead schemas, rows are validated on the way out.
✅ Commit only for CREATE/DELETE.
❌ No commit for READ operations.
❓ What about a stored row that fails validation?
    ❌ Skipping it silently hides corruption.
    ✅ Raise CorruptedTodoError and let the whole listing fail.
"""

from datetime import datetime

from pydantic import ValidationError
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from cltodo.core.exceptions import CorruptedTodoError, TodoNotFoundError
from cltodo.models import Todo
from cltodo.schemas import (
    TodoCreate,
    TodoFilter,
    TodoRead,
    as_local,
    local_now,
    to_storage,
)
from cltodo.utils.logger import get_logger

logger = get_logger(__name__)


def to_schema(todo_item: Todo) -> TodoRead:
    try:
        return TodoRead.model_validate(todo_item)
    except ValidationError as exc:
        reasons = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise CorruptedTodoError(todo_item.id, reasons) from exc


def create_todo(
    session: Session, todo: TodoCreate, created_at: datetime | None = None
) -> TodoRead:
    # create a new todo item, the date is fixed here and never changes
    created_at = as_local(created_at) if created_at else local_now()
    todo_item = Todo(
        date=to_storage(created_at),
        text=todo.text,
        priority=int(todo.priority),
    )
    session.add(todo_item)
    session.commit()
    session.refresh(todo_item)
    logger.debug("Todo added id=%s priority=%s", todo_item.id, todo.priority.label)
    return to_schema(todo_item)


def get_todo(session: Session, todo_id: int) -> TodoRead:
    # get a todo item by id
    todo_item = session.get(Todo, todo_id)
    if todo_item is None:
        raise TodoNotFoundError(todo_id)
    return to_schema(todo_item)


def delete_todo(session: Session, todo_id: int) -> int:
    # delete a todo item by id, an unknown id is not an error
    deleted = session.query(Todo).filter(Todo.id == todo_id).delete()
    session.commit()
    logger.debug("Delete id=%s removed %s row(s)", todo_id, deleted)
    return deleted


def prune_todos(session: Session) -> int:
    # delete every todo item, no questions asked
    deleted = session.query(Todo).delete()
    session.commit()
    logger.debug("Pruned %s row(s)", deleted)
    return deleted


def bucket_by_priority(todos: list[TodoRead]) -> list[TodoRead]:
    # sorted() is stable, so the date order inside each tier survives
    return sorted(todos, key=lambda todo: -todo.priority)


def list_todos(session: Session, filters: TodoFilter | None = None) -> list[TodoRead]:
    # list todo items matching every supplied filter
    filters = filters or TodoFilter()
    # julianday() compares instants, so rows written under another offset still sort right
    instant = func.julianday(Todo.date)
    # julianday() is NULL for an unreadable date, keep those rows so loading them fails
    unreadable = instant.is_(None)

    query = session.query(Todo)
    if filters.priority is not None:
        query = query.filter(Todo.priority == int(filters.priority))
    if filters.date_from is not None:
        query = query.filter(
            or_(unreadable, instant >= func.julianday(to_storage(filters.date_from)))
        )
    if filters.date_to is not None:
        query = query.filter(
            or_(unreadable, instant <= func.julianday(to_storage(filters.date_to)))
        )

    if filters.reversed:
        query = query.order_by(instant.asc(), Todo.id.asc())
    else:
        query = query.order_by(instant.desc(), Todo.id.desc())

    todos = [to_schema(todo_item) for todo_item in query.all()]
    logger.debug("Listing matched %s row(s) filters=%s", len(todos), filters.model_dump())

    if filters.chronological:
        return todos
    return bucket_by_priority(todos)
