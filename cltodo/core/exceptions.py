"""
Errors raised by the storage and service layers.

The CLI layer turns these into user-facing messages and exit codes,
services never print or exit on their own.
"""


class CltodoError(Exception):
    """Base class for every error cltodo raises on purpose."""


class StorageLocationError(CltodoError):
    """The database location could not be determined or created."""


class CorruptedTodoError(CltodoError):
    """A stored row does not match the Todo shape (bad priority or date)."""

    def __init__(self, todo_id: int | None, reason: str):
        self.todo_id = todo_id
        self.reason = reason
        super().__init__(f"corrupted todo #{todo_id}: {reason}")


class TodoNotFoundError(CltodoError):
    def __init__(self, todo_id: int):
        self.todo_id = todo_id
        super().__init__(f"TODO item not found with id {todo_id}")
