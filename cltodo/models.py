from sqlalchemy import Column, Integer, Text

from cltodo.core.database import Base


class Todo(Base):
    """
    Model for a TODO.
    Note: `date` is kept as an offset-aware ISO 8601 string and `priority` as
    its integer tag, conversion to typed values happens in cltodo.schemas.
    """

    __tablename__ = "todos"

    # INTEGER PRIMARY KEY without AUTOINCREMENT: ids restart at 1 after a prune
    id = Column(Integer, primary_key=True)
    date = Column(Text, nullable=False)
    text = Column(Text, nullable=False)
    priority = Column(Integer, nullable=False)
