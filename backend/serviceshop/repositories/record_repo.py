from typing import Generic, List, Type, TypeVar

from sqlalchemy import func
from sqlalchemy.orm import Session

T = TypeVar("T")


class RecordRepository(Generic[T]):
    """
    Write-once records (card-to-cash, CSC bookings, contact messages):
    insert, newest-first listing, count.
    """

    def __init__(self, db: Session, model: Type[T]):
        self.db = db
        self.model = model

    def add(self, record: T) -> T:
        self.db.add(record)
        self.db.flush()
        return record

    def recent(self, limit: int) -> List[T]:
        return (
            self.db.query(self.model)
            .order_by(self.model.created_at.desc())
            .limit(limit)
            .all()
        )

    def count(self) -> int:
        return self.db.query(func.count(self.model.id)).scalar() or 0
