from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def write_transaction(session: Session) -> Iterator[Session]:
    """
    Run a unit of writes and commit it.
    If the session already autobegan a transaction (e.g. a read happened first)
    that transaction is committed on exit, otherwise a fresh one is begun.
    Any exception rolls back and propagates.
        with write_transaction(db):
            db.add(obj)
    """
    if session.in_transaction():
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
    else:
        with session.begin():
            yield session
