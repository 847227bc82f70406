from collections.abc import Iterator

from fastapi import Depends
from sqlalchemy.orm import Session

from stockflow.db.session import SessionLocal
from stockflow.db.store import Store


def get_db() -> Iterator[Session]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> Store:
    return Store(db)
