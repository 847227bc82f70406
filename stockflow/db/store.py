"""
Thin persistence facade the services talk to.

The database is the final authority on uniqueness (``products.sku`` and
``inventory(product_id, warehouse_id)``); the services only pre-check for a
friendlier error. Driver errors are translated here so callers see
``UniqueConstraintViolation`` for unique-index hits, ``InvalidInput`` for
values the column cannot hold and ``StoreUnavailable`` for timeouts and lost
connections, never a raw DBAPI exception.
"""

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import DataError, IntegrityError, OperationalError, TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from stockflow.core.errors import InvalidInput, NotFound, StoreUnavailable, UniqueConstraintViolation

T = TypeVar("T")
ModelT = TypeVar("ModelT")

_UNIQUE_VIOLATION_SQLSTATE = "23505"


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == _UNIQUE_VIOLATION_SQLSTATE
    # sqlite3 only reports the message.
    return "unique constraint" in str(orig).lower()


class Store:
    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _translated_errors(self) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise UniqueConstraintViolation(str(exc.orig)) from exc
            raise
        except DataError as exc:
            raise InvalidInput("Value does not fit the stored column") from exc
        except (OperationalError, PoolTimeoutError) as exc:
            raise StoreUnavailable() from exc

    def insert(self, entity: ModelT) -> ModelT:
        with self._translated_errors():
            self.db.add(entity)
            self.db.flush()
        return entity

    def find_one_or_none(self, model: type[ModelT], *, for_update: bool = False, **filters: Any) -> ModelT | None:
        stmt = select(model).filter_by(**filters)
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        with self._translated_errors():
            return self.db.execute(stmt).scalar_one_or_none()

    def find_one(
        self,
        model: type[ModelT],
        *,
        not_found: str = "Resource not found",
        for_update: bool = False,
        **filters: Any,
    ) -> ModelT:
        entity = self.find_one_or_none(model, for_update=for_update, **filters)
        if entity is None:
            raise NotFound(not_found)
        return entity

    def find_many(
        self,
        model: type[ModelT],
        *criteria: Any,
        order_by: Sequence[Any] = (),
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[ModelT]:
        stmt = select(model).where(*criteria).order_by(*order_by)
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        with self._translated_errors():
            return list(self.db.execute(stmt).scalars().all())

    def execute(self, statement: Any):
        with self._translated_errors():
            return self.db.execute(statement)

    def run_in_transaction(self, fn: Callable[["Store"], T]) -> T:
        """Runs ``fn`` and commits; any failure rolls every write in ``fn`` back."""
        try:
            with self._translated_errors():
                result = fn(self)
                self.db.commit()
        except BaseException:
            self.db.rollback()
            raise
        return result
