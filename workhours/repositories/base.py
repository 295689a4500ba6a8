"""Shared helpers for keyed record collections."""
from __future__ import annotations

from typing import Any, Generic, Sequence, TypeVar

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from workhours.models import Base

ModelT = TypeVar("ModelT", bound=Base)


class BaseRepository(Generic[ModelT]):
    """One collection supporting exact-match filters only.

    Mutations address a record by id *and* owner, so a caller can never
    reach another user's rows.
    """

    model: type[ModelT]

    def __init__(self, session: Session) -> None:
        self._session = session

    def _where(self, filters: dict[str, Any]):
        return [getattr(self.model, key) == value for key, value in filters.items()]

    def insert_one(self, **values: Any) -> ModelT:
        record = self.model(**values)
        self._session.add(record)
        self._session.flush()
        return record

    def find_one(self, **filters: Any) -> ModelT | None:
        statement = select(self.model).where(*self._where(filters)).limit(1)
        return self._session.execute(statement).scalars().first()

    def find_many(self, **filters: Any) -> Sequence[ModelT]:
        statement = select(self.model).where(*self._where(filters)).order_by(self.model.id)
        return self._session.execute(statement).scalars().all()

    def update_one(self, record_id: int, owner_id: int, **values: Any) -> ModelT | None:
        record = self.find_one(id=record_id, owner_id=owner_id)
        if record is None:
            return None
        for key, value in values.items():
            setattr(record, key, value)
        self._session.flush()
        return record

    def delete_one(self, record_id: int, owner_id: int) -> bool:
        statement = delete(self.model).where(
            self.model.id == record_id, self.model.owner_id == owner_id
        )
        result = self._session.execute(statement)
        return bool(result.rowcount)
