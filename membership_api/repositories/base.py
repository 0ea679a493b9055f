"""
Membership API - Record Repository Base
=======================================

What:  The five record operations (list, get, create, update, delete)
       shared by the member and course repositories.
How:   A subclass names its ORM model, its schemas, its list projection and
       its search orderings; every method receives the request's
       AsyncSession explicitly.

Error Handling Strategy:
    - SQLAlchemyError from any query is wrapped in DatabaseError (→ 500);
      the driver error stays in the exception context for the logs.
    - Payloads that fail type validation raise ValidationError (→ 400).
    - update() on an unknown id raises NotFoundError (→ 404).
    - get() and delete() on an unknown id return None; the route layer
      decides how to answer.

Each write commits before returning and re-reads the row, so the returned
record is exactly what the store holds.
"""

import logging
import uuid
from typing import Any, ClassVar, Generic, List, Mapping, Optional, Sequence, Type, TypeVar, Union

import pydantic
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from membership_api.exceptions import DatabaseError, NotFoundError, ValidationError
from membership_api.repositories.search import build_search_filter

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
CreateT = TypeVar("CreateT", bound=pydantic.BaseModel)
UpdateT = TypeVar("UpdateT", bound=pydantic.BaseModel)
ResponseT = TypeVar("ResponseT", bound=pydantic.BaseModel)
ListItemT = TypeVar("ListItemT", bound=pydantic.BaseModel)


class RecordRepository(Generic[ModelT, CreateT, UpdateT, ResponseT, ListItemT]):
    """
    Generic CRUD accessor for one table of id-keyed records.

    Subclasses set:
        resource:         singular name used in logs and error messages
        model:            SQLAlchemy model class (must have `id`, `created_at`)
        create_schema / update_schema / response_schema / list_item_schema
        list_columns:     names of the columns projected by list()
        search_orderings: names of the fields joined for search, per ordering
    """

    resource: ClassVar[str]
    model: ClassVar[Type[Any]]
    create_schema: ClassVar[Type[pydantic.BaseModel]]
    update_schema: ClassVar[Type[pydantic.BaseModel]]
    response_schema: ClassVar[Type[pydantic.BaseModel]]
    list_item_schema: ClassVar[Type[pydantic.BaseModel]]
    list_columns: ClassVar[Sequence[str]]
    search_orderings: ClassVar[Sequence[Sequence[str]]]

    # ── Helpers ───────────────────────────────────────────────────────────
    def _columns(self, names: Sequence[str]) -> list:
        return [getattr(self.model, name) for name in names]

    def _validate(self, schema: Type[pydantic.BaseModel], payload: Any) -> Any:
        """Validate a raw payload (dict or model) against `schema`."""
        if isinstance(payload, schema):
            return payload
        if isinstance(payload, pydantic.BaseModel):
            payload = payload.model_dump(exclude_unset=True)
        try:
            return schema.model_validate(payload)
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic(e, self.resource)

    def _to_response(self, record: ModelT) -> ResponseT:
        """Re-validate a full stored record and convert it to its response model."""
        try:
            return self.response_schema.model_validate(record)
        except pydantic.ValidationError as e:
            raise ValidationError.from_pydantic(e, self.resource)

    def _store_error(self, action: str, error: Exception, **context: Any) -> DatabaseError:
        logger.error("Database error %s %s: %s", action, self.resource, str(error))
        return DatabaseError(
            message=f"Could not {action} {self.resource} data. Please try again.",
            context={"resource": self.resource, "error_type": type(error).__name__, **context},
        )

    # ── Operations ────────────────────────────────────────────────────────
    async def list(self, db: AsyncSession, search: Optional[str] = None) -> List[ListItemT]:
        """
        List records projected to their display fields.

        Args:
            db: Async database session
            search: Optional case-insensitive substring; see repositories.search

        Returns:
            Projected records in insertion order (matches only, when searching)

        Raises:
            DatabaseError: Query execution failed (→ 500)
        """
        query = select(*self._columns(self.list_columns))

        orderings = [self._columns(names) for names in self.search_orderings]
        clause = build_search_filter(search, orderings)
        if clause is not None:
            logger.info("Searching %ss for %r", self.resource, search)
            query = query.where(clause)
        else:
            logger.info("Getting all the %ss", self.resource)

        query = query.order_by(self.model.created_at, self.model.id)

        try:
            result = await db.execute(query)
            rows = result.all()
        except SQLAlchemyError as e:
            raise self._store_error("retrieve", e, search=search)

        return [self.list_item_schema.model_validate(row) for row in rows]

    async def get(self, db: AsyncSession, record_id: str) -> Optional[ResponseT]:
        """
        Fetch one full record by id.

        Returns:
            The record, or None if no record has that id

        Raises:
            DatabaseError: Query execution failed (→ 500)
        """
        logger.info("Getting %s %s", self.resource, record_id)
        try:
            record = await db.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise self._store_error("retrieve", e, record_id=record_id)

        if record is None:
            return None
        return self._to_response(record)

    async def create(self, db: AsyncSession, payload: Union[CreateT, Mapping[str, Any]]) -> ResponseT:
        """
        Validate and store a new record under a freshly minted id.

        Any `id` in the payload is ignored.

        Raises:
            ValidationError: A field has the wrong type (→ 400)
            DatabaseError: Insert failed (→ 500)
        """
        data = self._validate(self.create_schema, payload)
        record = self.model(id=str(uuid.uuid4()), **data.model_dump())
        logger.info("Adding a %s: %s", self.resource, record.id)

        try:
            db.add(record)
            await db.commit()
            await db.refresh(record)
        except SQLAlchemyError as e:
            await db.rollback()
            raise self._store_error("save", e)

        return self._to_response(record)

    async def update(
        self,
        db: AsyncSession,
        record_id: str,
        payload: Union[UpdateT, Mapping[str, Any]],
    ) -> ResponseT:
        """
        Apply the fields present in `payload` to an existing record.

        Fields absent from the payload keep their stored values. The record is
        looked up before the payload is validated, so an unknown id is a 404
        whatever the body holds. The merged record is validated before it is
        committed.

        Raises:
            NotFoundError: No record with that id (→ 404)
            ValidationError: Payload or merged record invalid (→ 400)
            DatabaseError: Query or commit failed (→ 500)
        """
        try:
            record = await db.get(self.model, record_id)
        except SQLAlchemyError as e:
            raise self._store_error("update", e, record_id=record_id)

        if record is None:
            raise NotFoundError(resource=self.resource, resource_id=record_id)

        changes = self._validate(self.update_schema, payload).model_dump(exclude_unset=True)
        logger.info("Editing %s %s (%s)", self.resource, record_id, ", ".join(sorted(changes)) or "no fields")

        for field, value in changes.items():
            setattr(record, field, value)

        try:
            self._to_response(record)
        except ValidationError:
            await db.rollback()
            raise

        try:
            await db.commit()
            await db.refresh(record)
        except SQLAlchemyError as e:
            await db.rollback()
            raise self._store_error("update", e, record_id=record_id)

        return self._to_response(record)

    async def delete(self, db: AsyncSession, record_id: str) -> Optional[ResponseT]:
        """
        Remove a record.

        Returns:
            The record as it was just before removal, or None if it did not exist

        Raises:
            DatabaseError: Query or commit failed (→ 500)
        """
        logger.info("Deleting %s %s", self.resource, record_id)
        try:
            record = await db.get(self.model, record_id)
            if record is None:
                return None
            removed = self._to_response(record)
            await db.delete(record)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            raise self._store_error("delete", e, record_id=record_id)

        return removed
