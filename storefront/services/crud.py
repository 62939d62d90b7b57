"""
Generic CRUD service shared by every entity module.

A `Resource` describes one table: its ORM model, its read schema and the
relations to load with it. `CrudService` runs the queries, classifies failures
into `BadRequestError` / `NotFoundError` and returns read models with media
keys rewritten to public URLs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.errors import BadRequestError, NotFoundError, StorageError
from storefront.schemas.common import MAX_PER_PAGE
from storefront.services.media import MediaUrlRewriter

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Resource:
    name: str
    model: Type[Any]
    read_schema: Type[BaseModel]
    load_options: Tuple[Any, ...] = ()
    # Input fields handled by a specialised service instead of being columns.
    extra_fields: FrozenSet[str] = frozenset()
    plural: Optional[str] = None

    @property
    def label(self) -> str:
        return self.name[:1].upper() + self.name[1:]

    @property
    def plural_name(self) -> str:
        return self.plural or f"{self.name}s"


def check_page(page: int, per_page: int) -> None:
    if page < 1:
        raise BadRequestError("page must be greater than or equal to 1")
    if per_page < 1 or per_page > MAX_PER_PAGE:
        raise BadRequestError(f"perPage must be between 1 and {MAX_PER_PAGE}")


def purge_objects(storage, keys: Sequence[str]) -> None:
    """Delete storage objects in order; stop at the first failure."""
    deleted: List[str] = []
    for key in keys:
        try:
            storage.delete(key)
        except StorageError:
            if deleted:
                logger.error("Storage delete failed at %s; objects already deleted: %s", key, deleted)
            raise
        deleted.append(key)


class CrudService:
    def __init__(self, session: Session, resource: Resource, media: Optional[MediaUrlRewriter] = None):
        self.session = session
        self.resource = resource
        self.media = media

    # -- helpers -----------------------------------------------------------

    def _select(self):
        return select(self.resource.model).options(*self.resource.load_options)

    def _load(self, id: int, fresh: bool = False):
        stmt = self._select().where(self.resource.model.id == id)
        if fresh:
            stmt = stmt.execution_options(populate_existing=True)
        row = self.session.execute(stmt).scalars().first()
        if row is None:
            raise NotFoundError(f"{self.resource.label} not found!")
        return row

    def to_read(self, row) -> BaseModel:
        read = self.resource.read_schema.model_validate(row)
        if self.media is not None:
            read = self.media.rewrite_nested(read)
        return read

    def _values(self, payload: BaseModel, partial: bool) -> Dict[str, Any]:
        if partial:
            data = payload.model_dump(exclude_unset=True)
        else:
            data = payload.model_dump(exclude_none=True)
        for name in self.resource.extra_fields:
            data.pop(name, None)
        return data

    def _commit(self, action: str, ident: Any = None) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error %s %s %s: %s", action, self.resource.name, ident if ident is not None else "", exc)
            verb = {"creating": "create", "updating": "update", "deleting": "delete"}[action]
            raise BadRequestError(f"Failed to {verb} {self.resource.name}")

    # -- operations --------------------------------------------------------

    def create(self, payload: BaseModel) -> BaseModel:
        row = self.resource.model(**self._values(payload, partial=False))
        self.session.add(row)
        self._commit("creating")
        logger.info("%s created successfully: %s", self.resource.label, row.id)
        return self.to_read(self._load(row.id, fresh=True))

    def find_all(self, page: int = 1, per_page: int = 10) -> List[BaseModel]:
        return self.find_by(None, None, page, per_page)

    def find_by(self, column: Optional[str], value: Any, page: int = 1, per_page: int = 10) -> List[BaseModel]:
        check_page(page, per_page)
        model = self.resource.model
        stmt = self._select()
        if column is not None:
            stmt = stmt.where(getattr(model, column) == value)
        stmt = stmt.order_by(model.id.asc()).offset((page - 1) * per_page).limit(per_page)
        try:
            rows = self.session.execute(stmt).scalars().all()
            result = [self.to_read(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.error("Error fetching %s: %s", self.resource.plural_name, exc)
            raise BadRequestError(f"Failed to fetch {self.resource.plural_name}")
        logger.info("Fetched %d %s (page %d)", len(result), self.resource.plural_name, page)
        return result

    def find_one(self, id: int) -> BaseModel:
        result = self.to_read(self._load(id))
        logger.info("Fetched %s successfully: %s", self.resource.name, id)
        return result

    def ensure_exists(self, id: int) -> None:
        stmt = select(self.resource.model.id).where(self.resource.model.id == id)
        if self.session.execute(stmt).first() is None:
            raise NotFoundError(f"{self.resource.label} not found!")

    def update(self, id: int, payload: BaseModel) -> BaseModel:
        row = self._load(id)
        for key, value in self._values(payload, partial=True).items():
            setattr(row, key, value)
        self._commit("updating", id)
        logger.info("%s updated successfully: %s", self.resource.label, id)
        return self.to_read(self._load(id, fresh=True))

    def remove(self, id: int) -> BaseModel:
        row = self._load(id)
        deleted = self.to_read(row)
        self.session.delete(row)
        self._commit("deleting", id)
        logger.info("%s deleted successfully: %s", self.resource.label, id)
        return deleted

    def remove_with_objects(self, row, children: Sequence[Any], storage) -> None:
        """
        Delete `children` and `row` together with the storage objects of the media
        rows among them, in one transaction.

        Row deletes are flushed first, then storage objects are deleted, then the
        transaction commits. Any failure rolls the database back.
        """
        ident = row.id
        keys = [child.url for child in children if hasattr(child, "url")]
        try:
            for child in children:
                self.session.delete(child)
            self.session.delete(row)
            self.session.flush()
            purge_objects(storage, keys)
            self.session.commit()
        except (SQLAlchemyError, StorageError) as exc:
            self.session.rollback()
            logger.error("Error deleting %s %s: %s", self.resource.name, ident, exc)
            raise BadRequestError(f"Failed to delete {self.resource.name}")
