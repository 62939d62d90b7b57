"""Review service; reviews own media rows whose objects live in storage."""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.db.models import Media, MediaType, Review
from storefront.errors import BadRequestError, StorageError
from storefront.schemas.catalog import ReviewCreate, ReviewRead, ReviewUpdate
from storefront.services.crud import CrudService, purge_objects
from storefront.services.media import MediaUrlRewriter
from storefront.services.resources import REVIEW

logger = logging.getLogger(__name__)


class ReviewService(CrudService):
    def __init__(self, session: Session, media: MediaUrlRewriter, storage):
        super().__init__(session, REVIEW, media)
        self.storage = storage

    def create(self, payload: ReviewCreate) -> ReviewRead:
        review = Review(**self._values(payload, partial=False))
        self.session.add(review)
        try:
            self.session.flush()
            for key in payload.media_keys:
                self.session.add(Media(url=key, type=MediaType.IMAGE, review_id=review.id))
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error creating review: %s", exc)
            raise BadRequestError("Failed to create review")
        self._commit("creating")
        logger.info("Review created successfully: %s (%d media)", review.id, len(payload.media_keys))
        return self.to_read(self._load(review.id, fresh=True))

    def update(self, id: int, payload: ReviewUpdate) -> ReviewRead:
        review = self._load(id)
        for key, value in self._values(payload, partial=True).items():
            setattr(review, key, value)

        ids = set(payload.media_ids_to_delete)
        to_delete = [media for media in review.media if media.id in ids]
        try:
            for key in payload.media_keys:
                self.session.add(Media(url=key, type=MediaType.IMAGE, review_id=review.id))
            for media in to_delete:
                self.session.delete(media)
            self.session.flush()
            purge_objects(self.storage, [media.url for media in to_delete])
            self.session.commit()
        except (SQLAlchemyError, StorageError) as exc:
            self.session.rollback()
            logger.error("Error updating review %s: %s", id, exc)
            raise BadRequestError("Failed to update review")

        logger.info("Review updated successfully: %s", id)
        return self.to_read(self._load(id, fresh=True))

    def remove(self, id: int) -> ReviewRead:
        review = self._load(id)
        deleted = self.to_read(review)
        self.remove_with_objects(review, list(review.media), self.storage)
        logger.info("Review deleted successfully: %s", id)
        return deleted
