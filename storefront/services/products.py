"""Product service: generic CRUD plus the transactional product removal."""

from __future__ import annotations

import logging
from typing import List

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from storefront.db.models import Review
from storefront.services.crud import CrudService
from storefront.services.media import MediaUrlRewriter
from storefront.services.resources import PRODUCT, PRODUCT_VARIANT, REVIEW

logger = logging.getLogger(__name__)


class ProductService(CrudService):
    def __init__(self, session: Session, media: MediaUrlRewriter, storage):
        super().__init__(session, PRODUCT, media)
        self.storage = storage

    def remove(self, id: int) -> BaseModel:
        """
        Delete a product, its variants and reviews, their media rows and media objects.

        Either everything in the database goes or nothing does; storage objects
        deleted before a failing storage call are not restored.
        """
        product = self._load(id)
        deleted = self.to_read(product)

        children = []
        for variant in product.product_variants:
            children.extend(variant.media)
        reviews = self.session.execute(
            select(Review).where(Review.product_id == id).options(selectinload(Review.media)).order_by(Review.id)
        ).scalars().all()
        for review in reviews:
            children.extend(review.media)
        children.extend(reviews)
        children.extend(product.product_variants)

        self.remove_with_objects(product, children, self.storage)
        logger.info("Product deleted successfully: %s (%d variants)", id, len(product.product_variants))
        return deleted

    def variants(self, id: int, page: int, per_page: int) -> List[BaseModel]:
        self.ensure_exists(id)
        return CrudService(self.session, PRODUCT_VARIANT, self.media).find_by("product_id", id, page, per_page)

    def reviews(self, id: int, page: int, per_page: int) -> List[BaseModel]:
        self.ensure_exists(id)
        return CrudService(self.session, REVIEW, self.media).find_by("product_id", id, page, per_page)
