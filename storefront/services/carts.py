"""Carts: one per user, with items merged by product variant."""

from __future__ import annotations

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from storefront.db.models import Cart, CartItem, ProductVariant, User
from storefront.errors import BadRequestError, NotFoundError
from storefront.schemas.sales import AddCartItem, CartDetail, CartItemRead, CartRead
from storefront.services.crud import CrudService
from storefront.services.media import MediaUrlRewriter
from storefront.services.resources import CART

logger = logging.getLogger(__name__)


class CartService(CrudService):
    def __init__(self, session: Session, media: MediaUrlRewriter):
        super().__init__(session, CART, media)

    def _cart_for_user(self, user_id: int):
        return self.session.execute(select(Cart).where(Cart.user_id == user_id)).scalars().first()

    def for_user(self, user_id: int) -> CartRead:
        cart = self._cart_for_user(user_id)
        if cart is None:
            raise NotFoundError("Cart not found!")
        return self.to_read(cart)

    def open_for_user(self, user_id: int) -> CartRead:
        """Return the user's cart, creating it when missing."""
        if self.session.get(User, user_id) is None:
            raise NotFoundError("User not found!")
        cart = self._cart_for_user(user_id)
        if cart is None:
            cart = Cart(user_id=user_id)
            self.session.add(cart)
            self._commit("creating")
            logger.info("Cart created for user %s: %s", user_id, cart.id)
        return self.to_read(cart)

    def add_item(self, user_id: int, payload: AddCartItem) -> CartItemRead:
        cart = self.open_for_user(user_id)
        if self.session.get(ProductVariant, payload.product_variant_id) is None:
            raise NotFoundError("Product variant not found!")

        item = self.session.execute(
            select(CartItem).where(
                CartItem.cart_id == cart.id, CartItem.product_variant_id == payload.product_variant_id
            )
        ).scalars().first()
        if item is None:
            item = CartItem(cart_id=cart.id, product_variant_id=payload.product_variant_id, quantity=payload.quantity)
            self.session.add(item)
        else:
            item.quantity = item.quantity + payload.quantity

        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error adding item to cart %s: %s", cart.id, exc)
            raise BadRequestError("Failed to add item to cart")
        logger.info("Cart %s: variant %s quantity now %d", cart.id, item.product_variant_id, item.quantity)
        self.session.refresh(item)
        return CartItemRead.model_validate(item)

    def details(self, id: int) -> CartDetail:
        stmt = (
            select(Cart)
            .where(Cart.id == id)
            .options(selectinload(Cart.cart_items).selectinload(CartItem.product_variant).selectinload(ProductVariant.media))
        )
        cart = self.session.execute(stmt).scalars().first()
        if cart is None:
            raise NotFoundError("Cart not found!")

        sub_total = sum(
            (Decimal(item.product_variant.price) * item.quantity for item in cart.cart_items), Decimal("0")
        )
        detail = CartDetail.model_validate(cart).model_copy(update={"sub_total": sub_total})
        logger.info("Fetched cart details: %s (%d items)", id, len(cart.cart_items))
        return self.media.rewrite_nested(detail) if self.media is not None else detail
