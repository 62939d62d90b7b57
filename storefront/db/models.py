"""
SQLAlchemy ORM models for the storefront schema.

Important:
- Ids are BIGSERIAL surrogate keys; every foreign key is a BIGINT column.
- Money columns are NUMERIC(12, 2) with an informational `currency_unit`.
- Delete behaviour of dependents is declared on the foreign keys; relationships
  use `passive_deletes` so the database cascade rules apply.
"""

from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    Float,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from storefront.db.base import Base, BigIntId, TimestampMixin

MONEY = Numeric(12, 2)


class Role(str, enum.Enum):
    USER = "USER"
    ADMIN = "ADMIN"
    OPERATOR = "OPERATOR"


class Gender(str, enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"


class ShipmentStatus(str, enum.Enum):
    WAITING_FOR_PICKUP = "WAITING_FOR_PICKUP"
    IN_TRANSIT = "IN_TRANSIT"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    DELIVERED_FAILED = "DELIVERED_FAILED"
    RETURNED_TO_SENDER = "RETURNED_TO_SENDER"


class PaymentStatus(str, enum.Enum):
    PENDING = "PENDING"
    PAID = "PAID"
    FAILED = "FAILED"
    REFUNDED = "REFUNDED"


class PaymentMethod(str, enum.Enum):
    COD = "COD"
    VNPAY = "VNPAY"
    MOMO = "MOMO"
    ZALOPAY = "ZALOPAY"
    CREDIT_CARD = "CREDIT_CARD"
    BANK_TRANSFER = "BANK_TRANSFER"


class VoucherStatus(str, enum.Enum):
    AVAILABLE = "AVAILABLE"
    SAVED = "SAVED"
    USED = "USED"
    EXPIRED = "EXPIRED"


class DiscountType(str, enum.Enum):
    PERCENTAGE = "PERCENTAGE"
    FIXED_AMOUNT = "FIXED_AMOUNT"


class RequestStatus(str, enum.Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class MediaType(str, enum.Enum):
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    DOCUMENT = "DOCUMENT"


def _fk(target: str, ondelete: str, nullable: bool = True, **kwargs) -> Mapped:
    return mapped_column(BigInteger, ForeignKey(target, ondelete=ondelete), nullable=nullable, index=True, **kwargs)


class ShopOffice(Base, TimestampMixin):
    """shop_offices table."""

    __tablename__ = "shop_offices"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    shop_name: Mapped[str] = mapped_column(String(255), nullable=False)
    ghn_shop_id: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True, unique=True)

    address: Mapped[Optional["Address"]] = relationship("Address", back_populates="shop_office", uselist=False)


class User(Base, TimestampMixin):
    """users table."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)

    email: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    username: Mapped[str] = mapped_column(String(32), nullable=False, unique=True)
    password: Mapped[str] = mapped_column(String(255), nullable=False)

    first_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(15), nullable=True)

    role: Mapped[Role] = mapped_column(Enum(Role, name="role"), nullable=False, default=Role.USER)
    gender: Mapped[Optional[Gender]] = mapped_column(Enum(Gender, name="gender"), nullable=True, default=Gender.OTHER)
    points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    code_active: Mapped[Optional[str]] = mapped_column(String(36), nullable=True)
    code_active_expire: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    is_admin: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    staff_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True, unique=True)
    loyalty_card: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    shop_office_id: Mapped[Optional[int]] = _fk("shop_offices.id", "SET NULL")

    user_media: Mapped[List["Media"]] = relationship("Media", back_populates="user", passive_deletes=True)
    addresses: Mapped[List["Address"]] = relationship("Address", back_populates="user", passive_deletes=True)
    cart: Mapped[Optional["Cart"]] = relationship("Cart", back_populates="user", uselist=False, passive_deletes=True)


class Address(Base, TimestampMixin):
    """addresses table."""

    __tablename__ = "addresses"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    user_id: Mapped[Optional[int]] = _fk("users.id", "CASCADE")
    shop_office_id: Mapped[Optional[int]] = _fk("shop_offices.id", "CASCADE", unique=True)

    street: Mapped[str] = mapped_column(String(255), nullable=False)
    ward: Mapped[str] = mapped_column(String(100), nullable=False)
    district: Mapped[str] = mapped_column(String(100), nullable=False)
    province: Mapped[str] = mapped_column(String(100), nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(100), nullable=False)

    # Carrier master-data codes used when building shipping requests.
    ghn_district_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    ghn_ward_code: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    user: Mapped[Optional[User]] = relationship("User", back_populates="addresses")
    shop_office: Mapped[Optional[ShopOffice]] = relationship("ShopOffice", back_populates="address")


class SizeProfile(Base, TimestampMixin):
    """size_profiles table."""

    __tablename__ = "size_profiles"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = _fk("users.id", "CASCADE", nullable=False)

    height_cm: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    weight_kg: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    chest_cm: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    hip_cm: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    hips_cm: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    sleeve_length_cm: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    inseam_cm: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    shoulder_length_cm: Mapped[float] = mapped_column(Float, nullable=False, default=0)

    body_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


class Voucher(Base, TimestampMixin):
    """vouchers table."""

    __tablename__ = "vouchers"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    code: Mapped[str] = mapped_column(String(50), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    discount_type: Mapped[DiscountType] = mapped_column(
        Enum(DiscountType, name="discount_type"), nullable=False, default=DiscountType.FIXED_AMOUNT
    )
    discount_value: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=0)

    valid_from: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    valid_to: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    usage_limit: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    times_used: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    created_by: Mapped[int] = _fk("users.id", "CASCADE", nullable=False)

    categories: Mapped[List["Category"]] = relationship("Category", back_populates="voucher")
    products: Mapped[List["Product"]] = relationship("Product", back_populates="voucher")
    product_variants: Mapped[List["ProductVariant"]] = relationship("ProductVariant", back_populates="voucher")

    __table_args__ = (CheckConstraint("discount_value >= 0", name="discount_value_check"),)


class UserVoucher(Base, TimestampMixin):
    """user_vouchers table."""

    __tablename__ = "user_vouchers"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = _fk("users.id", "CASCADE", nullable=False)
    voucher_id: Mapped[int] = _fk("vouchers.id", "CASCADE", nullable=False)

    voucher_status: Mapped[VoucherStatus] = mapped_column(
        Enum(VoucherStatus, name="voucher_status"), nullable=False, default=VoucherStatus.SAVED
    )
    save_voucher_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    use_voucher_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    voucher: Mapped[Voucher] = relationship("Voucher")


class Category(Base, TimestampMixin):
    """categories table."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    parent_id: Mapped[Optional[int]] = _fk("categories.id", "SET NULL")
    create_by_user_id: Mapped[Optional[int]] = _fk("users.id", "SET NULL")
    shop_office_id: Mapped[Optional[int]] = _fk("shop_offices.id", "SET NULL")
    voucher_id: Mapped[Optional[int]] = _fk("vouchers.id", "SET NULL")

    voucher: Mapped[Optional[Voucher]] = relationship("Voucher", back_populates="categories")


class Color(Base, TimestampMixin):
    """colors table."""

    __tablename__ = "colors"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    hex_code: Mapped[str] = mapped_column(String(7), nullable=False)


class Product(Base, TimestampMixin):
    """products table."""

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    currency_unit: Mapped[str] = mapped_column(String(10), nullable=False, default="VND")
    stock_keeping_unit: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    stock: Mapped[int] = mapped_column(Integer, nullable=False)

    category_id: Mapped[Optional[int]] = _fk("categories.id", "SET NULL")
    create_by_user_id: Mapped[Optional[int]] = _fk("users.id", "SET NULL")
    shop_office_id: Mapped[Optional[int]] = _fk("shop_offices.id", "SET NULL")
    voucher_id: Mapped[Optional[int]] = _fk("vouchers.id", "SET NULL")

    product_variants: Mapped[List["ProductVariant"]] = relationship(
        "ProductVariant", back_populates="product", order_by="ProductVariant.id", passive_deletes=True
    )
    voucher: Mapped[Optional[Voucher]] = relationship("Voucher", back_populates="products")

    __table_args__ = (
        CheckConstraint("price >= 0", name="price_check"),
        CheckConstraint("stock >= 0", name="stock_check"),
    )


class ProductVariant(Base, TimestampMixin):
    """product_variants table."""

    __tablename__ = "product_variants"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = _fk("products.id", "CASCADE", nullable=False)

    variant_name: Mapped[str] = mapped_column(String(100), nullable=False)
    variant_color: Mapped[str] = mapped_column(String(100), nullable=False)
    variant_size: Mapped[str] = mapped_column(String(100), nullable=False)

    price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    currency_unit: Mapped[str] = mapped_column(String(10), nullable=False, default="VND")
    stock: Mapped[int] = mapped_column(Integer, nullable=False)
    stock_keeping_unit: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)

    # Parcel dimensions in grams / centimetres, used by the shipping carrier.
    variant_weight: Mapped[float] = mapped_column(Float, nullable=False, default=250)
    variant_length: Mapped[float] = mapped_column(Float, nullable=False, default=25)
    variant_width: Mapped[float] = mapped_column(Float, nullable=False, default=20)
    variant_height: Mapped[float] = mapped_column(Float, nullable=False, default=5)

    color_id: Mapped[int] = _fk("colors.id", "RESTRICT", nullable=False)
    create_by_user_id: Mapped[Optional[int]] = _fk("users.id", "SET NULL")
    voucher_id: Mapped[Optional[int]] = _fk("vouchers.id", "SET NULL")

    product: Mapped[Product] = relationship("Product", back_populates="product_variants")
    media: Mapped[List["Media"]] = relationship(
        "Media", back_populates="product_variant", order_by="Media.id", passive_deletes=True
    )
    voucher: Mapped[Optional[Voucher]] = relationship("Voucher", back_populates="product_variants")

    __table_args__ = (
        CheckConstraint("price >= 0", name="price_check"),
        CheckConstraint("stock >= 0", name="stock_check"),
    )


class Review(Base, TimestampMixin):
    """reviews table."""

    __tablename__ = "reviews"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = _fk("products.id", "CASCADE", nullable=False)
    product_variant_id: Mapped[int] = _fk("product_variants.id", "CASCADE", nullable=False)
    user_id: Mapped[int] = _fk("users.id", "CASCADE", nullable=False)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    media: Mapped[List["Media"]] = relationship("Media", back_populates="review", order_by="Media.id", passive_deletes=True)

    __table_args__ = (CheckConstraint("rating BETWEEN 1 AND 5", name="rating_check"),)


class Media(Base, TimestampMixin):
    """media table; `url` holds the storage-relative object key."""

    __tablename__ = "media"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(Text, nullable=False, unique=True)
    type: Mapped[MediaType] = mapped_column(Enum(MediaType, name="media_type"), nullable=False, default=MediaType.IMAGE)

    review_id: Mapped[Optional[int]] = _fk("reviews.id", "CASCADE")
    user_id: Mapped[Optional[int]] = _fk("users.id", "CASCADE")
    product_variant_id: Mapped[Optional[int]] = _fk("product_variants.id", "CASCADE")
    request_id: Mapped[Optional[int]] = _fk("requests.id", "CASCADE")

    is_shop_logo: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_shop_banner: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_category_file: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_avatar_file: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    review: Mapped[Optional[Review]] = relationship("Review", back_populates="media")
    user: Mapped[Optional[User]] = relationship("User", back_populates="user_media")
    product_variant: Mapped[Optional[ProductVariant]] = relationship("ProductVariant", back_populates="media")
    request: Mapped[Optional["Request"]] = relationship("Request", back_populates="media")


class Order(Base, TimestampMixin):
    """orders table."""

    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = _fk("users.id", "CASCADE", nullable=False)
    shipping_address_id: Mapped[int] = _fk("addresses.id", "CASCADE", nullable=False)
    process_by_staff_id: Mapped[Optional[int]] = _fk("users.id", "SET NULL")

    order_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, name="order_status"), nullable=False, default=OrderStatus.PENDING
    )

    sub_total: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    shipping_fee: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    discount: Mapped[Decimal] = mapped_column(MONEY, nullable=False, default=0)
    total_amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    currency_unit: Mapped[str] = mapped_column(String(10), nullable=False, default="VND")

    user: Mapped[User] = relationship("User", foreign_keys=[user_id])
    shipping_address: Mapped[Address] = relationship("Address")
    order_items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem", back_populates="order", order_by="OrderItem.id", passive_deletes=True
    )
    shipments: Mapped[List["Shipment"]] = relationship(
        "Shipment", back_populates="order", order_by="Shipment.id", passive_deletes=True
    )
    payments: Mapped[List["Payment"]] = relationship("Payment", back_populates="order", passive_deletes=True)
    requests: Mapped[List["Request"]] = relationship("Request", back_populates="order", passive_deletes=True)


class OrderItem(Base, TimestampMixin):
    """order_items table."""

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = _fk("orders.id", "CASCADE", nullable=False)
    product_variant_id: Mapped[int] = _fk("product_variants.id", "CASCADE", nullable=False)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    unit_price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    total_price: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    currency_unit: Mapped[str] = mapped_column(String(10), nullable=False, default="VND")

    order: Mapped[Order] = relationship("Order", back_populates="order_items")
    product_variant: Mapped[ProductVariant] = relationship("ProductVariant")

    __table_args__ = (CheckConstraint("quantity > 0", name="quantity_check"),)


class Payment(Base, TimestampMixin):
    """payments table."""

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = _fk("orders.id", "CASCADE", nullable=False, unique=True)

    transaction_id: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    payment_method: Mapped[PaymentMethod] = mapped_column(
        Enum(PaymentMethod, name="payment_method"), nullable=False, default=PaymentMethod.COD
    )
    payment_date: Mapped[datetime] = mapped_column(DateTime, nullable=False, server_default=func.now())
    amount: Mapped[Decimal] = mapped_column(MONEY, nullable=False)
    currency_unit: Mapped[str] = mapped_column(String(10), nullable=False, default="VND")
    status: Mapped[PaymentStatus] = mapped_column(
        Enum(PaymentStatus, name="payment_status"), nullable=False, default=PaymentStatus.PENDING
    )

    order: Mapped[Order] = relationship("Order", back_populates="payments")


class Shipment(Base, TimestampMixin):
    """shipments table; one row per carrier package."""

    __tablename__ = "shipments"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = _fk("orders.id", "CASCADE", nullable=False)
    process_by_staff_id: Mapped[Optional[int]] = _fk("users.id", "SET NULL")
    shop_office_id: Mapped[Optional[int]] = _fk("shop_offices.id", "SET NULL")

    carrier: Mapped[str] = mapped_column(String(100), nullable=False)
    tracking_number: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    ghn_order_code: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, unique=True)
    status: Mapped[ShipmentStatus] = mapped_column(
        Enum(ShipmentStatus, name="shipment_status"), nullable=False, default=ShipmentStatus.WAITING_FOR_PICKUP
    )

    estimated_delivery: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    estimated_ship_date: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    shipped_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    delivered_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    order: Mapped[Order] = relationship("Order", back_populates="shipments")
    process_by_staff: Mapped[Optional[User]] = relationship("User", foreign_keys=[process_by_staff_id])
    shipment_items: Mapped[List["ShipmentItem"]] = relationship(
        "ShipmentItem", back_populates="shipment", order_by="ShipmentItem.id"
    )


class ShipmentItem(Base, TimestampMixin):
    """shipment_items table linking a package to the order items it carries."""

    __tablename__ = "shipment_items"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    shipment_id: Mapped[int] = _fk("shipments.id", "RESTRICT", nullable=False)
    order_item_id: Mapped[int] = _fk("order_items.id", "RESTRICT", nullable=False)

    shipment: Mapped[Shipment] = relationship("Shipment", back_populates="shipment_items")


class Cart(Base, TimestampMixin):
    """carts table; one cart per user."""

    __tablename__ = "carts"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = _fk("users.id", "CASCADE", nullable=False, unique=True)

    user: Mapped[User] = relationship("User", back_populates="cart")
    cart_items: Mapped[List["CartItem"]] = relationship(
        "CartItem", back_populates="cart", order_by="CartItem.id", passive_deletes=True
    )


class CartItem(Base, TimestampMixin):
    """cart_items table."""

    __tablename__ = "cart_items"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    cart_id: Mapped[int] = _fk("carts.id", "CASCADE", nullable=False)
    product_variant_id: Mapped[int] = _fk("product_variants.id", "CASCADE", nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    cart: Mapped[Cart] = relationship("Cart", back_populates="cart_items")
    product_variant: Mapped[ProductVariant] = relationship("ProductVariant")

    __table_args__ = (CheckConstraint("quantity > 0", name="quantity_check"),)


class Request(Base, TimestampMixin):
    """requests table (customer support / return requests)."""

    __tablename__ = "requests"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = _fk("users.id", "CASCADE", nullable=False)
    order_id: Mapped[int] = _fk("orders.id", "CASCADE", nullable=False, unique=True)
    process_by_staff_id: Mapped[Optional[int]] = _fk("users.id", "SET NULL")

    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[RequestStatus] = mapped_column(
        Enum(RequestStatus, name="request_status"), nullable=False, default=RequestStatus.PENDING
    )

    order: Mapped[Order] = relationship("Order", back_populates="requests")
    media: Mapped[List[Media]] = relationship("Media", back_populates="request", order_by="Media.id", passive_deletes=True)
    return_request: Mapped[Optional["ReturnRequest"]] = relationship(
        "ReturnRequest", back_populates="request", uselist=False, passive_deletes=True
    )


class ReturnRequest(Base, TimestampMixin):
    """return_requests table."""

    __tablename__ = "return_requests"

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    request_id: Mapped[int] = _fk("requests.id", "CASCADE", nullable=False, unique=True)

    request: Mapped[Request] = relationship("Request", back_populates="return_request")
