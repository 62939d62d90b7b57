"""Catalog schemas: categories, colors, products, variants and reviews."""

from typing import List, Optional

from pydantic import Field

from storefront.schemas.common import CamelModel, MediaRead, Money, RecordRead


class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    parent_id: Optional[int] = None
    create_by_user_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    voucher_id: Optional[int] = None


class CategoryUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    parent_id: Optional[int] = None
    create_by_user_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    voucher_id: Optional[int] = None


class CategoryRead(RecordRead):
    name: str
    description: Optional[str] = None
    parent_id: Optional[int] = None
    create_by_user_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    voucher_id: Optional[int] = None


class ColorCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    hex_code: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$")


class ColorUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    hex_code: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")


class ColorRead(RecordRead):
    name: str
    hex_code: str


class ProductCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    price: Money = Field(..., ge=0)
    currency_unit: str = "VND"
    stock_keeping_unit: str = Field(..., min_length=1, max_length=100)
    stock: int = Field(..., ge=0)
    category_id: Optional[int] = None
    create_by_user_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    voucher_id: Optional[int] = None


class ProductUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    price: Optional[Money] = Field(None, ge=0)
    currency_unit: Optional[str] = None
    stock_keeping_unit: Optional[str] = Field(None, min_length=1, max_length=100)
    stock: Optional[int] = Field(None, ge=0)
    category_id: Optional[int] = None
    create_by_user_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    voucher_id: Optional[int] = None


class ProductRead(RecordRead):
    name: str
    description: Optional[str] = None
    price: Money
    currency_unit: str
    stock_keeping_unit: str
    stock: int
    category_id: Optional[int] = None
    create_by_user_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    voucher_id: Optional[int] = None


class ProductVariantCreate(CamelModel):
    product_id: int
    variant_name: str = Field(..., min_length=1, max_length=100)
    variant_color: str = Field(..., min_length=1, max_length=100)
    variant_size: str = Field(..., min_length=1, max_length=100)
    price: Money = Field(..., ge=0)
    currency_unit: str = "VND"
    stock: int = Field(..., ge=0)
    stock_keeping_unit: str = Field(..., min_length=1, max_length=100)
    variant_weight: float = Field(250, gt=0)
    variant_length: float = Field(25, gt=0)
    variant_width: float = Field(20, gt=0)
    variant_height: float = Field(5, gt=0)
    color_id: int
    create_by_user_id: Optional[int] = None
    voucher_id: Optional[int] = None


class ProductVariantUpdate(CamelModel):
    product_id: Optional[int] = None
    variant_name: Optional[str] = Field(None, min_length=1, max_length=100)
    variant_color: Optional[str] = Field(None, min_length=1, max_length=100)
    variant_size: Optional[str] = Field(None, min_length=1, max_length=100)
    price: Optional[Money] = Field(None, ge=0)
    currency_unit: Optional[str] = None
    stock: Optional[int] = Field(None, ge=0)
    stock_keeping_unit: Optional[str] = Field(None, min_length=1, max_length=100)
    variant_weight: Optional[float] = Field(None, gt=0)
    variant_length: Optional[float] = Field(None, gt=0)
    variant_width: Optional[float] = Field(None, gt=0)
    variant_height: Optional[float] = Field(None, gt=0)
    color_id: Optional[int] = None
    create_by_user_id: Optional[int] = None
    voucher_id: Optional[int] = None


class ProductVariantRead(RecordRead):
    product_id: int
    variant_name: str
    variant_color: str
    variant_size: str
    price: Money
    currency_unit: str
    stock: int
    stock_keeping_unit: str
    variant_weight: float
    variant_length: float
    variant_width: float
    variant_height: float
    color_id: int
    create_by_user_id: Optional[int] = None
    voucher_id: Optional[int] = None
    media: List[MediaRead] = []


class ProductWithVariants(ProductRead):
    product_variants: List[ProductVariantRead] = []


class ReviewCreate(CamelModel):
    product_id: int
    product_variant_id: int
    user_id: int
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
    media_keys: List[str] = Field(default_factory=list, description="Already uploaded storage keys")


class ReviewUpdate(CamelModel):
    product_id: Optional[int] = None
    product_variant_id: Optional[int] = None
    user_id: Optional[int] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    comment: Optional[str] = None
    media_keys: List[str] = Field(default_factory=list)
    media_ids_to_delete: List[int] = Field(default_factory=list)


class ReviewRead(RecordRead):
    product_id: int
    product_variant_id: int
    user_id: int
    rating: int
    comment: Optional[str] = None
    media: List[MediaRead] = []
