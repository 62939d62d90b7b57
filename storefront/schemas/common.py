"""
Shared pydantic building blocks.

JSON keys are camelCase on the wire; request bodies accept camelCase or
snake_case. Read models are built straight from ORM rows (`from_attributes`).
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from storefront.db.models import MediaType

# NUMERIC(12, 2) in the database, a JSON number on the wire.
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

MAX_PER_PAGE = 100


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class RecordRead(CamelModel):
    id: int
    created_at: datetime
    updated_at: datetime


class MediaCreate(CamelModel):
    url: str = Field(..., min_length=1, description="Storage-relative object key")
    type: MediaType = MediaType.IMAGE
    review_id: Optional[int] = None
    user_id: Optional[int] = None
    product_variant_id: Optional[int] = None
    request_id: Optional[int] = None
    is_shop_logo: bool = False
    is_shop_banner: bool = False
    is_category_file: bool = False
    is_avatar_file: bool = False


class MediaUpdate(CamelModel):
    url: Optional[str] = Field(None, min_length=1)
    type: Optional[MediaType] = None
    review_id: Optional[int] = None
    user_id: Optional[int] = None
    product_variant_id: Optional[int] = None
    request_id: Optional[int] = None
    is_shop_logo: Optional[bool] = None
    is_shop_banner: Optional[bool] = None
    is_category_file: Optional[bool] = None
    is_avatar_file: Optional[bool] = None


class MediaRead(RecordRead):
    url: str
    type: MediaType
    review_id: Optional[int] = None
    user_id: Optional[int] = None
    product_variant_id: Optional[int] = None
    request_id: Optional[int] = None
    is_shop_logo: bool = False
    is_shop_banner: bool = False
    is_category_file: bool = False
    is_avatar_file: bool = False
