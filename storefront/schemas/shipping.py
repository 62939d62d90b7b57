"""Shipping schemas: parcels, package previews and carrier pass-through payloads."""

from typing import List, Optional

from pydantic import Field

from storefront.schemas.common import CamelModel, Money


class Parcel(CamelModel):
    """Parcel dimensions in grams and centimetres."""

    weight: int
    length: int
    width: int
    height: int


class PackagePreview(CamelModel):
    shop_office_id: int
    ghn_shop_id: int
    order_item_ids: List[int]
    parcel: Parcel
    insurance_value: Money
    fee: Money
    service_fee: Optional[Money] = None


class FeeRequest(CamelModel):
    shop_id: int
    to_district_id: int
    to_ward_code: str = Field(..., min_length=1)
    from_district_id: Optional[int] = None
    from_ward_code: Optional[str] = None
    service_type_id: int = 2
    weight: int = Field(..., gt=0)
    length: int = Field(..., gt=0)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    insurance_value: int = Field(0, ge=0)
