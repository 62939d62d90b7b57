"""Sales schemas: orders, payments, shipments, carts, vouchers and requests."""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from storefront.db.models import (
    DiscountType,
    OrderStatus,
    PaymentMethod,
    PaymentStatus,
    RequestStatus,
    ShipmentStatus,
    VoucherStatus,
)
from storefront.schemas.catalog import CategoryRead, ProductRead, ProductVariantRead
from storefront.schemas.common import CamelModel, MediaRead, Money, RecordRead


class OrderCreate(CamelModel):
    user_id: int
    shipping_address_id: int
    process_by_staff_id: Optional[int] = None
    order_date: Optional[datetime] = None
    status: OrderStatus = OrderStatus.PENDING
    sub_total: Money = Field(..., ge=0)
    shipping_fee: Money = Field(..., ge=0)
    discount: Money = Field(0, ge=0)
    total_amount: Money = Field(..., ge=0)
    currency_unit: str = "VND"


class OrderUpdate(CamelModel):
    user_id: Optional[int] = None
    shipping_address_id: Optional[int] = None
    process_by_staff_id: Optional[int] = None
    order_date: Optional[datetime] = None
    status: Optional[OrderStatus] = None
    sub_total: Optional[Money] = Field(None, ge=0)
    shipping_fee: Optional[Money] = Field(None, ge=0)
    discount: Optional[Money] = Field(None, ge=0)
    total_amount: Optional[Money] = Field(None, ge=0)
    currency_unit: Optional[str] = None


class OrderRead(RecordRead):
    user_id: int
    shipping_address_id: int
    process_by_staff_id: Optional[int] = None
    order_date: datetime
    status: OrderStatus
    sub_total: Money
    shipping_fee: Money
    discount: Money
    total_amount: Money
    currency_unit: str


class OrderItemCreate(CamelModel):
    order_id: int
    product_variant_id: int
    quantity: int = Field(..., gt=0)
    unit_price: Money = Field(..., ge=0)
    total_price: Money = Field(..., ge=0)
    currency_unit: str = "VND"


class OrderItemUpdate(CamelModel):
    order_id: Optional[int] = None
    product_variant_id: Optional[int] = None
    quantity: Optional[int] = Field(None, gt=0)
    unit_price: Optional[Money] = Field(None, ge=0)
    total_price: Optional[Money] = Field(None, ge=0)
    currency_unit: Optional[str] = None


class OrderItemRead(RecordRead):
    order_id: int
    product_variant_id: int
    quantity: int
    unit_price: Money
    total_price: Money
    currency_unit: str


class OrderItemWithVariant(OrderItemRead):
    product_variant: ProductVariantRead


class PaymentCreate(CamelModel):
    order_id: int
    transaction_id: str = Field(..., min_length=1, max_length=100)
    payment_method: PaymentMethod = PaymentMethod.COD
    payment_date: Optional[datetime] = None
    amount: Money = Field(..., ge=0)
    currency_unit: str = "VND"
    status: PaymentStatus = PaymentStatus.PENDING


class PaymentUpdate(CamelModel):
    order_id: Optional[int] = None
    transaction_id: Optional[str] = Field(None, min_length=1, max_length=100)
    payment_method: Optional[PaymentMethod] = None
    payment_date: Optional[datetime] = None
    amount: Optional[Money] = Field(None, ge=0)
    currency_unit: Optional[str] = None
    status: Optional[PaymentStatus] = None


class PaymentRead(RecordRead):
    order_id: int
    transaction_id: str
    payment_method: PaymentMethod
    payment_date: datetime
    amount: Money
    currency_unit: str
    status: PaymentStatus


class ShipmentCreate(CamelModel):
    order_id: int
    process_by_staff_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    carrier: str = Field(..., min_length=1, max_length=100)
    tracking_number: str = Field(..., min_length=1, max_length=100)
    ghn_order_code: Optional[str] = None
    status: ShipmentStatus = ShipmentStatus.WAITING_FOR_PICKUP
    estimated_delivery: datetime
    estimated_ship_date: datetime
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None


class ShipmentUpdate(CamelModel):
    order_id: Optional[int] = None
    process_by_staff_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    carrier: Optional[str] = Field(None, min_length=1, max_length=100)
    tracking_number: Optional[str] = Field(None, min_length=1, max_length=100)
    ghn_order_code: Optional[str] = None
    status: Optional[ShipmentStatus] = None
    estimated_delivery: Optional[datetime] = None
    estimated_ship_date: Optional[datetime] = None
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None


class ShipmentItemRead(RecordRead):
    shipment_id: int
    order_item_id: int


class ShipmentRead(RecordRead):
    order_id: int
    process_by_staff_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    carrier: str
    tracking_number: str
    ghn_order_code: Optional[str] = None
    status: ShipmentStatus
    estimated_delivery: datetime
    estimated_ship_date: datetime
    shipped_at: Optional[datetime] = None
    delivered_at: Optional[datetime] = None
    shipment_items: List[ShipmentItemRead] = []


class OrderDetail(OrderRead):
    order_items: List[OrderItemWithVariant] = []
    shipments: List[ShipmentRead] = []
    payments: List[PaymentRead] = []


class ShipmentWithOrder(ShipmentRead):
    order: OrderDetail


class CartCreate(CamelModel):
    user_id: int


class CartUpdate(CamelModel):
    user_id: Optional[int] = None


class CartRead(RecordRead):
    user_id: int


class CartItemCreate(CamelModel):
    cart_id: int
    product_variant_id: int
    quantity: int = Field(..., gt=0)


class CartItemUpdate(CamelModel):
    cart_id: Optional[int] = None
    product_variant_id: Optional[int] = None
    quantity: Optional[int] = Field(None, gt=0)


class CartItemRead(RecordRead):
    cart_id: int
    product_variant_id: int
    quantity: int


class CartItemWithVariant(CartItemRead):
    product_variant: ProductVariantRead


class AddCartItem(CamelModel):
    product_variant_id: int
    quantity: int = Field(1, gt=0)


class CartDetail(CartRead):
    cart_items: List[CartItemWithVariant] = []
    sub_total: Money = 0


class VoucherCreate(CamelModel):
    code: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    discount_type: DiscountType = DiscountType.FIXED_AMOUNT
    discount_value: Money = Field(..., ge=0)
    valid_from: datetime
    valid_to: datetime
    usage_limit: Optional[int] = Field(None, ge=0)
    times_used: int = Field(0, ge=0)
    is_active: bool = True
    created_by: int


class VoucherUpdate(CamelModel):
    code: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    discount_type: Optional[DiscountType] = None
    discount_value: Optional[Money] = Field(None, ge=0)
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    usage_limit: Optional[int] = Field(None, ge=0)
    times_used: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    created_by: Optional[int] = None


class VoucherRead(RecordRead):
    code: str
    description: Optional[str] = None
    discount_type: DiscountType
    discount_value: Money
    valid_from: datetime
    valid_to: datetime
    usage_limit: Optional[int] = None
    times_used: int
    is_active: bool
    created_by: int


class VoucherWithCategories(VoucherRead):
    categories: List[CategoryRead] = []


class VoucherWithProducts(VoucherRead):
    products: List[ProductRead] = []


class VoucherWithProductVariants(VoucherRead):
    product_variants: List[ProductVariantRead] = []


class UserVoucherCreate(CamelModel):
    user_id: int
    voucher_id: int
    voucher_status: VoucherStatus = VoucherStatus.SAVED
    use_voucher_at: Optional[datetime] = None


class UserVoucherUpdate(CamelModel):
    user_id: Optional[int] = None
    voucher_id: Optional[int] = None
    voucher_status: Optional[VoucherStatus] = None
    use_voucher_at: Optional[datetime] = None


class UserVoucherRead(RecordRead):
    user_id: int
    voucher_id: int
    voucher_status: VoucherStatus
    save_voucher_at: datetime
    use_voucher_at: Optional[datetime] = None


class UserSavedVoucher(UserVoucherRead):
    voucher: VoucherRead


class RequestCreate(CamelModel):
    user_id: int
    order_id: int
    process_by_staff_id: Optional[int] = None
    subject: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    status: RequestStatus = RequestStatus.PENDING


class RequestUpdate(CamelModel):
    user_id: Optional[int] = None
    order_id: Optional[int] = None
    process_by_staff_id: Optional[int] = None
    subject: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = Field(None, min_length=1)
    status: Optional[RequestStatus] = None


class RequestRead(RecordRead):
    user_id: int
    order_id: int
    process_by_staff_id: Optional[int] = None
    subject: str
    description: str
    status: RequestStatus
    media: List[MediaRead] = []


class ReturnRequestCreate(CamelModel):
    request_id: int


class ReturnRequestUpdate(CamelModel):
    request_id: Optional[int] = None


class ReturnRequestRead(RecordRead):
    request_id: int
