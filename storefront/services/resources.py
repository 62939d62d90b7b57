"""Resource descriptions for every entity served by the generic CRUD layer."""

from sqlalchemy.orm import selectinload

from storefront.db import models as m
from storefront.schemas import accounts, catalog, sales
from storefront.schemas.common import MediaRead
from storefront.services.crud import Resource

_VARIANT_MEDIA = selectinload(m.ProductVariant.media)

PRODUCT = Resource(
    name="product",
    model=m.Product,
    read_schema=catalog.ProductWithVariants,
    load_options=(selectinload(m.Product.product_variants).selectinload(m.ProductVariant.media),),
)
PRODUCT_VARIANT = Resource(
    name="product variant",
    model=m.ProductVariant,
    read_schema=catalog.ProductVariantRead,
    load_options=(_VARIANT_MEDIA,),
)
CATEGORY = Resource(name="category", model=m.Category, read_schema=catalog.CategoryRead, plural="categories")
COLOR = Resource(name="color", model=m.Color, read_schema=catalog.ColorRead)
REVIEW = Resource(
    name="review",
    model=m.Review,
    read_schema=catalog.ReviewRead,
    load_options=(selectinload(m.Review.media),),
    extra_fields=frozenset({"media_keys", "media_ids_to_delete"}),
)
MEDIA = Resource(name="media", model=m.Media, read_schema=MediaRead, plural="media")

ORDER = Resource(name="order", model=m.Order, read_schema=sales.OrderRead)
ORDER_DETAIL = Resource(
    name="order",
    model=m.Order,
    read_schema=sales.OrderDetail,
    load_options=(
        selectinload(m.Order.order_items).selectinload(m.OrderItem.product_variant).selectinload(m.ProductVariant.media),
        selectinload(m.Order.shipments).selectinload(m.Shipment.shipment_items),
        selectinload(m.Order.payments),
    ),
)
ORDER_ITEM = Resource(name="order item", model=m.OrderItem, read_schema=sales.OrderItemRead)
ORDER_ITEM_DETAIL = Resource(
    name="order item",
    model=m.OrderItem,
    read_schema=sales.OrderItemWithVariant,
    load_options=(selectinload(m.OrderItem.product_variant).selectinload(m.ProductVariant.media),),
)
PAYMENT = Resource(name="payment", model=m.Payment, read_schema=sales.PaymentRead)
SHIPMENT = Resource(
    name="shipment",
    model=m.Shipment,
    read_schema=sales.ShipmentRead,
    load_options=(selectinload(m.Shipment.shipment_items),),
)
SHIPMENT_DETAIL = Resource(
    name="shipment",
    model=m.Shipment,
    read_schema=sales.ShipmentWithOrder,
    load_options=(
        selectinload(m.Shipment.shipment_items),
        selectinload(m.Shipment.order)
        .selectinload(m.Order.order_items)
        .selectinload(m.OrderItem.product_variant)
        .selectinload(m.ProductVariant.media),
        selectinload(m.Shipment.order).selectinload(m.Order.shipments).selectinload(m.Shipment.shipment_items),
        selectinload(m.Shipment.order).selectinload(m.Order.payments),
    ),
)
CART = Resource(name="cart", model=m.Cart, read_schema=sales.CartRead)
CART_ITEM = Resource(name="cart item", model=m.CartItem, read_schema=sales.CartItemRead)
VOUCHER = Resource(name="voucher", model=m.Voucher, read_schema=sales.VoucherRead)
VOUCHER_CATEGORIES = Resource(
    name="voucher",
    model=m.Voucher,
    read_schema=sales.VoucherWithCategories,
    load_options=(selectinload(m.Voucher.categories),),
)
VOUCHER_PRODUCTS = Resource(
    name="voucher",
    model=m.Voucher,
    read_schema=sales.VoucherWithProducts,
    load_options=(selectinload(m.Voucher.products),),
)
VOUCHER_PRODUCT_VARIANTS = Resource(
    name="voucher",
    model=m.Voucher,
    read_schema=sales.VoucherWithProductVariants,
    load_options=(selectinload(m.Voucher.product_variants).selectinload(m.ProductVariant.media),),
)
USER_VOUCHER = Resource(name="user voucher", model=m.UserVoucher, read_schema=sales.UserVoucherRead)
USER_SAVED_VOUCHER = Resource(
    name="user voucher",
    model=m.UserVoucher,
    read_schema=sales.UserSavedVoucher,
    load_options=(selectinload(m.UserVoucher.voucher),),
)
REQUEST = Resource(
    name="request",
    model=m.Request,
    read_schema=sales.RequestRead,
    load_options=(selectinload(m.Request.media),),
)
RETURN_REQUEST = Resource(name="return request", model=m.ReturnRequest, read_schema=sales.ReturnRequestRead)

USER = Resource(
    name="user",
    model=m.User,
    read_schema=accounts.UserRead,
    load_options=(selectinload(m.User.user_media),),
)
ADDRESS = Resource(name="address", model=m.Address, read_schema=accounts.AddressRead, plural="addresses")
SIZE_PROFILE = Resource(name="size profile", model=m.SizeProfile, read_schema=accounts.SizeProfileRead)
SHOP_OFFICE = Resource(name="shop office", model=m.ShopOffice, read_schema=accounts.ShopOfficeRead)
