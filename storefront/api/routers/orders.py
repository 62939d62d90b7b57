"""Routes for orders, order items, payments and shipments (including the carrier API)."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from storefront.api.deps import Page, crud_service, current_identity, get_carrier, get_db, get_media
from storefront.api.routing import ADMIN, EVERYONE, STAFF, RouteSpec, crud_routes, register_routes
from storefront.errors import BadRequestError, CarrierError
from storefront.schemas import sales
from storefront.schemas.shipping import FeeRequest
from storefront.services.crud import CrudService
from storefront.services.resources import (
    ORDER,
    ORDER_DETAIL,
    ORDER_ITEM,
    ORDER_ITEM_DETAIL,
    PAYMENT,
    REQUEST,
    SHIPMENT,
    SHIPMENT_DETAIL,
)
from storefront.services.shipping import ShipmentPackageBuilder

order_service = crud_service(ORDER)
order_detail_service = crud_service(ORDER_DETAIL)
order_item_service = crud_service(ORDER_ITEM)
payment_service = crud_service(PAYMENT)
shipment_service = crud_service(SHIPMENT)
shipment_detail_service = crud_service(SHIPMENT_DETAIL)


def order_detail_list(page: Page = Depends(), svc: CrudService = Depends(order_detail_service)):
    return svc.find_all(page.page, page.per_page)


def order_detail(id: int, svc: CrudService = Depends(order_detail_service)):
    return svc.find_one(id)


def _order_children(resource, db: Session, media, id: int, page: Page):
    CrudService(db, ORDER).ensure_exists(id)
    return CrudService(db, resource, media).find_by("order_id", id, page.page, page.per_page)


def list_order_items(id: int, page: Page = Depends(), db: Session = Depends(get_db), media=Depends(get_media)):
    return _order_children(ORDER_ITEM_DETAIL, db, media, id, page)


def order_shipments(id: int, page: Page = Depends(), db: Session = Depends(get_db), media=Depends(get_media)):
    return _order_children(SHIPMENT, db, media, id, page)


def order_payments(id: int, page: Page = Depends(), db: Session = Depends(get_db), media=Depends(get_media)):
    return _order_children(PAYMENT, db, media, id, page)


def order_requests(id: int, page: Page = Depends(), db: Session = Depends(get_db), media=Depends(get_media)):
    return _order_children(REQUEST, db, media, id, page)


def shipment_detail(id: int, svc: CrudService = Depends(shipment_detail_service)):
    return svc.find_one(id)


def _carrier_call(call, *args):
    try:
        return call(*args)
    except CarrierError as exc:
        raise BadRequestError(f"Shipping carrier request failed: {exc}")


def carrier_provinces(carrier=Depends(get_carrier)):
    return _carrier_call(carrier.provinces)


def carrier_districts(province_id: int = Query(..., alias="provinceId"), carrier=Depends(get_carrier)):
    return _carrier_call(carrier.districts, province_id)


def carrier_wards(district_id: int = Query(..., alias="districtId"), carrier=Depends(get_carrier)):
    return _carrier_call(carrier.wards, district_id)


def carrier_fee(payload: FeeRequest, carrier=Depends(get_carrier)):
    body = payload.model_dump(exclude={"shop_id"}, exclude_none=True)
    return _carrier_call(carrier.fee, payload.shop_id, body)


def carrier_order_detail(order_code: str, carrier=Depends(get_carrier)):
    return _carrier_call(carrier.order_detail, order_code)


def carrier_cancel_order(
    order_code: str, shop_id: Optional[int] = Query(None, alias="shopId"), carrier=Depends(get_carrier)
):
    return _carrier_call(carrier.cancel_orders, shop_id, [order_code])


def preview_packages(order_id: int, db: Session = Depends(get_db), carrier=Depends(get_carrier)):
    return ShipmentPackageBuilder(db, carrier).preview(order_id)


def build_packages(request: Request, order_id: int, db: Session = Depends(get_db), carrier=Depends(get_carrier)):
    identity = current_identity(request)
    return ShipmentPackageBuilder(db, carrier).build(order_id, identity.user_id if identity else None)


orders = register_routes(
    APIRouter(prefix="/orders", tags=["Orders"]),
    [
        RouteSpec("/order-detail-list", "GET", order_detail_list, "Fetch all orders with details"),
        RouteSpec("/{id}/order-detail", "GET", order_detail, "Fetch order detail"),
        RouteSpec("/{id}/order-items", "GET", list_order_items, "Fetch order items of order"),
        RouteSpec("/{id}/shipments", "GET", order_shipments, "Fetch shipments of order"),
        RouteSpec("/{id}/payments", "GET", order_payments, "Fetch payments of order"),
        RouteSpec("/{id}/requests", "GET", order_requests, "Fetch requests of order"),
    ]
    + crud_routes("order", order_service, sales.OrderCreate, sales.OrderUpdate),
)

order_items = register_routes(
    APIRouter(prefix="/order-items", tags=["Order items"]),
    crud_routes("order item", order_item_service, sales.OrderItemCreate, sales.OrderItemUpdate),
)

payments = register_routes(
    APIRouter(prefix="/payments", tags=["Payments"]),
    crud_routes("payment", payment_service, sales.PaymentCreate, sales.PaymentUpdate),
)

shipment_routes = [
    RouteSpec("/carrier/provinces", "GET", carrier_provinces, "Fetch carrier provinces", STAFF),
    RouteSpec("/carrier/districts", "GET", carrier_districts, "Fetch carrier districts", STAFF),
    RouteSpec("/carrier/wards", "GET", carrier_wards, "Fetch carrier wards", STAFF),
    RouteSpec("/carrier/fee", "POST", carrier_fee, "Calculate shipping fee", STAFF),
    RouteSpec("/carrier/orders/{order_code}", "GET", carrier_order_detail, "Fetch carrier order detail", STAFF),
    RouteSpec("/carrier/orders/{order_code}/cancel", "POST", carrier_cancel_order, "Cancel carrier order", STAFF),
    RouteSpec("/orders/{order_id}/packages/preview", "POST", preview_packages, "Preview shipment packages", STAFF),
    RouteSpec(
        "/orders/{order_id}/packages", "POST", build_packages, "Create shipment packages", STAFF, status_code=201
    ),
    RouteSpec("/{id}", "GET", shipment_detail, "Fetch shipment by id", EVERYONE),
]
shipments = register_routes(
    APIRouter(prefix="/shipments", tags=["Shipments"]),
    shipment_routes
    + [
        spec
        for spec in crud_routes(
            "shipment",
            shipment_service,
            sales.ShipmentCreate,
            sales.ShipmentUpdate,
            create_roles=STAFF,
            read_roles=STAFF,
            update_roles=STAFF,
            delete_roles=ADMIN,
        )
        # The detailed GET /{id} above replaces the generic one.
        if not (spec.path == "/{id}" and spec.method == "GET")
    ],
)

ROUTERS = [orders, order_items, payments, shipments]
