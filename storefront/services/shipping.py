"""
Shipping through the Giao Hang Nhanh (GHN) carrier API.

An order may contain products of several shop offices. Each shop ships its own
package, so an order is split into one carrier order (and one `shipments` row)
per shop office.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple

import httpx
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from storefront.db.models import (
    Address,
    Order,
    OrderItem,
    PaymentMethod,
    PaymentStatus,
    ProductVariant,
    Shipment,
    ShipmentItem,
    ShipmentStatus,
    ShopOffice,
)
from storefront.errors import BadRequestError, CarrierError, NotFoundError
from storefront.schemas.sales import ShipmentRead
from storefront.schemas.shipping import PackagePreview, Parcel
from storefront.services.accounts import utcnow

logger = logging.getLogger(__name__)

CARRIER_NAME = "GHN"
# 2: standard (light parcel) delivery
DEFAULT_SERVICE_TYPE_ID = 2
# 2: receiver pays the shipping fee
PAYMENT_TYPE_RECEIVER = 2
REQUIRED_NOTE = "KHONGCHOXEMHANG"
DEFAULT_DELIVERY_DAYS = 3


class GhnClient:
    """Thin synchronous client for the GHN public API."""

    def __init__(self, token: str, host: str, timeout: float = 10.0, transport: Optional[httpx.BaseTransport] = None):
        self._client = httpx.Client(
            base_url=host.rstrip("/"),
            timeout=timeout,
            transport=transport,
            headers={"Token": token, "Content-Type": "application/json"},
        )

    @classmethod
    def from_settings(cls, settings) -> "GhnClient":
        return cls(token=settings.ghn_token, host=settings.ghn_host, timeout=settings.ghn_timeout)

    def close(self) -> None:
        self._client.close()

    def _call(self, path: str, payload: Optional[Dict[str, Any]] = None, shop_id: Optional[int] = None) -> Any:
        headers = {"ShopId": str(shop_id)} if shop_id is not None else None
        try:
            response = self._client.post(path, json=payload or {}, headers=headers)
        except httpx.TimeoutException as exc:
            raise CarrierError(f"Carrier request timed out: {path}") from exc
        except httpx.RequestError as exc:
            raise CarrierError(f"Carrier request failed: {path}: {exc}") from exc

        try:
            body = response.json()
        except ValueError:
            raise CarrierError(f"Carrier returned a non-JSON response for {path}", response.status_code)
        if not isinstance(body, dict):
            raise CarrierError(f"Carrier returned an unexpected body for {path}", response.status_code)

        if response.status_code >= 400 or body.get("code") != 200:
            message = body.get("message") or body.get("code_message_value") or "unknown carrier error"
            raise CarrierError(f"{path}: {message}", response.status_code)
        return body.get("data")

    def _call_object(self, path: str, payload: Dict[str, Any], shop_id: Optional[int] = None) -> Dict[str, Any]:
        data = self._call(path, payload, shop_id=shop_id)
        if not isinstance(data, dict):
            raise CarrierError(f"{path}: carrier response has no data")
        return data

    def provinces(self) -> List[Dict[str, Any]]:
        return self._call("/master-data/province")

    def districts(self, province_id: int) -> List[Dict[str, Any]]:
        return self._call("/master-data/district", {"province_id": province_id})

    def wards(self, district_id: int) -> List[Dict[str, Any]]:
        return self._call("/master-data/ward", {"district_id": district_id})

    def available_services(self, shop_id: int, from_district: int, to_district: int) -> List[Dict[str, Any]]:
        payload = {"shop_id": shop_id, "from_district": from_district, "to_district": to_district}
        return self._call("/v2/shipping-order/available-services", payload)

    def fee(self, shop_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._call_object("/v2/shipping-order/fee", payload, shop_id=shop_id)

    def leadtime(self, shop_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._call_object("/v2/shipping-order/leadtime", payload, shop_id=shop_id)

    def preview_order(self, shop_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._call_object("/v2/shipping-order/preview", payload, shop_id=shop_id)

    def create_order(self, shop_id: int, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._call_object("/v2/shipping-order/create", payload, shop_id=shop_id)

    def cancel_orders(self, shop_id: Optional[int], order_codes: List[str]) -> List[Dict[str, Any]]:
        return self._call("/v2/switch-status/cancel", {"order_codes": order_codes}, shop_id=shop_id)

    def order_detail(self, order_code: str) -> Dict[str, Any]:
        return self._call_object("/v2/shipping-order/detail", {"order_code": order_code})


def group_by_shop(items: Iterable[OrderItem]) -> Dict[Optional[int], List[OrderItem]]:
    """Group order items by the shop office owning their product, keeping order."""
    groups: Dict[Optional[int], List[OrderItem]] = {}
    for item in items:
        groups.setdefault(item.product_variant.product.shop_office_id, []).append(item)
    return groups


def aggregate_parcel(items: Iterable[OrderItem]) -> Parcel:
    """Stack the items: weight and height add up per unit, length and width take the max."""
    weight = length = width = height = 0.0
    for item in items:
        variant = item.product_variant
        weight += variant.variant_weight * item.quantity
        height += variant.variant_height * item.quantity
        length = max(length, variant.variant_length)
        width = max(width, variant.variant_width)
    return Parcel(weight=math.ceil(weight), length=math.ceil(length), width=math.ceil(width), height=math.ceil(height))


def _parse_carrier_time(value: Any) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.replace(tzinfo=None) - (parsed.utcoffset() or timedelta(0))
    return parsed


@dataclass
class PackagePlan:
    shop: ShopOffice
    items: List[OrderItem]
    parcel: Parcel

    @property
    def value(self) -> Decimal:
        return sum((Decimal(item.total_price) for item in self.items), Decimal("0"))


class ShipmentPackageBuilder:
    def __init__(self, session: Session, carrier: GhnClient):
        self.session = session
        self.carrier = carrier

    def _load_order(self, order_id: int) -> Order:
        stmt = (
            select(Order)
            .where(Order.id == order_id)
            .options(
                selectinload(Order.order_items).selectinload(OrderItem.product_variant).selectinload(ProductVariant.product),
                selectinload(Order.shipping_address),
                selectinload(Order.user),
                selectinload(Order.payments),
                selectinload(Order.shipments),
            )
        )
        order = self.session.execute(stmt).scalars().first()
        if order is None:
            raise NotFoundError("Order not found!")
        if not order.order_items:
            raise BadRequestError("Order has no items to ship")
        return order

    def _plans(self, order: Order) -> List[PackagePlan]:
        destination = order.shipping_address
        if destination.ghn_district_id is None or not destination.ghn_ward_code:
            raise BadRequestError("Shipping address has no carrier district/ward code")

        plans = []
        for shop_id, items in group_by_shop(order.order_items).items():
            if shop_id is None:
                raise BadRequestError("Some products are not assigned to a shop office")
            shop = self.session.execute(
                select(ShopOffice).where(ShopOffice.id == shop_id).options(selectinload(ShopOffice.address))
            ).scalars().first()
            if shop is None or shop.ghn_shop_id is None:
                raise BadRequestError(f"Shop office {shop_id} is not linked to the carrier")
            plans.append(PackagePlan(shop=shop, items=items, parcel=aggregate_parcel(items)))
        return plans

    @staticmethod
    def _fee_payload(order: Order, plan: PackagePlan) -> Dict[str, Any]:
        destination: Address = order.shipping_address
        payload = {
            "to_district_id": destination.ghn_district_id,
            "to_ward_code": destination.ghn_ward_code,
            "service_type_id": DEFAULT_SERVICE_TYPE_ID,
            "insurance_value": int(plan.value),
            **plan.parcel.model_dump(),
        }
        origin = plan.shop.address
        if origin is not None and origin.ghn_district_id is not None:
            payload["from_district_id"] = origin.ghn_district_id
            payload["from_ward_code"] = origin.ghn_ward_code
        return payload

    @staticmethod
    def _cod_amount(order: Order, plan: PackagePlan) -> int:
        for payment in order.payments:
            if payment.payment_method == PaymentMethod.COD and payment.status != PaymentStatus.PAID:
                return int(plan.value)
        return 0

    def _create_payload(self, order: Order, plan: PackagePlan) -> Dict[str, Any]:
        destination = order.shipping_address
        user = order.user
        payload = self._fee_payload(order, plan)
        payload.update(
            {
                "payment_type_id": PAYMENT_TYPE_RECEIVER,
                "required_note": REQUIRED_NOTE,
                "client_order_code": f"{order.id}-{plan.shop.id}",
                "to_name": " ".join(filter(None, [user.first_name, user.last_name])) or user.email,
                "to_phone": user.phone or "",
                "to_address": ", ".join(
                    [destination.street, destination.ward, destination.district, destination.province, destination.country]
                ),
                "cod_amount": self._cod_amount(order, plan),
                "content": f"Order #{order.id}",
                "items": [
                    {
                        "name": item.product_variant.variant_name,
                        "code": item.product_variant.stock_keeping_unit,
                        "quantity": item.quantity,
                        "price": int(item.unit_price),
                        "weight": math.ceil(item.product_variant.variant_weight),
                        "length": math.ceil(item.product_variant.variant_length),
                        "width": math.ceil(item.product_variant.variant_width),
                        "height": math.ceil(item.product_variant.variant_height),
                    }
                    for item in plan.items
                ],
            }
        )
        return payload

    def preview(self, order_id: int) -> List[PackagePreview]:
        """Groups, parcels and fees, without creating carrier orders."""
        order = self._load_order(order_id)
        previews = []
        for plan in self._plans(order):
            try:
                fee = self.carrier.fee(plan.shop.ghn_shop_id, self._fee_payload(order, plan))
            except CarrierError as exc:
                logger.error("Fee calculation failed for order %s shop %s: %s", order_id, plan.shop.id, exc)
                raise BadRequestError("Failed to calculate shipping fee")
            previews.append(
                PackagePreview(
                    shop_office_id=plan.shop.id,
                    ghn_shop_id=plan.shop.ghn_shop_id,
                    order_item_ids=[item.id for item in plan.items],
                    parcel=plan.parcel,
                    insurance_value=plan.value,
                    fee=Decimal(str(fee.get("total", 0))),
                    service_fee=Decimal(str(fee["service_fee"])) if "service_fee" in fee else None,
                )
            )
        logger.info("Previewed %d packages for order %s", len(previews), order_id)
        return previews

    def _cancel_created(self, created: List[Tuple[int, str]]) -> None:
        for ghn_shop_id, order_code in created:
            try:
                self.carrier.cancel_orders(ghn_shop_id, [order_code])
                logger.info("Cancelled carrier order %s", order_code)
            except CarrierError as exc:
                logger.error("Could not cancel carrier order %s: %s", order_code, exc)

    def build(self, order_id: int, staff_id: Optional[int] = None) -> List[ShipmentRead]:
        """
        Create one carrier order and one shipment per shop office of the order.

        On any failure the carrier orders created so far are cancelled (best
        effort), the database transaction is rolled back and a single
        `BadRequestError` is raised.
        """
        order = self._load_order(order_id)
        if order.shipments:
            raise BadRequestError("Order already has shipment packages")
        plans = self._plans(order)

        created: List[Tuple[int, str]] = []
        shipments: List[Shipment] = []
        try:
            for plan in plans:
                fee = self.carrier.fee(plan.shop.ghn_shop_id, self._fee_payload(order, plan))
                data = self.carrier.create_order(plan.shop.ghn_shop_id, self._create_payload(order, plan))
                order_code = data.get("order_code")
                if not order_code:
                    raise CarrierError("Carrier response has no order_code")
                created.append((plan.shop.ghn_shop_id, order_code))
                logger.info(
                    "Carrier order %s created for order %s shop %s (fee %s)",
                    order_code,
                    order.id,
                    plan.shop.id,
                    fee.get("total"),
                )

                now = utcnow()
                shipment = Shipment(
                    order_id=order.id,
                    process_by_staff_id=staff_id,
                    shop_office_id=plan.shop.id,
                    carrier=CARRIER_NAME,
                    tracking_number=order_code,
                    ghn_order_code=order_code,
                    status=ShipmentStatus.WAITING_FOR_PICKUP,
                    estimated_delivery=_parse_carrier_time(data.get("expected_delivery_time"))
                    or now + timedelta(days=DEFAULT_DELIVERY_DAYS),
                    estimated_ship_date=now,
                )
                self.session.add(shipment)
                self.session.flush()
                for item in plan.items:
                    self.session.add(ShipmentItem(shipment_id=shipment.id, order_item_id=item.id))
                shipments.append(shipment)
            self.session.commit()
        except (CarrierError, SQLAlchemyError) as exc:
            self.session.rollback()
            logger.error("Building packages for order %s failed: %s", order_id, exc)
            self._cancel_created(created)
            raise BadRequestError("Failed to create shipment packages")

        result = []
        for shipment in shipments:
            self.session.refresh(shipment)
            result.append(ShipmentRead.model_validate(shipment))
        logger.info("Created %d shipment packages for order %s", len(result), order_id)
        return result
