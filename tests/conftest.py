import itertools
import json
from decimal import Decimal

import httpx
import pytest
from fastapi.testclient import TestClient

from storefront.api.main import create_app
from storefront.db.models import (
    Address,
    Color,
    Media,
    Order,
    OrderItem,
    Product,
    ProductVariant,
    Role,
    ShopOffice,
    User,
)
from storefront.errors import StorageError
from storefront.security import hash_password, issue_token
from storefront.services.mail import LogMailer
from storefront.services.shipping import GhnClient
from storefront.services.storage import S3Storage
from storefront.settings import Settings

GHN_HOST = "https://ghn.test/shiip/public-api"
GHN_PREFIX = "/shiip/public-api"


class FakeStorage(S3Storage):
    """Bucket kept in memory; `fail_on` keys raise like a failing S3 call."""

    def __init__(self):
        super().__init__(bucket="media-bucket", region_name="ap-southeast-1")
        self.objects = set()
        self.deleted = []
        self.fail_on = set()

    def delete(self, key):
        if key in self.fail_on:
            raise StorageError(f"Failed to delete object {key!r}: AccessDenied")
        self.objects.discard(key)
        self.deleted.append(key)


class GhnStub:
    """Answers GHN API calls and records them as (path, shop_id, body)."""

    def __init__(self):
        self.calls = []
        self.failures = {}
        self.replies = {}
        self._codes = itertools.count(1)

    def fail(self, path, shop_id=None, message="Carrier rejected the request"):
        self.failures[(path, shop_id)] = message

    def reply(self, path, body, shop_id=None):
        self.replies[(path, shop_id)] = body

    def paths(self):
        return [path for path, _, _ in self.calls]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path[len(GHN_PREFIX):]
        shop_header = request.headers.get("ShopId")
        shop_id = int(shop_header) if shop_header else None
        body = json.loads(request.content or b"{}")
        self.calls.append((path, shop_id, body))

        reply = self.replies.get((path, shop_id), self.replies.get((path, None)))
        if reply is not None:
            return httpx.Response(200, json=reply)
        message = self.failures.get((path, shop_id)) or self.failures.get((path, None))
        if message:
            return httpx.Response(400, json={"code": 400, "message": message, "data": None})
        return httpx.Response(200, json={"code": 200, "message": "Success", "data": self._data(path, body)})

    def _data(self, path, body):
        if path == "/v2/shipping-order/fee":
            return {"total": 36300, "service_fee": 33000}
        if path == "/v2/shipping-order/create":
            return {
                "order_code": f"GHN{next(self._codes):04d}",
                "expected_delivery_time": "2026-10-21T16:59:59Z",
                "total_fee": 36300,
            }
        if path == "/v2/switch-status/cancel":
            return [{"order_code": code, "result": True} for code in body["order_codes"]]
        if path == "/master-data/province":
            return [{"ProvinceID": 202, "ProvinceName": "Ho Chi Minh"}]
        return {}


class Seeder:
    """Inserts rows through its own session and hands back detached, loaded objects."""

    def __init__(self, database, settings):
        self.database = database
        self.settings = settings
        self._seq = itertools.count(1)

    def add(self, *rows):
        with self.database.session() as session:
            session.add_all(rows)
            session.commit()
        return rows[0] if len(rows) == 1 else rows

    def count(self, model) -> int:
        with self.database.session() as session:
            return session.query(model).count()

    def get(self, model, id):
        with self.database.session() as session:
            return session.get(model, id)

    def user(self, role=Role.USER, password="secret123", is_active=True, **kwargs):
        n = next(self._seq)
        values = {
            "email": f"user{n}@example.com",
            "username": f"user{n}",
            "first_name": "Test",
            "last_name": f"User{n}",
            "phone": "0900000000",
        }
        values.update(kwargs)
        return self.add(
            User(
                password=hash_password(password),
                role=role,
                is_active=is_active,
                is_admin=role == Role.ADMIN,
                **values,
            )
        )

    def token(self, user, expires_in: int = 3600) -> str:
        return issue_token(user, self.settings.jwt_secret, expires_in)

    def headers(self, role=Role.USER, user=None):
        user = user or self.user(role=role)
        return {"Authorization": f"Bearer {self.token(user)}"}

    def color(self):
        n = next(self._seq)
        return self.add(Color(name=f"color-{n}", hex_code="#112233"))

    def shop(self, ghn_shop_id=None, district_id=1442, ward_code="20109"):
        n = next(self._seq)
        shop = self.add(ShopOffice(shop_name=f"Shop {n}", ghn_shop_id=ghn_shop_id))
        self.add(
            Address(
                shop_office_id=shop.id,
                street=f"{n} Nguyen Hue",
                ward="Ben Nghe",
                district="District 1",
                province="Ho Chi Minh",
                zip_code="700000",
                country="Vietnam",
                ghn_district_id=district_id,
                ghn_ward_code=ward_code,
            )
        )
        return shop

    def product(self, shop=None, variants=0, media_per_variant=0, storage=None, price="100000"):
        n = next(self._seq)
        color = self.color()
        product = self.add(
            Product(
                name=f"Product {n}",
                price=Decimal(price),
                stock_keeping_unit=f"SKU-{n}",
                stock=10,
                shop_office_id=shop.id if shop is not None else None,
            )
        )
        created = []
        for v in range(variants):
            variant = self.add(
                ProductVariant(
                    product_id=product.id,
                    variant_name=f"Product {n} / {v}",
                    variant_color=color.name,
                    variant_size="M",
                    price=Decimal(price),
                    stock=5,
                    stock_keeping_unit=f"SKU-{n}-{v}",
                    color_id=color.id,
                )
            )
            for i in range(media_per_variant):
                key = f"products/{product.id}/{variant.id}-{i}.jpg"
                self.add(Media(url=key, product_variant_id=variant.id))
                if storage is not None:
                    storage.objects.add(key)
            created.append(variant)
        return product, created

    def address(self, user, district_id=1454, ward_code="21211"):
        return self.add(
            Address(
                user_id=user.id,
                street="12 Le Loi",
                ward="Ward 4",
                district="District 10",
                province="Ho Chi Minh",
                zip_code="700000",
                country="Vietnam",
                ghn_district_id=district_id,
                ghn_ward_code=ward_code,
            )
        )

    def order(self, user, address, lines):
        """`lines` is a list of (variant, quantity)."""
        sub_total = sum((Decimal(variant.price) * qty for variant, qty in lines), Decimal("0"))
        order = self.add(
            Order(
                user_id=user.id,
                shipping_address_id=address.id,
                sub_total=sub_total,
                shipping_fee=Decimal("0"),
                total_amount=sub_total,
            )
        )
        items = [
            OrderItem(
                order_id=order.id,
                product_variant_id=variant.id,
                quantity=qty,
                unit_price=Decimal(variant.price),
                total_price=Decimal(variant.price) * qty,
            )
            for variant, qty in lines
        ]
        self.add(*items)
        return order, items


@pytest.fixture
def settings():
    return Settings(
        jwt_secret="test-secret",
        database_url="sqlite://",
        auto_create_schema=True,
        aws_bucket="media-bucket",
        aws_region="ap-southeast-1",
        log_level="WARNING",
    )


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def ghn():
    return GhnStub()


@pytest.fixture
def carrier(ghn):
    client = GhnClient(token="test-token", host=GHN_HOST, transport=httpx.MockTransport(ghn))
    yield client
    client.close()


@pytest.fixture
def mailer(settings):
    return LogMailer(settings.mail_from)


@pytest.fixture
def app(settings, storage, carrier, mailer):
    return create_app(settings, storage=storage, carrier=carrier, mailer=mailer)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seed(client, settings):
    return Seeder(client.app.state.db, settings)


@pytest.fixture
def admin_headers(seed):
    return seed.headers(Role.ADMIN)


@pytest.fixture
def user_headers(seed):
    return seed.headers(Role.USER)


@pytest.fixture
def operator_headers(seed):
    return seed.headers(Role.OPERATOR)
