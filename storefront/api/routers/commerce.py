"""Routes for carts, cart items, vouchers, user vouchers, requests and return requests."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import crud_service, get_db, get_media
from storefront.api.routing import ADMIN, CUSTOMER, EVERYONE, RouteSpec, crud_routes, register_routes
from storefront.schemas import sales
from storefront.services.carts import CartService
from storefront.services.crud import CrudService
from storefront.services.resources import (
    CART_ITEM,
    REQUEST,
    RETURN_REQUEST,
    USER_VOUCHER,
    VOUCHER,
    VOUCHER_CATEGORIES,
    VOUCHER_PRODUCT_VARIANTS,
    VOUCHER_PRODUCTS,
)


def cart_service(db: Session = Depends(get_db), media=Depends(get_media)):
    return CartService(db, media)


cart_item_service = crud_service(CART_ITEM)
voucher_service = crud_service(VOUCHER)
user_voucher_service = crud_service(USER_VOUCHER)
request_service = crud_service(REQUEST)
return_request_service = crud_service(RETURN_REQUEST)


def create_cart(payload: sales.CartCreate, svc: CartService = Depends(cart_service)):
    return svc.create(payload)


def find_cart(id: int, svc: CartService = Depends(cart_service)):
    return svc.find_one(id)


def update_cart(id: int, payload: sales.CartUpdate, svc: CartService = Depends(cart_service)):
    return svc.update(id, payload)


def cart_details(id: int, svc: CartService = Depends(cart_service)):
    return svc.details(id)


def _voucher_view(resource):
    def view(id: int, db: Session = Depends(get_db), media=Depends(get_media)):
        return CrudService(db, resource, media).find_one(id)

    return view


carts = register_routes(
    APIRouter(prefix="/cart", tags=["Carts"]),
    [
        RouteSpec("", "POST", create_cart, "Create cart", CUSTOMER, status_code=201),
        RouteSpec("/{id}/cart-details", "GET", cart_details, "Fetch cart details", CUSTOMER),
        RouteSpec("/{id}", "GET", find_cart, "Fetch cart by id", CUSTOMER),
        RouteSpec("/{id}", "PUT", update_cart, "Update cart", CUSTOMER),
    ],
)

cart_items = register_routes(
    APIRouter(prefix="/cart-items", tags=["Cart items"]),
    crud_routes(
        "cart item",
        cart_item_service,
        sales.CartItemCreate,
        sales.CartItemUpdate,
        create_roles=CUSTOMER,
        read_roles=CUSTOMER,
        update_roles=CUSTOMER,
        delete_roles=CUSTOMER,
    ),
)

vouchers = register_routes(
    APIRouter(prefix="/vouchers", tags=["Vouchers"]),
    [
        RouteSpec(
            "/{id}/all-categories-applied", "GET", _voucher_view(VOUCHER_CATEGORIES), "Fetch categories of voucher"
        ),
        RouteSpec("/{id}/all-products-applied", "GET", _voucher_view(VOUCHER_PRODUCTS), "Fetch products of voucher"),
        RouteSpec(
            "/{id}/all-product-variants-applied",
            "GET",
            _voucher_view(VOUCHER_PRODUCT_VARIANTS),
            "Fetch product variants of voucher",
        ),
    ]
    + crud_routes(
        "voucher",
        voucher_service,
        sales.VoucherCreate,
        sales.VoucherUpdate,
        create_roles=ADMIN,
        update_roles=ADMIN,
        delete_roles=ADMIN,
    ),
)

user_vouchers = register_routes(
    APIRouter(prefix="/user-vouchers", tags=["User vouchers"]),
    crud_routes(
        "user voucher",
        user_voucher_service,
        sales.UserVoucherCreate,
        sales.UserVoucherUpdate,
        create_roles=CUSTOMER,
        read_roles=CUSTOMER,
        update_roles=CUSTOMER,
        delete_roles=CUSTOMER,
    ),
)

requests = register_routes(
    APIRouter(prefix="/requests", tags=["Requests"]),
    crud_routes(
        "request",
        request_service,
        sales.RequestCreate,
        sales.RequestUpdate,
        create_roles=CUSTOMER,
        read_roles=EVERYONE,
        update_roles=EVERYONE,
        delete_roles=CUSTOMER,
    ),
)

return_requests = register_routes(
    APIRouter(prefix="/return-requests", tags=["Return requests"]),
    crud_routes(
        "return request",
        return_request_service,
        sales.ReturnRequestCreate,
        sales.ReturnRequestUpdate,
        create_roles=CUSTOMER,
        read_roles=EVERYONE,
        update_roles=EVERYONE,
        delete_roles=CUSTOMER,
    ),
)

ROUTERS = [carts, cart_items, vouchers, user_vouchers, requests, return_requests]
