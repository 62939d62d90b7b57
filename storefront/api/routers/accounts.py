"""Routes for users, addresses, size profiles and shop offices."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import Page, crud_service, get_db, get_media
from storefront.api.routing import ADMIN, CUSTOMER, EVERYONE, STAFF, RouteSpec, crud_routes, register_routes
from storefront.schemas import accounts
from storefront.schemas.sales import AddCartItem
from storefront.services.accounts import UserService
from storefront.services.carts import CartService
from storefront.services.resources import ADDRESS, SHOP_OFFICE, SIZE_PROFILE


def user_service(db: Session = Depends(get_db), media=Depends(get_media)):
    return UserService(db, media)


def cart_service(db: Session = Depends(get_db), media=Depends(get_media)):
    return CartService(db, media)


address_service = crud_service(ADDRESS)
size_profile_service = crud_service(SIZE_PROFILE)
shop_office_service = crud_service(SHOP_OFFICE)


def address_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.addresses(id, page.page, page.per_page)


def order_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.orders(id, page.page, page.per_page)


def review_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.reviews(id, page.page, page.per_page)


def request_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.requests(id, page.page, page.per_page)


def size_profile_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.size_profiles(id, page.page, page.per_page)


def saved_voucher_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.saved_vouchers(id, page.page, page.per_page)


def created_voucher_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.created_vouchers(id, page.page, page.per_page)


def created_product_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.created_products(id, page.page, page.per_page)


def created_product_variant_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.created_product_variants(id, page.page, page.per_page)


def created_category_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.created_categories(id, page.page, page.per_page)


def processed_order_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.processed_orders(id, page.page, page.per_page)


def processed_shipment_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.processed_shipments(id, page.page, page.per_page)


def processed_request_list(id: int, page: Page = Depends(), svc: UserService = Depends(user_service)):
    return svc.processed_requests(id, page.page, page.per_page)


def user_shop_office(id: int, svc: UserService = Depends(user_service)):
    return svc.shop_office(id)


def user_avatar(id: int, svc: UserService = Depends(user_service)):
    return svc.avatar(id)


def update_user_account(id: int, payload: accounts.UserAccountUpdate, svc: UserService = Depends(user_service)):
    return svc.update_account(id, payload)


def user_cart(id: int, svc: CartService = Depends(cart_service)):
    return svc.for_user(id)


def open_user_cart(id: int, svc: CartService = Depends(cart_service)):
    return svc.open_for_user(id)


def add_cart_item(id: int, payload: AddCartItem, svc: CartService = Depends(cart_service)):
    return svc.add_item(id, payload)


def user_cart_details(id: int, svc: CartService = Depends(cart_service)):
    cart = svc.for_user(id)
    return svc.details(cart.id)


users = register_routes(
    APIRouter(prefix="/user", tags=["Users"]),
    [
        RouteSpec("/{id}/address-list", "GET", address_list, "Fetch addresses of user", EVERYONE),
        RouteSpec("/{id}/order-list", "GET", order_list, "Fetch orders of user", EVERYONE),
        RouteSpec("/{id}/review-list", "GET", review_list, "Fetch reviews of user", EVERYONE),
        RouteSpec("/{id}/request-list", "GET", request_list, "Fetch requests of user", EVERYONE),
        RouteSpec("/{id}/size-profile-list", "GET", size_profile_list, "Fetch size profiles of user", EVERYONE),
        RouteSpec("/{id}/saved-voucher-list", "GET", saved_voucher_list, "Fetch saved vouchers of user", EVERYONE),
        RouteSpec("/{id}/account", "PATCH", update_user_account, "Update user account", ADMIN),
        RouteSpec("/{id}/shop-office", "GET", user_shop_office, "Fetch shop office of staff", STAFF),
        RouteSpec("/{id}/avatar", "GET", user_avatar, "Fetch avatar of user", public=True),
        RouteSpec("/{id}/created-voucher-list", "GET", created_voucher_list, "Fetch vouchers created by staff", STAFF),
        RouteSpec("/{id}/product-list", "GET", created_product_list, "Fetch products created by staff", STAFF),
        RouteSpec(
            "/{id}/product-variant-list",
            "GET",
            created_product_variant_list,
            "Fetch product variants created by staff",
            STAFF,
        ),
        RouteSpec("/{id}/category-list", "GET", created_category_list, "Fetch categories created by staff", STAFF),
        RouteSpec("/{id}/processed-order-list", "GET", processed_order_list, "Fetch orders processed by staff", STAFF),
        RouteSpec(
            "/{id}/processed-shipment-list",
            "GET",
            processed_shipment_list,
            "Fetch shipments processed by staff",
            STAFF,
        ),
        RouteSpec(
            "/{id}/processed-request-list",
            "GET",
            processed_request_list,
            "Fetch requests processed by staff",
            STAFF,
        ),
        RouteSpec("/{id}/cart", "GET", user_cart, "Fetch cart of user", EVERYONE),
        RouteSpec("/{id}/cart", "POST", open_user_cart, "Create cart for user", CUSTOMER, status_code=201),
        RouteSpec("/{id}/cart/cart-item", "POST", add_cart_item, "Add item to cart", CUSTOMER, status_code=201),
        RouteSpec("/{id}/cart/cart-details", "GET", user_cart_details, "Fetch cart details of user", CUSTOMER),
    ]
    + crud_routes(
        "user",
        user_service,
        accounts.UserCreate,
        accounts.UserUpdate,
        create_roles=ADMIN,
        read_roles=EVERYONE,
        list_roles=STAFF,
        update_roles=EVERYONE,
        delete_roles=EVERYONE,
    ),
)

addresses = register_routes(
    APIRouter(prefix="/address", tags=["Addresses"]),
    crud_routes(
        "address", address_service, accounts.AddressCreate, accounts.AddressUpdate, update_method="PUT", plural="addresses"
    ),
)

size_profiles = register_routes(
    APIRouter(prefix="/size-profiles", tags=["Size profiles"]),
    crud_routes(
        "size profile", size_profile_service, accounts.SizeProfileCreate, accounts.SizeProfileUpdate, update_method="PUT"
    ),
)

shop_offices = register_routes(
    APIRouter(prefix="/shop-offices", tags=["Shop offices"]),
    crud_routes(
        "shop office",
        shop_office_service,
        accounts.ShopOfficeCreate,
        accounts.ShopOfficeUpdate,
        create_roles=ADMIN,
        update_roles=ADMIN,
        delete_roles=ADMIN,
    ),
)

ROUTERS = [users, addresses, size_profiles, shop_offices]
