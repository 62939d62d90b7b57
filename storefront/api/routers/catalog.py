"""Routes for products, product variants, categories, colors, reviews and media."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import Page, crud_service, get_db, get_media, get_storage
from storefront.api.routing import ADMIN, RouteSpec, crud_routes, register_routes
from storefront.schemas import catalog
from storefront.schemas.common import MediaCreate, MediaUpdate
from storefront.services.crud import CrudService
from storefront.services.products import ProductService
from storefront.services.resources import CATEGORY, COLOR, MEDIA, PRODUCT_VARIANT, REVIEW
from storefront.services.reviews import ReviewService


def product_service(db: Session = Depends(get_db), media=Depends(get_media), storage=Depends(get_storage)):
    return ProductService(db, media, storage)


def review_service(db: Session = Depends(get_db), media=Depends(get_media), storage=Depends(get_storage)):
    return ReviewService(db, media, storage)


variant_service = crud_service(PRODUCT_VARIANT)
category_service = crud_service(CATEGORY)
color_service = crud_service(COLOR)
media_service = crud_service(MEDIA)


def list_product_variants(id: int, page: Page = Depends(), svc: ProductService = Depends(product_service)):
    return svc.variants(id, page.page, page.per_page)


def product_reviews(id: int, page: Page = Depends(), svc: ProductService = Depends(product_service)):
    return svc.reviews(id, page.page, page.per_page)


def variant_reviews(
    id: int, page: Page = Depends(), db: Session = Depends(get_db), media=Depends(get_media)
):
    CrudService(db, PRODUCT_VARIANT).ensure_exists(id)
    return CrudService(db, REVIEW, media).find_by("product_variant_id", id, page.page, page.per_page)


def variant_media(id: int, svc: CrudService = Depends(variant_service)):
    return svc.find_one(id).media


def sub_categories(id: int, page: Page = Depends(), svc: CrudService = Depends(category_service)):
    svc.ensure_exists(id)
    return svc.find_by("parent_id", id, page.page, page.per_page)


def review_media(id: int, svc: ReviewService = Depends(review_service)):
    return svc.find_one(id).media


products = register_routes(
    APIRouter(prefix="/products", tags=["Products"]),
    [
        RouteSpec("/{id}/product-variants", "GET", list_product_variants, "Fetch product variants of product", public=True),
        RouteSpec("/{id}/reviews", "GET", product_reviews, "Fetch reviews of product", public=True),
    ]
    + crud_routes(
        "product",
        product_service,
        catalog.ProductCreate,
        catalog.ProductUpdate,
        create_roles=ADMIN,
        update_roles=ADMIN,
        delete_roles=ADMIN,
        public_reads=True,
    ),
)

product_variants = register_routes(
    APIRouter(prefix="/product-variants", tags=["Product variants"]),
    [
        RouteSpec("/{id}/review-list", "GET", variant_reviews, "Fetch reviews of product variant"),
        RouteSpec("/{id}/media-list", "GET", variant_media, "Fetch media of product variant"),
    ]
    + crud_routes(
        "product variant",
        variant_service,
        catalog.ProductVariantCreate,
        catalog.ProductVariantUpdate,
        create_roles=ADMIN,
        update_roles=ADMIN,
        delete_roles=ADMIN,
    ),
)

categories = register_routes(
    APIRouter(prefix="/category", tags=["Categories"]),
    [RouteSpec("/{id}/sub-categories", "GET", sub_categories, "Fetch sub categories", public=True)]
    + crud_routes(
        "category",
        category_service,
        catalog.CategoryCreate,
        catalog.CategoryUpdate,
        create_roles=ADMIN,
        update_roles=ADMIN,
        delete_roles=ADMIN,
        public_reads=True,
        plural="categories",
    ),
)

colors = register_routes(
    APIRouter(prefix="/color", tags=["Colors"]),
    crud_routes(
        "color",
        color_service,
        catalog.ColorCreate,
        catalog.ColorUpdate,
        create_roles=ADMIN,
        update_roles=ADMIN,
        delete_roles=ADMIN,
        public_reads=True,
    ),
)

reviews = register_routes(
    APIRouter(prefix="/reviews", tags=["Reviews"]),
    [RouteSpec("/{id}/media-list", "GET", review_media, "Fetch media of review")]
    + crud_routes("review", review_service, catalog.ReviewCreate, catalog.ReviewUpdate),
)

media = register_routes(
    APIRouter(prefix="/media", tags=["Media"]),
    crud_routes("media", media_service, MediaCreate, MediaUpdate, plural="media"),
)

ROUTERS = [products, product_variants, categories, colors, reviews, media]
