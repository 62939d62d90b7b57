"""
Explicit route tables.

A `RouteSpec` binds path + method + access rules to one handler. Registration
installs guard -> validation -> handler -> response envelope for each spec.
"""

import functools
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence, Tuple

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from storefront.api.deps import Page, require_access
from storefront.db.models import Role
from storefront.services.crud import CrudService

ADMIN = (Role.ADMIN,)
STAFF = (Role.ADMIN, Role.OPERATOR)
CUSTOMER = (Role.USER,)
EVERYONE = (Role.USER, Role.ADMIN, Role.OPERATOR)


@dataclass(frozen=True)
class RouteSpec:
    path: str
    method: str
    handler: Callable[..., Any]
    message: str = ""
    roles: Optional[Tuple[Role, ...]] = None
    public: bool = False
    status_code: int = 200


def envelope(handler: Callable[..., Any], message: str, status_code: int) -> Callable[..., JSONResponse]:
    @functools.wraps(handler)
    def endpoint(*args, **kwargs):
        data = handler(*args, **kwargs)
        content = {"statusCode": status_code, "message": message, "data": jsonable_encoder(data)}
        return JSONResponse(status_code=status_code, content=content)

    return endpoint


def register_routes(router: APIRouter, specs: Sequence[RouteSpec]) -> APIRouter:
    for spec in specs:
        router.add_api_route(
            spec.path,
            envelope(spec.handler, spec.message, spec.status_code),
            methods=[spec.method],
            status_code=spec.status_code,
            dependencies=[Depends(require_access(spec.roles, spec.public))],
            response_model=None,
            summary=spec.message or None,
        )
    return router


def crud_routes(
    label: str,
    service: Callable[..., CrudService],
    create_schema,
    update_schema,
    *,
    create_roles: Optional[Tuple[Role, ...]] = None,
    read_roles: Optional[Tuple[Role, ...]] = None,
    list_roles: Optional[Tuple[Role, ...]] = None,
    update_roles: Optional[Tuple[Role, ...]] = None,
    delete_roles: Optional[Tuple[Role, ...]] = None,
    public_reads: bool = False,
    update_method: str = "PATCH",
    plural: Optional[str] = None,
) -> List[RouteSpec]:
    """
    Create / list / get / update / delete routes for one resource.

    `list_roles` defaults to `read_roles`.
    """
    plural = plural or f"{label}s"

    def create(payload: create_schema, svc: CrudService = Depends(service)):
        return svc.create(payload)

    def find_all(page: Page = Depends(), svc: CrudService = Depends(service)):
        return svc.find_all(page.page, page.per_page)

    def find_one(id: int, svc: CrudService = Depends(service)):
        return svc.find_one(id)

    def update(id: int, payload: update_schema, svc: CrudService = Depends(service)):
        return svc.update(id, payload)

    def remove(id: int, svc: CrudService = Depends(service)):
        return svc.remove(id)

    return [
        RouteSpec("", "POST", create, f"Create {label}", create_roles, status_code=201),
        RouteSpec("", "GET", find_all, f"Fetch all {plural}", list_roles or read_roles, public=public_reads),
        RouteSpec("/{id}", "GET", find_one, f"Fetch {label} by id", read_roles, public=public_reads),
        RouteSpec("/{id}", update_method, update, f"Update {label}", update_roles),
        RouteSpec("/{id}", "DELETE", remove, f"Delete {label}", delete_roles),
    ]
