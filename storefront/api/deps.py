"""
FastAPI dependencies: application collaborators and the access guard.

Everything is read from `request.app.state`, populated by `create_app`.
"""

import logging
from typing import Callable, Collection, Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from storefront.db.models import Role
from storefront.db.session import get_db
from storefront.errors import ForbiddenError, UnauthorizedError
from storefront.schemas.common import MAX_PER_PAGE
from storefront.security import Identity, decode_token
from storefront.services.crud import CrudService, Resource
from storefront.services.media import MediaUrlRewriter

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request):
    return request.app.state.settings


def get_media(request: Request) -> MediaUrlRewriter:
    return request.app.state.media


def get_storage(request: Request):
    return request.app.state.storage


def get_carrier(request: Request):
    return request.app.state.carrier


def get_mailer(request: Request):
    return request.app.state.mailer


def current_identity(request: Request) -> Optional[Identity]:
    return getattr(request.state, "identity", None)


class Page:
    def __init__(
        self,
        page: int = Query(1, ge=1),
        per_page: int = Query(10, alias="perPage", ge=1, le=MAX_PER_PAGE),
    ):
        self.page = page
        self.per_page = per_page


def authorize(identity: Optional[Identity], roles: Optional[Collection[Role]]) -> None:
    """Exact role match; no roles means any caller that got this far."""
    if not roles:
        return
    allowed = {role.value if isinstance(role, Role) else str(role) for role in roles}
    if identity is None or identity.role not in allowed:
        raise ForbiddenError("You do not have permission to access this resource.")


def require_access(roles: Optional[Collection[Role]] = None, public: bool = False) -> Callable:
    """
    Build the guard dependency for one route.

    Non-public routes need a valid bearer token. Public routes still decode a
    token when one is sent, so role checks and `current_identity` see the caller.
    """

    def guard(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    ) -> Optional[Identity]:
        identity = None
        if credentials is not None:
            try:
                identity = decode_token(credentials.credentials, request.app.state.settings.jwt_secret)
            except UnauthorizedError:
                if not public:
                    raise
        elif not public:
            raise UnauthorizedError("Unauthorized")

        request.state.identity = identity
        authorize(identity, roles)
        return identity

    return guard


def crud_service(resource: Resource) -> Callable[..., CrudService]:
    def provide(db: Session = Depends(get_db), media: MediaUrlRewriter = Depends(get_media)) -> CrudService:
        return CrudService(db, resource, media)

    return provide
