"""
User accounts and authentication.

Activation and password-reset codes are UUID strings valid for a short window
(`Settings.activation_code_ttl_minutes`). Mails are queued by the route handler;
the service only returns what has to be sent.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.db.models import Media, Role, User
from storefront.errors import BadRequestError, NotFoundError, UnauthorizedError
from storefront.schemas.accounts import (
    ChangePasswordRequest,
    CheckCodeRequest,
    LoginResponse,
    LoginUser,
    ShopOfficeRead,
    SignupRequest,
    UserAccountUpdate,
    UserCreate,
    UserRead,
    UserUpdate,
)
from storefront.security import hash_password, issue_token, verify_password
from storefront.services.crud import CrudService
from storefront.services.media import MediaUrlRewriter
from storefront.services.resources import (
    ADDRESS,
    CATEGORY,
    MEDIA,
    ORDER,
    PRODUCT,
    PRODUCT_VARIANT,
    REQUEST,
    REVIEW,
    SHIPMENT,
    SHOP_OFFICE,
    SIZE_PROFILE,
    USER,
    USER_SAVED_VOUCHER,
    VOUCHER,
)

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the schema's DateTime columns."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def display_name(user: User) -> str:
    if user.first_name and user.last_name:
        return f"{user.first_name} {user.last_name}"
    return user.last_name or user.email


@dataclass(frozen=True)
class CodeMail:
    """A code that must be mailed to `to` once the request succeeds."""

    to: str
    name: str
    code: str


class UserService(CrudService):
    def __init__(self, session: Session, media: Optional[MediaUrlRewriter] = None):
        super().__init__(session, USER, media)

    def create(self, payload: UserCreate) -> UserRead:
        payload = payload.model_copy(update={"password": hash_password(payload.password)})
        return super().create(payload)

    def update(self, id: int, payload: UserUpdate) -> UserRead:
        if payload.password is not None:
            payload = payload.model_copy(update={"password": hash_password(payload.password)})
        return super().update(id, payload)

    def update_account(self, id: int, payload: UserAccountUpdate) -> UserRead:
        return super().update(id, payload)

    def _related(self, resource, column: str, id: int, page: int, per_page: int) -> List[BaseModel]:
        self.ensure_exists(id)
        return CrudService(self.session, resource, self.media).find_by(column, id, page, per_page)

    def addresses(self, id: int, page: int, per_page: int):
        return self._related(ADDRESS, "user_id", id, page, per_page)

    def orders(self, id: int, page: int, per_page: int):
        return self._related(ORDER, "user_id", id, page, per_page)

    def reviews(self, id: int, page: int, per_page: int):
        return self._related(REVIEW, "user_id", id, page, per_page)

    def requests(self, id: int, page: int, per_page: int):
        return self._related(REQUEST, "user_id", id, page, per_page)

    def size_profiles(self, id: int, page: int, per_page: int):
        return self._related(SIZE_PROFILE, "user_id", id, page, per_page)

    def saved_vouchers(self, id: int, page: int, per_page: int):
        return self._related(USER_SAVED_VOUCHER, "user_id", id, page, per_page)

    # Staff views: what a staff member created or processed.

    def created_vouchers(self, id: int, page: int, per_page: int):
        return self._related(VOUCHER, "created_by", id, page, per_page)

    def created_products(self, id: int, page: int, per_page: int):
        return self._related(PRODUCT, "create_by_user_id", id, page, per_page)

    def created_product_variants(self, id: int, page: int, per_page: int):
        return self._related(PRODUCT_VARIANT, "create_by_user_id", id, page, per_page)

    def created_categories(self, id: int, page: int, per_page: int):
        return self._related(CATEGORY, "create_by_user_id", id, page, per_page)

    def processed_orders(self, id: int, page: int, per_page: int):
        return self._related(ORDER, "process_by_staff_id", id, page, per_page)

    def processed_shipments(self, id: int, page: int, per_page: int):
        return self._related(SHIPMENT, "process_by_staff_id", id, page, per_page)

    def processed_requests(self, id: int, page: int, per_page: int):
        return self._related(REQUEST, "process_by_staff_id", id, page, per_page)

    def shop_office(self, id: int) -> ShopOfficeRead:
        user = self._load(id)
        if user.shop_office_id is None:
            raise NotFoundError("Shop office not found!")
        return CrudService(self.session, SHOP_OFFICE).find_one(user.shop_office_id)

    def avatar(self, id: int) -> BaseModel:
        self.ensure_exists(id)
        row = self.session.execute(
            select(Media).where(Media.user_id == id, Media.is_avatar_file.is_(True)).order_by(Media.id.desc())
        ).scalars().first()
        if row is None:
            raise NotFoundError("Avatar not found!")
        return CrudService(self.session, MEDIA, self.media).to_read(row)


class AuthService:
    def __init__(self, session: Session, settings):
        self.session = session
        self.settings = settings

    def _by_email(self, email: str) -> Optional[User]:
        return self.session.execute(select(User).where(User.email == email)).scalars().first()

    def _new_code(self, user: User) -> str:
        code = str(uuid.uuid4())
        user.code_active = code
        user.code_active_expire = utcnow() + timedelta(minutes=self.settings.activation_code_ttl_minutes)
        return code

    def _save(self, action: str) -> None:
        try:
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.error("Error during %s: %s", action, exc)
            raise BadRequestError(f"Failed to {action}")

    @staticmethod
    def _code_is_valid(user: User, code: str) -> bool:
        if not user.code_active or user.code_active != code:
            return False
        return user.code_active_expire is not None and utcnow() < user.code_active_expire

    def authenticate(self, email: str, password: str) -> User:
        user = self._by_email(email)
        if user is None or not verify_password(password, user.password):
            logger.info("Rejected login for %s", email)
            raise UnauthorizedError("Invalid Username or Password")
        if not user.is_active:
            raise BadRequestError("Account is not activated")
        return user

    def login(self, email: str, password: str) -> LoginResponse:
        user = self.authenticate(email, password)
        token = issue_token(user, self.settings.jwt_secret, self.settings.jwt_expires_in)
        logger.info("User logged in: %s", user.id)
        return LoginResponse(
            user=LoginUser(id=user.id, email=user.email, name=display_name(user)),
            access_token=token,
        )

    def signup(self, payload: SignupRequest) -> Tuple[UserRead, CodeMail]:
        if self._by_email(payload.email) is not None:
            raise BadRequestError(f"Email is existed: {payload.email}. Please use another email.")

        user = User(
            email=payload.email,
            username=payload.username,
            password=hash_password(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
            phone=payload.phone,
            role=Role.USER,
            is_active=False,
        )
        code = self._new_code(user)
        self.session.add(user)
        self._save("register user")
        logger.info("User registered: %s", user.id)

        self.session.refresh(user)
        return UserRead.model_validate(user), CodeMail(to=user.email, name=display_name(user), code=code)

    def check_code(self, payload: CheckCodeRequest) -> UserRead:
        user = self.session.get(User, payload.id)
        if user is None or not self._code_is_valid(user, payload.code_active):
            raise BadRequestError("Code active is expired or invalid")
        user.is_active = True
        self._save("activate account")
        logger.info("User activated: %s", user.id)
        self.session.refresh(user)
        return UserRead.model_validate(user)

    def retry_active(self, email: str) -> Tuple[dict, CodeMail]:
        user = self._by_email(email)
        if user is None:
            raise BadRequestError("This account does not exist!")
        if user.is_active:
            raise BadRequestError("This account has been activated!")
        code = self._new_code(user)
        self._save("renew activation code")
        return {"id": user.id}, CodeMail(to=user.email, name=display_name(user), code=code)

    def retry_password(self, email: str) -> Tuple[dict, CodeMail]:
        user = self._by_email(email)
        if user is None:
            raise BadRequestError("This account does not exist!")
        code = self._new_code(user)
        self._save("renew password code")
        return {"id": user.id, "email": user.email}, CodeMail(to=user.email, name=display_name(user), code=code)

    def change_password(self, payload: ChangePasswordRequest) -> int:
        if payload.password != payload.confirm_password:
            raise BadRequestError("Password / Confirm password does not match.")
        user = self._by_email(payload.email)
        if user is None:
            raise BadRequestError("Account does not exist!")
        if not self._code_is_valid(user, payload.code_active):
            raise BadRequestError("Activation code is invalid or has expired")

        user.password = hash_password(payload.password)
        # A code is single use.
        user.code_active = None
        user.code_active_expire = None
        self._save("change password")
        logger.info("Password changed for user %s", user.id)
        return user.id
