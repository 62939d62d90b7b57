"""Account schemas: users, addresses, size profiles, shop offices and auth payloads."""

from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field

from storefront.db.models import Gender, Role
from storefront.schemas.common import CamelModel, MediaRead, RecordRead


class UserCreate(CamelModel):
    email: EmailStr
    username: str = Field(..., min_length=1, max_length=32)
    password: str = Field(..., min_length=6)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=15)
    role: Role = Role.USER
    gender: Optional[Gender] = None
    points: int = Field(0, ge=0)
    is_active: bool = False
    is_admin: bool = False
    staff_code: Optional[str] = None
    loyalty_card: Optional[str] = None
    shop_office_id: Optional[int] = None


class UserUpdate(CamelModel):
    """Profile fields a user may change; other keys in the body are ignored."""

    email: Optional[EmailStr] = None
    username: Optional[str] = Field(None, min_length=1, max_length=32)
    password: Optional[str] = Field(None, min_length=6)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=15)


class UserAccountUpdate(CamelModel):
    """Role, status and staff fields, changed by an admin."""

    role: Optional[Role] = None
    gender: Optional[Gender] = None
    points: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None
    is_admin: Optional[bool] = None
    staff_code: Optional[str] = None
    loyalty_card: Optional[str] = None
    shop_office_id: Optional[int] = None


class UserRead(RecordRead):
    """User without credentials or activation data."""

    email: str
    username: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    role: Role
    gender: Optional[Gender] = None
    points: int
    is_active: bool
    is_admin: bool
    staff_code: Optional[str] = None
    loyalty_card: Optional[str] = None
    shop_office_id: Optional[int] = None
    user_media: List[MediaRead] = []


class AddressCreate(CamelModel):
    user_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    street: str = Field(..., min_length=1, max_length=255)
    ward: str = Field(..., min_length=1, max_length=100)
    district: str = Field(..., min_length=1, max_length=100)
    province: str = Field(..., min_length=1, max_length=100)
    zip_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    ghn_district_id: Optional[int] = None
    ghn_ward_code: Optional[str] = None


class AddressUpdate(CamelModel):
    user_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    street: Optional[str] = Field(None, min_length=1, max_length=255)
    ward: Optional[str] = Field(None, min_length=1, max_length=100)
    district: Optional[str] = Field(None, min_length=1, max_length=100)
    province: Optional[str] = Field(None, min_length=1, max_length=100)
    zip_code: Optional[str] = Field(None, min_length=1, max_length=20)
    country: Optional[str] = Field(None, min_length=1, max_length=100)
    ghn_district_id: Optional[int] = None
    ghn_ward_code: Optional[str] = None


class AddressRead(RecordRead):
    user_id: Optional[int] = None
    shop_office_id: Optional[int] = None
    street: str
    ward: str
    district: str
    province: str
    zip_code: str
    country: str
    ghn_district_id: Optional[int] = None
    ghn_ward_code: Optional[str] = None


class SizeProfileCreate(CamelModel):
    user_id: int
    height_cm: float = Field(0, ge=0)
    weight_kg: float = Field(0, ge=0)
    chest_cm: float = Field(0, ge=0)
    hip_cm: float = Field(0, ge=0)
    hips_cm: float = Field(0, ge=0)
    sleeve_length_cm: float = Field(0, ge=0)
    inseam_cm: float = Field(0, ge=0)
    shoulder_length_cm: float = Field(0, ge=0)
    body_type: Optional[str] = None
    description: Optional[str] = None


class SizeProfileUpdate(CamelModel):
    user_id: Optional[int] = None
    height_cm: Optional[float] = Field(None, ge=0)
    weight_kg: Optional[float] = Field(None, ge=0)
    chest_cm: Optional[float] = Field(None, ge=0)
    hip_cm: Optional[float] = Field(None, ge=0)
    hips_cm: Optional[float] = Field(None, ge=0)
    sleeve_length_cm: Optional[float] = Field(None, ge=0)
    inseam_cm: Optional[float] = Field(None, ge=0)
    shoulder_length_cm: Optional[float] = Field(None, ge=0)
    body_type: Optional[str] = None
    description: Optional[str] = None


class SizeProfileRead(RecordRead):
    user_id: int
    height_cm: float
    weight_kg: float
    chest_cm: float
    hip_cm: float
    hips_cm: float
    sleeve_length_cm: float
    inseam_cm: float
    shoulder_length_cm: float
    body_type: Optional[str] = None
    description: Optional[str] = None


class ShopOfficeCreate(CamelModel):
    shop_name: str = Field(..., min_length=1, max_length=255)
    ghn_shop_id: Optional[int] = None


class ShopOfficeUpdate(CamelModel):
    shop_name: Optional[str] = Field(None, min_length=1, max_length=255)
    ghn_shop_id: Optional[int] = None


class ShopOfficeRead(RecordRead):
    shop_name: str
    ghn_shop_id: Optional[int] = None


class SignupRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=32)
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=15)


class LoginRequest(CamelModel):
    username: EmailStr
    password: str = Field(..., min_length=1)


class CheckCodeRequest(CamelModel):
    id: int
    code_active: str = Field(..., min_length=1)


class EmailRequest(CamelModel):
    email: EmailStr


class ChangePasswordRequest(CamelModel):
    email: EmailStr
    code_active: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)
    confirm_password: str = Field(..., min_length=6)


class LoginUser(BaseModel):
    id: int
    email: str
    name: str


class LoginResponse(BaseModel):
    user: LoginUser
    access_token: str
