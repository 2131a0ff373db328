import re
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

EMAIL_PATTERN = r"^[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,4}$"
NAME_PATTERN = r"^[a-zA-Z\s]+$"
PHONE_PATTERN = r"^\+[1-9]\d{1,14}$"
PASSWORD_COMPLEXITY = re.compile(r"(?:(?=.*\d)|(?=.*\W+))(?![.\n])(?=.*[A-Z])(?=.*[a-z]).*$")

Gender = Literal["male", "female"]


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True


class RequestModel(CamelModel):
    """Request body; unknown fields are rejected."""

    class Config:
        extra = "forbid"


def _reject_nulls(model: BaseModel, fields: tuple[str, ...]) -> None:
    cleared = [name for name in fields if name in model.model_fields_set and getattr(model, name) is None]
    if cleared:
        raise ValueError(f"{', '.join(cleared)} cannot be null")


def _check_password(value: str | None) -> str | None:
    if value is not None and not PASSWORD_COMPLEXITY.match(value):
        raise ValueError("password must have an uppercase, lowercase letter and a number")
    return value


class UserCreate(RequestModel):
    email: str = Field(max_length=50, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6, max_length=60)
    first_name: str = Field(min_length=1, max_length=50, pattern=NAME_PATTERN)
    last_name: str | None = Field(default=None, max_length=50, pattern=NAME_PATTERN)
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str) -> str:
        return _check_password(value)


class UserUpdate(RequestModel):
    email: str | None = Field(default=None, max_length=50, pattern=EMAIL_PATTERN)
    password: str | None = Field(default=None, min_length=6, max_length=60)
    first_name: str | None = Field(default=None, min_length=1, max_length=50, pattern=NAME_PATTERN)
    last_name: str | None = Field(default=None, max_length=50, pattern=NAME_PATTERN)
    phone: str | None = Field(default=None, pattern=PHONE_PATTERN)
    active: bool | None = None

    @field_validator("password")
    @classmethod
    def validate_password(cls, value: str | None) -> str | None:
        return _check_password(value)

    @model_validator(mode="after")
    def forbid_null_required(self) -> "UserUpdate":
        _reject_nulls(self, ("email", "password", "first_name", "active"))
        return self


class SignInRequest(RequestModel):
    email: str
    password: str


class UserResponse(CamelModel):
    id: str
    email: str
    first_name: str
    last_name: str | None = None
    phone: str | None = None
    active: bool
    roles: list[str] = []

    class Config:
        from_attributes = True

    @field_validator("roles", mode="before")
    @classmethod
    def role_names(cls, value: Any) -> list[str]:
        return sorted(getattr(role, "name", role) for role in value or [])


class TokenResponse(CamelModel):
    access_token: str
    token_type: str
    expires_in: int


class AuthResponse(TokenResponse):
    user: UserResponse


class ProductCreate(RequestModel):
    title: str = Field(min_length=3, max_length=50)
    price: float = Field(default=0, ge=0)
    description: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=70)
    stock: int = Field(default=0, ge=0)
    sizes: list[str]
    gender: Gender
    tags: list[str] = []
    images: list[str] = []


class ProductUpdate(RequestModel):
    title: str | None = Field(default=None, min_length=3, max_length=50)
    price: float | None = Field(default=None, ge=0)
    description: str | None = Field(default=None, max_length=255)
    slug: str | None = Field(default=None, max_length=70)
    stock: int | None = Field(default=None, ge=0)
    sizes: list[str] | None = None
    gender: Gender | None = None
    tags: list[str] | None = None
    images: list[str] | None = None

    @model_validator(mode="after")
    def forbid_null_required(self) -> "ProductUpdate":
        # description is the only column that may be cleared; images=None means keep.
        _reject_nulls(self, ("title", "price", "slug", "stock", "sizes", "gender", "tags"))
        return self


class ProductResponse(CamelModel):
    id: str
    title: str
    price: float
    description: str | None = None
    slug: str
    stock: int
    sizes: list[str]
    gender: str
    tags: list[str]
    images: list[str] = []

    class Config:
        from_attributes = True

    @field_validator("images", mode="before")
    @classmethod
    def image_urls(cls, value: Any) -> list[str]:
        return [getattr(image, "url", image) for image in value or []]
