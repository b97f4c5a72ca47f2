"""Pydantic schemas for request validation and response serialization.

JSON keys are camelCase (``userUuid``, ``createdAt``); snake_case names are
accepted on input as well.
"""
from datetime import datetime
from typing import List, Optional
from email_validator import validate_email, EmailNotValidError
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError
from models import RoleEnum

ROLE_VALUES = tuple(role.value for role in RoleEnum)
INVALID_ROLE_MESSAGE = f"Invalid Role, must be one of {list(ROLE_VALUES)} or null"


def field_key(name) -> str:
    """Public (camelCase) key for a field name or alias found in an error location"""
    name = str(name)
    return to_camel(name) if "_" in name else name


def require_text(value, message: str):
    # null and missing count as empty
    if value is None or value == "":
        raise PydanticCustomError("empty", message)
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class UserBase(CamelModel):
    """Body of POST /users and PUT /users/{uuid}"""
    email: str = Field(default="", validate_default=True)
    name: str = Field(default="", validate_default=True)
    role: Optional[RoleEnum] = None

    @field_validator("email", mode="before")
    @classmethod
    def check_email_present(cls, value):
        return require_text(value, "email can't be empty")

    @field_validator("email")
    @classmethod
    def check_email_format(cls, value: str) -> str:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("email", "Must be a valid email")
        return value

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value):
        return require_text(value, "name can't be empty")

    @field_validator("role", mode="before")
    @classmethod
    def check_role(cls, value):
        if value is not None and value not in ROLE_VALUES:
            raise PydanticCustomError("role", INVALID_ROLE_MESSAGE)
        return value


class PostBase(CamelModel):
    """Body of POST /posts"""
    title: str = Field(default="", validate_default=True)
    body: str = Field(default="", validate_default=True)
    user_uuid: str = Field(default="", validate_default=True)

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value):
        return require_text(value, "title can't be empty")

    @field_validator("body", mode="before")
    @classmethod
    def check_body(cls, value):
        return require_text(value, "post body can't be empty")

    @field_validator("user_uuid", mode="before")
    @classmethod
    def check_user_uuid(cls, value):
        return require_text(value, "userUuid can't be empty")


class UserOut(CamelModel):
    uuid: str
    name: str
    email: str
    role: Optional[RoleEnum] = None
    created_at: datetime


class PostSummary(CamelModel):
    title: str
    body: str


class UserSummary(CamelModel):
    """Projection used by the user listing: no email, posts reduced to title and body"""
    uuid: str
    name: str
    role: Optional[RoleEnum] = None
    posts: List[PostSummary] = []


class PostOut(CamelModel):
    uuid: str
    title: str
    body: str
    created_at: datetime
    user_uuid: str


class PostWithUser(PostOut):
    user: UserOut


def dump(schema, obj) -> dict:
    """Serialize an ORM object through ``schema`` with camelCase keys"""
    return schema.model_validate(obj).model_dump(mode="json", by_alias=True)
