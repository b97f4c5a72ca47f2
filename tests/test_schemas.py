import pytest
from pydantic import ValidationError

from models import RoleEnum
from schemas import UserBase, PostBase, field_key


def messages(exc_info) -> dict:
    return {field_key(error["loc"][0]): error["msg"] for error in exc_info.value.errors()}


def test_user_accepts_every_role_and_none() -> None:
    for role in ("USER", "ADMIN", "SUPERUSER", None):
        user = UserBase(name="Jane", email="jane@example.com", role=role)
        assert user.role == (RoleEnum(role) if role else None)


def test_user_role_absent_is_not_in_fields_set() -> None:
    user = UserBase(name="Jane", email="jane@example.com")
    assert "role" not in user.model_fields_set


def test_empty_email_reported_before_format() -> None:
    with pytest.raises(ValidationError) as exc_info:
        UserBase(name="Jane", email="")
    assert messages(exc_info) == {"email": "email can't be empty"}


@pytest.mark.parametrize("email", ["plainaddress", "jane@", "@example.com", "jane@@example.com"])
def test_malformed_emails_rejected(email) -> None:
    with pytest.raises(ValidationError) as exc_info:
        UserBase(name="Jane", email=email)
    assert messages(exc_info) == {"email": "Must be a valid email"}


def test_post_requires_all_fields() -> None:
    with pytest.raises(ValidationError) as exc_info:
        PostBase()
    assert messages(exc_info) == {
        "title": "title can't be empty",
        "body": "post body can't be empty",
        "userUuid": "userUuid can't be empty",
    }


def test_null_fields_reported_as_empty() -> None:
    with pytest.raises(ValidationError) as exc_info:
        UserBase(name=None, email=None)
    assert messages(exc_info) == {"email": "email can't be empty", "name": "name can't be empty"}


def test_fields_accept_camel_case_and_snake_case() -> None:
    assert PostBase(title="t", body="b", userUuid="abc").user_uuid == "abc"
    assert PostBase(title="t", body="b", user_uuid="abc").user_uuid == "abc"
    assert field_key("user_uuid") == "userUuid"
    assert field_key("email") == "email"
