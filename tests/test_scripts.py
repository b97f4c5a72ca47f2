import logging

from create_admin import create_admin
from logging_config import APP_LOGGER, get_logger, setup_logging
from models import RoleEnum


def test_create_admin_seeds_admin_user(client) -> None:
    admin = create_admin("Root Admin", "root@example.com")
    assert admin.role == RoleEnum.ADMIN

    response = client.get(f"/users/{admin.uuid}")
    assert response.status_code == 200
    assert response.json()["data"]["role"] == "ADMIN"


def test_create_admin_is_idempotent_per_email(client) -> None:
    first = create_admin("Root Admin", "root@example.com")
    second = create_admin("Another Name", "root@example.com")
    assert second.uuid == first.uuid
    assert len(client.get("/users").json()["data"]) == 1


def test_setup_logging_writes_rotating_file(tmp_path) -> None:
    log_file = tmp_path / "app.log"
    logger = setup_logging(level="INFO", log_file=str(log_file), force=True)
    try:
        get_logger("tests").info("hello from tests")
        for handler in logger.handlers:
            handler.flush()
        content = log_file.read_text(encoding="utf-8")
        assert "| INFO | blog_api.tests | hello from tests" in content
    finally:
        setup_logging(log_file=None, force=True)


def test_setup_logging_does_not_stack_handlers() -> None:
    setup_logging(log_file=None, force=True)
    setup_logging()
    setup_logging()
    assert len(logging.getLogger(APP_LOGGER).handlers) == 1
