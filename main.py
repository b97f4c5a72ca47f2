"""Main application module."""
from typing import Annotated
# 2. Third-party imports
import uvicorn
from fastapi import FastAPI, HTTPException, Depends, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, selectinload, joinedload
from starlette.exceptions import HTTPException as StarletteHTTPException
import config
import models
import schemas
from database import get_db
from init_db import init_db
from logging_config import get_logger

logger = get_logger("api")

EMAIL_TAKEN = {"email": "email already exists"}
USER_NOT_FOUND = {"user": "user doesn't exist"}
GENERIC_ERROR = "Something went wrong"

app = FastAPI(title="Users & Posts API")
init_db()

db_dependency = Annotated[Session, Depends(get_db)]


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Render HTTP errors with the {success, error} envelope"""
    return JSONResponse(status_code=exc.status_code,
                        content={"success": False, "error": exc.detail},
                        headers=getattr(exc, "headers", None))


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report body validation failures as 400 with one message per field"""
    errors = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = schemas.field_key(loc[-1]) if loc and isinstance(loc[-1], str) else "body"
        errors.setdefault(field, error["msg"])
    logger.warning("Validation failed on %s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST,
                        content={"success": False, "error": errors})


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Hide database failures behind an opaque 500"""
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content={"success": False, "error": GENERIC_ERROR})


def get_user_by_email(db: Session, email: str):
    """Retrieve a user from the database by their email address"""
    return db.query(models.User).filter(models.User.email == email).first()


def get_user_by_uuid(db: Session, uuid: str):
    """Retrieve a user from the database by their uuid"""
    return db.query(models.User).filter(models.User.uuid == uuid).first()


def get_user_or_404(db: Session, uuid: str):
    user = get_user_by_uuid(db, uuid)
    if not user:
        logger.info("User %s not found", uuid)
        raise HTTPException(status_code=404, detail=USER_NOT_FOUND)
    return user


def commit_user(db: Session, user: models.User):
    """Commit pending user changes, mapping a unique email clash to a 400"""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Email %s already exists", user.email)
        raise HTTPException(status_code=400, detail=EMAIL_TAKEN)
    db.refresh(user)


@app.post("/users", status_code=status.HTTP_201_CREATED)
def create_user(user: schemas.UserBase, db: db_dependency):
    """Create a new user with a unique email"""
    if get_user_by_email(db, user.email):
        logger.warning("Email %s already exists", user.email)
        raise HTTPException(status_code=400, detail=EMAIL_TAKEN)

    db_user = models.User(name=user.name, email=user.email, role=user.role)
    db.add(db_user)
    commit_user(db, db_user)
    logger.info("Created user %s", db_user.uuid)
    return {"success": True, "data": schemas.dump(schemas.UserOut, db_user)}


@app.get("/users", status_code=status.HTTP_200_OK)
def get_all_users(db: db_dependency):
    """Retrieve all users, newest first, with the titles and bodies of their posts"""
    users = (db.query(models.User)
             .options(selectinload(models.User.posts))
             .order_by(models.User.created_at.desc())
             .all())
    return {"success": True, "data": [schemas.dump(schemas.UserSummary, u) for u in users]}


@app.get("/users/{uuid}", status_code=status.HTTP_200_OK)
def read_user(uuid: str, db: db_dependency):
    """Retrieve a user by uuid"""
    user = get_user_or_404(db, uuid)
    return {"success": True, "data": schemas.dump(schemas.UserOut, user)}


@app.put("/users/{uuid}", status_code=status.HTTP_200_OK)
def update_user(uuid: str, updated_user: schemas.UserBase, db: db_dependency):
    """Replace name and email of a user; role changes only when sent"""
    db_user = get_user_or_404(db, uuid)

    if updated_user.email != db_user.email:
        owner = get_user_by_email(db, updated_user.email)
        if owner and owner.uuid != db_user.uuid:
            logger.warning("Email %s already exists", updated_user.email)
            raise HTTPException(status_code=400, detail=EMAIL_TAKEN)

    db_user.name = updated_user.name
    db_user.email = updated_user.email
    if "role" in updated_user.model_fields_set:
        db_user.role = updated_user.role

    commit_user(db, db_user)
    logger.info("Updated user %s", db_user.uuid)
    return {"success": True, "data": schemas.dump(schemas.UserOut, db_user)}


@app.delete("/users/{uuid}", status_code=status.HTTP_200_OK)
def delete_user(uuid: str, db: db_dependency):
    """Delete a user by uuid together with their posts"""
    db_user = get_user_or_404(db, uuid)
    db.delete(db_user)
    db.commit()
    logger.info("Deleted user %s", uuid)
    return {"success": True, "message": "User deleted"}


@app.post("/posts", status_code=status.HTTP_201_CREATED)
def create_post(post: schemas.PostBase, db: db_dependency):
    """Create a new post for an existing user"""
    if not get_user_by_uuid(db, post.user_uuid):
        logger.warning("Cannot create post, user %s not found", post.user_uuid)
        raise HTTPException(status_code=400, detail={"userUuid": "user doesn't exist"})

    db_post = models.Post(title=post.title, body=post.body, user_uuid=post.user_uuid)
    db.add(db_post)
    db.commit()
    db.refresh(db_post)
    logger.info("Created post %s for user %s", db_post.uuid, db_post.user_uuid)
    return {"success": True, "data": schemas.dump(schemas.PostOut, db_post)}


@app.get("/posts", status_code=status.HTTP_200_OK)
def get_all_posts(db: db_dependency):
    """Retrieve all posts, newest first, each with its author"""
    posts = (db.query(models.Post)
             .options(joinedload(models.Post.user))
             .order_by(models.Post.created_at.desc())
             .all())
    return {"success": True, "data": [schemas.dump(schemas.PostWithUser, p) for p in posts]}


if __name__ == "__main__":
    logger.info("Server running at http://%s:%s", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT)
