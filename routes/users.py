from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from starlette.responses import JSONResponse

from libs.logger import get_logger
from models.user_model import InvalidList, User, UsersList
from stores.user_store import MongoUserStore, StoreError, UserStore
from validation.user_validator import validate

router = APIRouter()
logger = get_logger(__name__)


async def get_user_store() -> AsyncIterator[UserStore]:
    """
    Hand each request its own store handle, released when the request ends.

    Opening the handle does no I/O; the database is first reached by the
    store call itself, after the body has been decoded and validated.
    """
    store = MongoUserStore()
    try:
        yield store
    finally:
        logger.debug("Released user store.")


@router.post("")
async def create_user(request: Request, store: UserStore = Depends(get_user_store)):
    body = await request.body()
    try:
        user = User.model_validate_json(body)
    except ValidationError as e:
        logger.info(f"Rejected malformed user document: {e.error_count()} error(s)")
        raise HTTPException(status_code=400, detail="Malformed user document")

    errors = validate(user)
    if errors:
        logger.info(f"User failed validation on {', '.join(invalid.fld for invalid in errors)}")
        return JSONResponse(
            status_code=409,
            content=InvalidList(errors).model_dump(mode="json", by_alias=True),
        )

    try:
        user_id = await store.insert(user)
    except StoreError as e:
        logger.error(f"Error creating user: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return JSONResponse(content={"ID": user_id})


@router.get("")
async def list_users(store: UserStore = Depends(get_user_store)):
    try:
        users = await store.list_all()
    except StoreError as e:
        logger.error(f"Error listing users: {e}")
        raise HTTPException(status_code=500, detail="Internal Server Error")

    return JSONResponse(content=UsersList(users).model_dump(mode="json", by_alias=True))
