# =============================================================================
# app/routers/users.py - User CRUD Endpoints
# =============================================================================
# Mounted at /users:
#   GET    /users          list all users
#   GET    /users/{id}     fetch one user
#   POST   /users          create a user
#       Body: { "name": "John Doe", "email": "john@example.com", "age": 25 }
#   PUT    /users/{id}     replace a user's fields
#   DELETE /users/{id}     delete a user
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Response

from app.controller import ResourceController
from app.dependencies import UserStoreDep
from core.models.user import UserPayload

router = APIRouter()

UserId = Annotated[str, Path(description="User ObjectId")]


@router.get("")
async def list_users(store: UserStoreDep) -> Response:
    """List every user in the collection."""
    return await ResourceController(store).list()


@router.get("/{user_id}")
async def get_user(user_id: UserId, store: UserStoreDep) -> Response:
    """Get a single user."""
    return await ResourceController(store).get(user_id)


@router.post("", status_code=201)
async def create_user(store: UserStoreDep, payload: UserPayload | None = None) -> Response:
    """
    Create a user.

    `name` and `email` are required. Emails are unique; reusing one
    returns 400 "Email already exists".
    """
    return await ResourceController(store).create(payload or UserPayload())


@router.put("/{user_id}")
async def update_user(
    user_id: UserId,
    store: UserStoreDep,
    payload: UserPayload | None = None,
) -> Response:
    """Replace a user's fields. Optional fields left out are removed."""
    return await ResourceController(store).update(user_id, payload or UserPayload())


@router.delete("/{user_id}", status_code=204)
async def delete_user(user_id: UserId, store: UserStoreDep) -> Response:
    """Delete a user."""
    return await ResourceController(store).delete(user_id)
