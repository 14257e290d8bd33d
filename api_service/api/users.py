"""Users API endpoints."""

from typing import Any

from dependency_injector.wiring import Provide, inject
from flask import Blueprint, request
from pydantic import ValidationError

from api_service.container import AppContainer
from api_service.schemas.user_schema import (
    UserCreateSchema,
    UserListResponseSchema,
    UserResponseSchema,
)
from api_service.services.user_service import UserService
from shared.core.exceptions import ValidationException

users_bp = Blueprint("users", __name__, url_prefix="/users")


@users_bp.route("", methods=["GET"])
@inject
def list_users(
    user_service: UserService = Provide[AppContainer.user_service],
) -> Any:
    """List users."""
    users = user_service.get_all()
    return UserListResponseSchema(
        items=[UserResponseSchema.model_validate(user) for user in users],
        total=len(users),
    ).model_dump(mode="json", exclude_none=True)


@users_bp.route("", methods=["POST"])
@inject
def create_user(
    user_service: UserService = Provide[AppContainer.user_service],
) -> Any:
    """Create a user; name and email are both required."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = {}

    try:
        data = UserCreateSchema.model_validate(payload)
    except ValidationError as e:
        raise ValidationException("Name and email are required") from e

    user = user_service.create(name=data.name, email=data.email)
    return UserResponseSchema.model_validate(user).model_dump(mode="json"), 201
