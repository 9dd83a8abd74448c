"""
API endpoints for user accounts.

Signup and login issue access tokens; every other route acts on the caller
identified by the ``Authorization: Bearer`` header. Tokens are revocable:
logout removes the presented token, logout-all removes every token of the user.
"""

from __future__ import annotations

from fastapi import APIRouter, File, Response, UploadFile, status

from taskmanager.core.logging_config import get_logger
from taskmanager.core.models.io import AuthResponse, LoginRequest, UserCreate, UserRead, UserUpdate
from taskmanager.server.services.accounts import AccountService
from taskmanager.server.services.deps import CurrentUserDep, IdentityDep, ReposDep, RowId
from taskmanager.server.services.uploads import read_avatar

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


@router.post(
    "",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Sign Up",
    description="Create a user account and return it together with a new access token.",
    response_description="The created user and an access token.",
    responses={
        201: {"description": "User created"},
        400: {"description": "Invalid input or email already registered"},
    },
)
async def signup(payload: UserCreate, repos: ReposDep) -> AuthResponse:
    """
    Sign up a new user.

    - **name**: Display name (trimmed, required).
    - **email**: Valid email address, stored lowercased.
    - **password**: At least 6 characters, must not contain "password".
    - **age**: Non-negative integer, defaults to 0.
    """
    user, token = await AccountService(repos).signup(payload)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.post(
    "/login",
    response_model=AuthResponse,
    summary="Log In",
    description="Exchange email and password for a new access token.",
    responses={
        200: {"description": "Logged in"},
        400: {"description": "Unable to login"},
    },
)
async def login(credentials: LoginRequest, repos: ReposDep) -> AuthResponse:
    user, token = await AccountService(repos).login(credentials)
    return AuthResponse(user=UserRead.model_validate(user), token=token)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Log Out",
    description="Revoke the access token used for this request.",
    responses={401: {"description": "Please authenticate."}},
)
async def logout(identity: IdentityDep, repos: ReposDep) -> None:
    await AccountService(repos).logout(identity.user, identity.token)


@router.post(
    "/logout-all",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Log Out Everywhere",
    description="Revoke every access token of the current user.",
    responses={401: {"description": "Please authenticate."}},
)
async def logout_all(user: CurrentUserDep, repos: ReposDep) -> None:
    await AccountService(repos).logout_all(user)


@router.get(
    "/me",
    response_model=UserRead,
    summary="Get Profile",
    description="Return the profile of the authenticated user.",
    responses={401: {"description": "Please authenticate."}},
)
async def read_profile(user: CurrentUserDep) -> UserRead:
    return UserRead.model_validate(user)


@router.patch(
    "/me",
    response_model=UserRead,
    summary="Update Profile",
    description="Update name, email, password or age of the authenticated user.",
    responses={
        200: {"description": "Profile updated"},
        400: {"description": "Invalid update"},
        401: {"description": "Please authenticate."},
    },
)
async def update_profile(changes: UserUpdate, user: CurrentUserDep, repos: ReposDep) -> UserRead:
    """
    Update the caller's profile.

    Only `name`, `email`, `password` and `age` may be sent; any other key is
    rejected. A new password is hashed before it is stored.
    """
    updated = await AccountService(repos).update_profile(user, changes)
    return UserRead.model_validate(updated)


@router.delete(
    "/me",
    response_model=UserRead,
    summary="Delete Account",
    description="Delete the authenticated user together with their tasks and tokens.",
    responses={401: {"description": "Please authenticate."}},
)
async def delete_account(user: CurrentUserDep, repos: ReposDep) -> UserRead:
    profile = UserRead.model_validate(user)
    await AccountService(repos).delete_user(user)
    return profile


@router.post(
    "/me/avatar",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Upload Avatar",
    description="Store a jpg, jpeg or png image (up to the configured size) as the caller's avatar.",
    responses={
        400: {"description": "Rejected upload"},
        401: {"description": "Please authenticate."},
    },
)
async def upload_avatar(user: CurrentUserDep, repos: ReposDep, avatar: UploadFile = File(...)) -> None:
    data, content_type = await read_avatar(avatar)
    await AccountService(repos).set_avatar(user, data, content_type)


@router.delete(
    "/me/avatar",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Avatar",
    description="Remove the caller's avatar image.",
    responses={401: {"description": "Please authenticate."}},
)
async def delete_avatar(user: CurrentUserDep, repos: ReposDep) -> None:
    await AccountService(repos).clear_avatar(user)


@router.get(
    "/{user_id}/avatar",
    response_class=Response,
    summary="Get Avatar",
    description="Return a user's avatar image with its content type.",
    responses={
        200: {"description": "Image bytes", "content": {"image/png": {}, "image/jpeg": {}}},
        404: {"description": "User or avatar not found"},
    },
)
async def get_avatar(user_id: RowId, repos: ReposDep) -> Response:
    data, content_type = await AccountService(repos).get_avatar(user_id)
    return Response(content=data, media_type=content_type)
