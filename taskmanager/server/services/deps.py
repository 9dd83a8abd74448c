"""
Request Dependencies.

Annotated dependencies shared by the API routers: the database session, the
repository bundle, the authenticated caller, the admin guard and the weather
client used by the site's ``/weather`` proxy.
"""

from dataclasses import dataclass
from typing import Annotated, Iterator, Optional

from fastapi import Depends, Header, Path
from sqlalchemy.ext.asyncio import AsyncSession

from taskmanager.core.database import SqlRepoBundle, build_sql_repos, get_session
from taskmanager.core.database.entities.users import User
from taskmanager.core.errors import AuthenticationError
from taskmanager.core.security import decode_access_token
from taskmanager.server.core.config import settings
from taskmanager.weather import WeatherClient

SessionDep = Annotated[AsyncSession, Depends(get_session)]


def get_repos(session: SessionDep) -> SqlRepoBundle:
    return build_sql_repos(session)


ReposDep = Annotated[SqlRepoBundle, Depends(get_repos)]

# Primary keys are 32-bit INTEGER columns
MAX_ROW_ID = 2**31 - 1

RowId = Annotated[int, Path(ge=1, le=MAX_ROW_ID)]


@dataclass
class AuthenticatedUser:
    """The caller together with the token they presented."""

    user: User
    token: str


def _bearer_token(authorization: Optional[str]) -> str:
    if not authorization:
        raise AuthenticationError("Please authenticate.")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError("Please authenticate.")
    return token.strip()


async def get_current_identity(
    repos: ReposDep,
    authorization: Optional[str] = Header(None),
) -> AuthenticatedUser:
    """Resolve the caller from an ``Authorization: Bearer <token>`` header.

    The token must verify and must still be registered to its user; a token
    removed by logout is rejected even though its signature is valid.

    Raises:
        AuthenticationError: For a missing, malformed, invalid or revoked token.
    """
    token = _bearer_token(authorization)
    claims = decode_access_token(token)
    try:
        user_id = int(claims["sub"])
    except (TypeError, ValueError) as e:
        raise AuthenticationError("Please authenticate.", details="token subject is not a user id") from e
    user = await repos.users.get_by_token(user_id, token)
    if user is None:
        raise AuthenticationError("Please authenticate.", details="token revoked or user deleted")
    return AuthenticatedUser(user=user, token=token)


IdentityDep = Annotated[AuthenticatedUser, Depends(get_current_identity)]


async def get_current_user(identity: IdentityDep) -> User:
    return identity.user


CurrentUserDep = Annotated[User, Depends(get_current_user)]


async def require_admin(user: CurrentUserDep) -> User:
    """Allow the request through only for admin users."""
    if not user.is_admin:
        raise AuthenticationError("No access.")
    return user


AdminDep = Annotated[User, Depends(require_admin)]


def get_weather_client() -> Iterator[WeatherClient]:
    client = WeatherClient.from_config(settings.weather)
    try:
        yield client
    finally:
        client.close()


WeatherClientDep = Annotated[WeatherClient, Depends(get_weather_client)]
