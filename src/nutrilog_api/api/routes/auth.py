"""Access gate API routes."""

import logging

from fastapi import APIRouter, Response

from nutrilog_api.api.dependencies import AccessLevelDep, SettingsDep
from nutrilog_api.core.access import ACCESS_COOKIE, AccessLevel, resolve_access
from nutrilog_api.core.exceptions import AccessDeniedError
from nutrilog_api.models.auth import AccessResponse, LoginRequest

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=AccessResponse)
async def login(request: LoginRequest, response: Response, settings: SettingsDep):
    """
    Exchange the shared password for an access level.

    - **password**: The household or admin password

    Sets the ``accessLevel`` cookie on success.
    """
    level = resolve_access(request.password, settings)
    if level == AccessLevel.NONE:
        logger.info("Rejected login with unknown password")
        raise AccessDeniedError("Invalid password", status_code=401)

    response.set_cookie(ACCESS_COOKIE, level.value, samesite="lax")
    logger.info(f"Granted {level.value} access")
    return AccessResponse(access_level=level)


@router.post("/logout", response_model=AccessResponse)
async def logout(response: Response):
    """Clear the access cookie."""
    response.delete_cookie(ACCESS_COOKIE)
    return AccessResponse(access_level=AccessLevel.NONE)


@router.get("/me", response_model=AccessResponse)
async def me(level: AccessLevelDep):
    """Access level of the current client (``none`` when signed out)."""
    return AccessResponse(access_level=level)
