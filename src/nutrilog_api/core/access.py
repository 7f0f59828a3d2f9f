"""Shared-password access gate.

Maps a submitted password to a coarse access level and checks that level on
each request. The level travels in a plain ``accessLevel`` cookie with no
expiry and no server-side session, so this is an allow-list for a single
household deployment and not a security mechanism.
"""

import logging
from enum import Enum

from nutrilog_api.core.config import Settings
from nutrilog_api.core.exceptions import AccessDeniedError

logger = logging.getLogger(__name__)

ACCESS_COOKIE = "accessLevel"


class AccessLevel(str, Enum):
    """Privilege tier derived from the shared password."""

    NONE = "none"
    BASIC = "basic"
    FULL = "full"

    @property
    def rank(self) -> int:
        return _RANKS[self]


_RANKS = {
    AccessLevel.NONE: 0,
    AccessLevel.BASIC: 1,
    AccessLevel.FULL: 2,
}


def resolve_access(password: str, settings: Settings) -> AccessLevel:
    """
    Map a submitted password to an access level.

    Unset passwords never match, so an unconfigured deployment only ever
    yields ``NONE``.

    Args:
        password: Password typed by the user
        settings: Application settings holding both passwords

    Returns:
        The matching access level, ``NONE`` when nothing matches
    """
    if settings.password_user and password == settings.password_user:
        return AccessLevel.BASIC
    if settings.password_admin and password == settings.password_admin:
        return AccessLevel.FULL
    return AccessLevel.NONE


def parse_access_level(raw: str | None) -> AccessLevel:
    """Read a stored access level, treating anything unknown as ``NONE``."""
    if not raw:
        return AccessLevel.NONE
    try:
        return AccessLevel(raw)
    except ValueError:
        logger.debug(f"Ignoring unknown access level {raw!r}")
        return AccessLevel.NONE


def check_access(current: AccessLevel, required: AccessLevel) -> None:
    """
    Raise when ``current`` does not reach ``required``.

    Raises:
        AccessDeniedError: 401 with no level at all, 403 when too low
    """
    if current == AccessLevel.NONE:
        raise AccessDeniedError("Sign in to continue", status_code=401)
    if current.rank < required.rank:
        raise AccessDeniedError(
            f"This action requires {required.value} access",
            status_code=403,
        )
