"""Requester identity dependencies.

The service sits behind a gateway that authenticates callers and forwards
the resolved user id in a trusted header. Tokens are never parsed here.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from recipe_share.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


async def optional_requester(request: Request) -> UUID | None:
    """Return the requester's user id, or None for anonymous calls."""
    container = get_container(request)
    raw = request.headers.get(container.settings.user_id_header)
    if raw is None or not raw.strip():
        return None
    try:
        return UUID(raw.strip())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user identity",
        ) from exc


async def require_requester(
    requester: UUID | None = Depends(optional_requester),
) -> UUID:
    """Return the requester's user id or reject the call."""
    if requester is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authorized, no user identity",
        )
    return requester


def _get_admin_token(request: Request) -> str:
    return get_container(request).settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
