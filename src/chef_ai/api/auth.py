"""Token auth and image path checks for the HTTP API."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from fastapi import Depends, Header, HTTPException, Request, status

from chef_ai.services.media import resolve_image_path

if TYPE_CHECKING:
    from chef_ai.containers import AppContainer


def _get_api_token(request: Request) -> str | None:
    container: AppContainer = request.app.state.container
    return container.settings.api_token


async def require_api_token(
    x_api_token: str | None = Header(default=None),
    api_token: str | None = Depends(_get_api_token),
) -> None:
    """Ensure requests include the configured API token.

    Without a configured token every protected endpoint is closed.
    """
    if not api_token or not x_api_token or x_api_token != api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


def confine_image_path(image_path: str, image_root: Path | None) -> Path:
    """Resolve a requested image, rejecting paths outside ``image_root``."""
    try:
        resolved = resolve_image_path(image_path).resolve()
    except (OSError, ValueError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid image path"
        ) from exc
    if image_root is not None and not resolved.is_relative_to(image_root.resolve()):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Image path is outside the allowed directory",
        )
    return resolved
