"""Principal dependency.

The upstream gateway authenticates callers and forwards the caller's user
id in a header (``settings.principal_header``, ``X-Principal-Id`` by
default). Every organisation route resolves its access policies from it.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, status

from src.core.config import settings


async def get_principal_id(
    principal: Annotated[
        str | None, Header(alias=settings.principal_header, include_in_schema=False)
    ] = None,
) -> UUID:
    """Resolve the calling principal.

    Raises:
        HTTPException 401: Header missing or not a UUID.
    """
    if not principal:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Missing {settings.principal_header} header",
        )
    try:
        return UUID(principal)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{settings.principal_header} must be a UUID",
        ) from None


# Route parameter alias:
#     async def handler(principal_id: PrincipalId): ...
PrincipalId = Annotated[UUID, Depends(get_principal_id)]
