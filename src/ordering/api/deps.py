"""Request dependencies shared by the Ordering routers."""

from fastapi import Header, HTTPException

from ordering.access import Actor, Role
from ordering.utils.logging import add_context


async def current_actor(
    x_user_id: str | None = Header(default=None, alias="X-User-Id"),
    x_user_role: str | None = Header(default=None, alias="X-User-Role"),
) -> Actor:
    """Resolve the caller from the identity headers set by the gateway."""
    if not x_user_id or not x_user_role:
        raise HTTPException(status_code=401, detail="Missing identity headers")

    try:
        role = Role(x_user_role.lower())
    except ValueError:
        raise HTTPException(status_code=401, detail=f"Unknown role: {x_user_role}") from None

    add_context(actor_id=x_user_id)
    return Actor.of(x_user_id, role)
