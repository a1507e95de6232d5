"""Request-scoped dependencies shared by the routers."""
from typing import Optional

from fastapi import Header

from kitchen.infra.database import get_db  # noqa: F401  re-exported for routers
from kitchen.utilities.config import DEFAULT_USER_ID


def current_user(x_user_id: Optional[str] = Header(default=None)) -> str:
    """Acting user from the X-User-Id header; falls back to the demo user."""
    user = (x_user_id or "").strip()
    return user or DEFAULT_USER_ID
