"""Owner-only access policy for recipes, fridge items and shopping lists."""
from typing import Optional

from kitchen.domain.errors import Forbidden


def is_owner(actor_id: Optional[str], owner_id: str) -> bool:
    return actor_id is not None and actor_id == owner_id


def ensure_owner(actor_id: Optional[str], owner_id: str, what: str = "resource") -> None:
    '''Raise Forbidden unless actor_id owns the resource.'''
    if not is_owner(actor_id, owner_id):
        raise Forbidden(f"You can only modify your own {what}.")
