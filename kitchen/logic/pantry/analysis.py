"""Pantry analysis helpers."""
from __future__ import annotations
from datetime import date as _date
from typing import List, Dict, Any, Optional

from kitchen.domain.Pantry import Pantry
from kitchen.utilities.config import DAYS_BEFORE_EXPIRY

__all__ = ["compute_expiring_soon"]


def compute_expiring_soon(pantry: Pantry, *, window: int | None = None,
                          today: Optional[_date] = None) -> List[Dict[str, Any]]:
    """Return fridge items expiring in <= window days (including already expired).

    Items without an expiry date are never reported. Sorted by days left, then name.
    """
    expiring_window = window if window is not None else DAYS_BEFORE_EXPIRY
    today = today or _date.today()
    result: List[Dict[str, Any]] = []
    for item in pantry.get_items():
        if not item.expiry_date:
            continue
        days_left = (item.expiry_date - today).days
        if days_left <= expiring_window:
            result.append({
                'id': item.id,
                'ingredient_id': item.ingredient_id,
                'name': item.ingredient.name,
                'quantity': item.quantity,
                'category': item.ingredient.category,
                'exp': item.expiry_date.isoformat(),
                'days_left': days_left,
            })
    result.sort(key=lambda x: (x['days_left'], x['name']))
    return result
