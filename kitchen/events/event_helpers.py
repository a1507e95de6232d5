"""Event helper utilities.

Publishing helpers for fridge and shopping list events on the global bus.

Quick import:
    from kitchen.events.event_helpers import (
        publish_fridge_item_saved, publish_fridge_item_removed,
        publish_shopping_list_created, publish_item_purchased,
    )
"""
from __future__ import annotations
from typing import Any, Optional

from .Event_Bus import (
    GLOBAL_EVENT_BUS, EventBus,
    FRIDGE_ITEM_SAVED, FRIDGE_ITEM_REMOVED, SHOPPING_LIST_CREATED, SHOPPING_ITEM_PURCHASED,
)

__all__ = [
    'publish_fridge_item_saved', 'publish_fridge_item_removed',
    'publish_shopping_list_created', 'publish_item_purchased',
]


def _bus(bus: Optional[EventBus]) -> EventBus:
    return bus if bus is not None else GLOBAL_EVENT_BUS


def publish_fridge_item_saved(item: Any, created: bool, bus: Optional[EventBus] = None):
    """Publish a fridge.item_saved event (insert or overwrite by upsert)."""
    _bus(bus).publish(FRIDGE_ITEM_SAVED, {'item': item, 'created': created})


def publish_fridge_item_removed(item: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(FRIDGE_ITEM_REMOVED, {'item': item})


def publish_shopping_list_created(shopping_list: Any, bus: Optional[EventBus] = None):
    _bus(bus).publish(SHOPPING_LIST_CREATED, {'shopping_list': shopping_list})


def publish_item_purchased(item: Any, owner_user_id: str, bus: Optional[EventBus] = None):
    _bus(bus).publish(SHOPPING_ITEM_PURCHASED, {'item': item, 'owner_user_id': owner_user_id})
