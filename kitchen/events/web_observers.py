"""Web-facing observers for kitchen events.

Subscribes to the GLOBAL_EVENT_BUS for fridge and shopping list events and
keeps a lightweight in-memory ring buffer of recent ones that the web layer
serves at /api/events.

Design:
  * Each event stored with an auto-increment integer id (cursor) so clients
    can request only newer events (since=<last_id_seen>).
  * A Lock guards the buffer; it is per-process, which is fine for
    non-critical notifications.
  * A MAX_EVENTS cap prevents unbounded memory growth.
"""
from __future__ import annotations
from typing import List, Dict, Any
from threading import Lock
from datetime import datetime, timezone

from .Event_Bus import (
    GLOBAL_EVENT_BUS, FRIDGE_ITEM_SAVED, FRIDGE_ITEM_REMOVED,
    SHOPPING_LIST_CREATED, SHOPPING_ITEM_PURCHASED,
)

_lock = Lock()
_events: List[Dict[str, Any]] = []
_next_id = 1
MAX_EVENTS = 300  # keep a few hundred recent events
_started = False

_WATCHED = (FRIDGE_ITEM_SAVED, FRIDGE_ITEM_REMOVED, SHOPPING_LIST_CREATED, SHOPPING_ITEM_PURCHASED)


def _summarize(payload: Any) -> Dict[str, Any]:
    """Flatten the payload objects into the few fields the UI shows."""
    out: Dict[str, Any] = {}
    if not isinstance(payload, dict):
        return out
    item = payload.get('item')
    if item is not None:
        out['owner_user_id'] = getattr(item, 'owner_user_id', None)
        ingredient = getattr(item, 'ingredient', None)
        out['name'] = ingredient.name if ingredient is not None else getattr(item, 'name', '')
        out['quantity'] = getattr(item, 'quantity', '')
        if hasattr(item, 'is_purchased'):
            out['is_purchased'] = item.is_purchased
            out['shopping_list_id'] = item.shopping_list_id
    shopping_list = payload.get('shopping_list')
    if shopping_list is not None:
        out['owner_user_id'] = shopping_list.owner_user_id
        out['shopping_list_id'] = shopping_list.id
        out['name'] = shopping_list.name
        out['item_count'] = len(shopping_list.items)
    if payload.get('owner_user_id'):
        out['owner_user_id'] = payload['owner_user_id']
    if 'created' in payload:
        out['created'] = payload['created']
    return out


def _record(event_name: str, payload: Any):  # signature expected by EventBus
    global _next_id
    with _lock:
        evt = {
            'id': _next_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
        }
        evt.update(_summarize(payload))
        _events.append(evt)
        _next_id += 1
        # Trim buffer
        if len(_events) > MAX_EVENTS:
            del _events[: len(_events) - MAX_EVENTS]


def start():
    """Idempotent start: subscribe observers once."""
    global _started
    if _started:
        return
    for name in _WATCHED:
        GLOBAL_EVENT_BUS.subscribe(name, _record)
    _started = True


def get_events(since: int | None = None, owner_user_id: str | None = None) -> Dict[str, Any]:
    """Return events newer than 'since' (exclusive), optionally for one user.

    If since is None, returns the last N (up to MAX_EVENTS) events.
    Response includes next_cursor (largest id) so client can poll with since=next_cursor.
    """
    with _lock:
        data = list(_events) if since is None else [e for e in _events if e['id'] > since]
        next_cursor = _events[-1]['id'] if _events else since or 0
    if owner_user_id is not None:
        data = [e for e in data if e.get('owner_user_id') == owner_user_id]
    return {'events': data, 'next_cursor': next_cursor}


__all__ = ['start', 'get_events', 'MAX_EVENTS']
