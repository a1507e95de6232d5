"""Simple Event Bus / Observer implementation for kitchen domain events.

Event names:
  fridge.item_saved -> payload {"item": FridgeItem, "created": bool}
  fridge.item_removed -> payload {"item": FridgeItem}
  shopping_list.created -> payload {"shopping_list": ShoppingList}
  shopping_list.item_purchased -> payload {"item": ShoppingListItem, "owner_user_id": str}

Events are published by repositories after their transaction committed.
Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
from collections import defaultdict
from typing import Callable, Any, Dict, List
import logging

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
FRIDGE_ITEM_SAVED = "fridge.item_saved"
FRIDGE_ITEM_REMOVED = "fridge.item_removed"
SHOPPING_LIST_CREATED = "shopping_list.created"
SHOPPING_ITEM_PURCHASED = "shopping_list.item_purchased"


class EventBus:
	def __init__(self):
		self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

	def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback not in self._subscribers[event_name]:
			self._subscribers[event_name].append(callback)

	def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
		if callback in self._subscribers.get(event_name, []):
			self._subscribers[event_name].remove(callback)

	def publish(self, event_name: str, payload: Any):
		# The write already committed; a failing observer must not turn it into an error.
		for cb in list(self._subscribers.get(event_name, [])):
			try:
				cb(event_name, payload)
			except Exception:
				logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()

__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS',
	'FRIDGE_ITEM_SAVED', 'FRIDGE_ITEM_REMOVED', 'SHOPPING_LIST_CREATED', 'SHOPPING_ITEM_PURCHASED',
]
