"""Pantry (fridge) repository: per-user fridge items, stored one row per (owner, ingredient)."""
import logging
from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from kitchen.domain.Pantry import FridgeItem, Pantry
from kitchen.domain.Recipe import Recipe
from kitchen.domain.errors import NotFound, PersistenceFailure
from kitchen.domain.ownership import ensure_owner
from kitchen.events.event_helpers import publish_fridge_item_saved, publish_fridge_item_removed
from kitchen.infra.Recipe_Repository import RecipeRepository
from kitchen.infra.database import transaction, utcnow
from kitchen.infra.tables import FridgeItemRow, IngredientRow
from kitchen.logic.matching.cookable import find_cookable
from kitchen.logic.pantry.setup import validate_fridge_setup

logger = logging.getLogger(__name__)


class PantryRepository:
    def __init__(self, db: Session):
        self.db = db

    # --- queries -----------------------------------------------------------
    def list_for_user(self, owner_user_id: str) -> Pantry:
        """Snapshot of the user's fridge, ordered by item id."""
        rows = self.db.scalars(
            select(FridgeItemRow).where(FridgeItemRow.owner_user_id == owner_user_id).order_by(FridgeItemRow.id)
        )
        return Pantry(owner_user_id, [r.to_domain() for r in rows])

    def count(self, owner_user_id: str) -> int:
        return self.db.scalar(
            select(func.count(FridgeItemRow.id)).where(FridgeItemRow.owner_user_id == owner_user_id)
        ) or 0

    def has_any(self, owner_user_id: str) -> bool:
        return self.db.scalar(
            select(FridgeItemRow.id).where(FridgeItemRow.owner_user_id == owner_user_id).limit(1)
        ) is not None

    def cookable(self, owner_user_id: str, candidates: Sequence[Recipe]) -> List[Recipe]:
        """Recipes among ``candidates`` that this user's fridge fully covers."""
        return find_cookable(self.list_for_user(owner_user_id).ingredient_ids(), candidates)

    def cookable_for_user(self, owner_user_id: str) -> List[Recipe]:
        """All public recipes this user can cook right now."""
        return self.cookable(owner_user_id, RecipeRepository(self.db).list_public())

    # --- mutations ---------------------------------------------------------
    def _find(self, owner_user_id: str, ingredient_id: int) -> Optional[FridgeItemRow]:
        return self.db.scalar(
            select(FridgeItemRow).where(FridgeItemRow.owner_user_id == owner_user_id,
                                        FridgeItemRow.ingredient_id == ingredient_id)
        )

    def _upsert(self, owner_user_id: str, ingredient_id: int, quantity: str,
                expiry_date: Optional[date]) -> tuple:
        if self.db.get(IngredientRow, ingredient_id) is None:
            raise NotFound(f"Ingredient #{ingredient_id} not found")
        row = self._find(owner_user_id, ingredient_id)
        created = row is None
        if created:
            row = FridgeItemRow(owner_user_id=owner_user_id, ingredient_id=ingredient_id,
                                quantity=quantity, added_date=utcnow(), expiry_date=expiry_date)
            self.db.add(row)
        else:
            row.quantity = quantity
            row.added_date = utcnow()
            if expiry_date is not None:
                row.expiry_date = expiry_date
        self.db.flush()
        return row, created

    def _save_batch(self, owner_user_id: str, entries: Sequence[tuple]) -> List[tuple]:
        """Upsert ``(ingredient_id, quantity, expiry_date)`` entries in one transaction.

        A concurrent insert of the same (owner, ingredient) trips the unique
        constraint; the whole batch is then replayed once, and the replay
        overwrites the row the other writer created.
        """
        for attempt in (1, 2):
            try:
                with transaction(self.db):
                    return [(row.to_domain(), created) for row, created in
                            (self._upsert(owner_user_id, *entry) for entry in entries)]
            except PersistenceFailure as e:
                if attempt == 2 or not isinstance(e.__cause__, IntegrityError):
                    raise
                logger.warning("Fridge upsert for %s lost an insert race, retrying as update", owner_user_id)

    def add_or_update(self, owner_user_id: str, ingredient_id: int, quantity: str,
                      expiry_date: Optional[date] = None) -> FridgeItem:
        """Upsert one fridge item: overwrite quantity and reset added_date if it exists.

        Two concurrent calls for the same (owner, ingredient) race on the
        insert-or-update decision; the last writer wins.
        """
        [(item, created)] = self._save_batch(owner_user_id, [(ingredient_id, quantity, expiry_date)])
        logger.info("Fridge %s ingredient #%s for %s (qty=%r)",
                    "added" if created else "updated", ingredient_id, owner_user_id, quantity)
        publish_fridge_item_saved(item, created)
        return item

    def setup(self, owner_user_id: str, ingredient_ids: Sequence[int], quantities: Sequence[str]) -> Pantry:
        """Initial fridge setup: validate the whole batch, then upsert it in one transaction."""
        pairs = validate_fridge_setup(ingredient_ids, quantities)
        saved = self._save_batch(owner_user_id, [(ingredient_id, quantity, None) for ingredient_id, quantity in pairs])
        logger.info("Fridge setup for %s with %d ingredients", owner_user_id, len(pairs))
        for item, created in saved:
            publish_fridge_item_saved(item, created)
        return self.list_for_user(owner_user_id)

    def remove(self, fridge_item_id: int, actor_id: Optional[str] = None) -> bool:
        """Delete a fridge item; returns False (no error) when it does not exist."""
        with transaction(self.db):
            row = self.db.get(FridgeItemRow, fridge_item_id)
            if row is None:
                return False
            if actor_id is not None:
                ensure_owner(actor_id, row.owner_user_id, "fridge items")
            item = row.to_domain()
            self.db.delete(row)
        logger.info("Fridge item #%s removed for %s", fridge_item_id, item.owner_user_id)
        publish_fridge_item_removed(item)
        return True
