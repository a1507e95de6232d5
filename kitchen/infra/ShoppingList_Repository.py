"""Shopping list repository: persists builder output and handles purchase bookkeeping."""
import logging
from typing import Iterable, List, Optional, Sequence

from sqlalchemy import select, update
from sqlalchemy.orm import Session, selectinload

from kitchen.domain.ShoppingList import ShoppingList, ShoppingListItem, ShoppingRow
from kitchen.domain.errors import NotFound, ValidationFailure
from kitchen.domain.ownership import ensure_owner
from kitchen.events.event_helpers import publish_shopping_list_created, publish_item_purchased
from kitchen.infra.Recipe_Repository import RecipeRepository
from kitchen.infra.database import transaction, utcnow
from kitchen.infra.tables import ShoppingListItemRow, ShoppingListRow
from kitchen.logic.shopping.list_builder import build_from_recipe, merge
from kitchen.utilities.constants import NAME_MAX_LENGTH

logger = logging.getLogger(__name__)


class ShoppingListRepository:
    def __init__(self, db: Session):
        self.db = db

    def _list_row(self, list_id: int) -> ShoppingListRow:
        row = self.db.get(ShoppingListRow, list_id)
        if row is None:
            raise NotFound(f"Shopping list #{list_id} not found")
        return row

    def _item_row(self, item_id: int) -> ShoppingListItemRow:
        row = self.db.get(ShoppingListItemRow, item_id)
        if row is None:
            raise NotFound(f"Shopping list item #{item_id} not found")
        return row

    # --- queries -----------------------------------------------------------
    def get(self, list_id: int) -> ShoppingList:
        return self._list_row(list_id).to_domain()

    def list_for_user(self, owner_user_id: str) -> List[ShoppingList]:
        """The user's lists, newest first."""
        rows = self.db.scalars(
            select(ShoppingListRow)
            .options(selectinload(ShoppingListRow.items))
            .where(ShoppingListRow.owner_user_id == owner_user_id)
            .order_by(ShoppingListRow.created_date.desc(), ShoppingListRow.id.desc())
        )
        return [r.to_domain() for r in rows]

    # --- creation ----------------------------------------------------------
    def persist(self, owner_user_id: str, name: str, rows: Iterable[ShoppingRow]) -> ShoppingList:
        """Store a new list with one unpurchased item per row, atomically."""
        with transaction(self.db):
            list_row = ShoppingListRow(owner_user_id=owner_user_id, name=name,
                                       created_date=utcnow(), is_completed=False)
            list_row.items = [
                ShoppingListItemRow(name=r.name, quantity=r.quantity, category=r.category, is_purchased=False)
                for r in rows
            ]
            self.db.add(list_row)
            self.db.flush()
            shopping_list = list_row.to_domain()
        logger.info("Shopping list #%s '%s' created for %s with %d items",
                    shopping_list.id, name, owner_user_id, len(shopping_list.items))
        publish_shopping_list_created(shopping_list)
        return shopping_list

    def create_for_recipe(self, owner_user_id: str, recipe_id: int, name: Optional[str] = None) -> ShoppingList:
        recipe = RecipeRepository(self.db).get_visible(recipe_id, owner_user_id)
        default_name = f"Shopping list for {recipe.title}"[:NAME_MAX_LENGTH]
        return self.persist(owner_user_id, name or default_name, build_from_recipe(recipe))

    def create_merged(self, owner_user_id: str, recipe_ids: Sequence[int], name: Optional[str] = None) -> ShoppingList:
        """One list for several recipes; duplicates by ingredient name keep the first quantity.

        Recipes are merged in the order of ``recipe_ids``; a repeated id counts once.
        """
        if not recipe_ids:
            raise ValidationFailure("Select at least one recipe to merge")
        recipes = RecipeRepository(self.db)
        ordered = [recipes.get_visible(rid, owner_user_id) for rid in dict.fromkeys(recipe_ids)]
        return self.persist(owner_user_id, name or "Merged shopping list", merge(ordered))

    # --- item bookkeeping --------------------------------------------------
    def set_purchased(self, item_id: int, value: bool, actor_id: Optional[str] = None) -> ShoppingListItem:
        """Set one item's purchased flag; setting the current value again is harmless."""
        with transaction(self.db):
            row = self._item_row(item_id)
            owner = row.shopping_list.owner_user_id
            if actor_id is not None:
                ensure_owner(actor_id, owner, "shopping lists")
            row.is_purchased = bool(value)
            self.db.flush()
            item = row.to_domain()
        publish_item_purchased(item, owner)
        return item

    def mark_all_purchased(self, list_id: int, value: bool, actor_id: Optional[str] = None) -> int:
        """Set every item of the list in one statement; returns how many items the list has.

        A list without items is a valid no-op.
        """
        with transaction(self.db):
            list_row = self._list_row(list_id)
            if actor_id is not None:
                ensure_owner(actor_id, list_row.owner_user_id, "shopping lists")
            result = self.db.execute(
                update(ShoppingListItemRow)
                .where(ShoppingListItemRow.shopping_list_id == list_id)
                .values(is_purchased=bool(value))
                .execution_options(synchronize_session="fetch")
            )
            affected = result.rowcount or 0
        logger.info("Shopping list #%s: %d items marked %s", list_id, affected,
                    "purchased" if value else "not purchased")
        return affected

    def add_custom_item(self, list_id: int, name: str, quantity: str = "", category: str = "",
                        actor_id: Optional[str] = None) -> ShoppingListItem:
        """Append an item that did not come from a recipe."""
        if not (name or "").strip():
            raise ValidationFailure("Item name cannot be empty")
        with transaction(self.db):
            list_row = self._list_row(list_id)
            if actor_id is not None:
                ensure_owner(actor_id, list_row.owner_user_id, "shopping lists")
            row = ShoppingListItemRow(name=name.strip(), quantity=quantity or "", category=category or "",
                                      is_purchased=False)
            list_row.items.append(row)
            self.db.flush()
            item = row.to_domain()
        return item

    def set_completed(self, list_id: int, value: bool, actor_id: Optional[str] = None) -> ShoppingList:
        with transaction(self.db):
            list_row = self._list_row(list_id)
            if actor_id is not None:
                ensure_owner(actor_id, list_row.owner_user_id, "shopping lists")
            list_row.is_completed = bool(value)
            self.db.flush()
            shopping_list = list_row.to_domain()
        return shopping_list

    def delete(self, list_id: int, actor_id: str) -> None:
        with transaction(self.db):
            list_row = self._list_row(list_id)
            ensure_owner(actor_id, list_row.owner_user_id, "shopping lists")
            self.db.delete(list_row)
        logger.info("Shopping list #%s deleted by %s", list_id, actor_id)
