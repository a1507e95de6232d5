"""Catalog repository: read access to ingredients and categories, plus the startup seed."""
import logging
from typing import Dict, Iterable, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from kitchen.domain.Ingredient import Ingredient, Category
from kitchen.domain.errors import NotFound
from kitchen.infra.tables import CategoryRow, IngredientRow
from kitchen.utilities.constants import SEED_CATEGORIES, SEED_INGREDIENTS

logger = logging.getLogger(__name__)


def seed_catalog(db: Session) -> int:
    """Insert the fixed categories and ingredients that are missing.

    Runs inside the caller's transaction; returns how many rows were added.
    """
    added = 0
    known_categories = set(db.scalars(select(CategoryRow.id)))
    for cid, name in SEED_CATEGORIES:
        if cid not in known_categories:
            db.add(CategoryRow(id=cid, name=name))
            added += 1
    known_ingredients = set(db.scalars(select(IngredientRow.id)))
    for iid, name, category in SEED_INGREDIENTS:
        if iid not in known_ingredients:
            db.add(IngredientRow(id=iid, name=name, category=category))
            added += 1
    if added:
        logger.info("Seeded %d catalog rows", added)
    return added


class CatalogRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_ingredients(self) -> List[Ingredient]:
        rows = self.db.scalars(select(IngredientRow).order_by(IngredientRow.id))
        return [r.to_domain() for r in rows]

    def list_categories(self) -> List[Category]:
        rows = self.db.scalars(select(CategoryRow).order_by(CategoryRow.id))
        return [r.to_domain() for r in rows]

    def get_ingredient(self, ingredient_id: int) -> Ingredient:
        row = self.db.get(IngredientRow, ingredient_id)
        if row is None:
            raise NotFound(f"Ingredient #{ingredient_id} not found")
        return row.to_domain()

    def get_ingredients(self, ingredient_ids: Iterable[int]) -> Dict[int, Ingredient]:
        """Resolve ids to ingredients; unknown ids are simply absent from the result."""
        ids = set(ingredient_ids)
        if not ids:
            return {}
        rows = self.db.scalars(select(IngredientRow).where(IngredientRow.id.in_(ids)))
        return {r.id: r.to_domain() for r in rows}

    def get_categories_by_name(self, names: Iterable[str]) -> List[Category]:
        wanted = set(names)
        if not wanted:
            return []
        rows = self.db.scalars(select(CategoryRow).where(CategoryRow.name.in_(wanted)).order_by(CategoryRow.id))
        return [r.to_domain() for r in rows]
