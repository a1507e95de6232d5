"""Recipe repository: recipes with their ordered requirements and categories."""
import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from kitchen.domain.Recipe import Recipe
from kitchen.domain.errors import NotFound, ValidationFailure
from kitchen.domain.ownership import ensure_owner, is_owner
from kitchen.infra.database import transaction, utcnow
from kitchen.infra.tables import CategoryRow, IngredientRow, RecipeIngredientRow, RecipeRow
from kitchen.logic.pantry.setup import pair_ids_with_quantities
from kitchen.logic.search.recipe_search import search_recipes
from kitchen.utilities.config import FEATURED_LIMIT
from kitchen.utilities.constants import DIFFICULTIES

logger = logging.getLogger(__name__)

# Plain columns a caller may set on create/update
RECIPE_FIELDS = (
    "title", "description", "instructions", "prep_time", "cook_time", "servings",
    "difficulty", "image_path", "video_url", "is_public", "is_featured",
)


def _check_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    unknown = set(fields) - set(RECIPE_FIELDS)
    if unknown:
        raise ValidationFailure(f"Unknown recipe fields: {', '.join(sorted(unknown))}")
    if "difficulty" in fields and fields["difficulty"] not in DIFFICULTIES:
        raise ValidationFailure(f"Difficulty must be one of {', '.join(DIFFICULTIES)}")
    if "title" in fields and not (fields["title"] or "").strip():
        raise ValidationFailure("Recipe title cannot be empty")
    return fields


class RecipeRepository:
    def __init__(self, db: Session):
        self.db = db

    def _select(self):
        return (
            select(RecipeRow)
            .options(selectinload(RecipeRow.requirements), selectinload(RecipeRow.categories))
            .order_by(RecipeRow.id)
        )

    def _row(self, recipe_id: int) -> RecipeRow:
        row = self.db.get(RecipeRow, recipe_id)
        if row is None:
            raise NotFound(f"Recipe #{recipe_id} not found")
        return row

    # --- queries -----------------------------------------------------------
    def get(self, recipe_id: int) -> Recipe:
        return self._row(recipe_id).to_domain()

    def get_visible(self, recipe_id: int, actor_id: Optional[str]) -> Recipe:
        """Like get, but private recipes of other users look missing."""
        recipe = self.get(recipe_id)
        if not recipe.is_public and not is_owner(actor_id, recipe.owner_user_id):
            raise NotFound(f"Recipe #{recipe_id} not found")
        return recipe

    def list_public(self) -> List[Recipe]:
        rows = self.db.scalars(self._select().where(RecipeRow.is_public.is_(True)))
        return [r.to_domain() for r in rows]

    def list_for_user(self, owner_user_id: str) -> List[Recipe]:
        rows = self.db.scalars(self._select().where(RecipeRow.owner_user_id == owner_user_id))
        return [r.to_domain() for r in rows]

    def featured(self, limit: int = FEATURED_LIMIT) -> List[Recipe]:
        rows = self.db.scalars(
            self._select().where(RecipeRow.is_public.is_(True), RecipeRow.is_featured.is_(True)).limit(limit)
        )
        return [r.to_domain() for r in rows]

    def search(self, term: Optional[str] = "", category: Optional[str] = None) -> List[Recipe]:
        return search_recipes(self.list_public(), term, category)

    # --- helpers for writes ------------------------------------------------
    def _requirement_rows(self, recipe_id: Optional[int], ingredient_ids: Sequence[int],
                          quantities: Sequence[str]) -> List[RecipeIngredientRow]:
        pairs = pair_ids_with_quantities(ingredient_ids, quantities)
        ids = [i for i, _ in pairs]
        known = set(self.db.scalars(select(IngredientRow.id).where(IngredientRow.id.in_(ids)))) if ids else set()
        unknown = [i for i in ids if i not in known]
        if unknown:
            raise ValidationFailure(f"Unknown ingredient ids: {', '.join(str(i) for i in unknown)}")
        return [
            RecipeIngredientRow(recipe_id=recipe_id, ingredient_id=iid, quantity=qty, position=pos)
            for pos, (iid, qty) in enumerate(pairs)
        ]

    def _category_rows(self, names: Iterable[str]) -> List[CategoryRow]:
        wanted = list(dict.fromkeys(n for n in names if n))
        if not wanted:
            return []
        rows = list(self.db.scalars(select(CategoryRow).where(CategoryRow.name.in_(wanted)).order_by(CategoryRow.id)))
        missing = set(wanted) - {r.name for r in rows}
        if missing:
            raise ValidationFailure(f"Unknown categories: {', '.join(sorted(missing))}")
        return rows

    # --- mutations ---------------------------------------------------------
    def create(self, owner_user_id: str, fields: Dict[str, Any], ingredient_ids: Sequence[int] = (),
               quantities: Sequence[str] = (), category_names: Iterable[str] = ()) -> Recipe:
        """Create a recipe with its requirements and categories in one transaction.

        Every input check runs before the first write, so a rejected recipe
        leaves nothing behind.
        """
        fields = _check_fields(dict(fields))
        if not (fields.get("title") or "").strip():
            raise ValidationFailure("Recipe title cannot be empty")
        with transaction(self.db):
            requirements = self._requirement_rows(None, ingredient_ids, quantities)
            categories = self._category_rows(category_names)
            now = utcnow()
            row = RecipeRow(owner_user_id=owner_user_id, created_at=now, updated_at=now, **fields)
            row.requirements = requirements
            row.categories = categories
            self.db.add(row)
            self.db.flush()
            recipe = row.to_domain()
        logger.info("Recipe #%s '%s' created by %s", recipe.id, recipe.title, owner_user_id)
        return recipe

    def update(self, actor_id: str, recipe_id: int, fields: Dict[str, Any],
               ingredient_ids: Optional[Sequence[int]] = None, quantities: Optional[Sequence[str]] = None,
               category_names: Optional[Iterable[str]] = None) -> Recipe:
        """Owner-only update; requirements and categories are replaced only when given."""
        fields = _check_fields(dict(fields))
        with transaction(self.db):
            row = self._row(recipe_id)
            ensure_owner(actor_id, row.owner_user_id, "recipes")
            if ingredient_ids is not None or quantities is not None:
                requirements = self._requirement_rows(recipe_id, ingredient_ids or [], quantities or [])
                row.requirements.clear()
                # flush the removals first so re-added (recipe, ingredient) keys do not collide
                self.db.flush()
                row.requirements.extend(requirements)
            if category_names is not None:
                row.categories = self._category_rows(category_names)
            for key, value in fields.items():
                setattr(row, key, value)
            row.updated_at = utcnow()
            self.db.flush()
            recipe = row.to_domain()
        logger.info("Recipe #%s updated by %s", recipe_id, actor_id)
        return recipe

    def delete(self, actor_id: str, recipe_id: int) -> None:
        """Owner-only delete. Shopping lists built from it keep their own copies."""
        with transaction(self.db):
            row = self._row(recipe_id)
            ensure_owner(actor_id, row.owner_user_id, "recipes")
            self.db.delete(row)
        logger.info("Recipe #%s deleted by %s", recipe_id, actor_id)
