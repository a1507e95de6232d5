from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from kitchen.api.dependencies import current_user, get_db
from kitchen.infra.Pantry_Repository import PantryRepository
from kitchen.infra.Recipe_Repository import RecipeRepository
from kitchen.logic.matching.cookable import missing_ingredient_ids
from kitchen.logic.shopping.list_builder import build_from_recipe
from kitchen.utilities.config import FEATURED_LIMIT
from kitchen.utilities.validators import RecipeInput, RecipeUpdateInput

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


@router.get("")
def search_recipes(search: str = Query(default=""), category: Optional[str] = Query(default=None),
                   db: Session = Depends(get_db)):
    """Public recipes whose title, description or instructions contain ``search``."""
    return [r.to_dict() for r in RecipeRepository(db).search(search, category or None)]


@router.get("/featured")
def featured_recipes(limit: int = Query(default=FEATURED_LIMIT, ge=1, le=50), db: Session = Depends(get_db)):
    return [r.to_dict() for r in RecipeRepository(db).featured(limit)]


@router.get("/mine")
def my_recipes(user: str = Depends(current_user), db: Session = Depends(get_db)):
    return [r.to_dict() for r in RecipeRepository(db).list_for_user(user)]


@router.get("/{recipe_id}")
def get_recipe(recipe_id: int, user: str = Depends(current_user), db: Session = Depends(get_db)):
    """Recipe detail plus the ingredient ids the caller's fridge is still missing."""
    recipe = RecipeRepository(db).get_visible(recipe_id, user)
    pantry_ids = PantryRepository(db).list_for_user(user).ingredient_ids()
    missing = missing_ingredient_ids(pantry_ids, recipe)
    return recipe.to_dict() | {"missing_ingredient_ids": missing, "cookable": not missing}


@router.get("/{recipe_id}/shopping-rows")
def shopping_rows(recipe_id: int, user: str = Depends(current_user), db: Session = Depends(get_db)):
    recipe = RecipeRepository(db).get_visible(recipe_id, user)
    return [row._asdict() for row in build_from_recipe(recipe)]


@router.post("", status_code=201)
def create_recipe(payload: RecipeInput, user: str = Depends(current_user), db: Session = Depends(get_db)):
    recipe = RecipeRepository(db).create(user, payload.fields(), payload.ingredient_ids,
                                         payload.quantities, payload.categories)
    return recipe.to_dict()


@router.put("/{recipe_id}")
def update_recipe(recipe_id: int, payload: RecipeUpdateInput, user: str = Depends(current_user),
                  db: Session = Depends(get_db)):
    recipe = RecipeRepository(db).update(user, recipe_id, payload.fields(), payload.ingredient_ids,
                                         payload.quantities, payload.categories)
    return recipe.to_dict()


@router.delete("/{recipe_id}", status_code=204)
def delete_recipe(recipe_id: int, user: str = Depends(current_user), db: Session = Depends(get_db)):
    RecipeRepository(db).delete(user, recipe_id)
