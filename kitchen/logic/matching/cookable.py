"""Matching engine: which recipes can be cooked from what is in the fridge.

A recipe is cookable when every ingredient it requires is present in the
pantry, by ingredient id. Quantities are never compared.
"""
from __future__ import annotations
from typing import Iterable, List, Sequence

from kitchen.domain.Recipe import Recipe

__all__ = ["is_cookable", "find_cookable", "missing_ingredient_ids"]


def is_cookable(pantry_ingredient_ids: Iterable[int], recipe: Recipe) -> bool:
    """True if the recipe's requirements are a subset of the pantry ids.

    A recipe without requirements is cookable with any pantry, empty included.
    """
    pantry = pantry_ingredient_ids if isinstance(pantry_ingredient_ids, (set, frozenset)) \
        else set(pantry_ingredient_ids)
    return recipe.ingredient_ids() <= pantry


def find_cookable(pantry_ingredient_ids: Iterable[int], candidate_recipes: Sequence[Recipe]) -> List[Recipe]:
    """Filter candidates down to the public recipes the pantry fully covers.

    Args:
        pantry_ingredient_ids: ingredient ids on hand; unknown ids are ignored.
        candidate_recipes: recipes to test, in the order results should keep.

    Returns:
        The cookable public recipes, in candidate order.
    """
    pantry = frozenset(pantry_ingredient_ids)
    return [r for r in candidate_recipes if r.is_public and is_cookable(pantry, r)]


def missing_ingredient_ids(pantry_ingredient_ids: Iterable[int], recipe: Recipe) -> List[int]:
    """Ingredient ids the recipe needs but the pantry lacks, in requirement order."""
    pantry = frozenset(pantry_ingredient_ids)
    return [req.ingredient_id for req in recipe.requirements if req.ingredient_id not in pantry]
