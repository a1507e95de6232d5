"""Shopping list builder.

Turns recipe requirements into shopping rows of (name, quantity, category),
either for one recipe or merged across several.
"""
from typing import Dict, List, Sequence

from kitchen.domain.Recipe import Recipe
from kitchen.domain.ShoppingList import ShoppingRow


def build_from_recipe(recipe: Recipe) -> List[ShoppingRow]:
    """One row per requirement, in the recipe's stored requirement order."""
    return [
        ShoppingRow(req.ingredient.name, req.quantity, req.ingredient.category)
        for req in recipe.requirements
    ]


def merge(recipes: Sequence[Recipe]) -> List[ShoppingRow]:
    """Combine the requirements of several recipes into one deduplicated list.

    Rows are keyed by ingredient name (exact string, not id). The first
    occurrence of a name wins, quantity included: later occurrences are
    dropped without summing, since quantities are free text. Output keeps
    first-occurrence order across the given recipe order.
    """
    merged: Dict[str, ShoppingRow] = {}
    for recipe in recipes:
        for row in build_from_recipe(recipe):
            if row.name in merged:
                continue
            merged[row.name] = row
    return list(merged.values())


__all__ = ['build_from_recipe', 'merge']
